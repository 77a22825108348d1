"""Configuration for notionpress.

:class:`NotionpressConfig` is a plain dataclass that captures every
tuneable knob: Notion API access, retry and pacing behaviour, conversion
limits, and the WordPress post defaults used by the importer.

:data:`DEFAULT_COLOR_MAPPINGS` maps Notion color names to the hex values
written into Gutenberg ``style`` attributes.  Entries supplied through
``color_mappings`` are merged over it.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

# ---------------------------------------------------------------------------
# Color mapping defaults
# ---------------------------------------------------------------------------

DEFAULT_COLOR_MAPPINGS: dict[str, str] = {
    "default": "#E6E6E4",
    "blue": "#0B6E99",
    "blue_background": "#CCE4F9",
    "brown": "#684B3F",
    "brown_background": "#E8D5CC",
    "gray": "#8F8E8A",
    "gray_background": "#D7D7D5",
    "green": "#A7F3D0",
    "green_background": "#A7F3D0",
    "orange": "#D9730D",
    "orange_background": "#FDDFCC",
    "pink": "#B2297B",
    "pink_background": "#F8CCE6",
    "purple": "#6940A5",
    "purple_background": "#E1D3F8",
    "red": "#E14646",
    "red_background": "#FFCCD1",
    "yellow": "#DFAC03",
    "yellow_background": "#FBEECC",
}
"""Notion color name to CSS color value."""

# Highest accepted max_depth.  A tree this deep still converts within the
# interpreter's default recursion limit.
MAX_DEPTH_LIMIT = 100


# ---------------------------------------------------------------------------
# Configuration dataclass
# ---------------------------------------------------------------------------

@dataclass
class NotionpressConfig:
    """Complete configuration for a notionpress importer.

    Parameters
    ----------
    token:
        Notion integration token.  Never logged.
    notion_version:
        Value of the ``Notion-Version`` header sent with every request.
    base_url:
        API root URL.  Override for proxy or testing environments.
    retry_max_attempts:
        Maximum number of attempts per request for retryable HTTP errors.
    retry_base_delay:
        Base delay (seconds) for exponential backoff.
    retry_max_delay:
        Upper cap (seconds) on computed backoff delay.
    retry_jitter:
        Randomly scale backoff intervals to 50-100 % of their value.
    rate_limit_rps:
        Target requests per second for client-side pacing (token bucket).
    timeout_seconds:
        HTTP request timeout in seconds.
    http_proxy:
        Optional HTTP/HTTPS proxy URL.
    metrics:
        Optional :class:`~notionpress.observability.MetricsHook` backend.
    max_depth:
        Maximum block nesting depth accepted when fetching and converting
        a page.  Deeper trees fail that page's import with
        :class:`~notionpress.errors.NotionpressDepthError`.
        At most :data:`MAX_DEPTH_LIMIT`, so the guard always fires before
        Python's recursion limit.
    color_mappings:
        Overrides merged over :data:`DEFAULT_COLOR_MAPPINGS`.
    default_post_status:
        WordPress ``post_status`` given to imported posts.
    default_post_type:
        WordPress ``post_type`` given to imported posts.
    default_author:
        WordPress author ID, or ``None`` to let the sink decide.
    import_max_concurrent:
        Maximum number of pages imported in parallel by
        :class:`~notionpress.importer.AsyncImporter`.
    """

    # ── Core ────────────────────────────────────────────────────────────
    token: str = ""

    notion_version: str = "2025-09-03"

    base_url: str = "https://api.notion.com/v1"

    # ── Retry & rate ────────────────────────────────────────────────────
    retry_max_attempts: int = 5

    retry_base_delay: float = 1.0

    retry_max_delay: float = 60.0

    retry_jitter: bool = True

    rate_limit_rps: float = 3.0

    # ── HTTP ────────────────────────────────────────────────────────────
    timeout_seconds: float = 30.0

    http_proxy: str | None = None

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    # ── Conversion ──────────────────────────────────────────────────────
    max_depth: int = 32

    color_mappings: dict[str, str] = field(default_factory=dict)

    # ── Post defaults ───────────────────────────────────────────────────
    default_post_status: str = "draft"

    default_post_type: str = "post"

    default_author: int | None = None

    import_max_concurrent: int = 4

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        from urllib.parse import urlparse

        parsed = urlparse(self.base_url)
        if parsed.scheme == "http" and parsed.hostname not in (
            "localhost",
            "127.0.0.1",
            "::1",
        ):
            raise ValueError(
                f"base_url uses insecure HTTP for non-local host '{parsed.hostname}'. "
                "Use HTTPS to protect your API token, or target localhost for testing."
            )

        if self.retry_max_attempts < 1:
            raise ValueError(f"retry_max_attempts must be >= 1, got {self.retry_max_attempts}")
        if self.retry_base_delay < 0:
            raise ValueError(f"retry_base_delay must be >= 0, got {self.retry_base_delay}")
        if self.retry_max_delay < 0:
            raise ValueError(f"retry_max_delay must be >= 0, got {self.retry_max_delay}")
        if self.rate_limit_rps <= 0:
            raise ValueError(f"rate_limit_rps must be > 0, got {self.rate_limit_rps}")
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {self.timeout_seconds}")
        if not 1 <= self.max_depth <= MAX_DEPTH_LIMIT:
            raise ValueError(
                f"max_depth must be between 1 and {MAX_DEPTH_LIMIT}, got {self.max_depth}"
            )
        if self.import_max_concurrent < 1:
            raise ValueError(
                f"import_max_concurrent must be >= 1, got {self.import_max_concurrent}"
            )

    def resolved_color_mappings(self) -> dict[str, str]:
        """Return the default color table with ``color_mappings`` applied."""
        return {**DEFAULT_COLOR_MAPPINGS, **self.color_mappings}

    def __repr__(self) -> str:
        """Mask the token to prevent accidental credential leakage."""
        parts: list[str] = []
        for f in dataclasses.fields(self):
            val = getattr(self, f.name)
            if f.name == "token":
                masked = f"...{val[-4:]}" if len(val) >= 4 else "****"
                parts.append(f"token='{masked}'")
            else:
                parts.append(f"{f.name}={val!r}")
        return f"NotionpressConfig({', '.join(parts)})"
