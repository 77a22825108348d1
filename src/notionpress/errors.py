"""Error hierarchy for notionpress.

Every public error class inherits from :class:`NotionpressError`.  Each
carries a machine-readable ``code`` (from :class:`ErrorCode`), a
human-readable ``message``, an optional structured ``context`` dict, and an
optional ``cause`` (chained exception).

The importer turns any :class:`NotionpressError` raised while handling one
page into a per-page failure, so a batch import never stops early.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTH_ERROR = "AUTH_ERROR"
    PERMISSION_ERROR = "PERMISSION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    RATE_LIMITED = "RATE_LIMITED"
    RETRY_EXHAUSTED = "RETRY_EXHAUSTED"
    NETWORK_ERROR = "NETWORK_ERROR"
    CONVERSION_ERROR = "CONVERSION_ERROR"
    DEPTH_EXCEEDED = "DEPTH_EXCEEDED"
    SINK_ERROR = "SINK_ERROR"
    UNKNOWN = "UNKNOWN"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class NotionpressError(Exception):
    """Base exception for all notionpress errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string).
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


class _CodedError(NotionpressError):
    """Helper base: subclasses pin ``code`` through the ``_code`` attribute."""

    _code: ErrorCode = ErrorCode.VALIDATION_ERROR

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=self._code,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# Content-source (Notion API) errors
# ---------------------------------------------------------------------------

class NotionpressValidationError(_CodedError):
    """The request was invalid (HTTP 400 or bad caller input).

    Context keys: ``status_code``, ``notion_code``, ``body``.
    """

    _code = ErrorCode.VALIDATION_ERROR


class NotionpressAuthError(_CodedError):
    """The integration token is invalid or expired (HTTP 401)."""

    _code = ErrorCode.AUTH_ERROR


class NotionpressPermissionError(_CodedError):
    """The integration lacks access to the resource (HTTP 403).

    Context keys: ``operation``.
    """

    _code = ErrorCode.PERMISSION_ERROR


class NotionpressNotFoundError(_CodedError):
    """The requested page or block does not exist (HTTP 404).

    Context keys: ``path``.
    """

    _code = ErrorCode.NOT_FOUND


class NotionpressRateLimitError(_CodedError):
    """Rate limit exceeded (HTTP 429).

    Context keys: ``retry_after_seconds``, ``attempt``.
    """

    _code = ErrorCode.RATE_LIMITED


class NotionpressRetryExhaustedError(_CodedError):
    """All retry attempts have been exhausted for a retryable request.

    Context keys: ``attempts``, ``last_status_code``.
    """

    _code = ErrorCode.RETRY_EXHAUSTED


class NotionpressNetworkError(_CodedError):
    """A transport-level failure occurred (timeout, DNS, connection reset).

    Context keys: ``url``, ``attempt``.
    """

    _code = ErrorCode.NETWORK_ERROR


# ---------------------------------------------------------------------------
# Conversion errors
# ---------------------------------------------------------------------------

class NotionpressConversionError(NotionpressError):
    """Base class for errors raised while converting a block tree."""

    def __init__(
        self,
        code: str = ErrorCode.CONVERSION_ERROR,
        message: str = "Conversion error",
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            context=context,
            cause=cause,
        )


class NotionpressDepthError(NotionpressConversionError):
    """A block tree is nested deeper than ``config.max_depth``.

    Context keys: ``depth``, ``max_depth``, ``block_id``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.DEPTH_EXCEEDED,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# Sink errors
# ---------------------------------------------------------------------------

class NotionpressSinkError(_CodedError):
    """The post sink failed to create or update a post.

    Context keys: ``source_id``.
    """

    _code = ErrorCode.SINK_ERROR
