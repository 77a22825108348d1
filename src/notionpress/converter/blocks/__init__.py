"""Built-in block converters.

:data:`DEFAULT_CONVERTERS` lists them in registration order.  All share
the default priority except :class:`UnsupportedConverter`, so for the
built-ins registration order is dispatch order.
"""

from __future__ import annotations

from .fallback import UnsupportedConverter
from .lists import ListConverter, TodoConverter
from .media import (
    AudioConverter,
    BookmarkConverter,
    EmbedConverter,
    FileConverter,
    ImageConverter,
    VideoConverter,
)
from .table import TableConverter
from .text import (
    CalloutConverter,
    CodeConverter,
    DividerConverter,
    HeadingConverter,
    ParagraphConverter,
    QuoteConverter,
    ToggleConverter,
)

DEFAULT_CONVERTERS: tuple[type, ...] = (
    ParagraphConverter,
    HeadingConverter,
    ListConverter,
    QuoteConverter,
    CodeConverter,
    ImageConverter,
    DividerConverter,
    CalloutConverter,
    ToggleConverter,
    TodoConverter,
    TableConverter,
    BookmarkConverter,
    EmbedConverter,
    FileConverter,
    VideoConverter,
    AudioConverter,
    UnsupportedConverter,
)

__all__ = [
    "DEFAULT_CONVERTERS",
    "AudioConverter",
    "BookmarkConverter",
    "CalloutConverter",
    "CodeConverter",
    "DividerConverter",
    "EmbedConverter",
    "FileConverter",
    "HeadingConverter",
    "ImageConverter",
    "ListConverter",
    "ParagraphConverter",
    "QuoteConverter",
    "TableConverter",
    "TodoConverter",
    "ToggleConverter",
    "UnsupportedConverter",
    "VideoConverter",
]
