"""Tests for notionpress/errors.py."""

from __future__ import annotations

import pytest

from notionpress.errors import (
    ErrorCode,
    NotionpressAuthError,
    NotionpressConversionError,
    NotionpressDepthError,
    NotionpressError,
    NotionpressNetworkError,
    NotionpressNotFoundError,
    NotionpressPermissionError,
    NotionpressRateLimitError,
    NotionpressRetryExhaustedError,
    NotionpressSinkError,
    NotionpressValidationError,
)


@pytest.mark.parametrize("error_cls,code", [
    (NotionpressValidationError, ErrorCode.VALIDATION_ERROR),
    (NotionpressAuthError, ErrorCode.AUTH_ERROR),
    (NotionpressPermissionError, ErrorCode.PERMISSION_ERROR),
    (NotionpressNotFoundError, ErrorCode.NOT_FOUND),
    (NotionpressRateLimitError, ErrorCode.RATE_LIMITED),
    (NotionpressRetryExhaustedError, ErrorCode.RETRY_EXHAUSTED),
    (NotionpressNetworkError, ErrorCode.NETWORK_ERROR),
    (NotionpressSinkError, ErrorCode.SINK_ERROR),
    (NotionpressDepthError, ErrorCode.DEPTH_EXCEEDED),
])
def test_codes(error_cls, code):
    err = error_cls(message="boom", context={"k": "v"})
    assert isinstance(err, NotionpressError)
    assert err.code == code
    assert err.message == "boom"
    assert str(err) == "boom"
    assert err.context == {"k": "v"}


def test_depth_error_is_conversion_error():
    assert issubclass(NotionpressDepthError, NotionpressConversionError)


def test_cause_chained():
    cause = OSError("reset")
    err = NotionpressNetworkError(message="network", cause=cause)
    assert err.cause is cause
    assert err.__cause__ is cause


def test_context_defaults_to_empty_dict():
    assert NotionpressNotFoundError(message="x").context == {}


def test_repr_includes_code():
    assert "NOT_FOUND" in repr(NotionpressNotFoundError(message="x", context={"path": "/p"}))
