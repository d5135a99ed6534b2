"""Classify errors into HTTP responses without losing the original cause."""

from __future__ import annotations

from httpfail.fail import (
    MESSAGE_NOT_FOUND,
    MESSAGE_OK,
    MESSAGE_UNEXPECTED,
    UNSPECIFIED,
    Fail,
    UnspecifiedError,
    bad_request,
    because,
    cause,
    conflict,
    forbidden,
    is_bad_request,
    is_conflict,
    is_forbidden,
    is_not_found,
    is_unauthorized,
    is_unexpected,
    is_unknown,
    not_found,
    unauthorized,
    unexpected,
)
from httpfail.handlers import register_fail_handlers
from httpfail.responses import error_response, make_error_payload, say, write_error

__all__ = [
    "MESSAGE_NOT_FOUND",
    "MESSAGE_OK",
    "MESSAGE_UNEXPECTED",
    "UNSPECIFIED",
    "Fail",
    "UnspecifiedError",
    "bad_request",
    "because",
    "cause",
    "conflict",
    "error_response",
    "forbidden",
    "is_bad_request",
    "is_conflict",
    "is_forbidden",
    "is_not_found",
    "is_unauthorized",
    "is_unexpected",
    "is_unknown",
    "make_error_payload",
    "not_found",
    "register_fail_handlers",
    "say",
    "unauthorized",
    "unexpected",
    "write_error",
]
