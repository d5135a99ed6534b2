"""Turn errors into HTTP status codes and response bodies.

Only fails are allowed to speak to clients. Any other error, whatever its
text, is answered as an unexpected (500) error.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Literal

from fastapi import status as http_status
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.responses import Response

from httpfail.fail import MESSAGE_OK, MESSAGE_UNEXPECTED, Fail


def say(err: BaseException | None) -> tuple[int, str]:
    """Return the HTTP status and message to answer ``err`` with.

    ``None`` means there is no error, so everything is OK.
    """

    if err is None:
        return http_status.HTTP_200_OK, MESSAGE_OK
    if isinstance(err, Fail):
        return err.status, err.message
    return http_status.HTTP_500_INTERNAL_SERVER_ERROR, MESSAGE_UNEXPECTED


def write_error(sink: Callable[[int, str], Any], err: BaseException | None) -> Any:
    """Send the response for ``err`` through ``sink(status, message)``."""

    status_code, message = say(err)
    return sink(status_code, message)


def make_error_payload(
    *, status: int, message: str, details: list[str] | None
) -> dict[str, Any]:
    return {
        "status": status,
        "message": message,
        "details": details or [],
    }


def error_response(
    err: BaseException | None,
    *,
    media: Literal["text", "json"] = "text",
    headers: dict[str, str] | None = None,
) -> Response:
    """Build the Starlette response for ``err``.

    ``text`` is a plain text body ending in a newline, with
    ``X-Content-Type-Options: nosniff``.
    """

    status_code, message = say(err)
    if media == "json":
        details = err.details if isinstance(err, Fail) else None
        return JSONResponse(
            status_code=status_code,
            headers=headers,
            content=make_error_payload(
                status=status_code, message=message, details=details
            ),
        )

    merged: dict[str, str] = dict(headers or {})
    merged["X-Content-Type-Options"] = "nosniff"
    return PlainTextResponse(message + "\n", status_code=status_code, headers=merged)
