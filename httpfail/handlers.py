from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from starlette.responses import Response

from httpfail.fail import Fail, cause
from httpfail.responses import error_response
from httpfail.settings import Settings, get_settings


logger = logging.getLogger(__name__)


def _request_line(request: Request) -> tuple[str | None, str | None]:
    method = getattr(request, "method", None)
    path = getattr(getattr(request, "url", None), "path", None)
    return method, path


def register_fail_handlers(app: FastAPI, *, settings: Settings | None = None) -> None:
    """Answer raised fails with their status and message.

    Any other exception is logged and answered as an unexpected (500) error
    without exposing its text.
    """

    settings = settings or get_settings()

    @app.exception_handler(Fail)
    async def _fail_handler(request: Request, exc: Fail) -> Response:
        method, path = _request_line(request)
        if not exc.status:
            # Raised before being classified; answer as unexpected.
            logger.error(
                "Unclassified fail (method=%s path=%s): %s",
                method,
                path,
                exc,
                exc_info=(type(exc), exc, exc.__traceback__),
            )
            return error_response(
                cause(exc).unexpected(), media=settings.response_format
            )
        if exc.status >= 500:
            # Long form carries file:line and the cause; never sent to clients.
            logger.error(
                "Fail %s (method=%s path=%s): %s",
                exc.status,
                method,
                path,
                exc,
                exc_info=(type(exc), exc, exc.__traceback__),
            )
        elif settings.log_client_errors:
            logger.warning(
                "Fail %s (method=%s path=%s): %s", exc.status, method, path, exc
            )
        return error_response(exc, media=settings.response_format)

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request: Request, exc: Exception) -> Response:
        method, path = _request_line(request)
        logger.error(
            "Unhandled exception (method=%s path=%s)",
            method,
            path,
            exc_info=(type(exc), exc, exc.__traceback__),
        )
        return error_response(exc, media=settings.response_format)
