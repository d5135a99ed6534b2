"""Errors that carry an HTTP status and a client-safe message.

A ``Fail`` wraps an underlying error (its *cause*) together with the file and
line where it was created. Classifying it sets the status, the message that
clients may see and optional details:

    try:
        user = await repo.get(user_id)
    except LookupError as exc:
        raise cause(exc).not_found("user not found")

    if not payload.name:
        raise bad_request("missing name")

``str(fail)`` is meant for logs and includes the cause; ``fail.message`` is
the only text that should reach a client.
"""

from __future__ import annotations

import inspect
import os
import re
from typing import Any

from fastapi import status as http_status


MESSAGE_OK = "OK"
MESSAGE_NOT_FOUND = "object not found"
MESSAGE_UNEXPECTED = "an unexpected error has occurred"

# Location used when the interpreter can't give us a caller frame.
UNKNOWN_FILE = "???"

_FORMAT_SPEC = re.compile(r"^(?:\.(?P<precision>\d+))?(?P<directive>[deflms])$")


class UnspecifiedError(Exception):
    """Cause of a fail that was created without an underlying error."""


# Shared sentinel cause; compare with ``is``, never by message.
UNSPECIFIED = UnspecifiedError("unspecified error")


class Fail(Exception):
    """An error that can be used in an HTTP response.

    - status: HTTP status code of the response (0 until classified)
    - message: friendly error message for clients
    - details: detail strings, e.g. form validation errors
    """

    def __init__(self, cause: BaseException | None = None, *, skip: int = 0) -> None:
        self._cause: BaseException = UNSPECIFIED if cause is None else cause
        super().__init__(self._cause)
        self.status = 0
        self.message = ""
        self.details: list[str] = []
        # Set by because() on copies that were re-stamped one layer up.
        self.recaptured = False
        if self._cause is not UNSPECIFIED:
            self.__cause__ = self._cause
        self._file = UNKNOWN_FILE
        self._line = 0
        self._capture(skip + 1)

    def _capture(self, skip: int) -> None:
        """Record the file and line ``skip`` frames above the caller."""

        frame = inspect.currentframe()
        try:
            for _ in range(skip + 1):
                if frame is None:
                    break
                frame = frame.f_back
            if frame is not None:
                self._file = os.path.basename(frame.f_code.co_filename)
                self._line = frame.f_lineno
        finally:
            del frame

    @property
    def cause(self) -> BaseException:
        return self._cause

    @property
    def file(self) -> str:
        return self._file

    @property
    def line(self) -> int:
        return self._line

    @property
    def unspecified(self) -> bool:
        """True when this fail wraps no real error."""

        return self._cause is UNSPECIFIED

    def __str__(self) -> str:
        # Long form, for logs only.
        return f"{self._file}:{self._line}: {self._cause}"

    def __repr__(self) -> str:
        return (
            f"Fail(status={self.status!r}, message={self.message!r}, "
            f"file={self._file!r}, line={self._line!r})"
        )

    def __format__(self, spec: str) -> str:
        """Format a single field of the fail.

        Spec  Value
        ----  -------------------------------------------
        d     All details separated with commas
        e     The original error
        f     File name where the fail was created, minus the path
        l     Line of the file for the fail
        m     The client message
        s     HTTP status code

        A precision truncates the value, e.g. ``f"{fail:f}:{fail:l} {fail:.20e}"``.
        """

        if not spec:
            return str(self)
        match = _FORMAT_SPEC.match(spec)
        if match is None:
            raise ValueError(f"Invalid format specifier {spec!r} for Fail")

        directive = match.group("directive")
        if directive == "d":
            value = ", ".join(self.details)
        elif directive == "e":
            value = str(self._cause)
        elif directive == "f":
            value = self._file
        elif directive == "l":
            value = str(self._line)
        elif directive == "m":
            value = self.message
        else:
            value = str(self.status)

        precision = match.group("precision")
        if precision is not None:
            value = value[: int(precision)]
        return value

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"status": self.status, "message": self.message}
        if self.details:
            body["details"] = list(self.details)
        return body

    def _classify(self, status: int, message: str, details: tuple[str, ...] = ()) -> Fail:
        self.status = status
        self.message = message
        self.details = list(details)
        return self

    def bad_request(self, message: str, *details: str) -> Fail:
        """Turn this into a 400 fail; ``details`` explain what was wrong."""

        return self._classify(http_status.HTTP_400_BAD_REQUEST, message, details)

    def conflict(self, message: str, *details: str) -> Fail:
        return self._classify(http_status.HTTP_409_CONFLICT, message, details)

    def forbidden(self, message: str) -> Fail:
        return self._classify(http_status.HTTP_403_FORBIDDEN, message)

    def not_found(self, message: str | None = None) -> Fail:
        return self._classify(
            http_status.HTTP_404_NOT_FOUND,
            MESSAGE_NOT_FOUND if message is None else message,
        )

    def unauthorized(self, message: str) -> Fail:
        return self._classify(http_status.HTTP_401_UNAUTHORIZED, message)

    def unexpected(self) -> Fail:
        return self._classify(http_status.HTTP_500_INTERNAL_SERVER_ERROR, MESSAGE_UNEXPECTED)


def cause(err: BaseException | None = None, *, skip: int = 0) -> Fail:
    """Wrap ``err`` into an unclassified fail located at the caller.

    ``skip`` is the number of extra frames to skip when this is called from
    a helper rather than from where the error happened.
    """

    return Fail(err, skip=skip + 1)


def because(err: BaseException | None) -> Fail:
    """Re-stamp a fail with the caller's location, keeping its classification.

    Anything that isn't a fail becomes an unexpected (500) fail. Use this
    when ``err`` is known to be a fail, e.g. after checking ``is_unknown``.
    """

    if isinstance(err, Fail):
        f = Fail(err.cause, skip=1)
        f.status = err.status
        f.message = err.message
        f.details = list(err.details)
        f.recaptured = True
        return f
    return cause(err, skip=1).unexpected()


def bad_request(message: str, *details: str) -> Fail:
    return cause(skip=1).bad_request(message, *details)


def conflict(message: str, *details: str) -> Fail:
    return cause(skip=1).conflict(message, *details)


def forbidden(message: str) -> Fail:
    return cause(skip=1).forbidden(message)


def not_found(message: str | None = None) -> Fail:
    return cause(skip=1).not_found(message)


def unauthorized(message: str) -> Fail:
    return cause(skip=1).unauthorized(message)


def unexpected() -> Fail:
    return cause(skip=1).unexpected()


def _has_status(err: BaseException | None, status: int) -> bool:
    return isinstance(err, Fail) and err.status == status


def is_bad_request(err: BaseException | None) -> bool:
    return _has_status(err, http_status.HTTP_400_BAD_REQUEST)


def is_conflict(err: BaseException | None) -> bool:
    return _has_status(err, http_status.HTTP_409_CONFLICT)


def is_unauthorized(err: BaseException | None) -> bool:
    return _has_status(err, http_status.HTTP_401_UNAUTHORIZED)


def is_forbidden(err: BaseException | None) -> bool:
    return _has_status(err, http_status.HTTP_403_FORBIDDEN)


def is_not_found(err: BaseException | None) -> bool:
    return _has_status(err, http_status.HTTP_404_NOT_FOUND)


def is_unexpected(err: BaseException | None) -> bool:
    return _has_status(err, http_status.HTTP_500_INTERNAL_SERVER_ERROR)


def is_unknown(err: BaseException | None) -> bool:
    """True if ``err`` is not a fail (``None`` included)."""

    return not isinstance(err, Fail)
