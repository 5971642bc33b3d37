"""Error codes and the base exceptions of the platec domain.

Everything raised on purpose by platec services derives from
DomainException, so the API can turn it into a response with a stable
``code`` in one place.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Machine-readable error codes returned in the ``code`` field."""

    # 400
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # 404
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    TEACHER_NOT_FOUND = "TEACHER_NOT_FOUND"

    # Raised before the first request is served
    STARTUP_FAILED = "STARTUP_FAILED"

    INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainException(Exception):  # NOQA: N818
    """Base class for expected platec failures.

    Attributes
    ----------
    message
        Text shown to the client.
    code
        One of ErrorCode.
    details
        Extra context for the logs; never sent to the client.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class ValidationError(DomainException):
    """Input was rejected.

    ``errors`` lists one message per cause, in the order they were found.
    """

    def __init__(
        self,
        message: str,
        errors: list[str] | None = None,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
        self.errors = list(errors or [])


class EntityNotFoundError(DomainException):
    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.ENTITY_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
