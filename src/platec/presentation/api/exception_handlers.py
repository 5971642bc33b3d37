"""Exception handlers that turn platec errors into JSON responses.

Body of every error response:

    {"detail": "...", "code": "ERROR_CODE"}

Validation errors add ``"errors": [...]`` with one entry per cause so a
form can show them all at once.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from platec.domain.shared.exceptions import (
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)

logger = logging.getLogger(__name__)


ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.ENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.TEACHER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.STARTUP_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: DomainException) -> int:
    if exc.code in ERROR_CODE_TO_STATUS:
        return ERROR_CODE_TO_STATUS[exc.code]
    if isinstance(exc, EntityNotFoundError):
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_400_BAD_REQUEST


def error_body(exc: DomainException) -> dict:
    body: dict = {"detail": exc.message, "code": exc.code.value}
    if isinstance(exc, ValidationError):
        body["errors"] = exc.errors
    return body


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the platec handlers on ``app``."""

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        status_code = status_for(exc)
        # details may name ids, never passwords
        log = logger.error if status_code >= 500 else logger.warning
        log(
            "%s %s -> %d %s (details=%s)",
            request.method,
            request.url.path,
            status_code,
            exc.code.value,
            exc.details,
        )
        return JSONResponse(status_code=status_code, content=error_body(exc))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "An internal error occurred",
                "code": ErrorCode.INTERNAL_ERROR.value,
            },
        )
