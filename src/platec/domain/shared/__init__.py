"""Shared domain building blocks."""

from platec.domain.shared.exceptions import (
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)
from platec.domain.shared.time import utc_now

__all__ = [
    "DomainException",
    "EntityNotFoundError",
    "ErrorCode",
    "ValidationError",
    "utc_now",
]
