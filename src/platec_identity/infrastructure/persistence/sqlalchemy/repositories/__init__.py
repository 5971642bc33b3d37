# ruff: noqa: E501 - Long import paths in __init__.py re-exports
"""SQLAlchemy repository implementations for identity management."""

from platec_identity.infrastructure.persistence.sqlalchemy.repositories.user_credential_repository import (
    UserCredentialRepositorySQLAlchemy,
)
from platec_identity.infrastructure.persistence.sqlalchemy.repositories.user_directory import (
    UserDirectorySQLAlchemy,
)

__all__ = [
    "UserCredentialRepositorySQLAlchemy",
    "UserDirectorySQLAlchemy",
]
