"""SQLAlchemy repositories for the school application."""

from platec.infrastructure.persistence.sqlalchemy.repositories.student_repository import (  # NOQA: E501
    StudentRepositorySQLAlchemy,
)

__all__ = ["StudentRepositorySQLAlchemy"]
