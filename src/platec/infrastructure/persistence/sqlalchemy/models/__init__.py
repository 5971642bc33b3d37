"""SQLAlchemy models for persistence layer."""

from platec.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)
from platec.infrastructure.persistence.sqlalchemy.models.student_model import (
    StudentModel,
)

__all__ = ["Base", "StudentModel", "TimestampMixin"]
