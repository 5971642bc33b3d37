"""Student records referenced by the role backfill."""

from platec.domain.student.student import Student
from platec.domain.student.student_repository import StudentRepository

__all__ = ["Student", "StudentRepository"]
