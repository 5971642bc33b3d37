"""Student repository interface."""

from abc import ABC, abstractmethod
from uuid import UUID

from platec.domain.student.student import Student


class StudentRepository(ABC):
    """Repository interface for student records."""

    @abstractmethod
    async def save(self, student: Student) -> None:
        """Persist a student record."""

    @abstractmethod
    async def exists_for_user(self, user_id: UUID) -> bool:
        """Check whether any student record references the user."""
