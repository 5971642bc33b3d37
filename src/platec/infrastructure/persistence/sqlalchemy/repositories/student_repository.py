"""SQLAlchemy implementation of StudentRepository."""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from platec.domain.student import Student, StudentRepository
from platec.infrastructure.persistence.sqlalchemy.models import StudentModel

logger = logging.getLogger(__name__)


class StudentRepositorySQLAlchemy(StudentRepository):
    """SQLAlchemy implementation of StudentRepository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, student: Student) -> None:
        self._session.add(
            StudentModel(
                id=student.id,
                user_id=student.user_id,
                student_number=student.student_number,
                created_at=student.created_at,
            ),
        )
        await self._session.flush()
        logger.debug("Saved student record %s for user %s", student.id, student.user_id)

    async def exists_for_user(self, user_id: UUID) -> bool:
        stmt = select(StudentModel.id).where(StudentModel.user_id == user_id).limit(1)
        result = await self._session.execute(stmt)
        return result.first() is not None
