"""SQLAlchemy implementation of UserCredentialRepository."""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from platec.domain.shared.time import utc_now
from platec_identity.infrastructure.persistence.sqlalchemy.models import (
    UserCredentialModel,
)
from platec_identity.repositories import UserCredentialData, UserCredentialRepository

logger = logging.getLogger(__name__)


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class UserCredentialRepositorySQLAlchemy(UserCredentialRepository):
    """Credential storage with a configurable lockout policy.

    Parameters
    ----------
    session
        Session shared with the user directory; this class only flushes.
    max_failed_attempts
        Consecutive wrong passwords that lock the account.
    lockout_duration_minutes
        How long a locked account stays locked.
    """

    def __init__(
        self,
        session: AsyncSession,
        max_failed_attempts: int = UserCredentialRepository.MAX_FAILED_ATTEMPTS,
        lockout_duration_minutes: int = (
            UserCredentialRepository.LOCKOUT_DURATION_MINUTES
        ),
    ):
        self._session = session
        self._max_failed_attempts = max_failed_attempts
        self._lockout_duration = timedelta(minutes=lockout_duration_minutes)

    async def save(self, user_id: UUID, password_hash: str) -> UserCredentialData:
        model = await self._get(user_id)
        if model is None:
            model = UserCredentialModel(user_id=user_id, password_hash=password_hash)
            self._session.add(model)
            logger.info("Stored credentials for user: %s", user_id)
        else:
            model.password_hash = password_hash
            logger.debug("Replaced credentials for user: %s", user_id)

        await self._session.flush()
        return self._to_data(model)

    async def find_by_user_id(self, user_id: UUID) -> UserCredentialData | None:
        model = await self._get(user_id)
        return self._to_data(model) if model else None

    async def increment_failed_attempts(self, user_id: UUID) -> int:
        model = await self._get(user_id)
        if model is None:
            return 0

        attempts = model.failed_login_attempts + 1
        if attempts >= self._max_failed_attempts:
            # Count restarts when the lock is applied
            model.locked_until = utc_now() + self._lockout_duration
            model.failed_login_attempts = 0
            logger.warning(
                "Locking user %s after %d failed login attempts",
                user_id,
                attempts,
            )
        else:
            model.failed_login_attempts = attempts

        await self._session.flush()
        return attempts

    async def reset_failed_attempts(self, user_id: UUID) -> None:
        model = await self._get(user_id)
        if model is None:
            return
        model.failed_login_attempts = 0
        model.locked_until = None
        await self._session.flush()

    async def update_last_login(self, user_id: UUID) -> None:
        model = await self._get(user_id)
        if model is None:
            return
        model.last_login_at = utc_now()
        await self._session.flush()

    async def delete(self, user_id: UUID) -> bool:
        model = await self._get(user_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        logger.info("Deleted credentials for user: %s", user_id)
        return True

    async def is_account_locked(self, user_id: UUID) -> tuple[bool, datetime | None]:
        model = await self._get(user_id)
        locked_until = _as_utc(model.locked_until) if model else None
        if locked_until is None or locked_until <= utc_now():
            return False, None
        return True, locked_until

    async def _get(self, user_id: UUID) -> UserCredentialModel | None:
        stmt = select(UserCredentialModel).where(UserCredentialModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _to_data(model: UserCredentialModel) -> UserCredentialData:
        return UserCredentialData(
            user_id=model.user_id,
            password_hash=model.password_hash,
            failed_login_attempts=model.failed_login_attempts,
            locked_until=_as_utc(model.locked_until),
            last_login_at=_as_utc(model.last_login_at),
        )
