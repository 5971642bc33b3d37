"""Abstract repository interface for user credentials.

This interface defines the contract for credential persistence and the
login lockout bookkeeping that goes with it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class UserCredentialData:
    """Immutable credential data returned by repository."""

    user_id: UUID
    password_hash: str
    failed_login_attempts: int
    locked_until: datetime | None
    last_login_at: datetime | None


class UserCredentialRepository(ABC):
    """
    Abstract repository interface for user authentication credentials.

    Implementations must provide methods for:
    - Saving/updating credentials
    - Finding credentials by user ID
    - Managing failed login attempts and account lockout
    - Tracking last login
    """

    MAX_FAILED_ATTEMPTS: int = 5
    LOCKOUT_DURATION_MINUTES: int = 5

    @abstractmethod
    async def save(self, user_id: UUID, password_hash: str) -> UserCredentialData:
        """Create or update credentials for a user."""

    @abstractmethod
    async def find_by_user_id(self, user_id: UUID) -> UserCredentialData | None:
        """Find credentials by user ID."""

    @abstractmethod
    async def increment_failed_attempts(self, user_id: UUID) -> int:
        """
        Increment failed login attempts for a user.

        Locks the account once the maximum number of attempts is reached
        and restarts the count, so a lock that has expired needs the full
        number of fresh failures before it is applied again.

        Returns
        -------
        The number of consecutive failures including this one
        """

    @abstractmethod
    async def reset_failed_attempts(self, user_id: UUID) -> None:
        """Reset failed login attempts and clear any lockout."""

    @abstractmethod
    async def update_last_login(self, user_id: UUID) -> None:
        """Update last login timestamp."""

    @abstractmethod
    async def is_account_locked(self, user_id: UUID) -> tuple[bool, datetime | None]:
        """
        Check if an account is locked.

        Returns
        -------
        Tuple of (is_locked, locked_until) where locked_until is None
        if not locked
        """

    @abstractmethod
    async def delete(self, user_id: UUID) -> bool:
        """Delete credentials for a user. Returns False if none existed."""
