"""Authentication service for password login."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from platec_identity.exceptions import AccountLockedError, InvalidCredentialsError
from platec_identity.repositories import UserCredentialRepository
from platec_identity.services import JWTService, PasswordHashingService

if TYPE_CHECKING:
    from platec_identity.domain.user import User, UserDirectory

logger = logging.getLogger(__name__)


class AuthenticationService:
    """
    Application service for user authentication.

    Verifies passwords against the stored credential, applies the lockout
    policy and issues access tokens.
    """

    def __init__(
        self,
        user_directory: UserDirectory,
        credential_repository: UserCredentialRepository,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
    ):
        self._directory = user_directory
        self._credential_repo = credential_repository
        self._password_service = password_service
        self._jwt_service = jwt_service

    async def login(self, email: str, password: str) -> tuple[User, str]:
        user = await self._directory.find_by_email(email)
        if user is None:
            raise InvalidCredentialsError

        is_locked, locked_until = await self._credential_repo.is_account_locked(
            user.id,
        )
        if is_locked:
            raise AccountLockedError(locked_until=locked_until)

        credential = await self._credential_repo.find_by_user_id(user.id)
        if credential is None:
            raise InvalidCredentialsError

        if not self._password_service.verify(password, credential.password_hash):
            await self._credential_repo.increment_failed_attempts(user.id)
            raise InvalidCredentialsError

        await self._credential_repo.reset_failed_attempts(user.id)
        await self._credential_repo.update_last_login(user.id)

        access_token = self._jwt_service.create_access_token(
            user_id=user.id,
            email=user.email,
        )

        logger.info("User logged in: %s", user.email)
        return user, access_token
