"""SQLAlchemy implementation of UserDirectory."""

import logging
from typing import Union
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from platec_config.settings import DEFAULT_USERNAME_CHARACTERS
from platec_identity.domain.user import (
    Email,
    IdentityError,
    IdentityResult,
    InvalidEmailError,
    Role,
    User,
    UserDirectory,
)
from platec_identity.exceptions import WeakPasswordError
from platec_identity.infrastructure.persistence.sqlalchemy.models import (
    RoleModel,
    UserModel,
    UserRoleModel,
)
from platec_identity.infrastructure.persistence.sqlalchemy.repositories.user_credential_repository import (  # noqa: E501
    UserCredentialRepositorySQLAlchemy,
)
from platec_identity.repositories import UserCredentialRepository
from platec_identity.services import PasswordHashingService

logger = logging.getLogger(__name__)


def _duplicate_user_name(user_name: str) -> IdentityError:
    return IdentityError(
        "DuplicateUserName",
        f"Username '{user_name}' is already taken.",
    )


def _duplicate_email(email: str) -> IdentityError:
    return IdentityError("DuplicateEmail", f"Email '{email}' is already taken.")


def _concurrency_failure() -> IdentityError:
    return IdentityError(
        "ConcurrencyFailure",
        "Optimistic concurrency failure, object has been modified.",
    )


class UserDirectorySQLAlchemy(UserDirectory):
    """SQLAlchemy implementation of the UserDirectory interface.

    Only flushes; committing or rolling back is left to the caller.
    """

    def __init__(
        self,
        session: AsyncSession,
        password_service: PasswordHashingService,
        credential_repository: UserCredentialRepository | None = None,
        allowed_user_name_characters: str = DEFAULT_USERNAME_CHARACTERS,
    ) -> None:
        self._session = session
        self._password_service = password_service
        self._credential_repo = credential_repository or (
            UserCredentialRepositorySQLAlchemy(session)
        )
        self._allowed_characters = frozenset(allowed_user_name_characters)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def find_by_id(self, user_id: Union[str, UUID, None]) -> User | None:
        parsed = self._parse_id(user_id)
        if parsed is None:
            return None

        model = await self._find_model_by_id(parsed)
        return self._map_to_domain(model) if model else None

    async def find_by_email(self, email: Union[str, Email]) -> User | None:
        try:
            email_value = email.value if isinstance(email, Email) else Email(email).value
        except InvalidEmailError:
            return None

        stmt = select(UserModel).where(UserModel.email == email_value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._map_to_domain(model) if model else None

    async def list_all(self) -> list[User]:
        stmt = select(UserModel).order_by(UserModel.created_at)
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create(self, user: User, password: str) -> IdentityResult:
        errors = self._validate_user_name(user.user_name)
        errors += await self._find_duplicates(user)

        password_hash: str | None = None
        try:
            password_hash = self._password_service.hash(password)
        except WeakPasswordError as e:
            errors.append(IdentityError(e.code, e.message))

        if errors or password_hash is None:
            return IdentityResult.failed(*errors)

        try:
            async with self._session.begin_nested():
                self._session.add(self._map_to_model(user))
                await self._session.flush()
        except IntegrityError:
            # Lost a race with a concurrent create; only the savepoint is undone
            logger.warning("Unique constraint hit while creating %s", user.email)
            return IdentityResult.failed(
                _duplicate_user_name(user.user_name),
                _duplicate_email(user.email),
            )

        await self._credential_repo.save(user_id=user.id, password_hash=password_hash)
        logger.info("Created user: %s (email: %s)", user.id, user.email)
        return IdentityResult.success()

    async def update(self, user: User) -> IdentityResult:
        model = await self._find_model_by_id(user.id)
        if model is None:
            return IdentityResult.failed(_concurrency_failure())

        errors = self._validate_user_name(user.user_name)
        errors += await self._find_duplicates(user, exclude_id=user.id)
        if errors:
            return IdentityResult.failed(*errors)

        try:
            async with self._session.begin_nested():
                self._update_model(model, user)
                await self._session.flush()
        except IntegrityError:
            logger.warning("Unique constraint hit while updating %s", user.id)
            return IdentityResult.failed(
                _duplicate_user_name(user.user_name),
                _duplicate_email(user.email),
            )

        logger.debug("Updated user: %s", user.id)
        return IdentityResult.success()

    async def delete(self, user: User) -> IdentityResult:
        model = await self._find_model_by_id(user.id)
        if model is None:
            return IdentityResult.failed(_concurrency_failure())

        await self._session.execute(
            delete(UserRoleModel).where(UserRoleModel.user_id == user.id),
        )
        await self._credential_repo.delete(user.id)
        await self._session.delete(model)
        await self._session.flush()

        logger.info("Deleted user: %s", user.id)
        return IdentityResult.success()

    # ------------------------------------------------------------------
    # Roles
    # ------------------------------------------------------------------

    async def role_exists(self, role: Role) -> bool:
        return await self._find_role_model(role) is not None

    async def create_role(self, role: Role) -> IdentityResult:
        if await self.role_exists(role):
            return IdentityResult.failed(
                IdentityError(
                    "DuplicateRoleName",
                    f"Role name '{role.value}' is already taken.",
                ),
            )

        self._session.add(RoleModel(name=role.value))
        await self._session.flush()
        logger.info("Created role: %s", role.value)
        return IdentityResult.success()

    async def add_to_role(self, user: User, role: Role) -> IdentityResult:
        role_model = await self._find_role_model(role)
        if role_model is None:
            return IdentityResult.failed(
                IdentityError("RoleNotFound", f"Role {role.value} does not exist."),
            )

        stmt = select(UserRoleModel).where(
            UserRoleModel.user_id == user.id,
            UserRoleModel.role_id == role_model.id,
        )
        result = await self._session.execute(stmt)
        if result.scalar_one_or_none() is not None:
            return IdentityResult.failed(
                IdentityError(
                    "UserAlreadyInRole",
                    f"User already in role '{role.value}'.",
                ),
            )

        self._session.add(UserRoleModel(user_id=user.id, role_id=role_model.id))
        await self._session.flush()
        logger.debug("Added user %s to role %s", user.id, role.value)
        return IdentityResult.success()

    async def get_users_in_role(self, role: Role) -> list[User]:
        stmt = (
            select(UserModel)
            .join(UserRoleModel, UserRoleModel.user_id == UserModel.id)
            .join(RoleModel, RoleModel.id == UserRoleModel.role_id)
            .where(RoleModel.name == role.value)
            .order_by(UserModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def get_roles(self, user: User) -> list[Role]:
        stmt = (
            select(RoleModel.name)
            .join(UserRoleModel, UserRoleModel.role_id == RoleModel.id)
            .where(UserRoleModel.user_id == user.id)
            .order_by(RoleModel.name)
        )
        result = await self._session.execute(stmt)
        return [Role(name) for name in result.scalars().all()]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_id(user_id: Union[str, UUID, None]) -> UUID | None:
        if isinstance(user_id, UUID):
            return user_id
        if not user_id:
            return None
        try:
            return UUID(str(user_id))
        except ValueError:
            return None

    def _validate_user_name(self, user_name: str) -> list[IdentityError]:
        if user_name and all(ch in self._allowed_characters for ch in user_name):
            return []
        return [
            IdentityError(
                "InvalidUserName",
                f"Username '{user_name}' is invalid, can only contain letters or digits.",
            ),
        ]

    async def _find_duplicates(
        self,
        user: User,
        exclude_id: UUID | None = None,
    ) -> list[IdentityError]:
        errors: list[IdentityError] = []

        name_stmt = select(UserModel.id).where(UserModel.user_name == user.user_name)
        email_stmt = select(UserModel.id).where(UserModel.email == user.email)
        if exclude_id is not None:
            name_stmt = name_stmt.where(UserModel.id != exclude_id)
            email_stmt = email_stmt.where(UserModel.id != exclude_id)

        if (await self._session.execute(name_stmt)).first() is not None:
            errors.append(_duplicate_user_name(user.user_name))
        if (await self._session.execute(email_stmt)).first() is not None:
            errors.append(_duplicate_email(user.email))

        return errors

    async def _find_model_by_id(self, user_id: UUID) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def _find_role_model(self, role: Role) -> RoleModel | None:
        stmt = select(RoleModel).where(RoleModel.name == role.value)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            email=model.email,
            user_name=model.user_name,
            first_name=model.first_name,
            last_name=model.last_name,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _map_to_model(self, user: User) -> UserModel:
        return UserModel(
            id=user.id,
            email=user.email,
            user_name=user.user_name,
            first_name=user.first_name,
            last_name=user.last_name,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def _update_model(self, model: UserModel, user: User) -> None:
        model.email = user.email
        model.user_name = user.user_name
        model.first_name = user.first_name
        model.last_name = user.last_name
        model.updated_at = user.updated_at
