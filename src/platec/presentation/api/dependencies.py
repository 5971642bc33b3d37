"""FastAPI dependency injection for the platec API.

Provides dependencies for:
- Database sessions (engine and session maker live on ``app.state``)
- Authentication (current user from JWT) and role checks
- Anti-forgery token validation
- Service instances
"""

import logging
from typing import Annotated, AsyncGenerator, Callable, Coroutine

from fastapi import Depends, Header, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from platec.application.ports import NotificationSender
from platec.application.services import TeacherLifecycleService
from platec.infrastructure.email import EmailService
from platec.infrastructure.persistence.sqlalchemy.init_db import build_user_directory
from platec_config.settings import Settings
from platec_identity import (
    AntiforgeryService,
    AuthenticationService,
    InvalidTokenError,
    JWTService,
    PasswordHashingService,
    Role,
    UserContext,
    UserDirectory,
)
from platec_identity.infrastructure.persistence.sqlalchemy import (
    UserCredentialRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)

# Security scheme for JWT Bearer tokens
security = HTTPBearer(auto_error=False)

CSRF_HEADER = "X-CSRF-Token"


def get_api_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(get_api_settings)]


# -----------------------------------------------------------------------------
# Database Session
# -----------------------------------------------------------------------------


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Creates an async session for the request from the application's shared
    session maker. Routers commit or roll back explicitly.

    Yields
    ------
    AsyncSession for database operations
    """
    async with request.app.state.session_maker() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Identity Services
# -----------------------------------------------------------------------------


def get_jwt_service(settings: SettingsDep) -> JWTService:
    """Get JWT service configured with API settings."""
    return JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        access_token_expire_hours=settings.jwt_access_token_expire_hours,
    )


JWTServiceDep = Annotated[JWTService, Depends(get_jwt_service)]


def get_password_service(settings: SettingsDep) -> PasswordHashingService:
    """Get password hashing service."""
    return PasswordHashingService(
        rounds=settings.password_hash_rounds,
        min_length=settings.password_min_length,
        max_length=settings.password_max_length,
    )


def get_antiforgery_service(settings: SettingsDep) -> AntiforgeryService:
    return AntiforgeryService(settings.jwt_secret_key.get_secret_value())


def get_user_directory(session: DBSession, settings: SettingsDep) -> UserDirectory:
    return build_user_directory(session, settings)


UserDirectoryDep = Annotated[UserDirectory, Depends(get_user_directory)]
AntiforgeryDep = Annotated[AntiforgeryService, Depends(get_antiforgery_service)]


async def get_authentication_service(
    session: DBSession,
    settings: SettingsDep,
    user_directory: UserDirectoryDep,
    jwt_service: JWTServiceDep,
    password_service: PasswordHashingService = Depends(get_password_service),
) -> AuthenticationService:
    """Get authentication service with all dependencies."""
    credential_repo = UserCredentialRepositorySQLAlchemy(
        session,
        max_failed_attempts=settings.lockout_max_failed_attempts,
        lockout_duration_minutes=settings.lockout_duration_minutes,
    )

    return AuthenticationService(
        user_directory=user_directory,
        credential_repository=credential_repo,
        password_service=password_service,
        jwt_service=jwt_service,
    )


# Type alias for injected auth service
AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]


# -----------------------------------------------------------------------------
# Current User (JWT Authentication)
# -----------------------------------------------------------------------------


async def get_current_user(
    user_directory: UserDirectoryDep,
    jwt_service: JWTServiceDep,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> UserContext:
    """
    FastAPI dependency to get the current authenticated user from JWT.

    Extracts and validates the JWT token from the Authorization header,
    then loads the corresponding user and their roles.

    Raises
    ------
    HTTPException
        401 if token is missing, invalid, or user not found
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = jwt_service.verify_token(credentials.credentials)
    except InvalidTokenError as e:
        logger.warning("Invalid token: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    user = await user_directory.find_by_id(payload.user_id)
    if user is None:
        logger.warning("User not found for token: %s", payload.user_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    roles = await user_directory.get_roles(user)
    return UserContext.create(user, roles)


# Type alias for injected current user
CurrentUser = Annotated[UserContext, Depends(get_current_user)]


def require_role(
    role: Role,
) -> Callable[[UserContext], Coroutine[None, None, UserContext]]:
    """Build a dependency that admits only callers holding ``role``."""

    async def _require_role(user: CurrentUser) -> UserContext:
        if not user.has_role(role):
            logger.warning("User %s denied: %s role required", user.email, role.value)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"{role.value} access required",
            )
        return user

    return _require_role


# Type alias for admin user
AdminUser = Annotated[UserContext, Depends(require_role(Role.ADMIN))]


async def verify_csrf_token(
    user: AdminUser,
    antiforgery: AntiforgeryDep,
    settings: SettingsDep,
    csrf_token: Annotated[str | None, Header(alias=CSRF_HEADER)] = None,
) -> None:
    """Reject mutating requests without the caller's anti-forgery token."""
    if not settings.csrf_protection_enabled:
        return

    if not antiforgery.validate(user.user_id, csrf_token):
        logger.warning("Anti-forgery validation failed for %s", user.email)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or missing anti-forgery token",
        )


# -----------------------------------------------------------------------------
# Application Services
# -----------------------------------------------------------------------------


def get_notification_sender(settings: SettingsDep) -> NotificationSender:
    return EmailService(settings)


async def get_teacher_lifecycle_service(
    user_directory: UserDirectoryDep,
    settings: SettingsDep,
    notification_sender: NotificationSender = Depends(get_notification_sender),
) -> TeacherLifecycleService:
    return TeacherLifecycleService(
        user_directory=user_directory,
        notification_sender=notification_sender,
        app_name=settings.app_name,
    )


TeacherService = Annotated[
    TeacherLifecycleService,
    Depends(get_teacher_lifecycle_service),
]
