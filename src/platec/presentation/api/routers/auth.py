"""Authentication router: login, current user and anti-forgery token."""

import logging

from fastapi import APIRouter, HTTPException, status

from platec.presentation.api.dependencies import (
    CSRF_HEADER,
    AntiforgeryDep,
    AuthService,
    CurrentUser,
    DBSession,
    JWTServiceDep,
    UserDirectoryDep,
)
from platec.presentation.api.schemas import (
    AuthResponse,
    CsrfTokenResponse,
    LoginRequest,
    UserResponse,
)
from platec_identity import AccountLockedError, InvalidCredentialsError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/login",
    summary="Authenticate user",
    responses={
        200: {"description": "Login successful"},
        401: {"description": "Invalid credentials"},
        423: {"description": "Account locked"},
    },
)
async def login(
    request: LoginRequest,
    auth_service: AuthService,
    user_directory: UserDirectoryDep,
    antiforgery: AntiforgeryDep,
    session: DBSession,
    jwt_service: JWTServiceDep,
) -> AuthResponse:
    """
    Authenticate with email and password.

    Returns an access token and the anti-forgery token to send with
    mutating requests. The account is locked after repeated failures.
    """
    try:
        user, access_token = await auth_service.login(
            email=request.email,
            password=request.password,
        )
        roles = await user_directory.get_roles(user)
        await session.commit()
    except InvalidCredentialsError as e:
        await session.commit()  # Commit failed attempt count
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        ) from e
    except AccountLockedError as e:
        await session.commit()
        raise HTTPException(
            status_code=status.HTTP_423_LOCKED,
            detail="Account is locked due to too many failed attempts",
        ) from e
    except Exception as e:
        await session.rollback()
        logger.exception("Login failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Login failed",
        ) from e

    return AuthResponse(
        user=UserResponse(
            id=user.id,
            email=user.email,
            roles=[role.value for role in roles],
        ),
        access_token=access_token,
        expires_in=int(jwt_service.access_token_lifetime.total_seconds()),
        csrf_token=antiforgery.generate(user.id),
    )


@router.get(
    "/me",
    summary="Get current user",
    responses={
        200: {"description": "Current user data"},
        401: {"description": "Not authenticated"},
    },
)
async def get_me(current_user: CurrentUser) -> UserResponse:
    return UserResponse(
        id=current_user.user_id,
        email=current_user.email,
        roles=sorted(role.value for role in current_user.roles),
    )


@router.get("/csrf", summary="Get the anti-forgery token of the current user")
async def get_csrf_token(
    current_user: CurrentUser,
    antiforgery: AntiforgeryDep,
) -> CsrfTokenResponse:
    return CsrfTokenResponse(
        csrf_token=antiforgery.generate(current_user.user_id),
        header_name=CSRF_HEADER,
    )
