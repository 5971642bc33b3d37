"""Platec Identity - users, roles, authentication and authorization.

This module handles all identity-related concerns:
- User management through the UserDirectory contract (CRUD, roles)
- Authentication (password login with lockout, access tokens)
- Authorization (role membership, anti-forgery tokens)
- Password hashing

The platec application only talks to users through the UserDirectory,
keeping identity storage replaceable.
"""

from platec_identity.application.context import UserContext
from platec_identity.application.services import AuthenticationService
from platec_identity.domain.user import (
    Email,
    IdentityError,
    IdentityResult,
    InvalidEmailError,
    Role,
    User,
    UserDirectory,
)
from platec_identity.exceptions import (
    AccountLockedError,
    AuthError,
    InvalidCredentialsError,
    InvalidTokenError,
    WeakPasswordError,
)
from platec_identity.repositories import (
    UserCredentialData,
    UserCredentialRepository,
)
from platec_identity.schemas import TokenPayload
from platec_identity.services import (
    AntiforgeryService,
    JWTService,
    PasswordHashingService,
)

__all__ = [
    # Domain - User
    "Email",
    "IdentityError",
    "IdentityResult",
    "InvalidEmailError",
    "Role",
    "User",
    "UserDirectory",
    # Exceptions
    "AccountLockedError",
    "AuthError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "WeakPasswordError",
    # Repositories
    "UserCredentialData",
    "UserCredentialRepository",
    # Schemas
    "TokenPayload",
    # Services
    "AntiforgeryService",
    "JWTService",
    "PasswordHashingService",
    # Application Context
    "UserContext",
    # Application Services
    "AuthenticationService",
]
