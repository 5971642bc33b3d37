"""SQLAlchemy implementation for platec_identity persistence.

Provides:
- IdentityBase: Declarative base for identity models
- UserModel, UserCredentialModel, RoleModel, UserRoleModel
- UserDirectorySQLAlchemy: the user directory on top of those tables
- UserCredentialRepositorySQLAlchemy: credentials and login lockout
"""

from platec_identity.infrastructure.persistence.sqlalchemy.base import IdentityBase
from platec_identity.infrastructure.persistence.sqlalchemy.models import (
    RoleModel,
    UserCredentialModel,
    UserModel,
    UserRoleModel,
)
from platec_identity.infrastructure.persistence.sqlalchemy.repositories import (
    UserCredentialRepositorySQLAlchemy,
    UserDirectorySQLAlchemy,
)

__all__ = [
    "IdentityBase",
    "RoleModel",
    "UserCredentialModel",
    "UserCredentialRepositorySQLAlchemy",
    "UserDirectorySQLAlchemy",
    "UserModel",
    "UserRoleModel",
]
