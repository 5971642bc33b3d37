"""User domain manages user identity only.

This domain handles:
- User aggregate (identity: id, email, username, names)
- The closed Role set
- The UserDirectory contract and its IdentityResult outcomes
"""

from platec_identity.domain.user.aggregates import User
from platec_identity.domain.user.exceptions import InvalidEmailError
from platec_identity.domain.user.repositories import UserDirectory
from platec_identity.domain.user.value_objects import (
    Email,
    IdentityError,
    IdentityResult,
    Role,
)

__all__ = [
    "Email",
    "IdentityError",
    "IdentityResult",
    "InvalidEmailError",
    "Role",
    "User",
    "UserDirectory",
]
