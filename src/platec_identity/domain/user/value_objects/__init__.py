from platec_identity.domain.user.value_objects.email import Email
from platec_identity.domain.user.value_objects.identity_result import (
    IdentityError,
    IdentityResult,
)
from platec_identity.domain.user.value_objects.role import Role

__all__ = ["Email", "IdentityError", "IdentityResult", "Role"]
