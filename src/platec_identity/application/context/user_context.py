"""User context for request-scoped user identity."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable
from uuid import UUID

from platec_identity.domain.user.value_objects import Role

if TYPE_CHECKING:
    from platec_identity.domain.user import User


@dataclass(frozen=True)
class UserContext:
    """Immutable context for the current authenticated user and their roles."""

    user_id: UUID
    email: str
    roles: frozenset[Role] = field(default_factory=frozenset)

    @classmethod
    def create(cls, user: User, roles: Iterable[Role]) -> UserContext:
        return cls(user_id=user.id, email=user.email, roles=frozenset(roles))

    def has_role(self, role: Role) -> bool:
        return role in self.roles

    @property
    def is_admin(self) -> bool:
        return self.has_role(Role.ADMIN)

    def __str__(self) -> str:
        return f"UserContext({self.email})"
