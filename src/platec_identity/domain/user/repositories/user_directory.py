"""User directory interface.

The directory is the sole owner of user storage, password credentials and
role memberships. Writes report an IdentityResult instead of raising so
callers can surface every failure cause to the user.
"""

from abc import ABC, abstractmethod
from typing import Optional, Union
from uuid import UUID

from platec_identity.domain.user.aggregates.user import User
from platec_identity.domain.user.value_objects import Email, IdentityResult, Role


class UserDirectory(ABC):
    """Repository interface for users, credentials and role memberships."""

    @abstractmethod
    async def find_by_id(self, user_id: Union[str, UUID, None]) -> Optional[User]:
        """Find a user by id. Missing or malformed ids yield None."""

    @abstractmethod
    async def find_by_email(self, email: Union[str, Email]) -> Optional[User]:
        """Find a user by their email address (case insensitive)."""

    @abstractmethod
    async def create(self, user: User, password: str) -> IdentityResult:
        """Create a user with the given plaintext password."""

    @abstractmethod
    async def update(self, user: User) -> IdentityResult:
        """Persist profile changes of an existing user."""

    @abstractmethod
    async def delete(self, user: User) -> IdentityResult:
        """Delete a user with its credential and role memberships."""

    @abstractmethod
    async def add_to_role(self, user: User, role: Role) -> IdentityResult:
        """Assign a role to a user."""

    @abstractmethod
    async def get_users_in_role(self, role: Role) -> list[User]:
        """List all users holding the role."""

    @abstractmethod
    async def get_roles(self, user: User) -> list[Role]:
        """List the roles assigned to a user."""

    @abstractmethod
    async def list_all(self) -> list[User]:
        """List all users."""

    @abstractmethod
    async def role_exists(self, role: Role) -> bool:
        """Check whether the role has been created."""

    @abstractmethod
    async def create_role(self, role: Role) -> IdentityResult:
        """Create the role."""
