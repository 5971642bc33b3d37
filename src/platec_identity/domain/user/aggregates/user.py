"""User aggregate for identity concerns only."""

from datetime import datetime
from typing import Union
from uuid import UUID, uuid4

from platec.domain.shared.time import utc_now
from platec_identity.domain.user.value_objects.email import Email


class User:
    """
    User aggregate root.

    Represents any account (admin, teacher or student). The username always
    mirrors the email address. Role memberships and the password credential
    are owned by the user directory, not by the aggregate.
    """

    def __init__(  # noqa: PLR0913
        self,
        email: Union[str, Email],
        first_name: str = "",
        last_name: str = "",
        user_name: str | None = None,
        id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._email = email if isinstance(email, Email) else Email(email)
        self._user_name = user_name if user_name is not None else self._email.value
        self._first_name = first_name
        self._last_name = last_name
        self._id = id or uuid4()
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def user_name(self) -> str:
        return self._user_name

    @property
    def first_name(self) -> str:
        return self._first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @property
    def full_name(self) -> str:
        return f"{self._first_name} {self._last_name}".strip()

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def change_profile(
        self,
        email: Union[str, Email],
        first_name: str,
        last_name: str,
    ) -> None:
        """Overwrite email, username (= email) and names."""
        self._email = email if isinstance(email, Email) else Email(email)
        self._user_name = self._email.value
        self._first_name = first_name
        self._last_name = last_name
        self._updated_at = utc_now()

    @classmethod
    def create(
        cls,
        email: Union[str, Email],
        first_name: str = "",
        last_name: str = "",
    ) -> "User":
        return cls(email=email, first_name=first_name, last_name=last_name)

    @classmethod
    def reconstitute(  # noqa: PLR0913
        cls,
        id: UUID,
        email: Union[str, Email],
        user_name: str,
        first_name: str,
        last_name: str,
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        return cls(
            id=id,
            email=email,
            user_name=user_name,
            first_name=first_name,
            last_name=last_name,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"User(id={self._id}, email={self._email.value})"
