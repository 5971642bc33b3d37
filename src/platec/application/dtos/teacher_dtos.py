"""Data transfer objects for the teacher account workflow."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from platec_identity import User


@dataclass(frozen=True)
class TeacherForm:
    """Registration form data; the password only lives for one request."""

    email: str
    password: str
    first_name: str
    last_name: str


@dataclass(frozen=True)
class TeacherProfile:
    """Editable teacher fields. The password is never part of an edit."""

    email: str
    first_name: str
    last_name: str

    @classmethod
    def from_user(cls, user: User) -> TeacherProfile:
        return cls(
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
        )


class FlashCategory(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class FlashMessage:
    """One-line message shown on the next list view."""

    category: FlashCategory
    text: str

    @classmethod
    def success(cls, text: str) -> FlashMessage:
        return cls(FlashCategory.SUCCESS, text)

    @classmethod
    def error(cls, text: str) -> FlashMessage:
        return cls(FlashCategory.ERROR, text)


@dataclass(frozen=True)
class TeacherCreationResult:
    """Outcome of a successful create.

    ``credentials_emailed`` is False when the welcome email failed and the
    flash message discloses the credentials instead.
    """

    teacher: User
    flash: FlashMessage
    credentials_emailed: bool
