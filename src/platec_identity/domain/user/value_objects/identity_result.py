"""Outcome of a user directory write."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class IdentityError:
    """A single named failure cause reported by the user directory."""

    code: str
    description: str


@dataclass(frozen=True)
class IdentityResult:
    """Pass/fail result of a directory operation with its error causes."""

    succeeded: bool
    errors: tuple[IdentityError, ...] = field(default_factory=tuple)

    @classmethod
    def success(cls) -> IdentityResult:
        return cls(succeeded=True)

    @classmethod
    def failed(cls, *errors: IdentityError) -> IdentityResult:
        return cls(succeeded=False, errors=tuple(errors))

    @property
    def descriptions(self) -> list[str]:
        return [error.description for error in self.errors]

    def has_error(self, code: str) -> bool:
        return any(error.code == code for error in self.errors)
