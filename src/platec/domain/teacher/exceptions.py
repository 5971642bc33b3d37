"""Teacher account exceptions."""

from platec.domain.shared.exceptions import (
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)


class TeacherNotFoundError(EntityNotFoundError):
    """Missing or unknown teacher identifier."""

    def __init__(self, teacher_id: str | None) -> None:
        super().__init__(
            "Teacher not found",
            code=ErrorCode.TEACHER_NOT_FOUND,
            details={"teacher_id": teacher_id},
        )
        self.teacher_id = teacher_id


class TeacherValidationError(ValidationError):
    """The user directory rejected the teacher account.

    ``errors`` carries one message per cause (duplicate email, weak
    password, ...).
    """

    def __init__(self, errors: list[str]) -> None:
        super().__init__("Teacher account is invalid", errors=errors)
