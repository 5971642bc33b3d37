from platec.domain.teacher.exceptions import (
    TeacherNotFoundError,
    TeacherValidationError,
)

__all__ = ["TeacherNotFoundError", "TeacherValidationError"]
