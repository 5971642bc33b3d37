from enum import Enum


class Role(str, Enum):
    """The closed set of roles a user can hold."""

    ADMIN = "Admin"
    TEACHER = "Teacher"
    STUDENT = "Student"
