from platec.presentation.api.schemas.auth import (
    AuthResponse,
    CsrfTokenResponse,
    LoginRequest,
    UserResponse,
)
from platec.presentation.api.schemas.common import (
    ErrorResponse,
    HealthResponse,
    FlashRedirectResponse,
)
from platec.presentation.api.schemas.teachers import (
    TeacherCreatedResponse,
    TeacherCreateRequest,
    TeacherFormResponse,
    TeacherResponse,
    TeacherUpdateRequest,
)

__all__ = [
    "AuthResponse",
    "CsrfTokenResponse",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "FlashRedirectResponse",
    "TeacherCreateRequest",
    "TeacherCreatedResponse",
    "TeacherFormResponse",
    "TeacherResponse",
    "TeacherUpdateRequest",
]
