"""Teacher management schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from platec.presentation.api.schemas.common import FlashRedirectResponse


class TeacherCreateRequest(BaseModel):
    """Registration form for a new teacher account."""

    email: EmailStr = Field(..., description="Login email, also the username")
    password: str = Field(..., description="Initial password, emailed to the teacher")
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "t1@example.com",
                "password": "1234",
                "first_name": "Ada",
                "last_name": "Byron",
            },
        },
    )


class TeacherUpdateRequest(BaseModel):
    """Editable teacher fields. Passwords cannot be changed here."""

    email: EmailStr
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)


class TeacherFormResponse(BaseModel):
    """Form model for the create and edit views. Never carries a password."""

    email: str = ""
    first_name: str = ""
    last_name: str = ""


class TeacherResponse(BaseModel):
    """A teacher account."""

    id: UUID
    email: str
    user_name: str
    first_name: str
    last_name: str
    full_name: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TeacherCreatedResponse(FlashRedirectResponse):
    teacher: TeacherResponse
    credentials_emailed: bool
