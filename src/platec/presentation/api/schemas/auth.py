"""Authentication schemas for request/response models."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class LoginRequest(BaseModel):
    """Request schema for user login."""

    email: EmailStr
    password: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "admin@example.com",
                "password": "Admin123!",
            },
        },
    )


class UserResponse(BaseModel):
    """The authenticated user with their roles."""

    id: UUID
    email: str
    roles: list[str]


class CsrfTokenResponse(BaseModel):
    csrf_token: str
    header_name: str = Field(..., description="Header to send the token in")


class AuthResponse(BaseModel):
    """Response schema for a successful login."""

    user: UserResponse
    access_token: str
    token_type: str = Field(default="bearer")
    expires_in: int = Field(..., description="Access token lifetime in seconds")
    csrf_token: str = Field(..., description="Send as X-CSRF-Token on mutations")
