"""Common schemas shared across API endpoints."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field


def _utc_now() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(UTC)


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    detail: str = Field(..., description="Error message")
    code: str | None = Field(None, description="Error code for programmatic handling")
    errors: list[str] | None = Field(
        None,
        description="One message per validation failure cause",
    )
    timestamp: datetime = Field(
        default_factory=_utc_now,
        description="When the error occurred",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"detail": "Teacher not found", "code": "TEACHER_NOT_FOUND"},
        },
    )


class FlashRedirectResponse(BaseModel):
    """Outcome of a mutating operation: where to go next and what to show.

    ``message`` and ``category`` are empty when there is nothing to report.
    """

    message: str | None = None
    category: str | None = Field(None, description="success or error")
    redirect_to: str = Field(..., description="Path of the view to show next")


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    api_versions: list[str]
