"""Plain data passed between identity services and the API layer."""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID


@dataclass(frozen=True)
class TokenPayload:
    """Claims of a verified access token.

    Roles are not part of the token; they are looked up per request so
    that a role change takes effect immediately.
    """

    user_id: UUID
    email: str
    issued_at: datetime
    expires_at: datetime

    @property
    def seconds_left(self) -> int:
        remaining = self.expires_at - datetime.now(tz=timezone.utc)
        return max(0, int(remaining.total_seconds()))
