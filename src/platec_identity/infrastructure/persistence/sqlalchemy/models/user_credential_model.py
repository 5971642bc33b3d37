"""SQLAlchemy model for password credentials and lockout state."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from platec.infrastructure.persistence.sqlalchemy.models.base import TimestampMixin
from platec_identity.infrastructure.persistence.sqlalchemy.base import IdentityBase


class UserCredentialModel(IdentityBase, TimestampMixin):
    """One bcrypt hash per user, kept apart from the ``users`` row.

    ``failed_login_attempts`` and ``locked_until`` carry the lockout
    policy; both are cleared by a successful login.
    """

    __tablename__ = "user_credentials"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    failed_login_attempts: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )
    locked_until: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"<UserCredentialModel(user_id={self.user_id})>"
