"""Student record.

Only the link to the owning user account is modelled here; the record's
existence is what classifies an account as a student.
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from platec.domain.shared.time import utc_now


@dataclass(frozen=True)
class Student:
    """A student row referencing a user account."""

    user_id: UUID
    student_number: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utc_now)
