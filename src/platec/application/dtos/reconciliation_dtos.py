"""Data transfer objects for the startup reconciliation."""

from dataclasses import dataclass, field
from uuid import UUID

from platec_identity import Role


@dataclass(frozen=True)
class AdminSeed:
    """The default administrator account ensured at startup."""

    email: str
    password: str
    first_name: str = "Admin"
    last_name: str = "User"


@dataclass
class ReconciliationReport:
    """What a reconciliation run changed."""

    roles_created: list[Role] = field(default_factory=list)
    admin_created: bool = False
    backfilled: dict[UUID, Role] = field(default_factory=dict)

    @property
    def changed(self) -> bool:
        return bool(self.roles_created or self.admin_created or self.backfilled)
