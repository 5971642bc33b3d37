"""One-shot baseline reconciliation run before the app serves requests."""

import logging

from platec.application.dtos import AdminSeed, ReconciliationReport
from platec.application.exceptions import StartupReconciliationError
from platec.domain.student import StudentRepository
from platec_identity import Role, User, UserDirectory

logger = logging.getLogger(__name__)


class StartupReconciler:
    """Bring the user directory into its baseline state.

    Runs three ordered steps:

    1. create any missing role of the closed ``Role`` set,
    2. seed the administrator account if its email is unknown,
    3. give every user without a role either ``Student`` (when a student
       record references it) or ``Teacher``.

    Each step runs even when an earlier one failed. All failures are
    reported together as a single ``StartupReconciliationError``.
    Not safe to run twice concurrently.
    """

    def __init__(
        self,
        user_directory: UserDirectory,
        student_repository: StudentRepository,
        admin_seed: AdminSeed,
    ):
        self._directory = user_directory
        self._students = student_repository
        self._admin_seed = admin_seed

    async def run(self) -> ReconciliationReport:
        report = ReconciliationReport()
        failures: list[str] = []
        first_error: Exception | None = None

        for step in (self._ensure_roles, self._seed_admin, self._backfill_roles):
            try:
                failures += await step(report)
            except Exception as e:
                logger.exception("Reconciliation step %s crashed", step.__name__)
                failures.append(f"{step.__name__.lstrip('_')}: {e}")
                first_error = first_error or e

        if failures:
            raise StartupReconciliationError(failures) from first_error

        logger.info(
            "Startup reconciliation done (roles created: %d, admin created: %s, "
            "users backfilled: %d)",
            len(report.roles_created),
            report.admin_created,
            len(report.backfilled),
        )
        return report

    async def _ensure_roles(self, report: ReconciliationReport) -> list[str]:
        failures = []
        for role in Role:
            if await self._directory.role_exists(role):
                continue

            result = await self._directory.create_role(role)
            if result.succeeded:
                report.roles_created.append(role)
                logger.info("Created missing role %s", role.value)
            else:
                failures.append(
                    f"create role {role.value}: " + "; ".join(result.descriptions)
                )
        return failures

    async def _seed_admin(self, report: ReconciliationReport) -> list[str]:
        seed = self._admin_seed
        existing = await self._directory.find_by_email(seed.email)
        if existing is not None:
            # Existing seed accounts are left as they are
            roles = await self._directory.get_roles(existing)
            if Role.ADMIN not in roles:
                logger.warning(
                    "Seed admin %s exists but does not hold the Admin role",
                    seed.email,
                )
            return []

        admin = User.create(
            email=seed.email,
            first_name=seed.first_name,
            last_name=seed.last_name,
        )
        result = await self._directory.create(admin, seed.password)
        if not result.succeeded:
            return ["seed admin: " + "; ".join(result.descriptions)]

        report.admin_created = True
        logger.info("Seeded admin account %s", seed.email)

        role_result = await self._directory.add_to_role(admin, Role.ADMIN)
        if not role_result.succeeded:
            return ["seed admin role: " + "; ".join(role_result.descriptions)]
        return []

    async def _backfill_roles(self, report: ReconciliationReport) -> list[str]:
        failures = []
        for user in await self._directory.list_all():
            if await self._directory.get_roles(user):
                continue

            is_student = await self._students.exists_for_user(user.id)
            role = Role.STUDENT if is_student else Role.TEACHER

            result = await self._directory.add_to_role(user, role)
            if result.succeeded:
                report.backfilled[user.id] = role
                logger.info("Assigned default role %s to %s", role.value, user.email)
            else:
                failures.append(
                    f"backfill {user.email}: " + "; ".join(result.descriptions)
                )
        return failures
