"""Database engine, schema and baseline reconciliation utilities."""

import logging
from pathlib import Path

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

# Import models to register with Base.metadata
import platec.infrastructure.persistence.sqlalchemy.models  # noqa: F401
import platec_identity.infrastructure.persistence.sqlalchemy.models  # noqa: F401
from platec.application.dtos import AdminSeed, ReconciliationReport
from platec.application.services import StartupReconciler
from platec.infrastructure.persistence.sqlalchemy.models.base import Base
from platec.infrastructure.persistence.sqlalchemy.repositories import (
    StudentRepositorySQLAlchemy,
)
from platec_config.settings import Settings
from platec_identity.infrastructure.persistence.sqlalchemy import (
    UserCredentialRepositorySQLAlchemy,
    UserDirectorySQLAlchemy,
)
from platec_identity.services import PasswordHashingService

logger = logging.getLogger(__name__)


def enable_sqlite_savepoints(engine: AsyncEngine) -> AsyncEngine:
    """Let SQLAlchemy emit BEGIN itself so SAVEPOINTs nest on SQLite.

    The sqlite3 driver delays BEGIN until the first write, which makes a
    SAVEPOINT open (and its RELEASE commit) the outer transaction.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


def create_engine(database_url: str) -> AsyncEngine:
    """Create the async engine, making sure a SQLite file's directory exists."""
    if not database_url.startswith("sqlite"):
        return create_async_engine(database_url, echo=False, pool_pre_ping=True)

    if ":memory:" not in database_url:
        db_path = database_url.split("///")[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return enable_sqlite_savepoints(
        create_async_engine(database_url, echo=False, pool_pre_ping=True),
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create all database tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Existing tables and their data are never modified or deleted.
    """
    logger.info("Ensuring all database tables exist...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database schema is up to date (missing tables created if needed)")


def build_user_directory(
    session: AsyncSession,
    settings: Settings,
) -> UserDirectorySQLAlchemy:
    """Wire the SQLAlchemy user directory with the configured identity policy."""
    password_service = PasswordHashingService(
        rounds=settings.password_hash_rounds,
        min_length=settings.password_min_length,
        max_length=settings.password_max_length,
    )
    credential_repo = UserCredentialRepositorySQLAlchemy(
        session,
        max_failed_attempts=settings.lockout_max_failed_attempts,
        lockout_duration_minutes=settings.lockout_duration_minutes,
    )
    return UserDirectorySQLAlchemy(
        session,
        password_service=password_service,
        credential_repository=credential_repo,
        allowed_user_name_characters=settings.allowed_username_characters,
    )


async def reconcile_baseline(
    session_maker: async_sessionmaker[AsyncSession],
    settings: Settings,
) -> ReconciliationReport:
    """
    Run the startup reconciliation in its own session.

    Commits when every step succeeded, rolls back and re-raises otherwise.

    Raises
    ------
    StartupReconciliationError
        If any role, the seed admin or a role backfill could not be created.
    """
    admin_seed = AdminSeed(
        email=settings.seed_admin_email,
        password=settings.seed_admin_password.get_secret_value(),
        first_name=settings.seed_admin_first_name,
        last_name=settings.seed_admin_last_name,
    )

    async with session_maker() as session:
        reconciler = StartupReconciler(
            user_directory=build_user_directory(session, settings),
            student_repository=StudentRepositorySQLAlchemy(session),
            admin_seed=admin_seed,
        )
        try:
            report = await reconciler.run()
        except Exception:
            await session.rollback()
            raise
        await session.commit()

    return report
