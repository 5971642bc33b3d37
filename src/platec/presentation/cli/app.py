"""platec CLI application using Typer.

Command-line utilities for operating the platec backend: secret
generation, database initialisation, baseline seeding and serving the API.
"""

import asyncio
import secrets

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from platec.application.dtos import ReconciliationReport
from platec.application.exceptions import StartupReconciliationError
from platec.infrastructure.persistence.sqlalchemy.init_db import (
    create_engine,
    create_session_maker,
    create_tables,
    reconcile_baseline,
)
from platec_config.settings import get_settings

app = typer.Typer(
    name="platec",
    help="ProjectPlatec - school administration CLI",
    no_args_is_help=True,
)
console = Console()


secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
app.add_typer(secrets_app)

db_app = typer.Typer(
    name="db",
    help="Database schema and baseline data",
    no_args_is_help=True,
)
app.add_typer(db_app)


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for platec configuration.

    Copy the output to your .env file.
    """
    console.print("\n[bold green]platec Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n"
    )

    # 64 bytes for a strong HS256 key
    console.print(
        f"[cyan]JWT_SECRET_KEY[/cyan]={secrets.token_urlsafe(64)}",
        soft_wrap=True,
    )
    console.print(
        f"[cyan]POSTGRES_PASSWORD[/cyan]={secrets.token_urlsafe(32)}",
        soft_wrap=True,
    )
    console.print(
        f"[cyan]SEED_ADMIN_PASSWORD[/cyan]={secrets.token_urlsafe(16)}",
        soft_wrap=True,
    )

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep these secrets secure and never commit them "
        "to version control![/yellow]"
    )


async def _init_schema() -> None:
    settings = get_settings()
    engine = create_engine(settings.database_url)
    try:
        await create_tables(engine)
    finally:
        await engine.dispose()


async def _seed() -> ReconciliationReport:
    settings = get_settings()
    engine = create_engine(settings.database_url)
    try:
        await create_tables(engine)
        return await reconcile_baseline(create_session_maker(engine), settings)
    finally:
        await engine.dispose()


def _print_report(report: ReconciliationReport) -> None:
    if not report.changed:
        console.print("[green]Nothing to do, baseline already in place.[/green]")
        return

    table = Table(title="Baseline reconciliation")
    table.add_column("Change")
    table.add_column("Subject")
    for role in report.roles_created:
        table.add_row("role created", role.value)
    if report.admin_created:
        table.add_row("admin seeded", get_settings().seed_admin_email)
    for user_id, role in report.backfilled.items():
        table.add_row(f"assigned {role.value}", str(user_id))
    console.print(table)


@db_app.command("init")
def db_init() -> None:
    """Create missing database tables."""
    asyncio.run(_init_schema())
    console.print("[green]Database schema is up to date.[/green]")


@db_app.command("seed")
def db_seed() -> None:
    """Ensure roles and the admin account exist and backfill missing roles."""
    try:
        report = asyncio.run(_seed())
    except StartupReconciliationError as e:
        console.print(f"[red]Reconciliation failed:[/red] {e.message}", soft_wrap=True)
        raise typer.Exit(code=1) from e

    _print_report(report)


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, help="Bind address (default: API_HOST)"),
    port: int | None = typer.Option(None, help="Port (default: API_PORT)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "platec.presentation.api.app:create_app",
        factory=True,
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
