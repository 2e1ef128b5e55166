from __future__ import annotations

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.table import Table

from taxsathi.config import BACKEND_LOCAL, ConfigError, Settings
from taxsathi.db import get_db
from taxsathi.gateway import GatewayError
from taxsathi.gateway.local import LocalGateway
from taxsathi.log import setup_logging

app = typer.Typer(help="Tax Sathi: firm website and staff dashboard")
console = Console()


def _local_settings() -> Settings:
    try:
        settings = Settings.from_env()
    except ConfigError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc
    if settings.backend != BACKEND_LOCAL:
        console.print("[red]This command only works with the local backend.[/red]")
        raise typer.Exit(1)
    return settings


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Host to bind to"),
    port: int = typer.Option(8000, help="Port to bind to"),
    reload: bool = typer.Option(False, help="Enable auto-reload"),
    log_level: str = typer.Option(None, help="Override TAXSATHI_LOG_LEVEL"),
) -> None:
    """Start the Tax Sathi web server."""
    import uvicorn

    try:
        settings = Settings.from_env()
    except ConfigError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc
    level = log_level or settings.log_level
    setup_logging(level)
    uvicorn.run(
        "taxsathi.web:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
        log_config=None,
        log_level=level.lower(),
    )


@app.command("init-db")
def init_db() -> None:
    """Create the local database and storage folders."""
    settings = _local_settings()
    LocalGateway(settings.db_path, settings.storage_dir)
    console.print(f"[green]Database ready at {settings.db_path}[/green]")


@app.command("create-user")
def create_user(
    email: str = typer.Argument(..., help="Staff email address"),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True),
    full_name: str = typer.Option("", help="Name shown in the dashboard greeting"),
) -> None:
    """Register a staff account on the local backend."""
    settings = _local_settings()
    gateway = LocalGateway(settings.db_path, settings.storage_dir)
    try:
        gateway.sign_up(email.strip(), password, full_name.strip())
    except GatewayError as exc:
        console.print(f"[red]Could not create user: {exc}[/red]")
        raise typer.Exit(1) from exc
    console.print(f"[green]Created user {email}[/green]")


@app.command()
def inquiries(
    show_all: bool = typer.Option(False, "--all", help="Include in-progress and responded inquiries"),
) -> None:
    """Show contact inquiries received through the website."""
    settings = _local_settings()
    LocalGateway(settings.db_path, settings.storage_dir)

    query = "SELECT name, email, subject, status, created_at FROM contact_inquiries"
    if not show_all:
        query += " WHERE status = 'new'"
    with get_db(settings.db_path) as db:
        rows = db.execute(query + " ORDER BY created_at DESC").fetchall()

    if not rows:
        console.print("[green]All clear! No new inquiries.[/green]")
        return

    table = Table(title="Contact Inquiries")
    table.add_column("Received", style="yellow")
    table.add_column("Name", style="cyan")
    table.add_column("Email")
    table.add_column("Subject", style="white")
    table.add_column("Status", style="magenta")
    for r in rows:
        table.add_row(r["created_at"][:16].replace("T", " "), r["name"], r["email"], r["subject"] or "—", r["status"])
    console.print(table)
