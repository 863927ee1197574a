"""
Storefront back-office CLI.

Command-line access to database setup and the visibility cascades.
"""

import sys
import time
from pathlib import Path

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent))

import httpx
import typer
from rich.console import Console
from rich.table import Table

from rest_api.models import Base
from rest_api.seed import seed
from rest_api.services.domain import VisibilityCascadeService
from shared.config.settings import settings
from shared.infrastructure.db import engine, get_db_context
from shared.utils.exceptions import AppException

app = typer.Typer(
    name="storefront",
    help="Storefront back-office CLI",
    add_completion=False,
)
console = Console()

CLI_AUDIT_EMAIL = "cli@system"


def _counts_table(title: str, rows: list[tuple[str, object]]) -> Table:
    table = Table(title=title)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    for name, value in rows:
        table.add_row(name, str(value))
    return table


# =============================================================================
# Database Commands
# =============================================================================

@app.command()
def db_init():
    """Create all tables."""
    Base.metadata.create_all(bind=engine)
    console.print("[green]✓ Tables created/verified[/green]")


@app.command()
def db_seed(
    force: bool = typer.Option(False, "--force", "-f", help="Allow seeding production"),
):
    """Seed the admin account and the sample catalog."""
    console.print(f"[blue]Seeding database for: {settings.environment}[/blue]")

    if settings.environment == "production" and not force:
        console.print("[red]Cannot seed production without --force[/red]")
        raise typer.Exit(1)

    Base.metadata.create_all(bind=engine)
    with get_db_context() as db:
        seed(db)
    console.print("[green]✓ Seeding complete[/green]")


# =============================================================================
# Cascade Commands
# =============================================================================

@app.command()
def category_visibility(
    category_id: int = typer.Argument(..., help="Category ID"),
    hide: bool = typer.Option(False, "--hide", help="Hide instead of show"),
    no_cascade: bool = typer.Option(False, "--no-cascade", help="Leave subcategories alone"),
):
    """Show or hide a category and propagate to its dependents."""
    with get_db_context() as db:
        try:
            result = VisibilityCascadeService(db).cascade_category_visibility(
                category_id,
                not hide,
                cascade=not no_cascade,
                user_email=CLI_AUDIT_EMAIL,
            )
        except AppException as e:
            console.print(f"[red]✗ {e.detail}[/red]")
            raise typer.Exit(1)

        console.print(_counts_table(
            f"Category {category_id}",
            [
                ("Active", result.category.is_active),
                ("Subcategories updated", result.subcategories_updated),
                ("Products updated", result.products_updated),
                ("Cascaded", result.cascaded),
            ],
        ))


@app.command()
def supplier_deactivate(
    supplier_id: int = typer.Argument(..., help="Supplier ID"),
):
    """Deactivate a supplier with all of its catalogs and products."""
    with get_db_context() as db:
        try:
            result = VisibilityCascadeService(db).cascade_supplier_deactivation(
                supplier_id, user_email=CLI_AUDIT_EMAIL
            )
        except AppException as e:
            console.print(f"[red]✗ {e.detail}[/red]")
            raise typer.Exit(1)

        console.print(_counts_table(
            f"Supplier {supplier_id}",
            [
                ("Catalogs updated", result.catalogs_updated),
                ("Products updated", result.products_updated),
            ],
        ))


# =============================================================================
# Health Commands
# =============================================================================

@app.command()
def health(
    url: str = typer.Option(
        f"http://localhost:{settings.rest_api_port}/api/health", help="Health endpoint"
    ),
):
    """Check the running API."""
    table = Table(title="Service Health")
    table.add_column("Service", style="cyan")
    table.add_column("Status", style="green")
    table.add_column("Response Time", style="yellow")

    start = time.time()
    try:
        response = httpx.get(url, timeout=5.0)
    except httpx.HTTPError as e:
        table.add_row("REST API", f"✗ {type(e).__name__}", "-")
        console.print(table)
        raise typer.Exit(1)

    elapsed = (time.time() - start) * 1000
    if response.status_code == 200:
        table.add_row("REST API", "✓ Healthy", f"{elapsed:.0f}ms")
    else:
        table.add_row("REST API", f"✗ Status {response.status_code}", f"{elapsed:.0f}ms")
    console.print(table)

    if response.status_code != 200:
        raise typer.Exit(1)


@app.command()
def version():
    """Show version information."""
    table = Table(title="Storefront Version")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")

    table.add_row("API", "1.0.0")
    table.add_row("Python", sys.version.split()[0])

    console.print(table)


if __name__ == "__main__":
    app()
