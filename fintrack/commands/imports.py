"""Import command for loading snapshots from CSV files or pasted text."""

import logging
import sqlite3
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from fintrack.commands.periods import require_database, resolve_month_or_exit, resolve_year_or_exit
from fintrack.domain.errors import SnapshotImportError
from fintrack.domain.imports import months_outside_year, parse_history, parse_single_month, parse_year
from fintrack.domain.models import MonthlySnapshot
from fintrack.domain.numbers import format_cents
from fintrack.store.queries import upsert_snapshots

console = Console()
logger = logging.getLogger(__name__)

IMPORT_SCOPES = ("all", "year", "month")


def read_import_text(source: str) -> str:
    """Read import text from a file path, or from stdin when source is "-".

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the text is not UTF-8.
    """
    if source == "-":
        return sys.stdin.read()
    # utf-8-sig drops the BOM spreadsheet exports often add
    return Path(source).expanduser().read_text(encoding="utf-8-sig")


def render_import_preview(snapshots: list[MonthlySnapshot], title: str) -> None:
    """Render the parsed snapshots before confirmation."""
    table = Table(title=title)
    table.add_column("Month", style="cyan")
    table.add_column("Income", justify="right", style="green")
    table.add_column("Expense", justify="right", style="red")
    table.add_column("Closing balance", justify="right")

    for snapshot in snapshots:
        table.add_row(
            snapshot.month,
            format_cents(snapshot.income_cents),
            format_cents(snapshot.expense_cents),
            format_cents(snapshot.balance_cents),
        )

    console.print(table)


def import_command(
    source: str,
    scope: str = "all",
    month: str | None = None,
    year: str | None = None,
    yes: bool = False,
) -> None:
    """Parse, preview and store snapshots from a file or stdin.

    Args:
        source: CSV file path, or "-" to read pasted text from stdin.
        scope: "all" (whole history), "year" or "month".
        month: Target month for the "month" scope.
        year: Target year for the "year" scope.
        yes: Skip the confirmation prompt.
    """
    if scope not in IMPORT_SCOPES:
        console.print(f"[red]Unknown scope '{scope}' (choose from: {', '.join(IMPORT_SCOPES)})[/red]")
        sys.exit(1)

    # stdin is consumed by the text, so it cannot answer the prompt
    if source == "-" and not yes:
        console.print("[red]Reading from stdin requires --yes[/red]")
        sys.exit(1)

    db_path = require_database()

    try:
        text = read_import_text(source)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Could not read {source}: {e}[/red]", style="bold")
        console.print("[dim]Save the file as UTF-8 and try again[/dim]")
        sys.exit(1)

    source_label = "pasted text" if source == "-" else Path(source).name

    # Parse everything before touching the database
    try:
        if scope == "month":
            target_month = resolve_month_or_exit(month)
            snapshots = parse_single_month(text, target_month)
            scope_label = f"month {target_month}"
        elif scope == "year":
            target_year = resolve_year_or_exit(year)
            snapshots = parse_year(text, target_year)
            scope_label = f"year {target_year}"
            outside = months_outside_year(snapshots, target_year)
            if outside:
                logger.warning("%d row(s) are outside %s: %s", len(outside), target_year, ", ".join(outside))
        else:
            snapshots = parse_history(text)
            scope_label = "all history"
    except SnapshotImportError as e:
        console.print(f"[red]Import failed: {e}[/red]", style="bold")
        sys.exit(1)

    render_import_preview(snapshots, f"{len(snapshots)} month(s) from {source_label} ({scope_label})")

    if not yes and not typer.confirm("Import these months? Existing months will be overwritten", default=True):
        console.print("[dim]Import cancelled[/dim]")
        return

    try:
        written = upsert_snapshots(snapshots, db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Imported {written} month(s)")
