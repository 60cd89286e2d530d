"""Snapshot management commands (save, delete)."""

import sqlite3
import sys

import typer
from rich.console import Console

from fintrack.commands.periods import require_database, resolve_month_or_exit, resolve_year_or_exit
from fintrack.domain.errors import InvalidEntryError
from fintrack.domain.imports import validate_manual_entry
from fintrack.domain.numbers import format_cents
from fintrack.store.queries import delete_all, delete_snapshot, delete_year, get_snapshot, upsert_snapshot

console = Console()


def save_command(
    month: str | None,
    income: str,
    expense: str,
    balance: str,
) -> None:
    """Save one month's totals, overwriting any existing entry.

    Args:
        month: Month to save (YYYY-MM, MM/YYYY, etc.). Defaults to the current month.
        income: Income for the month (e.g., "1500,00").
        expense: Expense for the month.
        balance: Closing balance at month end (may be negative).
    """
    db_path = require_database()
    target_month = resolve_month_or_exit(month)

    try:
        snapshot = validate_manual_entry(target_month, income, expense, balance)
    except InvalidEntryError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    try:
        existing = get_snapshot(target_month, db_path)
        upsert_snapshot(snapshot, db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    action = "Updated" if existing else "Saved"
    console.print(f"[green]✓[/green] {action} {target_month}:")
    console.print(f"  Income: {format_cents(snapshot.income_cents)}")
    console.print(f"  Expense: {format_cents(snapshot.expense_cents)}")
    console.print(f"  Closing balance: {format_cents(snapshot.balance_cents)}")


def delete_command(
    month: str | None = None,
    year: str | None = None,
    all: bool = False,
    yes: bool = False,
) -> None:
    """Delete one month, one year, or every stored snapshot."""
    chosen = sum(1 for option in (month, year) if option) + (1 if all else 0)
    if chosen != 1:
        console.print("[red]Choose exactly one of --month, --year or --all[/red]")
        sys.exit(1)

    db_path = require_database()

    try:
        if month:
            target_month = resolve_month_or_exit(month)
            if not yes and not typer.confirm(f"Delete the data for {target_month}?", default=False):
                console.print("[dim]Cancelled[/dim]")
                return
            deleted = delete_snapshot(target_month, db_path)
            label = target_month
        elif year:
            target_year = resolve_year_or_exit(year)
            if not yes and not typer.confirm(f"Delete every month of {target_year}?", default=False):
                console.print("[dim]Cancelled[/dim]")
                return
            deleted = delete_year(target_year, db_path)
            label = target_year
        else:
            if not yes and not typer.confirm("Delete ALL stored data?", default=False):
                console.print("[dim]Cancelled[/dim]")
                return
            deleted = delete_all(db_path)
            label = "all data"
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if deleted:
        console.print(f"[green]✓[/green] Deleted {label} ({deleted} month(s))")
    else:
        console.print(f"[yellow]Nothing stored for {label}[/yellow]")
