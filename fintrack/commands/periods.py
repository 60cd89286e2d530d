"""Shared period and database helpers for commands."""

import sys
import tomllib
from pathlib import Path

import pandas as pd
from rich.console import Console
from rich.markup import escape

from fintrack.config import get_config_path
from fintrack.dates import current_month, current_year
from fintrack.domain.models import Month, Year
from fintrack.store.schema import database_exists, get_db_path

console = Console()


def normalize_month_option(raw_month: str | None) -> Month:
    """Normalize a --month option to YYYY-MM.

    Uses pandas.to_datetime so "2025-03", "15/03/2025" and "March 2025"
    are all accepted. Defaults to the current month.

    Args:
        raw_month: Raw option value, or None.

    Returns:
        Month in YYYY-MM format.

    Raises:
        ValueError: If the value cannot be parsed.
    """
    if not raw_month:
        return current_month()
    try:
        parsed = pd.to_datetime(raw_month, dayfirst=True)
        return Month(parsed.strftime("%Y-%m"))
    except (ValueError, pd.errors.ParserError) as e:
        raise ValueError(f"Could not parse month '{raw_month}': {e}") from e


def normalize_year_option(raw_year: str | None) -> Year:
    """Normalize a --year option to YYYY, defaulting to the current year.

    Raises:
        ValueError: If the value is not a four-digit year.
    """
    if not raw_year:
        return current_year()
    year = raw_year.strip()
    if len(year) != 4 or not year.isdigit():
        raise ValueError(f"Invalid year '{raw_year}' (expected YYYY)")
    return Year(year)


def resolve_month_or_exit(raw_month: str | None) -> Month:
    try:
        return normalize_month_option(raw_month)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        console.print("[dim]Accepted formats: YYYY-MM, MM/YYYY, DD/MM/YYYY, March 2025, etc.[/dim]")
        sys.exit(1)


def resolve_year_or_exit(raw_year: str | None) -> Year:
    try:
        return normalize_year_option(raw_year)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


def resolve_db_path_or_exit() -> Path:
    """Get the database path, exiting if the config file cannot be parsed."""
    try:
        return get_db_path()
    except tomllib.TOMLDecodeError as e:
        console.print(f"[red]Invalid config file {get_config_path()}: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)


def require_database() -> Path:
    """Get the database path, exiting if it has not been initialized."""
    db_path = resolve_db_path_or_exit()
    if not database_exists(db_path):
        console.print("[red]Database not found. Run 'fintrack init' first.[/red]", style="bold")
        sys.exit(1)
    return db_path
