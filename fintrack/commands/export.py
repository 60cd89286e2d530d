"""Export command for writing stored snapshots as CSV or SQL."""

import sqlite3
import sys
from pathlib import Path

from rich.console import Console

from fintrack.commands.periods import require_database
from fintrack.config import get_locale
from fintrack.domain.export import build_csv_export, build_sql_dump
from fintrack.store.queries import list_snapshots
from fintrack.store.schema import SNAPSHOTS_SCHEMA

console = Console()

EXPORT_FORMATS = ("csv", "sql")


def export_command(export_format: str, output: str | None = None) -> None:
    """Export every stored month to a file or stdout.

    Args:
        export_format: "csv" or "sql".
        output: Output file path. If None, writes to stdout.
    """
    if export_format not in EXPORT_FORMATS:
        console.print(f"[red]Unknown format '{export_format}' (choose from: {', '.join(EXPORT_FORMATS)})[/red]")
        sys.exit(1)

    db_path = require_database()

    try:
        snapshots = list_snapshots(db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if export_format == "csv":
        content = build_csv_export(snapshots, get_locale())
    else:
        content = build_sql_dump(snapshots, SNAPSHOTS_SCHEMA)

    if output is None:
        sys.stdout.write(content + "\n")
        return

    output_path = Path(output).expanduser()
    try:
        output_path.write_text(content + "\n", encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Export failed: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Exported {len(snapshots)} month(s) to {output_path}")
