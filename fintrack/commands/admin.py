"""Admin commands for initialization and insight visibility."""

import sqlite3
import sys
from pathlib import Path
from typing import cast

from rich.console import Console

from fintrack.config import (
    VIEWS,
    View,
    create_default_config,
    get_config_path,
    get_locale,
    set_series_visibility,
)
from fintrack.domain.models import SERIES_KEYS, SeriesKey
from fintrack.commands.periods import resolve_db_path_or_exit
from fintrack.store.schema import init_database

console = Console()


def run_full_init(db_path: Path, config_path: Path) -> None:
    """Create the snapshots table and write a fresh config.

    The schema is created with IF NOT EXISTS, so stored months survive a
    forced re-run; only the config is reset.
    """
    init_database(db_path)
    console.print(f"[green]✓[/green] Snapshot store ready at [cyan]{db_path}[/cyan]")

    create_default_config(config_path)
    console.print(f"[green]✓[/green] Default settings written to [cyan]{config_path}[/cyan] (mode 600)")
    console.print(f"[dim]Export locale: {get_locale(config_path)}; all series visible in every view[/dim]")

    console.print("\n[bold green]Ready.[/bold green] Next steps:")
    console.print("  fintrack import history.csv   [dim]load past months[/dim]")
    console.print("  fintrack save --income 1500 --expense 800 --balance 3200   [dim]record this month[/dim]")


def init_command(force: bool = False) -> None:
    """Set up the snapshot store and config, refusing to reset settings unless forced."""
    config_path = get_config_path()
    db_path = resolve_db_path_or_exit()

    existing = [path for path in (db_path, config_path) if path.exists()]
    if existing and not force:
        console.print("[red]fintrack is already set up:[/red]", style="bold")
        for path in existing:
            console.print(f"  {path}")
        console.print("\n[yellow]Run 'fintrack init --force' to reset the config (stored months are kept)[/yellow]")
        sys.exit(1)

    try:
        run_full_init(db_path, config_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Could not write {config_path}: {e}[/red]", style="bold")
        sys.exit(1)


def visibility_command(view: str, key: str, visible: bool) -> None:
    """Show or hide a metric in a view's insights."""
    if view not in VIEWS:
        console.print(f"[red]Unknown view '{view}' (choose from: {', '.join(VIEWS)})[/red]")
        sys.exit(1)
    if key not in SERIES_KEYS:
        console.print(f"[red]Unknown series '{key}' (choose from: {', '.join(SERIES_KEYS)})[/red]")
        sys.exit(1)

    try:
        set_series_visibility(cast(View, view), cast(SeriesKey, key), visible)
    except OSError as e:
        console.print(f"[red]Could not update settings: {e}[/red]", style="bold")
        sys.exit(1)

    state = "shown" if visible else "hidden"
    console.print(f"[green]✓[/green] {key} {state} in {view} insights")
