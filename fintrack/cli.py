"""CLI entry point for fintrack."""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from fintrack.commands.admin import init_command, visibility_command
from fintrack.commands.export import export_command
from fintrack.commands.imports import import_command
from fintrack.commands.report import history_command, month_command, year_command
from fintrack.commands.snapshots import delete_command, save_command

app = typer.Typer(
    name="fintrack",
    help="Monthly income, expense and closing balance tracker",
    add_completion=False,
)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)],
        force=True,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Monthly income, expense and closing balance tracker."""
    configure_logging(verbose)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Initialize fintrack database and configuration."""
    init_command(force)


@app.command()
def save(
    income: str = typer.Option(..., "--income", help="Income for the month (e.g., 1500,00)"),
    expense: str = typer.Option(..., "--expense", help="Expense for the month"),
    balance: str = typer.Option(..., "--balance", help="Closing balance at month end"),
    month: str = typer.Option(None, "--month", help="Month to save (YYYY-MM, default: current month)"),
) -> None:
    """Save a month's income, expense and closing balance."""
    save_command(month, income, expense, balance)


@app.command(name="import")
def import_snapshots(
    source: str = typer.Argument(..., help="CSV file path, or '-' to read pasted text from stdin"),
    scope: str = typer.Option("all", "--scope", help="What the data covers: 'all', 'year' or 'month'"),
    month: str = typer.Option(None, "--month", help="Target month for --scope month (default: current month)"),
    year: str = typer.Option(None, "--year", help="Target year for --scope year (default: current year)"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Import without confirmation"),
) -> None:
    """Import monthly snapshots from a CSV file or pasted text."""
    import_command(source, scope, month, year, yes)


@app.command()
def month(
    month: str = typer.Option(None, "--month", help="Month to show (YYYY-MM, default: current month)"),
) -> None:
    """Show a month's totals and insights."""
    month_command(month)


@app.command()
def year(
    year: str = typer.Option(None, "--year", help="Year to show (YYYY, default: current year)"),
    sort: str = typer.Option("month", help="Sort by 'month', 'income', 'expense', 'balance' or 'benefit'"),
    desc: bool = typer.Option(False, "--desc", help="Sort descending"),
) -> None:
    """Show every month of a year with totals, trends and insights."""
    year_command(year, sort, desc)


@app.command()
def history(
    sort: str = typer.Option("year", help="Sort by 'year', 'income', 'expense', 'balance' or 'benefit'"),
    desc: bool = typer.Option(False, "--desc", help="Sort descending"),
) -> None:
    """Show one row per year with trends and insights."""
    history_command(sort, desc)


@app.command()
def delete(
    month: str = typer.Option(None, "--month", help="Delete one month (YYYY-MM)"),
    year: str = typer.Option(None, "--year", help="Delete every month of a year (YYYY)"),
    all: bool = typer.Option(False, "--all", "-a", help="Delete all stored data"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Delete without confirmation"),
) -> None:
    """Delete stored months."""
    delete_command(month, year, all, yes)


@app.command()
def export(
    export_format: str = typer.Argument("csv", help="Export format: 'csv' or 'sql'"),
    output: str = typer.Option(None, "--output", "-o", help="Output file (default: stdout)"),
) -> None:
    """Export every stored month as CSV or SQL."""
    export_command(export_format, output)


@app.command()
def visibility(
    view: str = typer.Argument(..., help="View: 'month', 'year' or 'all'"),
    key: str = typer.Argument(..., help="Series: 'income', 'expense', 'balance' or 'benefit'"),
    show: bool = typer.Option(True, "--show/--hide", help="Show or hide the series in insights"),
) -> None:
    """Show or hide a series in a view's insights."""
    visibility_command(view, key, show)


if __name__ == "__main__":
    app()
