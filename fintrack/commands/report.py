"""Month, year and history report commands."""

import sqlite3
import sys
from typing import cast

from rich.console import Console
from rich.table import Table

from fintrack.commands.periods import require_database, resolve_month_or_exit, resolve_year_or_exit
from fintrack.config import get_visible_series
from fintrack.dates import current_month, month_label, month_range, shift_month
from fintrack.domain.insights import InsightsReport, history_insights, month_insights, year_insights
from fintrack.domain.models import Money
from fintrack.domain.numbers import format_cents
from fintrack.domain.series import (
    build_all_years_points,
    available_years,
    build_year_series,
    compute_year_totals,
    empty_point,
    has_series_data,
    previous_december_balance,
    to_series_point,
)
from fintrack.domain.sorting import SortDirection, SortKey, sort_points
from fintrack.domain.trends import BalanceTrend, all_years_trends, classify_trend, year_trends
from fintrack.store.queries import list_snapshots

console = Console()

COMPARISON_LABELS = {
    "previous_month": "vs previous month",
    "previous_year": "vs same month last year",
    "previous_year_total": "vs previous year",
    "latest_vs_previous_year": "Latest year vs the year before",
}

SERIES_LABELS = {
    "income": "Income",
    "expense": "Expense",
    "balance": "Closing balance",
    "benefit": "Benefit",
}


def format_trend(trend: BalanceTrend) -> str:
    if trend == "up":
        return "[green]▲[/green]"
    if trend == "down":
        return "[red]▼[/red]"
    return "[dim]=[/dim]"


def format_benefit(amount: Money) -> str:
    color = "red" if amount < 0 else "green"
    return f"[{color}]{format_cents(amount)}[/{color}]"


def format_percent(percent: float | None) -> str:
    if percent is None:
        return "[dim]n/a[/dim]"
    color = "green" if percent >= 0 else "red"
    return f"[{color}]{percent:+.1f}%[/{color}]"


def render_insights(report: InsightsReport) -> None:
    """Render every comparison slot, including empty ones."""
    console.print("\n[bold cyan]Insights[/bold cyan]")

    for comparison in report.comparisons:
        label = COMPARISON_LABELS.get(comparison.key, comparison.key)
        if not comparison.has_data:
            console.print(f"  [bold]{label}:[/bold] [dim]no data to compare[/dim]")
            continue

        table = Table(title=label, title_justify="left")
        table.add_column("Metric")
        table.add_column("Current", justify="right")
        table.add_column("Previous", justify="right")
        table.add_column("Change", justify="right")
        table.add_column("%", justify="right")
        for delta in comparison.deltas:
            table.add_row(
                SERIES_LABELS[delta.key],
                format_cents(delta.current_cents),
                format_cents(delta.previous_cents),
                format_cents(delta.delta_cents, include_sign=True),
                format_percent(delta.percent_change),
            )
        console.print(table)


def parse_sort_direction(desc: bool) -> SortDirection:
    return "desc" if desc else "asc"


def month_command(month: str | None = None) -> None:
    """Show one month's totals and how they compare."""
    db_path = require_database()
    target_month = resolve_month_or_exit(month)

    try:
        snapshots = list_snapshots(db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    _, _, label = month_range(target_month)
    console.print(f"[bold cyan]{label}[/bold cyan]\n")

    stored = next((s for s in snapshots if s.month == target_month), None)
    if stored is None:
        console.print("[yellow]No data saved for this month[/yellow]")
        if target_month == current_month():
            return
        point = empty_point(target_month)
    else:
        point = to_series_point(stored)

    previous = next((s for s in snapshots if s.month == shift_month(target_month, -1)), None)
    trend = classify_trend(point.balance_cents, previous.balance_cents if previous else Money(0))

    console.print(f"  [bold]Income:[/bold] [green]{format_cents(point.income_cents)}[/green]")
    console.print(f"  [bold]Expense:[/bold] [red]{format_cents(point.expense_cents)}[/red]")
    console.print(f"  [bold]Benefit:[/bold] {format_benefit(point.benefit_cents)}")
    console.print(f"  [bold]Closing balance:[/bold] {format_cents(point.balance_cents)} {format_trend(trend)}")

    report = month_insights(target_month, point, snapshots, get_visible_series("month"))
    render_insights(report)


def year_command(year: str | None = None, sort: str = "month", desc: bool = False) -> None:
    """Show the twelve months of a year with totals and trends."""
    db_path = require_database()
    target_year = resolve_year_or_exit(year)

    try:
        snapshots = list_snapshots(db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    series = build_year_series(target_year, snapshots)
    if not has_series_data(series):
        console.print(f"[yellow]No data for {target_year}[/yellow]")
        years = available_years(snapshots)
        if years:
            console.print(f"[dim]Years with data: {', '.join(years)}[/dim]")
        return

    trends = year_trends(series, previous_december_balance(target_year, snapshots))
    try:
        rows = sort_points(series, cast(SortKey, sort), parse_sort_direction(desc))
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    table = Table(title=f"{target_year}")
    table.add_column("Month", style="cyan")
    table.add_column("Income", justify="right", style="green")
    table.add_column("Expense", justify="right", style="red")
    table.add_column("Benefit", justify="right")
    table.add_column("Closing balance", justify="right")
    table.add_column("", justify="center")

    for point in rows:
        table.add_row(
            f"{month_label(point.month)} ({point.month})",
            format_cents(point.income_cents),
            format_cents(point.expense_cents),
            format_benefit(point.benefit_cents),
            format_cents(point.balance_cents),
            format_trend(trends[point.month]),
        )

    totals = compute_year_totals(series)
    table.add_section()
    table.add_row(
        "[bold]Total[/bold]",
        format_cents(totals.income_cents),
        format_cents(totals.expense_cents),
        format_benefit(totals.benefit_cents),
        format_cents(totals.balance_cents),
        "",
    )
    console.print(table)

    report = year_insights(target_year, totals, build_all_years_points(snapshots), get_visible_series("year"))
    render_insights(report)


def history_command(sort: str = "year", desc: bool = False) -> None:
    """Show one row per stored year with trends."""
    db_path = require_database()

    try:
        snapshots = list_snapshots(db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    points = build_all_years_points(snapshots)
    if not has_series_data(points):
        console.print("[yellow]No data stored yet[/yellow]")
        return

    trends = all_years_trends(points)
    try:
        rows = sort_points(points, cast(SortKey, sort), parse_sort_direction(desc))
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    table = Table(title="All years")
    table.add_column("Year", style="cyan")
    table.add_column("Income", justify="right", style="green")
    table.add_column("Expense", justify="right", style="red")
    table.add_column("Benefit", justify="right")
    table.add_column("Closing balance", justify="right")
    table.add_column("", justify="center")

    for point in rows:
        table.add_row(
            point.year,
            format_cents(point.income_cents),
            format_cents(point.expense_cents),
            format_benefit(point.benefit_cents),
            format_cents(point.balance_cents),
            format_trend(trends[point.year]),
        )
    console.print(table)

    report = history_insights(points, get_visible_series("all"))
    render_insights(report)
