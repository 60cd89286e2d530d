"""Pure functions for deriving month, year and all-time series.

Income, expense and benefit are flow quantities and are summed over a
period. Balance is a point-in-time quantity and is taken from the latest
month of a period, never summed.

Stored snapshots are assumed valid; missing amounts are read as zero.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from fintrack.dates import format_month_value, shift_year
from fintrack.domain.models import AllYearsPoint, Money, Month, MonthlySnapshot, SeriesPoint, Year, YearTotals


def _cents(value: int | None) -> Money:
    return Money(value or 0)


def to_series_point(snapshot: MonthlySnapshot) -> SeriesPoint:
    """Attach the derived benefit to a stored snapshot.

    Args:
        snapshot: Stored snapshot.

    Returns:
        SeriesPoint with benefit = income - expense.
    """
    income = _cents(snapshot.income_cents)
    expense = _cents(snapshot.expense_cents)
    return SeriesPoint(
        month=snapshot.month,
        income_cents=income,
        expense_cents=expense,
        balance_cents=_cents(snapshot.balance_cents),
        benefit_cents=Money(income - expense),
    )


def empty_point(month: Month) -> SeriesPoint:
    return SeriesPoint(
        month=month,
        income_cents=Money(0),
        expense_cents=Money(0),
        balance_cents=Money(0),
        benefit_cents=Money(0),
    )


def build_year_series(year: Year, snapshots: Iterable[MonthlySnapshot]) -> list[SeriesPoint]:
    """Build the twelve points of a year, zero-filling absent months.

    Args:
        year: Year in YYYY format.
        snapshots: All stored snapshots (any order, any year).

    Returns:
        Exactly 12 points, January to December.
    """
    by_month = {snapshot.month: snapshot for snapshot in snapshots if snapshot.month.startswith(f"{year}-")}

    series: list[SeriesPoint] = []
    for month_num in range(1, 13):
        key = format_month_value(int(year), month_num)
        snapshot = by_month.get(key)
        series.append(to_series_point(snapshot) if snapshot else empty_point(key))
    return series


@dataclass
class _YearAccumulator:
    income: int = 0
    expense: int = 0
    benefit: int = 0
    balance: int = 0
    latest_month: str = ""


def build_all_years_points(snapshots: Iterable[MonthlySnapshot]) -> list[AllYearsPoint]:
    """Roll stored snapshots up into one point per year.

    The balance of a year is the balance of its lexicographically latest
    month; every member of the group is scanned since input order is not
    guaranteed.

    Args:
        snapshots: All stored snapshots.

    Returns:
        One point per distinct year, ascending.
    """
    groups: dict[str, _YearAccumulator] = {}
    for snapshot in snapshots:
        point = to_series_point(snapshot)
        entry = groups.setdefault(point.month[:4], _YearAccumulator())
        entry.income += point.income_cents
        entry.expense += point.expense_cents
        entry.benefit += point.benefit_cents
        if point.month > entry.latest_month:
            entry.latest_month = point.month
            entry.balance = point.balance_cents

    return [
        AllYearsPoint(
            year=Year(year),
            income_cents=Money(entry.income),
            expense_cents=Money(entry.expense),
            benefit_cents=Money(entry.benefit),
            balance_cents=Money(entry.balance),
        )
        for year, entry in sorted(groups.items())
    ]


def compute_year_totals(year_series: Sequence[SeriesPoint]) -> YearTotals:
    """Sum a year series; balance is the last non-zero monthly balance.

    Args:
        year_series: Points for one year, month-ordered.

    Returns:
        YearTotals for the year.
    """
    balance = next((point.balance_cents for point in reversed(year_series) if point.balance_cents != 0), Money(0))
    return YearTotals(
        income_cents=Money(sum(point.income_cents for point in year_series)),
        expense_cents=Money(sum(point.expense_cents for point in year_series)),
        benefit_cents=Money(sum(point.benefit_cents for point in year_series)),
        balance_cents=balance,
    )


def previous_december_balance(year: Year, snapshots: Iterable[MonthlySnapshot]) -> Money:
    """Balance stored for December of the previous year, or 0."""
    december = format_month_value(int(shift_year(year, -1)), 12)
    for snapshot in snapshots:
        if snapshot.month == december:
            return _cents(snapshot.balance_cents)
    return Money(0)


def available_years(snapshots: Iterable[MonthlySnapshot], *extra: Year) -> list[Year]:
    """Distinct stored years plus any extra years, sorted ascending."""
    years = {Year(snapshot.month[:4]) for snapshot in snapshots}
    years.update(extra)
    return sorted(years)


def has_series_data(points: Iterable[SeriesPoint | AllYearsPoint]) -> bool:
    """Check whether any point carries a non-zero metric."""
    return any(
        point.income_cents != 0 or point.expense_cents != 0 or point.balance_cents != 0 or point.benefit_cents != 0
        for point in points
    )
