"""Pure functions for ordering month and year rows."""

from collections.abc import Callable, Sequence
from typing import Literal, TypeVar

from fintrack.domain.models import AllYearsPoint, SeriesPoint

SortKey = Literal["period", "month", "year", "income", "expense", "balance", "benefit"]
SortDirection = Literal["asc", "desc"]

SORT_KEYS: tuple[str, ...] = ("period", "month", "year", "income", "expense", "balance", "benefit")

PointT = TypeVar("PointT", SeriesPoint, AllYearsPoint)

_NUMERIC_KEYS: dict[str, Callable[[SeriesPoint | AllYearsPoint], int]] = {
    "income": lambda point: point.income_cents,
    "expense": lambda point: point.expense_cents,
    "balance": lambda point: point.balance_cents,
    "benefit": lambda point: point.benefit_cents,
}


def sort_points(points: Sequence[PointT], key: SortKey = "period", direction: SortDirection = "asc") -> list[PointT]:
    """Stable sort of month or year rows.

    "period", "month" and "year" all compare the row's period key as a
    string; the metric keys compare numerically. Rows with equal keys keep
    their input order in both directions.

    Args:
        points: Rows to sort.
        key: Column to sort by.
        direction: "asc" or "desc".

    Returns:
        New sorted list.

    Raises:
        ValueError: If key or direction is unknown.
    """
    if key not in SORT_KEYS:
        raise ValueError(f"Unknown sort key '{key}' (choose from: {', '.join(SORT_KEYS)})")
    if direction not in ("asc", "desc"):
        raise ValueError(f"Unknown sort direction: {direction}")

    if key in ("period", "month", "year"):
        return sorted(points, key=lambda point: point.period, reverse=direction == "desc")

    return sorted(points, key=_NUMERIC_KEYS[key], reverse=direction == "desc")
