"""Domain type definitions for fintrack.

These NewTypes provide semantic clarity and help with type checking:
- Money: Amount in cents (minor units)
- Month: Month in YYYY-MM format
- Year: Year in YYYY format

The dataclasses are the snapshot entity and the points derived from it.
"""

from dataclasses import dataclass
from typing import Literal, NewType

# Money amounts are stored as cents (minor units) to avoid floating point errors
Money = NewType("Money", int)

# Month is always in YYYY-MM format with a zero-padded month (e.g., "2025-01")
Month = NewType("Month", str)

# Year is always four digits (e.g., "2025")
Year = NewType("Year", str)

SeriesKey = Literal["income", "expense", "balance", "benefit"]

SERIES_KEYS: tuple[SeriesKey, ...] = ("income", "expense", "balance", "benefit")


@dataclass(frozen=True)
class MonthlySnapshot:
    """Immutable stored totals for one calendar month."""

    month: Month
    income_cents: Money
    expense_cents: Money
    balance_cents: Money


@dataclass(frozen=True)
class SeriesPoint:
    """Immutable month point with derived benefit."""

    month: Month
    income_cents: Money
    expense_cents: Money
    balance_cents: Money
    benefit_cents: Money

    @property
    def period(self) -> str:
        return self.month


@dataclass(frozen=True)
class AllYearsPoint:
    """Immutable per-year rollup across stored snapshots."""

    year: Year
    income_cents: Money
    expense_cents: Money
    benefit_cents: Money
    balance_cents: Money

    @property
    def period(self) -> str:
        return self.year


@dataclass(frozen=True)
class YearTotals:
    """Immutable totals for a 12-month year series."""

    income_cents: Money
    expense_cents: Money
    benefit_cents: Money
    balance_cents: Money


def series_values(point: SeriesPoint | AllYearsPoint | YearTotals) -> dict[SeriesKey, Money]:
    """Map each metric key to its value on a point.

    Args:
        point: Any point carrying the four metrics.

    Returns:
        Dictionary of metric key to amount in cents.
    """
    return {
        "income": point.income_cents,
        "expense": point.expense_cents,
        "balance": point.balance_cents,
        "benefit": point.benefit_cents,
    }
