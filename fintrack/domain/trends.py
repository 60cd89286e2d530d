"""Pure functions for classifying balance trends."""

from collections.abc import Sequence
from typing import Literal

from fintrack.domain.models import AllYearsPoint, Money, Month, SeriesPoint, Year

BalanceTrend = Literal["up", "down", "flat"]


def classify_trend(current: Money, previous: Money) -> BalanceTrend:
    """Compare a closing balance with the preceding one.

    Args:
        current: Balance of the period in cents.
        previous: Balance of the reference period in cents.

    Returns:
        "up", "down" or "flat".
    """
    if current > previous:
        return "up"
    if current < previous:
        return "down"
    return "flat"


def year_trends(year_series: Sequence[SeriesPoint], previous_december: Money) -> dict[Month, BalanceTrend]:
    """Trend of each month against the month before it.

    Args:
        year_series: Twelve month-ordered points.
        previous_december: Balance of December of the prior year (0 if absent).

    Returns:
        Dictionary of month to trend.
    """
    trends: dict[Month, BalanceTrend] = {}
    for index, point in enumerate(year_series):
        previous = year_series[index - 1].balance_cents if index > 0 else previous_december
        trends[point.month] = classify_trend(point.balance_cents, previous)
    return trends


def all_years_trends(points: Sequence[AllYearsPoint]) -> dict[Year, BalanceTrend]:
    """Trend of each year against the year before it.

    The first year is compared with itself, so it is always flat.

    Args:
        points: Year-ascending all-years points.

    Returns:
        Dictionary of year to trend.
    """
    trends: dict[Year, BalanceTrend] = {}
    for index, point in enumerate(points):
        previous = points[index - 1].balance_cents if index > 0 else point.balance_cents
        trends[point.year] = classify_trend(point.balance_cents, previous)
    return trends
