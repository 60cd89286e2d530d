"""Pure functions for period-over-period insights.

A comparison slot is always present in the output. When its comparison
period has no data, or every metric is hidden, it is marked with
``has_data=False`` so the caller can render an empty state for it.

All monetary amounts are in cents (Money type).
"""

from collections.abc import Collection, Sequence
from dataclasses import dataclass

from fintrack.dates import shift_month, shift_year
from fintrack.domain.models import (
    SERIES_KEYS,
    AllYearsPoint,
    Money,
    Month,
    MonthlySnapshot,
    SeriesKey,
    SeriesPoint,
    Year,
    YearTotals,
    series_values,
)
from fintrack.domain.series import to_series_point

MetricPoint = SeriesPoint | AllYearsPoint | YearTotals


@dataclass(frozen=True)
class InsightDelta:
    """Immutable change of one metric between two periods."""

    key: SeriesKey
    delta_cents: Money
    percent_change: float | None
    current_cents: Money
    previous_cents: Money


@dataclass(frozen=True)
class InsightComparison:
    """Immutable comparison against one named period."""

    key: str
    has_data: bool
    deltas: list[InsightDelta]


@dataclass(frozen=True)
class InsightsReport:
    """Immutable set of comparisons for a view."""

    comparisons: list[InsightComparison]
    has_any_data: bool


def percent_change(delta: int, previous: int) -> float | None:
    """Percentage change against a baseline; None when the baseline is zero."""
    if previous == 0:
        return None
    return (delta / abs(previous)) * 100


def compute_delta(key: SeriesKey, current: Money, previous: Money) -> InsightDelta:
    """Compute the change of one metric.

    Args:
        key: Metric key.
        current: Current period value in cents.
        previous: Comparison period value in cents.

    Returns:
        InsightDelta with signed delta and percentage change.
    """
    delta = Money(current - previous)
    return InsightDelta(
        key=key,
        delta_cents=delta,
        percent_change=percent_change(delta, previous),
        current_cents=current,
        previous_cents=previous,
    )


def visible_keys(visible: Collection[str]) -> list[SeriesKey]:
    """Metric keys enabled by the caller, in canonical order."""
    return [key for key in SERIES_KEYS if key in visible]


def build_comparison(
    key: str,
    current: MetricPoint,
    previous: MetricPoint | None,
    visible: Collection[str],
) -> InsightComparison:
    """Compare a period with one comparison period.

    Args:
        key: Comparison slot name (e.g., "previous_month").
        current: Current period metrics.
        previous: Comparison period metrics, or None if there is no data.
        visible: Metric keys to include.

    Returns:
        InsightComparison; ``has_data`` is False when there is nothing to compare.
    """
    keys = visible_keys(visible)
    if previous is None or not keys:
        return InsightComparison(key=key, has_data=False, deltas=[])

    current_values = series_values(current)
    previous_values = series_values(previous)
    deltas = [compute_delta(metric, current_values[metric], previous_values[metric]) for metric in keys]
    return InsightComparison(key=key, has_data=True, deltas=deltas)


def build_report(comparisons: list[InsightComparison]) -> InsightsReport:
    has_any_data = any(comparison.has_data and comparison.deltas for comparison in comparisons)
    return InsightsReport(comparisons=comparisons, has_any_data=has_any_data)


def _find_month(snapshots: Sequence[MonthlySnapshot], month: Month) -> SeriesPoint | None:
    for snapshot in snapshots:
        if snapshot.month == month:
            return to_series_point(snapshot)
    return None


def month_insights(
    month: Month,
    current: SeriesPoint,
    snapshots: Sequence[MonthlySnapshot],
    visible: Collection[str],
) -> InsightsReport:
    """Compare a month with the previous month and the same month last year.

    Args:
        month: Month being viewed (YYYY-MM).
        current: Metrics of the month being viewed.
        snapshots: All stored snapshots.
        visible: Metric keys to include.

    Returns:
        Report with "previous_month" and "previous_year" comparisons.
    """
    previous_month = _find_month(snapshots, shift_month(month, -1))
    previous_year = _find_month(snapshots, shift_month(month, -12))
    return build_report(
        [
            build_comparison("previous_month", current, previous_month, visible),
            build_comparison("previous_year", current, previous_year, visible),
        ]
    )


def year_insights(
    year: Year,
    totals: YearTotals,
    all_years: Sequence[AllYearsPoint],
    visible: Collection[str],
) -> InsightsReport:
    """Compare a year's totals with the previous year's rollup.

    Args:
        year: Year being viewed (YYYY).
        totals: Totals of the year being viewed.
        all_years: All-years rollup points.
        visible: Metric keys to include.

    Returns:
        Report with a single "previous_year_total" comparison.
    """
    previous_year = shift_year(year, -1)
    previous = next((point for point in all_years if point.year == previous_year), None)
    return build_report([build_comparison("previous_year_total", totals, previous, visible)])


def history_insights(all_years: Sequence[AllYearsPoint], visible: Collection[str]) -> InsightsReport:
    """Compare the latest stored year with the one before it.

    Args:
        all_years: All-years rollup points (any order).
        visible: Metric keys to include.

    Returns:
        Report with a single "latest_vs_previous_year" comparison.
    """
    ordered = sorted(all_years, key=lambda point: point.year)
    if len(ordered) < 2:
        return build_report([InsightComparison(key="latest_vs_previous_year", has_data=False, deltas=[])])
    latest, previous = ordered[-1], ordered[-2]
    return build_report([build_comparison("latest_vs_previous_year", latest, previous, visible)])
