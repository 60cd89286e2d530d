"""Tests for fintrack.domain.series pure functions."""

import pytest

from fintrack.domain.models import AllYearsPoint, Money, Month, MonthlySnapshot, Year
from fintrack.domain.series import (
    available_years,
    build_all_years_points,
    build_year_series,
    compute_year_totals,
    has_series_data,
    previous_december_balance,
    to_series_point,
)


def snapshot(month: str, income: int, expense: int, balance: int) -> MonthlySnapshot:
    return MonthlySnapshot(
        month=Month(month),
        income_cents=Money(income),
        expense_cents=Money(expense),
        balance_cents=Money(balance),
    )


class TestToSeriesPoint:
    """Tests for to_series_point."""

    def test_benefit_is_income_minus_expense(self) -> None:
        """Should derive benefit from income and expense."""
        point = to_series_point(snapshot("2024-01", 1000, 1500, 300))

        assert point.benefit_cents == -500
        assert point.balance_cents == 300

    def test_missing_amounts_read_as_zero(self) -> None:
        """Should read None amounts as zero."""
        stored = MonthlySnapshot(
            month=Month("2024-01"),
            income_cents=None,  # type: ignore[arg-type]
            expense_cents=Money(200),
            balance_cents=None,  # type: ignore[arg-type]
        )

        point = to_series_point(stored)

        assert point.income_cents == 0
        assert point.balance_cents == 0
        assert point.benefit_cents == -200


class TestBuildYearSeries:
    """Tests for build_year_series."""

    @pytest.mark.parametrize("count", [0, 1, 5, 12])
    def test_always_twelve_points(self, count: int) -> None:
        """Should return 12 points whatever the number of stored months."""
        stored = [snapshot(f"2024-{month:02d}", 100, 50, 10) for month in range(1, count + 1)]

        series = build_year_series(Year("2024"), stored)

        assert len(series) == 12
        assert [point.month for point in series] == [f"2024-{month:02d}" for month in range(1, 13)]

    def test_zero_fills_missing_months(self) -> None:
        """Should fill absent months with zeros."""
        series = build_year_series(Year("2024"), [snapshot("2024-03", 100, 40, 900)])

        assert series[2].income_cents == 100
        assert series[2].benefit_cents == 60
        assert series[0].income_cents == 0
        assert series[0].balance_cents == 0

    def test_ignores_other_years(self) -> None:
        """Should only use snapshots from the requested year."""
        stored = [snapshot("2023-03", 100, 0, 0), snapshot("2025-03", 100, 0, 0)]

        series = build_year_series(Year("2024"), stored)

        assert not has_series_data(series)

    def test_benefit_on_every_point(self) -> None:
        """Should keep benefit equal to income minus expense."""
        stored = [snapshot("2024-01", 300, 500, 0), snapshot("2024-07", 900, 100, 0)]

        series = build_year_series(Year("2024"), stored)

        assert all(point.benefit_cents == point.income_cents - point.expense_cents for point in series)


class TestBuildAllYearsPoints:
    """Tests for build_all_years_points."""

    def test_sums_flows_and_takes_latest_balance(self) -> None:
        """Should sum flows and take the balance of the latest month."""
        stored = [
            snapshot("2023-01", 100, 50, 100),
            snapshot("2023-12", 200, 100, 200),
            snapshot("2024-06", 50, 80, 170),
        ]

        points = build_all_years_points(stored)

        assert points == [
            AllYearsPoint(
                year=Year("2023"),
                income_cents=Money(300),
                expense_cents=Money(150),
                benefit_cents=Money(150),
                balance_cents=Money(200),
            ),
            AllYearsPoint(
                year=Year("2024"),
                income_cents=Money(50),
                expense_cents=Money(80),
                benefit_cents=Money(-30),
                balance_cents=Money(170),
            ),
        ]

    def test_latest_balance_independent_of_input_order(self) -> None:
        """Should scan the whole group for the latest month."""
        stored = [
            snapshot("2023-12", 0, 0, 200),
            snapshot("2023-01", 0, 0, 100),
        ]

        points = build_all_years_points(stored)

        assert points[0].balance_cents == 200

    def test_years_ascending(self) -> None:
        """Should return years in ascending order."""
        stored = [snapshot("2025-01", 1, 0, 0), snapshot("2022-01", 1, 0, 0), snapshot("2024-01", 1, 0, 0)]

        assert [point.year for point in build_all_years_points(stored)] == ["2022", "2024", "2025"]

    def test_empty(self) -> None:
        """Should return no points without snapshots."""
        assert build_all_years_points([]) == []


class TestComputeYearTotals:
    """Tests for compute_year_totals."""

    def test_totals_use_last_non_zero_balance(self) -> None:
        """Should sum flows and keep the last non-zero balance."""
        stored = [snapshot("2024-01", 100, 40, 500), snapshot("2024-04", 200, 60, 650)]
        series = build_year_series(Year("2024"), stored)

        totals = compute_year_totals(series)

        assert totals.income_cents == 300
        assert totals.expense_cents == 100
        assert totals.benefit_cents == 200
        assert totals.balance_cents == 650

    def test_empty_year(self) -> None:
        """Should return zeros for an empty year."""
        totals = compute_year_totals(build_year_series(Year("2024"), []))

        assert totals.balance_cents == 0
        assert totals.income_cents == 0


class TestPreviousDecemberBalance:
    """Tests for previous_december_balance."""

    def test_found(self) -> None:
        """Should return December's balance of the prior year."""
        stored = [snapshot("2023-12", 0, 0, 4200), snapshot("2024-01", 0, 0, 10)]

        assert previous_december_balance(Year("2024"), stored) == 4200

    def test_missing(self) -> None:
        """Should return zero when December is not stored."""
        assert previous_december_balance(Year("2024"), [snapshot("2023-11", 0, 0, 10)]) == 0


class TestAvailableYears:
    """Tests for available_years."""

    def test_distinct_sorted_with_extra(self) -> None:
        """Should merge stored years with extra years."""
        stored = [snapshot("2024-01", 0, 0, 0), snapshot("2022-05", 0, 0, 0), snapshot("2024-02", 0, 0, 0)]

        assert available_years(stored, Year("2026")) == ["2022", "2024", "2026"]

    def test_extra_only(self) -> None:
        """Should include the extra year even without data."""
        assert available_years([], Year("2026")) == ["2026"]


class TestHasSeriesData:
    """Tests for has_series_data."""

    def test_all_zero(self) -> None:
        """Should be False when every metric is zero."""
        assert not has_series_data(build_year_series(Year("2024"), []))

    def test_negative_balance_counts(self) -> None:
        """Should be True for any non-zero metric."""
        assert has_series_data(build_year_series(Year("2024"), [snapshot("2024-02", 0, 0, -5)]))
