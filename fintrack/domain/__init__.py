"""Domain models and types for fintrack.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Import parsing and series derivation separated from infrastructure
"""

from fintrack.domain.models import (
    AllYearsPoint,
    Money,
    Month,
    MonthlySnapshot,
    SeriesKey,
    SeriesPoint,
    Year,
    YearTotals,
)

__all__ = [
    "AllYearsPoint",
    "Money",
    "Month",
    "MonthlySnapshot",
    "SeriesKey",
    "SeriesPoint",
    "Year",
    "YearTotals",
]
