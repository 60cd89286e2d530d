"""Date utilities for fintrack.

Pure functions for month/year key arithmetic and formatting.
"""

from datetime import date, datetime, timedelta

from fintrack.domain.models import Month, Year


def format_month_value(year: int, month: int) -> Month:
    """Build a canonical month key.

    Args:
        year: Four-digit year.
        month: Month number (1-12).

    Returns:
        Month in YYYY-MM format (e.g., "2025-03").
    """
    return Month(f"{year}-{month:02d}")


def month_parts(month: Month) -> tuple[int, int]:
    """Split a month key into (year, month) integers."""
    year_text, month_text = month.split("-")
    return int(year_text), int(month_text)


def shift_month(month: Month, delta: int) -> Month:
    """Move a month key forwards or backwards.

    Args:
        month: Month in YYYY-MM format.
        delta: Number of months to move (negative moves back).

    Returns:
        Shifted month in YYYY-MM format.
    """
    year, month_num = month_parts(month)
    index = year * 12 + (month_num - 1) + delta
    return format_month_value(index // 12, index % 12 + 1)


def shift_year(year: Year, delta: int) -> Year:
    """Move a year key; non-numeric input is returned unchanged."""
    if not year.isdigit():
        return year
    return Year(str(int(year) + delta))


def current_month(today: date | None = None) -> Month:
    today = today or date.today()
    return format_month_value(today.year, today.month)


def current_year(today: date | None = None) -> Year:
    today = today or date.today()
    return Year(str(today.year))


def month_range(month: Month) -> tuple[str, str, str]:
    """Calculate date range and label for a month.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (since_date, until_date, label) where:
        - since_date: First day of month (YYYY-MM-DD)
        - until_date: First day of next month (YYYY-MM-DD)
        - label: Human-readable month (e.g., "January 2025")
    """
    dt = datetime.strptime(month, "%Y-%m")
    since = dt.strftime("%Y-%m-01")
    next_month = (dt.replace(day=28) + timedelta(days=4)).replace(day=1)
    until = next_month.strftime("%Y-%m-%d")
    label = dt.strftime("%B %Y")
    return since, until, label


def month_label(month: Month) -> str:
    """Short label for a month key (e.g., "Mar")."""
    return datetime.strptime(month, "%Y-%m").strftime("%b")
