"""Pure functions for resolving free-form month tokens to YYYY-MM keys.

Accepted forms, first match wins:
- ``2024-03`` / ``2024/3``
- ``03-2024`` / ``3/2024``
- ``march 2024`` / ``mar 2024`` / ``marzo 2024``
- ``march`` with a separate year cell
- ``3`` with a separate year cell
"""

import re
import unicodedata

from fintrack.dates import format_month_value
from fintrack.domain.models import Month

MONTH_NAMES: dict[str, int] = {
    "ene": 1,
    "enero": 1,
    "jan": 1,
    "january": 1,
    "feb": 2,
    "febrero": 2,
    "february": 2,
    "mar": 3,
    "marzo": 3,
    "march": 3,
    "abr": 4,
    "abril": 4,
    "apr": 4,
    "april": 4,
    "may": 5,
    "mayo": 5,
    "jun": 6,
    "junio": 6,
    "june": 6,
    "jul": 7,
    "julio": 7,
    "july": 7,
    "ago": 8,
    "agosto": 8,
    "aug": 8,
    "august": 8,
    "sep": 9,
    "sept": 9,
    "septiembre": 9,
    "setiembre": 9,
    "september": 9,
    "oct": 10,
    "octubre": 10,
    "october": 10,
    "nov": 11,
    "noviembre": 11,
    "november": 11,
    "dic": 12,
    "diciembre": 12,
    "dec": 12,
    "december": 12,
}

_YEAR_FIRST = re.compile(r"^(\d{4})[-/](\d{1,2})")
_MONTH_FIRST = re.compile(r"^(\d{1,2})[-/](\d{4})")
_NAME_AND_YEAR = re.compile(r"^([a-z]+)\s+(\d{4})$")
_BARE_NUMBER = re.compile(r"^\d{1,2}$")


def normalize_text(value: str) -> str:
    """Trim, lower-case and strip accents (e.g., " Año " -> "ano")."""
    decomposed = unicodedata.normalize("NFD", value.strip().lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def parse_year_token(value: str | None) -> int | None:
    """Extract a four-digit year from a cell, or None."""
    if not value:
        return None
    digits = "".join(ch for ch in value if ch.isdigit())
    if len(digits) != 4:
        return None
    return int(digits)


def _build(year: int, month: int) -> Month | None:
    if not 1 <= month <= 12:
        return None
    return format_month_value(year, month)


def parse_month_token(month: str, year: str | None = None) -> Month | None:
    """Resolve a month cell (plus an optional year cell) to a month key.

    Args:
        month: Month cell text.
        year: Optional separate year cell text; must contain exactly four digits.

    Returns:
        Month in YYYY-MM format, or None if the token cannot be resolved.
    """
    normalized = normalize_text(month)
    if not normalized:
        return None
    year_value = parse_year_token(year)

    match = _YEAR_FIRST.match(normalized)
    if match:
        return _build(int(match.group(1)), int(match.group(2)))

    match = _MONTH_FIRST.match(normalized)
    if match:
        return _build(int(match.group(2)), int(match.group(1)))

    match = _NAME_AND_YEAR.match(normalized)
    if match and match.group(1) in MONTH_NAMES:
        return _build(int(match.group(2)), MONTH_NAMES[match.group(1)])

    if normalized in MONTH_NAMES and year_value is not None:
        return _build(year_value, MONTH_NAMES[normalized])

    if _BARE_NUMBER.match(normalized) and year_value is not None:
        return _build(year_value, int(normalized))

    return None
