"""Pure functions for amount parsing and formatting.

All monetary amounts leave this module in cents (Money type).
"""

import math
import re

from fintrack.domain.models import Money

_NON_NUMERIC = re.compile(r"[^0-9,.\-]")

# SQLite INTEGER is a signed 64-bit value
MIN_STORED_CENTS = -(2**63)
MAX_STORED_CENTS = 2**63 - 1


def _to_finite_float(text: str) -> float | None:
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_loose_number(value: str) -> float | None:
    """Parse a locale-ambiguous decimal string.

    Everything except digits, separators and the minus sign is discarded,
    so currency symbols and spaces are tolerated. When both ``,`` and ``.``
    appear, whichever occurs last is the decimal separator and the other
    is treated as a thousands separator. A lone ``,`` is a decimal separator.

    Args:
        value: Raw cell text (e.g., "1.234,56 €", "$1,234.56", "-12,5").

    Returns:
        Amount in major units, or None if the text is not a finite number.
    """
    cleaned = _NON_NUMERIC.sub("", value).strip()
    if not cleaned:
        return None

    has_comma = "," in cleaned
    has_dot = "." in cleaned
    normalized = cleaned
    if has_comma and has_dot:
        if cleaned.rfind(",") > cleaned.rfind("."):
            normalized = cleaned.replace(".", "").replace(",", ".", 1)
        else:
            normalized = cleaned.replace(",", "")
    elif has_comma:
        normalized = cleaned.replace(",", ".", 1)

    return _to_finite_float(normalized)


def to_cents(amount: float) -> Money:
    """Convert major units to cents, rounding half up.

    Args:
        amount: Amount in major units.

    Returns:
        Amount in cents.
    """
    return Money(math.floor(amount * 100 + 0.5))


def amount_to_cents(amount: float | None) -> Money | None:
    """Convert a parsed amount to cents if it fits a stored SQLite INTEGER.

    Args:
        amount: Amount in major units, or None for unparsable input.

    Returns:
        Amount in cents, or None if the input is None, overflows when scaled
        to cents, or falls outside the signed 64-bit range.
    """
    if amount is None or not math.isfinite(amount * 100):
        return None
    cents = to_cents(amount)
    if not MIN_STORED_CENTS <= cents <= MAX_STORED_CENTS:
        return None
    return cents


def parse_amount(value: str) -> float | None:
    """Parse an amount typed into the monthly entry form.

    Stricter than ``parse_loose_number``: only the first ``,`` is accepted
    as a decimal separator and no other characters are stripped. Blank input
    means zero.

    Args:
        value: Raw form text.

    Returns:
        Amount in major units, or None if invalid.
    """
    normalized = value.replace(",", ".", 1).strip()
    if normalized == "":
        return 0.0
    return _to_finite_float(normalized)


def format_cents(amount: Money, include_sign: bool = False) -> str:
    """Format cents for display using Spanish grouping (1.234,56 €).

    Args:
        amount: Amount in cents.
        include_sign: Whether to prefix positive amounts with +.

    Returns:
        Formatted string.
    """
    formatted = f"{abs(amount) / 100:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    if amount < 0:
        return f"-{formatted} €"
    if include_sign:
        return f"+{formatted} €"
    return f"{formatted} €"
