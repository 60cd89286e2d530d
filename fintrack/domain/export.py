"""Pure functions for building CSV and SQL exports of stored snapshots.

The CSV output is accepted back by ``parse_history``.
"""

from collections.abc import Iterable

from fintrack.domain.models import Money, MonthlySnapshot

CSV_HEADERS: dict[str, list[str]] = {
    "es": ["mes", "ingresos", "gastos", "saldo al cierre"],
    "en": ["month", "income", "expenses", "closing balance"],
}

CSV_DELIMITER = ";"


def resolve_csv_headers(locale: str) -> list[str]:
    return CSV_HEADERS["es"] if locale.startswith("es") else CSV_HEADERS["en"]


def format_csv_number(cents: Money, locale: str) -> str:
    """Render cents with two decimals; Spanish locales use a decimal comma.

    Args:
        cents: Amount in cents.
        locale: Locale code (e.g., "es", "en-GB").

    Returns:
        Formatted amount (e.g., "1234,50" or "1234.50").
    """
    sign = "-" if cents < 0 else ""
    whole, fraction = divmod(abs(cents), 100)
    separator = "," if locale.startswith("es") else "."
    return f"{sign}{whole}{separator}{fraction:02d}"


def build_csv_export(snapshots: Iterable[MonthlySnapshot], locale: str) -> str:
    """Build a semicolon-delimited CSV with one row per stored month.

    Args:
        snapshots: Snapshots to export.
        locale: Locale code for headers and decimal separator.

    Returns:
        CSV text without a trailing newline.
    """
    lines = [CSV_DELIMITER.join(resolve_csv_headers(locale))]
    for snapshot in snapshots:
        lines.append(
            CSV_DELIMITER.join(
                [
                    snapshot.month,
                    format_csv_number(snapshot.income_cents, locale),
                    format_csv_number(snapshot.expense_cents, locale),
                    format_csv_number(snapshot.balance_cents, locale),
                ]
            )
        )
    return "\n".join(lines)


def escape_sql_value(value: str) -> str:
    return value.replace("'", "''")


def build_sql_dump(snapshots: Iterable[MonthlySnapshot], schema: str) -> str:
    """Build a SQL script recreating the table and its rows.

    Args:
        snapshots: Snapshots to export.
        schema: CREATE TABLE statement(s) for the snapshots table.

    Returns:
        SQL text: schema, then one INSERT per snapshot inside a transaction.
    """
    lines: list[str] = []
    trimmed_schema = schema.strip()
    if trimmed_schema:
        lines.append(trimmed_schema)

    inserts = [
        "INSERT INTO monthly_snapshots (month, income_cents, expense_cents, balance_cents) "
        f"VALUES ('{escape_sql_value(snapshot.month)}', {snapshot.income_cents}, "
        f"{snapshot.expense_cents}, {snapshot.balance_cents});"
        for snapshot in snapshots
    ]
    if inserts:
        lines.append("BEGIN TRANSACTION;")
        lines.extend(inserts)
        lines.append("COMMIT;")

    return "\n".join(lines)
