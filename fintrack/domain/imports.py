"""Pure functions for turning user text into validated monthly snapshots.

This module contains the functional core for imports:
- No I/O operations (no database, no console, no files)
- No side effects
- Either the complete record list is returned or an error is raised

All monetary amounts are in cents (Money type).
"""

import logging

from fintrack.domain.csv_table import CsvTable, ImportLayout, TableRow, read_table
from fintrack.domain.errors import (
    AmbiguousSingleRowImportError,
    InvalidBalanceError,
    InvalidExpenseError,
    InvalidIncomeError,
    InvalidMonthLineError,
    InvalidValuesLineError,
    MonthMismatchError,
    NoRowsImportError,
    SingleRowRequiredError,
)
from fintrack.domain.models import Money, Month, MonthlySnapshot, Year
from fintrack.domain.months import parse_month_token
from fintrack.domain.numbers import amount_to_cents, parse_amount, parse_loose_number

logger = logging.getLogger(__name__)


def _row_month(table: CsvTable, row: TableRow) -> Month | None:
    return parse_month_token(row.cell(table.columns.month), row.cell(table.columns.year))


def _row_amounts(table: CsvTable, row: TableRow) -> tuple[Money, Money, Money]:
    """Parse the income, expense and balance cells of a row.

    Raises:
        InvalidValuesLineError: If any of the three cells is not a number, or
            is too large to store in cents.
    """
    columns = table.columns
    income = amount_to_cents(parse_loose_number(row.cell(columns.income)))
    expense = amount_to_cents(parse_loose_number(row.cell(columns.expense)))
    balance = amount_to_cents(parse_loose_number(row.cell(columns.balance)))
    if income is None or expense is None or balance is None:
        raise InvalidValuesLineError(row.line)
    return income, expense, balance


def parse_history(text: str) -> list[MonthlySnapshot]:
    """Parse a multi-month import (the whole history or a year).

    Rows are independent: a month may appear more than once, and the last
    occurrence wins when the records are upserted.

    Args:
        text: File contents or pasted text.

    Returns:
        One snapshot per data row, in input order.

    Raises:
        EmptyInputError: If the text is blank.
        MissingColumnsError: If a header lacks month, income, expense or balance.
        InvalidMonthLineError: If a row's month cannot be resolved.
        InvalidValuesLineError: If a row's amounts cannot be parsed.
        NoRowsImportError: If no data rows remain.
    """
    table = read_table(text, ImportLayout.HISTORY)

    snapshots: list[MonthlySnapshot] = []
    for row in table.rows:
        month = _row_month(table, row)
        if month is None:
            raise InvalidMonthLineError(row.line)
        income, expense, balance = _row_amounts(table, row)
        snapshots.append(
            MonthlySnapshot(month=month, income_cents=income, expense_cents=expense, balance_cents=balance)
        )

    if not snapshots:
        raise NoRowsImportError()

    logger.debug("Parsed %d snapshots from history import", len(snapshots))
    return snapshots


def parse_year(text: str, year: Year) -> list[MonthlySnapshot]:
    """Parse an import started from a year view.

    Uses the history rules unchanged; rows from other years are kept and
    the caller reports them with ``months_outside_year``.
    """
    logger.debug("Parsing import for year %s", year)
    return parse_history(text)


def months_outside_year(snapshots: list[MonthlySnapshot], year: Year) -> list[Month]:
    """List the months of snapshots that do not belong to a year."""
    return [snapshot.month for snapshot in snapshots if not snapshot.month.startswith(f"{year}-")]


def parse_single_month(text: str, target_month: Month) -> list[MonthlySnapshot]:
    """Parse an import for one specific month.

    Without a header the columns are income, expense, balance and the month
    is implied by ``target_month``. With a header, a month column is optional;
    when present every row must resolve to ``target_month``.

    Args:
        text: File contents or pasted text.
        target_month: Month being edited (YYYY-MM).

    Returns:
        A list holding exactly one snapshot for ``target_month``.

    Raises:
        EmptyInputError: If the text is blank.
        MissingColumnsError: If a header lacks income, expense or balance.
        NoRowsImportError: If there are no data rows.
        AmbiguousSingleRowImportError: If several rows exist and there is no month column.
        InvalidMonthLineError: If a row's month cannot be resolved.
        MonthMismatchError: If a row resolves to a different month.
        InvalidValuesLineError: If a row's amounts cannot be parsed.
        SingleRowRequiredError: If the rows do not produce exactly one record.
    """
    table = read_table(text, ImportLayout.SINGLE_MONTH)
    if not table.rows:
        raise NoRowsImportError()

    has_month_column = table.columns.month is not None
    if not has_month_column and len(table.rows) > 1:
        raise AmbiguousSingleRowImportError()

    snapshots: list[MonthlySnapshot] = []
    for row in table.rows:
        month = _row_month(table, row) if has_month_column else target_month
        if month is None:
            raise InvalidMonthLineError(row.line)
        if month != target_month:
            raise MonthMismatchError(expected=target_month, actual=month)
        income, expense, balance = _row_amounts(table, row)
        snapshots.append(
            MonthlySnapshot(month=target_month, income_cents=income, expense_cents=expense, balance_cents=balance)
        )

    if len(snapshots) != 1:
        raise SingleRowRequiredError(len(snapshots))

    return snapshots


def validate_manual_entry(month: Month, income: str, expense: str, balance: str) -> MonthlySnapshot:
    """Validate the monthly entry form.

    Income and expense must be non-negative; balance may be negative.
    Blank fields count as zero.

    Args:
        month: Month being saved (YYYY-MM).
        income: Raw income text.
        expense: Raw expense text.
        balance: Raw closing balance text.

    Returns:
        Snapshot ready to upsert.

    Raises:
        InvalidIncomeError: If income is not a non-negative number.
        InvalidExpenseError: If expense is not a non-negative number.
        InvalidBalanceError: If balance is not a number.
    """
    income_value = parse_amount(income)
    income_cents = amount_to_cents(income_value)
    if income_value is None or income_value < 0 or income_cents is None:
        raise InvalidIncomeError()

    expense_value = parse_amount(expense)
    expense_cents = amount_to_cents(expense_value)
    if expense_value is None or expense_value < 0 or expense_cents is None:
        raise InvalidExpenseError()

    balance_cents = amount_to_cents(parse_amount(balance))
    if balance_cents is None:
        raise InvalidBalanceError()

    return MonthlySnapshot(
        month=month,
        income_cents=income_cents,
        expense_cents=expense_cents,
        balance_cents=balance_cents,
    )
