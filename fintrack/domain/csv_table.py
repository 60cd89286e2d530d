"""Pure functions for reading loosely formatted CSV or pasted text.

This module turns raw text into trimmed rows and works out which column
holds which value. It knows nothing about months or amounts; that is left
to ``fintrack.domain.imports``.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from fintrack.domain.errors import EmptyInputError, MissingColumnsError
from fintrack.domain.months import normalize_text

logger = logging.getLogger(__name__)

HEADER_ALIASES: dict[str, tuple[str, ...]] = {
    "month": ("month", "mes", "fecha"),
    "year": ("year", "ano"),
    "income": ("income", "ingresos"),
    "expense": ("expense", "gastos"),
    "balance": ("balance", "saldo", "acumulacion", "saldo al cierre", "saldo cierre"),
}


class ImportLayout(Enum):
    """Column conventions for the two import entry points."""

    HISTORY = "history"
    SINGLE_MONTH = "single_month"

    @property
    def required_columns(self) -> tuple[str, ...]:
        if self is ImportLayout.HISTORY:
            return ("month", "income", "expense", "balance")
        return ("income", "expense", "balance")


@dataclass(frozen=True)
class ColumnMap:
    """Resolved column indexes; None means the column is absent."""

    month: int | None
    year: int | None
    income: int
    expense: int
    balance: int


# Positional defaults when the text has no header row
DEFAULT_COLUMNS: dict[ImportLayout, ColumnMap] = {
    ImportLayout.HISTORY: ColumnMap(month=0, year=None, income=1, expense=2, balance=3),
    ImportLayout.SINGLE_MONTH: ColumnMap(month=None, year=None, income=0, expense=1, balance=2),
}


@dataclass(frozen=True)
class TableRow:
    """One data row with its 1-based line number among non-blank lines."""

    line: int
    cells: tuple[str, ...]

    def cell(self, index: int | None) -> str:
        """Get a cell, or an empty string if the column is absent or the row is short."""
        if index is None or index >= len(self.cells):
            return ""
        return self.cells[index]


@dataclass(frozen=True)
class CsvTable:
    """Immutable parsed table."""

    delimiter: str
    has_header: bool
    columns: ColumnMap
    rows: list[TableRow]


def split_lines(text: str) -> list[str]:
    """Split text into trimmed, non-blank lines."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def detect_delimiter(lines: list[str]) -> str:
    """Use ``;`` if any line contains one, otherwise ``,``."""
    return ";" if any(";" in line for line in lines) else ","


def clean_cell(cell: str) -> str:
    """Trim a cell and drop one pair of surrounding double quotes."""
    cell = cell.strip()
    if len(cell) >= 2 and cell.startswith('"') and cell.endswith('"'):
        return cell[1:-1]
    return cell


def is_header_row(cells: list[str]) -> bool:
    """Check whether any cell matches or contains a known column alias.

    Args:
        cells: First-row cells.

    Returns:
        True if the row is a header.
    """
    normalized = [normalize_text(cell) for cell in cells]
    return any(alias in cell for cell in normalized for aliases in HEADER_ALIASES.values() for alias in aliases)


def find_column(headers: list[str], aliases: tuple[str, ...]) -> int | None:
    """Find the first header equal to or containing one of the aliases.

    Args:
        headers: Normalized header cells.
        aliases: Accepted names for the column.

    Returns:
        Column index, or None if no header matches.
    """
    for index, header in enumerate(headers):
        if any(header == alias or alias in header for alias in aliases):
            return index
    return None


def resolve_columns(header_cells: list[str], layout: ImportLayout) -> ColumnMap:
    """Resolve column indexes from a header row.

    Args:
        header_cells: Raw header cells.
        layout: Import layout deciding which columns are required.

    Returns:
        ColumnMap with the resolved indexes.

    Raises:
        MissingColumnsError: If a required column has no matching header.
    """
    headers = [normalize_text(cell) for cell in header_cells]
    found = {name: find_column(headers, aliases) for name, aliases in HEADER_ALIASES.items()}

    missing = [name for name in layout.required_columns if found[name] is None]
    if missing:
        raise MissingColumnsError(missing)

    income, expense, balance = found["income"], found["expense"], found["balance"]
    assert income is not None and expense is not None and balance is not None

    return ColumnMap(
        month=found["month"],
        year=found["year"],
        income=income,
        expense=expense,
        balance=balance,
    )


def read_table(text: str, layout: ImportLayout) -> CsvTable:
    """Split raw text into rows and resolve its columns.

    Args:
        text: File contents or pasted text.
        layout: Import layout for positional defaults and required columns.

    Returns:
        CsvTable with data rows only (header excluded, all-blank rows dropped).

    Raises:
        EmptyInputError: If the text has no non-blank lines.
        MissingColumnsError: If a header is present but lacks a required column.
    """
    lines = split_lines(text)
    if not lines:
        raise EmptyInputError()

    delimiter = detect_delimiter(lines)
    rows = [[clean_cell(cell) for cell in line.split(delimiter)] for line in lines]

    has_header = is_header_row(rows[0])
    if has_header:
        columns = resolve_columns(rows[0], layout)
        start = 1
    else:
        columns = DEFAULT_COLUMNS[layout]
        start = 0

    data_rows = [
        TableRow(line=index + 1, cells=tuple(cells))
        for index, cells in enumerate(rows)
        if index >= start and any(cell != "" for cell in cells)
    ]

    logger.debug(
        "Read %d data rows (delimiter=%r, header=%s, columns=%s)",
        len(data_rows),
        delimiter,
        has_header,
        columns,
    )

    return CsvTable(delimiter=delimiter, has_header=has_header, columns=columns, rows=data_rows)
