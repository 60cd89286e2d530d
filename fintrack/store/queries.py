"""Database query functions for monthly snapshots."""

import logging
import sqlite3
from collections.abc import Iterable
from pathlib import Path

from fintrack.domain.models import Money, Month, MonthlySnapshot, Year
from fintrack.store.schema import get_db_path

logger = logging.getLogger(__name__)

_UPSERT_SQL = """
    INSERT INTO monthly_snapshots (month, income_cents, expense_cents, balance_cents)
    VALUES (?, ?, ?, ?)
    ON CONFLICT(month) DO UPDATE SET
        income_cents = excluded.income_cents,
        expense_cents = excluded.expense_cents,
        balance_cents = excluded.balance_cents
"""


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def _row_to_snapshot(row: sqlite3.Row) -> MonthlySnapshot:
    return MonthlySnapshot(
        month=Month(row["month"]),
        income_cents=Money(row["income_cents"] or 0),
        expense_cents=Money(row["expense_cents"] or 0),
        balance_cents=Money(row["balance_cents"] or 0),
    )


def get_snapshot(month: Month, db_path: Path | None = None) -> MonthlySnapshot | None:
    """Get the snapshot stored for a month.

    Args:
        month: Month in YYYY-MM format.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Snapshot, or None if the month has no entry.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(
            "SELECT month, income_cents, expense_cents, balance_cents FROM monthly_snapshots WHERE month = ?",
            (month,),
        )
        row = cursor.fetchone()
        return _row_to_snapshot(row) if row else None


def list_snapshots(db_path: Path | None = None) -> list[MonthlySnapshot]:
    """Get all stored snapshots.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Snapshots ordered by month ascending.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT month, income_cents, expense_cents, balance_cents FROM monthly_snapshots ORDER BY month")
        return [_row_to_snapshot(row) for row in cursor.fetchall()]


def upsert_snapshot(snapshot: MonthlySnapshot, db_path: Path | None = None) -> None:
    """Insert a snapshot or overwrite the one stored for its month.

    Args:
        snapshot: Snapshot to store.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    upsert_snapshots([snapshot], db_path)


def upsert_snapshots(snapshots: Iterable[MonthlySnapshot], db_path: Path | None = None) -> int:
    """Upsert several snapshots in one transaction.

    Later snapshots for the same month overwrite earlier ones.

    Args:
        snapshots: Snapshots to store.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Number of rows written.

    Raises:
        sqlite3.Error: If database operation fails; nothing is written.
    """
    params = [(s.month, s.income_cents, s.expense_cents, s.balance_cents) for s in snapshots]
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.executemany(_UPSERT_SQL, params)
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise
    logger.debug("Upserted %d snapshots", len(params))
    return len(params)


def delete_snapshot(month: Month, db_path: Path | None = None) -> int:
    """Delete the snapshot of one month.

    Args:
        month: Month in YYYY-MM format.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Number of rows deleted.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    return _delete("DELETE FROM monthly_snapshots WHERE month = ?", (month,), db_path)


def delete_year(year: Year, db_path: Path | None = None) -> int:
    """Delete every snapshot of a year.

    Args:
        year: Year in YYYY format.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Number of rows deleted.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    return _delete("DELETE FROM monthly_snapshots WHERE month LIKE ?", (f"{year}-%",), db_path)


def delete_all(db_path: Path | None = None) -> int:
    """Delete every stored snapshot.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    return _delete("DELETE FROM monthly_snapshots", (), db_path)


def _delete(query: str, params: tuple[str, ...], db_path: Path | None) -> int:
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(query, params)
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise
        deleted = cursor.rowcount
    logger.debug("Deleted %d snapshots", deleted)
    return deleted
