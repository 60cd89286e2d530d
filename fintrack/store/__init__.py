"""Database store layer - provides persistence for the application.

This module re-exports all public database functions for easy importing.
"""

from fintrack.store.queries import (
    delete_all,
    delete_snapshot,
    delete_year,
    get_snapshot,
    list_snapshots,
    upsert_snapshot,
    upsert_snapshots,
)
from fintrack.store.schema import SNAPSHOTS_SCHEMA, database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "SNAPSHOTS_SCHEMA",
    "database_exists",
    "get_db_path",
    "init_database",
    # Queries
    "delete_all",
    "delete_snapshot",
    "delete_year",
    "get_snapshot",
    "list_snapshots",
    "upsert_snapshot",
    "upsert_snapshots",
]
