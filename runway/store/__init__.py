"""Persistence layer - where the budget snapshot is kept.

This module re-exports the public store API for easy importing.
"""

from runway.store.queries import clear_state, count_records, load_state, save_state
from runway.store.repository import (
    BudgetRepository,
    LocalRepository,
    RemoteRepository,
    RepositoryError,
    open_repository,
)
from runway.store.schema import database_exists, get_db_path, init_database
from runway.store.sync import SyncPolicy

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Queries
    "clear_state",
    "count_records",
    "load_state",
    "save_state",
    # Repositories
    "BudgetRepository",
    "LocalRepository",
    "RemoteRepository",
    "RepositoryError",
    "SyncPolicy",
    "open_repository",
]
