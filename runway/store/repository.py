"""Budget repositories.

One repository is chosen per session and the rest of the program only sees
the BudgetRepository interface:
- LocalRepository keeps the snapshot in a sqlite file
- RemoteRepository keeps it as a JSON document on a remote service, saving
  through a SyncPolicy so bursts of changes become a single upload
"""

import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path
from typing import Any

import requests

from runway.config import get_remote_token
from runway.domain.state import BudgetState, state_from_dict, state_to_dict
from runway.log import get_logger
from runway.store.queries import clear_state, load_state, save_state
from runway.store.schema import database_exists, get_db_path, init_database
from runway.store.sync import SyncPolicy

REQUEST_TIMEOUT = 10

log = get_logger(__name__)


class RepositoryError(Exception):
    """Raised when the budget snapshot cannot be loaded or stored."""


class BudgetRepository(ABC):
    """Where the budget snapshot lives."""

    @abstractmethod
    def load(self) -> BudgetState | None:
        """Load the snapshot, or None if nothing has been saved."""

    @abstractmethod
    def save(self, state: BudgetState) -> None:
        """Store the snapshot."""

    @abstractmethod
    def clear(self) -> None:
        """Delete the stored snapshot."""

    def close(self) -> None:
        """Release resources and write anything still pending."""


class LocalRepository(BudgetRepository):
    """Snapshot stored in a local sqlite database."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    def load(self) -> BudgetState | None:
        if not database_exists(self.db_path):
            return None
        return load_state(self.db_path)

    def save(self, state: BudgetState) -> None:
        if not database_exists(self.db_path):
            init_database(self.db_path)
        save_state(state, self.db_path)

    def clear(self) -> None:
        if database_exists(self.db_path):
            clear_state(self.db_path)


class RemoteRepository(BudgetRepository):
    """Snapshot stored as a JSON document behind an HTTP API.

    Endpoints, relative to `base_url`:
    - GET /budget     returns {"budget_data": {...}} or 404 when empty
    - PUT /budget     upserts {"budget_data": {...}}
    - DELETE /budget  removes the document
    """

    def __init__(
        self,
        base_url: str,
        token: str | None,
        policy: SyncPolicy | None = None,
        clock: Callable[[], float] = time.monotonic,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.policy = policy or SyncPolicy()
        self.clock = clock
        self.session = session or requests.Session()
        self._pending: BudgetState | None = None

    @property
    def url(self) -> str:
        return f"{self.base_url}/budget"

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def load(self) -> BudgetState | None:
        if self._pending is not None:
            return self._pending

        try:
            response = self.session.get(self.url, headers=self._headers(), timeout=REQUEST_TIMEOUT)
            if response.status_code == 404:
                log.info("remote.load_empty", url=self.url)
                return None
            response.raise_for_status()
            data: dict[str, Any] | None = response.json().get("budget_data")
        except (requests.RequestException, ValueError, AttributeError) as e:
            log.error("remote.load_failed", url=self.url, error=str(e))
            raise RepositoryError(f"Could not load budget from {self.url}: {e}") from e

        if not data:
            return None
        return state_from_dict(data)

    def save(self, state: BudgetState) -> None:
        self._pending = state
        self.policy.mark_dirty(self.clock())
        self.maybe_flush()

    def maybe_flush(self) -> bool:
        """Upload pending changes if the quiet period has elapsed.

        Returns:
            True if an upload happened.
        """
        if not self.policy.should_flush(self.clock()):
            return False
        self.flush()
        return True

    def flush(self) -> None:
        """Upload pending changes now."""
        if self._pending is None or not self.policy.dirty:
            return

        try:
            response = self.session.put(
                self.url,
                json={"budget_data": state_to_dict(self._pending)},
                headers=self._headers(),
                timeout=REQUEST_TIMEOUT,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            log.error("remote.save_failed", url=self.url, error=str(e))
            raise RepositoryError(f"Could not save budget to {self.url}: {e}") from e

        log.info("remote.saved", url=self.url)
        self.policy.mark_clean()

    def clear(self) -> None:
        try:
            response = self.session.delete(self.url, headers=self._headers(), timeout=REQUEST_TIMEOUT)
            if response.status_code != 404:
                response.raise_for_status()
        except requests.RequestException as e:
            log.error("remote.clear_failed", url=self.url, error=str(e))
            raise RepositoryError(f"Could not delete budget at {self.url}: {e}") from e

        self._pending = None
        self.policy.mark_clean()

    def close(self) -> None:
        self.flush()
        self.session.close()


def open_repository(config: dict[str, Any], db_path: Path | None = None) -> BudgetRepository:
    """Choose the repository for this session from configuration.

    Args:
        config: Loaded configuration.
        db_path: Local database path override.

    Returns:
        LocalRepository, or RemoteRepository when storage = "remote".

    Raises:
        RepositoryError: If remote storage is selected without a URL.
    """
    if config.get("storage") == "remote":
        url = config.get("remote", {}).get("url")
        if not url:
            raise RepositoryError("Remote storage selected but [remote] url is not set")
        quiet = float(config.get("sync", {}).get("quiet_seconds", 2.0))
        return RemoteRepository(url, get_remote_token(), SyncPolicy(quiet_seconds=quiet))

    return LocalRepository(db_path)
