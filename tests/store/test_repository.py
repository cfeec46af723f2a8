"""Tests for runway.store.repository."""

from datetime import date
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

from runway.domain.entries import create_entry
from runway.domain.state import BudgetState, add_entry, default_state, state_to_dict
from runway.store.repository import LocalRepository, RemoteRepository, RepositoryError, open_repository
from runway.store.sync import SyncPolicy


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def sample_state() -> BudgetState:
    rent, _ = create_entry(1, "cost", "Rent", 900, "EUR", "monthly")
    return add_entry(default_state("EUR", today=date(2026, 1, 1)), rent)  # type: ignore[arg-type]


def response(status_code: int = 200, payload: object = None) -> MagicMock:
    mock = MagicMock(status_code=status_code)
    mock.json.return_value = payload
    if status_code >= 400:
        mock.raise_for_status.side_effect = requests.HTTPError(f"{status_code} error")
    return mock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def session() -> MagicMock:
    return MagicMock(spec=requests.Session)


@pytest.fixture
def remote(clock: FakeClock, session: MagicMock) -> RemoteRepository:
    return RemoteRepository("https://budget.example.com/api/", "secret", SyncPolicy(quiet_seconds=2.0), clock, session)


class TestLocalRepository:
    """Tests for LocalRepository."""

    def test_missing_database_loads_none(self, tmp_path: Path) -> None:
        """Should not create anything on load."""
        repo = LocalRepository(tmp_path / "runway.db")

        assert repo.load() is None
        assert not (tmp_path / "runway.db").exists()

    def test_save_creates_database(self, tmp_path: Path) -> None:
        """Should initialize the schema on first save."""
        repo = LocalRepository(tmp_path / "data" / "runway.db")
        state = sample_state()

        repo.save(state)

        assert repo.load() == state

    def test_clear(self, tmp_path: Path) -> None:
        """Should remove the stored snapshot."""
        repo = LocalRepository(tmp_path / "runway.db")
        repo.save(sample_state())

        repo.clear()

        assert repo.load() is None


class TestRemoteRepositoryLoad:
    """Tests for RemoteRepository.load."""

    def test_loads_budget_document(self, remote: RemoteRepository, session: MagicMock) -> None:
        """Should rebuild the state from budget_data."""
        state = sample_state()
        session.get.return_value = response(200, {"budget_data": state_to_dict(state)})

        assert remote.load() == state
        url = session.get.call_args.args[0]
        headers = session.get.call_args.kwargs["headers"]
        assert url == "https://budget.example.com/api/budget"
        assert headers["Authorization"] == "Bearer secret"

    def test_missing_document_is_none(self, remote: RemoteRepository, session: MagicMock) -> None:
        """Should treat 404 as nothing saved yet."""
        session.get.return_value = response(404)

        assert remote.load() is None

    def test_network_error_raises(self, remote: RemoteRepository, session: MagicMock) -> None:
        """Should wrap transport errors."""
        session.get.side_effect = requests.ConnectionError("down")

        with pytest.raises(RepositoryError, match="Could not load budget"):
            remote.load()

    def test_pending_state_is_returned_without_request(
        self, remote: RemoteRepository, session: MagicMock
    ) -> None:
        """Should serve unsaved changes from memory."""
        state = sample_state()
        remote.save(state)

        assert remote.load() == state
        session.get.assert_not_called()


class TestRemoteRepositorySave:
    """Tests for RemoteRepository.save and flushing."""

    def test_save_waits_for_quiet_period(
        self, remote: RemoteRepository, session: MagicMock, clock: FakeClock
    ) -> None:
        """Should not upload during a burst of changes."""
        remote.save(sample_state())
        clock.now = 1.0
        remote.save(sample_state())

        session.put.assert_not_called()

    def test_burst_becomes_one_upload(self, remote: RemoteRepository, session: MagicMock, clock: FakeClock) -> None:
        """Should upload the latest state once after the quiet period."""
        session.put.return_value = response(200)
        first = sample_state()
        latest = default_state("GBP", today=date(2026, 2, 1))

        remote.save(first)
        clock.now = 1.0
        remote.save(latest)
        clock.now = 3.5

        assert remote.maybe_flush()
        assert not remote.maybe_flush()
        session.put.assert_called_once()
        assert session.put.call_args.kwargs["json"] == {"budget_data": state_to_dict(latest)}

    def test_close_flushes_pending(self, remote: RemoteRepository, session: MagicMock) -> None:
        """Should upload pending changes when the session ends."""
        session.put.return_value = response(200)
        remote.save(sample_state())

        remote.close()

        session.put.assert_called_once()
        session.close.assert_called_once()

    def test_close_without_changes_does_not_upload(self, remote: RemoteRepository, session: MagicMock) -> None:
        """Should not upload anything when nothing changed."""
        remote.close()

        session.put.assert_not_called()

    def test_failed_upload_stays_dirty(self, remote: RemoteRepository, session: MagicMock) -> None:
        """Should keep changes pending when the upload fails."""
        session.put.return_value = response(500)
        remote.save(sample_state())

        with pytest.raises(RepositoryError, match="Could not save budget"):
            remote.flush()

        assert remote.policy.dirty


class TestRemoteRepositoryClear:
    """Tests for RemoteRepository.clear."""

    def test_clear_tolerates_missing_document(self, remote: RemoteRepository, session: MagicMock) -> None:
        """Should accept 404 when deleting."""
        session.delete.return_value = response(404)

        remote.clear()

        session.delete.assert_called_once()

    def test_clear_drops_pending_changes(self, remote: RemoteRepository, session: MagicMock) -> None:
        """Should forget unsaved changes."""
        session.delete.return_value = response(204)
        session.get.return_value = response(404)
        remote.save(sample_state())

        remote.clear()

        assert remote.load() is None
        assert not remote.policy.dirty


class TestOpenRepository:
    """Tests for open_repository."""

    def test_local_by_default(self, tmp_path: Path) -> None:
        """Should use local storage unless remote is selected."""
        repo = open_repository({"storage": "local"}, tmp_path / "runway.db")

        assert isinstance(repo, LocalRepository)
        assert repo.db_path == tmp_path / "runway.db"

    def test_remote_with_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should build a remote repository from config and environment."""
        monkeypatch.setenv("RUNWAY_REMOTE_TOKEN", "tok")

        repo = open_repository(
            {"storage": "remote", "remote": {"url": "https://x.example.com"}, "sync": {"quiet_seconds": 5}}
        )

        assert isinstance(repo, RemoteRepository)
        assert repo.token == "tok"
        assert repo.policy.quiet_seconds == 5.0

    def test_remote_without_url(self) -> None:
        """Should refuse remote storage without a URL."""
        with pytest.raises(RepositoryError, match="url is not set"):
            open_repository({"storage": "remote", "remote": {"url": ""}})
