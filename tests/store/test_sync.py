"""Tests for runway.store.sync.SyncPolicy."""

from runway.store.sync import SyncPolicy


class TestSyncPolicy:
    """Tests for SyncPolicy."""

    def test_clean_policy_never_flushes(self) -> None:
        """Should not flush without changes."""
        assert not SyncPolicy().should_flush(100.0)

    def test_waits_for_quiet_period(self) -> None:
        """Should flush only after quiet_seconds without changes."""
        policy = SyncPolicy(quiet_seconds=2.0)
        policy.mark_dirty(10.0)

        assert not policy.should_flush(11.0)
        assert policy.should_flush(12.0)

    def test_new_change_restarts_quiet_period(self) -> None:
        """Should measure the quiet period from the latest change."""
        policy = SyncPolicy(quiet_seconds=2.0)
        policy.mark_dirty(10.0)
        policy.mark_dirty(11.5)

        assert not policy.should_flush(12.5)
        assert policy.should_flush(13.5)

    def test_mark_clean(self) -> None:
        """Should reset after an upload."""
        policy = SyncPolicy(quiet_seconds=0)
        policy.mark_dirty(1.0)
        policy.mark_clean()

        assert not policy.dirty
        assert policy.last_change is None
        assert not policy.should_flush(5.0)

    def test_zero_quiet_period_flushes_immediately(self) -> None:
        """Should allow immediate uploads."""
        policy = SyncPolicy(quiet_seconds=0)
        policy.mark_dirty(3.0)

        assert policy.should_flush(3.0)
