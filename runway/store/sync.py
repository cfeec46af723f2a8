"""Dirty-state tracking for deferred remote saves.

A save marks the snapshot dirty. It is only uploaded once no further save
has happened for `quiet_seconds`, so a burst of edits becomes one upload.
The clock is passed in by the caller.
"""

from dataclasses import dataclass


@dataclass
class SyncPolicy:
    """Flush-after-quiet-period policy."""

    quiet_seconds: float = 2.0
    dirty: bool = False
    last_change: float | None = None

    def mark_dirty(self, now: float) -> None:
        """Record a change at time `now`."""
        self.dirty = True
        self.last_change = now

    def should_flush(self, now: float) -> bool:
        """Whether pending changes have been quiet long enough to upload."""
        if not self.dirty or self.last_change is None:
            return False
        return now - self.last_change >= self.quiet_seconds

    def mark_clean(self) -> None:
        """Record a successful upload."""
        self.dirty = False
        self.last_change = None
