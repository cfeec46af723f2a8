"""Copy the budget between local and remote storage."""

import sqlite3

from runway.commands.common import console, fail, load_settings
from runway.config import get_remote_token
from runway.log import get_logger
from runway.store.repository import BudgetRepository, LocalRepository, RemoteRepository, RepositoryError
from runway.store.sync import SyncPolicy

log = get_logger(__name__)

DIRECTIONS = ("push", "pull")


def copy_budget(source: BudgetRepository, target: BudgetRepository) -> bool:
    """Copy the snapshot from one repository to another.

    Args:
        source: Repository to read from, closed afterwards.
        target: Repository to write to, closed afterwards so pending uploads are flushed.

    Returns:
        True if a snapshot was copied, False if the source was empty.
    """
    try:
        state = source.load()
        if state is None:
            return False
        target.save(state)
        return True
    finally:
        source.close()
        target.close()


def sync_command(direction: str) -> None:
    """Push the local budget to the remote service, or pull it back."""
    if direction not in DIRECTIONS:
        fail(f"Unknown direction '{direction}'. Use push or pull")

    config = load_settings()
    url = config["remote"].get("url")
    if not url:
        fail("No remote configured. Set [remote] url in the config file")

    local = LocalRepository()
    # Zero quiet period so the copy is uploaded on save
    remote = RemoteRepository(url, get_remote_token(), SyncPolicy(quiet_seconds=0))
    source, target = (local, remote) if direction == "push" else (remote, local)

    log.info("sync.start", direction=direction, url=url)
    try:
        copied = copy_budget(source, target)
    except RepositoryError as e:
        fail(f"Sync failed: {e}")
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    if not copied:
        console.print(f"[yellow]Nothing to {direction}: the source budget is empty[/yellow]")
        return

    log.info("sync.done", direction=direction)
    where = "remote" if direction == "push" else "local database"
    console.print(f"[green]✓[/green] Budget copied to {where}")
