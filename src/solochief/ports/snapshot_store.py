"""Snapshot storage interface."""

from datetime import datetime
from typing import Protocol

from solochief.core.session import Snapshot


class SnapshotStore(Protocol):
    """Interface for persisting tasks and user context."""

    def load(self) -> Snapshot | None:
        """Load the saved snapshot. Returns None if nothing was saved yet."""
        ...

    def save(self, snapshot: Snapshot, saved_at: datetime | None = None) -> None:
        """Write/overwrite the snapshot, stamped with saved_at."""
        ...

    def exists(self) -> bool:
        """Check if a snapshot has been saved."""
        ...
