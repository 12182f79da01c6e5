"""File-based snapshot storage adapter."""

import json
import logging
from datetime import datetime
from pathlib import Path

from solochief.core.session import Snapshot
from solochief.core.tasks import Task, UserContext

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1


class SnapshotError(Exception):
    """Saved snapshot could not be read."""


class FileSnapshotStore:
    """
    JSON snapshot storage.

    Implements SnapshotStore protocol. Tasks and context live in one file;
    scores are saved but callers re-triage after loading.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> Snapshot | None:
        """Read the snapshot. Returns None if the file doesn't exist."""
        if not self.path.exists():
            return None

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"Snapshot {self.path} is not valid JSON: {e}")
            raise SnapshotError(f"Snapshot {self.path} is not valid JSON: {e}") from e
        except OSError as e:
            logger.error(f"Could not read snapshot {self.path}: {e}")
            raise SnapshotError(f"Could not read snapshot {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise SnapshotError(f"Snapshot {self.path} must contain a JSON object")

        version = data.get("version", SNAPSHOT_VERSION)
        if version != SNAPSHOT_VERSION:
            raise SnapshotError(f"Unsupported snapshot version {version} in {self.path}")

        try:
            tasks = [Task.from_dict(t) for t in data.get("tasks", [])]
            context = UserContext.from_dict(data.get("user_context", {}))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error(f"Malformed record in snapshot {self.path}: {e!r}")
            raise SnapshotError(f"Malformed record in snapshot {self.path}: {e!r}") from e

        logger.debug(f"Loaded {len(tasks)} tasks from {self.path}")
        return Snapshot(tasks=tasks, context=context)

    def save(self, snapshot: Snapshot, saved_at: datetime | None = None) -> None:
        """Write/overwrite the snapshot file. saved_at defaults to wall-clock time."""
        saved_at = saved_at or datetime.now()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(
                {
                    "version": SNAPSHOT_VERSION,
                    "saved_at": saved_at.isoformat(),
                    "tasks": [t.to_dict() for t in snapshot.tasks],
                    "user_context": snapshot.context.to_dict(),
                },
                indent=2,
            ),
            encoding="utf-8",
        )
        logger.debug(f"Saved {len(snapshot.tasks)} tasks to {self.path}")
