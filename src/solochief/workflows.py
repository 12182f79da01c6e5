"""Shared workflow layer between the CLI and snapshot storage.

Each function loads or mutates a Snapshot; triage is always re-run after a
load or a change so scores reflect the current context.
"""

import logging
from datetime import datetime, timedelta

from .adapters.file_snapshot import FileSnapshotStore
from .config import Config
from .core.session import Snapshot, new_task_id
from .core.tasks import Goal, Task, UserContext
from .core.triage import Clock, TriageEngine
from .ports.snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)


def get_store(config: Config) -> FileSnapshotStore:
    """Resolve the snapshot file from config."""
    return FileSnapshotStore(config.snapshot_path())


def get_engine(config: Config, clock: Clock | None = None) -> TriageEngine:
    """Build an engine from configured weights. Raises ValueError on bad weights."""
    return TriageEngine(weights=config.weights(), clock=clock)


def fresh_context(config: Config) -> UserContext:
    """Context for a first session, seeded from config."""
    return UserContext(
        goals=[Goal(g.description, g.progress) for g in config.goals],
        energy_level=config.energy_level,
        available_minutes=config.available_minutes,
    )


def load_session(store: SnapshotStore, engine: TriageEngine, config: Config) -> Snapshot:
    """Load the saved snapshot (or start a new one) and re-triage it."""
    snapshot = store.load()
    if snapshot is None:
        logger.info("No saved snapshot, starting a new session")
        snapshot = Snapshot(context=fresh_context(config))
    engine.triage(snapshot.tasks, snapshot.context)
    return snapshot


def save_session(store: SnapshotStore, engine: TriageEngine, snapshot: Snapshot) -> None:
    """Re-triage and persist."""
    engine.triage(snapshot.tasks, snapshot.context)
    store.save(snapshot, saved_at=engine.now())


def add_task(
    snapshot: Snapshot,
    engine: TriageEngine,
    title: str,
    estimated_minutes: int | None = None,
    importance: int | None = None,
    urgency: int | None = None,
    deadline: datetime | None = None,
    tags: list[str] | None = None,
    notes: str = "",
) -> Task:
    """Create a task, append it and triage the list."""
    task = Task(
        id=new_task_id(),
        title=title.strip(),
        estimated_minutes=estimated_minutes,
        importance=importance,
        urgency=urgency,
        deadline=deadline,
        tags=[t.strip() for t in tags or [] if t.strip()],
        notes=notes,
        created_at=engine.now(),
    )
    snapshot.tasks.append(task)
    engine.triage(snapshot.tasks, snapshot.context)
    return task


# ============== Sample Data ==============


def sample_snapshot(now: datetime) -> Snapshot:
    """Demo tasks and goals covering every tier."""
    soon = (now + timedelta(hours=24)).replace(second=0, microsecond=0)
    later = (now + timedelta(hours=48)).replace(second=0, microsecond=0)

    def task(id, title, minutes, importance, urgency, deadline=None, tags=(), notes=""):
        return Task(
            id=id,
            title=title,
            estimated_minutes=minutes,
            importance=importance,
            urgency=urgency,
            deadline=deadline,
            tags=list(tags),
            notes=notes,
            created_at=now,
        )

    tasks = [
        task("1", "Finalize Q1 pricing proposal for Enterprise client", 45, 5, 4, soon,
             ["client", "revenue"], "$50K deal at risk"),
        task("2", "Review analytics dashboard", 20, 3, 2, tags=["analytics"]),
        task("3", "Think about newsletter redesign", 90, 2, 1, tags=["newsletter"]),
        task("4", "Respond to vendor email", 5, 2, 4, tags=["email"]),
        task("5", "Ship One Thing Lock feature prototype", 90, 5, 3, later,
             ["product", "ship"], "Core feature for MVP"),
        task("6", "Check Twitter mentions", 10, 1, 2, tags=["social"]),
        task("7", "Plan Q2 strategy", 60, 4, 2, tags=["strategy"]),
        task("8", "Organize desktop files", 30, 1, 1, tags=["admin"]),
    ]
    context = UserContext(
        goals=[Goal("Ship Solo Chief MVP", 65), Goal("Reach $10k MRR", 30)],
        energy_level=4,
        available_minutes=480,
        day_streak=7,
    )
    return Snapshot(tasks=tasks, context=context)


def seed_sample_data(store: SnapshotStore, engine: TriageEngine) -> Snapshot:
    """Replace the saved snapshot with the demo data."""
    snapshot = sample_snapshot(engine.now())
    save_session(store, engine, snapshot)
    return snapshot
