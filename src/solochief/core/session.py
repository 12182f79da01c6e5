"""Task lifecycle operations used by the surrounding application."""

import math
import uuid
from dataclasses import dataclass, field
from datetime import datetime, time, timedelta

from .tasks import Task, Tier, UserContext

VIEWS = ("all", "critical", "leverage", "today")

ROLLOVER_HOUR = 9


class TaskNotFoundError(KeyError):
    """No task with the requested id."""

    def __init__(self, task_id: str):
        super().__init__(task_id)
        self.task_id = task_id

    def __str__(self) -> str:
        return f"No task with id '{self.task_id}'"


@dataclass
class Snapshot:
    """Everything persisted between sessions."""

    tasks: list[Task] = field(default_factory=list)
    context: UserContext = field(default_factory=UserContext)


def new_task_id() -> str:
    return uuid.uuid4().hex[:8]


def find_task(tasks: list[Task], task_id: str) -> Task:
    for task in tasks:
        if task.id == task_id:
            return task
    raise TaskNotFoundError(task_id)


def complete_task(task: Task, context: UserContext, focus_minutes: float = 0.0) -> bool:
    """
    Mark a task done and bump the day's counters.

    Returns False (and changes nothing) if it was already completed.
    """
    if task.completed:
        return False
    task.completed = True
    context.completed_today += 1
    context.focus_time_minutes += max(0.0, focus_minutes)
    return True


def rollover_task(task: Task, now: datetime) -> Task:
    """Defer a task to tomorrow morning."""
    task.rollover_count += 1
    tomorrow = (now + timedelta(days=1)).date()
    task.deadline = datetime.combine(tomorrow, time(ROLLOVER_HOUR), tzinfo=now.tzinfo)
    return task


def delete_task(tasks: list[Task], task_id: str, context: UserContext) -> list[Task]:
    """Drop a task and count it as a blocked distraction."""
    find_task(tasks, task_id)
    context.distractions_blocked += 1
    return [t for t in tasks if t.id != task_id]


def filter_view(tasks: list[Task], view: str = "all", now: datetime | None = None) -> list[Task]:
    """Open tasks for a dashboard view, highest ROI first."""
    now = now or datetime.now()
    visible = [t for t in tasks if not t.completed]

    match view:
        case "all":
            pass
        case "critical":
            visible = [t for t in visible if t.classification == Tier.CRITICAL]
        case "leverage":
            visible = [t for t in visible if t.classification == Tier.LEVERAGE]
        case "today":
            visible = [t for t in visible if t.deadline and t.deadline.date() == now.date()]
        case _:
            raise ValueError(f"Unknown view '{view}' (expected one of {', '.join(VIEWS)})")

    return sorted(visible, key=lambda t: -t.roi_score)


def tier_counts(tasks: list[Task]) -> dict[Tier, int]:
    """Open tasks per tier."""
    counts = {tier: 0 for tier in Tier}
    for task in tasks:
        if not task.completed and task.classification:
            counts[task.classification] += 1
    return counts


def focus_session_minutes(task: Task) -> int:
    """Focus block length: estimate rounded to 10 minutes, kept within 25-60."""
    rounded = math.floor(task.estimated_minutes / 10 + 0.5) * 10
    return min(60, max(25, rounded))
