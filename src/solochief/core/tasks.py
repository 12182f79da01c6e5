"""Pure task domain records - no I/O dependencies."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .reasons import ReasonCode, describe_reason

DEFAULT_ESTIMATED_MINUTES = 30
DEFAULT_LEVEL = 3


class Tier(Enum):
    """Five-tier triage classification."""

    CRITICAL = "T1"
    LEVERAGE = "T2"
    INTERRUPTION = "T3"
    DISTRACTION = "T4"
    PHANTOM = "T5"


def _coerce_int(value, default: int) -> int:
    """Best-effort int conversion; None, junk and zero fall back to default."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number or default


def normalize_minutes(value) -> int:
    """Estimated minutes must be positive; anything else becomes 30."""
    minutes = _coerce_int(value, DEFAULT_ESTIMATED_MINUTES)
    return minutes if minutes > 0 else DEFAULT_ESTIMATED_MINUTES


def normalize_level(value) -> int:
    """Importance/urgency on a 1-5 scale, defaulting to 3."""
    return max(1, min(5, _coerce_int(value, DEFAULT_LEVEL)))


def hours_between(start: datetime, end: datetime) -> float:
    """Hours from start to end, tolerating a naive/aware mix."""
    if (start.tzinfo is None) != (end.tzinfo is None):
        if start.tzinfo is None:
            start = start.astimezone(end.tzinfo)
        else:
            end = end.astimezone(start.tzinfo)
    return (end - start).total_seconds() / 3600


def _parse_datetime(value) -> datetime | None:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


@dataclass
class Task:
    """A candidate task. Tier, score and reason are written by the engine."""

    id: str
    title: str
    estimated_minutes: int = DEFAULT_ESTIMATED_MINUTES
    importance: int = DEFAULT_LEVEL
    urgency: int = DEFAULT_LEVEL
    deadline: datetime | None = None
    tags: list[str] = field(default_factory=list)
    notes: str = ""
    rollover_count: int = 0
    completed: bool = False
    created_at: datetime | None = None
    classification: Tier | None = None
    roi_score: int = 0
    reason_code: ReasonCode | None = None

    def __post_init__(self):
        self.id = str(self.id)
        self.title = self.title or ""
        self.estimated_minutes = normalize_minutes(self.estimated_minutes)
        self.importance = normalize_level(self.importance)
        self.urgency = normalize_level(self.urgency)
        self.tags = list(self.tags or [])
        self.notes = self.notes or ""
        self.rollover_count = max(0, _coerce_int(self.rollover_count, 0))

    @property
    def reason(self) -> str:
        """Display text for the engine's reason code."""
        return describe_reason(self.reason_code)

    def hours_until_deadline(self, now: datetime) -> float | None:
        """Hours until the deadline (negative if overdue), None without one."""
        if self.deadline is None:
            return None
        return hours_between(now, self.deadline)

    def to_dict(self) -> dict:
        """Serialize every field to JSON-compatible values."""
        return {
            "id": self.id,
            "title": self.title,
            "estimated_minutes": self.estimated_minutes,
            "importance": self.importance,
            "urgency": self.urgency,
            "deadline": self.deadline.isoformat() if self.deadline else None,
            "tags": list(self.tags),
            "notes": self.notes,
            "rollover_count": self.rollover_count,
            "completed": self.completed,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "classification": self.classification.value if self.classification else None,
            "roi_score": self.roi_score,
            "reason_code": self.reason_code.value if self.reason_code else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """Rehydrate a Task from to_dict() output. Raises TypeError on wrongly typed text fields."""
        title = data["title"]
        if not isinstance(title, str):
            raise TypeError(f"Task title must be a string, got {type(title).__name__}")
        tags = data.get("tags") or []
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            raise TypeError(f"Task tags must be a list of strings, got {tags!r}")
        notes = data.get("notes") or ""
        if not isinstance(notes, str):
            raise TypeError(f"Task notes must be a string, got {type(notes).__name__}")

        classification = data.get("classification")
        reason_code = data.get("reason_code")
        return cls(
            id=data["id"],
            title=title,
            estimated_minutes=data.get("estimated_minutes"),
            importance=data.get("importance"),
            urgency=data.get("urgency"),
            deadline=_parse_datetime(data.get("deadline")),
            tags=list(tags),
            notes=notes,
            rollover_count=data.get("rollover_count", 0),
            completed=bool(data.get("completed", False)),
            created_at=_parse_datetime(data.get("created_at")),
            classification=Tier(classification) if classification else None,
            roi_score=int(data.get("roi_score", 0)),
            reason_code=ReasonCode(reason_code) if reason_code else None,
        )


@dataclass
class Goal:
    """A goal whose description words feed goal alignment."""

    description: str
    progress: int = 0

    def to_dict(self) -> dict:
        return {"description": self.description, "progress": self.progress}

    @classmethod
    def from_dict(cls, data: dict) -> "Goal":
        description = data["description"]
        if not isinstance(description, str):
            raise TypeError(f"Goal description must be a string, got {type(description).__name__}")
        return cls(description=description, progress=int(data.get("progress", 0)))


@dataclass
class UserContext:
    """Scoring environment. Counters are owned by the surrounding session."""

    goals: list[Goal] = field(default_factory=list)
    energy_level: int = 4
    available_minutes: int = 480
    completed_today: int = 0
    focus_time_minutes: float = 0.0
    day_streak: int = 0
    distractions_blocked: int = 0

    def to_dict(self) -> dict:
        return {
            "goals": [g.to_dict() for g in self.goals],
            "energy_level": self.energy_level,
            "available_minutes": self.available_minutes,
            "completed_today": self.completed_today,
            "focus_time_minutes": self.focus_time_minutes,
            "day_streak": self.day_streak,
            "distractions_blocked": self.distractions_blocked,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UserContext":
        defaults = cls()
        return cls(
            goals=[Goal.from_dict(g) for g in data.get("goals", [])],
            energy_level=int(data.get("energy_level", defaults.energy_level)),
            available_minutes=int(data.get("available_minutes", defaults.available_minutes)),
            completed_today=int(data.get("completed_today", 0)),
            focus_time_minutes=float(data.get("focus_time_minutes", 0.0)),
            day_streak=int(data.get("day_streak", 0)),
            distractions_blocked=int(data.get("distractions_blocked", 0)),
        )
