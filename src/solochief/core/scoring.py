"""
Weighted ROI scoring and strategic adjustments.

Score formula:
    roi = (goal_alignment * 0.30) + (impact * 0.25) + (time_efficiency * 0.20)
          + (deadline_proximity * 0.15) + (energy_fit * 0.10)

The weighted sum is clamped to 0-100 and rounded. Strategic adjustments are
then added on top WITHOUT re-clamping, so a final score can sit outside
0-100 (e.g. a 95 quick win becomes 105). Classification and display accept
that range.
"""

import math
from dataclasses import dataclass, field, fields
from datetime import datetime

from .keywords import (
    HIGH_ENERGY_KEYWORDS,
    LEARNING_TAGS,
    LEVERAGE_KEYWORDS,
    LOW_ENERGY_KEYWORDS,
    RECURRING_TAG,
    REVENUE_TAGS,
    contains_any,
    has_tag_in,
)
from .tasks import Task, UserContext


@dataclass(frozen=True)
class ScoringWeights:
    """Immutable factor weights. Must sum to 1.0."""

    goal_alignment: float = 0.30
    impact_magnitude: float = 0.25
    time_efficiency: float = 0.20
    deadline_proximity: float = 0.15
    energy_fit: float = 0.10

    def __post_init__(self):
        if not all(math.isfinite(getattr(self, f.name)) for f in fields(self)):
            raise ValueError("Scoring weights must be finite numbers")
        total = sum(getattr(self, f.name) for f in fields(self))
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Scoring weights must sum to 1.0, got {total:.4f}")
        if any(getattr(self, f.name) < 0 for f in fields(self)):
            raise ValueError("Scoring weights must be non-negative")


DEFAULT_WEIGHTS = ScoringWeights()


def round_half_up(value: float) -> int:
    """Round .5 upwards (round() would round to even)."""
    return math.floor(value + 0.5)


# ============== Factors ==============


def goal_alignment(task: Task, context: UserContext) -> int:
    """
    How directly does this advance a goal?

    90 = a goal word (longer than 4 chars) appears in the title or tags
    60 = a leverage keyword in the title
    30 = no clear connection
    """
    title = task.title.lower()
    tags = " ".join(t.lower() for t in task.tags)

    for goal in context.goals:
        for word in goal.description.lower().split():
            if len(word) > 4 and (word in title or word in tags):
                return 90

    if contains_any(task.title, LEVERAGE_KEYWORDS):
        return 60

    return 30


def impact_magnitude(task: Task) -> int:
    """Importance x 20 plus revenue (+15) and learning (+10) tag bonuses, capped at 100."""
    impact = task.importance * 20

    if has_tag_in(task.tags, REVENUE_TAGS):
        impact = min(100, impact + 15)

    if has_tag_in(task.tags, LEARNING_TAGS):
        impact = min(100, impact + 10)

    return impact


def time_efficiency(task: Task) -> float:
    """Quick-win bias: 100 at 60 minutes or less, falling off for longer tasks."""
    if task.estimated_minutes <= 0:
        return 50
    return min(100, (60 / task.estimated_minutes) * 100)


def deadline_proximity(task: Task, now: datetime) -> int:
    """Stepwise score by hours until deadline."""
    hours = task.hours_until_deadline(now)
    if hours is None:
        return 30

    if hours <= 0:
        return 100  # overdue
    elif hours <= 2:
        return 95
    elif hours <= 8:
        return 85
    elif hours <= 24:
        return 70
    elif hours <= 48:
        return 50
    elif hours <= 168:
        return 30
    else:
        return 10


def required_energy(task: Task) -> int:
    """Energy a task demands, inferred from its title."""
    if contains_any(task.title, HIGH_ENERGY_KEYWORDS):
        return 5
    if contains_any(task.title, LOW_ENERGY_KEYWORDS):
        return 2
    return 3


def energy_fit(task: Task, context: UserContext) -> int:
    """100 on a perfect match, minus 20 per level of mismatch."""
    diff = abs(required_energy(task) - context.energy_level)
    return max(0, 100 - diff * 20)


# ============== Combination ==============


@dataclass
class ScoreBreakdown:
    """Every intermediate value behind a task's ROI score."""

    goal_alignment: float
    impact_magnitude: float
    time_efficiency: float
    deadline_proximity: float
    energy_fit: float
    provisional: int
    adjustments: list[tuple[str, int]] = field(default_factory=list)

    @property
    def final(self) -> int:
        return self.provisional + sum(delta for _, delta in self.adjustments)


def combine_factors(factors: dict[str, float], weights: ScoringWeights = DEFAULT_WEIGHTS) -> int:
    """Weighted sum of factor scores, clamped to 0-100 and rounded."""
    roi = sum(factors[name] * getattr(weights, name) for name in factors)
    return round_half_up(max(0, min(100, roi)))


def strategic_adjustments(task: Task) -> list[tuple[str, int]]:
    """All applicable (label, delta) adjustments for a task."""
    adjustments = []

    if task.rollover_count >= 3:
        adjustments.append(("chronic_rollover", -15))

    if any(tag.lower() == RECURRING_TAG for tag in task.tags):
        adjustments.append(("recurring", 10))

    if task.estimated_minutes <= 30 and task.importance >= 3:
        adjustments.append(("quick_win", 10))

    return adjustments


def score_breakdown(
    task: Task,
    context: UserContext,
    now: datetime,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> ScoreBreakdown:
    """Compute every factor, the provisional score and the adjustments."""
    factors = {
        "goal_alignment": goal_alignment(task, context),
        "impact_magnitude": impact_magnitude(task),
        "time_efficiency": time_efficiency(task),
        "deadline_proximity": deadline_proximity(task, now),
        "energy_fit": energy_fit(task, context),
    }
    return ScoreBreakdown(
        **factors,
        provisional=combine_factors(factors, weights),
        adjustments=strategic_adjustments(task),
    )


def calculate_roi_score(
    task: Task,
    context: UserContext,
    now: datetime,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> int:
    """Provisional ROI score (0-100), before adjustments."""
    return score_breakdown(task, context, now, weights).provisional


def apply_strategic_adjustments(task: Task, roi_score: int) -> int:
    """Add every applicable adjustment to a score. No clamping."""
    return roi_score + sum(delta for _, delta in strategic_adjustments(task))
