"""Batch triage, final classification and next-action recommendation."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from .heuristics import apply_heuristic_rules
from .reasons import ReasonCode, RecommendationCode, describe_recommendation
from .scoring import (
    DEFAULT_WEIGHTS,
    ScoringWeights,
    apply_strategic_adjustments,
    calculate_roi_score,
)
from .tasks import Task, Tier, UserContext

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

# Share of the remaining day a recommended task may take up
TIME_BUDGET_RATIO = 0.8

HIDDEN_FROM_RECOMMENDATION = (Tier.DISTRACTION, Tier.PHANTOM)

RECOMMENDATION_CODES = {
    Tier.CRITICAL: RecommendationCode.CRITICAL,
    Tier.LEVERAGE: RecommendationCode.LEVERAGE,
    Tier.INTERRUPTION: RecommendationCode.INTERRUPTION,
}


@dataclass
class Recommendation:
    """The single next action, or none when nothing fits."""

    task: Task | None
    code: RecommendationCode

    @property
    def why(self) -> str:
        if self.task is None:
            return describe_recommendation(self.code)
        return describe_recommendation(self.code, self.task.urgency, self.task.roi_score)


def classify_task(task: Task, roi_score: int) -> tuple[Tier, ReasonCode]:
    """
    Assign a tier from the adjusted ROI score. First match wins.

    Only used for tasks no heuristic rule claimed.
    """
    if roi_score >= 60 and task.importance >= 4 and task.urgency <= 3:
        return Tier.LEVERAGE, ReasonCode.LEVERAGE_PROTECT
    if roi_score >= 70 and task.urgency >= 4:
        return Tier.CRITICAL, ReasonCode.CRITICAL_DO_NOW
    if task.urgency >= 4 and task.importance <= 2:
        return Tier.INTERRUPTION, ReasonCode.INTERRUPTION_DELEGATE
    if roi_score >= 50:
        return Tier.LEVERAGE, ReasonCode.LEVERAGE_GOOD_ROI
    if roi_score >= 30:
        return Tier.INTERRUPTION, ReasonCode.INTERRUPTION_MODERATE
    return Tier.DISTRACTION, ReasonCode.DISTRACTION_LOW_ROI


def triage_task(
    task: Task,
    context: UserContext,
    now: datetime,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> Task:
    """Classify and score a single task in place."""
    match = apply_heuristic_rules(task, now)
    if match:
        task.classification = match.tier
        task.roi_score = match.roi_score
        task.reason_code = match.reason_code
        logger.debug(f"Task {task.id} -> {match.tier.value} by heuristic ({match.trigger})")
        return task

    provisional = calculate_roi_score(task, context, now, weights)
    task.roi_score = apply_strategic_adjustments(task, provisional)
    task.classification, task.reason_code = classify_task(task, task.roi_score)
    logger.debug(
        f"Task {task.id} -> {task.classification.value} "
        f"(provisional {provisional}, final {task.roi_score})"
    )
    return task


def triage_tasks(
    tasks: list[Task],
    context: UserContext,
    now: datetime | None = None,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> list[Task]:
    """
    Triage every incomplete task and sort by ROI score (descending).

    Tasks are updated in place; completed tasks are skipped and left out of
    the result. The sort is stable, so equal scores keep input order.
    """
    now = now or datetime.now()
    results = [triage_task(t, context, now, weights) for t in tasks if not t.completed]
    return sorted(results, key=lambda t: -t.roi_score)


def fits_constraints(task: Task, context: UserContext) -> bool:
    """Whether a triaged task fits the user's time, energy and tier filters."""
    if task.estimated_minutes > context.available_minutes * TIME_BUDGET_RATIO:
        return False

    energy_needed = 5 if task.importance >= 4 else 3
    if energy_needed > context.energy_level + 1:
        return False

    return task.classification not in HIDDEN_FROM_RECOMMENDATION


def get_recommended_action(
    tasks: list[Task],
    context: UserContext,
    now: datetime | None = None,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> Recommendation:
    """Re-run triage and pick the highest-ROI task that fits right now."""
    triaged = triage_tasks(tasks, context, now, weights)
    fit = [t for t in triaged if fits_constraints(t, context)]

    if not fit:
        return Recommendation(task=None, code=RecommendationCode.NO_FIT)

    top = fit[0]
    return Recommendation(
        task=top,
        code=RECOMMENDATION_CODES.get(top.classification, RecommendationCode.ROI),
    )


class TriageEngine:
    """
    Triage functions bound to a weight configuration and a clock.

    The clock is read once per call so every task in a batch is judged
    against the same instant.
    """

    def __init__(self, weights: ScoringWeights = DEFAULT_WEIGHTS, clock: Clock | None = None):
        self.weights = weights
        self.clock = clock or datetime.now

    def now(self) -> datetime:
        return self.clock()

    def triage(self, tasks: list[Task], context: UserContext) -> list[Task]:
        return triage_tasks(tasks, context, self.clock(), self.weights)

    def recommend(self, tasks: list[Task], context: UserContext) -> Recommendation:
        return get_recommended_action(tasks, context, self.clock(), self.weights)
