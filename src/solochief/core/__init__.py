"""Functional core - pure triage logic with no I/O."""

from .tasks import Task, Goal, UserContext, Tier
from .reasons import ReasonCode, RecommendationCode, describe_reason, describe_recommendation
from .heuristics import HeuristicMatch, apply_heuristic_rules
from .scoring import (
    ScoringWeights,
    DEFAULT_WEIGHTS,
    ScoreBreakdown,
    score_breakdown,
    calculate_roi_score,
    apply_strategic_adjustments,
)
from .triage import (
    Recommendation,
    TriageEngine,
    classify_task,
    triage_tasks,
    get_recommended_action,
)
from .session import (
    Snapshot,
    TaskNotFoundError,
    complete_task,
    rollover_task,
    delete_task,
    filter_view,
    tier_counts,
    focus_session_minutes,
)

__all__ = [
    # Records
    "Task",
    "Goal",
    "UserContext",
    "Tier",
    # Reasons
    "ReasonCode",
    "RecommendationCode",
    "describe_reason",
    "describe_recommendation",
    # Heuristics
    "HeuristicMatch",
    "apply_heuristic_rules",
    # Scoring
    "ScoringWeights",
    "DEFAULT_WEIGHTS",
    "ScoreBreakdown",
    "score_breakdown",
    "calculate_roi_score",
    "apply_strategic_adjustments",
    # Triage
    "Recommendation",
    "TriageEngine",
    "classify_task",
    "triage_tasks",
    "get_recommended_action",
    # Session
    "Snapshot",
    "TaskNotFoundError",
    "complete_task",
    "rollover_task",
    "delete_task",
    "filter_view",
    "tier_counts",
    "focus_session_minutes",
]
