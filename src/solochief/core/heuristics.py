"""Heuristic rule layer - short-circuits obvious cases before scoring."""

from dataclasses import dataclass
from datetime import datetime

from .keywords import (
    ACTION_VERBS,
    CRITICAL_TAGS,
    DISTRACTION_KEYWORDS,
    URGENCY_KEYWORDS,
    contains_any,
    has_tag_in,
)
from .reasons import ReasonCode
from .tasks import Task, Tier

CRITICAL_SCORE = 90
DISTRACTION_SCORE = 15
PHANTOM_SCORE = 10

MAX_TITLE_WORDS = 15


@dataclass(frozen=True)
class HeuristicMatch:
    """Result of a heuristic rule firing."""

    tier: Tier
    roi_score: int
    reason_code: ReasonCode
    trigger: str


def critical_trigger(task: Task, now: datetime) -> str | None:
    """Name of the T1 rule the task trips, if any."""
    hours = task.hours_until_deadline(now)
    if hours is not None and 0 <= hours <= 24 and task.importance >= 4:
        return "deadline_within_24h"
    if contains_any(task.title, URGENCY_KEYWORDS):
        return "urgency_keyword"
    if has_tag_in(task.tags, CRITICAL_TAGS):
        return "critical_tag"
    return None


def distraction_trigger(task: Task) -> str | None:
    """Name of the T4 rule the task trips, if any."""
    if task.importance <= 2 and task.urgency <= 2:
        return "low_importance_low_urgency"
    if contains_any(task.title, DISTRACTION_KEYWORDS):
        return "distraction_keyword"
    if task.estimated_minutes > 240 and task.importance <= 3:
        return "long_low_importance"
    if task.rollover_count >= 5:
        return "chronic_rollover"
    return None


def phantom_trigger(task: Task) -> str | None:
    """Name of the T5 rule the task trips, if any."""
    if not contains_any(task.title, ACTION_VERBS):
        return "no_action_verb"
    if len(task.title.split()) > MAX_TITLE_WORDS:
        return "title_too_long"
    if task.rollover_count >= 3 and not task.notes:
        return "stale_without_notes"
    return None


def apply_heuristic_rules(task: Task, now: datetime) -> HeuristicMatch | None:
    """
    Check T1, then T4, then T5. First match wins.

    Returns None when the task needs full ROI scoring.
    """
    trigger = critical_trigger(task, now)
    if trigger:
        return HeuristicMatch(Tier.CRITICAL, CRITICAL_SCORE, ReasonCode.CRITICAL_DETECTED, trigger)

    trigger = distraction_trigger(task)
    if trigger:
        return HeuristicMatch(
            Tier.DISTRACTION, DISTRACTION_SCORE, ReasonCode.DISTRACTION_DETECTED, trigger
        )

    trigger = phantom_trigger(task)
    if trigger:
        return HeuristicMatch(Tier.PHANTOM, PHANTOM_SCORE, ReasonCode.PHANTOM_DETECTED, trigger)

    return None
