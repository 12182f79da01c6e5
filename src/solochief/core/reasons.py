"""Reason codes produced by the engine and their display text.

The engine records a code next to each decision; the strings here are only
used when a reason is shown to someone.
"""

from enum import Enum


class ReasonCode(Enum):
    """Why a task landed in its tier."""

    CRITICAL_DETECTED = "critical_detected"
    DISTRACTION_DETECTED = "distraction_detected"
    PHANTOM_DETECTED = "phantom_detected"
    LEVERAGE_PROTECT = "leverage_protect"
    CRITICAL_DO_NOW = "critical_do_now"
    INTERRUPTION_DELEGATE = "interruption_delegate"
    LEVERAGE_GOOD_ROI = "leverage_good_roi"
    INTERRUPTION_MODERATE = "interruption_moderate"
    DISTRACTION_LOW_ROI = "distraction_low_roi"


class RecommendationCode(Enum):
    """Why a task was (or wasn't) picked as the next action."""

    CRITICAL = "critical"
    LEVERAGE = "leverage"
    INTERRUPTION = "interruption"
    ROI = "roi"
    NO_FIT = "no_fit"


REASON_TEXT = {
    ReasonCode.CRITICAL_DETECTED: "CRITICAL: Urgent deadline or emergency detected",
    ReasonCode.DISTRACTION_DETECTED: "DISTRACTION: Low importance, no clear value",
    ReasonCode.PHANTOM_DETECTED: "PHANTOM: Too vague - needs clarification or deletion",
    ReasonCode.LEVERAGE_PROTECT: "LEVERAGE: High-impact strategic work - protect this time",
    ReasonCode.CRITICAL_DO_NOW: "CRITICAL: High priority with urgency - do now",
    ReasonCode.INTERRUPTION_DELEGATE: "INTERRUPTION: Urgent but low value - delegate or defer",
    ReasonCode.LEVERAGE_GOOD_ROI: "LEVERAGE: Good ROI - schedule intentionally",
    ReasonCode.INTERRUPTION_MODERATE: "INTERRUPTION: Moderate value - fit in around priorities",
    ReasonCode.DISTRACTION_LOW_ROI: "DISTRACTION: Low ROI - consider deletion",
}

NO_FIT_TEXT = "No tasks fit your current time/energy constraints. Great job clearing your queue!"


def describe_reason(code: ReasonCode | None) -> str:
    """Human-readable text for a reason code ("" when untriaged)."""
    if code is None:
        return ""
    return REASON_TEXT[code]


def describe_recommendation(code: RecommendationCode, urgency: int = 0, roi_score: int = 0) -> str:
    """Render the justification shown next to the recommended task."""
    match code:
        case RecommendationCode.CRITICAL:
            return (
                f"CRITICAL: Has {urgency}/5 urgency and directly impacts your goals. "
                "Clear everything else."
            )
        case RecommendationCode.LEVERAGE:
            return f"LEVERAGE: High ROI ({roi_score}) strategic work. This is what moves the needle."
        case RecommendationCode.INTERRUPTION:
            return "INTERRUPTION: Needs attention but don't let it derail your important work."
        case RecommendationCode.NO_FIT:
            return NO_FIT_TEXT
        case _:
            return f"Recommended based on ROI score of {roi_score}."
