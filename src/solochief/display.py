"""Terminal formatting for triaged tasks."""

from datetime import datetime

from .core.heuristics import HeuristicMatch
from .core.scoring import ScoreBreakdown
from .core.session import focus_session_minutes
from .core.tasks import Task, Tier, UserContext
from .core.triage import Recommendation

TIER_LABELS = {
    Tier.CRITICAL: "Critical",
    Tier.LEVERAGE: "Leverage",
    Tier.INTERRUPTION: "Interrupt",
    Tier.DISTRACTION: "Distract",
    Tier.PHANTOM: "Phantom",
}


def tier_label(tier: Tier | None) -> str:
    return TIER_LABELS.get(tier, "Unknown")


def format_deadline(task: Task, now: datetime) -> str:
    hours = task.hours_until_deadline(now)
    if hours is None:
        return ""
    if hours < 0:
        return f"OVERDUE by {-hours:.0f}h"
    if hours < 24:
        return f"due in {hours:.0f}h"
    return f"due in {hours / 24:.0f}d"


def format_task_line(task: Task, now: datetime) -> str:
    """One-line summary: tier, id, title, estimate, scores, deadline."""
    tier = task.classification.value if task.classification else "--"
    parts = [
        f"{task.estimated_minutes}m",
        f"imp {task.importance}/5",
        f"urg {task.urgency}/5",
        f"ROI {task.roi_score}",
    ]
    due = format_deadline(task, now)
    if due:
        parts.append(due)
    return f"[{tier} {tier_label(task.classification):9}] {task.id:8} {task.title} ({', '.join(parts)})"


def format_recommendation(rec: Recommendation) -> str:
    if rec.task is None:
        return f"Nothing to do right now.\n{rec.why}"
    minutes = focus_session_minutes(rec.task)
    return (
        f"Next: {rec.task.title} [{rec.task.id}]\n"
        f"{rec.why}\n"
        f"Suggested focus block: {minutes} min"
    )


def format_breakdown(task: Task, breakdown: ScoreBreakdown) -> str:
    """Explain how a task's score came about."""
    lines = [
        f"{task.title} [{task.id}]",
        f"  goal alignment      {breakdown.goal_alignment:6.1f}",
        f"  impact magnitude    {breakdown.impact_magnitude:6.1f}",
        f"  time efficiency     {breakdown.time_efficiency:6.1f}",
        f"  deadline proximity  {breakdown.deadline_proximity:6.1f}",
        f"  energy fit          {breakdown.energy_fit:6.1f}",
        f"  provisional ROI     {breakdown.provisional:6d}",
    ]
    for label, delta in breakdown.adjustments:
        lines.append(f"  {label.replace('_', ' '):19} {delta:+6d}")
    lines.append(f"  final ROI           {breakdown.final:6d}")
    return "\n".join(lines)


def format_heuristic(task: Task, match: HeuristicMatch) -> str:
    """Explain a classification that a rule made without scoring."""
    return "\n".join(
        [
            f"{task.title} [{task.id}]",
            f"  rule                {match.trigger.replace('_', ' ')}",
            f"  fixed ROI           {match.roi_score:6d}",
            "  (rule matched, weighted scoring not applied)",
        ]
    )


def format_stats(context: UserContext, counts: dict[Tier, int]) -> str:
    focus_hours = int(context.focus_time_minutes // 60)
    lines = [
        f"Completed today:      {context.completed_today}",
        f"Distractions blocked: {context.distractions_blocked}",
        f"Focus time:           {focus_hours}h",
        f"Day streak:           {context.day_streak}",
        "",
        "Triage:",
    ]
    for tier in Tier:
        lines.append(f"  {tier.value} {tier_label(tier):9} {counts.get(tier, 0)}")
    return "\n".join(lines)


def task_to_json(task: Task) -> dict:
    """Task fields plus rendered tier label and reason, for --json output."""
    data = task.to_dict()
    data["tier_label"] = tier_label(task.classification)
    data["reason"] = task.reason
    return data
