"""Tests for task lifecycle operations."""

from datetime import datetime, timedelta, timezone

import pytest

from solochief.core.session import (
    TaskNotFoundError,
    complete_task,
    delete_task,
    filter_view,
    find_task,
    focus_session_minutes,
    new_task_id,
    rollover_task,
    tier_counts,
)
from solochief.core.tasks import Task, Tier, UserContext


@pytest.fixture
def now():
    return datetime(2025, 1, 15, 10, 0)


@pytest.fixture
def context():
    return UserContext()


@pytest.fixture
def tasks(now):
    return [
        Task(id="1", title="Fix outage", classification=Tier.CRITICAL, roi_score=90,
             deadline=now + timedelta(hours=3)),
        Task(id="2", title="Write report", classification=Tier.LEVERAGE, roi_score=67),
        Task(id="3", title="Ship docs", classification=Tier.LEVERAGE, roi_score=86,
             deadline=now + timedelta(days=2)),
        Task(id="4", title="Stuff", classification=Tier.PHANTOM, roi_score=10),
        Task(id="5", title="Old win", classification=Tier.CRITICAL, roi_score=95, completed=True,
             deadline=now),
    ]


class TestFindTask:
    def test_found(self, tasks):
        assert find_task(tasks, "2").title == "Write report"

    def test_missing(self, tasks):
        with pytest.raises(TaskNotFoundError) as exc:
            find_task(tasks, "nope")
        assert str(exc.value) == "No task with id 'nope'"

    def test_error_is_a_key_error(self, tasks):
        with pytest.raises(KeyError):
            find_task(tasks, "nope")

    def test_new_ids_are_unique(self):
        assert new_task_id() != new_task_id()


class TestCompleteTask:
    def test_marks_done_and_counts(self, tasks, context):
        assert complete_task(tasks[1], context, focus_minutes=25) is True
        assert tasks[1].completed is True
        assert context.completed_today == 1
        assert context.focus_time_minutes == 25

    def test_keeps_classification(self, tasks, context):
        complete_task(tasks[0], context)
        assert tasks[0].classification == Tier.CRITICAL
        assert tasks[0].roi_score == 90

    def test_already_completed_is_noop(self, tasks, context):
        assert complete_task(tasks[4], context, focus_minutes=30) is False
        assert context.completed_today == 0
        assert context.focus_time_minutes == 0

    def test_negative_focus_ignored(self, tasks, context):
        complete_task(tasks[1], context, focus_minutes=-10)
        assert context.focus_time_minutes == 0


class TestRolloverTask:
    def test_moves_deadline_to_tomorrow_morning(self, tasks, now):
        rollover_task(tasks[1], now)
        assert tasks[1].rollover_count == 1
        assert tasks[1].deadline == datetime(2025, 1, 16, 9, 0)

    def test_count_accumulates(self, tasks, now):
        rollover_task(tasks[1], now)
        rollover_task(tasks[1], now)
        assert tasks[1].rollover_count == 2

    def test_late_evening(self, tasks):
        rollover_task(tasks[1], datetime(2025, 1, 31, 23, 30))
        assert tasks[1].deadline == datetime(2025, 2, 1, 9, 0)

    def test_keeps_timezone(self, tasks):
        now = datetime(2025, 1, 15, 10, 0, tzinfo=timezone.utc)
        rollover_task(tasks[1], now)
        assert tasks[1].deadline == datetime(2025, 1, 16, 9, 0, tzinfo=timezone.utc)


class TestDeleteTask:
    def test_removes_task_and_counts(self, tasks, context):
        remaining = delete_task(tasks, "4", context)

        assert [t.id for t in remaining] == ["1", "2", "3", "5"]
        assert context.distractions_blocked == 1
        assert len(tasks) == 5

    def test_missing_task(self, tasks, context):
        with pytest.raises(TaskNotFoundError):
            delete_task(tasks, "nope", context)
        assert context.distractions_blocked == 0


class TestFilterView:
    def test_all_hides_completed_and_sorts(self, tasks, now):
        assert [t.id for t in filter_view(tasks, "all", now)] == ["1", "3", "2", "4"]

    def test_critical(self, tasks, now):
        assert [t.id for t in filter_view(tasks, "critical", now)] == ["1"]

    def test_leverage(self, tasks, now):
        assert [t.id for t in filter_view(tasks, "leverage", now)] == ["3", "2"]

    def test_today(self, tasks, now):
        assert [t.id for t in filter_view(tasks, "today", now)] == ["1"]

    def test_unknown_view(self, tasks, now):
        with pytest.raises(ValueError, match="Unknown view"):
            filter_view(tasks, "someday", now)


class TestTierCounts:
    def test_counts_open_tasks(self, tasks):
        counts = tier_counts(tasks)
        assert counts[Tier.CRITICAL] == 1
        assert counts[Tier.LEVERAGE] == 2
        assert counts[Tier.INTERRUPTION] == 0
        assert counts[Tier.DISTRACTION] == 0
        assert counts[Tier.PHANTOM] == 1

    def test_ignores_untriaged(self):
        assert sum(tier_counts([Task(id="1", title="x")]).values()) == 0


class TestFocusSessionMinutes:
    def test_half_hour(self):
        assert focus_session_minutes(Task(id="1", title="x", estimated_minutes=30)) == 30

    def test_minimum_25(self):
        assert focus_session_minutes(Task(id="1", title="x", estimated_minutes=5)) == 25

    def test_maximum_60(self):
        assert focus_session_minutes(Task(id="1", title="x", estimated_minutes=90)) == 60

    def test_rounds_half_up(self):
        assert focus_session_minutes(Task(id="1", title="x", estimated_minutes=45)) == 50

    def test_rounds_down(self):
        assert focus_session_minutes(Task(id="1", title="x", estimated_minutes=44)) == 40
