"""Tests for the shared workflow layer."""

import json
from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest

from solochief.adapters.file_snapshot import SnapshotError
from solochief.config import Config
from solochief.core.session import Snapshot
from solochief.core.tasks import Goal, Task, Tier, UserContext
from solochief.core.triage import TriageEngine
from solochief.workflows import (
    add_task,
    fresh_context,
    get_engine,
    get_store,
    load_session,
    sample_snapshot,
    save_session,
    seed_sample_data,
)


@pytest.fixture
def now():
    return datetime(2025, 1, 15, 10, 0)


@pytest.fixture
def engine(now):
    return TriageEngine(clock=lambda: now)


@pytest.fixture
def config(tmp_path):
    return Config(
        energy_level=3,
        available_minutes=200,
        goals=[Goal("Launch beta", 20)],
        snapshot_file=str(tmp_path / "snapshot.json"),
    )


class TestGetters:
    def test_store_uses_configured_file(self, config, tmp_path):
        assert get_store(config).path == tmp_path / "snapshot.json"

    def test_engine_uses_configured_weights(self):
        config = Config(weight_overrides={"goal_alignment": 0.2, "energy_fit": 0.2})
        assert get_engine(config).weights.energy_fit == 0.2

    def test_engine_rejects_bad_weights(self):
        with pytest.raises(ValueError):
            get_engine(Config(weight_overrides={"energy_fit": 0.5}))


class TestLoadSession:
    def test_fresh_session_from_config(self, config, engine):
        snapshot = load_session(get_store(config), engine, config)

        assert snapshot.tasks == []
        assert snapshot.context.energy_level == 3
        assert snapshot.context.available_minutes == 200
        assert snapshot.context.goals == [Goal("Launch beta", 20)]

    def test_fresh_context_copies_goals(self, config):
        context = fresh_context(config)
        context.goals.append(Goal("Other"))
        assert len(config.goals) == 1

    def test_loaded_tasks_are_retriaged(self, config, engine):
        stale = Task(id="1", title="Write report", classification=Tier.PHANTOM, roi_score=10)
        store = MagicMock()
        store.load.return_value = Snapshot(tasks=[stale], context=UserContext(energy_level=4))

        snapshot = load_session(store, engine, config)

        assert snapshot.tasks[0].classification == Tier.LEVERAGE
        assert snapshot.tasks[0].roi_score == 67

    def test_save_then_load(self, config, engine):
        store = get_store(config)
        snapshot = load_session(store, engine, config)
        add_task(snapshot, engine, "Write report")
        save_session(store, engine, snapshot)

        reloaded = load_session(store, engine, config)
        assert [t.title for t in reloaded.tasks] == ["Write report"]

    def test_save_stamps_engine_time(self, engine, now):
        store = MagicMock()
        snapshot = Snapshot()
        save_session(store, engine, snapshot)
        store.save.assert_called_once_with(snapshot, saved_at=now)

    def test_wrongly_typed_title_fails_on_load(self, config, engine):
        store = get_store(config)
        store.path.parent.mkdir(parents=True, exist_ok=True)
        store.path.write_text(json.dumps({"version": 1, "tasks": [{"id": "1", "title": 123}]}))

        with pytest.raises(SnapshotError):
            load_session(store, engine, config)


class TestAddTask:
    def test_creates_and_triages(self, engine, now):
        snapshot = Snapshot()
        task = add_task(
            snapshot,
            engine,
            "  Fix urgent login bug ",
            estimated_minutes=20,
            importance=4,
            tags=["bug", " "],
        )

        assert task in snapshot.tasks
        assert task.title == "Fix urgent login bug"
        assert task.tags == ["bug"]
        assert task.created_at == now
        assert task.classification == Tier.CRITICAL
        assert len(task.id) == 8

    def test_defaults_missing_numbers(self, engine):
        task = add_task(Snapshot(), engine, "Write report")
        assert task.estimated_minutes == 30
        assert task.importance == 3
        assert task.urgency == 3


class TestSampleData:
    def test_sample_triage(self, engine, now):
        snapshot = sample_snapshot(now)
        result = engine.triage(snapshot.tasks, snapshot.context)

        assert [t.id for t in result] == ["1", "2", "3", "6", "8", "4", "5", "7"]
        assert [t.classification.value for t in result] == ["T1", "T2", "T4", "T4", "T4", "T5", "T5", "T5"]
        assert result[1].roi_score == 65

    def test_sample_recommendation(self, engine, now):
        snapshot = sample_snapshot(now)
        rec = engine.recommend(snapshot.tasks, snapshot.context)

        assert rec.task.id == "1"
        assert rec.why.startswith("CRITICAL: Has 4/5 urgency")

    def test_sample_deadlines_relative_to_now(self, now):
        snapshot = sample_snapshot(now)
        assert snapshot.tasks[0].deadline == now + timedelta(hours=24)
        assert snapshot.tasks[4].deadline == now + timedelta(hours=48)

    def test_seed_writes_snapshot(self, config, engine):
        store = get_store(config)
        seed_sample_data(store, engine)

        loaded = store.load()
        assert len(loaded.tasks) == 8
        assert loaded.context.day_streak == 7
        assert loaded.tasks[0].classification == Tier.CRITICAL
