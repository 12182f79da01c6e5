"""Solo Chief CLI - strategic task triage."""

import json
import logging
import sys
from dataclasses import dataclass
from datetime import datetime

import click

from .adapters.file_snapshot import FileSnapshotStore, SnapshotError
from .config import load_config, Config
from .core.heuristics import apply_heuristic_rules
from .core.scoring import score_breakdown
from .core.session import (
    VIEWS,
    TaskNotFoundError,
    complete_task,
    delete_task,
    filter_view,
    find_task,
    focus_session_minutes,
    rollover_task,
    tier_counts,
)
from .core.tasks import Goal
from .core.triage import TriageEngine
from .display import (
    format_breakdown,
    format_heuristic,
    format_recommendation,
    format_stats,
    format_task_line,
    task_to_json,
)
from .workflows import add_task, get_engine, get_store, load_session, save_session, seed_sample_data

DATETIME_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M", "%Y-%m-%dT%H:%M:%S"]


@dataclass
class AppState:
    config: Config
    store: FileSnapshotStore
    engine: TriageEngine


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _open(state: AppState):
    try:
        return load_session(state.store, state.engine, state.config)
    except SnapshotError as e:
        _fail(str(e))


@click.group()
@click.version_option(package_name="solochief")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--now", "fixed_now", type=click.DateTime(formats=DATETIME_FORMATS), default=None,
              help="Evaluate as if it were this time (YYYY-MM-DD[THH:MM])")
@click.pass_context
def main(ctx, debug: bool, fixed_now: datetime | None):
    """Solo Chief - strategic task triage."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )

    config = load_config()
    clock = (lambda: fixed_now) if fixed_now else None
    try:
        engine = get_engine(config, clock)
    except ValueError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    ctx.obj = AppState(config=config, store=get_store(config), engine=engine)


@main.command("list")
@click.option("--view", type=click.Choice(VIEWS), default="all", show_default=True)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def list_tasks(state: AppState, view: str, as_json: bool):
    """List open tasks by ROI."""
    snapshot = _open(state)
    now = state.engine.now()
    tasks = filter_view(snapshot.tasks, view, now)

    if as_json:
        click.echo(json.dumps([task_to_json(t) for t in tasks], indent=2))
        return

    if not tasks:
        click.echo("No tasks found. Add a new task or change your view!")
        return

    click.echo(f"{len(tasks)} tasks")
    for task in tasks:
        click.echo(format_task_line(task, now))


@main.command()
@click.argument("title")
@click.option("--minutes", "-m", type=int, default=None, help="Estimated minutes (default 30)")
@click.option("--importance", "-i", type=click.IntRange(1, 5), default=None, help="1-5 (default 3)")
@click.option("--urgency", "-u", type=click.IntRange(1, 5), default=None, help="1-5 (default 3)")
@click.option("--deadline", "-d", type=click.DateTime(formats=DATETIME_FORMATS), default=None)
@click.option("--tag", "-t", "tags", multiple=True, help="Tag (repeatable)")
@click.option("--notes", "-n", default="", help="Free-text notes")
@click.pass_obj
def add(state: AppState, title: str, minutes, importance, urgency, deadline, tags, notes: str):
    """Add a task and triage it."""
    if not title.strip():
        _fail("Title cannot be empty")

    snapshot = _open(state)
    task = add_task(
        snapshot,
        state.engine,
        title,
        estimated_minutes=minutes,
        importance=importance,
        urgency=urgency,
        deadline=deadline,
        tags=list(tags),
        notes=notes,
    )
    save_session(state.store, state.engine, snapshot)
    click.echo(format_task_line(task, state.engine.now()))
    click.echo(f"  {task.reason}")


@main.command("next")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def next_action(state: AppState, as_json: bool):
    """Recommend the one thing to do now."""
    snapshot = _open(state)
    rec = state.engine.recommend(snapshot.tasks, snapshot.context)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "task": task_to_json(rec.task) if rec.task else None,
                    "code": rec.code.value,
                    "why": rec.why,
                },
                indent=2,
            )
        )
        return

    click.echo(format_recommendation(rec))


@main.command()
@click.argument("task_id")
@click.option("--focus-minutes", type=float, default=0.0, help="Focus time spent on it")
@click.pass_obj
def done(state: AppState, task_id: str, focus_minutes: float):
    """Mark a task as completed."""
    snapshot = _open(state)
    try:
        task = find_task(snapshot.tasks, task_id)
    except TaskNotFoundError as e:
        _fail(str(e))

    if not complete_task(task, snapshot.context, focus_minutes):
        click.echo(f"'{task.title}' was already completed.")
        return

    save_session(state.store, state.engine, snapshot)
    click.echo(f"✓ {task.title}")


@main.command()
@click.argument("task_id")
@click.pass_obj
def rollover(state: AppState, task_id: str):
    """Defer a task to tomorrow morning."""
    snapshot = _open(state)
    try:
        task = find_task(snapshot.tasks, task_id)
    except TaskNotFoundError as e:
        _fail(str(e))

    rollover_task(task, state.engine.now())
    save_session(state.store, state.engine, snapshot)
    click.echo(f"Rolled over '{task.title}' (x{task.rollover_count}), due {task.deadline:%Y-%m-%d %H:%M}")


@main.command()
@click.argument("task_id")
@click.pass_obj
def delete(state: AppState, task_id: str):
    """Delete a task (counts as a blocked distraction)."""
    snapshot = _open(state)
    try:
        snapshot.tasks = delete_task(snapshot.tasks, task_id, snapshot.context)
    except TaskNotFoundError as e:
        _fail(str(e))

    save_session(state.store, state.engine, snapshot)
    click.echo(f"Deleted {task_id}")


@main.command()
@click.argument("task_id")
@click.pass_obj
def explain(state: AppState, task_id: str):
    """Show how a task was classified and scored."""
    snapshot = _open(state)
    try:
        task = find_task(snapshot.tasks, task_id)
    except TaskNotFoundError as e:
        _fail(str(e))

    click.echo(f"{task.classification.value if task.classification else '--'}: {task.reason}")
    now = state.engine.now()
    match = apply_heuristic_rules(task, now)
    if match:
        click.echo(format_heuristic(task, match))
        return
    breakdown = score_breakdown(task, snapshot.context, now, state.engine.weights)
    click.echo(format_breakdown(task, breakdown))


@main.command()
@click.pass_obj
def stats(state: AppState):
    """Show today's counters and triage summary."""
    snapshot = _open(state)
    click.echo(format_stats(snapshot.context, tier_counts(snapshot.tasks)))


@main.command()
@click.argument("task_id", required=False)
@click.pass_obj
def focus(state: AppState, task_id: str | None):
    """Suggest a focus block for a task (default: the recommended one)."""
    snapshot = _open(state)
    if task_id:
        try:
            task = find_task(snapshot.tasks, task_id)
        except TaskNotFoundError as e:
            _fail(str(e))
    else:
        task = state.engine.recommend(snapshot.tasks, snapshot.context).task
        if task is None:
            click.echo("No task fits your current time/energy constraints.")
            return

    click.echo(f"Focus on: {task.title}")
    click.echo(f"  {task.reason}")
    click.echo(f"  Block: {focus_session_minutes(task)} min")


@main.command()
@click.option("--energy", type=click.IntRange(1, 5), default=None, help="Current energy 1-5")
@click.option("--available", type=click.IntRange(min=0), default=None,
              help="Minutes left in the day")
@click.pass_obj
def context(state: AppState, energy: int | None, available: int | None):
    """Show or update energy and available time."""
    snapshot = _open(state)
    if energy is not None:
        snapshot.context.energy_level = energy
    if available is not None:
        snapshot.context.available_minutes = available
    if energy is not None or available is not None:
        save_session(state.store, state.engine, snapshot)

    ctx = snapshot.context
    click.echo(f"Energy: {ctx.energy_level}/5")
    click.echo(f"Available: {ctx.available_minutes} min")


@main.group()
def goal():
    """Manage goals used for goal alignment."""
    pass


@goal.command("list")
@click.pass_obj
def goal_list(state: AppState):
    """List goals."""
    snapshot = _open(state)
    if not snapshot.context.goals:
        click.echo("No goals set.")
        return
    for g in snapshot.context.goals:
        click.echo(f"• {g.description} ({g.progress}%)")


@goal.command("add")
@click.argument("description")
@click.option("--progress", type=click.IntRange(0, 100), default=0)
@click.pass_obj
def goal_add(state: AppState, description: str, progress: int):
    """Add a goal."""
    snapshot = _open(state)
    snapshot.context.goals.append(Goal(description.strip(), progress))
    save_session(state.store, state.engine, snapshot)
    click.echo(f"Added goal: {description.strip()}")


@main.command()
@click.option("--yes", is_flag=True, help="Overwrite existing data without asking")
@click.pass_obj
def seed(state: AppState, yes: bool):
    """Load demo tasks and goals."""
    if state.store.exists() and not yes:
        if not click.confirm(f"Overwrite {state.store.path} with sample data?"):
            return
    snapshot = seed_sample_data(state.store, state.engine)
    click.echo(f"Seeded {len(snapshot.tasks)} tasks into {state.store.path}")


if __name__ == "__main__":
    main()
