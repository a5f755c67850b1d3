"""Task management CLI commands.

Commands for the task lifecycle: picking the next task or a parallel
batch, starting, completing, failing and importing tasks.
"""

import json
from pathlib import Path
from typing import Optional

import typer
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from orchestrator.application import (
    add_tasks,
    complete_task,
    fail_task,
    get_next_task,
    get_parallelizable_tasks,
    should_checkpoint,
    start_task,
)
from orchestrator.domain.shared import Err, OrchestratorError, ValidationError
from orchestrator.domain.task import Task, TaskFile, TaskStatus
from orchestrator.interfaces.cli.common import (
    RootOption,
    fail,
    format_task_line,
    get_manager,
    load_state,
    print_info,
    print_success,
    print_task,
    print_warning,
    save_state,
)

app = typer.Typer(help="Task lifecycle commands")

_TASK_LIST = TypeAdapter(list[Task])


def _read_tasks(file: Path) -> list[Task]:
    """Read tasks from a JSON file holding a list or a task document."""
    try:
        data = json.loads(file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise fail(f"Invalid JSON in {file}: {e}") from e
    except UnicodeDecodeError as e:
        raise fail(f"Invalid UTF-8 in {file}: {e}") from e

    try:
        if isinstance(data, list):
            return _TASK_LIST.validate_python(data)
        return TaskFile.model_validate(data).tasks
    except PydanticValidationError as e:
        raise fail(ValidationError.from_pydantic(e, f"tasks in {file}")) from e


# =============================================================================
# Commands
# =============================================================================


@app.command("next")
def next_task(root: RootOption = None) -> None:
    """Show the most urgent task that can run now."""
    state = load_state(get_manager(root))
    result = get_next_task(state)
    if isinstance(result, Err):
        print_info(result.error)
        return
    print_task(result.value)


@app.command("batch")
def batch(
    max_tasks: Optional[int] = typer.Option(
        None, "--max", "-n", min=1, help="Batch size (default: config maxParallelTasks)"
    ),
    root: RootOption = None,
) -> None:
    """Show a conflict-free batch of tasks that can run in parallel."""
    state = load_state(get_manager(root))
    tasks = get_parallelizable_tasks(state, max_tasks)
    if not tasks:
        print_info("No eligible tasks")
        return
    for task in tasks:
        typer.echo(format_task_line(task))


@app.command("list")
def list_tasks(
    status: Optional[TaskStatus] = typer.Option(None, "--status", "-s", help="Filter by status"),
    root: RootOption = None,
) -> None:
    """List tasks in collection order."""
    state = load_state(get_manager(root))
    tasks = [t for t in state.tasks if status is None or t.status == status]
    if not tasks:
        print_info("No tasks")
        return
    for task in tasks:
        typer.echo(format_task_line(task))


@app.command("start")
def start(
    task_id: str = typer.Argument(..., help="Task ID"),
    root: RootOption = None,
) -> None:
    """Mark a task in progress."""
    manager = get_manager(root)
    state = load_state(manager)

    result = start_task(state, task_id)
    if isinstance(result, Err):
        raise fail(result.error)

    save_state(manager, state)
    task = result.value
    print_success(f"Started {task.id}: {task.title} (attempt {task.attempts}/{task.max_attempts})")


@app.command("complete")
def complete(
    task_id: str = typer.Argument(..., help="Task ID"),
    root: RootOption = None,
) -> None:
    """Mark a task completed."""
    manager = get_manager(root)
    state = load_state(manager)

    result = complete_task(state, task_id)
    if isinstance(result, Err):
        raise fail(result.error)

    save_state(manager, state)
    progress = state.progress
    print_success(f"Completed {task_id} ({progress.completed}/{progress.total}, {progress.percentage}%)")
    if should_checkpoint(state):
        print_info("Checkpoint recommended: run 'orchestrator checkpoint create'")


@app.command("fail")
def fail_cmd(
    task_id: str = typer.Argument(..., help="Task ID"),
    error: str = typer.Option(..., "--error", "-e", help="Failure reason"),
    root: RootOption = None,
) -> None:
    """Record a failed attempt; the task is retried or blocked."""
    manager = get_manager(root)
    state = load_state(manager)

    result = fail_task(state, task_id, error)
    if isinstance(result, Err):
        raise fail(result.error)

    save_state(manager, state)
    task = result.value
    if task.status == TaskStatus.BLOCKED:
        print_warning(f"{task.id} blocked after {task.attempts} attempts")
    else:
        print_info(f"{task.id} will be retried ({task.attempts}/{task.max_attempts} attempts used)")


@app.command("add")
def add(
    file: Optional[Path] = typer.Argument(
        None,
        exists=True,
        dir_okay=False,
        help="JSON file with a task list or task document (default: the project's tasks.json)",
    ),
    root: RootOption = None,
) -> None:
    """Bulk-add planned tasks to the project."""
    manager = get_manager(root)
    state = load_state(manager)

    if file is None:
        if not manager.task_files.exists():
            raise fail(
                f"No planning document at {manager.paths.tasks_file}. Pass a tasks file instead."
            )
        try:
            result = manager.import_tasks(state)
        except OrchestratorError as e:
            raise fail(e) from e
    else:
        result = add_tasks(state, _read_tasks(file))

    if isinstance(result, Err):
        raise fail(result.error)

    save_state(manager, state)
    print_success(f"Added {len(result.value)} tasks ({state.progress.total} total)")
