"""Task application service.

Applies lifecycle transitions to tasks and exposes scheduling queries
over a project state. Operations mutate the given state in place and
return a Result; an unknown task id is an Err, never an exception.
No I/O happens here - the caller persists after each operation.
"""

import logging
from collections import Counter
from collections.abc import Sequence
from datetime import UTC, datetime

from orchestrator.application.ledger_service import add_history
from orchestrator.application.progress_service import update_progress
from orchestrator.domain.project import ProjectState
from orchestrator.domain.shared import Err, Ok, Result
from orchestrator.domain.task import (
    Blocker,
    CurrentTask,
    Task,
    TaskStatus,
    find_next_eligible,
    find_parallel_batch,
    round_half_up,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Scheduling Queries
# =============================================================================


def get_next_task(state: ProjectState) -> Result[Task, str]:
    """Get the most urgent task that can run now.

    Returns:
        Ok(Task) with the highest-priority eligible task, or
        Err(str) if no task is eligible.
    """
    task = find_next_eligible(state.tasks)
    if task is None:
        return Err("No eligible tasks")
    return Ok(task)


def get_parallelizable_tasks(state: ProjectState, max_tasks: int | None = None) -> list[Task]:
    """Get a conflict-free batch of eligible tasks across agents.

    Args:
        state: The project state to plan from.
        max_tasks: Batch size limit; defaults to ``config.max_parallel_tasks``.

    Returns:
        Up to max_tasks tasks with pairwise disjoint outputs. Empty if
        nothing is eligible.
    """
    limit = state.config.max_parallel_tasks if max_tasks is None else max_tasks
    return find_parallel_batch(state.tasks, limit)


# =============================================================================
# Lifecycle
# =============================================================================


def add_tasks(state: ProjectState, tasks: Sequence[Task]) -> Result[list[Task], str]:
    """Append planned tasks to the collection.

    Rejects the whole batch if any id already exists in the state or
    repeats within the batch.

    Returns:
        Ok(list[Task]) with the appended tasks, or Err(str) naming the
        duplicate ids (nothing appended).
    """
    existing = {t.id for t in state.tasks}
    counts = Counter(t.id for t in tasks)
    duplicates = sorted({t.id for t in tasks if t.id in existing or counts[t.id] > 1})
    if duplicates:
        return Err(f"Duplicate task ids: {', '.join(duplicates)}")

    state.tasks.extend(tasks)
    update_progress(state)
    logger.info(f"Added {len(tasks)} tasks ({len(state.tasks)} total)")
    return Ok(list(tasks))


def start_task(state: ProjectState, task_id: str) -> Result[Task, str]:
    """Mark a task in progress and register it as current work.

    No status precondition is enforced; starting an in-progress task
    re-enters it and consumes another attempt.

    Returns:
        Ok(Task) with the started task, or Err(str) if the id is unknown.
    """
    task = state.get_task(task_id)
    if task is None:
        return Err(f"Task not found: {task_id}")

    now = datetime.now(UTC)
    task.status = TaskStatus.IN_PROGRESS
    task.started_at = now
    task.attempts += 1

    state.current_tasks.append(
        CurrentTask(id=task_id, agent=task.agent, started_at=now, attempt=task.attempts)
    )

    update_progress(state)
    add_history(
        state,
        "task_started",
        agent=task.agent,
        task_id=task_id,
        details={"attempt": task.attempts},
    )
    logger.info(f"Started task {task_id} (attempt {task.attempts}/{task.max_attempts})")
    return Ok(task)


def complete_task(state: ProjectState, task_id: str) -> Result[Task, str]:
    """Mark a task completed and drop its current-work pointer.

    ``actual_minutes`` is the rounded start-to-completion time; it stays
    unset when the task was never started.

    Returns:
        Ok(Task) with the completed task, or Err(str) if the id is unknown.
    """
    task = state.get_task(task_id)
    if task is None:
        return Err(f"Task not found: {task_id}")

    now = datetime.now(UTC)
    task.status = TaskStatus.COMPLETED
    task.completed_at = now
    task.error = None

    if task.started_at is not None:
        started = task.started_at
        if started.tzinfo is None:
            started = started.replace(tzinfo=UTC)
        task.actual_minutes = max(0, round_half_up((now - started).total_seconds() / 60))

    _remove_current(state, task_id)

    update_progress(state)
    add_history(
        state,
        "task_completed",
        agent=task.agent,
        task_id=task_id,
        details={"actualMinutes": task.actual_minutes},
    )
    logger.info(f"Completed task {task_id}")
    return Ok(task)


def fail_task(state: ProjectState, task_id: str, error: str) -> Result[Task, str]:
    """Record a failed attempt and apply the retry-or-block policy.

    Below ``max_attempts`` the task goes back to pending and becomes
    eligible again once its dependencies allow. At the ceiling it is
    blocked and a Blocker is recorded; blocked tasks are never retried
    by the core.

    Returns:
        Ok(Task) with the updated task, or Err(str) if the id is unknown.
    """
    task = state.get_task(task_id)
    if task is None:
        return Err(f"Task not found: {task_id}")

    task.error = error

    if task.attempts >= task.max_attempts:
        task.status = TaskStatus.BLOCKED
        state.blockers.append(
            Blocker(task_id=task_id, reason=error, since=datetime.now(UTC), attempts=task.attempts)
        )
        logger.error(f"Task {task_id} blocked after {task.attempts} attempts: {error}")
    else:
        task.status = TaskStatus.PENDING
        logger.warning(f"Task {task_id} failed (attempt {task.attempts}/{task.max_attempts}): {error}")

    _remove_current(state, task_id)

    update_progress(state)
    add_history(
        state,
        "task_failed",
        agent=task.agent,
        task_id=task_id,
        details={
            "error": error,
            "attempt": task.attempts,
            "willRetry": task.status == TaskStatus.PENDING,
        },
    )
    return Ok(task)


def _remove_current(state: ProjectState, task_id: str) -> None:
    state.current_tasks = [ct for ct in state.current_tasks if ct.id != task_id]
