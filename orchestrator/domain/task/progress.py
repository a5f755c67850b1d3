"""Progress and metrics aggregation.

Pure functions of the task collection - no I/O, no side effects.
"""

import math
from collections.abc import Sequence

from .models import Metrics, Progress, Task, TaskStatus


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def compute_progress(tasks: Sequence[Task]) -> Progress:
    """Count tasks by status and derive the completion percentage.

    Args:
        tasks: The task collection.

    Returns:
        Progress with per-status counts; percentage is 0 for no tasks.
    """
    total = len(tasks)
    counts = {status: 0 for status in TaskStatus}
    for task in tasks:
        counts[task.status] += 1

    completed = counts[TaskStatus.COMPLETED]
    return Progress(
        total=total,
        completed=completed,
        in_progress=counts[TaskStatus.IN_PROGRESS],
        blocked=counts[TaskStatus.BLOCKED],
        skipped=counts[TaskStatus.SKIPPED],
        percentage=round_half_up(completed / total * 100) if total else 0,
    )


def format_minutes(minutes: float) -> str:
    """Format a minute count as ``"2h 5m"`` or ``"45m"``."""
    whole = round_half_up(minutes)
    hours, rest = divmod(whole, 60)
    if hours:
        return f"{hours}h {rest}m"
    return f"{rest}m"


def compute_metrics(tasks: Sequence[Task], base: Metrics | None = None) -> Metrics:
    """Derive timing and retry metrics from the task collection.

    Externally reported fields (coverage, lint and type errors) are
    carried over from ``base`` unchanged.

    Args:
        tasks: The task collection.
        base: Previously stored metrics, if any.

    Returns:
        New Metrics instance.
    """
    timed = [
        t.actual_minutes
        for t in tasks
        if t.status == TaskStatus.COMPLETED and t.actual_minutes is not None
    ]
    attempted = [t for t in tasks if t.attempts >= 1]
    retried = [t for t in attempted if t.attempts > 1]

    update = {
        "total_time": format_minutes(sum(timed)) if timed else None,
        "avg_task_time": format_minutes(sum(timed) / len(timed)) if timed else None,
        "retry_rate": round(len(retried) / len(attempted), 3) if attempted else None,
    }
    return (base or Metrics()).model_copy(update=update)
