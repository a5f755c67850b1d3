"""Task domain - the project's task collection.

All exports are pure (no I/O, no side effects).

Key Types:
    TaskStatus - Task lifecycle state
    TaskPriority - Scheduling priority
    Task - Dependency-aware unit of work
    CurrentTask - Pointer to in-flight work
    Blocker - Task that exhausted its retries
    Progress - Derived status counts
    Metrics - Derived timing and retry figures
    TaskFile - Planning document (tasks.json)

Scheduling Functions:
    find_eligible - All runnable tasks
    find_next_eligible - Most urgent runnable task
    find_parallel_batch - Conflict-free batch across agents

Aggregation Functions:
    compute_progress - Counts and percentage
    compute_metrics - Timing and retry rate
"""

from .models import (
    TASKS_SCHEMA,
    Blocker,
    CurrentTask,
    Epic,
    Metrics,
    Progress,
    Story,
    Task,
    TaskFile,
    TaskPriority,
    TaskStatus,
)
from .progress import compute_metrics, compute_progress, format_minutes, round_half_up
from .scheduling import (
    PRIORITY_RANK,
    are_dependencies_met,
    find_eligible,
    find_next_eligible,
    find_parallel_batch,
    group_by_agent,
    has_output_conflict,
    index_by_id,
    is_eligible,
    sort_by_priority,
)

__all__ = [
    # Models
    "TASKS_SCHEMA",
    "TaskStatus",
    "TaskPriority",
    "Task",
    "CurrentTask",
    "Blocker",
    "Progress",
    "Metrics",
    "Story",
    "Epic",
    "TaskFile",
    # Scheduling
    "PRIORITY_RANK",
    "index_by_id",
    "are_dependencies_met",
    "is_eligible",
    "has_output_conflict",
    "sort_by_priority",
    "find_eligible",
    "find_next_eligible",
    "group_by_agent",
    "find_parallel_batch",
    # Aggregation
    "round_half_up",
    "compute_progress",
    "format_minutes",
    "compute_metrics",
]
