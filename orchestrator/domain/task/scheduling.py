"""Pure dependency resolution and task selection.

All functions in this module are pure - no I/O, no side effects.
They take the task collection in and return selections out; the
order of the collection is the stable tie-break everywhere.
"""

from collections.abc import Iterable, Sequence

from .models import Task, TaskPriority, TaskStatus

PRIORITY_RANK: dict[TaskPriority, int] = {
    TaskPriority.CRITICAL: 0,
    TaskPriority.HIGH: 1,
    TaskPriority.MEDIUM: 2,
    TaskPriority.LOW: 3,
}


# =============================================================================
# Predicates
# =============================================================================


def index_by_id(tasks: Iterable[Task]) -> dict[str, Task]:
    """Map task ids to tasks. The first task wins on duplicate ids."""
    index: dict[str, Task] = {}
    for task in tasks:
        index.setdefault(task.id, task)
    return index


def are_dependencies_met(task: Task, tasks_by_id: dict[str, Task]) -> bool:
    """Check that every dependency exists and is completed.

    A dependency id that matches no task keeps the task waiting; it is
    not an error.
    """
    for dep_id in task.dependencies:
        dep = tasks_by_id.get(dep_id)
        if dep is None or dep.status != TaskStatus.COMPLETED:
            return False
    return True


def is_eligible(task: Task, tasks_by_id: dict[str, Task]) -> bool:
    """A task is eligible when it is pending and its dependencies are met."""
    return task.status == TaskStatus.PENDING and are_dependencies_met(task, tasks_by_id)


def has_output_conflict(task: Task, claimed_outputs: set[str]) -> bool:
    """Check whether a task writes any output already claimed by another."""
    return not claimed_outputs.isdisjoint(task.outputs)


# =============================================================================
# Selection
# =============================================================================


def sort_by_priority(tasks: Iterable[Task]) -> list[Task]:
    """Sort by priority rank, keeping collection order within a rank."""
    return sorted(tasks, key=lambda t: PRIORITY_RANK[t.priority])


def find_eligible(tasks: Sequence[Task]) -> list[Task]:
    """Get all eligible tasks in collection order."""
    tasks_by_id = index_by_id(tasks)
    return [t for t in tasks if is_eligible(t, tasks_by_id)]


def find_next_eligible(tasks: Sequence[Task]) -> Task | None:
    """Get the most urgent eligible task.

    Returns:
        The highest-priority eligible task (earliest in the collection
        on ties), or None if nothing can run.
    """
    ranked = sort_by_priority(find_eligible(tasks))
    return ranked[0] if ranked else None


def group_by_agent(tasks: Iterable[Task]) -> dict[str, list[Task]]:
    """Group tasks by agent, in first-encountered agent order."""
    groups: dict[str, list[Task]] = {}
    for task in tasks:
        groups.setdefault(task.agent, []).append(task)
    return groups


def find_parallel_batch(tasks: Sequence[Task], max_tasks: int) -> list[Task]:
    """Select a conflict-free batch of eligible tasks, one per agent.

    Walks agent groups in first-encountered order and takes the most
    urgent task of each group whose outputs do not intersect the outputs
    already claimed by the batch. This is a greedy pass favouring worker
    diversity, not a maximum independent set.

    Args:
        tasks: The full task collection.
        max_tasks: Upper bound on the batch size.

    Returns:
        Up to max_tasks tasks with pairwise disjoint outputs.
    """
    selected: list[Task] = []
    claimed: set[str] = set()

    for group in group_by_agent(find_eligible(tasks)).values():
        if len(selected) >= max_tasks:
            break
        for candidate in sort_by_priority(group):
            if not has_output_conflict(candidate, claimed):
                selected.append(candidate)
                claimed.update(candidate.outputs)
                break

    return selected
