"""Progress application service.

The one authoritative place that refreshes derived figures on a state.
Lifecycle operations and the post-task hook both call through here.
"""

from orchestrator.domain.project import ProjectState
from orchestrator.domain.task import Metrics, Progress, compute_metrics, compute_progress


def update_progress(state: ProjectState) -> Progress:
    """Recompute ``state.progress`` from the task collection.

    Idempotent: without intervening task changes, repeated calls yield
    the same Progress.
    """
    state.progress = compute_progress(state.tasks)
    return state.progress


def update_metrics(state: ProjectState) -> Metrics:
    """Recompute the derived fields of ``state.metrics``."""
    state.metrics = compute_metrics(state.tasks, state.metrics)
    return state.metrics
