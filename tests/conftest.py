"""Shared fixtures for orchestrator tests."""

from pathlib import Path

import pytest

from orchestrator.application import add_tasks, initialize_state
from orchestrator.domain.project import ProjectState
from orchestrator.domain.shared import unwrap
from orchestrator.domain.task import Task
from orchestrator.manager import StateManager


def make_task(task_id: str, **overrides) -> Task:
    """Build a pending task with sensible defaults."""
    fields = {
        "id": task_id,
        "title": f"Task {task_id}",
        "description": f"Do {task_id}",
        "agent": "backend-dev",
    }
    fields.update(overrides)
    return Task(**fields)


@pytest.fixture(autouse=True)
def orchestrator_home(tmp_path: Path, monkeypatch) -> Path:
    """Keep per-user config out of the real home directory."""
    home = tmp_path / "home"
    monkeypatch.setenv("ORCHESTRATOR_HOME", str(home))
    monkeypatch.delenv("ORCHESTRATOR_ROOT", raising=False)
    return home


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Create an empty project directory."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def state() -> ProjectState:
    """Fresh project state with no tasks."""
    return unwrap(initialize_state("Todo App", "A small todo service"))


@pytest.fixture
def state_with_tasks(state: ProjectState) -> ProjectState:
    """Project state with a small dependency chain.

    T-001 (high) <- T-002 (critical); T-003 (low, frontend) independent.
    """
    unwrap(
        add_tasks(
            state,
            [
                make_task("T-001", priority="high", outputs=["src/db.py"]),
                make_task("T-002", priority="critical", dependencies=["T-001"]),
                make_task("T-003", priority="low", agent="frontend-dev", outputs=["src/app.ts"]),
            ],
        )
    )
    return state


@pytest.fixture
def manager(project_root: Path) -> StateManager:
    """StateManager rooted at the temp project directory."""
    return StateManager(project_root)
