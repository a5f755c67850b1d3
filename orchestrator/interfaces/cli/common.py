"""Shared utilities for orchestrator CLI commands.

This module provides common utilities used across CLI commands:
- Project root resolution
- Manager construction and state loading with error reporting
- Formatted output helpers (error, success, info, warning)
- Task formatting for display
"""

import logging
import os
from pathlib import Path
from typing import Annotated, Optional

import typer

from orchestrator.domain.project import ProjectState
from orchestrator.domain.shared import OrchestratorError, ValidationError
from orchestrator.domain.task import Task, TaskStatus
from orchestrator.manager import StateManager

ROOT_ENV = "ORCHESTRATOR_ROOT"

# Reusable root option for CLI commands
# Usage: def my_command(root: RootOption = None) -> None:
RootOption = Annotated[Optional[Path], typer.Option(
    "--root", "-r",
    help=f"Project root directory (or set {ROOT_ENV} env var)",
    envvar=ROOT_ENV,
)]


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging once for the CLI process."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def get_project_root(explicit_root: Path | None = None) -> Path:
    """Resolve the project root.

    Resolution order:
    1. Explicit --root option (typer also fills it from ORCHESTRATOR_ROOT)
    2. ORCHESTRATOR_ROOT environment variable
    3. Current working directory
    """
    if explicit_root:
        return explicit_root
    env_root = os.environ.get(ROOT_ENV)
    if env_root:
        return Path(env_root)
    return Path.cwd()


def get_manager(root: Path | None = None) -> StateManager:
    """Build a StateManager for the resolved project root."""
    return StateManager(get_project_root(root))


def fail(error: OrchestratorError | str) -> typer.Exit:
    """Print an error and return the Exit to raise."""
    message = str(error)
    if isinstance(error, ValidationError) and error.path:
        message = f"{message} (at {error.path})"
    print_error(message)
    return typer.Exit(1)


def load_state(manager: StateManager) -> ProjectState:
    """Load the project state, exiting with a message on failure."""
    try:
        return manager.load()
    except OrchestratorError as e:
        if not manager.exists():
            print_error("No project state found. Run 'orchestrator init' first.")
            raise typer.Exit(1) from e
        raise fail(e) from e


def save_state(manager: StateManager, state: ProjectState) -> None:
    """Save the project state, exiting with a message on failure."""
    try:
        manager.save(state)
    except OrchestratorError as e:
        raise fail(e) from e


def print_error(msg: str) -> None:
    """Print a formatted error message."""
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_success(msg: str) -> None:
    """Print a formatted success message."""
    typer.echo(typer.style(msg, fg=typer.colors.GREEN))


def print_info(msg: str) -> None:
    """Print a formatted info message."""
    typer.echo(typer.style(msg, fg=typer.colors.BLUE))


def print_warning(msg: str) -> None:
    """Print a formatted warning message."""
    typer.echo(typer.style(f"Warning: {msg}", fg=typer.colors.YELLOW), err=True)


def print_separator(char: str = "=", width: int = 60) -> None:
    """Print a separator line."""
    typer.echo(char * width)


STATUS_MARKS = {
    TaskStatus.PENDING: "[ ]",
    TaskStatus.IN_PROGRESS: "[~]",
    TaskStatus.COMPLETED: "[x]",
    TaskStatus.BLOCKED: "[!]",
    TaskStatus.SKIPPED: "[-]",
}


def format_task_line(task: Task) -> str:
    """Format a task as a one-line listing entry."""
    mark = STATUS_MARKS[task.status]
    return f"{mark} {task.id} [{task.priority.value}] {task.title} ({task.agent})"


def print_task(task: Task) -> None:
    """Print the details a worker needs to pick up a task."""
    print_separator()
    typer.echo(f"TASK {task.id}: {task.title}")
    print_separator()
    typer.echo(f"Agent: {task.agent}")
    typer.echo(f"Priority: {task.priority.value}")
    if task.description:
        typer.echo(f"\n{task.description}\n")
    if task.dependencies:
        typer.echo(f"Depends on: {', '.join(task.dependencies)}")
    if task.outputs:
        typer.echo(f"Outputs: {', '.join(task.outputs)}")
    if task.acceptance_criteria:
        typer.echo("Acceptance criteria:")
        for criterion in task.acceptance_criteria:
            typer.echo(f"  - {criterion}")
    if task.attempts:
        typer.echo(f"Attempts so far: {task.attempts}/{task.max_attempts}")
    print_separator()
