"""Session hook CLI commands.

Entry points for the agent runtime's hooks. Bookkeeping goes through the
same application services as every other command; the hooks only decide
what to print and which exit code to return.

Hook errors never fail the calling agent: a missing or unreadable state
is reported and the hook exits 0. The pre-write guard is the one hook
that exits 1, and only to reject a protected path.
"""

import json
import re
from typing import Optional

import typer

from orchestrator.application import record_delegation_completed, record_session_stopped
from orchestrator.domain.project import ProjectState
from orchestrator.domain.shared import Err, Ok, OrchestratorError, Result
from orchestrator.interfaces.cli.common import (
    RootOption,
    get_manager,
    print_error,
    print_info,
    print_separator,
    print_warning,
)
from orchestrator.manager import StateManager

app = typer.Typer(help="Agent runtime hooks")

PROTECTED_FILES = frozenset({
    "package-lock.json",
    "pnpm-lock.yaml",
    "yarn.lock",
    ".env",
    ".env.local",
    ".env.production",
})

PROTECTED_DIRS = frozenset({"node_modules", ".git", "dist", "build"})

_SEPARATORS = re.compile(r"[\\/]+")


def check_write_allowed(path: str) -> Result[str, str]:
    """Check a candidate write target against the protected lists.

    Both slash styles separate segments. Only directory segments are
    matched against PROTECTED_DIRS, so a file literally named ``build``
    is allowed.

    Returns:
        Ok(path) if the write may proceed, Err(reason) otherwise.
    """
    segments = [s for s in _SEPARATORS.split(path) if s]
    if not segments:
        return Ok(path)

    if segments[-1] in PROTECTED_FILES:
        return Err(f"Cannot modify protected file: {segments[-1]}")

    for segment in segments[:-1]:
        if segment in PROTECTED_DIRS:
            return Err(f"Cannot modify files in protected directory: {segment}")

    return Ok(path)


def extract_target_path(tool_input: str) -> str:
    """Get the file path from a hook payload.

    The payload is either a JSON object with ``file_path`` or ``path``,
    or the raw path itself.
    """
    try:
        data = json.loads(tool_input)
    except json.JSONDecodeError:
        return tool_input
    if not isinstance(data, dict):
        return tool_input
    return str(data.get("file_path") or data.get("path") or "")


def _load_for_hook(manager: StateManager) -> ProjectState | None:
    if not manager.exists():
        return None
    try:
        return manager.load()
    except OrchestratorError as e:
        print_warning(f"Hook skipped, state unreadable: {e}")
        return None


# =============================================================================
# Commands
# =============================================================================


@app.command("post-task")
def post_task(root: RootOption = None) -> None:
    """Refresh progress after a delegated task finishes."""
    manager = get_manager(root)
    state = _load_for_hook(manager)
    if state is None:
        return

    due = record_delegation_completed(state)
    if due:
        print_info(f"Checkpoint recommended: {state.progress.completed} tasks completed")

    try:
        manager.save(state)
    except OrchestratorError as e:
        print_warning(f"Post-task hook could not save state: {e}")
        return

    progress = state.progress
    typer.echo(f"Progress: {progress.completed}/{progress.total} ({progress.percentage}%)")


@app.command("stop")
def stop(root: RootOption = None) -> None:
    """Log the session end and checkpoint the state."""
    manager = get_manager(root)
    state = _load_for_hook(manager)
    if state is None:
        typer.echo("No active orchestrator session")
        return

    record_session_stopped(state)
    try:
        checkpoint = manager.create_checkpoint(state, description="Session stopped")
        manager.save(state)
    except OrchestratorError as e:
        print_warning(f"Stop hook could not checkpoint state: {e}")
        return

    progress = state.progress
    typer.echo(f"Checkpoint created: {checkpoint.id}")
    print_separator()
    typer.echo("Orchestrator Session Summary")
    print_separator()
    typer.echo(f"Phase: {state.phase.value}")
    typer.echo(f"Progress: {progress.completed}/{progress.total} tasks ({progress.percentage}%)")
    print_separator()


@app.command("pre-write")
def pre_write(
    tool_input: Optional[str] = typer.Argument(
        None, help="Target path, or a JSON payload with file_path/path"
    ),
) -> None:
    """Reject writes to protected files and directories (exit 1)."""
    if not tool_input:
        return

    target = extract_target_path(tool_input)
    result = check_write_allowed(target)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)
