"""Checkpoint CLI commands.

Commands for snapshotting the project state and rolling back to an
earlier snapshot.
"""

from typing import Optional

import typer

from orchestrator.domain.shared import OrchestratorError
from orchestrator.interfaces.cli.common import (
    RootOption,
    fail,
    get_manager,
    load_state,
    print_info,
    print_success,
    save_state,
)

app = typer.Typer(help="Checkpoint commands")


@app.command("create")
def create(
    commit: Optional[str] = typer.Option(None, "--commit", help="Git commit reference"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="Note"),
    root: RootOption = None,
) -> None:
    """Snapshot the full project state."""
    manager = get_manager(root)
    state = load_state(manager)

    try:
        checkpoint = manager.create_checkpoint(state, git_commit=commit, description=description)
    except OrchestratorError as e:
        raise fail(e) from e

    save_state(manager, state)
    print_success(
        f"Created {checkpoint.id} ({checkpoint.phase.value}, "
        f"{checkpoint.tasks_completed} tasks completed)"
    )


@app.command("list")
def list_checkpoints(
    show_all: bool = typer.Option(
        False, "--all", "-a", help="Also show snapshots on disk that the state does not record"
    ),
    root: RootOption = None,
) -> None:
    """List the checkpoints recorded in the current state.

    Restoring an older checkpoint keeps later snapshots on disk; --all
    lists those too.
    """
    manager = get_manager(root)
    state = load_state(manager)

    recorded = {cp.id for cp in state.checkpoints}
    orphans = []
    if show_all:
        orphans = [cid for cid in manager.checkpoints.list_snapshots() if cid not in recorded]

    if not state.checkpoints and not orphans:
        print_info("No checkpoints")
        return
    for cp in state.checkpoints:
        note = f" - {cp.description}" if cp.description else ""
        commit = f" @{cp.git_commit}" if cp.git_commit else ""
        missing = "" if manager.checkpoints.has_snapshot(cp.id) else "  (snapshot missing)"
        typer.echo(
            f"{cp.id}  {cp.timestamp:%Y-%m-%d %H:%M}  {cp.phase.value}  "
            f"{cp.tasks_completed} done{commit}{note}{missing}"
        )
    for cid in orphans:
        typer.echo(f"{cid}  (not in current state)")


@app.command("restore")
def restore(
    checkpoint_id: str = typer.Argument(..., help="Checkpoint ID, e.g. CP-002"),
    root: RootOption = None,
) -> None:
    """Replace the current state with a checkpoint snapshot."""
    manager = get_manager(root)
    try:
        state = manager.restore_checkpoint(checkpoint_id)
    except OrchestratorError as e:
        raise fail(e) from e

    print_success(
        f"Restored {checkpoint_id}: phase {state.phase.value}, "
        f"{state.progress.completed}/{state.progress.total} tasks completed"
    )
