"""Phase CLI commands."""

from typing import Optional

import typer

from orchestrator.application import next_phase, transition_phase
from orchestrator.domain.project import PHASE_ORDER, Phase, PhaseState
from orchestrator.domain.shared import Err
from orchestrator.interfaces.cli.common import (
    RootOption,
    get_manager,
    load_state,
    print_error,
    print_info,
    print_success,
    save_state,
)

app = typer.Typer(help="Phase state machine commands")

PHASE_MARKS = {
    PhaseState.PENDING: "[ ]",
    PhaseState.IN_PROGRESS: "[~]",
    PhaseState.COMPLETE: "[x]",
    PhaseState.SKIPPED: "[-]",
}


@app.command("advance")
def advance(
    to: Optional[Phase] = typer.Option(None, "--to", help="Target phase (default: next phase)"),
    force: bool = typer.Option(False, "--force", help="Allow skipping or going backwards"),
    root: RootOption = None,
) -> None:
    """Complete the current phase and start the next one."""
    manager = get_manager(root)
    state = load_state(manager)

    target = to or next_phase(state.phase)
    if target is None:
        print_info(f"Project is already in the final phase ({state.phase.value})")
        return

    previous = state.phase
    result = transition_phase(state, target, strict=not force)
    if isinstance(result, Err):
        print_error(result.error)
        typer.echo("Use --force to transition anyway.")
        raise typer.Exit(1)

    save_state(manager, state)
    print_success(f"Phase: {previous.value} -> {target.value}")


@app.command("list")
def list_phases(root: RootOption = None) -> None:
    """Show every phase with its status."""
    state = load_state(get_manager(root))
    for phase in PHASE_ORDER:
        status = state.phases[phase]
        marker = " <" if phase == state.phase else ""
        typer.echo(f"{PHASE_MARKS[status.status]} {phase.value}{marker}")
