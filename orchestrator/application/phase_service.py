"""Phase state machine.

Moves a project between lifecycle phases and timestamps each phase's
start and completion. Transitions are caller-trusted by default; strict
mode only accepts the next phase in PHASE_ORDER.
"""

import logging
from datetime import UTC, datetime

from orchestrator.application.ledger_service import add_history
from orchestrator.domain.project import PHASE_ORDER, Phase, PhaseState, PhaseStatus, ProjectState
from orchestrator.domain.shared import Err, Ok, Result

logger = logging.getLogger(__name__)


def next_phase(phase: Phase) -> Phase | None:
    """Get the phase after ``phase``, or None for the terminal phase."""
    index = PHASE_ORDER.index(phase)
    if index + 1 >= len(PHASE_ORDER):
        return None
    return PHASE_ORDER[index + 1]


def is_forward_step(current: Phase, target: Phase) -> bool:
    """Check that ``target`` directly follows ``current``."""
    return next_phase(current) == target


def transition_phase(
    state: ProjectState,
    target: Phase,
    strict: bool = False,
) -> Result[ProjectState, str]:
    """Complete the current phase and start ``target``.

    Args:
        state: The project state to update in place.
        target: Phase to move to.
        strict: Reject anything other than the next phase in order.

    Returns:
        Ok(state) after the transition, or Err(str) in strict mode when
        the step is not a single forward move (state left untouched).
    """
    current = state.phase
    if strict and not is_forward_step(current, target):
        return Err(f"Illegal phase transition: {current.value} -> {target.value}")

    now = datetime.now(UTC)

    current_status = state.phases.setdefault(current, PhaseStatus())
    current_status.status = PhaseState.COMPLETE
    current_status.completed_at = now

    state.phase = target
    target_status = state.phases.setdefault(target, PhaseStatus())
    target_status.status = PhaseState.IN_PROGRESS
    target_status.started_at = now

    add_history(state, "phase_transition", details={"from": current.value, "to": target.value})
    logger.info(f"Phase transition: {current.value} -> {target.value}")
    return Ok(state)
