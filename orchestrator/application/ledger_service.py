"""Decision and history ledger.

Append-only records attached to the project state. Nothing here
removes, edits or caps entries.
"""

from datetime import UTC, datetime
from typing import Any

from orchestrator.domain.project import Decision, HistoryEntry, ProjectState


def sequential_id(prefix: str, count: int) -> str:
    """Build the id following ``count`` existing records, e.g. ``DEC-004``."""
    return f"{prefix}-{count + 1:03d}"


def add_history(
    state: ProjectState,
    action: str,
    agent: str | None = None,
    task_id: str | None = None,
    details: dict[str, Any] | None = None,
) -> HistoryEntry:
    """Append a history entry to the state.

    Args:
        state: The project state to update in place.
        action: Action tag, e.g. ``task_started``.
        agent: Worker type responsible for the action, if any.
        task_id: Task the action concerns, if any.
        details: Free-form JSON-compatible detail map.

    Returns:
        The appended entry.
    """
    entry = HistoryEntry(
        timestamp=datetime.now(UTC),
        action=action,
        agent=agent,
        task_id=task_id,
        details=details,
    )
    state.history.append(entry)
    return entry


def add_decision(
    state: ProjectState,
    topic: str,
    decision: str,
    rationale: str,
    decided_by: str,
    alternatives: list[str] | None = None,
) -> Decision:
    """Record a decision and log a ``decision_made`` history entry.

    Decisions are never amended; a superseding choice is a new decision.

    Returns:
        The appended decision with its ``DEC-NNN`` id.
    """
    record = Decision(
        id=sequential_id("DEC", len(state.decisions)),
        topic=topic,
        decision=decision,
        rationale=rationale,
        alternatives=alternatives,
        decided_at=datetime.now(UTC),
        decided_by=decided_by,
    )
    state.decisions.append(record)
    add_history(
        state,
        "decision_made",
        agent=decided_by,
        details={"topic": topic, "decision": decision},
    )
    return record
