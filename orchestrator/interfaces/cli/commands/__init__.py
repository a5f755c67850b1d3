"""CLI command groups for the orchestrator.

This package contains individual command groups that are registered
with the main Typer app. Each module provides a set of related commands.

Command groups:
- project: Project state (init, status, decide, tech-stack, metrics)
- task: Task lifecycle (next, batch, list, start, complete, fail, add)
- phase: Phase state machine (advance, list)
- checkpoint: Snapshots (create, list, restore)
- hook: Agent runtime hooks (post-task, stop, pre-write)

Each command group is a Typer app that gets registered
with the main app using app.add_typer().
"""

from orchestrator.interfaces.cli.commands import checkpoint, hook, phase, project, task

__all__ = ["project", "task", "phase", "checkpoint", "hook"]
