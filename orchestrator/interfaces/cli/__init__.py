"""CLI interface for the orchestrator using Typer.

This module provides the command-line interface that drives a project
through its phases and task lifecycle.

Usage:
    orchestrator init --name "Todo App"    # Initialize a project state
    orchestrator status                    # Show phase and progress
    orchestrator next                      # Show the next eligible task
    orchestrator task start T-001          # Start working on a task

The CLI is structured as:
- app: Main Typer application
- commands/: Individual command groups (project, task, phase, ...)
- common.py: Shared utilities for CLI commands
- main.py: Entry point that runs the app
"""

from typing import List, Optional

import typer

from orchestrator import __version__
from orchestrator.interfaces.cli.commands import checkpoint, hook, phase, project, task
from orchestrator.interfaces.cli.common import RootOption, configure_logging

app = typer.Typer(
    name="orchestrator",
    help="State engine for multi-agent software delivery",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"orchestrator version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """Orchestrator - phase, task and checkpoint state for agent teams.

    Keeps one JSON state document per project and moves it through
    ideation to completion.
    """
    configure_logging(verbose)


# =============================================================================
# Register Command Groups
# =============================================================================

app.add_typer(project.app, name="project")
app.add_typer(task.app, name="task")
app.add_typer(phase.app, name="phase")
app.add_typer(checkpoint.app, name="checkpoint")
app.add_typer(hook.app, name="hook")


# =============================================================================
# Top-Level Shortcuts for Common Commands
# =============================================================================


@app.command("init")
def init(
    name: str = typer.Option(..., "--name", "-n", help="Project name"),
    description: str = typer.Option("", "--description", "-d", help="Project description"),
    slug: Optional[str] = typer.Option(None, "--slug", help="URL-safe slug (default: from name)"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing project state"),
    root: RootOption = None,
) -> None:
    """Initialize project (shortcut for 'project init')."""
    project.init(name=name, description=description, slug=slug, force=force, root=root)


@app.command("status")
def status(
    json_output: bool = typer.Option(False, "--json", help="Output the raw state as JSON"),
    root: RootOption = None,
) -> None:
    """Show status (shortcut for 'project status')."""
    project.status(json_output=json_output, root=root)


@app.command("next")
def next_task(root: RootOption = None) -> None:
    """Show next task (shortcut for 'task next')."""
    task.next_task(root=root)


@app.command("batch")
def batch(
    max_tasks: Optional[int] = typer.Option(
        None, "--max", "-n", min=1, help="Batch size (default: config maxParallelTasks)"
    ),
    root: RootOption = None,
) -> None:
    """Show a parallel batch (shortcut for 'task batch')."""
    task.batch(max_tasks=max_tasks, root=root)


@app.command("decide")
def decide(
    topic: str = typer.Argument(..., help="What the decision is about"),
    decision: str = typer.Argument(..., help="The chosen option"),
    rationale: str = typer.Option(..., "--rationale", help="Why this option was chosen"),
    by: str = typer.Option("orchestrator", "--by", help="Deciding agent"),
    alternatives: Optional[List[str]] = typer.Option(
        None, "--alt", help="Alternative considered (repeatable)"
    ),
    root: RootOption = None,
) -> None:
    """Record a decision (shortcut for 'project decide')."""
    project.decide(
        topic=topic,
        decision=decision,
        rationale=rationale,
        by=by,
        alternatives=alternatives,
        root=root,
    )


__all__ = ["app"]
