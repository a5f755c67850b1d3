"""Project management CLI commands.

Commands for project initialization, decisions, tech stack and
status reporting.
"""

import json
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError as PydanticValidationError

from orchestrator.application import (
    add_decision,
    get_summary,
    set_tech_stack,
    update_metrics,
)
from orchestrator.domain.project import TechStack
from orchestrator.domain.shared import Err, ValidationError
from orchestrator.infrastructure.storage import dump_document
from orchestrator.interfaces.cli.common import (
    RootOption,
    fail,
    get_manager,
    load_state,
    print_error,
    print_success,
    save_state,
)

app = typer.Typer(help="Project management commands")


# =============================================================================
# Commands
# =============================================================================


@app.command("init")
def init(
    name: str = typer.Option(..., "--name", "-n", help="Project name"),
    description: str = typer.Option("", "--description", "-d", help="Project description"),
    slug: Optional[str] = typer.Option(None, "--slug", help="URL-safe slug (default: from name)"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing project state"),
    root: RootOption = None,
) -> None:
    """Initialize a new project state in the ideation phase.

    Example:
        orchestrator project init --name "Todo App" -d "A small todo service"
    """
    manager = get_manager(root)
    if manager.exists() and not force:
        print_error(f"Project state already exists at {manager.paths.state_file}")
        typer.echo("Use --force to overwrite it.")
        raise typer.Exit(1)

    result = manager.initialize(name, description, slug=slug)
    if isinstance(result, Err):
        raise fail(result.error)

    state = result.value
    print_success(f"Initialized project: {state.project.name} ({state.project.slug})")
    typer.echo(f"  State: {manager.paths.state_file}")
    typer.echo(f"  Phase: {state.phase.value}")


@app.command("status")
def status(
    json_output: bool = typer.Option(False, "--json", help="Output the raw state as JSON"),
    root: RootOption = None,
) -> None:
    """Show phase, progress, current tasks and blockers."""
    state = load_state(get_manager(root))
    if json_output:
        typer.echo(json.dumps(dump_document(state), indent=2))
        return
    typer.echo(get_summary(state))


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
    """Record a decision in the ledger."""
    manager = get_manager(root)
    state = load_state(manager)

    record = add_decision(state, topic, decision, rationale, by, alternatives or None)
    save_state(manager, state)
    print_success(f"Recorded {record.id}: {topic} -> {decision}")


@app.command("tech-stack")
def tech_stack(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON tech stack file"),
    root: RootOption = None,
) -> None:
    """Set the project's tech stack from a JSON file."""
    manager = get_manager(root)
    state = load_state(manager)

    try:
        stack = TechStack.model_validate(json.loads(file.read_text(encoding="utf-8")))
    except json.JSONDecodeError as e:
        raise fail(f"Invalid JSON in {file}: {e}") from e
    except UnicodeDecodeError as e:
        raise fail(f"Invalid UTF-8 in {file}: {e}") from e
    except PydanticValidationError as e:
        raise fail(ValidationError.from_pydantic(e, "tech stack")) from e

    set_tech_stack(state, stack)
    save_state(manager, state)
    print_success("Tech stack recorded")


@app.command("metrics")
def metrics(root: RootOption = None) -> None:
    """Recompute and show delivery metrics."""
    manager = get_manager(root)
    state = load_state(manager)

    result = update_metrics(state)
    save_state(manager, state)

    typer.echo(f"Total time:    {result.total_time or '-'}")
    typer.echo(f"Avg task time: {result.avg_task_time or '-'}")
    rate = f"{result.retry_rate:.0%}" if result.retry_rate is not None else "-"
    typer.echo(f"Retry rate:    {rate}")
