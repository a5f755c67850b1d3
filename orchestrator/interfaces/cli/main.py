"""Entry point for the orchestrator CLI.

Usage:
    python -m orchestrator.interfaces.cli.main

Or via installed entry point:
    orchestrator <command>
"""

from orchestrator.interfaces.cli import app


def main() -> None:
    """Run the orchestrator CLI application."""
    app()


if __name__ == "__main__":
    main()
