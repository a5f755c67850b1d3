"""Interface adapters for the orchestrator."""
