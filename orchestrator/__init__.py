"""Orchestrator - persisted task-graph state for multi-phase software delivery.

Tracks a project through ordered phases, resolves task dependencies,
selects work that can run concurrently, and keeps a decision/history
ledger with checkpoint and rollback support.
"""

__version__ = "0.1.0"
