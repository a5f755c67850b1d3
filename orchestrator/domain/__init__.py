"""Domain layer: pure models and functions for orchestrator state.

Subpackages:
    shared - Result monad, error taxonomy, document base model
    task - Task collection, scheduling and progress aggregation
    project - ProjectState aggregate, phases and ledger records
"""
