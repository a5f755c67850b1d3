"""Shared domain building blocks.

- Result monad for business-expected misses
- Error taxonomy for fatal persistence failures
- DocumentModel base for camelCase JSON documents

Example usage:
    >>> from orchestrator.domain.shared import Ok, Err, Result, is_ok
    >>>
    >>> def find_task(task_id: str) -> Result[dict, str]:
    ...     if task_id == "missing":
    ...         return Err("Task not found")
    ...     return Ok({"id": task_id})
"""

from orchestrator.domain.shared.errors import (
    NotFoundError,
    OrchestratorError,
    StorageError,
    ValidationError,
)
from orchestrator.domain.shared.models import DocumentModel
from orchestrator.domain.shared.result import (
    Err,
    Ok,
    Result,
    is_err,
    is_ok,
    unwrap,
    unwrap_or,
)

__all__ = [
    # Result monad
    "Ok",
    "Err",
    "Result",
    "is_ok",
    "is_err",
    "unwrap",
    "unwrap_or",
    # Errors
    "OrchestratorError",
    "NotFoundError",
    "StorageError",
    "ValidationError",
    # Models
    "DocumentModel",
]
