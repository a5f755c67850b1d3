"""Error taxonomy for fatal state failures.

These are raised (not returned) because a failed load, save or
checkpoint restore must abort the calling operation and reach the
driver unchanged. Business-expected misses use the Result monad instead.
"""

from pydantic import ValidationError as PydanticValidationError


class OrchestratorError(Exception):
    """Base class for all fatal orchestrator errors."""


class NotFoundError(OrchestratorError):
    """A state, task or checkpoint document does not exist."""


class StorageError(OrchestratorError):
    """A document could not be read or written (permissions, disk, ...)."""


class ValidationError(OrchestratorError):
    """A document does not conform to its schema.

    Attributes:
        path: Dotted location of the first offending field, e.g.
            ``tasks.0.priority``. Empty when the document as a whole is
            malformed (for example, invalid JSON).
    """

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError, source: str) -> "ValidationError":
        """Build from a pydantic error, keeping the first failing location."""
        errors = exc.errors()
        locations = [".".join(str(part) for part in err["loc"]) for err in errors]
        details = "; ".join(
            f"{loc or '<root>'}: {err['msg']}" for loc, err in zip(locations, errors)
        )
        return cls(f"Invalid {source}: {details}", path=locations[0] if locations else "")
