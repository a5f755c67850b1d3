"""Result monad for business-expected misses in state operations.

Lifecycle and query operations on a project state return a Result
instead of ``None`` when a task id is unknown or nothing is eligible.
Callers have to look at the outcome before they can reach the value,
so a miss cannot be silently ignored.

Example usage:
    >>> result = start_task(state, "T-001")
    >>> if is_ok(result):
    ...     print(f"Started {result.value.title}")
    ... else:
    ...     print(result.error)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed outcome carrying an error description or error object."""

    error: E


# Using Union here as TypeVar aliases don't work with | syntax at runtime
Result = Union[Ok[T], Err[E]]  # noqa: UP007


def is_ok(result: Ok[T] | Err[E]) -> bool:
    """Check if a result is successful."""
    return isinstance(result, Ok)


def is_err(result: Ok[T] | Err[E]) -> bool:
    """Check if a result is an error."""
    return isinstance(result, Err)


def unwrap_or(result: Ok[T] | Err[E], default: T) -> T:
    """Extract the value from a Result, using a default if it's an error.

    Args:
        result: The result to unwrap.
        default: The value to return if result is Err.

    Returns:
        The Ok value if successful, otherwise the default.
    """
    if isinstance(result, Ok):
        return result.value
    return default


def unwrap(result: Ok[T] | Err[E]) -> T:
    """Extract the value from a Result, raising on failure.

    Used at the persistence boundary, where a failure is fatal to the
    calling operation. An Err holding an exception re-raises it unchanged;
    any other error payload is wrapped in a RuntimeError.

    Args:
        result: The result to unwrap.

    Returns:
        The Ok value.

    Raises:
        The Err payload if it is an exception, RuntimeError otherwise.
    """
    if isinstance(result, Ok):
        return result.value
    if isinstance(result.error, BaseException):
        raise result.error
    raise RuntimeError(str(result.error))
