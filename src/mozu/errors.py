"""
Error types shared by every mozu operation.

Two failure classes are kept apart so callers can tell a caller bug
(InvalidArgumentError) from a resource condition worth retrying
(AllocationError).
"""

import functools
from typing import Callable, TypeVar

F = TypeVar('F', bound=Callable)


class MozuError(Exception):
    """Base class for all errors raised by mozu."""


class InvalidArgumentError(MozuError, ValueError):
    """Malformed shape, unknown mode/scale, non-positive size, pad overrun."""


class AllocationError(MozuError, MemoryError):
    """A working buffer could not be allocated."""


def raises_allocation_error(func: F) -> F:
    """Re-raise MemoryError from ``func`` as AllocationError."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except AllocationError:
            raise
        except MemoryError as e:
            raise AllocationError(f"{func.__name__}: could not allocate working buffer") from e

    return wrapper
