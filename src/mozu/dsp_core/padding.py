"""
Boundary padding for 1-D sample sequences.

Three policies are supported:
    - zero:    inserted samples are 0
    - edge:    the boundary sample is repeated
    - reflect: the interior is mirrored, excluding the boundary sample itself
               ([1, 2, 3, 4] padded by 2 on both sides gives
               [3, 2, 1, 2, 3, 4, 3, 2])
"""

import logging
from enum import Enum
from typing import Union

import numpy as np

from ..errors import InvalidArgumentError, raises_allocation_error

logger = logging.getLogger(__name__)


class PadMode(str, Enum):
    ZERO = 'zero'
    EDGE = 'edge'
    REFLECT = 'reflect'

    @classmethod
    def parse(cls, mode: Union[str, 'PadMode']) -> 'PadMode':
        if isinstance(mode, PadMode):
            return mode
        name = str(mode).lower()
        # numpy spelling
        if name == 'constant':
            name = 'zero'
        try:
            return cls(name)
        except ValueError:
            raise InvalidArgumentError(
                f"Unknown pad mode: {mode!r} (expected one of zero, edge, reflect)"
            ) from None


# numpy.pad mode names
_NUMPY_MODE = {
    PadMode.ZERO: 'constant',
    PadMode.EDGE: 'edge',
    PadMode.REFLECT: 'reflect',
}


def as_signal(x, name: str = 'sequence') -> np.ndarray:
    """Convert ``x`` to a 1-D float array, keeping float32 input as float32."""
    x = np.asarray(x)
    if x.ndim != 1:
        raise InvalidArgumentError(f"{name} must be 1D, got shape {x.shape}")
    if np.iscomplexobj(x):
        raise InvalidArgumentError(f"{name} must be real-valued, got dtype {x.dtype}")
    if x.dtype != np.float32:
        x = x.astype(np.float64)
    return x


def as_size(value, name: str = 'size') -> int:
    """Convert an integral count to int; fractional values are rejected, not truncated."""
    if isinstance(value, (bool, np.bool_)):
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, (int, np.integer)):
        return int(value)
    if isinstance(value, (float, np.floating)) and float(value).is_integer():
        return int(value)
    raise InvalidArgumentError(f"{name} must be an integer, got {value!r}")


@raises_allocation_error
def pad(
    sequence: np.ndarray,
    front_size: int,
    rear_size: int,
    mode: Union[str, PadMode] = PadMode.ZERO
) -> np.ndarray:
    """
    Pad a 1-D sequence at the front and rear.

    Parameters
    ----------
    sequence : np.ndarray
        Input samples (1-D)
    front_size : int
        Number of samples inserted before the first element
    rear_size : int
        Number of samples appended after the last element
    mode : str or PadMode
        'zero', 'edge' or 'reflect'

    Returns
    -------
    np.ndarray
        New array of length len(sequence) + front_size + rear_size

    Raises
    ------
    InvalidArgumentError
        Negative or non-integral sizes, unknown mode, reflect padding wider than
        len(sequence) - 1, or edge padding of an empty sequence.

    Examples
    --------
    >>> pad(np.array([1.0, 2.0, 3.0]), 2, 1, 'edge')
    array([1., 1., 1., 2., 3., 3.])
    """
    x = as_signal(sequence)
    mode = PadMode.parse(mode)
    front_size = as_size(front_size, 'front_size')
    rear_size = as_size(rear_size, 'rear_size')

    if front_size < 0 or rear_size < 0:
        raise InvalidArgumentError(
            f"Pad sizes must be non-negative, got front={front_size}, rear={rear_size}"
        )

    if front_size == 0 and rear_size == 0:
        return x.copy()

    n = len(x)
    if mode is PadMode.REFLECT and max(front_size, rear_size) > n - 1:
        # numpy would wrap the reflection around; that is an overrun here
        raise InvalidArgumentError(
            f"Reflect padding ({front_size}, {rear_size}) exceeds len(sequence) - 1 = {n - 1}"
        )
    if mode is PadMode.EDGE and n == 0:
        raise InvalidArgumentError("Cannot edge-pad an empty sequence")

    logger.debug("pad: n=%d front=%d rear=%d mode=%s", n, front_size, rear_size, mode.value)
    return np.pad(x, (front_size, rear_size), mode=_NUMPY_MODE[mode])
