"""
Frame segmentation: slide a fixed-size window over a 1-D signal.
"""

import logging

import numpy as np

from ..errors import InvalidArgumentError, raises_allocation_error
from .padding import PadMode, as_signal, as_size, pad

logger = logging.getLogger(__name__)


def _check_frame_sizes(hop, window):
    hop = as_size(hop, 'hop')
    window = as_size(window, 'window')
    if hop <= 0:
        raise InvalidArgumentError(f"hop must be positive, got {hop}")
    if window <= 0:
        raise InvalidArgumentError(f"window must be positive, got {window}")
    return hop, window


def num_frames(length: int, hop: int, window: int) -> int:
    """Number of whole frames of size ``window`` at stride ``hop`` in ``length`` samples."""
    length = as_size(length, 'length')
    if length < 0:
        raise InvalidArgumentError(f"length must be non-negative, got {length}")
    hop, window = _check_frame_sizes(hop, window)
    if length < window:
        return 0
    return (length - window) // hop + 1


@raises_allocation_error
def frame(
    y: np.ndarray,
    hop: int,
    window: int,
    center: bool = False
) -> np.ndarray:
    """
    Split a signal into overlapping frames.

    Parameters
    ----------
    y : np.ndarray
        Input signal (1-D)
    hop : int
        Number of samples between the starts of consecutive frames (> 0)
    window : int
        Frame length in samples (> 0)
    center : bool
        If True, reflect-pad ``window // 2`` samples on both sides first so
        that frame t is centered at y[t * hop]

    Returns
    -------
    np.ndarray
        Frames, shape (n_frames, window). n_frames is 0 when no frame fits.

    Examples
    --------
    >>> frame(np.arange(1, 11), hop=2, window=4)
    array([[ 1.,  2.,  3.,  4.],
           [ 3.,  4.,  5.,  6.],
           [ 5.,  6.,  7.,  8.],
           [ 7.,  8.,  9., 10.]])
    """
    y = as_signal(y, 'y')
    hop, window = _check_frame_sizes(hop, window)

    if center:
        half = window // 2
        y = pad(y, half, half, PadMode.REFLECT)

    n = num_frames(len(y), hop, window)
    logger.debug("frame: len=%d hop=%d window=%d center=%s -> %d frames",
                 len(y), hop, window, center, n)

    # Extract all frames at once (vectorized)
    frame_starts = np.arange(n) * hop
    frame_indices = frame_starts[:, np.newaxis] + np.arange(window)
    return y[frame_indices]
