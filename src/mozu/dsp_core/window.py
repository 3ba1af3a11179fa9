import numpy as np
from typing import Union

from ..errors import InvalidArgumentError, raises_allocation_error
from .padding import as_size


def _window_index(win_length: int) -> np.ndarray:
    win_length = as_size(win_length, 'win_length')
    if win_length < 0:
        raise InvalidArgumentError(f"Window length must be non-negative, got {win_length}")
    return np.arange(win_length, dtype=np.float64)


@raises_allocation_error
def hanning(win_length: int) -> np.ndarray:
    """
    Symmetric Hann window: w[n] = 0.5 * (1 - cos(2πn / (N-1))).

    N = 1 gives [1.0].
    """
    n = _window_index(win_length)
    if win_length == 1:
        return np.ones(1)
    # Symmetric ("filter design") version, both end points are 0
    return 0.5 * (1.0 - np.cos(2 * np.pi * n / (win_length - 1)))


@raises_allocation_error
def hamming(win_length: int) -> np.ndarray:
    """
    Symmetric Hamming window: w[n] = 0.54 - 0.46 * cos(2πn / (N-1)).

    N = 1 gives [1.0].
    """
    n = _window_index(win_length)
    if win_length == 1:
        return np.ones(1)
    return 0.54 - 0.46 * np.cos(2 * np.pi * n / (win_length - 1))


_WINDOWS = {
    'hann': hanning,
    'hanning': hanning,
    'hamming': hamming,
}


def get_window(window: Union[str, np.ndarray], win_length: int) -> np.ndarray:
    """
    Generate an analysis window for framing.

    Parameters
    ----------
    window : str or np.ndarray
        Window specification:
        - 'hann' / 'hanning': Hann window
        - 'hamming': Hamming window
        - np.ndarray: custom window (must have length win_length)
    win_length : int
        Length of the window

    Returns
    -------
    np.ndarray
        Window function of length win_length
    """
    if isinstance(window, np.ndarray):
        if window.ndim != 1 or len(window) != win_length:
            raise InvalidArgumentError(
                f"Custom window shape {window.shape} != ({win_length},)"
            )
        return window

    window_type = str(window).lower()
    if window_type not in _WINDOWS:
        raise InvalidArgumentError(f"Unknown window type: {window}")
    return _WINDOWS[window_type](win_length)
