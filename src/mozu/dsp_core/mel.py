"""
Hz <-> mel conversion for the HTK, Kaldi and Slaney conventions, and the
linearly spaced grids used to place filter-bank boundaries.
"""

from enum import Enum
from typing import Callable, Dict, Union

import numpy as np

from ..errors import InvalidArgumentError, raises_allocation_error
from .padding import as_size

ArrayLike = Union[float, np.ndarray]


class MelScale(str, Enum):
    HTK = 'htk'
    KALDI = 'kaldi'
    SLANEY = 'slaney'

    @classmethod
    def parse(cls, scale: Union[str, 'MelScale']) -> 'MelScale':
        if isinstance(scale, MelScale):
            return scale
        try:
            return cls(str(scale).lower())
        except ValueError:
            raise InvalidArgumentError(
                f"Unknown mel scale: {scale!r} (expected one of htk, kaldi, slaney)"
            ) from None


# Slaney (Auditory Toolbox) constants: linear below 1 kHz, log above
_MIN_LOG_HZ = 1000.0         # Transition point
_MIN_LOG_MEL = 15.0          # 1000 Hz at 200/3 Hz per mel
_LOGSTEP = np.log(6.4) / 27.0


def _htk_hz_to_mel(f: np.ndarray) -> np.ndarray:
    return 2595.0 * np.log10(1.0 + f / 700.0)


def _htk_mel_to_hz(m: np.ndarray) -> np.ndarray:
    return 700.0 * (10.0 ** (m / 2595.0) - 1.0)


def _kaldi_hz_to_mel(f: np.ndarray) -> np.ndarray:
    return 1127.0 * np.log(1.0 + f / 700.0)


def _kaldi_mel_to_hz(m: np.ndarray) -> np.ndarray:
    return 700.0 * (np.exp(m / 1127.0) - 1.0)


def _slaney_hz_to_mel(f: np.ndarray) -> np.ndarray:
    return np.where(
        f >= _MIN_LOG_HZ,
        # Logarithmic part; np.maximum keeps log() quiet on the unused branch
        _MIN_LOG_MEL + np.log(np.maximum(f, _MIN_LOG_HZ) / _MIN_LOG_HZ) * (27.0 / np.log(6.4)),
        # Linear part
        3.0 * f / 200.0,
    )


def _slaney_mel_to_hz(m: np.ndarray) -> np.ndarray:
    return np.where(
        m >= _MIN_LOG_MEL,
        _MIN_LOG_HZ * np.exp(_LOGSTEP * (m - _MIN_LOG_MEL)),
        200.0 * m / 3.0,
    )


_HZ_TO_MEL: Dict[MelScale, Callable[[np.ndarray], np.ndarray]] = {
    MelScale.HTK: _htk_hz_to_mel,
    MelScale.KALDI: _kaldi_hz_to_mel,
    MelScale.SLANEY: _slaney_hz_to_mel,
}

_MEL_TO_HZ: Dict[MelScale, Callable[[np.ndarray], np.ndarray]] = {
    MelScale.HTK: _htk_mel_to_hz,
    MelScale.KALDI: _kaldi_mel_to_hz,
    MelScale.SLANEY: _slaney_mel_to_hz,
}


def _convert(values: ArrayLike, table, scale) -> ArrayLike:
    fn = table[MelScale.parse(scale)]
    if np.isscalar(values):
        return float(fn(np.float64(values)))
    return fn(np.asarray(values, dtype=np.float64))


@raises_allocation_error
def hz_to_mel(frequencies: ArrayLike, scale: Union[str, MelScale] = MelScale.HTK) -> ArrayLike:
    """
    Convert Hz to mel.

    Args:
        frequencies: Scalar or array of frequencies in Hz
        scale: 'htk', 'kaldi' or 'slaney'

    Returns:
        Mel values, float for scalar input, otherwise an array of the same shape
    """
    return _convert(frequencies, _HZ_TO_MEL, scale)


@raises_allocation_error
def mel_to_hz(mels: ArrayLike, scale: Union[str, MelScale] = MelScale.HTK) -> ArrayLike:
    """
    Convert mel to Hz (inverse of hz_to_mel for the same scale).

    Args:
        mels: Scalar or array of mel values
        scale: 'htk', 'kaldi' or 'slaney'

    Returns:
        Frequencies in Hz, float for scalar input, otherwise an array of the same shape
    """
    return _convert(mels, _MEL_TO_HZ, scale)


@raises_allocation_error
def linspace(start: float, stop: float, num: int, endpoint: bool = True) -> np.ndarray:
    """
    Evenly spaced points: start + i * (stop - start) / section.

    section is num - 1 when endpoint is True, num otherwise. Unlike
    numpy.linspace the last point is not forced to ``stop``.
    """
    num = as_size(num, 'num')
    if num < 0:
        raise InvalidArgumentError(f"Number of samples must be non-negative, got {num}")

    section = num - 1 if endpoint else num
    if section == 0:
        # num == 1 with endpoint, or num == 0
        return np.full(num, float(start))

    return float(start) + np.arange(num, dtype=np.float64) * (float(stop) - float(start)) / section
