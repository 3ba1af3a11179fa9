"""
Waveform -> (log-)mel spectrogram pipeline built from the core operations:

    frame -> window -> rfft -> power -> filter bank -> power_to_db
"""

import logging
from typing import Optional, Union

import numpy as np

from ..config import FrontendConfig
from ..errors import InvalidArgumentError, raises_allocation_error
from .fft import power, rfft_frames
from .filter_bank import build_filter_bank
from .framing import frame
from .padding import as_signal
from .window import get_window

logger = logging.getLogger(__name__)


@raises_allocation_error
def spectrogram(
    y: np.ndarray,
    n_fft: int = 400,
    hop_length: int = 160,
    window: Union[str, np.ndarray] = 'hann',
    center: bool = True,
    power_mode: str = 'norm'
) -> np.ndarray:
    """
    Magnitude or power spectrogram.

    Returns
    -------
    np.ndarray
        Shape (n_fft // 2 + 1, n_frames)
    """
    if power_mode not in ('abs', 'norm'):
        raise InvalidArgumentError(f"Unknown power mode: {power_mode!r} (expected 'abs' or 'norm')")
    y = as_signal(y, 'y')
    window_func = get_window(window, n_fft)

    frames = frame(y, hop_length, n_fft, center=center)
    if frames.shape[0] == 0:
        return np.zeros((n_fft // 2 + 1, 0))

    # Apply window to all frames at once
    spectra = rfft_frames(frames * window_func)
    return power(spectra, power_mode).T


def power_to_db(
    S: np.ndarray,
    ref: float = 1.0,
    amin: float = 1e-10,
    top_db: Optional[float] = 80.0
) -> np.ndarray:
    """
    Convert a power spectrogram to decibels: 10 * log10(max(amin, S) / ref).

    With top_db set, values below max - top_db are clipped.
    """
    if amin <= 0:
        raise InvalidArgumentError(f"amin must be strictly positive, got {amin}")

    S = np.asarray(S, dtype=np.float64)
    S_db = 10.0 * np.log10(np.maximum(amin, S)) - 10.0 * np.log10(np.maximum(amin, ref))

    if top_db is not None and S_db.size > 0:
        if top_db < 0:
            raise InvalidArgumentError(f"top_db must be non-negative, got {top_db}")
        S_db = np.maximum(S_db, S_db.max() - top_db)
    return S_db


def amplitude_to_db(
    S: np.ndarray,
    ref: float = 1.0,
    amin: float = 1e-5,
    top_db: Optional[float] = 80.0
) -> np.ndarray:
    """Convert a magnitude spectrogram to decibels: 20 * log10(max(amin, |S|) / ref)."""
    if amin <= 0:
        raise InvalidArgumentError(f"amin must be strictly positive, got {amin}")
    # Power = amplitude^2
    magnitude = np.abs(np.asarray(S))
    return power_to_db(magnitude ** 2, ref=ref ** 2, amin=amin ** 2, top_db=top_db)


@raises_allocation_error
def melspectrogram(y: np.ndarray, config: Optional[FrontendConfig] = None) -> np.ndarray:
    """
    Compute a mel spectrogram.

    Args:
        y: Audio time series (1-D, mono)
        config: Front-end parameters (defaults to FrontendConfig())

    Returns:
        Mel spectrogram, shape (n_mels, n_frames); in dB when config.log is set
        (20 * log10 for the 'abs' power mode, 10 * log10 for 'norm')
    """
    if config is None:
        config = FrontendConfig()
    config.validate()

    S = spectrogram(
        y,
        n_fft=config.n_fft,
        hop_length=config.hop_length,
        window=config.window,
        center=config.center,
        power_mode=config.power,
    )

    mel_basis = build_filter_bank(
        num_frequency_bins=config.n_freqs,
        num_mel_filters=config.n_mels,
        min_freq=config.fmin,
        max_freq=config.max_freq,
        sample_rate=config.sample_rate,
        scale=config.mel_scale,
        norm=config.norm,
        triangularize_in_mel_space=config.triangularize_in_mel_space,
    )

    # mel[m, t] = Σ_k mel_basis[k, m] * S[k, t]
    mel_spectrum = np.dot(mel_basis.T, S)
    logger.debug("melspectrogram: %d samples -> %s", len(y), mel_spectrum.shape)

    if config.log:
        if config.power == 'abs':
            # amin is a power floor; take its square root for magnitudes
            return amplitude_to_db(mel_spectrum, ref=1.0, amin=np.sqrt(config.amin), top_db=config.top_db)
        return power_to_db(mel_spectrum, ref=1.0, amin=config.amin, top_db=config.top_db)
    return mel_spectrum
