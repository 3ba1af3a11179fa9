import logging
from typing import Union

import numpy as np

from ..errors import InvalidArgumentError, raises_allocation_error
from .mel import MelScale, hz_to_mel, linspace, mel_to_hz
from .padding import as_size

logger = logging.getLogger(__name__)


@raises_allocation_error
def create_triangular_filter_bank(fft_freqs: np.ndarray, filter_freqs: np.ndarray) -> np.ndarray:
    """
    Triangular filters from a bin grid and a set of boundary points.

    Both grids must already be in the same domain (Hz or mel). Filter j
    rises from filter_freqs[j] to a peak at filter_freqs[j + 1] and falls
    back to zero at filter_freqs[j + 2].

    Args:
        fft_freqs: Bin centers, shape (n_bins,)
        filter_freqs: Boundary points, shape (n_filters + 2,), increasing

    Returns:
        Weight matrix, shape (n_bins, n_filters)
    """
    fft_freqs = np.asarray(fft_freqs, dtype=np.float64)
    filter_freqs = np.asarray(filter_freqs, dtype=np.float64)
    if fft_freqs.ndim != 1 or filter_freqs.ndim != 1:
        raise InvalidArgumentError("fft_freqs and filter_freqs must be 1D")
    if len(filter_freqs) < 3:
        raise InvalidArgumentError(
            f"Need at least 3 boundary points for one filter, got {len(filter_freqs)}"
        )

    filter_diff = np.diff(filter_freqs)
    # slopes[i, j] = filter_freqs[j] - fft_freqs[i]
    slopes = filter_freqs[np.newaxis, :] - fft_freqs[:, np.newaxis]

    down_slopes = -slopes[:, :-2] / filter_diff[:-1]
    up_slopes = slopes[:, 2:] / filter_diff[1:]
    return np.maximum(np.minimum(down_slopes, up_slopes), 0.0)


@raises_allocation_error
def build_filter_bank(
    num_frequency_bins: int,
    num_mel_filters: int,
    min_freq: float,
    max_freq: float,
    sample_rate: int,
    scale: Union[str, MelScale] = MelScale.HTK,
    norm: bool = False,
    triangularize_in_mel_space: bool = False
) -> np.ndarray:
    """
    Build a triangular mel filter bank.

    Parameters
    ----------
    num_frequency_bins : int
        Number of FFT bins, usually n_fft // 2 + 1
    num_mel_filters : int
        Number of mel bands
    min_freq, max_freq : float
        Frequency range covered by the filters, in Hz
    sample_rate : int
        Sampling rate; bins are spread over [0, sample_rate / 2]
    scale : str or MelScale
        'htk', 'kaldi' or 'slaney'
    norm : bool
        Slaney-style area normalization (applied only when scale is slaney)
    triangularize_in_mel_space : bool
        Draw triangles on the mel axis (bin grid converted to mel) instead of
        on the Hz axis (boundary points converted back to Hz)

    Returns
    -------
    np.ndarray
        Weights, shape (num_frequency_bins, num_mel_filters), row-major
    """
    scale = MelScale.parse(scale)
    num_frequency_bins = as_size(num_frequency_bins, 'num_frequency_bins')
    num_mel_filters = as_size(num_mel_filters, 'num_mel_filters')

    if num_mel_filters < 1:
        raise InvalidArgumentError(f"num_mel_filters must be >= 1, got {num_mel_filters}")
    if num_frequency_bins < 1:
        raise InvalidArgumentError(f"num_frequency_bins must be >= 1, got {num_frequency_bins}")
    if min_freq < 0:
        raise InvalidArgumentError(f"min_freq must be non-negative, got {min_freq}")
    if max_freq <= min_freq:
        raise InvalidArgumentError(f"max_freq ({max_freq}) must be greater than min_freq ({min_freq})")
    if sample_rate <= 0:
        raise InvalidArgumentError(f"sample_rate must be positive, got {sample_rate}")

    # num_mel_filters + 2 points on the mel axis bound num_mel_filters triangles
    filter_freqs = linspace(
        hz_to_mel(min_freq, scale), hz_to_mel(max_freq, scale), num_mel_filters + 2
    )
    fft_freqs = linspace(0, sample_rate / 2, num_frequency_bins)

    if triangularize_in_mel_space:
        fft_freqs = hz_to_mel(fft_freqs, scale)
    else:
        filter_freqs = mel_to_hz(filter_freqs, scale)

    mel_filters = create_triangular_filter_bank(fft_freqs, filter_freqs)

    if norm and scale is MelScale.SLANEY:
        # Slaney-style: each filter has approximately constant area
        enorm = 2.0 / (filter_freqs[2:num_mel_filters + 2] - filter_freqs[:num_mel_filters])
        mel_filters *= enorm[np.newaxis, :]

    logger.debug(
        "build_filter_bank: bins=%d filters=%d range=[%s, %s] sr=%s scale=%s norm=%s mel_space=%s",
        num_frequency_bins, num_mel_filters, min_freq, max_freq, sample_rate,
        scale.value, norm, triangularize_in_mel_space,
    )
    return np.ascontiguousarray(mel_filters)
