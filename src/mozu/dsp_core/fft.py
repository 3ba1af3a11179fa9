"""
FFT Implementation (Cooley-Tukey) with Numba JIT kernels

The generic transform recurses over even/odd halves. Leaves are handled by
JIT-compiled kernels:
1. Power-of-2 lengths: iterative radix-2 DIT butterflies with in-place
   bit-reversal permutation (same operations as the recursion, no call overhead)
2. Odd lengths: direct O(N^2) DFT

The real-input transform packs N real samples into an N/2-point complex
sequence, transforms that, and untangles the even/odd spectra, so only the
non-negative frequency half is ever computed.
"""

import logging
import math

import numpy as np
from numba import jit

from ..errors import InvalidArgumentError, raises_allocation_error

logger = logging.getLogger(__name__)


@jit(nopython=True, cache=True)
def _bit_reverse(x: int, n_bits: int) -> int:
    """Reverse the bits of x with n_bits."""
    result = 0
    for _ in range(n_bits):
        result = (result << 1) | (x & 1)
        x >>= 1
    return result


@jit(nopython=True, cache=True)
def _fft_radix2_iter(x: np.ndarray) -> np.ndarray:
    """
    Iterative Cooley-Tukey radix-2 DIT FFT (Numba JIT).

    The twiddle W = exp(-2πi·k/size) is evaluated directly for every k
    rather than accumulated, so the result matches the recursive butterfly.
    """
    N = len(x)
    n_bits = int(math.log2(N))

    # Bit-reversal permutation
    X = np.empty(N, dtype=np.complex128)
    for i in range(N):
        X[_bit_reverse(i, n_bits)] = x[i]

    # Stages: size 2, 4, 8, ..., N
    stage_size = 2
    while stage_size <= N:
        half_size = stage_size // 2

        twiddle = np.empty(half_size, dtype=np.complex128)
        for j in range(half_size):
            theta = 2 * np.pi * j / stage_size
            twiddle[j] = complex(np.cos(theta), -np.sin(theta))

        for k in range(0, N, stage_size):
            for j in range(half_size):
                even_idx = k + j
                odd_idx = k + j + half_size

                even = X[even_idx]
                odd = X[odd_idx] * twiddle[j]

                X[even_idx] = even + odd
                X[odd_idx] = even - odd

        stage_size *= 2

    return X


@jit(nopython=True, cache=True)
def _dft_naive_jit(x: np.ndarray) -> np.ndarray:
    """Direct DFT, X[k] = Σ x[n]·exp(-2πi·k·n/N) (JIT compiled)."""
    N = len(x)
    X = np.empty(N, dtype=np.complex128)

    for k in range(N):
        s = 0j
        for n in range(N):
            theta = 2 * np.pi * k / N * n
            s += x[n] * complex(np.cos(theta), -np.sin(theta))
        X[k] = s

    return X


def _fft_core(x: np.ndarray) -> np.ndarray:
    """Recursive Cooley-Tukey over a contiguous complex128 array."""
    N = len(x)

    if N == 1:
        return x.copy()
    if N & (N - 1) == 0:
        return _fft_radix2_iter(x)
    if N % 2 == 1:
        return _dft_naive_jit(x)

    even = _fft_core(np.ascontiguousarray(x[0::2]))
    odd = _fft_core(np.ascontiguousarray(x[1::2]))

    theta = 2 * np.pi * np.arange(N // 2) / N
    t = (np.cos(theta) - 1j * np.sin(theta)) * odd
    return np.concatenate((even + t, even - t))


def _as_complex_signal(x) -> np.ndarray:
    x = np.asarray(x)
    if x.ndim != 1:
        raise InvalidArgumentError(f"Input must be 1D, got shape {x.shape}")
    if len(x) == 0:
        raise InvalidArgumentError("Cannot transform an empty sequence")
    return np.ascontiguousarray(x, dtype=np.complex128)


@raises_allocation_error
def fft(x: np.ndarray) -> np.ndarray:
    """
    Compute the 1-D discrete Fourier Transform using Cooley-Tukey FFT.

    Parameters
    ----------
    x : np.ndarray
        Real or complex input, 1-D, non-empty

    Returns
    -------
    np.ndarray
        Full complex128 spectrum of length N

    Examples
    --------
    >>> x = np.array([1.0, 2.0, 1.0, -1.0, 1.5, 1.0, 0.5, -0.5])
    >>> X = fft(x)
    >>> # Should match numpy.fft.fft(x)
    """
    x = _as_complex_signal(x)
    return _fft_core(x)


@raises_allocation_error
def dft(x: np.ndarray) -> np.ndarray:
    """Direct O(N^2) DFT of a real or complex 1-D sequence."""
    x = _as_complex_signal(x)
    return _dft_naive_jit(x)


def _rfft_half(x: np.ndarray) -> np.ndarray:
    """One-sided spectrum (N//2 + 1 bins) of a real float64 array."""
    N = len(x)

    if N % 2 == 1:
        return _fft_core(x.astype(np.complex128))[:N // 2 + 1]

    # Pack even/odd samples as real/imag parts of an N/2-point sequence
    M = N // 2
    z = np.empty(M, dtype=np.complex128)
    z.real = x[0::2]
    z.imag = x[1::2]
    Z = _fft_core(z)

    k = np.arange(M + 1)
    Zk = Z[k % M]
    Zc = np.conj(Z[(M - k) % M])
    even = 0.5 * (Zk + Zc)
    odd = -0.5j * (Zk - Zc)

    theta = 2 * np.pi * k / N
    return even + (np.cos(theta) - 1j * np.sin(theta)) * odd


@raises_allocation_error
def rfft(x: np.ndarray, oneside: bool = True) -> np.ndarray:
    """
    Compute the 1-D FFT for real input.

    Parameters
    ----------
    x : np.ndarray
        Real input, 1-D, non-empty
    oneside : bool
        If True, return only the non-negative frequency terms (N//2 + 1 bins).
        If False, rebuild the full N-bin spectrum by conjugate symmetry,
        X[k] = conj(X[N - k]).

    Returns
    -------
    np.ndarray
        complex128 spectrum
    """
    x = np.asarray(x)
    if np.iscomplexobj(x):
        raise InvalidArgumentError(f"rfft requires real input, got dtype {x.dtype}")
    if x.ndim != 1:
        raise InvalidArgumentError(f"Input must be 1D, got shape {x.shape}")
    if len(x) == 0:
        raise InvalidArgumentError("Cannot transform an empty sequence")
    x = np.ascontiguousarray(x, dtype=np.float64)

    half = _rfft_half(x)
    if oneside:
        return half

    N = len(x)
    n_bins = N // 2 + 1
    full = np.empty(N, dtype=np.complex128)
    full[:n_bins] = half
    full[n_bins:] = np.conj(half[N - n_bins:0:-1])
    return full


@raises_allocation_error
def rfft_frames(frames: np.ndarray) -> np.ndarray:
    """
    Real FFT of every row of a frame matrix.

    Parameters
    ----------
    frames : np.ndarray
        Windowed frames, shape (n_frames, n_fft)

    Returns
    -------
    np.ndarray
        One-sided spectra, shape (n_frames, n_fft // 2 + 1)
    """
    frames = np.asarray(frames, dtype=np.float64)
    if frames.ndim != 2:
        raise InvalidArgumentError(f"frames must be 2D, got shape {frames.shape}")

    n_frames, n_fft = frames.shape
    if n_fft == 0:
        raise InvalidArgumentError("Cannot transform zero-length frames")

    result = np.empty((n_frames, n_fft // 2 + 1), dtype=np.complex128)
    for i in range(n_frames):
        result[i] = _rfft_half(np.ascontiguousarray(frames[i]))

    logger.debug("rfft_frames: %d frames x %d samples", n_frames, n_fft)
    return result


@raises_allocation_error
def power(spectrum: np.ndarray, mode: str = 'norm') -> np.ndarray:
    """
    Reduce complex bins to real values.

    mode='abs'  -> |z|
    mode='norm' -> |z|^2 = re^2 + im^2
    """
    if mode not in ('abs', 'norm'):
        raise InvalidArgumentError(f"Unknown power mode: {mode!r} (expected 'abs' or 'norm')")

    spectrum = np.asarray(spectrum)
    if mode == 'abs':
        return np.abs(spectrum)
    return spectrum.real ** 2 + spectrum.imag ** 2
