"""
WAV file collaborator.

Reads and writes interleaved float samples; the DSP core itself never
touches files. Framing works on one channel, so multi-channel data has to
go through deinterleave() first.
"""

import logging
from pathlib import Path
from typing import Tuple, Union

import numpy as np
import soundfile as sf

from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)


def load_wav(path: Union[str, Path]) -> Tuple[np.ndarray, int, int]:
    """
    Load audio data from a WAV file.

    Args:
        path: Path to audio file

    Returns:
        Tuple of (interleaved float32 samples, channels, sample rate)

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Audio file not found: {path}")

    # soundfile returns [samples, channels] with always_2d
    audio, sr = sf.read(str(path), dtype='float32', always_2d=True)
    channels = audio.shape[1]
    logger.debug("load_wav: %s channels=%d sr=%d frames=%d", path, channels, sr, audio.shape[0])
    return audio.reshape(-1), channels, sr


def save_wav(
    path: Union[str, Path],
    samples: np.ndarray,
    channels: int,
    sample_rate: int
) -> None:
    """
    Save interleaved float samples as 16-bit PCM WAV.

    Args:
        path: Output file path
        samples: Interleaved samples in [-1, 1]
        channels: Number of channels
        sample_rate: Sample rate in Hz
    """
    samples = np.asarray(samples, dtype=np.float32)
    if samples.ndim != 1:
        raise InvalidArgumentError(f"samples must be 1D (interleaved), got shape {samples.shape}")
    if channels <= 0 or len(samples) % channels != 0:
        raise InvalidArgumentError(
            f"{len(samples)} samples cannot be split into {channels} channels"
        )
    if sample_rate <= 0:
        raise InvalidArgumentError(f"sample_rate must be positive, got {sample_rate}")

    sf.write(str(path), samples.reshape(-1, channels), sample_rate, subtype='PCM_16', format='WAV')


def deinterleave(samples: np.ndarray, channels: int) -> np.ndarray:
    """Split interleaved samples into shape (channels, n_frames)."""
    samples = np.asarray(samples)
    if samples.ndim != 1:
        raise InvalidArgumentError(f"samples must be 1D (interleaved), got shape {samples.shape}")
    if channels <= 0 or len(samples) % channels != 0:
        raise InvalidArgumentError(
            f"{len(samples)} samples cannot be split into {channels} channels"
        )
    return samples.reshape(-1, channels).T.copy()
