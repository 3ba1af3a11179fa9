"""
DSP Core Module - Hand-written framing, FFT and mel filter-bank implementations

This module provides from-scratch implementations of the transform chain that
turns a raw waveform into mel-scale features for a neural-network front end,
designed to match the precision of numpy, scipy and librosa.

Modules:
    - padding: zero / edge / reflect boundary padding
    - window: Hann and Hamming analysis windows
    - framing: overlapping frame segmentation
    - fft: Fast Fourier Transform (Cooley-Tukey) and real-input variant
    - mel: Hz <-> mel conversion (HTK, Kaldi, Slaney) and linspace
    - filter_bank: triangular mel filter banks
    - melspec: frame -> FFT -> filter bank pipeline
"""

from .padding import pad, PadMode
from .window import hanning, hamming, get_window
from .framing import frame, num_frames
from .fft import fft, dft, rfft, rfft_frames, power
from .mel import hz_to_mel, mel_to_hz, linspace, MelScale
from .filter_bank import build_filter_bank, create_triangular_filter_bank
from .melspec import spectrogram, melspectrogram, power_to_db, amplitude_to_db

__all__ = [
    # Padding / framing
    'pad',
    'PadMode',
    'frame',
    'num_frames',
    # Windows
    'hanning',
    'hamming',
    'get_window',
    # FFT functions
    'fft',
    'dft',
    'rfft',
    'rfft_frames',
    'power',
    # Mel functions
    'hz_to_mel',
    'mel_to_hz',
    'linspace',
    'MelScale',
    'build_filter_bank',
    'create_triangular_filter_bank',
    # Pipeline
    'spectrogram',
    'melspectrogram',
    'power_to_db',
    'amplitude_to_db',
]
