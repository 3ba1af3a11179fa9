import sys
from pathlib import Path

import numpy as np
import pytest

# Allow running the suite from a source checkout without installing
SRC_DIR = Path(__file__).resolve().parent.parent / 'src'
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


@pytest.fixture(autouse=True)
def _seed():
    np.random.seed(0)


@pytest.fixture
def sine_wav(tmp_path):
    """Two-channel 440/880 Hz WAV file, 0.5 s at 16 kHz."""
    from mozu.audio_io import save_wav

    sr = 16000
    t = np.arange(sr // 2) / sr
    left = 0.5 * np.sin(2 * np.pi * 440.0 * t)
    right = 0.25 * np.sin(2 * np.pi * 880.0 * t)
    interleaved = np.stack([left, right], axis=1).reshape(-1)

    path = tmp_path / 'sine.wav'
    save_wav(path, interleaved, channels=2, sample_rate=sr)
    return path, interleaved, sr
