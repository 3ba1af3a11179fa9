"""
Front-end configuration.

A FrontendConfig holds every parameter of the waveform -> mel spectrogram
pipeline. It can be built in code or loaded from a YAML file, either as a
top-level mapping or under a ``frontend:`` key:

    frontend:
      sample_rate: 16000
      n_fft: 400
      hop_length: 160
      n_mels: 80
      mel_scale: htk
"""

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .errors import InvalidArgumentError

WINDOWS = ('hann', 'hanning', 'hamming')
MEL_SCALES = ('htk', 'kaldi', 'slaney')
POWER_MODES = ('abs', 'norm')


@dataclass
class FrontendConfig:
    sample_rate: int = 16000
    n_fft: int = 400
    hop_length: int = 160
    window: str = 'hann'
    center: bool = True
    n_mels: int = 80
    fmin: float = 0.0
    fmax: Optional[float] = None
    mel_scale: str = 'htk'
    norm: bool = False
    triangularize_in_mel_space: bool = False
    power: str = 'norm'
    log: bool = True
    amin: float = 1e-10
    top_db: Optional[float] = 80.0

    @property
    def n_freqs(self) -> int:
        """Number of one-sided FFT bins."""
        return self.n_fft // 2 + 1

    @property
    def max_freq(self) -> float:
        """Upper filter-bank edge, defaulting to Nyquist."""
        return float(self.fmax) if self.fmax is not None else self.sample_rate / 2.0

    def validate(self) -> 'FrontendConfig':
        """Check ranges and names; returns self so calls can be chained."""
        for name in ('sample_rate', 'n_fft', 'hop_length', 'n_mels'):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise InvalidArgumentError(f"{name} must be a positive integer, got {value!r}")

        if self.window not in WINDOWS:
            raise InvalidArgumentError(f"Unknown window: {self.window!r} (expected one of {WINDOWS})")
        if self.mel_scale not in MEL_SCALES:
            raise InvalidArgumentError(
                f"Unknown mel_scale: {self.mel_scale!r} (expected one of {MEL_SCALES})"
            )
        if self.power not in POWER_MODES:
            raise InvalidArgumentError(f"Unknown power: {self.power!r} (expected one of {POWER_MODES})")

        if self.fmin < 0:
            raise InvalidArgumentError(f"fmin must be non-negative, got {self.fmin}")
        if self.max_freq <= self.fmin:
            raise InvalidArgumentError(f"fmax ({self.max_freq}) must be greater than fmin ({self.fmin})")
        if self.max_freq > self.sample_rate / 2.0:
            raise InvalidArgumentError(
                f"fmax ({self.max_freq}) exceeds Nyquist ({self.sample_rate / 2.0})"
            )
        if self.amin <= 0:
            raise InvalidArgumentError(f"amin must be positive, got {self.amin}")
        if self.top_db is not None and self.top_db < 0:
            raise InvalidArgumentError(f"top_db must be non-negative, got {self.top_db}")
        return self

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'FrontendConfig':
        if not isinstance(config, dict):
            raise InvalidArgumentError(f"Config must be a mapping, got {type(config).__name__}")
        if 'frontend' in config:
            config = config['frontend'] or {}

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config) - known)
        if unknown:
            raise InvalidArgumentError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**config).validate()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(config_path: Union[str, Path]) -> FrontendConfig:
    """Load a FrontendConfig from a YAML file."""
    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)
    return FrontendConfig.from_dict(config or {})


def save_config(config: FrontendConfig, config_path: Union[str, Path]) -> None:
    """Write a FrontendConfig as YAML under a ``frontend:`` key."""
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, 'w') as f:
        yaml.dump({'frontend': config.to_dict()}, f, default_flow_style=False)
