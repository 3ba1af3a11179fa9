"""
mozu - waveform to frequency-domain features for neural-network front ends.
"""

from .errors import MozuError, InvalidArgumentError, AllocationError
from .config import FrontendConfig, load_config, save_config

__version__ = '1.0.0'

__all__ = [
    'MozuError',
    'InvalidArgumentError',
    'AllocationError',
    'FrontendConfig',
    'load_config',
    'save_config',
]
