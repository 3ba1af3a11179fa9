#!/usr/bin/env python3
"""
Mel spectrogram extraction from the command line.

Usage:
    mozu-melspec input.wav --output features.npy
    mozu-melspec input.wav --config frontend.yaml --n-mels 64 -v
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import numpy as np
import soundfile as sf
import yaml
from rich import box
from rich.console import Console
from rich.table import Table

from .audio_io import deinterleave, load_wav
from .config import FrontendConfig, load_config
from .dsp_core import melspectrogram
from .errors import MozuError
from .utils.logging import setup_logging

console = Console()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compute a (log-)mel spectrogram from a WAV file")

    parser.add_argument('input', type=str, help='Input WAV file')
    parser.add_argument('--config', type=str, default=None,
                        help='YAML front-end configuration')
    parser.add_argument('--output', type=str, default=None,
                        help='Output .npy path (default: <input>.mel.npy)')
    parser.add_argument('--n-mels', type=int, default=None,
                        help='Number of mel bands (overrides config)')
    parser.add_argument('--hop-length', type=int, default=None,
                        help='Hop length in samples (overrides config)')
    parser.add_argument('--log-file', type=str, default=None,
                        help='Write detailed logs to this file')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Show debug logs on the console')

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace, sample_rate: int) -> FrontendConfig:
    """Merge the YAML config, command-line overrides and the file's sample rate."""
    config = load_config(args.config) if args.config else FrontendConfig()
    overrides = config.to_dict()
    overrides['sample_rate'] = sample_rate
    if args.n_mels is not None:
        overrides['n_mels'] = args.n_mels
    if args.hop_length is not None:
        overrides['hop_length'] = args.hop_length
    return FrontendConfig.from_dict(overrides)


def print_summary(input_path: Path, output_path: Path, config: FrontendConfig, mel: np.ndarray):
    table = Table(title="Mel Spectrogram", box=box.ROUNDED)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Input", str(input_path))
    table.add_row("Output", str(output_path))
    table.add_row("Sample rate", f"{config.sample_rate} Hz")
    table.add_row("n_fft / hop", f"{config.n_fft} / {config.hop_length}")
    table.add_row("Mel scale", config.mel_scale)
    table.add_row("Shape", f"{mel.shape[0]} mels x {mel.shape[1]} frames")
    if mel.size > 0:
        table.add_row("Range", f"[{mel.min():.2f}, {mel.max():.2f}]")

    console.print(table)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logger = setup_logging(
        log_file=args.log_file,
        level=logging.DEBUG if (args.verbose or args.log_file) else logging.INFO,
        console_level=logging.DEBUG if args.verbose else logging.WARNING,
    )

    input_path = Path(args.input)
    output_path = Path(args.output) if args.output else input_path.with_suffix('.mel.npy')

    try:
        samples, channels, sr = load_wav(input_path)
        # Mix down to mono before framing
        y = deinterleave(samples, channels).mean(axis=0)
        config = build_config(args, sr)
        mel = melspectrogram(y, config)
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1
    except (MozuError, sf.LibsndfileError, yaml.YAMLError) as e:
        logger.error("%s: %s", type(e).__name__, e)
        console.print(f"[red]Error:[/red] {e}")
        return 2

    output_path.parent.mkdir(parents=True, exist_ok=True)
    np.save(output_path, mel.astype(np.float32))
    logger.info("Saved %s %s to %s", mel.shape, mel.dtype, output_path)

    print_summary(input_path, output_path, config, mel)
    return 0


if __name__ == "__main__":
    sys.exit(main())
