"""
Tests for mel-scale conversion and filter-bank construction.

Slaney and HTK conversions and filter banks are compared against librosa.
"""

import librosa
import numpy as np
import pytest

from mozu.dsp_core import (
    MelScale,
    build_filter_bank,
    create_triangular_filter_bank,
    hz_to_mel,
    linspace,
    mel_to_hz,
)
from mozu.errors import InvalidArgumentError

FREQS = np.array([1.0, 50.0, 440.0, 999.9, 1000.0, 1000.1, 4000.0, 8000.0, 22050.0])


class TestMelConversion:
    """Test suite for Hz <-> mel conversion."""

    @pytest.mark.parametrize('scale', ['htk', 'kaldi', 'slaney'])
    def test_round_trip(self, scale):
        error = np.abs(mel_to_hz(hz_to_mel(FREQS, scale), scale) - FREQS)
        assert error.max() < 1e-8

    @pytest.mark.parametrize('scale', list(MelScale))
    def test_strictly_monotonic(self, scale):
        f = np.linspace(0, 16000, 1001)
        assert np.all(np.diff(hz_to_mel(f, scale)) > 0)
        m = hz_to_mel(f, scale)
        assert np.all(np.diff(mel_to_hz(m, scale)) > 0)

    def test_htk_matches_librosa(self):
        np.testing.assert_allclose(hz_to_mel(FREQS, 'htk'), librosa.hz_to_mel(FREQS, htk=True), rtol=1e-12)
        mels = np.linspace(0, 3000, 50)
        np.testing.assert_allclose(mel_to_hz(mels, 'htk'), librosa.mel_to_hz(mels, htk=True), rtol=1e-12)

    def test_slaney_matches_librosa(self):
        np.testing.assert_allclose(
            hz_to_mel(FREQS, 'slaney'), librosa.hz_to_mel(FREQS, htk=False), rtol=1e-12
        )
        mels = np.linspace(0, 60, 50)
        np.testing.assert_allclose(
            mel_to_hz(mels, 'slaney'), librosa.mel_to_hz(mels, htk=False), rtol=1e-12
        )

    def test_kaldi_formula(self):
        assert hz_to_mel(700.0, 'kaldi') == pytest.approx(1127.0 * np.log(2.0))
        assert mel_to_hz(1127.0, 'kaldi') == pytest.approx(700.0 * (np.e - 1.0))

    def test_slaney_break_point(self):
        assert hz_to_mel(1000.0, 'slaney') == 15.0
        assert mel_to_hz(15.0, 'slaney') == 1000.0
        assert hz_to_mel(500.0, 'slaney') == pytest.approx(7.5)

    def test_scalar_and_shape(self):
        assert isinstance(hz_to_mel(440.0, 'htk'), float)
        assert isinstance(mel_to_hz(10, MelScale.SLANEY), float)
        grid = np.random.rand(3, 4) * 8000
        assert hz_to_mel(grid, 'kaldi').shape == (3, 4)

    def test_zero_hz(self):
        for scale in MelScale:
            assert hz_to_mel(0.0, scale) == 0.0
            assert mel_to_hz(0.0, scale) == 0.0

    def test_scale_names(self):
        assert MelScale.parse('HTK') is MelScale.HTK
        with pytest.raises(InvalidArgumentError):
            hz_to_mel(100.0, 'bark')


class TestLinspace:
    """Test suite for linspace."""

    def test_worked_example(self):
        np.testing.assert_array_equal(linspace(0, 10, 5, endpoint=True), [0, 2.5, 5, 7.5, 10])

    def test_without_endpoint(self):
        np.testing.assert_array_equal(linspace(0, 10, 5, endpoint=False), [0, 2, 4, 6, 8])

    def test_matches_numpy(self):
        np.testing.assert_allclose(linspace(-3.5, 41.25, 97), np.linspace(-3.5, 41.25, 97), rtol=1e-14)

    def test_edge_counts(self):
        np.testing.assert_array_equal(linspace(2.0, 5.0, 1), [2.0])
        assert len(linspace(2.0, 5.0, 0)) == 0
        with pytest.raises(InvalidArgumentError):
            linspace(0, 1, -1)


class TestFilterBank:
    """Test suite for mel filter-bank construction."""

    def test_worked_example(self):
        fb = build_filter_bank(
            num_frequency_bins=5, num_mel_filters=3, min_freq=0, max_freq=100,
            sample_rate=200, scale=MelScale.HTK, norm=False, triangularize_in_mel_space=True
        )
        assert fb.shape == (5, 3)
        assert np.all(fb >= 0.0)
        assert np.all(fb <= 1.0)
        assert np.all(fb.sum(axis=1) <= 1.0 + 1e-12)

    @pytest.mark.parametrize('scale', ['htk', 'kaldi', 'slaney'])
    @pytest.mark.parametrize('mel_space', [True, False])
    def test_weights_in_unit_range(self, scale, mel_space):
        fb = build_filter_bank(201, 40, 20.0, 8000.0, 16000, scale, False, mel_space)
        assert fb.shape == (201, 40)
        assert fb.flags['C_CONTIGUOUS']
        assert fb.min() >= 0.0
        assert fb.max() <= 1.0
        # Every filter is wide enough to catch at least one bin
        assert np.all(fb.max(axis=0) > 0)

    def test_slaney_matches_librosa(self):
        fb = build_filter_bank(1025, 128, 0.0, 11025.0, 22050, 'slaney', norm=True)
        ref = librosa.filters.mel(
            sr=22050, n_fft=2048, n_mels=128, fmin=0.0, fmax=11025.0,
            htk=False, norm='slaney', dtype=np.float64
        )
        error = np.abs(fb.T - ref)
        assert error.max() < 1e-8

    def test_htk_matches_librosa(self):
        fb = build_filter_bank(201, 80, 0.0, 8000.0, 16000, 'htk', norm=False)
        ref = librosa.filters.mel(
            sr=16000, n_fft=400, n_mels=80, fmin=0.0, fmax=8000.0,
            htk=True, norm=None, dtype=np.float64
        )
        error = np.abs(fb.T - ref)
        assert error.max() < 1e-8

    def test_norm_only_applies_to_slaney(self):
        args = (129, 26, 0.0, 4000.0, 8000)
        np.testing.assert_array_equal(
            build_filter_bank(*args, 'htk', norm=True), build_filter_bank(*args, 'htk', norm=False)
        )
        plain = build_filter_bank(*args, 'slaney', norm=False)
        normed = build_filter_bank(*args, 'slaney', norm=True)
        assert not np.allclose(plain, normed)

    def test_triangular_peaks(self):
        # Bins placed exactly on the boundary points give unit peaks
        filter_freqs = np.array([0.0, 1.0, 2.0, 3.0])
        fb = create_triangular_filter_bank(np.array([0.0, 0.5, 1.0, 1.5, 2.0, 2.5, 3.0]), filter_freqs)
        expected = np.array([
            [0.0, 0.0],
            [0.5, 0.0],
            [1.0, 0.0],
            [0.5, 0.5],
            [0.0, 1.0],
            [0.0, 0.5],
            [0.0, 0.0],
        ])
        np.testing.assert_allclose(fb, expected)

    def test_invalid_arguments(self):
        with pytest.raises(InvalidArgumentError):
            build_filter_bank(201, 0, 0.0, 8000.0, 16000)
        with pytest.raises(InvalidArgumentError):
            build_filter_bank(0, 40, 0.0, 8000.0, 16000)
        with pytest.raises(InvalidArgumentError):
            build_filter_bank(201, 40, 8000.0, 8000.0, 16000)
        with pytest.raises(InvalidArgumentError):
            build_filter_bank(201, 40, 0.0, 8000.0, 16000, scale='mel')
        with pytest.raises(InvalidArgumentError):
            create_triangular_filter_bank(np.zeros(4), np.array([0.0, 1.0]))
