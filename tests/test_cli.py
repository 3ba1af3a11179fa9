import numpy as np

from mozu.cli import main
from mozu.config import FrontendConfig, save_config


class TestCli:

    def test_writes_mel_npy(self, sine_wav, tmp_path):
        path, _, _ = sine_wav
        out = tmp_path / 'out' / 'mel.npy'

        assert main([str(path), '--output', str(out)]) == 0
        mel = np.load(out)
        # 8000 samples, hop 160, center padding
        assert mel.shape == (80, 51)
        assert mel.dtype == np.float32

    def test_overrides_and_config(self, sine_wav, tmp_path):
        path, _, _ = sine_wav
        cfg = tmp_path / 'frontend.yaml'
        save_config(FrontendConfig(n_fft=512, mel_scale='slaney', norm=True), cfg)
        out = tmp_path / 'mel.npy'

        code = main([str(path), '--config', str(cfg), '--n-mels', '40', '--hop-length', '256',
                     '--output', str(out), '--log-file', str(tmp_path / 'logs' / 'run.log')])
        assert code == 0
        assert np.load(out).shape == (40, 1 + 8000 // 256)
        assert (tmp_path / 'logs' / 'run.log').exists()

    def test_default_output_path(self, sine_wav):
        path, _, _ = sine_wav
        assert main([str(path)]) == 0
        assert path.with_suffix('.mel.npy').exists()

    def test_missing_input(self, tmp_path):
        assert main([str(tmp_path / 'nope.wav')]) == 1

    def test_invalid_argument_exit_code(self, sine_wav, tmp_path):
        path, _, _ = sine_wav
        assert main([str(path), '--n-mels', '0', '--output', str(tmp_path / 'x.npy')]) == 2

    def test_unreadable_wav_exit_code(self, tmp_path):
        bad = tmp_path / 'bad.wav'
        bad.write_bytes(b'not a wav file at all')
        assert main([str(bad), '--output', str(tmp_path / 'x.npy')]) == 2
        assert not (tmp_path / 'x.npy').exists()

    def test_malformed_config_exit_code(self, sine_wav, tmp_path):
        path, _, _ = sine_wav
        cfg = tmp_path / 'broken.yaml'
        cfg.write_text('frontend: [n_mels: 40\n')
        assert main([str(path), '--config', str(cfg), '--output', str(tmp_path / 'x.npy')]) == 2
