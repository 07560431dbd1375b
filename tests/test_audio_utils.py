"""
Tests for audio file utilities - loading, saving, resampling.
"""

import numpy as np
import pytest

from voice_changer.buffer import SampleBuffer
from voice_changer.errors import DecodingError
from voice_changer.utils.audio import load_audio, readable_audio, resample_buffer, save_audio


@pytest.fixture
def stereo_buffer():
    """Half a second of stereo tones at 8 kHz."""
    t = np.arange(4000) / 8000
    left = 0.4 * np.sin(2 * np.pi * 300 * t)
    right = 0.4 * np.sin(2 * np.pi * 500 * t)
    return SampleBuffer(np.vstack([left, right]), 8000)


class TestSaveLoad:
    """Test writing and reading WAV files on disk."""

    def test_save_then_load(self, tmp_path, stereo_buffer):
        """A saved buffer loads back with the same shape and rate."""
        path = str(tmp_path / "clip.wav")
        assert save_audio(stereo_buffer, path) == path

        loaded = load_audio(path)

        assert loaded.channel_count == 2
        assert loaded.frame_count == 4000
        assert loaded.sample_rate == 8000
        np.testing.assert_allclose(loaded.samples, stereo_buffer.samples, atol=1 / 32768 + 1e-12)

    def test_load_with_target_rate(self, tmp_path, stereo_buffer):
        """target_sr resamples the loaded clip."""
        path = str(tmp_path / "clip.wav")
        save_audio(stereo_buffer, path)

        loaded = load_audio(path, target_sr=16000)

        assert loaded.sample_rate == 16000
        assert loaded.channel_count == 2
        assert abs(loaded.frame_count - 8000) <= 1

    def test_load_garbage_fails(self, tmp_path):
        """Files libsndfile cannot parse raise DecodingError."""
        path = tmp_path / "broken.wav"
        path.write_bytes(b"RIFF....garbage")

        with pytest.raises(DecodingError):
            load_audio(str(path))


class TestResample:
    """Test sample rate conversion."""

    def test_same_rate_is_identity(self, stereo_buffer):
        """Resampling to the current rate returns the buffer itself."""
        assert resample_buffer(stereo_buffer, 8000) is stereo_buffer

    def test_downsample(self, stereo_buffer):
        """Halving the rate roughly halves the frame count."""
        result = resample_buffer(stereo_buffer, 4000)

        assert result.sample_rate == 4000
        assert abs(result.frame_count - 2000) <= 1


class TestReadableAudio:
    """Test container conversion fallbacks."""

    def test_wav_passes_through(self, tmp_path):
        """Formats libsndfile reads are yielded unchanged."""
        path = str(tmp_path / "clip.wav")

        with readable_audio(path) as readable_path:
            assert readable_path == path

    def test_missing_ffmpeg_falls_back(self, tmp_path):
        """Without ffmpeg the original path is yielded and nothing is written."""
        path = tmp_path / "clip.webm"
        path.write_bytes(b"\x1a\x45\xdf\xa3")

        with readable_audio(str(path), ffmpeg_binary="ffmpeg-that-does-not-exist") as readable_path:
            assert readable_path == str(path)

        assert sorted(p.name for p in tmp_path.iterdir()) == ["clip.webm"]

    def test_sibling_wav_is_ignored(self, tmp_path, stereo_buffer):
        """A WAV that happens to share the input's stem is never substituted."""
        save_audio(stereo_buffer, str(tmp_path / "clip.wav"))
        path = tmp_path / "clip.webm"
        path.write_bytes(b"\x1a\x45\xdf\xa3")

        with readable_audio(str(path), ffmpeg_binary="ffmpeg-that-does-not-exist") as readable_path:
            assert readable_path == str(path)

    def test_load_non_wav_does_not_use_sibling(self, tmp_path, stereo_buffer):
        """Loading an undecodable container fails even next to a valid WAV."""
        save_audio(stereo_buffer, str(tmp_path / "clip.wav"))
        path = tmp_path / "clip.webm"
        path.write_bytes(b"not a real webm stream")

        with pytest.raises(DecodingError):
            load_audio(str(path))

        assert sorted(p.name for p in tmp_path.iterdir()) == ["clip.wav", "clip.webm"]
