"""
Tests for WAV container encoding and decoding.
"""

import io
import struct

import numpy as np
import pytest
import soundfile as sf

from voice_changer.buffer import EncodedAudio, SampleBuffer
from voice_changer.errors import DecodingError, EncodingError
from voice_changer.wav import (
    HEADER_SIZE,
    decode_container,
    encode_to_container,
    quantize_samples,
)


def pcm_payload(encoded: EncodedAudio) -> list:
    """int16 samples from the data chunk."""
    return np.frombuffer(encoded.data[HEADER_SIZE:], dtype="<i2").tolist()


class TestHeader:
    """Test the 44-byte RIFF/WAVE header."""

    def test_header_fields(self):
        """Header fields should match the 16-bit PCM layout."""
        buffer = SampleBuffer(np.zeros((2, 10)), 44100)
        encoded = encode_to_container(buffer)

        fields = struct.unpack("<4sI4s4sIHHIIHH4sI", encoded.data[:HEADER_SIZE])
        data_bytes = 10 * 2 * 2

        assert fields == (
            b"RIFF", 36 + data_bytes, b"WAVE",
            b"fmt ", 16, 1, 2, 44100, 44100 * 2 * 2, 4, 16,
            b"data", data_bytes,
        )
        assert len(encoded.data) == HEADER_SIZE + data_bytes

    def test_media_type(self):
        """Encoded audio should be labelled audio/wav."""
        encoded = encode_to_container(SampleBuffer.from_mono([0.0], 8000))

        assert encoded.media_type == "audio/wav"
        assert encoded.size == HEADER_SIZE + 2

    def test_zero_frames_header_only(self):
        """A buffer with channels but no frames encodes to just the header."""
        encoded = encode_to_container(SampleBuffer(np.zeros((1, 0)), 8000))

        assert len(encoded.data) == HEADER_SIZE
        assert struct.unpack("<I", encoded.data[40:44])[0] == 0

    def test_zero_channels_fails(self):
        """Encoding a buffer with no channels should raise EncodingError."""
        with pytest.raises(EncodingError):
            encode_to_container(SampleBuffer(np.zeros((0, 0)), 8000))


class TestQuantization:
    """Test float to int16 conversion."""

    def test_scenario_values(self):
        """[0.8, -0.8, 0.4] should encode to [26214, -26214, 13107]."""
        encoded = encode_to_container(SampleBuffer.from_mono([0.8, -0.8, 0.4], 8000))

        assert pcm_payload(encoded) == [26214, -26214, 13107]

    def test_asymmetric_full_scale(self):
        """1.0 maps to 32767 and -1.0 maps to -32768."""
        assert quantize_samples(np.array([1.0, -1.0, 0.0])).tolist() == [32767, -32768, 0]

    def test_out_of_range_clamped(self):
        """Samples beyond full scale are clamped before conversion."""
        assert quantize_samples(np.array([1.5, -2.0])).tolist() == [32767, -32768]

    def test_frame_major_interleave(self):
        """Stereo samples are written L0, R0, L1, R1."""
        buffer = SampleBuffer.from_channels([[1.0, 0.25], [-1.0, -0.25]], 8000)
        encoded = encode_to_container(buffer)

        assert pcm_payload(encoded) == [32767, -32768, 8192, -8192]


class TestRoundTrip:
    """Test decoding our output with a standard PCM decoder."""

    @pytest.fixture
    def stereo_buffer(self):
        rng = np.random.default_rng(3)
        return SampleBuffer(rng.uniform(-0.5, 0.5, size=(2, 512)), 22050)

    def test_soundfile_round_trip(self, stereo_buffer):
        """soundfile should read back samples within one quantization step."""
        encoded = encode_to_container(stereo_buffer)

        audio, sr = sf.read(io.BytesIO(encoded.data), dtype="float64", always_2d=True)

        assert sr == 22050
        assert audio.shape == (512, 2)
        np.testing.assert_allclose(audio.T, stereo_buffer.samples, atol=1 / 32768 + 1e-12)

    def test_decode_container_round_trip(self, stereo_buffer):
        """decode_container should restore channel count, rate and samples."""
        decoded = decode_container(encode_to_container(stereo_buffer))

        assert decoded.channel_count == 2
        assert decoded.sample_rate == 22050
        assert decoded.frame_count == 512
        np.testing.assert_allclose(decoded.samples, stereo_buffer.samples, atol=1 / 32768 + 1e-12)

    def test_full_scale_round_trip(self):
        """Across the full range the error stays within 1.5 quantization steps."""
        samples = np.linspace(-1.0, 1.0, 4001).reshape(1, -1)
        decoded = decode_container(encode_to_container(SampleBuffer(samples, 8000)))

        np.testing.assert_allclose(decoded.samples, samples, atol=1.5 / 32768 + 1e-12)

    def test_decode_garbage_fails(self):
        """Non-audio bytes should raise DecodingError."""
        with pytest.raises(DecodingError):
            decode_container(b"this is not a wav file at all")
