"""
16-bit PCM WAV container encoding and decoding.

The encoder writes the canonical 44-byte RIFF/WAVE header followed by
interleaved little-endian int16 samples. Negative samples are scaled by
32768 and non-negative samples by 32767, so both -1.0 and 1.0 map to the
int16 extremes.
"""

import io
import struct
from typing import Union

import numpy as np
import soundfile as sf
import structlog

from voice_changer.buffer import EncodedAudio, SampleBuffer, WAV_MEDIA_TYPE
from voice_changer.errors import DecodingError, EncodingError, InvalidInputError

logger = structlog.get_logger()

HEADER_SIZE = 44
BITS_PER_SAMPLE = 16
BYTES_PER_SAMPLE = BITS_PER_SAMPLE // 8
PCM_FORMAT = 1

# RIFF id, riff size, WAVE, fmt id, fmt size, format, channels, rate,
# byte rate, block align, bits per sample, data id, data size
_HEADER_STRUCT = struct.Struct("<4sI4s4sIHHIIHH4sI")


def build_header(channels: int, sample_rate: int, frames: int) -> bytes:
    """Build the 44-byte RIFF/WAVE header for 16-bit PCM."""
    data_bytes = frames * channels * BYTES_PER_SAMPLE
    return _HEADER_STRUCT.pack(
        b"RIFF",
        36 + data_bytes,
        b"WAVE",
        b"fmt ",
        16,
        PCM_FORMAT,
        channels,
        sample_rate,
        sample_rate * channels * BYTES_PER_SAMPLE,
        channels * BYTES_PER_SAMPLE,
        BITS_PER_SAMPLE,
        b"data",
        data_bytes,
    )


def quantize_samples(samples: np.ndarray) -> np.ndarray:
    """
    Convert float samples to int16.

    Samples are clamped to [-1, 1], then negative values are scaled by
    32768 and non-negative values by 32767 before rounding.
    """
    clipped = np.clip(np.nan_to_num(samples, nan=0.0), -1.0, 1.0)
    scaled = np.where(clipped < 0, clipped * 32768.0, clipped * 32767.0)
    return np.clip(np.round(scaled), -32768, 32767).astype("<i2")


def encode_to_container(buffer: SampleBuffer) -> EncodedAudio:
    """
    Serialize a sample buffer to a 16-bit PCM WAV byte stream.

    Args:
        buffer: Audio to encode

    Returns:
        EncodedAudio holding the complete WAV file

    Raises:
        EncodingError: If the buffer has no channels or its format does
            not fit the WAV header fields
    """
    if buffer.channel_count == 0:
        raise EncodingError("Cannot encode a buffer with zero channels")

    try:
        header = build_header(buffer.channel_count, buffer.sample_rate, buffer.frame_count)
    except struct.error as e:
        raise EncodingError(f"Buffer format does not fit a WAV header: {e}") from e

    # Frame-major interleave: every channel of frame 0, then frame 1, ...
    pcm = quantize_samples(buffer.samples)
    payload = np.ascontiguousarray(pcm.T).tobytes()

    return EncodedAudio(header + payload, WAV_MEDIA_TYPE)


def decode_container(data: Union[bytes, EncodedAudio]) -> SampleBuffer:
    """
    Decode an audio byte stream into a sample buffer.

    Any format libsndfile understands is accepted (WAV, FLAC, OGG, ...).

    Args:
        data: Encoded bytes, or an EncodedAudio

    Returns:
        SampleBuffer with float64 samples

    Raises:
        DecodingError: If the bytes cannot be decoded
        InvalidInputError: If the stream contains no frames
    """
    if isinstance(data, EncodedAudio):
        data = data.data

    try:
        audio, sample_rate = sf.read(io.BytesIO(data), dtype="float64", always_2d=True)
    except RuntimeError as e:
        logger.error("Failed to decode audio", size=len(data), error=str(e))
        raise DecodingError(f"Could not decode audio: {e}") from e

    if audio.shape[0] == 0:
        raise InvalidInputError("Decoded audio contains no frames")

    # soundfile returns (frames, channels)
    return SampleBuffer(audio.T, sample_rate)
