"""
Sample buffer and encoded audio containers
"""

import numbers
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from voice_changer.errors import InvalidInputError

WAV_MEDIA_TYPE = "audio/wav"


@dataclass(frozen=True)
class SampleBuffer:
    """
    Decoded audio held as a (channels, frames) float array.

    The array is copied on construction and marked read-only, so effects
    always produce a new buffer instead of touching their input.
    """
    samples: np.ndarray
    sample_rate: int

    def __post_init__(self):
        try:
            samples = np.array(self.samples, dtype=np.float64, order="C")
        except ValueError as e:
            raise InvalidInputError("All channels must have the same frame count") from e

        if samples.ndim == 1 and samples.size == 0:
            samples = samples.reshape(0, 0)
        if samples.ndim != 2:
            raise InvalidInputError(
                f"Samples must be shaped (channels, frames), got {samples.shape}"
            )

        sample_rate = self.sample_rate
        if isinstance(sample_rate, float) and sample_rate.is_integer():
            sample_rate = int(sample_rate)
        if isinstance(sample_rate, bool) or not isinstance(sample_rate, numbers.Integral):
            raise InvalidInputError(f"Sample rate must be a whole number of Hz, got {self.sample_rate!r}")
        sample_rate = int(sample_rate)
        if sample_rate <= 0:
            raise InvalidInputError(f"Sample rate must be positive, got {self.sample_rate}")

        samples.setflags(write=False)
        object.__setattr__(self, "samples", samples)
        object.__setattr__(self, "sample_rate", sample_rate)

    @classmethod
    def from_channels(cls, channels: Sequence[Sequence[float]], sample_rate: int) -> "SampleBuffer":
        """Build a buffer from one sample sequence per channel."""
        lengths = {len(channel) for channel in channels}
        if len(lengths) > 1:
            raise InvalidInputError(
                f"All channels must have the same frame count, got {sorted(lengths)}"
            )
        return cls(np.array([list(channel) for channel in channels], dtype=np.float64), sample_rate)

    @classmethod
    def from_mono(cls, samples: Sequence[float], sample_rate: int) -> "SampleBuffer":
        return cls(np.asarray(samples, dtype=np.float64).reshape(1, -1), sample_rate)

    @property
    def channel_count(self) -> int:
        return self.samples.shape[0]

    @property
    def frame_count(self) -> int:
        return self.samples.shape[1]

    @property
    def duration(self) -> float:
        """Duration in seconds."""
        return self.frame_count / self.sample_rate

    def channel(self, index: int) -> np.ndarray:
        return self.samples[index]


@dataclass(frozen=True)
class EncodedAudio:
    """Self-describing encoded audio bytes, ready for playback or download."""
    data: bytes
    media_type: str = WAV_MEDIA_TYPE

    @property
    def size(self) -> int:
        return len(self.data)
