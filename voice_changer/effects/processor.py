"""
Voice effect processor.

Applies a preset to a decoded sample buffer:
1. Output length is the input length divided by the preset speed
2. Every channel is resampled nearest-neighbor by the pitch factor, at 0.8 gain
3. An optional single 300 ms echo tap is mixed in and clamped

The processor holds no state; the input buffer is never modified.
"""

import math

import structlog

from voice_changer.buffer import SampleBuffer
from voice_changer.errors import InvalidInputError
from .delay import apply_echo_tap
from .pitch import resample_nearest
from .presets import EffectPreset, get_preset

logger = structlog.get_logger()


def output_frame_count(input_frames: int, preset: EffectPreset) -> int:
    """Frames produced for an input of the given length."""
    return math.floor(input_frames / preset.speed_factor)


def apply_effect(buffer: SampleBuffer, preset: EffectPreset) -> SampleBuffer:
    """
    Apply a voice effect preset to a sample buffer.

    Args:
        buffer: Decoded input audio (at least one channel and one frame)
        preset: Effect parameters

    Returns:
        New SampleBuffer with the same channel count and sample rate

    Raises:
        InvalidInputError: If the buffer is empty, or the preset speed
            reduces the output to zero frames
    """
    if buffer.channel_count < 1 or buffer.frame_count < 1:
        raise InvalidInputError(
            f"Cannot apply effect to an empty buffer "
            f"({buffer.channel_count} channels, {buffer.frame_count} frames)"
        )

    frames = output_frame_count(buffer.frame_count, preset)
    if frames <= 0:
        raise InvalidInputError(
            f"Effect '{preset.name}' reduces {buffer.frame_count} frames to nothing"
        )

    audio = resample_nearest(buffer.samples, frames, preset.pitch_factor)

    if preset.echo_mix > 0:
        audio = apply_echo_tap(audio, preset.echo_mix, buffer.sample_rate)

    logger.debug(
        "Effect applied",
        effect=preset.name,
        channels=buffer.channel_count,
        input_frames=buffer.frame_count,
        output_frames=frames,
        sample_rate=buffer.sample_rate,
    )

    return SampleBuffer(audio, buffer.sample_rate)


def apply_named_effect(buffer: SampleBuffer, effect_name: str) -> SampleBuffer:
    """Look up a preset by name and apply it."""
    return apply_effect(buffer, get_preset(effect_name))
