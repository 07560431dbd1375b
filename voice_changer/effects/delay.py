"""
Echo effect for voice presets.

A single fixed-delay tap: each frame receives a scaled copy of the frame
300 ms earlier. The tap reads the dry signal, so the echo does not feed
back into itself.
"""

import numpy as np

ECHO_DELAY_MS = 300


def echo_delay_samples(sr: int, delay_ms: int = ECHO_DELAY_MS) -> int:
    """Delay length in frames, truncated."""
    return (delay_ms * sr) // 1000


def apply_echo_tap(
    audio: np.ndarray,
    mix: float,
    sr: int,
    delay_ms: int = ECHO_DELAY_MS
) -> np.ndarray:
    """
    Add a single delayed copy of the signal and clamp to [-1, 1].

    Args:
        audio: Input audio shaped (channels, frames)
        mix: Level of the delayed copy (0 returns an unchanged copy)
        sr: Sample rate
        delay_ms: Delay time in milliseconds

    Returns:
        New array with the echo applied
    """
    output = audio.copy()
    if mix <= 0:
        return output

    delay_samples = echo_delay_samples(sr, delay_ms)
    frames = audio.shape[1]
    if delay_samples >= frames:
        return output

    wet = output[:, delay_samples:] + audio[:, :frames - delay_samples] * mix
    output[:, delay_samples:] = np.clip(wet, -1.0, 1.0)

    return output
