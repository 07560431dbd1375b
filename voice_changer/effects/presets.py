"""
Voice effect presets.

Each preset is a fixed parameter set:
- pitch_factor: multiplier applied to the output index to pick a source sample
- speed_factor: playback rate; output length is input length / speed_factor
- echo_mix: level of the single 300 ms echo tap (0 disables the echo)
- distortion: kept for parity with the preset table, never applied to samples
"""

import math
from dataclasses import dataclass
from typing import List

from voice_changer.errors import InvalidInputError, UnknownPresetError


@dataclass(frozen=True)
class EffectPreset:
    """Immutable voice effect parameters."""
    name: str
    pitch_factor: float
    speed_factor: float
    echo_mix: float
    distortion: float

    def __post_init__(self):
        for field_name in ("pitch_factor", "speed_factor"):
            value = getattr(self, field_name)
            if not (math.isfinite(value) and value > 0):
                raise InvalidInputError(f"{field_name} must be a positive number, got {value}")
        for field_name in ("echo_mix", "distortion"):
            value = getattr(self, field_name)
            if not 0.0 <= value <= 1.0:
                raise InvalidInputError(f"{field_name} must be within [0, 1], got {value}")


EFFECT_PRESETS = {
    "robot": EffectPreset("robot", pitch_factor=0.5, speed_factor=0.8, echo_mix=0.3, distortion=0.7),
    "deep": EffectPreset("deep", pitch_factor=0.3, speed_factor=0.9, echo_mix=0.1, distortion=0.2),
    "chipmunk": EffectPreset("chipmunk", pitch_factor=2.0, speed_factor=1.2, echo_mix=0.0, distortion=0.1),
    "female": EffectPreset("female", pitch_factor=1.3, speed_factor=1.0, echo_mix=0.1, distortion=0.0),
    "male": EffectPreset("male", pitch_factor=0.7, speed_factor=0.95, echo_mix=0.1, distortion=0.1),
    "echo": EffectPreset("echo", pitch_factor=1.0, speed_factor=1.0, echo_mix=0.8, distortion=0.0),
}


def get_preset(name: str) -> EffectPreset:
    """
    Look up a preset by effect name.

    Args:
        name: Effect name (e.g., "robot", "chipmunk")

    Returns:
        The matching EffectPreset

    Raises:
        UnknownPresetError: If the name is not in the preset table
    """
    preset = EFFECT_PRESETS.get(name)
    if preset is None:
        raise UnknownPresetError(name)
    return preset


def list_presets() -> List[str]:
    """Preset names in table order."""
    return list(EFFECT_PRESETS)
