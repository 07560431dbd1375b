"""
Voice effects module.

Contains:
- Preset table (robot, deep, chipmunk, female, male, echo)
- Nearest-neighbor pitch resampling
- Single-tap echo
- The processor combining them
"""

from .presets import EffectPreset, EFFECT_PRESETS, get_preset, list_presets
from .pitch import resample_nearest, OUTPUT_GAIN
from .delay import apply_echo_tap, echo_delay_samples, ECHO_DELAY_MS
from .processor import apply_effect, apply_named_effect, output_frame_count

__all__ = [
    # Presets
    "EffectPreset",
    "EFFECT_PRESETS",
    "get_preset",
    "list_presets",
    # Pitch
    "resample_nearest",
    "OUTPUT_GAIN",
    # Delay
    "apply_echo_tap",
    "echo_delay_samples",
    "ECHO_DELAY_MS",
    # Processor
    "apply_effect",
    "apply_named_effect",
    "output_frame_count",
]
