"""Voice effect processing and 16-bit PCM WAV encoding"""

from voice_changer.buffer import SampleBuffer, EncodedAudio
from voice_changer.effects import EffectPreset, get_preset, list_presets, apply_effect, apply_named_effect
from voice_changer.errors import (
    VoiceChangerError,
    InvalidInputError,
    UnknownPresetError,
    EncodingError,
    DecodingError,
)
from voice_changer.wav import encode_to_container, decode_container

__all__ = [
    "SampleBuffer",
    "EncodedAudio",
    "EffectPreset",
    "get_preset",
    "list_presets",
    "apply_effect",
    "apply_named_effect",
    "encode_to_container",
    "decode_container",
    "VoiceChangerError",
    "InvalidInputError",
    "UnknownPresetError",
    "EncodingError",
    "DecodingError",
]
