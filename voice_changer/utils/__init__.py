"""Utility modules"""

from voice_changer.utils.audio import load_audio, save_audio, resample_buffer
from voice_changer.utils.logging import setup_logging

__all__ = [
    "load_audio",
    "save_audio",
    "resample_buffer",
    "setup_logging",
]
