"""
Exceptions raised by the voice changer core
"""


class VoiceChangerError(Exception):
    """Base class for all voice changer failures."""


class InvalidInputError(VoiceChangerError, ValueError):
    """Empty or malformed sample buffer, or a degenerate output length."""


class UnknownPresetError(VoiceChangerError, ValueError):
    """Effect name not present in the preset table."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown effect preset: {name!r}")


class EncodingError(VoiceChangerError, ValueError):
    """Buffer cannot be serialized to a WAV container."""


class DecodingError(VoiceChangerError, ValueError):
    """Bytes could not be decoded into samples."""
