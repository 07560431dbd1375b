"""
Voice changer session state.

Holds everything the surrounding application tracks between user actions:
the current clip, the selected effect, and the recording state. The
effect processor itself is stateless; these functions feed it the
session's clip and store the result back.

A failed operation leaves the session as it was, so the previous clip
stays available for playback and download.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

import structlog

from voice_changer.buffer import EncodedAudio
from voice_changer.config import settings
from voice_changer.effects.presets import get_preset
from voice_changer.effects.processor import apply_effect
from voice_changer.errors import InvalidInputError
from voice_changer.wav import decode_container, encode_to_container

logger = structlog.get_logger()


@dataclass
class Session:
    """Mutable per-user state, owned by the caller."""
    current_audio: Optional[EncodedAudio] = None
    current_effect: Optional[str] = None
    is_recording: bool = False
    recorded_chunks: List[bytes] = field(default_factory=list)

    @property
    def has_audio(self) -> bool:
        return self.current_audio is not None


def load_clip(session: Session, data: bytes, media_type: str) -> Session:
    """
    Make an uploaded clip the session's current audio.

    Args:
        session: Session to update
        data: Raw file bytes
        media_type: Declared media type (must be audio/*)

    Returns:
        The updated session

    Raises:
        InvalidInputError: If the media type is not audio or data is empty
    """
    if not media_type or not media_type.startswith("audio/"):
        raise InvalidInputError(f"Not an audio file: {media_type!r}")
    if not data:
        raise InvalidInputError("Uploaded clip is empty")

    session.current_audio = EncodedAudio(bytes(data), media_type)
    logger.info("Clip loaded", media_type=media_type, size=len(data))
    return session


def start_recording(session: Session) -> Session:
    """Begin collecting recorded chunks. No-op if already recording."""
    if session.is_recording:
        return session

    session.recorded_chunks = []
    session.is_recording = True
    logger.info("Recording started")
    return session


def add_recorded_chunk(session: Session, chunk: bytes) -> Session:
    """Append captured bytes; ignored when not recording."""
    if session.is_recording and chunk:
        session.recorded_chunks.append(bytes(chunk))
    return session


def stop_recording(session: Session, media_type: str) -> Session:
    """
    Finish recording and store the captured bytes as the current clip.

    No-op if not recording. A recording with no captured data leaves the
    previous clip in place.

    Args:
        session: Session to update
        media_type: Media type the recorder produced (must be audio/*)

    Raises:
        InvalidInputError: If the media type is not audio; the recording
            keeps running so the caller can retry
    """
    if not session.is_recording:
        return session
    if not media_type or not media_type.startswith("audio/"):
        raise InvalidInputError(f"Recorder produced non-audio data: {media_type!r}")

    session.is_recording = False
    chunks, session.recorded_chunks = session.recorded_chunks, []

    if not chunks:
        logger.warning("Recording stopped without captured audio")
        return session

    session.current_audio = EncodedAudio(b"".join(chunks), media_type)
    logger.info(
        "Recording completed",
        chunks=len(chunks),
        media_type=media_type,
        size=session.current_audio.size,
    )
    return session


def select_effect(session: Session, effect_name: str) -> Session:
    """
    Select an effect and, if a clip is loaded, apply it to the clip.

    The processed clip replaces the current one, so effects stack when
    applied one after another, as they do in the browser app.

    Args:
        session: Session to update
        effect_name: Preset name

    Returns:
        The updated session

    Raises:
        UnknownPresetError: If the effect name is not a preset
        DecodingError / InvalidInputError: If the current clip cannot be processed
    """
    preset = get_preset(effect_name)

    if session.current_audio is None:
        session.current_effect = effect_name
        logger.info("Effect selected", effect=effect_name)
        return session

    try:
        buffer = decode_container(session.current_audio)
        processed = encode_to_container(apply_effect(buffer, preset))
    except Exception as e:
        logger.error("Error applying effect", effect=effect_name, error=str(e))
        raise

    session.current_audio = processed
    session.current_effect = effect_name
    logger.info("Effect applied", effect=effect_name, size=processed.size)
    return session


def download_filename(
    session: Session,
    now: Optional[datetime] = None,
    prefix: Optional[str] = None
) -> str:
    """
    Build the download filename for the current clip.

    Format: ``{prefix}[-{effect}]-{YYYY-MM-DDTHH-MM-SS}.wav`` with a UTC
    timestamp.

    Raises:
        InvalidInputError: If there is no audio to download
    """
    if session.current_audio is None:
        raise InvalidInputError("No audio to download. Record or upload audio first.")

    now = now or datetime.now(timezone.utc)
    effect_suffix = f"-{session.current_effect}" if session.current_effect else ""
    timestamp = now.strftime("%Y-%m-%dT%H-%M-%S")
    return f"{prefix or settings.download_prefix}{effect_suffix}-{timestamp}.wav"
