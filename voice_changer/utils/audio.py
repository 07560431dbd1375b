"""
Audio file utilities for loading, saving, and resampling clips
"""

import subprocess
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import librosa
import soundfile as sf
import structlog

from voice_changer.buffer import SampleBuffer
from voice_changer.config import settings
from voice_changer.errors import DecodingError, InvalidInputError
from voice_changer.wav import encode_to_container

logger = structlog.get_logger()


def is_readable_format(audio_path: str) -> bool:
    """Whether libsndfile can read the container named by the file suffix."""
    return Path(audio_path).suffix.lstrip(".").upper() in sf.available_formats()


@contextmanager
def readable_audio(audio_path: str, ffmpeg_binary: Optional[str] = None) -> Iterator[str]:
    """
    Yield a path libsndfile can read for the given audio file.

    Browser recordings usually arrive as WebM/Opus or M4A, which soundfile
    does not decode. Those are converted with ffmpeg into a temporary
    directory that is removed on exit; nothing is written next to the
    input. If conversion is impossible the original path is yielded.

    Args:
        audio_path: Path to the audio file
        ffmpeg_binary: ffmpeg executable (defaults to the configured one)

    Yields:
        Path to a readable file (original path, or converted WAV path)
    """
    if is_readable_format(audio_path):
        yield audio_path
        return

    path = Path(audio_path)
    with tempfile.TemporaryDirectory(prefix="voice-changer-") as tmp_dir:
        wav_path = Path(tmp_dir) / f"{path.stem}.wav"
        logger.info("Converting to WAV", source=path.name)

        try:
            subprocess.run(
                [
                    ffmpeg_binary or settings.ffmpeg_binary,
                    "-i", audio_path,
                    "-acodec", "pcm_s16le",  # PCM 16-bit
                    "-y",                    # Overwrite if exists
                    "-loglevel", "error",    # Only show errors
                    str(wav_path)
                ],
                check=True,
                capture_output=True,
                text=True
            )
        except subprocess.CalledProcessError as e:
            logger.warning(
                "FFmpeg conversion failed, using original file",
                error=e.stderr,
                file=audio_path
            )
            yield audio_path
            return
        except FileNotFoundError:
            logger.warning("FFmpeg not found, using original file", file=audio_path)
            yield audio_path
            return

        logger.info("Converted to WAV", original=path.name, wav_path=str(wav_path))
        yield str(wav_path)


def load_audio(file_path: str, target_sr: Optional[int] = None) -> SampleBuffer:
    """
    Load an audio file as a sample buffer.

    Args:
        file_path: Path to the audio file
        target_sr: Resample to this rate if given (keeps native rate otherwise)

    Returns:
        SampleBuffer with float64 samples

    Raises:
        DecodingError: If the file cannot be decoded
        InvalidInputError: If the file contains no frames
    """
    logger.info("Loading audio", file_path=file_path, target_sr=target_sr)

    try:
        with readable_audio(file_path) as readable_path:
            audio, sr = sf.read(readable_path, dtype="float64", always_2d=True)
    except RuntimeError as e:
        logger.error("Failed to load audio", file_path=file_path, error=str(e))
        raise DecodingError(f"Could not decode {file_path}: {e}") from e

    if audio.shape[0] == 0:
        raise InvalidInputError(f"Audio file contains no frames: {file_path}")

    buffer = SampleBuffer(audio.T, sr)
    if target_sr:
        buffer = resample_buffer(buffer, target_sr)

    logger.info(
        "Audio loaded successfully",
        duration=buffer.duration,
        sample_rate=buffer.sample_rate,
        channels=buffer.channel_count,
        samples=buffer.frame_count
    )

    return buffer


def save_audio(buffer: SampleBuffer, file_path: str) -> str:
    """
    Save a sample buffer as a 16-bit PCM WAV file.

    Args:
        buffer: Audio to save
        file_path: Output file path

    Returns:
        Path to saved file
    """
    logger.info("Saving audio", file_path=file_path)

    encoded = encode_to_container(buffer)
    try:
        Path(file_path).write_bytes(encoded.data)
    except OSError as e:
        logger.error("Failed to save audio", file_path=file_path, error=str(e))
        raise

    logger.info("Audio saved", file_path=file_path, size=encoded.size)
    return file_path


def resample_buffer(buffer: SampleBuffer, target_sr: int) -> SampleBuffer:
    """
    Resample a buffer to a different sample rate.

    Args:
        buffer: Input audio
        target_sr: Target sample rate

    Returns:
        Resampled buffer (the input itself if rates already match)
    """
    if buffer.sample_rate == target_sr:
        return buffer
    audio = librosa.resample(buffer.samples, orig_sr=buffer.sample_rate, target_sr=target_sr)
    return SampleBuffer(audio, target_sr)
