"""
Command-line entry point for the voice changer
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import structlog

from voice_changer.config import settings
from voice_changer.effects.presets import EFFECT_PRESETS, list_presets
from voice_changer.errors import VoiceChangerError
from voice_changer.session import Session, download_filename, load_clip, select_effect
from voice_changer.utils.audio import readable_audio
from voice_changer.utils.logging import setup_logging

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="voice-changer",
        description="Apply a voice effect preset to an audio clip and write a 16-bit WAV.",
    )
    parser.add_argument("input", nargs="?", help="Input audio file")
    parser.add_argument("-e", "--effect", choices=list_presets(), help="Effect preset to apply")
    parser.add_argument("-o", "--output", help="Output WAV path (default: generated name in output dir)")
    parser.add_argument("--list", action="store_true", help="List effect presets and exit")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    return parser


def print_presets():
    print(f"{'name':<10} {'pitch':>6} {'speed':>6} {'echo':>6} {'distortion':>10}")
    for preset in EFFECT_PRESETS.values():
        print(
            f"{preset.name:<10} {preset.pitch_factor:>6} {preset.speed_factor:>6} "
            f"{preset.echo_mix:>6} {preset.distortion:>10}"
        )


def process_file(input_path: str, effect_name: str, output_path: Optional[str] = None) -> str:
    """
    Apply an effect to a file on disk and write the result.

    Args:
        input_path: Audio file to process
        effect_name: Preset name
        output_path: Destination WAV (generated inside the output dir if omitted)

    Returns:
        Path of the written file
    """
    session = Session()
    with readable_audio(input_path) as readable_path:
        media_type = f"audio/{Path(readable_path).suffix.lstrip('.').lower() or 'wav'}"
        load_clip(session, Path(readable_path).read_bytes(), media_type)
    select_effect(session, effect_name)

    output_path = output_path or settings.get_output_file(download_filename(session))
    Path(output_path).write_bytes(session.current_audio.data)

    logger.info("Processed audio written", effect=effect_name, output_path=output_path)
    return output_path


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI; returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level, settings.log_file)

    if args.list:
        print_presets()
        return 0

    if not args.input or not args.effect:
        parser.error("an input file and --effect are required")

    try:
        output_path = process_file(args.input, args.effect, args.output)
    except (VoiceChangerError, OSError) as e:
        logger.error("Processing failed", input=args.input, effect=args.effect, error=str(e))
        return 1

    print(output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
