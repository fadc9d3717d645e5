# main.py
"""
Entry point: turn any file's bytes into a melody.

Flow:
  converter.read_bytes -> converter.bytes_to_melody
  -> renderers (arduino/json to stdout) or composer.write_melody (wav file)

Usage:
  musicbytes [arduino|json|wav] FILE [options]
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from musicbytes.composer import write_melody
from musicbytes.config import SUPPORTED_BITS, MappingCurve, MelodyConfig
from musicbytes.converter import bytes_to_melody, read_bytes
from musicbytes.errors import ModeError, MusicBytesError
from musicbytes.log import log_event
from musicbytes.renderers import OutputMode, render_text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="musicbytes",
        description="Convert the bytes of any file into a melody.",
    )
    parser.add_argument("mode", help="Output mode: arduino, json or wav")
    parser.add_argument("file", help="Input file (any content, may be empty)")
    parser.add_argument("-o", "--output", dest="output_path",
                        help="WAV destination (default: audio.wav)")
    parser.add_argument("--curve", choices=[c.value for c in MappingCurve],
                        help="Byte-to-frequency curve (default: linear)")
    parser.add_argument("--min-freq", type=float, help="Lowest tone in Hz")
    parser.add_argument("--max-freq", type=float, help="Highest tone in Hz")
    parser.add_argument("--sample-rate", type=int, help="WAV sample rate in Hz")
    parser.add_argument("--bits", dest="bits_per_sample", type=int, choices=SUPPORTED_BITS,
                        help="WAV bit depth")
    parser.add_argument("--bpm", type=float, help="Tempo in beats per minute")
    parser.add_argument("--beats-per-note", type=float, help="Length of every note in beats")
    parser.add_argument("--loudness", type=float, help="Note amplitude, 0..1")
    parser.add_argument("--limit", dest="arduino_limit", type=int,
                        help="Cap the number of tones in arduino output")
    parser.add_argument("--json-logs", dest="enable_json_logs", action="store_true", default=None,
                        help="Emit JSONL progress events on stderr")
    return parser


def run(args: argparse.Namespace) -> None:
    mode = OutputMode.from_token(args.mode)
    config = MelodyConfig.load_from_env().with_overrides(
        output_path=args.output_path,
        curve=args.curve,
        min_freq=args.min_freq,
        max_freq=args.max_freq,
        sample_rate=args.sample_rate,
        bits_per_sample=args.bits_per_sample,
        bpm=args.bpm,
        beats_per_note=args.beats_per_note,
        loudness=args.loudness,
        arduino_limit=args.arduino_limit,
        enable_json_logs=args.enable_json_logs,
    )

    data = read_bytes(args.file)
    if config.enable_json_logs:
        log_event("INPUT_READ", path=args.file, bytes=len(data))

    melody = bytes_to_melody(data, config)
    if config.enable_json_logs:
        log_event("MELODY_MAPPED", tones=len(melody), curve=config.curve.value)

    if mode is OutputMode.WAV:
        out = write_melody(melody, config.output_path, config)
        if config.enable_json_logs:
            log_event("OUTPUT_WRITTEN", path=str(out), tones=len(melody))
        print(f"Successfully created '{out}'")
    else:
        print(render_text(mode, melody, config))


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        run(args)
    except MusicBytesError as e:
        if isinstance(e, ModeError):
            parser.print_usage(sys.stderr)
        print(f"Error: {e}", file=sys.stderr)
        if args.enable_json_logs:
            log_event("RUN_FAILED", error=type(e).__name__, exit_code=e.exit_code)
        return e.exit_code
    return 0


if __name__ == "__main__":
    sys.exit(main())
