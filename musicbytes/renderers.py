# renderers.py
"""
Text renderers for a Melody.

Modes:
- arduino : C declaration of a tone count and a fixed-size int array
- json    : flat JSON array of integer frequencies
- wav     : synthesized audio file (see composer.write_melody)

Each text renderer is a pure function Melody -> str.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Optional

from musicbytes.config import MelodyConfig
from musicbytes.errors import ModeError
from musicbytes.melody import Melody


class OutputMode(str, Enum):
    ARDUINO = "arduino"
    JSON = "json"
    WAV = "wav"

    @classmethod
    def from_token(cls, token: str) -> OutputMode:
        try:
            return cls(token.strip().lower())
        except ValueError:
            valid = "/".join(m.value for m in cls)
            raise ModeError(f"Unknown mode: {token!r} (expected one of {valid})") from None


def write_for_arduino(melody: Melody, limit: Optional[int] = None) -> str:
    freqs = melody.as_ints()
    if limit is not None:
        freqs = freqs[:limit]
    count = len(freqs)
    body = ", ".join(str(f) for f in freqs)
    return f"int tone_count = {count};\nint tones[{count}] = {{{body}}};"


def write_for_json(melody: Melody) -> str:
    return json.dumps(melody.as_ints(), separators=(",", ":"))


def render_text(mode: OutputMode, melody: Melody, config: Optional[MelodyConfig] = None) -> str:
    config = config or MelodyConfig()
    if mode is OutputMode.ARDUINO:
        return write_for_arduino(melody, limit=config.arduino_limit)
    if mode is OutputMode.JSON:
        return write_for_json(melody)
    raise ValueError(f"{mode.value} is not a text mode; use composer.write_melody")
