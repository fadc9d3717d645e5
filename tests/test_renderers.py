import json

import pytest

from musicbytes.config import MelodyConfig
from musicbytes.converter import bytes_to_melody
from musicbytes.errors import ModeError
from musicbytes.melody import Melody, Tone
from musicbytes.renderers import OutputMode, render_text, write_for_arduino, write_for_json

ARDUINO = MelodyConfig(min_freq=37, max_freq=32767)


def _scenario():
    return bytes_to_melody(bytes([0, 255, 128]), ARDUINO)


def test_arduino_scenario():
    assert write_for_arduino(_scenario()) == (
        "int tone_count = 3;\nint tones[3] = {37, 32767, 16466};"
    )


def test_json_scenario():
    assert write_for_json(_scenario()) == "[37,32767,16466]"


def test_empty_melody_renders():
    assert write_for_json(Melody()) == "[]"
    assert write_for_arduino(Melody()) == "int tone_count = 0;\nint tones[0] = {};"


def test_arduino_limit_caps_count():
    melody = Melody(Tone(100 + i) for i in range(150))
    out = write_for_arduino(melody, limit=100)
    assert out.startswith("int tone_count = 100;\nint tones[100] = {100, 101,")
    assert out.endswith("199};")


def test_arduino_limit_larger_than_melody():
    out = write_for_arduino(_scenario(), limit=100)
    assert out.startswith("int tone_count = 3;")


def test_json_round_trip_matches_melody():
    melody = bytes_to_melody(bytes(range(256)) + b"round trip", ARDUINO)
    parsed = json.loads(write_for_json(melody))
    assert parsed == melody.as_ints()
    assert len(parsed) == len(melody)


@pytest.mark.parametrize("token,mode", [
    ("arduino", OutputMode.ARDUINO),
    ("json", OutputMode.JSON),
    ("wav", OutputMode.WAV),
    ("JSON", OutputMode.JSON),
])
def test_output_mode_from_token(token, mode):
    assert OutputMode.from_token(token) is mode


def test_unknown_mode_raises():
    with pytest.raises(ModeError):
        OutputMode.from_token("midi")


def test_render_text_dispatch():
    melody = _scenario()
    assert render_text(OutputMode.JSON, melody) == write_for_json(melody)
    limited = MelodyConfig(arduino_limit=1)
    assert render_text(OutputMode.ARDUINO, melody, limited) == (
        "int tone_count = 1;\nint tones[1] = {37};"
    )


def test_render_text_rejects_wav():
    with pytest.raises(ValueError):
        render_text(OutputMode.WAV, _scenario())
