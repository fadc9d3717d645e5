import pytest

from musicbytes.config import (
    MAX_FREQ_DEFAULT,
    MIN_FREQ_DEFAULT,
    SAMPLE_RATE_DEFAULT,
    MappingCurve,
    MelodyConfig,
)
from musicbytes.errors import ConfigError


def test_defaults_are_valid():
    cfg = MelodyConfig()
    assert cfg.min_freq == MIN_FREQ_DEFAULT == 37
    assert cfg.max_freq == MAX_FREQ_DEFAULT == 32_767
    assert cfg.max_freq < SAMPLE_RATE_DEFAULT / 2
    assert cfg.curve is MappingCurve.LINEAR
    assert cfg.note_seconds == 0.25
    assert cfg.bytes_per_sample == 2
    assert cfg.output_path == "audio.wav"


@pytest.mark.parametrize("kwargs", [
    {"min_freq": 0},
    {"min_freq": 500, "max_freq": 400},
    {"sample_rate": 44_100},              # 32767 Hz is above Nyquist
    {"sample_rate": 0},
    {"bits_per_sample": 12},
    {"bpm": 0},
    {"beats_per_note": -1},
    {"loudness": 1.5},
    {"arduino_limit": -1},
    {"curve": "wobbly"},
    {"min_freq": float("nan")},
    {"max_freq": float("nan")},
    {"max_freq": float("inf")},
    {"bpm": float("nan")},
    {"bpm": float("inf")},
    {"beats_per_note": float("nan")},
    {"loudness": float("nan")},
])
def test_invalid_values_raise(kwargs):
    with pytest.raises(ConfigError):
        MelodyConfig(**kwargs)


def test_curve_accepts_token():
    assert MelodyConfig(curve="exponential").curve is MappingCurve.EXPONENTIAL


def test_with_overrides_skips_none():
    cfg = MelodyConfig().with_overrides(bpm=60, loudness=None)
    assert cfg.bpm == 60
    assert cfg.loudness == MelodyConfig().loudness


def test_config_is_frozen():
    with pytest.raises(Exception):
        MelodyConfig().bpm = 1  # type: ignore[misc]


def test_load_from_env_defaults():
    assert MelodyConfig.load_from_env({}) == MelodyConfig()


def test_load_from_env_values():
    cfg = MelodyConfig.load_from_env({
        "MUSICBYTES_MIN_FREQ": "100",
        "MUSICBYTES_MAX_FREQ": "2000",
        "MUSICBYTES_CURVE": "C_MAJOR",
        "MUSICBYTES_SAMPLE_RATE": "44100",
        "MUSICBYTES_BITS": "8",
        "MUSICBYTES_BPM": "90",
        "MUSICBYTES_BEATS_PER_NOTE": "1",
        "MUSICBYTES_LOUDNESS": "0.5",
        "MUSICBYTES_OUTPUT": "song.wav",
        "MUSICBYTES_ARDUINO_LIMIT": "100",
        "MUSICBYTES_JSON_LOGS": "1",
        "UNRELATED": "x",
    })
    assert cfg == MelodyConfig(
        min_freq=100.0, max_freq=2000.0, curve=MappingCurve.C_MAJOR,
        sample_rate=44_100, bits_per_sample=8, bpm=90.0, beats_per_note=1.0,
        loudness=0.5, output_path="song.wav", arduino_limit=100, enable_json_logs=True,
    )


@pytest.mark.parametrize("name,value", [
    ("MUSICBYTES_BPM", "fast"),
    ("MUSICBYTES_BITS", "16.5"),
    ("MUSICBYTES_CURVE", "zigzag"),
    ("MUSICBYTES_MAX_FREQ", "60000"),
])
def test_load_from_env_malformed(name, value):
    with pytest.raises(ConfigError):
        MelodyConfig.load_from_env({name: value})
