from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

from musicbytes.config import MappingCurve, MelodyConfig
from musicbytes.errors import ConfigError, InputError
from musicbytes.melody import Melody, Tone

BYTE_VALUES = 256

# C major, octave 4: C D E F G A (MIDI note numbers)
C_MAJOR_PITCHES = (60, 62, 64, 65, 67, 69)
A4_PITCH = 69
A4_HZ = 440.0


def read_bytes(path):
    """
    Read the whole input file as an immutable byte string (may be empty).

    Raises InputError when the path is missing, a directory, or unreadable.
    """
    p = Path(path)
    if not p.exists():
        raise InputError(f"No such file: {p}")
    if p.is_dir():
        raise InputError(f"Is a directory, not a file: {p}")
    try:
        return p.read_bytes()
    except OSError as e:
        raise InputError(f"Failed to read {p}: {e.strerror or e}") from e


def pitch_to_frequency(pitch):
    # equal temperament, A4 = 440 Hz
    return A4_HZ * 2 ** ((pitch - A4_PITCH) / 12.0)


def _clamp(x, lo, hi):
    return lo if x < lo else hi if x > hi else x


def _linear(value, min_freq, max_freq):
    return min_freq + value * (max_freq - min_freq) / (BYTE_VALUES - 1)


def _exponential(value, min_freq, max_freq):
    # equal ratio between neighbouring byte values, i.e. perceptually even spacing
    return min_freq * (max_freq / min_freq) ** (value / (BYTE_VALUES - 1))


def _c_major(value, min_freq, max_freq):
    return pitch_to_frequency(C_MAJOR_PITCHES[value % len(C_MAJOR_PITCHES)])


_CURVES = {
    MappingCurve.LINEAR: _linear,
    MappingCurve.EXPONENTIAL: _exponential,
    MappingCurve.C_MAJOR: _c_major,
}


@lru_cache(maxsize=None)
def build_frequency_table(
    min_freq: float,
    max_freq: float,
    curve: MappingCurve = MappingCurve.LINEAR,
) -> Tuple[float, ...]:
    """
    Precompute the frequency for each of the 256 byte values.

    This table is the only place a byte becomes a frequency; every renderer
    reads tones produced from it. Entries are clamped into
    [min_freq, max_freq] so float rounding at the ends can never escape
    the range.
    """
    if min_freq <= 0 or max_freq < min_freq:
        raise ConfigError(f"Invalid frequency range [{min_freq}, {max_freq}]")

    if curve is MappingCurve.C_MAJOR:
        scale = [pitch_to_frequency(p) for p in C_MAJOR_PITCHES]
        if scale[0] < min_freq or scale[-1] > max_freq:
            raise ConfigError(
                f"C major scale ({scale[0]:.2f}..{scale[-1]:.2f} Hz) does not fit "
                f"inside [{min_freq}, {max_freq}] Hz"
            )

    fn = _CURVES[curve]
    return tuple(_clamp(fn(v, min_freq, max_freq), min_freq, max_freq) for v in range(BYTE_VALUES))


def byte_to_frequency(value: int, table: Tuple[float, ...]) -> float:
    if not 0 <= value < BYTE_VALUES:
        raise ValueError(f"byte value must be in 0..255, got {value}")
    return table[value]


def bytes_to_melody(data: bytes, config: Optional[MelodyConfig] = None) -> Melody:
    """
    Map every byte to one Tone (1:1). Pure: the same byte always gives
    the same tone, wherever it sits in the stream.
    """
    config = config or MelodyConfig()
    table = build_frequency_table(config.min_freq, config.max_freq, config.curve)
    return Melody(Tone(table[b]) for b in data)


def file_to_melody(path, config: Optional[MelodyConfig] = None) -> Melody:
    return bytes_to_melody(read_bytes(path), config)
