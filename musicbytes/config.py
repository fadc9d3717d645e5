# config.py
"""
Mapping and synthesis configuration.

Defaults live in the constants below (edit here). A MelodyConfig is built
once per run, from the environment and then CLI overrides, and passed
down to the mapper, the renderers and the synthesizer. It is never
mutated after construction.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Mapping, Optional

from musicbytes.errors import ConfigError

# ===== EDIT HERE (defaults) =====
MIN_FREQ_DEFAULT = 37.0            # lowest Arduino tone() frequency
MAX_FREQ_DEFAULT = 32_767.0        # highest Arduino tone() frequency
SAMPLE_RATE_DEFAULT = 96_000       # Nyquist 48 kHz stays above MAX_FREQ_DEFAULT
BITS_PER_SAMPLE_DEFAULT = 16
CHANNELS = 1                       # mono only
BPM_DEFAULT = 120
BEATS_PER_NOTE_DEFAULT = 0.5       # eighth note at 4/4 -> 0.25 s at 120 bpm
LOUDNESS_DEFAULT = 0.8
HEADROOM = 0.85                    # global safety margin (do not push to 1.0)
WAV_FILE_DEFAULT = "audio.wav"

SUPPORTED_BITS = (8, 16, 24, 32)

ENV_PREFIX = "MUSICBYTES_"


class MappingCurve(str, Enum):
    LINEAR = "linear"
    EXPONENTIAL = "exponential"
    C_MAJOR = "c_major"

    @classmethod
    def from_token(cls, token: str) -> MappingCurve:
        try:
            return cls(token.strip().lower())
        except ValueError:
            valid = ", ".join(c.value for c in cls)
            raise ConfigError(f"Unknown mapping curve: {token!r} (valid: {valid})") from None


@dataclass(frozen=True)
class MelodyConfig:
    """
    Immutable run configuration.

    Invariants are checked on construction so every consumer can rely on
    them: the frequency bounds are positive and ordered, the top bound is
    below Nyquist for the sample rate, and the bit depth is one the WAV
    writer can serialize.
    """

    # ------------------------------------------------------------------
    # Frequency mapping
    # ------------------------------------------------------------------

    min_freq: float = MIN_FREQ_DEFAULT
    max_freq: float = MAX_FREQ_DEFAULT
    curve: MappingCurve = MappingCurve.LINEAR

    # ------------------------------------------------------------------
    # Synthesis
    # ------------------------------------------------------------------

    sample_rate: int = SAMPLE_RATE_DEFAULT
    bits_per_sample: int = BITS_PER_SAMPLE_DEFAULT
    bpm: float = BPM_DEFAULT
    beats_per_note: float = BEATS_PER_NOTE_DEFAULT
    loudness: float = LOUDNESS_DEFAULT

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    output_path: str = WAV_FILE_DEFAULT
    arduino_limit: Optional[int] = None

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    enable_json_logs: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.curve, MappingCurve):
            object.__setattr__(self, "curve", MappingCurve.from_token(str(self.curve)))

        for name in ("min_freq", "max_freq", "bpm", "beats_per_note", "loudness"):
            if not math.isfinite(getattr(self, name)):
                raise ConfigError(f"{name} must be a finite number, got {getattr(self, name)}")
        if self.min_freq <= 0:
            raise ConfigError(f"min_freq must be positive, got {self.min_freq}")
        if self.max_freq < self.min_freq:
            raise ConfigError(
                f"max_freq ({self.max_freq}) must not be below min_freq ({self.min_freq})"
            )
        if self.sample_rate <= 0:
            raise ConfigError(f"sample_rate must be positive, got {self.sample_rate}")
        if self.max_freq >= self.sample_rate / 2:
            raise ConfigError(
                f"max_freq ({self.max_freq} Hz) must be below Nyquist "
                f"({self.sample_rate / 2} Hz) for sample rate {self.sample_rate}"
            )
        if self.bits_per_sample not in SUPPORTED_BITS:
            raise ConfigError(
                f"bits_per_sample must be one of {SUPPORTED_BITS}, got {self.bits_per_sample}"
            )
        if self.bpm <= 0:
            raise ConfigError(f"bpm must be positive, got {self.bpm}")
        if self.beats_per_note <= 0:
            raise ConfigError(f"beats_per_note must be positive, got {self.beats_per_note}")
        if not 0.0 <= self.loudness <= 1.0:
            raise ConfigError(f"loudness must be within 0..1, got {self.loudness}")
        if self.arduino_limit is not None and self.arduino_limit < 0:
            raise ConfigError(f"arduino_limit must be >= 0, got {self.arduino_limit}")

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def note_seconds(self) -> float:
        return (60.0 / self.bpm) * self.beats_per_note

    @property
    def bytes_per_sample(self) -> int:
        return self.bits_per_sample // 8

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    def with_overrides(self, **overrides) -> MelodyConfig:
        """Copy with every non-None override applied (CLI flags)."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

    @staticmethod
    def load_from_env(environ: Optional[Mapping[str, str]] = None) -> MelodyConfig:
        """
        Build a config from MUSICBYTES_* environment variables.

        Unset variables keep their defaults.

        Raises:
            ConfigError for malformed or out-of-range values.
        """
        env = os.environ if environ is None else environ

        parsers = {
            "min_freq": ("MIN_FREQ", float),
            "max_freq": ("MAX_FREQ", float),
            "curve": ("CURVE", MappingCurve.from_token),
            "sample_rate": ("SAMPLE_RATE", int),
            "bits_per_sample": ("BITS", int),
            "bpm": ("BPM", float),
            "beats_per_note": ("BEATS_PER_NOTE", float),
            "loudness": ("LOUDNESS", float),
            "output_path": ("OUTPUT", str),
            "arduino_limit": ("ARDUINO_LIMIT", int),
            "enable_json_logs": ("JSON_LOGS", lambda raw: raw.strip() == "1"),
        }

        values = {}
        for field in fields(MelodyConfig):
            name, parse = parsers[field.name]
            raw = env.get(ENV_PREFIX + name)
            if raw is None:
                continue
            try:
                values[field.name] = parse(raw)
            except ValueError as e:
                raise ConfigError(f"Invalid {ENV_PREFIX}{name}={raw!r}: {e}") from e

        return MelodyConfig(**values)
