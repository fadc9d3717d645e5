# amplifiers.py
"""
Amplifier stage: scale float samples and quantize them to signed PCM.

Output values always sit inside the representable range of the bit
depth. Out-of-range values are clamped, never wrapped.
"""

from typing import Iterable, List, Tuple

from musicbytes.config import HEADROOM


def sample_range(bits_per_sample: int) -> Tuple[int, int]:
    """Signed (lo, hi) for a bit depth, e.g. 16 -> (-32768, 32767)."""
    half = 1 << (bits_per_sample - 1)
    return -half, half - 1


def clip(x: int, lo: int, hi: int) -> int:
    return lo if x < lo else hi if x > hi else x


def amplifier(samples: Iterable[float], gain: float, bits_per_sample: int) -> List[int]:
    """Scale by gain * HEADROOM, round to the nearest step, clamp."""
    lo, hi = sample_range(bits_per_sample)
    g = min(max(gain, 0.0), 1.0) * HEADROOM * hi
    return [clip(int(round(s * g)), lo, hi) for s in samples]
