
from __future__ import annotations

import math
from typing import Iterable, Iterator, List, Tuple


class Tone:
    def __init__(self, frequency):
        self.frequency = float(frequency)

    def __repr__(self):
        return f"Tone(frequency={self.frequency})"

    def __eq__(self, other):
        if not isinstance(other, Tone):
            return NotImplemented
        return math.isclose(self.frequency, other.frequency)

    def __int__(self):
        return int(self.frequency)

    def __float__(self):
        return self.frequency

    def check(self, min_freq, max_freq):
        """Raise ValueError unless min_freq <= frequency <= max_freq."""
        if not (min_freq <= self.frequency <= max_freq):
            raise ValueError(
                f"Tone {self.frequency} Hz outside [{min_freq}, {max_freq}] Hz"
            )
        return self


class Melody:
    """Ordered, immutable sequence of Tones. One per input byte."""

    def __init__(self, tones: Iterable[Tone] = ()):
        self._tones: Tuple[Tone, ...] = tuple(tones)

    def __repr__(self):
        return f"Melody({len(self._tones)} tones)"

    def __eq__(self, other):
        if not isinstance(other, Melody):
            return NotImplemented
        return self._tones == other._tones

    def __len__(self) -> int:
        return len(self._tones)

    def __iter__(self) -> Iterator[Tone]:
        return iter(self._tones)

    def __getitem__(self, index):
        return self._tones[index]

    @property
    def tones(self) -> Tuple[Tone, ...]:
        return self._tones

    def frequencies(self) -> List[float]:
        return [t.frequency for t in self._tones]

    def as_ints(self) -> List[int]:
        """Frequencies truncated toward zero, the form the array renderers print."""
        return [int(t) for t in self._tones]
