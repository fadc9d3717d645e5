# oscillators.py
"""
Bare-bones sine oscillator.
Returns float samples in [-1.0, 1.0]; quantizing to PCM happens in
amplifiers.py.
"""

import math
from typing import List


def frames_for_duration(duration: float, sample_rate: int) -> int:
    if duration <= 0:
        return 0
    return max(0, int(round(duration * sample_rate)))


# ===== OSCILLATORS =====
def sine_wave(frequency: float, duration: float, sample_rate: int) -> List[float]:
    # phase restarts at 0 for every note
    two_pi_f_over_sr = 2.0 * math.pi * frequency / sample_rate
    return [math.sin(two_pi_f_over_sr * n)
            for n in range(frames_for_duration(duration, sample_rate))]
