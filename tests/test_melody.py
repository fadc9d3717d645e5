from __future__ import annotations

import pytest

from musicbytes.melody import Melody, Tone


# =========================
# Tone
# =========================
def test_equal_identical_frequencies():
    assert Tone(440) == Tone(440.0)


def test_not_equal_different_frequencies():
    assert Tone(440) != Tone(441)


def test_cross_type_comparison_is_false():
    assert (Tone(440) == 440) is False
    assert (Tone(440) != "Tone") is True


def test_int_truncates_toward_zero():
    assert int(Tone(16466.9)) == 16466


def test_check_inside_range_returns_tone():
    t = Tone(100)
    assert t.check(37, 32767) is t


@pytest.mark.parametrize("freq", [36.9, 32767.5])
def test_check_outside_range_raises(freq):
    with pytest.raises(ValueError):
        Tone(freq).check(37, 32767)


# =========================
# Melody
# =========================
def test_melody_sequence_behaviour():
    m = Melody([Tone(37), Tone(100.5), Tone(32767)])
    assert len(m) == 3
    assert m[1] == Tone(100.5)
    assert [t.frequency for t in m] == [37.0, 100.5, 32767.0]
    assert m.frequencies() == [37.0, 100.5, 32767.0]
    assert m.as_ints() == [37, 100, 32767]


def test_melody_is_immutable():
    m = Melody([Tone(37)])
    assert isinstance(m.tones, tuple)
    with pytest.raises(TypeError):
        m.tones[0] = Tone(40)  # type: ignore[index]


def test_empty_melody():
    m = Melody()
    assert len(m) == 0
    assert m.as_ints() == []
    assert repr(m) == "Melody(0 tones)"


def test_melody_equality():
    assert Melody([Tone(1), Tone(2)]) == Melody([Tone(1), Tone(2)])
    assert Melody([Tone(1), Tone(2)]) != Melody([Tone(2), Tone(1)])
