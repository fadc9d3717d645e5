from pathlib import Path
from typing import Dict, List, Optional

from musicbytes.config import MelodyConfig
from musicbytes.errors import OutputError
from musicbytes.melody import Melody
from musicbytes.synth.amplifiers import amplifier
from musicbytes.synth.oscillators import frames_for_duration, sine_wave
from musicbytes.synth.wav import MAX_DATA_SIZE, pack_samples, write_wav


def beats_to_seconds(beats, bpm):
    return (60.0 / bpm) * beats


def frames_per_note(config: MelodyConfig) -> int:
    return frames_for_duration(beats_to_seconds(config.beats_per_note, config.bpm), config.sample_rate)


def render_tone(frequency: float, config: MelodyConfig) -> List[int]:
    """One note: a fixed-length block of quantized sine samples."""
    raw = sine_wave(
        frequency=frequency,
        duration=beats_to_seconds(config.beats_per_note, config.bpm),
        sample_rate=config.sample_rate,
    )
    return amplifier(raw, gain=config.loudness, bits_per_sample=config.bits_per_sample)


def render_melody(melody: Melody, config: Optional[MelodyConfig] = None) -> bytes:
    """
    Render every tone back to back (no gap, no cross-fade) and return the
    PCM payload. An empty melody renders to b"".
    """
    config = config or MelodyConfig()
    # at most 256 distinct tones come out of the mapper, so blocks are reused
    blocks: Dict[float, bytes] = {}
    chunks: List[bytes] = []
    for tone in melody:
        block = blocks.get(tone.frequency)
        if block is None:
            tone.check(config.min_freq, config.max_freq)
            block = pack_samples(render_tone(tone.frequency, config), config.bits_per_sample)
            blocks[tone.frequency] = block
        chunks.append(block)
    return b"".join(chunks)


def write_melody(melody: Melody, path=None, config: Optional[MelodyConfig] = None) -> Path:
    """
    Synthesize `melody` into a WAV file. Zero tones give a header-only file.

    The payload size is checked against the 32-bit WAV limit before any
    audio is rendered.
    """
    config = config or MelodyConfig()
    p = Path(path) if path is not None else Path(config.output_path)
    note_bytes = frames_per_note(config) * config.bytes_per_sample
    if len(melody) * note_bytes > MAX_DATA_SIZE:
        raise OutputError(
            f"{len(melody)} tones do not fit in '{p}': a WAV file holds at most "
            f"{MAX_DATA_SIZE // note_bytes} tones at these settings"
        )
    pcm = render_melody(melody, config)
    return write_wav(p, pcm, config.sample_rate, config.bits_per_sample)
