# wav.py
"""
Canonical 44-byte RIFF/WAVE container for mono integer PCM.

Layout (all integers little-endian):

  offset  size  field
       0     4  "RIFF"
       4     4  riff_size      = 36 + data_size (+ 1 pad byte if odd)
       8     4  "WAVE"
      12     4  "fmt "
      16     4  fmt chunk size = 16
      20     2  format tag     = 1 (PCM)
      22     2  channels       = 1
      24     4  sample_rate
      28     4  byte_rate      = sample_rate * channels * bits / 8
      32     2  block_align    = channels * bits / 8
      34     2  bits_per_sample
      36     4  "data"
      40     4  data_size      = bytes of PCM that follow

riff_size counts one zero pad byte after an odd-length data chunk (8-bit
audio with an odd frame count). Both size fields are 32-bit, which caps a
file at MAX_DATA_SIZE bytes of PCM.

Header serialization is kept separate from PCM generation so it can be
checked without synthesizing any audio.
"""

from __future__ import annotations

import os
import struct
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from musicbytes.config import CHANNELS, SUPPORTED_BITS
from musicbytes.errors import OutputError

PCM_FORMAT_TAG = 1
FMT_CHUNK_SIZE = 16
HEADER_SIZE = 44
MAX_CHUNK_SIZE = 0xFFFFFFFF
# largest payload whose riff_size (pad byte included) still fits 32 bits
MAX_DATA_SIZE = MAX_CHUNK_SIZE - (HEADER_SIZE - 8) - 1
_HEADER_STRUCT = struct.Struct("<4sI4s4sIHHIIHH4sI")


@dataclass(frozen=True)
class WavHeader:
    sample_rate: int
    bits_per_sample: int
    data_size: int
    channels: int = CHANNELS

    def __post_init__(self) -> None:
        if self.bits_per_sample not in SUPPORTED_BITS:
            raise ValueError(f"Unsupported bit depth: {self.bits_per_sample}")
        if self.channels != CHANNELS:
            raise ValueError(f"Only mono is supported, got {self.channels} channels")
        if self.sample_rate <= 0:
            raise ValueError(f"sample_rate must be positive, got {self.sample_rate}")
        if self.data_size < 0 or self.data_size % self.block_align:
            raise ValueError(
                f"data_size {self.data_size} is not a whole number of "
                f"{self.block_align}-byte frames"
            )
        if self.data_size > MAX_DATA_SIZE:
            raise ValueError(
                f"data_size {self.data_size} exceeds the WAV limit of {MAX_DATA_SIZE} bytes"
            )

    @property
    def block_align(self) -> int:
        return self.channels * self.bits_per_sample // 8

    @property
    def byte_rate(self) -> int:
        return self.sample_rate * self.block_align

    @property
    def pad_size(self) -> int:
        return self.data_size & 1

    @property
    def riff_size(self) -> int:
        return HEADER_SIZE - 8 + self.data_size + self.pad_size

    @property
    def frame_count(self) -> int:
        return self.data_size // self.block_align

    @classmethod
    def for_payload(cls, pcm: bytes, sample_rate: int, bits_per_sample: int) -> WavHeader:
        return cls(sample_rate=sample_rate, bits_per_sample=bits_per_sample, data_size=len(pcm))

    def to_bytes(self) -> bytes:
        return _HEADER_STRUCT.pack(
            b"RIFF", self.riff_size, b"WAVE",
            b"fmt ", FMT_CHUNK_SIZE, PCM_FORMAT_TAG, self.channels,
            self.sample_rate, self.byte_rate, self.block_align, self.bits_per_sample,
            b"data", self.data_size,
        )

    @classmethod
    def from_bytes(cls, raw: bytes) -> WavHeader:
        """
        Parse a canonical header and check that its fields agree.

        Raises ValueError for anything that is not a canonical mono PCM
        header or whose derived fields are inconsistent.
        """
        if len(raw) < HEADER_SIZE:
            raise ValueError(f"Header needs {HEADER_SIZE} bytes, got {len(raw)}")
        (riff, riff_size, wave_id, fmt_id, fmt_size, tag, channels,
         sample_rate, byte_rate, block_align, bits, data_id, data_size) = _HEADER_STRUCT.unpack(
            raw[:HEADER_SIZE]
        )
        if (riff, wave_id, fmt_id, data_id) != (b"RIFF", b"WAVE", b"fmt ", b"data"):
            raise ValueError("Not a canonical RIFF/WAVE header")
        if fmt_size != FMT_CHUNK_SIZE or tag != PCM_FORMAT_TAG:
            raise ValueError(f"Not integer PCM (fmt size {fmt_size}, format tag {tag})")

        header = cls(sample_rate=sample_rate, bits_per_sample=bits,
                     data_size=data_size, channels=channels)
        if riff_size != header.riff_size:
            raise ValueError(f"RIFF size {riff_size} != {header.riff_size} for data size {data_size}")
        if byte_rate != header.byte_rate or block_align != header.block_align:
            raise ValueError("byte_rate/block_align disagree with sample rate and bit depth")
        return header


def pack_samples(samples: Sequence[int], bits_per_sample: int) -> bytes:
    """Serialize signed samples as WAV PCM (8-bit is stored unsigned)."""
    n = len(samples)
    if bits_per_sample == 8:
        return bytes(s + 128 for s in samples)
    if bits_per_sample == 16:
        return struct.pack(f"<{n}h", *samples)
    if bits_per_sample == 24:
        return b"".join(s.to_bytes(3, "little", signed=True) for s in samples)
    if bits_per_sample == 32:
        return struct.pack(f"<{n}i", *samples)
    raise ValueError(f"Unsupported bit depth: {bits_per_sample}")


def _default_file_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_wav(path, pcm: bytes, sample_rate: int, bits_per_sample: int) -> Path:
    """
    Write header + PCM to `path` atomically.

    The bytes go to a temporary file next to the target, which replaces
    the target only after a complete write. On failure the temporary file
    is removed and OutputError is raised.
    """
    header = WavHeader.for_payload(pcm, sample_rate, bits_per_sample)
    p = Path(path)
    tmp_name = None
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=p.parent, prefix=f".{p.name}.", suffix=".tmp")
        # mkstemp creates 0600; give the result the mode open() would
        os.chmod(tmp_name, _default_file_mode())
        with os.fdopen(fd, "wb") as f:
            f.write(header.to_bytes())
            f.write(pcm)
            f.write(b"\x00" * header.pad_size)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, p)
        tmp_name = None
    except OSError as e:
        raise OutputError(f"Error creating '{p}': {e.strerror or e}") from e
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
    return p
