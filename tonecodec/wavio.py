"""tonecodec — canonical PCM16 mono WAV writer and a chunk-walking reader.

Written layout (all integers little-endian), 44-byte header:
  [0:4]   "RIFF"
  [4:8]   uint32  file size - 8
  [8:12]  "WAVE"
  [12:16] "fmt "
  [16:20] uint32  16
  [20:22] uint16  1        PCM
  [22:24] uint16  1        mono
  [24:28] uint32  sample rate
  [28:32] uint32  byte rate = rate × 2
  [32:34] uint16  2        block align
  [34:36] uint16  16       bits per sample
  [36:40] "data"
  [40:44] uint32  sample count × 2
  ── then int16 PCM payload ──

The reader accepts chunks in any order and skips unknown ones, but stops at
the first "data" chunk; anything after it is never looked at.  Odd-sized
chunks are taken to be followed by the RIFF word-alignment pad byte, so a
writer that omits the pad after an odd-sized chunk ahead of "data" is not
readable here.
"""

import struct
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from .diagnostics import WavFormatError
from .profiles import SR, PCM16_MAX

HEADER_LEN = 44

# "fmt " body: format, channels, rate, byte rate, block align, bits per sample
_FMT = struct.Struct("<HHIIHH")
_CHUNK_HEAD = struct.Struct("<4sI")
assert _FMT.size == 16


# ── float ⇄ int16 ─────────────────────────────────────────────────────────────

def float_to_pcm16(samples) -> NDArray[np.int16]:
    """Clamp to [-1, 1], scale by 32767 and truncate toward zero."""
    x = np.clip(np.asarray(samples, dtype=np.float32), -1.0, 1.0)
    return np.trunc(x * np.float32(PCM16_MAX)).astype(np.int16)


def pcm16_to_float(pcm) -> NDArray[np.float32]:
    """int16 → float32 by dividing by 32767."""
    return (np.asarray(pcm, dtype=np.int16).astype(np.float32) / np.float32(PCM16_MAX))


# ── write ─────────────────────────────────────────────────────────────────────

def build_wav16(sample_rate: int, pcm) -> bytes:
    """Serialise int16 mono samples to a complete 44-byte-header WAV image."""
    payload = np.asarray(pcm, dtype="<i2").tobytes()

    fmt_chunk = (b"fmt "
                 + struct.pack("<I", 16)
                 + _FMT.pack(1, 1, sample_rate, sample_rate * 2, 2, 16))
    data_chunk = b"data" + struct.pack("<I", len(payload)) + payload

    riff_data = b"WAVE" + fmt_chunk + data_chunk
    return b"RIFF" + struct.pack("<I", len(riff_data)) + riff_data


def write_wav16(path, sample_rate: int, pcm) -> None:
    """Write int16 mono samples to *path* as a canonical PCM WAV file."""
    data = build_wav16(sample_rate, pcm)
    with open(path, "wb") as f:
        f.write(data)


# ── read ──────────────────────────────────────────────────────────────────────

def parse_wav_bytes(data: bytes) -> tuple[int, int, NDArray[np.float32]]:
    """Parse an in-memory WAV image.

    Returns:
        (sample_rate, bits_per_sample, float32 samples in [-1, 1])

    Raises:
        WavFormatError: bad magic, truncated chunk, no "data" chunk, or a
                        bit depth other than 16.
    """
    if len(data) < 12 or data[0:4] != b"RIFF":
        raise WavFormatError("Not a WAV file: missing RIFF header")
    if data[8:12] != b"WAVE":
        raise WavFormatError("Not a WAV file: missing WAVE id")

    sample_rate = None
    bits        = None
    payload     = None

    idx = 12
    while idx < len(data):
        if idx + _CHUNK_HEAD.size > len(data):
            raise WavFormatError(f"Truncated chunk header at byte {idx}")
        chunk_id, chunk_size = _CHUNK_HEAD.unpack_from(data, idx)
        body = idx + _CHUNK_HEAD.size

        if chunk_id == b"fmt ":
            if chunk_size < _FMT.size or body + chunk_size > len(data):
                raise WavFormatError(f"Truncated fmt chunk ({chunk_size} bytes)")
            _fmt, _channels, sample_rate, _byte_rate, _align, bits = _FMT.unpack_from(data, body)
        elif chunk_id == b"data":
            if body + chunk_size > len(data):
                raise WavFormatError(
                    f"Truncated data chunk: declares {chunk_size} bytes, "
                    f"{len(data) - body} present"
                )
            payload = data[body:body + chunk_size]
            break

        # Chunks are word aligned: odd sizes carry one pad byte
        idx = body + chunk_size + (chunk_size % 2)

    if payload is None:
        raise WavFormatError("No data chunk found in WAV")

    # Files without a fmt chunk ahead of the data are read with codec defaults
    if bits is None:
        bits = 16
    if sample_rate is None:
        sample_rate = SR

    if bits != 16:
        raise WavFormatError(f"Unsupported bit depth: {bits} (only 16-bit PCM)")

    n   = len(payload) // 2
    pcm = np.frombuffer(payload, dtype="<i2", count=n)
    return int(sample_rate), int(bits), pcm16_to_float(pcm)


def parse_wav(path) -> tuple[int, int, NDArray[np.float32]]:
    """Read and parse a WAV file.  See :func:`parse_wav_bytes`.

    Raises:
        FileNotFoundError: *path* does not exist.
        OSError:           the file could not be read.
        WavFormatError:    the contents are not a readable PCM16 WAV.
    """
    return parse_wav_bytes(Path(path).read_bytes())
