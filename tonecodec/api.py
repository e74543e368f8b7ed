"""tonecodec — caller-facing file operations.

synthesize_to_file(text, output_path) -> bool
recognize_file(path)                  -> RecognizeResult
recognize_from_file(path)             -> str | None

Pipeline
========

Synthesize
----------
  text
    → per-character tone bursts + gaps              (synth.render)
    → SampleBuffer → normalise to NORMALIZE_PEAK     (synth.synthesize)
    → clamp + scale to int16                         (wavio.float_to_pcm16)
    → 44-byte RIFF header + PCM payload → file       (wavio.write_wav16)

Recognize
---------
  file
    → RIFF/WAVE check, chunk walk to "data"          (wavio.parse_wav)
    → int16 / 32767 → float32
    → windowed Goertzel scan                         (decoder.scan)
    → collapse adjacent repeats + trim               (decoder.collapse_repeats)

Failures never escape these functions: synthesis reports False, recognition a
RecognizeResult with a FailureCode.  The ``*_async`` variants run the same
synchronous code in a worker thread.
"""

import asyncio
import os

from .decoder import scan
from .diagnostics import FailureCode, RecognizeResult, WavFormatError
from .profiles import SR
from .synth import synthesize
from .wavio import float_to_pcm16, parse_wav, write_wav16


# ── synthesize ────────────────────────────────────────────────────────────────

def synthesize_to_file(text: str, output_path) -> bool:
    """Encode *text* and write it to *output_path* as a PCM16 mono WAV.

    Returns:
        True once the file is written, False if the write failed.
    """
    pcm = float_to_pcm16(synthesize(text or ""))
    try:
        write_wav16(output_path, SR, pcm)
    except OSError:
        return False
    return True


# ── recognize ─────────────────────────────────────────────────────────────────

def recognize_file(path: str | os.PathLike) -> RecognizeResult:
    """Decode a WAV file produced by :func:`synthesize_to_file`.

    Returns:
        :class:`RecognizeResult` — check ``.success`` before using ``.text``.
    """
    if not path or not os.path.exists(path):
        return RecognizeResult(
            success=False,
            failure=FailureCode.FILE_NOT_FOUND,
            detail=f"No such file: {path}",
        )

    try:
        sample_rate, _bits, samples = parse_wav(path)
    except WavFormatError as exc:
        return RecognizeResult(
            success=False,
            failure=FailureCode.FORMAT_ERROR,
            detail=str(exc),
        )
    except FileNotFoundError as exc:
        # Removed between the existence check and the read
        return RecognizeResult(
            success=False,
            failure=FailureCode.FILE_NOT_FOUND,
            detail=str(exc),
        )
    except OSError as exc:
        return RecognizeResult(
            success=False,
            failure=FailureCode.IO_ERROR,
            detail=str(exc),
        )

    report = scan(samples, sample_rate)
    return RecognizeResult(
        success=True,
        text=report.text,
        failure=FailureCode.OK,
        sample_rate=sample_rate,
        samples_read=len(samples),
        windows_scanned=report.windows_scanned,
        windows_silent=report.windows_silent,
        raw_text=report.raw_text,
    )


def recognize_from_file(path) -> str | None:
    """Decoded text, or None if the file is missing or unreadable."""
    result = recognize_file(path)
    return result.text if result.success else None


# ── async veneers ─────────────────────────────────────────────────────────────

async def synthesize_to_file_async(text: str, output_path) -> bool:
    return await asyncio.to_thread(synthesize_to_file, text, output_path)


async def recognize_from_file_async(path) -> str | None:
    return await asyncio.to_thread(recognize_from_file, path)
