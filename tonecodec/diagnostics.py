"""tonecodec — error types, failure codes and the recognition result type."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ToneCodecError(Exception):
    """Base class for errors raised by the tone codec."""


class WavFormatError(ToneCodecError, ValueError):
    """The input is not a WAV container this codec can read.

    Raised for a missing RIFF/WAVE magic, a missing data chunk, a truncated
    chunk, or sample data that is not 16-bit PCM.
    """


class FailureCode(str, Enum):
    """Reason a recognition attempt did not produce text."""

    OK             = "ok"
    FILE_NOT_FOUND = "file_not_found"   # path does not exist
    FORMAT_ERROR   = "format_error"     # bad magic / missing data chunk / truncated
    IO_ERROR       = "io_error"         # read failed at the filesystem boundary


@dataclass
class RecognizeResult:
    """Full recognition outcome returned by :func:`tonecodec.recognize_file`.

    On success  : ``success=True``,  ``text`` is the decoded transcript
                  (possibly empty for silent audio).
    On failure  : ``success=False``, ``failure`` explains why, ``text`` is None.
    """

    success:         bool
    text:            Optional[str]         = None
    failure:         Optional[FailureCode] = None
    detail:          Optional[str]         = None    # exception message on failure

    # Diagnostics — 0 / None when the file never got as far as decoding
    sample_rate:     Optional[int]  = None
    samples_read:    int            = 0
    windows_scanned: int            = 0
    windows_silent:  int            = 0
    raw_text:        Optional[str]  = None    # per-window characters before collapsing

    def summary(self) -> str:
        if self.success:
            chars = len(self.text) if self.text else 0
            return (
                f"[OK] {chars} chars decoded  "
                f"windows={self.windows_scanned} silent={self.windows_silent} "
                f"sr={self.sample_rate}"
            )
        return f"[FAIL:{self.failure.value}]  {self.detail or ''}".rstrip()

    def __repr__(self) -> str:
        return f"RecognizeResult({self.summary()})"
