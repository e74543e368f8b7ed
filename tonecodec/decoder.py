"""tonecodec — tone bursts → text.

The sample stream is cut into fixed slots of HOP_SAMPLES; the first
CHAR_SAMPLES of each slot is the analysis window.  For every window that is
not silent:

  1. Goertzel magnitude at each table frequency → keep the strongest.
  2. Map that frequency to the nearest table entry → one character.

Goertzel works on the integer DFT bin nearest the target, so step 2 exists to
absorb that quantisation rather than comparing frequencies for equality.

The raw per-window string then has adjacent duplicates collapsed and edge
whitespace trimmed.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from scipy.signal import lfilter

from .profiles import (
    CHAR_DURATION, GAP_DURATION, SILENCE_ENERGY,
    FREQ_VALUES, nearest_char,
)


@dataclass
class ScanReport:
    """Per-window scan outcome before post-processing."""

    raw_text:        str = ""
    windows_scanned: int = 0
    windows_silent:  int = 0

    @property
    def text(self) -> str:
        return collapse_repeats(self.raw_text).strip()


# ── spectral primitives ───────────────────────────────────────────────────────

def goertzel_magnitude(window: NDArray, sr: int, target_hz: float) -> float:
    """Single-bin DFT magnitude of *window* at the bin nearest *target_hz*.

    The recurrence  q0 = x[n] + c·q1 − q2  is the IIR filter b=[1],
    a=[1, −c, 1]; lfilter runs it and its last two outputs are q1, q2.
    """
    N = len(window)
    if N == 0:
        return 0.0
    k      = int(0.5 + N * target_hz / sr)
    omega  = 2.0 * np.pi * k / N
    cosine = np.cos(omega)
    sine   = np.sin(omega)
    coeff  = 2.0 * cosine

    y  = lfilter([1.0], [1.0, -coeff, 1.0], np.asarray(window, dtype=np.float64))
    q1 = float(y[-1])
    q2 = float(y[-2]) if N > 1 else 0.0

    real = q1 - q2 * cosine
    imag = q2 * sine
    return float(np.sqrt(real * real + imag * imag))


def window_energy(window: NDArray) -> float:
    """Mean-square energy."""
    if len(window) == 0:
        return 0.0
    x = np.asarray(window, dtype=np.float64)
    return float(np.mean(x * x))


def best_frequency(window: NDArray, sr: int) -> tuple[float, float]:
    """Return (frequency, magnitude) of the strongest table frequency.

    Ties keep the earlier table entry.
    """
    best_freq, best_mag = 0.0, 0.0
    for f in FREQ_VALUES:
        mag = goertzel_magnitude(window, sr, f)
        if mag > best_mag:
            best_mag  = mag
            best_freq = f
    return best_freq, best_mag


def collapse_repeats(text: str) -> str:
    """Collapse runs of the same character: "aab" → "ab", "aba" stays."""
    if not text:
        return text
    out = [text[0]]
    for ch in text[1:]:
        if ch != out[-1]:
            out.append(ch)
    return "".join(out)


# ── window scan ───────────────────────────────────────────────────────────────

def scan(samples: NDArray, sample_rate: int) -> ScanReport:
    """Walk the analysis windows and emit one character per non-silent window."""
    samples  = np.asarray(samples, dtype=np.float32)
    window_n = int(round(CHAR_DURATION * sample_rate))
    hop      = window_n + int(round(GAP_DURATION * sample_rate))

    report = ScanReport()
    if window_n <= 0:
        return report

    chars: list[str] = []
    offset = 0
    while offset + window_n <= len(samples):
        window = samples[offset:offset + window_n]
        offset += hop
        report.windows_scanned += 1

        if window_energy(window) < SILENCE_ENERGY:
            report.windows_silent += 1
            continue

        freq, _mag = best_frequency(window, sample_rate)
        chars.append(nearest_char(freq))

    report.raw_text = "".join(chars)
    return report


def recognize(samples: NDArray, sample_rate: int) -> str:
    """Decode float samples to text.  Silent or empty input gives ``""``."""
    return scan(samples, sample_rate).text
