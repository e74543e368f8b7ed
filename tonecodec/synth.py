"""tonecodec — text → tone bursts.

Each character becomes CHAR_DURATION seconds of sine at its table frequency,
shaped by a short linear attack/release, followed by GAP_DURATION seconds of
silence.  Every burst starts at phase 0.
"""

import numpy as np
from numpy.typing import NDArray

from .buffer import SampleBuffer
from .profiles import (
    SR, CHAR_SAMPLES, GAP_SAMPLES,
    ENVELOPE_SECONDS, NORMALIZE_PEAK, BUFFER_SECONDS,
    char_to_freq,
)


def tone(freq: float, n_samples: int, sr: int = SR) -> NDArray[np.float32]:
    """Sine at *freq* Hz for *n_samples* samples, starting from phase 0."""
    phase = (2.0 * np.pi * freq / sr) * np.arange(n_samples, dtype=np.float64)
    return np.sin(phase).astype(np.float32)


def apply_envelope(samples: NDArray[np.float32], sr: int = SR) -> NDArray[np.float32]:
    """Linear fade-in / fade-out over min(10 ms, len/10) samples, in place."""
    n      = len(samples)
    attack = min(int(ENVELOPE_SECONDS * sr), n // 10)
    if attack > 0:
        ramp = (np.arange(attack, dtype=np.float64) / attack).astype(np.float32)
        samples[:attack]     *= ramp
        samples[n - attack:] *= ramp[::-1]
    return samples


def render(text: str) -> NDArray[np.float32]:
    """Concatenate one enveloped burst plus one gap per character (not normalised)."""
    if not text:
        return np.zeros(0, dtype=np.float32)

    gap = np.zeros(GAP_SAMPLES, dtype=np.float32)
    segments: list[NDArray[np.float32]] = []
    for ch in text:
        burst = apply_envelope(tone(char_to_freq(ch), CHAR_SAMPLES))
        segments.append(burst)
        segments.append(gap)
    return np.concatenate(segments)


def synthesize(text: str) -> NDArray[np.float32]:
    """Encode *text* to float32 mono samples at SR, peak-normalised.

    Args:
        text: Any string.  Matching is case-insensitive; characters outside
              the alphabet are rendered at FALLBACK_FREQ.

    Returns:
        float32 ndarray of ``len(text) * HOP_SAMPLES`` samples with peak
        NORMALIZE_PEAK (empty for empty text).
    """
    raw = render(text)

    # Sized to the whole render so no leading samples are evicted
    buf = SampleBuffer(max(BUFFER_SECONDS * SR, len(raw)))
    buf.push_all(raw)
    buf.normalize(NORMALIZE_PEAK)
    return buf.drain_all()
