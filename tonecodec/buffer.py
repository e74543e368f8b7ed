"""tonecodec — bounded FIFO sample buffer with peak normalisation.

Pushing past capacity silently evicts the oldest sample.  No operation raises
once the buffer exists.
"""

from collections import deque
from typing import Iterable

import numpy as np
from numpy.typing import NDArray

from .profiles import NORMALIZE_PEAK, PEAK_FLOOR


class SampleBuffer:
    """Ordered float32 samples with a fixed maximum length."""

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._capacity = int(capacity)
        self._queue: deque[float] = deque(maxlen=self._capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._queue)

    def push(self, sample: float) -> None:
        """Append one sample, dropping the oldest when full."""
        self._queue.append(float(np.float32(sample)))

    def push_all(self, samples: Iterable[float]) -> None:
        """Push every sample in order."""
        arr = np.asarray(samples, dtype=np.float32).ravel()
        # deque(maxlen) evicts from the left exactly as repeated push() would
        self._queue.extend(arr.tolist())

    def samples(self) -> NDArray[np.float32]:
        """Snapshot of the buffered samples (the buffer is left untouched)."""
        return np.array(self._queue, dtype=np.float32)

    def peak(self) -> float:
        if not self._queue:
            return 0.0
        return float(np.max(np.abs(self.samples())))

    def normalize(self, target_peak: float = NORMALIZE_PEAK) -> NDArray[np.float32]:
        """Rescale in place so the largest |sample| equals *target_peak*.

        Every result is clamped to [-1, 1].  Leaves the buffer unchanged and
        returns an empty array if it is empty or its peak is below PEAK_FLOOR.

        Returns:
            float32 copy of the normalised contents.
        """
        if not self._queue:
            return np.zeros(0, dtype=np.float32)
        arr  = self.samples()
        peak = float(np.max(np.abs(arr)))
        if peak < PEAK_FLOOR:
            return np.zeros(0, dtype=np.float32)
        # Already at the target: rescaling again would only move samples by an ulp
        if np.isclose(peak, target_peak, rtol=1e-6, atol=0.0):
            return arr

        scale = np.float32(target_peak / peak)
        arr   = np.clip(arr * scale, -1.0, 1.0).astype(np.float32)

        self._queue.clear()
        self._queue.extend(arr.tolist())
        return arr

    def drain_all(self) -> NDArray[np.float32]:
        """Return the contents and empty the buffer."""
        arr = self.samples()
        self._queue.clear()
        return arr

    def clear(self) -> None:
        self._queue.clear()

    def __repr__(self) -> str:
        return f"SampleBuffer({len(self)}/{self._capacity})"
