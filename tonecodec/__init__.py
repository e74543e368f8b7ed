"""tonecodec — text ⇄ tone-burst audio over PCM16 WAV.

Public API:
    synthesize(text)                      -> np.ndarray (float32, 22.05 kHz)
    recognize(samples, sample_rate)       -> str
    synthesize_to_file(text, path)        -> bool
    recognize_file(path)                  -> RecognizeResult
    recognize_from_file(path)             -> str | None
"""

from .api import (
    synthesize_to_file, recognize_file, recognize_from_file,
    synthesize_to_file_async, recognize_from_file_async,
)
from .buffer import SampleBuffer
from .decoder import recognize, collapse_repeats
from .diagnostics import (
    FailureCode, RecognizeResult, ToneCodecError, WavFormatError,
)
from .synth import synthesize
from .wavio import parse_wav, write_wav16, float_to_pcm16

__version__ = "1.0.0"
__all__ = [
    "synthesize", "recognize", "collapse_repeats",
    "synthesize_to_file", "recognize_file", "recognize_from_file",
    "synthesize_to_file_async", "recognize_from_file_async",
    "SampleBuffer", "parse_wav", "write_wav16", "float_to_pcm16",
    "FailureCode", "RecognizeResult", "ToneCodecError", "WavFormatError",
]
