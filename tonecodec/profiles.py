"""tonecodec — all codec constants, keyed in one place.

The synthesizer and the decoder both read from this module.  Changing a value
here changes both sides together; changing it on only one side breaks the
round trip.
"""

# ── sample stream ─────────────────────────────────────────────────────────────
SR             = 22_050      # sample rate (Hz)
CHAR_DURATION  = 0.18        # seconds of tone per character
GAP_DURATION   = 0.04        # seconds of silence after every character

CHAR_SAMPLES   = int(round(CHAR_DURATION * SR))   # 3969
GAP_SAMPLES    = int(round(GAP_DURATION * SR))    # 882
HOP_SAMPLES    = CHAR_SAMPLES + GAP_SAMPLES       # 4851 — one character slot

# ── tone shaping ──────────────────────────────────────────────────────────────
ENVELOPE_SECONDS = 0.01      # attack / release ramp (capped at 1/10 of the tone)
NORMALIZE_PEAK   = 0.95      # peak amplitude after buffer normalisation
PEAK_FLOOR       = 1e-6      # below this the buffer is treated as silent

# Buffer capacity floor.  synthesize() grows past this to fit the whole render.
BUFFER_SECONDS   = 60

# ── frequency table ───────────────────────────────────────────────────────────
#   a → 220 Hz, b → 236 Hz, … '9' → 780 Hz, ' ' → 796 Hz   (37 symbols, 16 Hz apart)
ALPHABET      = "abcdefghijklmnopqrstuvwxyz0123456789 "
FREQ_START    = 220.0
FREQ_STEP     = 16.0
FALLBACK_FREQ = 600.0        # any character outside ALPHABET

# ── decoding ──────────────────────────────────────────────────────────────────
SILENCE_ENERGY = 1e-5        # mean-square energy below which a window is skipped

# ── PCM ───────────────────────────────────────────────────────────────────────
PCM16_MAX = 32767


def build_freq_map(
    alphabet: str = ALPHABET,
    start: float = FREQ_START,
    step: float = FREQ_STEP,
) -> dict[str, float]:
    """Return the ordered character → frequency table ``start + index * step``."""
    return {ch: start + i * step for i, ch in enumerate(alphabet)}


FREQ_MAP: dict[str, float] = build_freq_map()

# Parallel views used by the decoder's candidate loop
FREQ_CHARS = list(FREQ_MAP.keys())
FREQ_VALUES = list(FREQ_MAP.values())


def char_to_freq(ch: str) -> float:
    """Case-insensitive table lookup; unknown characters get FALLBACK_FREQ."""
    return FREQ_MAP.get(ch.lower(), FALLBACK_FREQ)


def nearest_char(freq: float) -> str:
    """Map a frequency to the table entry numerically closest to it.

    Ties go to the entry that comes first in ALPHABET.
    """
    best, best_diff = FREQ_CHARS[0], float("inf")
    for ch, f in zip(FREQ_CHARS, FREQ_VALUES):
        d = abs(f - freq)
        if d < best_diff:
            best_diff = d
            best = ch
    return best
