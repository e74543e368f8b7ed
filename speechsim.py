#!/usr/bin/env python3
"""
speechsim.py — simulated TTS / ASR round trip over WAV.

Commands:
  tts       --text T --output F   Encode text as tone bursts into a WAV file
  asr       --input F             Decode a tone-burst WAV back to text
  selftest  [--text T]            Synthesize → recognize → compare

Run `python3 speechsim.py --help` for full usage.
"""
from __future__ import annotations

import argparse
import os
import sys
import tempfile
from pathlib import Path

from tonecodec import (
    collapse_repeats,
    recognize_file,
    synthesize_to_file,
)
from tonecodec.profiles import SR, HOP_SAMPLES

PROVIDER_NAME = 'ToneCodec-Goertzel'


# ─────────────────────────────────────────────────────────────────────────────
# Sub-command handlers
# ─────────────────────────────────────────────────────────────────────────────

def cmd_tts(args: argparse.Namespace) -> int:
    print(f'→ TTS provider: {PROVIDER_NAME}', file=sys.stderr)
    if not synthesize_to_file(args.text, args.output):
        print(f'✗ Could not write {args.output}', file=sys.stderr)
        return 1
    n = len(args.text) * HOP_SAMPLES
    size_kb = os.path.getsize(args.output) / 1024
    print(f'✓ Saved: {args.output}  ({n} samples @ {SR} Hz, {size_kb:.1f} KB)')
    return 0


def cmd_asr(args: argparse.Namespace) -> int:
    print(f'→ ASR provider: {PROVIDER_NAME}', file=sys.stderr)
    result = recognize_file(args.input)
    if not result.success:
        print(f'✗ {result.failure.value}: {result.detail}', file=sys.stderr)
        return 1
    print(f'  {result.summary()}', file=sys.stderr)
    print('Recognized text:')
    print(result.text)
    return 0


def cmd_selftest(args: argparse.Namespace) -> int:
    text = args.text
    print('→ Running self test…', file=sys.stderr)

    # Adjacent repeats collapse by construction, so compare against that form
    expected = collapse_repeats(text.lower()).strip()

    fd, path = tempfile.mkstemp(suffix='.wav', prefix='speechsim_selftest_')
    os.close(fd)
    try:
        if not synthesize_to_file(text, path):
            print(f'✗ Could not write {path}', file=sys.stderr)
            return 1
        result = recognize_file(path)
    finally:
        Path(path).unlink(missing_ok=True)

    recognized = result.text if result.success else None
    print(f"Original:   '{text}'")
    print(f"Recognized: '{recognized}'")
    if recognized == expected:
        print('SELFTEST PASSED')
        return 0
    print(f"SELFTEST FAILED (expected '{expected}')")
    return 1


# ─────────────────────────────────────────────────────────────────────────────
# Argument parser
# ─────────────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog='speechsim',
        description='Tone-burst text ⇄ WAV codec standing in for a TTS/ASR pair.',
    )
    sub = p.add_subparsers(dest='command')

    tts = sub.add_parser('tts', help='Encode text to a tone-burst WAV.')
    tts.add_argument('--text', required=True, help='Text to encode')
    tts.add_argument('--output', '-o', required=True, help='Output WAV path')
    tts.set_defaults(func=cmd_tts)

    asr = sub.add_parser('asr', help='Decode a tone-burst WAV to text.')
    asr.add_argument('--input', '-i', required=True, help='Input WAV path')
    asr.set_defaults(func=cmd_asr)

    st = sub.add_parser('selftest', help='Round-trip a phrase through a temp WAV.')
    st.add_argument('--text', default='hello world',
                    help="Phrase to round-trip (default: 'hello world')")
    st.set_defaults(func=cmd_selftest)

    return p


# ─────────────────────────────────────────────────────────────────────────────
# Entry point
# ─────────────────────────────────────────────────────────────────────────────

def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args   = parser.parse_args(argv)

    if getattr(args, 'func', None) is None:
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print('\n⚠ Interrupted.', file=sys.stderr)
        return 130
    except Exception as e:
        print(f'✗ Error: {e}', file=sys.stderr)
        if os.environ.get('SPEECHSIM_DEBUG'):
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
