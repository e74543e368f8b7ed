#!/usr/bin/env python3
"""
test_speechsim.py — command-line front end.

Tests:
  1. tts → asr through a real file
  2. selftest pass / fail reporting
  3. Error exits (missing input, unreadable input, no command)
"""
from __future__ import annotations

import sys

import pytest

import speechsim
from tonecodec.profiles import HOP_SAMPLES, SR


# ─────────────────────────────────────────────────────────────────────────────
# 1. tts / asr
# ─────────────────────────────────────────────────────────────────────────────

def test_tts_then_asr(tmp_path, capsys):
    out = tmp_path / 'hi.wav'
    assert speechsim.main(['tts', '--text', 'hi there', '--output', str(out)]) == 0
    assert out.exists()
    captured = capsys.readouterr()
    assert f'{8 * HOP_SAMPLES} samples @ {SR} Hz' in captured.out
    assert 'ToneCodec-Goertzel' in captured.err

    assert speechsim.main(['asr', '--input', str(out)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[-2] == 'Recognized text:'
    assert lines[-1] == 'hi there'


def test_tts_unwritable(tmp_path, capsys):
    out = tmp_path / 'no' / 'such' / 'dir.wav'
    assert speechsim.main(['tts', '--text', 'abc', '--output', str(out)]) == 1
    assert 'Could not write' in capsys.readouterr().err


# ─────────────────────────────────────────────────────────────────────────────
# 2. selftest
# ─────────────────────────────────────────────────────────────────────────────

def test_selftest_default_phrase(capsys):
    assert speechsim.main(['selftest']) == 0
    out = capsys.readouterr().out
    assert "Original:   'hello world'" in out
    assert "Recognized: 'helo world'" in out
    assert 'SELFTEST PASSED' in out


def test_selftest_custom_phrase(capsys):
    assert speechsim.main(['selftest', '--text', 'Test 123']) == 0
    assert 'SELFTEST PASSED' in capsys.readouterr().out


def test_selftest_reports_failure(monkeypatch, capsys):
    monkeypatch.setattr(speechsim, 'collapse_repeats', lambda s: 'something else')
    assert speechsim.main(['selftest', '--text', 'abc']) == 1
    assert 'SELFTEST FAILED' in capsys.readouterr().out


# ─────────────────────────────────────────────────────────────────────────────
# 3. Error exits
# ─────────────────────────────────────────────────────────────────────────────

def test_asr_missing_file(tmp_path, capsys):
    assert speechsim.main(['asr', '--input', str(tmp_path / 'missing.wav')]) == 1
    assert 'file_not_found' in capsys.readouterr().err


def test_asr_not_a_wav(tmp_path, capsys):
    bad = tmp_path / 'bad.wav'
    bad.write_bytes(b'OggS' + bytes(60))
    assert speechsim.main(['asr', '--input', str(bad)]) == 1
    assert 'format_error' in capsys.readouterr().err


def test_no_command_prints_help(capsys):
    assert speechsim.main([]) == 0
    assert 'usage' in capsys.readouterr().out.lower()


def test_tts_requires_text():
    with pytest.raises(SystemExit) as exc:
        speechsim.main(['tts', '--output', 'x.wav'])
    assert exc.value.code == 2


def test_unexpected_error_exit_code(monkeypatch, capsys):
    def boom(*_a, **_k):
        raise RuntimeError('kaboom')
    monkeypatch.setattr(speechsim, 'recognize_file', boom)
    assert speechsim.main(['asr', '--input', 'whatever.wav']) == 1
    assert 'kaboom' in capsys.readouterr().err


if __name__ == '__main__':
    sys.exit(pytest.main([__file__, '-v']))
