# tests/test_utf8.py
from __future__ import annotations

import pytest

from codeshift.enums import Encoding
from codeshift.pipeline.utf8 import score_utf8


def test_ascii_only_scores_half():
    result = score_utf8(b"Hello world")
    assert result is not None
    assert result.encoding is Encoding.UTF8
    assert result.confidence == 0.5


def test_empty_scores_half():
    result = score_utf8(b"")
    assert result is not None
    assert result.confidence == 0.5


def test_multibyte_share_raises_confidence():
    data = "héllo".encode()
    result = score_utf8(data)
    assert result is not None
    assert result.confidence == pytest.approx(0.7 + 0.3 * 2 / 6)


def test_all_multibyte():
    result = score_utf8("日本語".encode())
    assert result is not None
    assert result.confidence == pytest.approx(1.0)


def test_four_byte_sequence():
    result = score_utf8("a😀".encode())
    assert result is not None
    assert result.confidence == pytest.approx(0.7 + 0.3 * 4 / 5)


@pytest.mark.parametrize(
    "data",
    [
        b"\xc0\xaf",  # overlong 2-byte
        b"\xc1\x81",  # overlong 2-byte
        b"\xe0\x80\xaf",  # overlong 3-byte
        b"\xf0\x80\x80\xaf",  # overlong 4-byte
        b"\xed\xa0\x80",  # surrogate
        b"\xf4\x90\x80\x80",  # above U+10FFFF
        b"\xf5\x80\x80\x80",  # invalid lead
        b"\x80abc",  # stray continuation
        b"\xc3\x28",  # bad continuation
        b"ab\xe2\x82",  # truncated final sequence
        b"caf\xe9",  # Latin-1
    ],
)
def test_structural_violations_disqualify(data: bytes):
    assert score_utf8(data) is None


def test_max_code_point_is_valid():
    assert score_utf8(b"\xf4\x8f\xbf\xbf") is not None
