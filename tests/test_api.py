# tests/test_api.py
from __future__ import annotations

import pytest

import codeshift
from codeshift import Encoding, UnmappableSourceError, UnmappableTargetError


def test_version():
    assert isinstance(codeshift.__version__, str)


def test_detect_returns_dict():
    result = codeshift.detect(b"Hello world")
    assert result["encoding"] == "US-ASCII"
    assert result["confidence"] == 0.8
    assert result["bom_detected"] is False
    assert result["candidates"][0] == {"encoding": "US-ASCII", "confidence": 0.8}


def test_detect_bom():
    result = codeshift.detect(b"\xef\xbb\xbfHello")
    assert result["encoding"] == "UTF-8"
    assert result["confidence"] == 1.0
    assert result["bom_detected"] is True


def test_detect_bytearray():
    assert codeshift.detect(bytearray(b"Hello"))["encoding"] == "US-ASCII"


def test_detect_language_hint():
    data = "Größe".encode("iso-8859-1")
    plain = codeshift.detect(data)
    hinted = codeshift.detect(data, language="german")
    assert hinted["encoding"] == plain["encoding"] == "ISO-8859-1"
    assert hinted["confidence"] > plain["confidence"]


def test_detect_max_bytes_validation():
    with pytest.raises(ValueError, match="max_bytes"):
        codeshift.detect(b"abc", max_bytes=0)


def test_detect_all_orders_candidates():
    results = codeshift.detect_all(b"caf\xe9 \xa4")
    confidences = [r["confidence"] for r in results]
    assert confidences == sorted(confidences, reverse=True)
    assert results[0]["encoding"] == codeshift.detect(b"caf\xe9 \xa4")["encoding"]


def test_detect_all_is_never_empty():
    results = codeshift.detect_all(b"\x90")
    assert results == [{"encoding": "US-ASCII", "confidence": 0.5}]


def test_detect_all_first_entry_reflects_hint():
    results = codeshift.detect_all(b"Hello world", language="en")
    assert results[0]["confidence"] == pytest.approx(0.96)
    assert results[1] == {"encoding": "UTF-8", "confidence": 0.5}


def test_convert_strict():
    assert codeshift.convert(b"\xc8\xc5\xd3\xd3\xd6", "ibm037", "utf-8") == b"HELLO"
    assert codeshift.convert("é".encode(), Encoding.UTF8, Encoding.ISO_8859_1) == b"\xe9"


def test_convert_strict_raises():
    with pytest.raises(UnmappableSourceError):
        codeshift.convert(b"\x80", "windows-1252", "latin1")
    with pytest.raises(UnmappableTargetError):
        codeshift.convert("€".encode(), "utf8", "latin1")


def test_convert_replace():
    assert codeshift.convert(b"a\x80", "cp1252", "latin1", errors="replace") == b"a?"
    assert (
        codeshift.convert(b"a\x80", "cp1252", "latin1", errors="replace", replacement=0x2A)
        == b"a*"
    )


def test_convert_unknown_errors_mode():
    with pytest.raises(ValueError, match="errors"):
        codeshift.convert(b"a", "ascii", "utf8", errors="ignore")


def test_public_names():
    for name in codeshift.__all__:
        assert hasattr(codeshift, name)
