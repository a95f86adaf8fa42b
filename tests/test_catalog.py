# tests/test_catalog.py
from __future__ import annotations

import codecs

from codeshift.catalog import (
    UNDEFINED,
    chars_for,
    codec_name_for,
    decoding_table_for,
    reverse_map_for,
)
from codeshift.enums import Encoding


def test_every_encoding_has_a_registered_codec():
    for enc in Encoding:
        codecs.lookup(codec_name_for(enc))


def test_maps_are_total():
    for enc in Encoding:
        chars = chars_for(enc)
        assert len(chars) == 256
        assert all(c is None or 0 <= c <= 0x10FFFF for c in chars)


def test_maps_are_cached():
    assert chars_for(Encoding.CP_437) is chars_for(Encoding.CP_437)
    assert reverse_map_for(Encoding.CP_437) is reverse_map_for(Encoding.CP_437)


def test_ebcdic_letters():
    chars = chars_for(Encoding.EBCDIC_037)
    assert chars[0xC1] == ord("A")
    assert chars[0x81] == ord("a")
    assert chars[0xF0] == ord("0")
    assert chars[0x40] == ord(" ")


def test_ebcdic_pages_from_ebcdic_package():
    assert chars_for(Encoding.EBCDIC_1047)[0xC1] == ord("A")
    assert chars_for(Encoding.EBCDIC_285)[0xC1] == ord("A")
    assert chars_for(Encoding.EBCDIC_297)[0xF1] == ord("1")


def test_ascii_high_half_is_undefined():
    chars = chars_for(Encoding.ASCII)
    assert all(chars[b] == b for b in range(0x80))
    assert all(chars[b] is None for b in range(0x80, 0x100))


def test_utf8_map_is_ascii_portion():
    chars = chars_for(Encoding.UTF8)
    assert chars[0x41] == 0x41
    assert all(chars[b] is None for b in range(0x80, 0x100))


def test_utf16_maps_are_empty():
    assert all(c is None for c in chars_for(Encoding.UTF16LE))
    assert all(c is None for c in chars_for(Encoding.UTF16BE))


def test_windows_1252_known_points():
    chars = chars_for(Encoding.WINDOWS_1252)
    assert chars[0x80] == 0x20AC
    assert chars[0x99] == 0x2122
    assert chars[0x81] is None


def test_reverse_map_is_consistent_with_forward_map():
    for enc in (Encoding.CP_437, Encoding.EBCDIC_037, Encoding.WINDOWS_1251):
        chars = chars_for(enc)
        for scalar, byte in reverse_map_for(enc).items():
            assert chars[byte] == scalar
            assert byte == chars.index(scalar)


def test_decoding_table():
    table = decoding_table_for(Encoding.ASCII)
    assert len(table) == 256
    assert table[0x41] == "A"
    assert table[0x80] == UNDEFINED
    text, consumed = codecs.charmap_decode(b"Hi", "strict", table)
    assert (text, consumed) == ("Hi", 2)
