# tests/test_translator.py
from __future__ import annotations

import itertools

import pytest

from codeshift.bridge import MultiByteBridge
from codeshift.enums import Encoding
from codeshift.errors import UnmappableSourceError, UnsupportedConversionError
from codeshift.table import TranslationTable
from codeshift.translator import Translator

_ASCII = bytes(range(0x80))


def test_single_byte_pair_uses_table():
    translator = Translator(Encoding.CP_437, Encoding.ISO_8859_1)
    assert isinstance(translator.backing, TranslationTable)


def test_multibyte_pair_uses_bridge():
    assert isinstance(Translator(Encoding.UTF8, Encoding.CP_437).backing, MultiByteBridge)
    assert isinstance(Translator(Encoding.CP_437, Encoding.UTF16LE).backing, MultiByteBridge)
    assert isinstance(Translator(Encoding.SHIFT_JIS, Encoding.ASCII).backing, MultiByteBridge)


def test_accepts_names():
    translator = Translator("ebcdic037", "utf8")
    assert translator.from_encoding is Encoding.EBCDIC_037
    assert translator.to_encoding is Encoding.UTF8
    assert translator.convert(b"\xc8\xc9") == b"HI"


def test_unknown_name():
    with pytest.raises(LookupError):
        Translator("nonsense", "utf-8")


def test_ascii_round_trip_for_every_ascii_compatible_pair():
    compatible = [enc for enc in Encoding if enc.is_ascii_compatible]
    for a, b in itertools.product(compatible, repeat=2):
        there = Translator(a, b).convert(_ASCII)
        back = Translator(b, a).convert(there)
        assert back == _ASCII, f"{a} -> {b}"


def test_convert_in_place(bulk: bool):
    translator = Translator(Encoding.ISO_8859_1, Encoding.EBCDIC_037, bulk=bulk)
    buffer = bytearray(b"HELLO")
    translator.convert_in_place(buffer)
    assert buffer == bytearray(b"\xc8\xc5\xd3\xd3\xd6")


def test_convert_in_place_requires_table():
    translator = Translator(Encoding.UTF8, Encoding.UTF16LE)
    with pytest.raises(UnsupportedConversionError) as exc_info:
        translator.convert_in_place(bytearray(b"Hi"))
    assert str(exc_info.value) == "Unsupported conversion from UTF-8 to UTF-16LE"


def test_convert_fails_fast():
    with pytest.raises(UnmappableSourceError):
        Translator(Encoding.WINDOWS_1252, Encoding.ISO_8859_1).convert(b"\x80\x81")


def test_convert_lossy_table_replaces_each_byte():
    translator = Translator(Encoding.WINDOWS_1252, Encoding.ISO_8859_1)
    assert translator.convert_lossy(b"a\x80b") == b"a?b"
    assert translator.convert_lossy(b"a\x80b", ord("_")) == b"a_b"


def test_convert_lossy_bridge_replaces_whole_output():
    translator = Translator(Encoding.UTF8, Encoding.ISO_8859_1)
    data = "a€".encode()
    assert translator.convert_lossy(data) == b"?" * len(data)


def test_convert_lossy_bridge_success_is_exact():
    translator = Translator(Encoding.UTF8, Encoding.ISO_8859_1)
    assert translator.convert_lossy("é".encode()) == b"\xe9"


def test_convert_lossy_validates_replacement():
    with pytest.raises(ValueError, match="replacement"):
        Translator(Encoding.UTF8, Encoding.ASCII).convert_lossy(b"x", 300)


def test_repr():
    assert repr(Translator(Encoding.CP_437, Encoding.UTF8)) == "Translator('CP437' -> 'UTF-8')"
