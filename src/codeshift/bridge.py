"""Conversions involving variable-length encodings, pivoting through UTF-8.

Each encoding only needs a mapping to and from Unicode; any pair is served by
decoding the source into UTF-8 and encoding the UTF-8 into the target.  The
steps are:

* single-byte -> UTF-8: decode every byte through the source character map.
* UTF-8 -> single-byte: parse UTF-8 strictly, then reverse-look up each
  character in the target character map.
* UTF-16 -> UTF-8 and UTF-8 -> UTF-16, honouring the declared byte order.

Anything else is a composition of two of these steps.
"""

from __future__ import annotations

import codecs

from codeshift.catalog import decoding_table_for, reverse_map_for
from codeshift.enums import Encoding
from codeshift.errors import (
    InvalidInputError,
    UnmappableSourceError,
    UnmappableTargetError,
)

PIVOT = Encoding.UTF8

_UTF16_CODECS: dict[Encoding, str] = {
    Encoding.UTF16LE: "utf-16-le",
    Encoding.UTF16BE: "utf-16-be",
}


def _is_utf16(encoding: Encoding) -> bool:
    return encoding in _UTF16_CODECS


def parse_utf8(data: bytes) -> str:
    """Decode *data* as strict UTF-8.

    :raises InvalidInputError: On any malformed sequence.
    """
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        msg = f"Invalid UTF-8 sequence at byte {e.start}"
        raise InvalidInputError(msg) from None


def single_byte_to_utf8(data: bytes, encoding: Encoding) -> bytes:
    """Decode *data* through the character map of *encoding* into UTF-8.

    :raises UnmappableSourceError: For the first byte with no character.
    """
    try:
        text, _ = codecs.charmap_decode(data, "strict", decoding_table_for(encoding))
    except UnicodeDecodeError as e:
        raise UnmappableSourceError(data[e.start], e.start) from None
    return text.encode("utf-8")


def utf8_to_single_byte(data: bytes, encoding: Encoding) -> bytes:
    """Encode UTF-8 *data* into *encoding* through its reverse character map.

    :raises InvalidInputError: If *data* is not valid UTF-8.
    :raises UnmappableTargetError: For the first character with no byte in
        *encoding*; the position is the character's byte offset in *data*.
    """
    text = parse_utf8(data)
    try:
        encoded, _ = codecs.charmap_encode(text, "strict", reverse_map_for(encoding))
    except UnicodeEncodeError as e:
        position = len(text[: e.start].encode("utf-8"))
        raise UnmappableTargetError(text[e.start], position) from None
    return encoded


def utf16_to_utf8(data: bytes, encoding: Encoding) -> bytes:
    """Decode UTF-16 *data* in the byte order of *encoding* into UTF-8.

    :raises InvalidInputError: For odd-length input or broken surrogates.
    """
    if len(data) % 2 != 0:
        msg = "UTF-16 data must have even number of bytes"
        raise InvalidInputError(msg)
    try:
        text = data.decode(_UTF16_CODECS[encoding])
    except UnicodeDecodeError:
        msg = "Invalid UTF-16 sequence"
        raise InvalidInputError(msg) from None
    return text.encode("utf-8")


def utf8_to_utf16(data: bytes, encoding: Encoding) -> bytes:
    """Encode UTF-8 *data* as UTF-16 in the byte order of *encoding*."""
    return parse_utf8(data).encode(_UTF16_CODECS[encoding])


class MultiByteBridge:
    """Converter for any pair where at least one side is variable-length.

    Stateless and immutable after construction.
    """

    __slots__ = ("_from", "_to")

    def __init__(self, from_encoding: Encoding, to_encoding: Encoding) -> None:
        self._from = from_encoding
        self._to = to_encoding

    def __repr__(self) -> str:
        return f"MultiByteBridge({self._from.canonical_name!r} -> {self._to.canonical_name!r})"

    @property
    def from_encoding(self) -> Encoding:
        return self._from

    @property
    def to_encoding(self) -> Encoding:
        return self._to

    def to_pivot(self, data: bytes) -> bytes:
        """Convert *data* from the source encoding into UTF-8."""
        if self._from is PIVOT:
            parse_utf8(data)
            return data
        if _is_utf16(self._from):
            return utf16_to_utf8(data, self._from)
        return single_byte_to_utf8(data, self._from)

    def from_pivot(self, data: bytes) -> bytes:
        """Convert UTF-8 *data* into the target encoding."""
        if self._to is PIVOT:
            parse_utf8(data)
            return data
        if _is_utf16(self._to):
            return utf8_to_utf16(data, self._to)
        return utf8_to_single_byte(data, self._to)

    def convert(self, data: bytes | bytearray | memoryview) -> bytes:
        """Convert *data* from the source to the target encoding.

        :raises UnmappableSourceError: A source byte has no character.
        :raises UnmappableTargetError: A character has no target byte.
        :raises InvalidInputError: The input is malformed UTF-8/UTF-16.
        """
        data = bytes(data)
        if self._from is self._to and _is_utf16(self._from):
            return data
        if self._from is PIVOT:
            return self.from_pivot(data)
        if self._to is PIVOT:
            return self.to_pivot(data)
        return self.from_pivot(self.to_pivot(data))
