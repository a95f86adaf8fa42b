"""Translator — the conversion facade, and its streaming wrapper."""

from __future__ import annotations

import logging
from typing import BinaryIO

from codeshift._utils import (
    DEFAULT_BUFFER_SIZE,
    DEFAULT_REPLACEMENT,
    _as_encoding,
    _validate_buffer_size,
    _validate_replacement,
)
from codeshift.bridge import MultiByteBridge
from codeshift.enums import Encoding
from codeshift.errors import (
    CodeshiftError,
    UnmappableSourceError,
    UnmappableTargetError,
    UnsupportedConversionError,
)
from codeshift.table import Buffer, TranslationTable

logger = logging.getLogger(__name__)


class Translator:
    """Converter between two encodings.

    Backed by exactly one engine: a :class:`~codeshift.bridge.MultiByteBridge`
    when either side is multibyte, otherwise a
    :class:`~codeshift.table.TranslationTable`.  Immutable after
    construction, so one instance may be shared between threads.

    :param from_encoding: Source encoding, as an :class:`Encoding` or a name.
    :param to_encoding: Target encoding, as an :class:`Encoding` or a name.
    :param bulk: Kernel selection for table-backed conversion; see
        :class:`~codeshift.table.TranslationTable`.
    """

    __slots__ = ("_backing", "_from", "_to")

    def __init__(
        self,
        from_encoding: Encoding | str,
        to_encoding: Encoding | str,
        *,
        bulk: bool | None = None,
    ) -> None:
        self._from = _as_encoding(from_encoding)
        self._to = _as_encoding(to_encoding)
        self._backing: TranslationTable | MultiByteBridge
        if self._from.is_multibyte or self._to.is_multibyte:
            self._backing = MultiByteBridge(self._from, self._to)
        else:
            self._backing = TranslationTable(self._from, self._to, bulk=bulk)
        logger.debug("Translator %s -> %s backed by %r", self._from, self._to, self.backing)

    def __repr__(self) -> str:
        return f"Translator({self._from.canonical_name!r} -> {self._to.canonical_name!r})"

    @property
    def from_encoding(self) -> Encoding:
        return self._from

    @property
    def to_encoding(self) -> Encoding:
        return self._to

    @property
    def backing(self) -> TranslationTable | MultiByteBridge:
        """The engine performing conversions."""
        return self._backing

    def convert(self, data: bytes | bytearray | memoryview) -> bytes:
        """Convert *data* from the source to the target encoding.

        Fail-fast: the first unmappable byte or character, or malformed
        input, raises a :class:`~codeshift.errors.CodeshiftError` subclass.
        """
        if isinstance(self._backing, TranslationTable):
            return self._backing.translate(data)
        return self._backing.convert(data)

    def convert_in_place(self, buffer: Buffer) -> None:
        """Convert a mutable *buffer* in place.

        Only available for single-byte pairs.  Bytes before a failing position
        are already converted when the error is raised.

        :raises UnsupportedConversionError: For multibyte pairs.
        """
        if not isinstance(self._backing, TranslationTable):
            raise UnsupportedConversionError(
                self._from.canonical_name, self._to.canonical_name
            )
        self._backing.translate_in_place(buffer)

    def convert_lossy(
        self,
        data: bytes | bytearray | memoryview,
        replacement: int = DEFAULT_REPLACEMENT,
    ) -> bytes:
        """Convert *data*, never failing.

        Table-backed conversions substitute *replacement* for each
        unmappable byte.  Bridge-backed conversions that fail for any reason
        return *replacement* repeated once per input byte.
        """
        _validate_replacement(replacement)
        if isinstance(self._backing, TranslationTable):
            return self._backing.convert_lossy(data, replacement)
        try:
            return self.convert(data)
        except CodeshiftError:
            return bytes((replacement,)) * len(data)


def _complete_utf8_length(data: bytearray) -> int:
    length = len(data)
    for back in range(1, min(4, length) + 1):
        byte = data[length - back]
        if byte & 0xC0 == 0x80:
            continue
        if 0xC0 <= byte <= 0xDF:
            needed = 2
        elif 0xE0 <= byte <= 0xEF:
            needed = 3
        elif 0xF0 <= byte <= 0xF7:
            needed = 4
        else:
            needed = 1
        return length - back if back < needed else length
    return length


def _complete_utf16_length(data: bytearray, little_endian: bool) -> int:
    length = len(data) - len(data) % 2
    if length >= 2:
        lo, hi = (data[length - 2], data[length - 1])
        unit = (hi << 8 | lo) if little_endian else (lo << 8 | hi)
        # A trailing high surrogate waits for its partner.
        if 0xD800 <= unit <= 0xDBFF:
            length -= 2
    return length


def complete_prefix_length(encoding: Encoding, data: bytearray) -> int:
    """Return how many leading bytes of *data* form complete encoding units."""
    if encoding is Encoding.UTF8:
        return _complete_utf8_length(data)
    if encoding is Encoding.UTF16LE:
        return _complete_utf16_length(data, little_endian=True)
    if encoding is Encoding.UTF16BE:
        return _complete_utf16_length(data, little_endian=False)
    return len(data)


class StreamingTranslator:
    """Chunked conversion over one :class:`Translator`.

    Each :meth:`process_chunk` call converts every complete encoding unit it
    has seen.  An incomplete trailing unit (a split UTF-8 sequence, an odd
    UTF-16 byte, or a UTF-16 high surrogate waiting for its pair) is held
    back and prepended to the next chunk.  Single-byte sources never hold
    anything back.  Error positions are offsets into the whole stream.

    An instance carries state between calls; give each stream its own.

    :param buffer_size: Number of bytes read per block by
        :meth:`convert_stream`.
    """

    def __init__(
        self,
        from_encoding: Encoding | str,
        to_encoding: Encoding | str,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        *,
        bulk: bool | None = None,
    ) -> None:
        _validate_buffer_size(buffer_size)
        self._translator = Translator(from_encoding, to_encoding, bulk=bulk)
        self._buffer_size = buffer_size
        self._pending = bytearray()
        self._position = 0
        self._pivot_position = 0
        self._closed = False

    @property
    def translator(self) -> Translator:
        return self._translator

    @property
    def buffer_size(self) -> int:
        return self._buffer_size

    @property
    def pending(self) -> bytes:
        """Bytes held back waiting for the rest of their encoding unit."""
        return bytes(self._pending)

    def _convert(self, data: bytes) -> tuple[bytes, int]:
        """Convert *data*, returning the output and the pivot offset it covers.

        Source errors are shifted by the source offset, target errors by the
        UTF-8 offset of everything converted so far.  Pairs that cannot raise
        :class:`UnmappableTargetError` count the pivot offset in source bytes.
        """
        backing = self._translator.backing
        try:
            if (
                isinstance(backing, MultiByteBridge)
                and backing.from_encoding is not Encoding.UTF8
                and not backing.to_encoding.is_multibyte
            ):
                pivot = backing.to_pivot(data)
                return backing.from_pivot(pivot), len(pivot)
            return self._translator.convert(data), len(data)
        except UnmappableTargetError as e:
            raise e.shifted(self._pivot_position) from None
        except UnmappableSourceError as e:
            raise e.shifted(self._position) from None

    def process_chunk(self, data: bytes | bytearray | memoryview) -> bytes:
        """Convert the next chunk of the stream.

        On error nothing is consumed: the pending bytes and the stream
        position are left as they were before the call.

        :raises ValueError: If called after :meth:`close` without
            :meth:`reset`.
        """
        if self._closed:
            msg = "process_chunk() called after close() without reset()"
            raise ValueError(msg)
        buffered = self._pending + data
        cut = complete_prefix_length(self._translator.from_encoding, buffered)
        output, pivot_length = self._convert(bytes(buffered[:cut]))
        self._pending = buffered[cut:]
        self._position += cut
        self._pivot_position += pivot_length
        return output

    def close(self) -> bytes:
        """Flush the stream, converting whatever is still held back.

        :raises InvalidInputError: If the stream ends inside an encoding unit.
        """
        if self._closed:
            return b""
        self._closed = True
        tail = bytes(self._pending)
        self._pending = bytearray()
        if not tail:
            return b""
        output, pivot_length = self._convert(tail)
        self._position += len(tail)
        self._pivot_position += pivot_length
        return output

    def reset(self) -> None:
        """Reset the stream to its initial state for reuse."""
        self._pending = bytearray()
        self._position = 0
        self._pivot_position = 0
        self._closed = False

    def convert_stream(self, source: BinaryIO, sink: BinaryIO) -> int:
        """Convert everything readable from *source* into *sink*.

        Reads *buffer_size* bytes at a time, then closes the stream.

        :returns: The number of bytes written to *sink*.
        """
        written = 0
        while chunk := source.read(self._buffer_size):
            written += sink.write(self.process_chunk(chunk))
        written += sink.write(self.close())
        return written
