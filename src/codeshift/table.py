"""Precomputed single-byte to single-byte translation tables.

A :class:`TranslationTable` holds a dense 256-byte lookup table and a 256-bit
unmappable mask.  Unmappable slots in the lookup table hold ``0xFF``, but
``0xFF`` is also a legitimate target byte for many pairs, so only the mask
decides mappability.  Every accessor checks the mask before it reads the
table.

Two kernels drive bulk conversion.  :class:`ScalarKernel` walks the input one
byte at a time; :class:`BulkKernel` converts ``width``-aligned blocks with a
single ``bytes.translate`` call and handles the remainder byte by byte.  The
unmappable test in the bulk kernel is a ``bytes.translate(None, mappable)``
deletion pass: whatever survives the deletion is unmappable.  Both kernels
produce byte-identical output and identical errors.
"""

from __future__ import annotations

import logging

from codeshift._utils import BULK_WIDTH, _validate_replacement, bulk_enabled
from codeshift.catalog import chars_for, reverse_map_for
from codeshift.enums import Encoding
from codeshift.errors import UnmappableSourceError, UnsupportedConversionError

logger = logging.getLogger(__name__)

_SENTINEL = 0xFF

Buffer = bytearray | memoryview


class ScalarKernel:
    """Byte-at-a-time conversion."""

    name = "scalar"

    def translate(self, table: TranslationTable, data: bytes) -> bytes:
        output = bytearray()
        for position, byte in enumerate(data):
            mapped = table.translate_byte(byte)
            if mapped is None:
                raise UnmappableSourceError(byte, position)
            output.append(mapped)
        return bytes(output)

    def translate_in_place(self, table: TranslationTable, buffer: Buffer) -> None:
        for position, byte in enumerate(buffer):
            mapped = table.translate_byte(byte)
            if mapped is None:
                raise UnmappableSourceError(byte, position)
            buffer[position] = mapped

    def convert_lossy(
        self, table: TranslationTable, data: bytes, replacement: int
    ) -> bytes:
        output = bytearray()
        for byte in data:
            mapped = table.translate_byte(byte)
            output.append(replacement if mapped is None else mapped)
        return bytes(output)


class BulkKernel:
    """Block conversion using ``bytes.translate`` on ``width``-aligned blocks."""

    name = "bulk"

    def __init__(self, width: int = BULK_WIDTH) -> None:
        if width < 1:
            msg = "width must be a positive integer"
            raise ValueError(msg)
        self.width = width
        self._scalar = ScalarKernel()

    def _split(self, length: int) -> int:
        return length - length % self.width

    def translate(self, table: TranslationTable, data: bytes) -> bytes:
        end = self._split(len(data))
        head = data[:end]
        if head.translate(None, table.mappable_bytes):
            position = _first_unmappable(table, head)
            raise UnmappableSourceError(head[position], position)
        output = head.translate(table.table)
        try:
            tail = self._scalar.translate(table, data[end:])
        except UnmappableSourceError as e:
            raise e.shifted(end) from None
        return output + tail

    def translate_in_place(self, table: TranslationTable, buffer: Buffer) -> None:
        end = self._split(len(buffer))
        head = bytes(buffer[:end])
        if head.translate(None, table.mappable_bytes):
            position = _first_unmappable(table, head)
            buffer[:position] = head[:position].translate(table.table)
            raise UnmappableSourceError(head[position], position)
        buffer[:end] = head.translate(table.table)
        try:
            self._scalar.translate_in_place(table, memoryview(buffer)[end:])
        except UnmappableSourceError as e:
            raise e.shifted(end) from None

    def convert_lossy(
        self, table: TranslationTable, data: bytes, replacement: int
    ) -> bytes:
        return data.translate(table.lossy_table(replacement))


Kernel = ScalarKernel | BulkKernel


def _first_unmappable(table: TranslationTable, data: bytes) -> int:
    for position, byte in enumerate(data):
        if not table.is_mappable(byte):
            return position
    msg = "no unmappable byte in data"
    raise ValueError(msg)


def default_kernel(bulk: bool | None = None) -> Kernel:
    """Return the kernel selected by *bulk*, or by ``CODESHIFT_BULK`` if None."""
    if bulk is None:
        bulk = bulk_enabled()
    return BulkKernel() if bulk else ScalarKernel()


class TranslationTable:
    """Byte -> byte table between two single-byte encodings.

    Built once per pair and immutable afterwards.

    :param from_encoding: Source encoding; must not be multibyte.
    :param to_encoding: Target encoding; must not be multibyte.
    :param bulk: Use the bulk kernel (``True``), the scalar kernel
        (``False``), or follow ``CODESHIFT_BULK`` (``None``).
    :raises UnsupportedConversionError: If either side is multibyte.
    """

    __slots__ = (
        "_from",
        "_kernel",
        "_mappable",
        "_table",
        "_to",
        "_unmappable_mask",
    )

    def __init__(
        self,
        from_encoding: Encoding,
        to_encoding: Encoding,
        *,
        bulk: bool | None = None,
    ) -> None:
        if from_encoding.is_multibyte or to_encoding.is_multibyte:
            raise UnsupportedConversionError(
                from_encoding.canonical_name, to_encoding.canonical_name
            )
        from_chars = chars_for(from_encoding)
        to_lookup = reverse_map_for(to_encoding)

        table = bytearray([_SENTINEL]) * 256
        mask = 0
        for src_byte, scalar in enumerate(from_chars):
            target = None if scalar is None else to_lookup.get(scalar)
            if target is None:
                mask |= 1 << src_byte
            else:
                table[src_byte] = target

        self._from = from_encoding
        self._to = to_encoding
        self._table = bytes(table)
        self._unmappable_mask = mask
        self._mappable = bytes(b for b in range(256) if not (mask >> b) & 1)
        self._kernel = default_kernel(bulk)
        logger.debug(
            "Translation table %s -> %s: %d unmappable bytes, %s kernel",
            from_encoding,
            to_encoding,
            256 - len(self._mappable),
            self._kernel.name,
        )

    def __repr__(self) -> str:
        return f"TranslationTable({self._from.canonical_name!r} -> {self._to.canonical_name!r})"

    @property
    def from_encoding(self) -> Encoding:
        return self._from

    @property
    def to_encoding(self) -> Encoding:
        return self._to

    @property
    def table(self) -> bytes:
        """The raw 256-byte lookup table.  Meaningless without the mask."""
        return self._table

    @property
    def unmappable_mask(self) -> int:
        """256-bit mask; bit *n* set means byte *n* is unmappable."""
        return self._unmappable_mask

    @property
    def mappable_bytes(self) -> bytes:
        """Every mappable byte value, ascending."""
        return self._mappable

    @property
    def kernel(self) -> Kernel:
        return self._kernel

    def is_mappable(self, byte: int) -> bool:
        """Return whether *byte* converts to the target encoding."""
        return not (self._unmappable_mask >> byte) & 1

    def translate_byte(self, byte: int) -> int | None:
        """Return the target byte for *byte*, or ``None`` if unmappable."""
        if (self._unmappable_mask >> byte) & 1:
            return None
        return self._table[byte]

    def lossy_table(self, replacement: int) -> bytes:
        """Return a full 256-byte table with *replacement* in unmappable slots."""
        _validate_replacement(replacement)
        return bytes(
            replacement if (self._unmappable_mask >> b) & 1 else self._table[b]
            for b in range(256)
        )

    def translate(self, data: bytes | bytearray | memoryview) -> bytes:
        """Convert *data*, failing on the first unmappable byte.

        :raises UnmappableSourceError: With the byte and its position.  No
            partial output is returned.
        """
        return self._kernel.translate(self, bytes(data))

    def translate_in_place(self, buffer: Buffer) -> None:
        """Convert *buffer* in place, left to right.

        Not atomic: when an unmappable byte is found, every byte before it
        has already been overwritten.  Copy the buffer first if that matters.

        :raises UnmappableSourceError: With the byte and its position.
        """
        self._kernel.translate_in_place(self, buffer)

    def convert_lossy(
        self, data: bytes | bytearray | memoryview, replacement: int
    ) -> bytes:
        """Convert *data*, substituting *replacement* for unmappable bytes.

        Never fails on the data; the output has the same length as the input.
        """
        _validate_replacement(replacement)
        return self._kernel.convert_lossy(self, bytes(data), replacement)
