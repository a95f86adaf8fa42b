"""Per-encoding character maps.

Every supported encoding resolves to a 256-slot map from byte value to
Unicode scalar (or ``None`` when the byte carries no character on its own).
Maps are derived from the Python codec registered for each encoding and are
built lazily, once per process, then shared read-only.

Importing :mod:`ebcdic` registers the IBM EBCDIC code pages that the
standard library does not ship (cp277, cp278, cp280, cp284, cp285, cp297,
cp1047).
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import TypeVar

import ebcdic  # noqa: F401

from codeshift.enums import Encoding

logger = logging.getLogger(__name__)

#: A 256-slot byte -> Unicode scalar map.
CharacterMap = tuple[int | None, ...]

#: Placeholder used by charmap decoding tables for undefined bytes.
UNDEFINED = "\ufffe"

_CODECS: dict[Encoding, str] = {
    Encoding.UTF8: "utf-8",
    Encoding.UTF16LE: "utf-16-le",
    Encoding.UTF16BE: "utf-16-be",
    Encoding.ASCII: "ascii",
    Encoding.ISO_8859_1: "iso8859_1",
    Encoding.ISO_8859_2: "iso8859_2",
    Encoding.ISO_8859_3: "iso8859_3",
    Encoding.ISO_8859_4: "iso8859_4",
    Encoding.ISO_8859_5: "iso8859_5",
    Encoding.ISO_8859_6: "iso8859_6",
    Encoding.ISO_8859_7: "iso8859_7",
    Encoding.ISO_8859_8: "iso8859_8",
    Encoding.ISO_8859_9: "iso8859_9",
    Encoding.ISO_8859_10: "iso8859_10",
    Encoding.ISO_8859_11: "iso8859_11",
    Encoding.ISO_8859_13: "iso8859_13",
    Encoding.ISO_8859_14: "iso8859_14",
    Encoding.ISO_8859_15: "iso8859_15",
    Encoding.ISO_8859_16: "iso8859_16",
    Encoding.WINDOWS_1250: "cp1250",
    Encoding.WINDOWS_1251: "cp1251",
    Encoding.WINDOWS_1252: "cp1252",
    Encoding.WINDOWS_1253: "cp1253",
    Encoding.WINDOWS_1254: "cp1254",
    Encoding.WINDOWS_1255: "cp1255",
    Encoding.WINDOWS_1256: "cp1256",
    Encoding.WINDOWS_1257: "cp1257",
    Encoding.WINDOWS_1258: "cp1258",
    Encoding.WINDOWS_874: "cp874",
    Encoding.EBCDIC_037: "cp037",
    Encoding.EBCDIC_273: "cp273",
    Encoding.EBCDIC_277: "cp277",
    Encoding.EBCDIC_278: "cp278",
    Encoding.EBCDIC_280: "cp280",
    Encoding.EBCDIC_284: "cp284",
    Encoding.EBCDIC_285: "cp285",
    Encoding.EBCDIC_297: "cp297",
    Encoding.EBCDIC_500: "cp500",
    Encoding.EBCDIC_1047: "cp1047",
    Encoding.CP_437: "cp437",
    Encoding.CP_850: "cp850",
    Encoding.CP_852: "cp852",
    Encoding.CP_855: "cp855",
    Encoding.CP_857: "cp857",
    Encoding.CP_860: "cp860",
    Encoding.CP_861: "cp861",
    Encoding.CP_862: "cp862",
    Encoding.CP_863: "cp863",
    Encoding.CP_865: "cp865",
    Encoding.CP_866: "cp866",
    Encoding.MAC_ROMAN: "mac_roman",
    Encoding.MAC_CYRILLIC: "mac_cyrillic",
    Encoding.SHIFT_JIS: "shift_jis",
    Encoding.EUC_JP: "euc_jp",
    Encoding.GB2312: "gb2312",
    Encoding.BIG5: "big5",
    Encoding.EUC_KR: "euc_kr",
}

_T = TypeVar("_T")

_CHARS_CACHE: dict[Encoding, CharacterMap] = {}
_REVERSE_CACHE: dict[Encoding, dict[int, int]] = {}
_DECODING_CACHE: dict[Encoding, str] = {}
_CACHE_LOCK = threading.RLock()


def codec_name_for(encoding: Encoding) -> str:
    """Return the Python codec name backing *encoding*."""
    return _CODECS[encoding]


def _cached(
    cache: dict[Encoding, _T],
    encoding: Encoding,
    build: Callable[[Encoding], _T],
) -> _T:
    value = cache.get(encoding)
    if value is not None:
        return value
    with _CACHE_LOCK:
        value = cache.get(encoding)
        if value is None:
            value = build(encoding)
            cache[encoding] = value
    return value


def _decode_byte(byte: int, codec: str) -> int | None:
    try:
        text = bytes((byte,)).decode(codec)
    except UnicodeDecodeError:
        return None
    if len(text) != 1:
        return None
    return ord(text)


def _build_chars(encoding: Encoding) -> CharacterMap:
    codec = _CODECS[encoding]
    chars = tuple(_decode_byte(b, codec) for b in range(256))
    logger.debug(
        "Built character map for %s (%s): %d defined bytes",
        encoding,
        codec,
        sum(1 for c in chars if c is not None),
    )
    return chars


def _build_reverse(encoding: Encoding) -> dict[int, int]:
    reverse: dict[int, int] = {}
    for byte, scalar in enumerate(chars_for(encoding)):
        if scalar is not None:
            # First byte carrying a scalar wins.
            reverse.setdefault(scalar, byte)
    return reverse


def _build_decoding_table(encoding: Encoding) -> str:
    return "".join(
        UNDEFINED if scalar is None else chr(scalar) for scalar in chars_for(encoding)
    )


def chars_for(encoding: Encoding) -> CharacterMap:
    """Return the 256-slot byte -> Unicode scalar map for *encoding*.

    :param encoding: Any supported encoding.
    :returns: A tuple of 256 entries, each an ``int`` scalar or ``None``.
    """
    return _cached(_CHARS_CACHE, encoding, _build_chars)


def reverse_map_for(encoding: Encoding) -> dict[int, int]:
    """Return the scalar -> byte map for *encoding*.

    When several bytes carry the same scalar, the lowest byte wins.  The
    returned dict is shared; callers must not mutate it.
    """
    return _cached(_REVERSE_CACHE, encoding, _build_reverse)


def decoding_table_for(encoding: Encoding) -> str:
    """Return a 256-character decoding table usable with ``codecs.charmap_decode``.

    Undefined bytes are marked with :data:`UNDEFINED`.
    """
    return _cached(_DECODING_CACHE, encoding, _build_decoding_table)
