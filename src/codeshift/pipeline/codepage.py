"""Stage 2: Characteristic-byte scoring for Windows, ISO-8859 and DOS pages.

Each scorer looks for a fixed set of diagnostic bytes and scores the
fraction of the set that occurs anywhere in the sample.
"""

from __future__ import annotations

from codeshift.enums import Encoding
from codeshift.pipeline import Candidate, characteristic_ratio

# € ‚ ƒ „ … † ‡ ˆ ‰ Š ™
_WINDOWS_1252_BYTES = bytes(
    [0x80, 0x82, 0x83, 0x84, 0x85, 0x86, 0x87, 0x88, 0x89, 0x8A, 0x99]
)
# Š Ś Ť Ź š ś ť ź
_WINDOWS_1250_BYTES = bytes([0x8A, 0x8C, 0x8D, 0x8F, 0x9A, 0x9C, 0x9D, 0x9F])
_WINDOWS_WEIGHT = 0.6

# Everything below 0xA0; deleting it leaves only high Latin bytes.
_BELOW_HIGH_LATIN = bytes(range(0xA0))
_ISO_8859_1_CONFIDENCE = 0.5
# Euro sign in ISO-8859-15, currency sign in ISO-8859-1.
_ISO_8859_15_EURO = 0xA4
_ISO_8859_15_CONFIDENCE = 0.6

# ░ ▒ ▓ █ ╔ ╗ ╚ ╝
_CP437_BYTES = bytes([0xB0, 0xB1, 0xB2, 0xDB, 0xC9, 0xBB, 0xC8, 0xBC])
_CP437_WEIGHT = 0.7


def score_windows(data: bytes) -> list[Candidate]:
    """Score Windows-1252 and Windows-1250, in that order."""
    results = []
    cp1252 = characteristic_ratio(data, _WINDOWS_1252_BYTES)
    if cp1252 > 0.0:
        results.append(Candidate(Encoding.WINDOWS_1252, cp1252 * _WINDOWS_WEIGHT))
    cp1250 = characteristic_ratio(data, _WINDOWS_1250_BYTES)
    if cp1250 > 0.0:
        results.append(Candidate(Encoding.WINDOWS_1250, cp1250 * _WINDOWS_WEIGHT))
    return results


def score_iso(data: bytes) -> list[Candidate]:
    """Score ISO-8859-1 and ISO-8859-15, in that order.  Both may register."""
    results = []
    if data.translate(None, _BELOW_HIGH_LATIN):
        results.append(Candidate(Encoding.ISO_8859_1, _ISO_8859_1_CONFIDENCE))
    if _ISO_8859_15_EURO in data:
        results.append(Candidate(Encoding.ISO_8859_15, _ISO_8859_15_CONFIDENCE))
    return results


def score_dos(data: bytes) -> list[Candidate]:
    """Score CP437 by its box-drawing bytes."""
    cp437 = characteristic_ratio(data, _CP437_BYTES)
    if cp437 > 0.0:
        return [Candidate(Encoding.CP_437, cp437 * _CP437_WEIGHT)]
    return []
