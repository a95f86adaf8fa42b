"""Stage 2: EBCDIC scoring."""

from __future__ import annotations

from codeshift.enums import Encoding
from codeshift.pipeline import Candidate, characteristic_ratio

# space, 0-9
_EBCDIC_DIGITS = bytes([0x40, 0xF0, 0xF1, 0xF2, 0xF3, 0xF4, 0xF5, 0xF6, 0xF7, 0xF8, 0xF9])
# A-E, a-e
_EBCDIC_LETTERS = bytes([0xC1, 0xC2, 0xC3, 0xC4, 0xC5, 0x81, 0x82, 0x83, 0x84, 0x85])
_LETTER_WEIGHT = 2.0

# EBCDIC text rarely uses bytes below 0x40.
_LOW_BYTES = bytes(range(0x40))
_LOW_BYTE_LIMIT = 0.3
_LOW_BYTE_PENALTY = 0.5

_MIN_SCORE = 0.1
_MAX_CONFIDENCE = 0.8


def score_ebcdic(data: bytes) -> Candidate | None:
    """Score *data* as EBCDIC (reported as code page 037).

    :param data: The raw byte data to examine.
    :returns: A :class:`Candidate` for IBM037, or ``None``.
    """
    if not data:
        return None

    score = characteristic_ratio(data, _EBCDIC_DIGITS)
    score += characteristic_ratio(data, _EBCDIC_LETTERS) * _LETTER_WEIGHT

    low_count = len(data) - len(data.translate(None, _LOW_BYTES))
    if low_count / len(data) > _LOW_BYTE_LIMIT:
        score *= _LOW_BYTE_PENALTY

    if score > _MIN_SCORE:
        return Candidate(Encoding.EBCDIC_037, min(score, _MAX_CONFIDENCE))
    return None
