"""Stage 2: UTF-16 scoring for data without a BOM.

Every 2-byte unit is read both ways.  A unit that reads as a 7-bit value
counts as plausible text for that byte order, and a unit with exactly one
zero byte adds a half point to the byte order that puts the zero in the high
position.  The better byte order wins only if its per-unit score is above
0.6 and strictly higher than the other.
"""

from __future__ import annotations

from codeshift.enums import Encoding
from codeshift.pipeline import Candidate

_MIN_SCORE = 0.6
_CONFIDENCE_SCALE = 0.8
_ZERO_BYTE_BONUS = 0.5


def score_utf16(data: bytes) -> Candidate | None:
    """Score *data* as UTF-16LE or UTF-16BE.

    :param data: The raw byte data to examine; must have even length >= 2.
    :returns: A :class:`Candidate` for the winning byte order, or ``None``.
    """
    length = len(data)
    if length < 2 or length % 2 != 0:
        return None

    le_score = 0.0
    be_score = 0.0
    for i in range(0, length, 2):
        first = data[i]
        second = data[i + 1]
        if (second << 8 | first) < 0x80:
            le_score += 1.0
        if (first << 8 | second) < 0x80:
            be_score += 1.0

        if first == 0 and second != 0:
            be_score += _ZERO_BYTE_BONUS
        elif second == 0 and first != 0:
            le_score += _ZERO_BYTE_BONUS

    units = length // 2
    le_score /= units
    be_score /= units

    if le_score > be_score and le_score > _MIN_SCORE:
        return Candidate(Encoding.UTF16LE, min(1.0, le_score * _CONFIDENCE_SCALE))
    if be_score > le_score and be_score > _MIN_SCORE:
        return Candidate(Encoding.UTF16BE, min(1.0, be_score * _CONFIDENCE_SCALE))
    return None
