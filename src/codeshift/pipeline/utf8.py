"""Stage 2: UTF-8 structural validation."""

from __future__ import annotations

from codeshift.enums import Encoding
from codeshift.pipeline import Candidate

_NO_MULTIBYTE_CONFIDENCE = 0.5
_BASE_CONFIDENCE = 0.7
_MULTIBYTE_WEIGHT = 0.3


def score_utf8(data: bytes) -> Candidate | None:
    """Validate UTF-8 byte structure.

    Any structural violation (bad lead byte, bad continuation byte, overlong
    form, surrogate, code point above U+10FFFF, truncated final sequence)
    disqualifies UTF-8 entirely.  Valid data without any multi-byte sequence
    scores 0.5; otherwise confidence grows with the share of bytes that
    belong to multi-byte sequences.

    :param data: The raw byte data to examine.
    :returns: A :class:`Candidate` for UTF-8, or ``None``.
    """
    i = 0
    length = len(data)
    multibyte_bytes = 0

    while i < length:
        byte = data[i]

        if byte < 0x80:
            i += 1
            continue

        # 0xC0-0xC1 are overlong 2-byte encodings of ASCII, so we start at 0xC2.
        if 0xC2 <= byte <= 0xDF:
            seq_len = 2
        elif 0xE0 <= byte <= 0xEF:
            seq_len = 3
        elif 0xF0 <= byte <= 0xF4:
            seq_len = 4
        else:
            # Invalid start byte (0x80-0xC1, 0xF5-0xFF)
            return None

        # Truncation disqualifies even when the sample limit made the cut, so a
        # detector max_bytes that splits a character loses the UTF-8 candidate.
        if i + seq_len > length:
            return None

        for j in range(1, seq_len):
            if not (0x80 <= data[i + j] <= 0xBF):
                return None

        if seq_len == 3:
            # 0xE0: second byte must be >= 0xA0 (prevents overlong 3-byte)
            if byte == 0xE0 and data[i + 1] < 0xA0:
                return None
            # 0xED: second byte must be <= 0x9F (prevents UTF-16 surrogates)
            if byte == 0xED and data[i + 1] > 0x9F:
                return None
        elif seq_len == 4:
            # 0xF0: second byte must be >= 0x90 (prevents overlong 4-byte)
            if byte == 0xF0 and data[i + 1] < 0x90:
                return None
            # 0xF4: second byte must be <= 0x8F (prevents code points above U+10FFFF)
            if byte == 0xF4 and data[i + 1] > 0x8F:
                return None

        multibyte_bytes += seq_len
        i += seq_len

    if multibyte_bytes == 0:
        return Candidate(encoding=Encoding.UTF8, confidence=_NO_MULTIBYTE_CONFIDENCE)

    confidence = _BASE_CONFIDENCE + _MULTIBYTE_WEIGHT * (multibyte_bytes / length)
    return Candidate(encoding=Encoding.UTF8, confidence=confidence)
