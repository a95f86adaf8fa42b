"""Stage 2: Pure ASCII scoring."""

from __future__ import annotations

from codeshift.enums import Encoding
from codeshift.pipeline import Candidate

_ASCII_CONFIDENCE = 0.8

# bytes.translate deletes every 7-bit byte; if anything remains the data is
# not pure ASCII.
_ASCII_BYTES: bytes = bytes(range(0x80))


def score_ascii(data: bytes) -> Candidate | None:
    """Return an ASCII candidate if every byte is below 0x80.

    :param data: The raw byte data to examine.
    :returns: A :class:`Candidate` for ASCII, or ``None``.
    """
    if data.translate(None, _ASCII_BYTES):
        return None
    return Candidate(encoding=Encoding.ASCII, confidence=_ASCII_CONFIDENCE)
