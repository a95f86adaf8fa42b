"""Stage 1: BOM (Byte Order Mark) detection."""

from __future__ import annotations

from codeshift.enums import Encoding
from codeshift.pipeline import Candidate

# Checked in this order; the first match wins.
_BOMS: tuple[tuple[bytes, Encoding], ...] = tuple(
    (enc.bom, enc)
    for enc in (Encoding.UTF8, Encoding.UTF16LE, Encoding.UTF16BE)
    if enc.bom is not None
)


def detect_bom(data: bytes) -> Candidate | None:
    """Check for a BOM at the start of data. Returns a certain candidate or None."""
    for bom_bytes, encoding in _BOMS:
        if data.startswith(bom_bytes):
            return Candidate(encoding=encoding, confidence=1.0)
    return None
