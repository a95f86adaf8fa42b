"""Detection pipeline stages and shared types."""

from __future__ import annotations

import dataclasses

from codeshift.enums import Encoding


@dataclasses.dataclass(frozen=True, slots=True)
class Candidate:
    """One encoding proposed by a scoring stage, with its confidence in [0, 1]."""

    encoding: Encoding
    confidence: float

    def to_dict(self) -> dict[str, str | float]:
        return {"encoding": self.encoding.canonical_name, "confidence": self.confidence}


@dataclasses.dataclass(frozen=True, slots=True)
class DetectionResult:
    """The outcome of one detection run.

    Frozen dataclass holding the primary encoding and its confidence, whether
    a byte order mark decided the result, and every candidate that
    registered, ranked by confidence.
    """

    encoding: Encoding
    confidence: float
    bom_detected: bool
    candidates: tuple[Candidate, ...]

    def to_dict(self) -> dict[str, object]:
        """Convert this result to a plain dict.

        :returns: A dict with ``'encoding'``, ``'confidence'``,
            ``'bom_detected'`` and ``'candidates'`` keys.
        """
        return {
            "encoding": self.encoding.canonical_name,
            "confidence": self.confidence,
            "bom_detected": self.bom_detected,
            "candidates": [c.to_dict() for c in self.candidates],
        }


def characteristic_ratio(data: bytes, reference: bytes) -> float:
    """Return the fraction of *reference* byte values present anywhere in *data*."""
    if not reference:
        return 0.0
    present = sum(1 for byte in reference if byte in data)
    return present / len(reference)
