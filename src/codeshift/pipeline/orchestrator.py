"""Pipeline orchestrator: runs every stage and ranks the candidates."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from codeshift._utils import DEFAULT_MAX_BYTES
from codeshift.enums import Encoding
from codeshift.pipeline import Candidate, DetectionResult
from codeshift.pipeline.ascii import score_ascii
from codeshift.pipeline.bom import detect_bom
from codeshift.pipeline.codepage import score_dos, score_iso, score_windows
from codeshift.pipeline.ebcdic import score_ebcdic
from codeshift.pipeline.utf8 import score_utf8
from codeshift.pipeline.utf16 import score_utf16

logger = logging.getLogger(__name__)

_FALLBACK = Candidate(encoding=Encoding.ASCII, confidence=0.5)

Scorer = Callable[[bytes], Candidate | list[Candidate] | None]

# Registration order doubles as the tie-break order: sorting is stable, so
# equal confidences keep the order in which their scorer ran.
_SCORERS: tuple[Scorer, ...] = (
    score_utf8,
    score_utf16,
    score_ascii,
    score_windows,
    score_iso,
    score_ebcdic,
    score_dos,
)


def _pool(data: bytes) -> list[Candidate]:
    pooled: list[Candidate] = []
    for scorer in _SCORERS:
        found = scorer(data)
        if found is None:
            continue
        if isinstance(found, Candidate):
            pooled.append(found)
        else:
            pooled.extend(found)
    return pooled


def rank(candidates: Iterable[Candidate]) -> tuple[Candidate, ...]:
    """Sort *candidates* by descending confidence, keeping registration order on ties."""
    return tuple(sorted(candidates, key=lambda c: c.confidence, reverse=True))


def run_pipeline(data: bytes, max_bytes: int = DEFAULT_MAX_BYTES) -> DetectionResult:
    """Run the full detection pipeline.

    :param data: The raw byte data to analyze.
    :param max_bytes: Maximum number of bytes to examine.
    :returns: A :class:`DetectionResult`; never ``None``.
    """
    data = bytes(data[:max_bytes])

    bom_result = detect_bom(data)
    if bom_result is not None:
        logger.debug("BOM matched %s", bom_result.encoding)
        return DetectionResult(
            encoding=bom_result.encoding,
            confidence=bom_result.confidence,
            bom_detected=True,
            candidates=(bom_result,),
        )

    candidates = rank(_pool(data))
    logger.debug(
        "Ranked %d candidate(s): %s",
        len(candidates),
        ", ".join(f"{c.encoding}={c.confidence:.3f}" for c in candidates),
    )
    primary = candidates[0] if candidates else _FALLBACK
    return DetectionResult(
        encoding=primary.encoding,
        confidence=primary.confidence,
        bom_detected=False,
        candidates=candidates,
    )
