"""EncodingDetector — one-shot statistical encoding detection."""

from __future__ import annotations

from codeshift._utils import DEFAULT_MAX_BYTES, _validate_max_bytes
from codeshift.hints import apply_language_hint
from codeshift.pipeline import DetectionResult
from codeshift.pipeline.orchestrator import run_pipeline


class EncodingDetector:
    """Encoding detector over a bounded sample.

    Only the first *max_bytes* bytes of each input are examined.  The
    detector holds no per-call state; one instance may be shared freely
    between threads.
    """

    __slots__ = ("_max_bytes",)

    def __init__(self, max_bytes: int = DEFAULT_MAX_BYTES) -> None:
        """Initialize the detector.

        :param max_bytes: Maximum number of leading bytes to examine.
        :raises ValueError: If *max_bytes* is not a positive integer.
        """
        _validate_max_bytes(max_bytes)
        self._max_bytes = max_bytes

    def __repr__(self) -> str:
        return f"EncodingDetector(max_bytes={self._max_bytes})"

    @property
    def max_bytes(self) -> int:
        return self._max_bytes

    def detect(self, data: bytes | bytearray | memoryview) -> DetectionResult:
        """Detect the encoding of *data*.

        A byte order mark decides the result outright.  Otherwise every
        scorer runs and the candidates are ranked by confidence, falling back
        to US-ASCII at 0.5 when none registers.
        """
        return run_pipeline(bytes(data[: self._max_bytes]), self._max_bytes)

    def detect_with_hint(
        self, data: bytes | bytearray | memoryview, hint: str
    ) -> DetectionResult:
        """Detect the encoding of *data*, then apply a language *hint*.

        See :func:`codeshift.hints.apply_language_hint`.
        """
        return apply_language_hint(self.detect(data), hint)
