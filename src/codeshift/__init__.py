"""Exact character encoding translation and statistical encoding detection."""

from __future__ import annotations

from codeshift._utils import DEFAULT_MAX_BYTES, DEFAULT_REPLACEMENT, _validate_max_bytes
from codeshift.bridge import MultiByteBridge
from codeshift.detector import EncodingDetector
from codeshift.enums import Category, Encoding
from codeshift.errors import (
    CodeshiftError,
    InvalidInputError,
    UnmappableSourceError,
    UnmappableTargetError,
    UnsupportedConversionError,
)
from codeshift.hints import apply_language_hint
from codeshift.pipeline import Candidate, DetectionResult
from codeshift.pipeline.orchestrator import run_pipeline
from codeshift.table import TranslationTable
from codeshift.translator import StreamingTranslator, Translator

__version__ = "0.3.0"
__all__ = [
    "Candidate",
    "Category",
    "CodeshiftError",
    "DetectionResult",
    "Encoding",
    "EncodingDetector",
    "InvalidInputError",
    "MultiByteBridge",
    "StreamingTranslator",
    "TranslationTable",
    "Translator",
    "UnmappableSourceError",
    "UnmappableTargetError",
    "UnsupportedConversionError",
    "convert",
    "detect",
    "detect_all",
]

_ERROR_MODES = frozenset({"strict", "replace"})


def _detect(
    byte_str: bytes | bytearray, max_bytes: int, language: str | None
) -> DetectionResult:
    _validate_max_bytes(max_bytes)
    data = byte_str if isinstance(byte_str, bytes) else bytes(byte_str)
    result = run_pipeline(data, max_bytes=max_bytes)
    if language is not None:
        result = apply_language_hint(result, language)
    return result


def detect(
    byte_str: bytes | bytearray,
    max_bytes: int = DEFAULT_MAX_BYTES,
    language: str | None = None,
) -> dict[str, object]:
    """Detect the encoding of the given byte string.

    :param byte_str: The data to examine.
    :param max_bytes: Maximum number of leading bytes to examine.
    :param language: Optional language hint, e.g. ``"german"`` or ``"ru"``.
    :returns: A dict with ``'encoding'``, ``'confidence'``, ``'bom_detected'``
        and ``'candidates'`` keys.
    """
    return _detect(byte_str, max_bytes, language).to_dict()


def detect_all(
    byte_str: bytes | bytearray,
    max_bytes: int = DEFAULT_MAX_BYTES,
    language: str | None = None,
) -> list[dict[str, object]]:
    """Return every candidate encoding for the given byte string, best first.

    Each entry has ``'encoding'`` and ``'confidence'`` keys.  The first entry
    always describes the primary result (including any *language* boost), so
    the list is never empty.
    """
    result = _detect(byte_str, max_bytes, language)
    primary = Candidate(result.encoding, result.confidence).to_dict()
    return [primary] + [c.to_dict() for c in result.candidates[1:]]


def convert(
    data: bytes | bytearray | memoryview,
    from_encoding: Encoding | str,
    to_encoding: Encoding | str,
    errors: str = "strict",
    replacement: int = DEFAULT_REPLACEMENT,
) -> bytes:
    """Convert *data* between two encodings.

    :param errors: ``"strict"`` raises on the first unmappable byte or
        character; ``"replace"`` substitutes *replacement* instead.
    :raises ValueError: For an unknown *errors* mode.
    :raises CodeshiftError: In strict mode, for the first conversion failure.
    """
    if errors not in _ERROR_MODES:
        msg = f"errors must be one of {sorted(_ERROR_MODES)}, not {errors!r}"
        raise ValueError(msg)
    translator = Translator(from_encoding, to_encoding)
    if errors == "replace":
        return translator.convert_lossy(data, replacement)
    return translator.convert(data)
