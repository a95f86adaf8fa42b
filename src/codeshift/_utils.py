"""Internal shared utilities for codeshift."""

from __future__ import annotations

import os

from codeshift.enums import Encoding

#: Default maximum number of bytes to examine during detection.
DEFAULT_MAX_BYTES: int = 8192

#: Default streaming buffer size in bytes.
DEFAULT_BUFFER_SIZE: int = 64 * 1024

#: Default replacement byte for lossy conversion (``?``).
DEFAULT_REPLACEMENT: int = 0x3F

#: Width of one block in the bulk translation kernel.
BULK_WIDTH: int = 32

_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def bulk_enabled() -> bool:
    """Return whether the bulk kernel is the default, per ``CODESHIFT_BULK``."""
    return os.environ.get("CODESHIFT_BULK", "1").strip().lower() not in _FALSE_VALUES


def _validate_max_bytes(max_bytes: int) -> None:
    """Raise ValueError if *max_bytes* is not a positive integer."""
    if isinstance(max_bytes, bool) or not isinstance(max_bytes, int) or max_bytes < 1:
        msg = "max_bytes must be a positive integer"
        raise ValueError(msg)


def _validate_buffer_size(buffer_size: int) -> None:
    """Raise ValueError if *buffer_size* is not a positive integer."""
    if (
        isinstance(buffer_size, bool)
        or not isinstance(buffer_size, int)
        or buffer_size < 1
    ):
        msg = "buffer_size must be a positive integer"
        raise ValueError(msg)


def _validate_replacement(replacement: int) -> None:
    """Raise ValueError if *replacement* is not a single byte value."""
    if (
        isinstance(replacement, bool)
        or not isinstance(replacement, int)
        or not 0 <= replacement <= 0xFF
    ):
        msg = "replacement must be an integer in range 0-255"
        raise ValueError(msg)


def _as_encoding(value: Encoding | str) -> Encoding:
    """Return *value* as an :class:`Encoding`, resolving names and aliases."""
    if isinstance(value, Encoding):
        return value
    return Encoding.from_name(value)
