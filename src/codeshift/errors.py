"""Exceptions raised by the translation engine."""

from __future__ import annotations

import abc


class CodeshiftError(Exception):
    """Base class for every conversion error."""


class PositionalError(CodeshiftError, abc.ABC):
    """An error tied to an offset in the converted data."""

    position: int

    @abc.abstractmethod
    def shifted(self, offset: int) -> PositionalError:
        """Return a copy of this error with *offset* added to its position."""


class UnmappableSourceError(PositionalError):
    """A source byte has no character in the source encoding.

    Also raised by single-byte tables when the character exists but has no
    representation in the target encoding.
    """

    def __init__(self, byte: int, position: int) -> None:
        self.byte = byte
        self.position = position
        super().__init__(f"Unmappable source byte 0x{byte:02X} at position {position}")

    def shifted(self, offset: int) -> UnmappableSourceError:
        return UnmappableSourceError(self.byte, self.position + offset)


class UnmappableTargetError(PositionalError):
    """A decoded character cannot be encoded in the target encoding.

    *position* is the byte offset of the character in the UTF-8 pivot.
    """

    def __init__(self, character: str, position: int) -> None:
        self.character = character
        self.position = position
        super().__init__(f"Cannot encode character {character!r} at position {position}")

    def shifted(self, offset: int) -> UnmappableTargetError:
        return UnmappableTargetError(self.character, self.position + offset)


class InvalidInputError(CodeshiftError, ValueError):
    """The input is not well-formed in its declared encoding."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Invalid input: {message}")


class UnsupportedConversionError(CodeshiftError):
    """The backing engine cannot perform the requested conversion."""

    def __init__(self, from_encoding: str, to_encoding: str) -> None:
        self.from_encoding = from_encoding
        self.to_encoding = to_encoding
        super().__init__(f"Unsupported conversion from {from_encoding} to {to_encoding}")
