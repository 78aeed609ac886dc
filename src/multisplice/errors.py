"""Exceptions raised by the splicer."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .edit import Edit


class SpliceError(ValueError):
    """Base class for rejected edits and failed renders."""


class OutOfRangeError(SpliceError, IndexError):
    """Raised when an offset falls outside ``[0, len(original)]``."""

    def __init__(self, offset: int, length: int) -> None:
        super().__init__(f"Offset {offset} out of range for length {length}")
        self.offset = offset
        self.length = length


class InvalidRangeError(SpliceError):
    """Raised when a range starts after it ends."""

    def __init__(self, start: int, end: int) -> None:
        super().__init__(f"Range start {start} is greater than end {end}")
        self.start = start
        self.end = end


class OverlapError(SpliceError):
    """Raised at render time when two recorded edits cover the same units."""

    def __init__(self, first: "Edit", second: "Edit") -> None:
        message = (
            f"Edit [{second.start}, {second.end}) overlaps "
            f"edit [{first.start}, {first.end})"
        )
        super().__init__(message)
        self.first = first
        self.second = second
