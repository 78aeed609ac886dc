"""Edit records queued against an original string."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

Text = TypeVar("Text", str, bytes)
Span = tuple[int, int]  # (start, end), end exclusive


@dataclass(frozen=True, slots=True)
class Edit(Generic[Text]):
    """Replace ``original[start:end]`` with ``replacement``.

    Offsets always refer to the original string, never to a partially
    spliced copy. ``start == end`` is a pure insertion and an empty
    ``replacement`` is a deletion.
    """

    start: int
    end: int
    replacement: Text

    @property
    def span(self) -> Span:
        return (self.start, self.end)

    @property
    def width(self) -> int:
        return self.end - self.start

    @property
    def is_insertion(self) -> bool:
        return self.start == self.end

    def overlaps(self, other: "Edit[Text]") -> bool:
        """Whether the two edits claim at least one common unit.

        A zero-width edit overlaps a range only when it sits strictly
        inside it; touching at either boundary is adjacency.
        """

        if self.is_insertion and other.is_insertion:
            return False
        if self.is_insertion:
            return other.start < self.start < other.end
        if other.is_insertion:
            return self.start < other.start < self.end
        return self.start < other.end and other.start < self.end
