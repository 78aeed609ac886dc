"""Range normalization and bounds checks shared by splice and render calls."""

from __future__ import annotations

from .edit import Span
from .errors import InvalidRangeError, OutOfRangeError

RangeKey = slice | range | tuple[int | None, int | None] | int


def resolve_range(key: RangeKey, length: int) -> Span:
    """Resolve any supported range spelling to concrete ``(start, end)``.

    ``slice(a, b)``, ``slice(None, b)``, ``slice(a, None)``, ``slice(None)``,
    ``range(a, b)``, ``(a, b)`` tuples with optional ``None`` sides, and a
    bare ``int`` for a single unit. Unbounded sides resolve against
    ``length``. Nothing is clamped; use ``check_bounds`` on the result.
    """

    if isinstance(key, bool):
        raise TypeError("Range key cannot be a bool")
    if isinstance(key, int):
        return (key, key + 1)
    if isinstance(key, slice):
        if key.step not in (None, 1):
            raise ValueError(f"Range step must be 1, got {key.step!r}")
        return _resolve_bounds(key.start, key.stop, length)
    if isinstance(key, range):
        if key.step != 1:
            raise ValueError(f"Range step must be 1, got {key.step!r}")
        return (key.start, key.stop)
    if isinstance(key, tuple) and len(key) == 2:
        return _resolve_bounds(key[0], key[1], length)
    raise TypeError(f"Unsupported range key {key!r}")


def _resolve_bounds(start: int | None, end: int | None, length: int) -> Span:
    return (
        0 if start is None else _as_offset(start),
        length if end is None else _as_offset(end),
    )


def _as_offset(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Offsets must be integers, got {value!r}")
    return value


def check_bounds(start: int, end: int, length: int) -> Span:
    """Validate ``0 <= start <= end <= length`` and return the span.

    Offsets are checked before ordering so an offset past the end reports
    ``OutOfRangeError`` even when the pair is also reversed.
    """

    for offset in (start, end):
        if _as_offset(offset) < 0 or offset > length:
            raise OutOfRangeError(offset, length)
    if start > end:
        raise InvalidRangeError(start, end)
    return (start, end)


__all__ = ["RangeKey", "check_bounds", "resolve_range"]
