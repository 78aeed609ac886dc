"""Queue edits addressed by original offsets and render them in one pass."""

from __future__ import annotations

from typing import Generic

from multisplice.runtime import telemetry
from multisplice.runtime.telemetry import span

from .edit import Edit, Text
from .errors import OverlapError, SpliceError
from .ranges import RangeKey, check_bounds, resolve_range


class Splicer(Generic[Text]):
    """Accumulates edits against an immutable ``original``.

    Every offset refers to ``original`` regardless of edits queued before
    it, so callers never shift positions by hand. ``original`` may be a
    ``str`` (code point offsets) or ``bytes`` (byte offsets); replacements
    must be of the same type.
    """

    def __init__(self, original: Text, *, logger_name: str | None = None) -> None:
        if not isinstance(original, (str, bytes)):
            raise TypeError(
                f"Splicer needs str or bytes, got {type(original).__name__}"
            )
        self._original = original
        self._edits: list[Edit[Text]] = []
        self._logger_name = logger_name

    @property
    def original(self) -> Text:
        return self._original

    @property
    def edits(self) -> tuple[Edit[Text], ...]:
        """Recorded edits in call order."""

        return tuple(self._edits)

    def splice(self, start: int, end: int, replacement: Text) -> None:
        """Replace ``original[start:end]`` with ``replacement`` at render time.

        Raises ``OutOfRangeError`` or ``InvalidRangeError`` immediately; a
        rejected call leaves the recorded edits untouched.
        """

        with span(
            "splicer::splice",
            logger_name=self._logger_name,
            metadata={"start": start, "end": end, "edits": len(self._edits)},
        ) as handle:
            try:
                value = self._coerce(replacement)
                check_bounds(start, end, len(self._original))
            except (SpliceError, TypeError) as exc:
                handle.add_metadata("reason", type(exc).__name__)
                raise
            self._edits.append(Edit(start, end, value))

    def splice_range(self, key: RangeKey, replacement: Text) -> None:
        """``splice`` with a slice, range, ``(start, end)`` tuple or single index."""

        start, end = resolve_range(key, len(self._original))
        self.splice(start, end, replacement)

    def insert(self, at: int, text: Text) -> None:
        self.splice(at, at, text)

    def remove(self, start: int, end: int) -> None:
        self.splice(start, end, self._original[:0])

    def slice(self, start: int | None = None, end: int | None = None) -> Text:
        """Render the spliced result for ``original[start:end]``.

        Without arguments the whole string is rendered. If nothing has been
        queued the original object is returned as is, with no copy. An edit
        straddling a window boundary contributes its whole replacement.

        Raises ``OverlapError`` when any two recorded edits claim the same
        units, even if neither touches the requested window.
        """

        length = len(self._original)
        with span(
            "splicer::render",
            logger_name=self._logger_name,
            metadata={"edits": len(self._edits)},
        ) as handle:
            lo, hi = check_bounds(*resolve_range((start, end), length), length)
            handle.add_metadata("window", (lo, hi))
            if not self._edits:
                result = self._original if (lo, hi) == (0, length) else self._original[lo:hi]
            else:
                try:
                    ordered = self._ordered()
                except OverlapError as exc:
                    handle.add_metadata("conflict", f"{exc.first.span}/{exc.second.span}")
                    telemetry.record_event(
                        "splicer.overlap",
                        level="warning",
                        data={"first": exc.first.span, "second": exc.second.span},
                        logger_name=self._logger_name,
                    )
                    raise
                result = self._render(ordered, lo, hi)

            telemetry.record_event(
                "splicer.render",
                level="debug",
                data={
                    "window": (lo, hi),
                    "edits": len(self._edits),
                    "borrowed": result is self._original,
                },
                logger_name=self._logger_name,
            )
            return result

    def slice_range(self, key: RangeKey) -> Text:
        start, end = resolve_range(key, len(self._original))
        return self.slice(start, end)

    def _coerce(self, replacement: object) -> Text:
        if isinstance(self._original, bytes):
            if isinstance(replacement, (bytes, bytearray, memoryview)):
                return bytes(replacement)  # type: ignore[return-value]
        elif isinstance(replacement, str):
            return replacement  # type: ignore[return-value]
        raise TypeError(
            f"Replacement must match {type(self._original).__name__}, "
            f"got {type(replacement).__name__}"
        )

    def _ordered(self) -> list[Edit[Text]]:
        # At a shared offset insertions come first, latest call leftmost, so
        # each new insertion lands in front of the ones already queued there.
        indexed = sorted(
            enumerate(self._edits),
            key=lambda item: (
                item[1].start,
                not item[1].is_insertion,
                -item[0] if item[1].is_insertion else item[0],
            ),
        )
        ordered = [edit for _, edit in indexed]

        for previous, edit in zip(ordered, ordered[1:]):
            if previous.overlaps(edit):
                raise OverlapError(previous, edit)
        return ordered

    def _render(self, ordered: list[Edit[Text]], start: int, end: int) -> Text:
        source = self._original
        pieces: list[Text] = []
        pos = start
        for edit in ordered:
            if edit.start > end:
                break
            if edit.is_insertion:
                if edit.start < start:
                    continue
            elif edit.end <= start or edit.start >= end:
                continue
            if edit.start > pos:
                pieces.append(source[pos : edit.start])
            pieces.append(edit.replacement)
            pos = max(pos, edit.end)
        if end > pos:
            pieces.append(source[pos:end])
        return source[:0].join(pieces)

    def __getitem__(self, key: RangeKey) -> Text:
        return self.slice_range(key)

    def __setitem__(self, key: RangeKey, replacement: Text) -> None:
        self.splice_range(key, replacement)

    def __delitem__(self, key: RangeKey) -> None:
        self.splice_range(key, self._original[:0])

    def __len__(self) -> int:
        return len(self._edits)

    def __str__(self) -> str:
        if isinstance(self._original, bytes):
            return repr(self)
        return self.slice()  # type: ignore[return-value]

    def __bytes__(self) -> bytes:
        if isinstance(self._original, str):
            raise TypeError("bytes() needs a bytes source; use str() instead")
        return self.slice()  # type: ignore[return-value]

    def __repr__(self) -> str:
        return f"Splicer(original={self._original!r}, edits={len(self._edits)})"


__all__ = ["Splicer"]
