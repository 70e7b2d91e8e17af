"""Sets of read text numbers, kept as sorted closed intervals."""

from __future__ import annotations

from bisect import bisect_left
from typing import Iterable, Iterator


class ReadIntervals:
    """The texts of one conference that a user has read.

    The numbers are held as sorted, disjoint intervals ``(first, last)``.
    """

    def __init__(self, intervals: Iterable[tuple[int, int]] = ()) -> None:
        spans = sorted((int(a), int(b)) for a, b in intervals)
        previous_end = None
        for first, last in spans:
            if first > last:
                raise ValueError(f"bad interval {first}-{last}")
            if previous_end is not None and first <= previous_end:
                raise ValueError(f"overlapping interval {first}-{last}")
            previous_end = last
        self._spans: list[list[int]] = [[a, b] for a, b in spans]

    @property
    def intervals(self) -> tuple[tuple[int, int], ...]:
        """The intervals as ``(first, last)`` pairs in ascending order."""
        return tuple((a, b) for a, b in self._spans)

    def __iter__(self) -> Iterator[tuple[int, int]]:
        return iter(self.intervals)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ReadIntervals):
            return NotImplemented
        return self._spans == other._spans

    def __repr__(self) -> str:
        return f"ReadIntervals({list(self.intervals)!r})"

    def _index_of(self, text: int) -> int | None:
        starts = [span[0] for span in self._spans]
        pos = bisect_left(starts, text + 1) - 1
        if pos >= 0 and self._spans[pos][0] <= text <= self._spans[pos][1]:
            return pos
        return None

    def is_read(self, text: int) -> bool:
        """Whether *text* is marked as read."""
        return self._index_of(text) is not None

    def mark_read(self, text: int) -> bool:
        """Mark *text* as read; False if it already was."""
        if self.is_read(text):
            return False
        below = next((i for i, s in enumerate(self._spans) if s[1] == text - 1), None)
        above = next((i for i, s in enumerate(self._spans) if s[0] == text + 1), None)
        if below is not None and above is not None:
            self._spans[below][1] = self._spans[above][1]
            del self._spans[above]
        elif above is not None:
            self._spans[above][0] = text
        elif below is not None:
            self._spans[below][1] = text
        else:
            starts = [span[0] for span in self._spans]
            self._spans.insert(bisect_left(starts, text), [text, text])
        return True

    def mark_unread(self, text: int) -> bool:
        """Mark *text* as unread; False if it was not marked as read."""
        pos = self._index_of(text)
        if pos is None:
            return False
        first, last = self._spans[pos]
        if first == last:
            del self._spans[pos]
        elif first == text:
            self._spans[pos][0] = text + 1
        elif last == text:
            self._spans[pos][1] = text - 1
        else:
            self._spans[pos][1] = text - 1
            self._spans.insert(pos + 1, [text + 1, last])
        return True

    def first_unread(self, last: int) -> int:
        """The first unread text at or before *last*, or 0 if none."""
        if not self._spans or self._spans[0][0] > 1:
            text = 1
        else:
            text = self._spans[0][1] + 1
        return 0 if text > last else text

    @classmethod
    def parse(cls, spec: str) -> "ReadIntervals":
        """Read intervals written as ``1-5,7,9-12``."""
        spans = []
        for part in spec.strip().split(","):
            part = part.strip()
            if not part:
                continue
            first, sep, last = part.partition("-")
            try:
                a = int(first)
                b = int(last) if sep else a
            except ValueError:
                raise ValueError(f"bad interval {part!r}") from None
            spans.append((a, b))
        return cls(spans)

    def format(self) -> str:
        """Write the intervals as ``1-5,7,9-12``."""
        return ",".join(
            f"{a}" if a == b else f"{a}-{b}" for a, b in self._spans
        )