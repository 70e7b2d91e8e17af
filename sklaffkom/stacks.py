"""Last-in, first-out stacks of text numbers waiting to be read."""

from __future__ import annotations


class TextStack:
    """A stack of ``(text number, conference)`` pairs.

    The same structure serves the unread stack, the temporary unread
    stack, the read stack and the comment stack; the comment stack
    simply leaves the conference at 0.
    """

    def __init__(self) -> None:
        self._items: list[tuple[int, int]] = []

    def push(self, num: int, conf: int = 0) -> None:
        """Put text *num* of conference *conf* on top of the stack."""
        self._items.append((int(num), int(conf)))

    def pop(self) -> tuple[int, int]:
        """Take the top ``(num, conf)`` pair off the stack.

        Raises IndexError when the stack is empty.
        """
        if not self._items:
            raise IndexError("pop from empty text stack")
        return self._items.pop()

    def clear(self) -> None:
        """Empty the stack."""
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"TextStack({self._items!r})"