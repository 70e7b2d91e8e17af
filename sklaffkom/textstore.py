"""A directory of texts, one file per text number."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

from .textfile import TextEntry, TextHeader, append_comment, format_text, parse_text_entry

ENCODING = "latin-1"


class TextStore:
    """The texts of one conference or mailbox, stored as numbered files."""

    def __init__(self, directory: str | os.PathLike[str]) -> None:
        self.directory = Path(directory)

    def path(self, num: int) -> Path:
        """The file that holds text *num*."""
        return self.directory / str(int(num))

    def exists(self, num: int) -> bool:
        """Whether text *num* is present."""
        return num > 0 and self.path(num).is_file()

    def read_raw(self, num: int) -> str:
        """The unparsed contents of text *num*."""
        return self.path(num).read_text(encoding=ENCODING)

    def read(self, num: int) -> TextEntry:
        """Read and parse text *num*; FileNotFoundError if it is missing."""
        entry = parse_text_entry(self.read_raw(num))
        entry.header.num = int(num)
        return entry

    def write(self, num: int, header: TextHeader, body: str) -> Path:
        """Store *body* under *header* as text *num*."""
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self.path(num)
        target.write_text(format_text(header, int(num), body), encoding=ENCODING)
        return target

    def write_raw(self, num: int, data: str) -> Path:
        """Store already formatted text contents as text *num*."""
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self.path(num)
        target.write_text(data, encoding=ENCODING)
        return target

    def add_comment(self, num: int, comment_num: int, author: int) -> None:
        """Record that text *comment_num* by *author* comments text *num*."""
        data = self.read_raw(num)
        self.write_raw(num, append_comment(data, comment_num, author))

    def numbers(self) -> list[int]:
        """The numbers of all stored texts, ascending."""
        if not self.directory.is_dir():
            return []
        return sorted(
            int(p.name)
            for p in self.directory.iterdir()
            if p.name.isdigit() and p.is_file() and int(p.name) > 0
        )

    def first_number(self) -> int:
        """The lowest stored text number, or 0 if there are none."""
        nums = self.numbers()
        return nums[0] if nums else 0

    def last_number(self) -> int:
        """The highest stored text number, or 0 if there are none."""
        nums = self.numbers()
        return nums[-1] if nums else 0

    def tree_top(self, num: int) -> int:
        """The first still existing text of the comment chain *num* is in."""
        top = num
        text = num
        seen: set[int] = set()
        while text and text not in seen:
            seen.add(text)
            try:
                header = self.read(text).header
            except FileNotFoundError:
                return top
            if header.comment_num and not header.comment_conf:
                text = header.comment_num
            else:
                text = 0
            if self.exists(text):
                top = text
        return top

    def list_subjects(self, prefix: str) -> list[TextEntry]:
        """Texts whose subject starts with *prefix*, ignoring case, newest first."""
        wanted = prefix.rstrip().upper()
        return list(self._matching(wanted))

    def _matching(self, wanted: str) -> Iterator[TextEntry]:
        for num in reversed(self.numbers()):
            entry = self.read(num)
            if entry.header.subject.upper().startswith(wanted):
                yield entry

    def age_to_textno(self, age: int, now: int) -> int:
        """How many of the latest text numbers are newer than *age* seconds.

        Counting runs down from the last text and stops at the first text
        written at or before ``now - age``; missing numbers count too.
        """
        cutoff = now - age
        first, last = self.first_number(), self.last_number()
        count = 0
        for num in range(last, first - 1, -1):
            if num and self.exists(num) and self.read(num).header.time <= cutoff:
                return count
            count += 1
        return count