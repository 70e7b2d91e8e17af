"""The user file, user name lookups and users' activity notes."""

from __future__ import annotations

import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

ENCODING = "latin-1"
SYSOP_UID = -2
SYSOP_NAME = "Sysop"

# Sort positions of the 7-bit Swedish letters: å, ä, ö after z (and the
# capitals Å, Ä, Ö after Z), in Swedish alphabetical order.
_SORT_KEYS = {
    "]": "Z\x01",
    "[": "Z\x02",
    "\\": "Z\x03",
    "}": "z\x01",
    "{": "z\x02",
    "|": "z\x03",
}


@dataclass
class UserEntry:
    """One line of the user file: uid, time of last session and name."""

    num: int
    last_session: int = 0
    name: str = ""

    def format(self) -> str:
        """The line for this user in the user file."""
        return f"{self.num}:{self.last_session}:{self.name}\n"

    @classmethod
    def parse(cls, line: str) -> "UserEntry":
        """Read a user file line; ValueError if it is malformed."""
        parts = line.rstrip("\n").split(":", 2)
        if len(parts) != 3:
            raise ValueError(f"bad user line {line!r}")
        try:
            num, last = int(parts[0]), int(parts[1])
        except ValueError:
            raise ValueError(f"bad user line {line!r}") from None
        return cls(num=num, last_session=last, name=parts[2])


class UserFile:
    """The file listing every user of the system."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def _read(self) -> str:
        try:
            return self.path.read_text(encoding=ENCODING)
        except FileNotFoundError:
            return ""

    def entries(self) -> list[UserEntry]:
        """All users, in file order."""
        return list(self._iter_entries())

    def _iter_entries(self) -> Iterator[UserEntry]:
        for line in self._read().split("\n"):
            if line.strip():
                yield UserEntry.parse(line)

    def _find(self, uid: int) -> UserEntry | None:
        return next((e for e in self._iter_entries() if e.num == uid), None)

    def name_of(self, uid: int) -> str | None:
        """The name of user *uid*, or None if there is no such user."""
        if not uid:
            return None
        if uid == SYSOP_UID:
            return SYSOP_NAME
        entry = self._find(uid)
        return entry.name if entry else None

    def uid_of(self, name: str) -> int | None:
        """The uid of the user called exactly *name*, or None."""
        if name is None:
            return None
        entry = next((e for e in self._iter_entries() if e.name == name), None)
        return entry.num if entry else None

    def last_session(self, uid: int) -> int:
        """When user *uid* last logged in, or 0 if unknown."""
        entry = self._find(uid)
        return entry.last_session if entry else 0

    def add(self, entry: UserEntry) -> None:
        """Append *entry* to the user file, creating the file if needed."""
        data = self._read()
        if data and not data.endswith("\n"):
            data += "\n"
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(data + entry.format(), encoding=ENCODING)


def _sort_key(name: str) -> tuple[str, str]:
    words = name.split()
    surname = words[-1] if words else ""
    given = " ".join(words[:-1])

    def swedish(text: str) -> str:
        return "".join(_SORT_KEYS.get(ch, ch) for ch in text)

    return swedish(surname), swedish(given)


def sort_names(names: Iterable[str]) -> list[str]:
    """Names sorted by surname, then given names, in Swedish letter order."""
    return sorted(names, key=_sort_key)


def idle_minutes(path: str | os.PathLike[str], now: float | None = None) -> int:
    """Minutes since the activity file at *path* was last touched, or 0."""
    try:
        accessed = os.stat(path).st_atime
    except OSError:
        return 0
    current = time.time() if now is None else now
    return int((current - accessed) / 60)


def touch_activity(path: str | os.PathLike[str]) -> None:
    """Note activity by touching *path*, creating it when missing."""
    target = Path(path)
    try:
        os.utime(target, None)
    except FileNotFoundError:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.touch()