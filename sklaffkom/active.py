"""The file of users who are logged in right now."""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

ENCODING = "latin-1"
FROM_FIELD_LEN = 80


def _check_field(value: str, what: str) -> str:
    if ":" in value or "\n" in value:
        raise ValueError(f"{what} may not contain ':' or a newline: {value!r}")
    return value


@dataclass
class ActiveEntry:
    """One logged-in session: user, process, login time, availability, origin, tty."""

    user: int
    pid: int
    login_time: int = 0
    avail: int = 0
    from_host: str = ""
    tty: str = ""

    def format(self) -> str:
        """The line for this session in the active file."""
        _check_field(self.from_host, "from field")
        _check_field(self.tty, "tty")
        return (
            f"{self.user}:{self.pid}:{self.login_time}:{self.avail}:"
            f"{self.from_host}:{self.tty}:dum:dum:dum\n"
        )

    @classmethod
    def parse(cls, line: str) -> "ActiveEntry":
        """Read an active file line; ValueError if it is malformed."""
        parts = line.rstrip("\n").split(":")
        if len(parts) < 6:
            raise ValueError(f"bad active line {line!r}")
        try:
            user, pid, login_time, avail = (int(p) for p in parts[:4])
        except ValueError:
            raise ValueError(f"bad active line {line!r}") from None
        return cls(
            user=user,
            pid=pid,
            login_time=login_time,
            avail=avail,
            from_host=parts[4],
            tty=parts[5],
        )


class ActiveFile:
    """The list of active sessions, one line per logged-in user."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def _read(self) -> str:
        try:
            return self.path.read_text(encoding=ENCODING)
        except FileNotFoundError:
            return ""

    def _write(self, entries: list[ActiveEntry]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            "".join(e.format() for e in entries), encoding=ENCODING
        )

    def _iter_entries(self) -> Iterator[ActiveEntry]:
        for line in self._read().split("\n"):
            if line.strip():
                yield ActiveEntry.parse(line)

    def entries(self) -> list[ActiveEntry]:
        """All active sessions, in file order."""
        return list(self._iter_entries())

    def find(self, uid: int) -> ActiveEntry | None:
        """The session of user *uid*, or None if the user is not logged in."""
        return next((e for e in self._iter_entries() if e.user == uid), None)

    def is_active(self, uid: int) -> bool:
        """Whether user *uid* is logged in."""
        return self.find(uid) is not None

    def is_available(self, uid: int) -> bool:
        """Whether user *uid* is logged in and available for messages."""
        return any(e.user == uid and e.avail == 0 for e in self._iter_entries())

    def add(self, entry: ActiveEntry) -> None:
        """Append a session to the file, creating the file if needed."""
        entries = self.entries()
        entries.append(entry)
        self._write(entries)

    def remove(self, uid: int) -> bool:
        """Remove the session of user *uid*; False if there was none."""
        entries = self.entries()
        for index, entry in enumerate(entries):
            if entry.user == uid:
                del entries[index]
                self._write(entries)
                return True
        return False

    def _replace(self, uid: int, **changes: object) -> bool:
        entries = self.entries()
        for index, entry in enumerate(entries):
            if entry.user == uid:
                entries[index] = dataclasses.replace(entry, **changes)
                self._write(entries)
                return True
        return False

    def set_avail(self, uid: int, value: int) -> bool:
        """Set the availability flag of user *uid*; False if not logged in."""
        return self._replace(uid, avail=int(value))

    def set_from(self, uid: int, value: str) -> bool:
        """Set where user *uid* is logged in from; False if not logged in."""
        value = _check_field(value, "from field")[: FROM_FIELD_LEN - 1]
        return self._replace(uid, from_host=value)

    def active_minutes(self, uid: int, now: int) -> int | None:
        """Minutes user *uid* has been logged in, or None if not logged in."""
        entry = self.find(uid)
        if entry is None:
            return None
        return (int(now) - entry.login_time) // 60