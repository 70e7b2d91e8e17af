"""Reading and writing of users' personal settings files.

A settings file is a list of sections. Each section starts with a line
``![heading]`` and holds every line up to the next heading.
"""

from __future__ import annotations

import dataclasses
import os
import re
from dataclasses import dataclass
from pathlib import Path

ENCODING = "latin-1"

FIELDS = (
    "adress",
    "postnr",
    "ort",
    "tele1",
    "tele2",
    "tele3",
    "org",
    "note",
    "editor",
    "email1",
    "email2",
    "flags",
    "paid",
    "login",
    "timeout",
    "paydate",
    "sig",
    "url",
)

WRITE_ORDER = (
    "adress",
    "postnr",
    "ort",
    "tele1",
    "tele2",
    "tele3",
    "email1",
    "email2",
    "url",
    "org",
    "note",
    "sig",
    "editor",
    "flags",
    "timeout",
    "paid",
    "login",
    "paydate",
)

_HEADING = re.compile(r"(?:^|(?<=\n))!\[([^\]]*)\]")


@dataclass
class SklaffRC:
    """A user's settings: address details, note, signature and flags."""

    adress: str = ""
    postnr: str = ""
    ort: str = ""
    tele1: str = ""
    tele2: str = ""
    tele3: str = ""
    org: str = ""
    note: str = ""
    editor: str = ""
    email1: str = ""
    email2: str = ""
    flags: str = ""
    paid: str = ""
    login: str = ""
    timeout: str = ""
    paydate: str = ""
    sig: str = ""
    url: str = ""


def parse_sklaffrc(text: str, rc: SklaffRC | None = None) -> SklaffRC:
    """Read the sections of *text* into *rc* (or a new SklaffRC).

    Sections present in *text* replace the values in *rc*; unknown
    headings are ignored.
    """
    rc = SklaffRC() if rc is None else rc
    matches = list(_HEADING.finditer(text))
    for index, match in enumerate(matches):
        name = match.group(1)
        line_end = text.find("\n", match.end())
        if name not in FIELDS or line_end == -1:
            continue
        start = line_end + 1
        if index + 1 < len(matches):
            stop = matches[index + 1].start() - 1
            value = text[start:max(start, stop)]
        else:
            value = text[start:]
            if value.endswith("\n"):
                value = value[:-1]
        setattr(rc, name, value)
    return rc


def format_sklaffrc(rc: SklaffRC) -> str:
    """The settings file contents for *rc*; empty values are left out."""
    parts = []
    for name in WRITE_ORDER:
        value = getattr(rc, name)
        if value:
            parts.append(f"![{name}]\n{value}\n")
    return "".join(parts)


def read_sklaffrc(
    global_path: str | os.PathLike[str] | None,
    user_path: str | os.PathLike[str] | None,
) -> SklaffRC:
    """Read the global settings and then the user's, which override them.

    A missing file is passed over.
    """
    rc = SklaffRC()
    for path in (global_path, user_path):
        if path is None:
            continue
        try:
            text = Path(path).read_text(encoding=ENCODING)
        except FileNotFoundError:
            continue
        parse_sklaffrc(text, rc)
    return rc


def write_sklaffrc(
    path: str | os.PathLike[str],
    rc: SklaffRC,
    plan_path: str | os.PathLike[str] | None = None,
) -> None:
    """Write *rc* to *path*, and its signature to *plan_path* if given."""
    Path(path).write_text(format_sklaffrc(rc), encoding=ENCODING)
    if plan_path is not None:
        plan = f"{rc.sig}\n" if rc.sig else ""
        Path(plan_path).write_text(plan, encoding=ENCODING)


def copy_rc(rc: SklaffRC, **changes: str) -> SklaffRC:
    """A copy of *rc* with some values changed."""
    return dataclasses.replace(rc, **changes)