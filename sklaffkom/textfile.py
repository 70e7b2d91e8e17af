"""The on-disk format of a single conference or mailbox text.

A text file holds a header line of colon-separated numbers, a subject
line, ``size`` lines of body and then one ``number:author`` line for
every comment written to the text.
"""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass, field

COPY_TO = "Kopia till"


class TextType(enum.IntEnum):
    """Kinds of texts: ordinary texts and surveys."""

    TEXT = 0
    SURVEY = 1


@dataclass
class SurveyInfo:
    """Extra header data of a survey text."""

    n_questions: int
    time: int


@dataclass
class TextHeader:
    """The header of a text."""

    author: int = 0
    time: int = 0
    comment_num: int = 0
    comment_conf: int = 0
    comment_author: int = 0
    size: int = 0
    type: TextType = TextType.TEXT
    subject: str = ""
    survey: SurveyInfo | None = None
    num: int = 0

    def format(self, number: int) -> str:
        """The header and subject lines for a text stored as *number*."""
        fields = [
            number,
            self.author,
            self.time,
            self.comment_num,
            self.comment_conf,
            self.comment_author,
            self.size,
            int(self.type),
        ]
        if self.type == TextType.SURVEY:
            if self.survey is None:
                raise ValueError("survey text without survey information")
            fields += [self.survey.n_questions, self.survey.time]
        return ":".join(str(f) for f in fields) + "\n" + self.subject + "\n"


@dataclass
class Comment:
    """A reference from a text to one of its comments."""

    num: int
    author: int


@dataclass
class TextEntry:
    """A parsed text: header, body lines and comment references."""

    header: TextHeader
    body: list[str] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)

    def body_text(self) -> str:
        """The body as one string, each line ending in a newline."""
        return "".join(line + "\n" for line in self.body)


def count_lines(text: str) -> int:
    """The number of newline characters in *text*."""
    return text.count("\n")


def _ints(line: str, what: str) -> list[int]:
    try:
        return [int(part) for part in line.strip().split(":")]
    except ValueError:
        raise ValueError(f"bad {what} line {line!r}") from None


def _parse_header(line: str) -> TextHeader:
    values = _ints(line, "header")
    if len(values) < 7:
        raise ValueError(f"short header line {line!r}")
    num, author, time, comment_num, comment_conf, comment_author, size = values[:7]
    text_type = TextType.TEXT
    survey = None
    if len(values) >= 8:
        try:
            text_type = TextType(values[7])
        except ValueError:
            raise ValueError(f"unknown text type {values[7]}") from None
    if text_type == TextType.SURVEY:
        if len(values) < 10:
            raise ValueError(f"survey header without survey fields {line!r}")
        survey = SurveyInfo(n_questions=values[8], time=values[9])
    if size < 0:
        raise ValueError(f"negative text size in {line!r}")
    return TextHeader(
        author=author,
        time=time,
        comment_num=comment_num,
        comment_conf=comment_conf,
        comment_author=comment_author,
        size=size,
        type=text_type,
        survey=survey,
        num=num,
    )


def parse_text_entry(data: str) -> TextEntry:
    """Parse the contents of a text file."""
    lines = data.split("\n")
    if data.endswith("\n"):
        lines.pop()
    if not lines or not lines[0].strip():
        raise ValueError("text without header")
    header = _parse_header(lines[0])
    header.subject = lines[1] if len(lines) > 1 else ""
    rest = lines[2:]
    body = rest[: header.size]
    comments = []
    for line in rest[header.size:]:
        if not line.strip():
            continue
        values = _ints(line, "comment")
        if len(values) < 2:
            raise ValueError(f"bad comment line {line!r}")
        comments.append(Comment(num=values[0], author=values[1]))
    return TextEntry(header=header, body=body, comments=comments)


def format_text(header: TextHeader, number: int, body: str) -> str:
    """The full contents of a text file stored as *number*.

    The header's size is taken from the number of lines in *body*.
    """
    if body and not body.endswith("\n"):
        body += "\n"
    sized = dataclasses.replace(header, size=count_lines(body))
    return sized.format(number) + body


def append_comment(data: str, num: int, author: int) -> str:
    """Add a reference to comment *num* by *author* to a text's contents."""
    if data and not data.endswith("\n"):
        data += "\n"
    return f"{data}{num}:{author}\n"


def mail_copy_text(
    number: int, author: int, recipient: str, subject: str, body: str, now: int
) -> str:
    """The text kept in the sender's mailbox as a copy of outgoing mail."""
    if body and not body.endswith("\n"):
        body += "\n"
    header = TextHeader(
        author=author,
        time=now,
        size=count_lines(body) + 2,
        type=TextType.TEXT,
        subject=subject,
    )
    return header.format(number) + f"<{COPY_TO} {recipient}>\n\n" + body


def shorten_author(name: str) -> str:
    """Shorten a long e-mail author to the name in parentheses or brackets."""
    if len(name) <= 33:
        return name
    for opening, closing in (("(", ")"), ("<", ">")):
        start = name.find(opening)
        if start == -1:
            continue
        end = name.find(closing, start)
        if end != -1:
            return name[start + 1:end]
        if start - 1 > 0:
            return name[: start - 1]
        return name
    return name