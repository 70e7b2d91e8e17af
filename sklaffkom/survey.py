"""Survey questions: recognising them, checking answers, showing results."""

from __future__ import annotations

import enum
import math
import re
from typing import Iterable, Sequence

MSG_TOTANSWERS = "Totalt antal svar"
MSG_SURVDELIMIT1 = "------ Svar ------"
MSG_SURVDELIMIT2 = "------------------"
MSG_BLANKVOTES = "Blanka"
MSG_NOANSWERS = "Antal svar"
MSG_ANSWER2 = "Svar"
MSG_MEAN = "Medel"
MSG_STD = "Standardavvikelse"

DEFAULT_REPORT_DELAY = "7:0:0"

_FLOAT = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INT = re.compile(r"\s*[+-]?\d+")


class QuestionType(enum.IntEnum):
    """The kinds of survey questions."""

    FREETEXT = 0
    FREENUMBER = 1
    SINGLECHOICE = 2
    MULTIPLECHOICE = 3
    INTERVAL = 4


def _atol(text: str) -> int:
    match = _INT.match(text)
    return int(match.group()) if match else 0


def _atof(text: str) -> float:
    match = _FLOAT.match(text)
    return float(match.group()) if match else 0.0


def parse_survey_line(line: str) -> QuestionType | None:
    """The question type of a survey body line, or None if not a question.

    Questions are lines like ``## t``, ``## n``, ``## s:4``, ``## m:5``
    and ``## i:1:10``.
    """
    if not line.startswith("##"):
        return None
    letter = line[2:].lstrip(" ")[:1].lower()
    if letter == "t":
        return QuestionType.FREETEXT
    if letter == "n":
        return QuestionType.FREENUMBER
    colon = line.find(":")
    if colon == -1:
        return None
    count = _atol(line[colon + 1:])
    second = line.find(":", colon + 1)
    if second != -1 and letter == "i" and count < _atol(line[second + 1:]):
        return QuestionType.INTERVAL
    if count < 2 or count > 26:
        return None
    if letter == "s":
        return QuestionType.SINGLECHOICE
    if letter == "m":
        return QuestionType.MULTIPLECHOICE
    return None


def parse_number(text: str) -> float:
    """Read a numeric answer; ``a-b`` is the midpoint and ``a/b`` a quotient."""
    if not text:
        return 0.0
    dash = text.find("-", 1)
    if dash == -1:
        slash = text.find("/", 1)
        if slash == -1:
            return _atof(text)
        divisor = parse_number(text[slash + 1:])
        numerator = parse_number(text[:slash])
        return numerator / divisor if divisor != 0 else numerator
    return (parse_number(text[:dash]) + parse_number(text[dash + 1:])) / 2.0


def count_questions(text: str) -> int:
    """How many question lines the survey *text* holds."""
    return sum(
        1 for line in text.split("\n") if line and parse_survey_line(line) is not None
    )


def parse_report_delay(reply: str) -> int:
    """Seconds until the report, from a ``days:hours:minutes`` reply.

    An empty reply means seven days. Raises ValueError for a reply that
    is malformed, negative or zero.
    """
    reply = reply.strip() or DEFAULT_REPORT_DELAY
    match = re.match(r"\s*([+-]?\d+):\s*([+-]?\d+):\s*([+-]?\d+)", reply)
    if not match:
        raise ValueError(f"bad report delay {reply!r}")
    days, hours, minutes = (int(g) for g in match.groups())
    if days < 0 or hours < 0 or minutes < 0 or days + hours + minutes <= 0:
        raise ValueError(f"bad report delay {reply!r}")
    return ((days * 24 + hours) * 60 + minutes) * 60


def _field(line: str, index: int) -> int:
    parts = line.split(":")
    return _atol(parts[index]) if len(parts) > index else 0


def validate_answer(line: str, qtype: QuestionType, reply: str) -> bool:
    """Whether *reply* is an acceptable answer to question *line*."""
    qtype = QuestionType(qtype)
    if qtype is QuestionType.FREETEXT:
        return True
    if qtype is QuestionType.FREENUMBER:
        return all("-" <= ch <= "9" for ch in reply)
    if qtype is QuestionType.MULTIPLECHOICE:
        count = _field(line, 1)
        allowed = {chr(ord("a") + i) for i in range(count)}
        return all(ch in allowed for ch in reply) and len(set(reply)) == len(reply)
    if not reply:
        return True
    if not all("0" <= ch <= "9" for ch in reply):
        return False
    value = int(reply)
    if qtype is QuestionType.SINGLECHOICE:
        return 1 <= value <= _field(line, 1)
    return _field(line, 1) <= value <= _field(line, 2)


def _percent(part: int, whole: int) -> int:
    return 100 * part // whole


def _answer(answer: Sequence[str], quest: int) -> str:
    return answer[quest] if quest < len(answer) else ""


def _numeric_report(values: list[str], n: int) -> Iterable[str]:
    given = [parse_number(v) for v in values if v]
    nalt = len(given)
    yield f"{MSG_NOANSWERS}: {nalt:3d} st ({_percent(nalt, n):3d}%)\n"
    yield f"{MSG_BLANKVOTES}: {n - nalt:3d} st ({_percent(n - nalt, n):3d}%)\n"
    if not nalt:
        return
    given.sort()
    yield f"{MSG_ANSWER2}:\n"
    for start in range(0, nalt, 6):
        yield "".join("%10g" % v for v in given[start:start + 6]) + "\n"
    yield "\nMin: %g,  Max: %g\n" % (given[0], given[-1])
    total = sum(given)
    if nalt % 2 == 0:
        median = (given[nalt // 2] + given[nalt // 2 - 1]) / 2
    else:
        median = given[(nalt - 1) // 2]
    yield "%s: %.4g,  Median: %.4g\n" % (MSG_MEAN, total / nalt, median)
    if nalt > 1:
        squares = sum(v * v for v in given)
        variance = (nalt * squares - total * total) / (nalt * (nalt - 1))
        yield "%s: %.4g\n" % (MSG_STD, math.sqrt(max(0.0, variance)))


def _question_report(
    line: str, qtype: QuestionType, values: list[str], n: int
) -> Iterable[str]:
    if qtype is QuestionType.FREETEXT:
        yield from (f"{v}\n" for v in values)
    elif qtype is QuestionType.SINGLECHOICE:
        nalt = _field(line, 1)
        counts = [0] * nalt
        for value in values:
            choice = _atol(value)
            if 0 < choice <= nalt:
                counts[choice - 1] += 1
        for i, count in enumerate(counts):
            yield f"{i + 1}. {count:3d} st ({_percent(count, n):3d}%)\n"
        blank = n - sum(counts)
        yield f"\n{MSG_BLANKVOTES}: {blank:3d} st ({_percent(blank, n):3d}%)\n"
    elif qtype is QuestionType.MULTIPLECHOICE:
        for i in range(_field(line, 1)):
            letter = chr(ord("a") + i)
            count = sum(1 for value in values if letter in value)
            yield f"{letter}. {count:3d} st ({_percent(count, n):3d}%)\n"
    else:
        yield from _numeric_report(values, n)


def render_results(
    lines: Iterable[str], answers: Sequence[Sequence[str]], n_questions: int
) -> str:
    """The result report of a survey.

    *lines* is the survey body and *answers* holds one sequence of
    *n_questions* answers for every respondent.
    """
    n = len(answers)
    out = [f"{MSG_TOTANSWERS}: {n}\n\n"]
    quest = 0
    for line in lines:
        if line.startswith("\f"):
            line = ""
        qtype = parse_survey_line(line)
        if qtype is None:
            out.append(f"{line}\n")
            continue
        out.append(f"{MSG_SURVDELIMIT1}\n")
        if n > 0 and quest < max(n_questions, 1) or n > 0:
            values = [_answer(a, quest) for a in answers]
            out.extend(_question_report(line, qtype, values, n))
        out.append(f"{MSG_SURVDELIMIT2}\n")
        quest += 1
    return "".join(out)