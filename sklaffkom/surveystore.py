"""Stored survey answers and the list of users who have answered."""

from __future__ import annotations

import os
import random
import re
from pathlib import Path
from typing import Sequence

ENCODING = "latin-1"

_UID_MARK = re.compile(r"\[-?\d+\]")


def split_answers(data: str, n_questions: int) -> list[list[str]]:
    """Group the lines of a result file into one answer list per respondent.

    A trailing group with fewer than *n_questions* lines is dropped.
    """
    if n_questions <= 0:
        raise ValueError("a survey needs at least one question")
    lines = data.split("\n")
    if data.endswith("\n"):
        lines.pop()
    elif lines and lines[-1] == "":
        lines.pop()
    complete = data.count("\n") // n_questions
    return [
        lines[i * n_questions:(i + 1) * n_questions] for i in range(complete)
    ]


class SurveyStore:
    """The result and respondent files of one survey in a conference."""

    def __init__(self, directory: str | os.PathLike[str], survey: int) -> None:
        self.directory = Path(directory)
        self.survey = int(survey)

    @property
    def result_path(self) -> Path:
        """The file holding the answers."""
        return self.directory / f"{self.survey}.result"

    @property
    def users_path(self) -> Path:
        """The file listing who has answered."""
        return self.directory / f"{self.survey}.users"

    @staticmethod
    def _read(path: Path) -> str | None:
        try:
            return path.read_text(encoding=ENCODING)
        except FileNotFoundError:
            return None

    def is_taken(self, uid: int) -> bool:
        """Whether user *uid* has answered the survey."""
        data = self._read(self.users_path)
        return data is not None and f"[{uid}]" in data

    def mark_taken(self, uid: int) -> None:
        """Record that user *uid* has answered the survey."""
        data = self._read(self.users_path)
        text = f"[{uid}]" if data is None else f"{data}\n[{uid}]"
        self.directory.mkdir(parents=True, exist_ok=True)
        self.users_path.write_text(text, encoding=ENCODING)

    def save_result(
        self, answers: Sequence[str], rng: random.Random | None = None
    ) -> None:
        """Add one respondent's *answers*, one per question.

        Respondents are stored in a random order so that the file does
        not tell who gave which answers.
        """
        answers = list(answers)
        if not answers:
            raise ValueError("no answers to save")
        if any("\n" in a for a in answers):
            raise ValueError("an answer may not contain a newline")
        existing = self._read(self.result_path)
        groups = [] if existing is None else split_answers(existing, len(answers))
        groups.append(answers)
        if len(groups) > 1:
            (rng or random.Random()).shuffle(groups)
        text = "".join(line + "\n" for group in groups for line in group)
        self.directory.mkdir(parents=True, exist_ok=True)
        self.result_path.write_text(text, encoding=ENCODING)

    def load_answers(self, n_questions: int) -> list[list[str]]:
        """Every respondent's answers; empty if nobody has answered."""
        data = self._read(self.result_path)
        return [] if data is None else split_answers(data, n_questions)

    def respondent_count(self) -> int:
        """How many users are recorded as having answered."""
        data = self._read(self.users_path)
        return 0 if data is None else len(_UID_MARK.findall(data))