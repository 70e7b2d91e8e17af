"""Posting the result report of a survey whose report time has come."""

from __future__ import annotations

import argparse
import sys
import time

from .survey import render_results
from .surveystore import SurveyStore
from .textfile import TextHeader, TextType
from .textstore import TextStore

LINE_LEN = 80
MSG_REPORT = "Resultat: "
MSG_SUBJECT = "[rende: "
MSG_WARNING = "Varning: inkonsistent antal svar (ninfo=%d)\n"


class SurveyReportError(Exception):
    """A survey report cannot be made."""


def report_subject(subject: str) -> str:
    """The subject of the report on a survey with *subject*."""
    limit = LINE_LEN - len(MSG_REPORT) - len(MSG_SUBJECT) - 4
    return MSG_REPORT + subject[:limit]


def post_survey_report(
    store: TextStore, survey_number: int, now: int, reporter: int
) -> int:
    """Write the result of survey *survey_number* as a comment to it.

    Returns the number of the new text. Raises SurveyReportError if the
    text is not a survey or its report time has not come, and
    FileNotFoundError if there is no such text.
    """
    entry = store.read(survey_number)
    header = entry.header
    if header.type != TextType.SURVEY or header.survey is None:
        raise SurveyReportError(f"text {survey_number} is not a survey")
    if header.survey.time > now:
        raise SurveyReportError(f"survey {survey_number} is not yet to be reported")
    n_questions = header.survey.n_questions
    if n_questions <= 0:
        raise SurveyReportError(f"survey {survey_number} has no questions")

    results = SurveyStore(store.directory, survey_number)
    answers = results.load_answers(n_questions)
    recorded = results.respondent_count()
    warning = MSG_WARNING % recorded if recorded != len(answers) else ""
    body = warning + render_results(entry.body, answers, n_questions)

    report = TextHeader(
        author=reporter,
        time=header.survey.time,
        comment_num=survey_number,
        comment_conf=0,
        comment_author=header.author,
        type=TextType.TEXT,
        subject=report_subject(header.subject),
    )
    number = store.last_number() + 1
    store.write(number, report, body)
    store.add_comment(survey_number, number, reporter)
    return number


def main(argv: list[str] | None = None) -> int:
    """Post the report of one survey in a conference directory."""
    parser = argparse.ArgumentParser(
        prog="survreport", description="Post the result of a survey."
    )
    parser.add_argument("conference", help="directory of the conference texts")
    parser.add_argument("survey", type=int, help="text number of the survey")
    parser.add_argument(
        "--reporter", type=int, required=True, help="uid the report is written by"
    )
    args = parser.parse_args(argv)

    store = TextStore(args.conference)
    try:
        post_survey_report(store, args.survey, int(time.time()), args.reporter)
    except FileNotFoundError:
        print(f"survreport: no survey {args.survey}", file=sys.stderr)
        return 1
    except SurveyReportError as exc:
        print(f"survreport: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())