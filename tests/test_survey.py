import re

import pytest

from sklaffkom import survey
from sklaffkom.survey import (
    QuestionType,
    count_questions,
    parse_number,
    parse_report_delay,
    parse_survey_line,
    render_results,
    validate_answer,
)


@pytest.mark.parametrize(
    "line, expected",
    [
        ("## t", QuestionType.FREETEXT),
        ("##T what?", QuestionType.FREETEXT),
        ("## n", QuestionType.FREENUMBER),
        ("## s:4", QuestionType.SINGLECHOICE),
        ("##m:26", QuestionType.MULTIPLECHOICE),
        ("## i:1:10", QuestionType.INTERVAL),
        ("## s:1", None),
        ("## m:27", None),
        ("## i:5:1", None),
        ("## x:3", None),
        ("## s", None),
        ("# t", None),
        ("plain text", None),
    ],
)
def test_parse_survey_line(line, expected):
    assert parse_survey_line(line) == expected


def test_parse_number_plain():
    assert parse_number("7") == 7.0
    assert parse_number("-4") == -4.0
    assert parse_number("") == 0.0


def test_parse_number_range_and_ratio():
    assert parse_number("2-3") == 2.5
    assert parse_number("6/3") == 2.0
    assert parse_number("4/0") == 4.0


def test_count_questions():
    questions = ["## t", "## s:3", "## i:1:5"]
    others = ["Intro", "", "## s:1", "more text"]
    assert count_questions("\n".join(others[:2] + questions + others[2:])) == len(
        questions
    )


def test_report_delay():
    assert parse_report_delay("1:0:0") == 86400
    assert parse_report_delay("") == 7 * 86400
    assert parse_report_delay("0:0:1") == 60


@pytest.mark.parametrize("reply", ["0:0:0", "-1:2:0", "abc", "3"])
def test_report_delay_rejects(reply):
    with pytest.raises(ValueError):
        parse_report_delay(reply)


def test_validate_single_choice():
    line = "## s:4"
    assert validate_answer(line, QuestionType.SINGLECHOICE, "4")
    assert validate_answer(line, QuestionType.SINGLECHOICE, "")
    assert not validate_answer(line, QuestionType.SINGLECHOICE, "5")
    assert not validate_answer(line, QuestionType.SINGLECHOICE, "0")
    assert not validate_answer(line, QuestionType.SINGLECHOICE, "x")


def test_validate_multiple_choice():
    line = "## m:3"
    assert validate_answer(line, QuestionType.MULTIPLECHOICE, "ac")
    assert not validate_answer(line, QuestionType.MULTIPLECHOICE, "aa")
    assert not validate_answer(line, QuestionType.MULTIPLECHOICE, "d")


def test_validate_interval_and_numbers():
    line = "## i:2:8"
    assert validate_answer(line, QuestionType.INTERVAL, "2")
    assert validate_answer(line, QuestionType.INTERVAL, "8")
    assert not validate_answer(line, QuestionType.INTERVAL, "9")
    assert validate_answer("## n", QuestionType.FREENUMBER, "-1.5/2")
    assert not validate_answer("## n", QuestionType.FREENUMBER, "1e5")
    assert validate_answer("## t", QuestionType.FREETEXT, "anything at all")


def test_render_free_text_and_echo():
    out = render_results(["Intro", "## t"], [("first",), ("second",)], 1)
    assert out.startswith(f"{survey.MSG_TOTANSWERS}: 2\n\n")
    assert "Intro\n" in out
    assert "first\n" in out and "second\n" in out


def test_render_single_choice_counts_add_up():
    answers = [("1",), ("3",), ("1",), ("",)]
    out = render_results(["## s:3"], answers, 1)
    counts = [int(c) for c in re.findall(r"^\d\.\s+(\d+) st", out, re.M)]
    blank = int(re.search(survey.MSG_BLANKVOTES + r":\s+(\d+) st", out).group(1))
    assert len(counts) == 3
    assert sum(counts) + blank == len(answers)
    assert counts[0] == sum(1 for a in answers if a[0] == "1")


def test_render_single_choice_all_same_is_full_percent():
    out = render_results(["## s:2"], [("2",), ("2",)], 1)
    assert "2.   2 st (100%)" in out


def test_render_multiple_choice():
    answers = [("ab",), ("b",), ("",)]
    out = render_results(["## m:3"], answers, 1)
    found = dict(re.findall(r"^([a-z])\.\s+(\d+) st", out, re.M))
    assert set(found) == {"a", "b", "c"}
    for letter, count in found.items():
        assert int(count) == sum(letter in a[0] for a in answers)


def test_render_numbers():
    out = render_results(["## n"], [("1",), ("5",), ("3",), ("",)], 1)
    assert "Min: 1,  Max: 5" in out
    assert "Median: 3" in out
    assert f"{survey.MSG_BLANKVOTES}:   1 st" in out
    assert f"{survey.MSG_STD}:" in out


def test_render_uses_answer_per_question():
    lines = ["## t", "middle", "## t"]
    out = render_results(lines, [("q1", "q2")], 2)
    assert out.index("q1") < out.index("middle") < out.index("q2")
    assert out.count(survey.MSG_SURVDELIMIT1) == 2


def test_render_no_answers_and_form_feed():
    out = render_results(["\fpage", "## s:2"], [], 1)
    assert out.startswith(f"{survey.MSG_TOTANSWERS}: 0\n\n")
    assert "\f" not in out
    assert " st (" not in out