import pytest

from sklaffkom.textfile import (
    COPY_TO,
    Comment,
    SurveyInfo,
    TextEntry,
    TextHeader,
    TextType,
    append_comment,
    count_lines,
    format_text,
    mail_copy_text,
    parse_text_entry,
    shorten_author,
)


def _header(**kwargs):
    base = dict(author=7, time=1000, comment_num=3, comment_conf=0,
                comment_author=4, subject="Hello")
    base.update(kwargs)
    return TextHeader(**base)


def test_count_lines_counts_newlines():
    assert count_lines("") == 0
    assert count_lines("a\nb\nc\n") == 3
    assert count_lines("no newline") == 0


def test_text_round_trip():
    body = "first line\nsecond line\n"
    data = format_text(_header(), 12, body)
    entry = parse_text_entry(data)
    assert entry.header.num == 12
    assert entry.header.author == 7
    assert entry.header.time == 1000
    assert entry.header.comment_num == 3
    assert entry.header.comment_author == 4
    assert entry.header.subject == "Hello"
    assert entry.header.type == TextType.TEXT
    assert entry.header.size == count_lines(body)
    assert entry.body_text() == body
    assert entry.comments == []


def test_header_line_layout():
    data = format_text(_header(), 5, "x\n")
    assert data.split("\n")[0] == "5:7:1000:3:0:4:1:0"


def test_survey_round_trip():
    header = _header(type=TextType.SURVEY, survey=SurveyInfo(4, 2000))
    entry = parse_text_entry(format_text(header, 8, "## t Question\n"))
    assert entry.header.type == TextType.SURVEY
    assert entry.header.survey == SurveyInfo(4, 2000)
    assert entry.body == ["## t Question"]


def test_survey_header_requires_survey_info():
    with pytest.raises(ValueError):
        _header(type=TextType.SURVEY).format(1)


def test_seven_field_header_is_plain_text():
    entry = parse_text_entry("3:0:500:2:0:0:1\nNews subject\nbody\n")
    assert entry.header.type == TextType.TEXT
    assert entry.header.author == 0
    assert entry.header.comment_num == 2
    assert entry.body == ["body"]


def test_comments_follow_body():
    data = format_text(_header(), 20, "one\ntwo\n")
    data = append_comment(data, 21, 9)
    data = append_comment(data, 25, 0)
    entry = parse_text_entry(data)
    assert entry.body == ["one", "two"]
    assert entry.comments == [Comment(21, 9), Comment(25, 0)]


def test_append_comment_adds_missing_newline():
    data = append_comment("1:1:1:0:0:0:0:0\nS", 2, 3)
    entry = parse_text_entry(data)
    assert entry.header.subject == "S"
    assert entry.comments == [Comment(2, 3)]


def test_format_text_adds_final_newline():
    data = format_text(_header(), 1, "unterminated")
    entry = parse_text_entry(data)
    assert entry.body == ["unterminated"]
    assert entry.header.size == 1


def test_empty_body():
    entry = parse_text_entry(format_text(_header(), 2, ""))
    assert entry.body == []
    assert entry.header.size == 0
    assert entry.body_text() == ""


def test_body_text_of_entry():
    entry = TextEntry(header=TextHeader(), body=["a", "b"])
    assert entry.body_text() == "a\nb\n"


@pytest.mark.parametrize(
    "data",
    ["", "not:numbers:here:x:y:z:w\nS\n", "1:2:3\nS\n", "1:1:1:0:0:0:0:1\nS\n",
     "1:1:1:0:0:0:0:0\nS\nbad comment\n"],
)
def test_malformed_text_rejected(data):
    with pytest.raises(ValueError):
        parse_text_entry(data)


def test_mail_copy_text():
    body = "Dear friend\nBye\n"
    data = mail_copy_text(30, 5, "someone@example.com", "Greetings", body, 777)
    entry = parse_text_entry(data)
    assert entry.header.num == 30
    assert entry.header.author == 5
    assert entry.header.time == 777
    assert entry.header.comment_author == 0
    assert entry.header.subject == "Greetings"
    assert entry.body[0] == f"<{COPY_TO} someone@example.com>"
    assert entry.body[1] == ""
    assert entry.body[2:] == ["Dear friend", "Bye"]
    assert entry.comments == []


def test_shorten_author_short_name_unchanged():
    name = "Anna Andersson"
    assert shorten_author(name) == name


def test_shorten_author_takes_parenthesised_name():
    name = "anna.andersson@mail.example.com (Anna Andersson)"
    assert shorten_author(name) == "Anna Andersson"


def test_shorten_author_takes_bracketed_address():
    name = "Anna Andersson of the Example Company <anna@example.com>"
    assert shorten_author(name) == "anna@example.com"


def test_shorten_author_unclosed_parenthesis_cuts_before():
    name = "anna.andersson@mail.example.com (Anna Andersson"
    assert shorten_author(name) == "anna.andersson@mail.example.com"
    assert len(shorten_author(name)) < len(name)


def test_shorten_author_without_delimiters_unchanged():
    name = "a-very-long-name-without-any-delimiters-at-all"
    assert shorten_author(name) == name