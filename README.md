# sklaffkom

Storage and tooling for a small conference (BBS) system: numbered texts in
conference directories, read-marks kept as intervals, surveys with collected
answers, user and "active" files, and per-user `sklaffrc` settings.

## Installation

    pip install .

For running the tests:

    pip install .[test]
    pytest

## Command

`sklaff-survreport` posts the results of a finished survey as a new text in a
conference directory. It takes the directory holding the conference's numbered
texts, the number of the survey text, and the uid the report is written by:

    sklaff-survreport /path/to/conference 117 --reporter 5

The report is posted only once the survey's report time has passed. The new
text is numbered one above the highest text in the directory, is marked as a
comment to the survey, and the survey gets a comment line pointing to it. If
the number of stored answers differs from the number of recorded respondents,
the report starts with a warning line. The command exits with status 1 when
the text is missing, is not a survey, or is not yet due.

## Library

- `sklaffkom.readmarks.ReadIntervals` keeps track of which texts have been
  read, as sorted intervals. It can mark texts read or unread, find the first
  unread text, and read and write the `1-5,7,9-12` form.
- `sklaffkom.stacks.TextStack` is a last-in, first-out stack of
  `(text number, conference)` pairs.
- `sklaffkom.textfile` reads and writes the text file format:
  `parse_text_entry`, `format_text`, `append_comment`, `mail_copy_text` and
  `shorten_author`, with the `TextHeader`, `TextEntry`, `Comment` and
  `SurveyInfo` dataclasses.
- `sklaffkom.textstore.TextStore` works on a directory of numbered texts: read,
  write, add comments, find the first and last numbers, find comment-tree tops
  (`tree_top`), list texts by subject prefix (`list_subjects`) and count recent
  texts (`age_to_textno`).
- `sklaffkom.survey` recognises survey question lines (`parse_survey_line`),
  reads numeric answers (`parse_number`), counts questions, parses report
  delays, checks answers (`validate_answer`) and renders results
  (`render_results`).
- `sklaffkom.surveystore.SurveyStore` keeps a survey's answers, in random
  respondent order, and the list of users who have answered it.
- `sklaffkom.survreport.post_survey_report` does the work of the command above.
- `sklaffkom.users.UserFile` handles the user file; `sort_names` sorts names by
  surname in Swedish letter order; `idle_minutes` and `touch_activity` handle
  activity notes.
- `sklaffkom.active.ActiveFile` handles the file of logged-in sessions.
- `sklaffkom.rcfile` reads and writes `sklaffrc` settings with
  `read_sklaffrc` and `write_sklaffrc`.
- `sklaffkom.charset.to_national` converts the 7-bit Swedish letters to IBM,
  ISO 8859-1 or Mac encodings; `int_to_msbin` encodes an integer as a
  Microsoft Binary Format float.

## What it does not do

This package is storage and a report tool only. It has no interactive
conference client, no command parser, no login handling, and no tool for
bringing news articles into a conference. It does not keep the conference
index file: text numbers are taken from the files present in a directory.