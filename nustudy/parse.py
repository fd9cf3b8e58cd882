"""
Parsing (storage line -> entity).

Each line of the data file is one record:

    C|<name>
    S|<course>|<hours>
    S|<course>|<hours>|<YYYY-MM-DD>

The inverse direction lives on the entities themselves
(Course.to_storage_string / Session.to_storage_string).

Important rules:
- a line that does not match exactly raises DomainParseError
- nothing is guessed or repaired; a bad line never yields an entity
"""

from __future__ import annotations

from typing import List, Union

from nustudy.dates import is_valid_date, parse_date
from nustudy.errors import DomainParseError, DomainStateError
from nustudy.model import COURSE_TAG, SEPARATOR, SESSION_TAG, Course, Session


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _split(line: str, tag: str) -> List[str]:
    """
    Split a record into fields and check its tag.
    """
    if not isinstance(line, str):
        raise DomainParseError(f"Record must be a string, got {type(line).__name__}")

    fields = line.rstrip("\r\n").split(SEPARATOR)
    if fields[0] != tag:
        raise DomainParseError(f"Expected a {tag!r} record, got: {line!r}")
    return fields


def _parse_hours(raw: str, line: str) -> int:
    # only plain digits: rejects "-1", "+3", " 4", "2.5"
    if not raw.isascii() or not raw.isdigit():
        raise DomainParseError(f"Hours must be a non-negative integer in: {line!r}")
    return int(raw)


def _parse_course_name(raw: str, line: str) -> Course:
    try:
        return Course(raw)
    except DomainStateError as e:
        raise DomainParseError(f"Bad course name in: {line!r}") from e


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_course(line: str) -> Course:
    fields = _split(line, COURSE_TAG)
    if len(fields) != 2:
        raise DomainParseError(f"Course record needs 2 fields, got {len(fields)}: {line!r}")
    return _parse_course_name(fields[1], line)


def parse_session(line: str) -> Session:
    """
    Parse a session record.

    The returned Session points at a fresh Course carrying only the name from
    the record; callers that keep a CourseStore re-attach it to the real one.
    """
    fields = _split(line, SESSION_TAG)
    if len(fields) not in (3, 4):
        raise DomainParseError(f"Session record needs 3 or 4 fields, got {len(fields)}: {line!r}")

    course = _parse_course_name(fields[1], line)
    hours = _parse_hours(fields[2], line)

    session_date = None
    if len(fields) == 4:
        if not is_valid_date(fields[3]):
            raise DomainParseError(f"Bad session date in: {line!r}")
        session_date = parse_date(fields[3])

    return Session(course, hours, session_date)


def parse_record(line: str) -> Union[Course, Session]:
    """
    Parse any record, dispatching on its leading tag.
    """
    tag = line.split(SEPARATOR, 1)[0] if isinstance(line, str) else None
    if tag == COURSE_TAG:
        return parse_course(line)
    if tag == SESSION_TAG:
        return parse_session(line)
    raise DomainParseError(f"Unknown record type: {line!r}")
