"""
Central data model definitions used across the project.

This module defines:
- Course: a named subject of study, owning its sessions
- Session: one logged block of study time (hours + optional date)
- CourseStore: the in-memory collection every command works on

Storage records:
- Course  -> "C|<name>"
- Session -> "S|<course>|<hours>" or "S|<course>|<hours>|<YYYY-MM-DD>"
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from nustudy.dates import format_date
from nustudy.errors import DomainStateError

SEPARATOR = "|"
COURSE_TAG = "C"
SESSION_TAG = "S"

# ASCII whitespace only, the same set the command grammar splits on
WHITESPACE = " \t\n\x0b\f\r"
_WHITESPACE_RE = re.compile(f"[{re.escape(WHITESPACE)}]")


def check_course_name(name: str) -> str:
    """
    Return name unchanged if it can be used as a course name.

    A course name is a single non-empty token: no whitespace (the command
    grammar splits on it) and no separator (the storage format splits on it).
    """
    if not isinstance(name, str) or not name or _WHITESPACE_RE.search(name) or SEPARATOR in name:
        raise DomainStateError(f"Invalid course name: {name!r}")
    return name


@dataclass
class Course:
    """
    Represents one course. Identity is the (case-sensitive) name.
    """

    name: str
    sessions: List["Session"] = field(default_factory=list, compare=False, repr=False)

    def __post_init__(self) -> None:
        check_course_name(self.name)

    @property
    def total_hours(self) -> int:
        return sum(s.hours for s in self.sessions)

    def to_storage_string(self) -> str:
        return f"{COURSE_TAG}{SEPARATOR}{self.name}"


@dataclass(eq=False)
class Session:
    """
    Represents one logged study session.

    The course attribute is a back-reference: the Course owns the session
    through Course.sessions.
    """

    course: Course
    hours: int
    date: Optional[date] = None

    def __post_init__(self) -> None:
        if isinstance(self.hours, bool) or not isinstance(self.hours, int) or self.hours < 0:
            raise DomainStateError(f"Hours must be a non-negative integer, got {self.hours!r}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Session):
            return NotImplemented
        return (self.course.name, self.hours, self.date) == (other.course.name, other.hours, other.date)

    def __repr__(self) -> str:
        return f"Session(course={self.course.name!r}, hours={self.hours!r}, date={self.date!r})"

    def to_storage_string(self) -> str:
        fields = [SESSION_TAG, self.course.name, str(self.hours)]
        if self.date is not None:
            fields.append(format_date(self.date))
        return SEPARATOR.join(fields)


class CourseStore:
    """
    All courses of one user, in insertion order.

    Lookups are by exact (case-sensitive) name. Every method that cannot do
    its job raises DomainStateError so callers can tell "bad data state"
    apart from "bad input".
    """

    def __init__(self, courses: Optional[List[Course]] = None) -> None:
        self._courses: dict[str, Course] = {}
        for c in courses or []:
            self.add_course(c)

    def __len__(self) -> int:
        return len(self._courses)

    def __contains__(self, name: object) -> bool:
        return name in self._courses

    # -----------------------------------------------------------------------
    # Courses
    # -----------------------------------------------------------------------

    def courses(self) -> List[Course]:
        return list(self._courses.values())

    def find_course(self, name: str) -> Optional[Course]:
        return self._courses.get(name)

    def get_course(self, name: str) -> Course:
        course = self._courses.get(name)
        if course is None:
            raise DomainStateError(f"Course not found: {name}")
        return course

    def add_course(self, course: Course | str) -> Course:
        if isinstance(course, str):
            course = Course(course)
        if course.name in self._courses:
            raise DomainStateError(f"Course already exists: {course.name}")
        self._courses[course.name] = course
        return course

    def remove_course(self, name: str) -> Course:
        course = self.get_course(name)
        del self._courses[name]
        return course

    def rename_course(self, old_name: str, new_name: str) -> Course:
        """
        Rename a course in place, keeping its position in the listing.
        """
        course = self.get_course(old_name)
        check_course_name(new_name)
        if new_name == old_name:
            return course
        if new_name in self._courses:
            raise DomainStateError(f"Course already exists: {new_name}")

        course.name = new_name
        self._courses = {(new_name if k == old_name else k): v for k, v in self._courses.items()}
        return course

    def filter_courses(self, keyword: str) -> List[Course]:
        """
        Courses whose name contains keyword (case-insensitive).
        """
        needle = keyword.lower()
        return [c for c in self._courses.values() if needle in c.name.lower()]

    # -----------------------------------------------------------------------
    # Sessions
    # -----------------------------------------------------------------------

    def sessions_for(self, name: str) -> List[Session]:
        return list(self.get_course(name).sessions)

    def add_session(self, name: str, hours: int, session_date: Optional[date] = None) -> Session:
        course = self.get_course(name)
        session = Session(course, hours, session_date)
        course.sessions.append(session)
        return session

    def get_session(self, name: str, index: int) -> Session:
        """
        Return the session at a 1-based index within the course.
        """
        course = self.get_course(name)
        if not 1 <= index <= len(course.sessions):
            raise DomainStateError(
                f"Session index {index} out of range for {name} ({len(course.sessions)} sessions)"
            )
        return course.sessions[index - 1]

    def remove_session(self, name: str, index: int) -> Session:
        session = self.get_session(name, index)
        session.course.sessions.pop(index - 1)
        return session

    def remove_sessions_by_date(self, session_date: date) -> List[Session]:
        removed: List[Session] = []
        for course in self._courses.values():
            keep: List[Session] = []
            for s in course.sessions:
                (removed if s.date == session_date else keep).append(s)
            course.sessions[:] = keep
        return removed
