"""
Command objects.

One frozen dataclass per user action. The set is closed: COMMAND_TYPES lists
every variant, and each one carries

- kind:    a stable tag ("add-course", "delete-session-by-date", ...)
- mutates: whether executing it changes the store (the caller saves then)
- execute(store) -> Result

Arguments are checked when the command is built, so a command object that
exists is always well-formed. Whether it fits the current data (course
exists, index in range, ...) is only known at execute time and reported as
DomainStateError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import ClassVar, List, Optional, Tuple, Union

from nustudy.dates import format_date
from nustudy.errors import DomainStateError, InvalidCommandError
from nustudy.model import CourseStore, Session, check_course_name

logger = logging.getLogger(__name__)


@dataclass
class Result:
    """
    What a command wants shown to the user.

    lines are plain messages; headers/rows describe an optional table.
    exit=True asks the interactive loop to stop.
    """

    lines: List[str] = field(default_factory=list)
    headers: Tuple[str, ...] = ()
    rows: List[Tuple[str, ...]] = field(default_factory=list)
    exit: bool = False


# ---------------------------------------------------------------------------
# Construction checks
# ---------------------------------------------------------------------------


def _course_arg(name: str) -> None:
    try:
        check_course_name(name)
    except DomainStateError as e:
        raise InvalidCommandError(str(e)) from e


def _hours_arg(hours: int) -> None:
    if isinstance(hours, bool) or not isinstance(hours, int) or hours < 0:
        raise InvalidCommandError(f"Hours must be a non-negative integer, got {hours!r}")


def _index_arg(index: int) -> None:
    if isinstance(index, bool) or not isinstance(index, int) or index < 1:
        raise InvalidCommandError(f"Index must be a positive integer, got {index!r}")


def _date_label(d: Optional[date]) -> str:
    return format_date(d) if d is not None else "-"


def _plural(n: int, word: str) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


def _session_rows(sessions: List[Session]) -> List[Tuple[str, ...]]:
    return [(str(i), str(s.hours), _date_label(s.date)) for i, s in enumerate(sessions, start=1)]


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AddCourse:
    kind: ClassVar[str] = "add-course"
    mutates: ClassVar[bool] = True

    course: str

    def __post_init__(self) -> None:
        _course_arg(self.course)

    def execute(self, store: CourseStore) -> Result:
        store.add_course(self.course)
        logger.debug("added course %s", self.course)
        return Result(lines=[f"Added course: {self.course}"])


@dataclass(frozen=True)
class AddSession:
    kind: ClassVar[str] = "add-session"
    mutates: ClassVar[bool] = True

    course: str
    hours: int
    date: Optional[date] = None

    def __post_init__(self) -> None:
        _course_arg(self.course)
        _hours_arg(self.hours)

    def execute(self, store: CourseStore) -> Result:
        session = store.add_session(self.course, self.hours, self.date)
        msg = f"Logged {_plural(session.hours, 'hour')} for {self.course}"
        if session.date is not None:
            msg += f" on {format_date(session.date)}"
        return Result(lines=[msg])


@dataclass(frozen=True)
class ListCourses:
    kind: ClassVar[str] = "list-courses"
    mutates: ClassVar[bool] = False

    def execute(self, store: CourseStore) -> Result:
        courses = store.courses()
        if not courses:
            return Result(lines=["No courses yet."])
        rows = [(c.name, str(len(c.sessions)), str(c.total_hours)) for c in courses]
        return Result(headers=("Course", "Sessions", "Hours"), rows=rows)


@dataclass(frozen=True)
class ListSessions:
    kind: ClassVar[str] = "list-sessions"
    mutates: ClassVar[bool] = False

    course: str

    def __post_init__(self) -> None:
        _course_arg(self.course)

    def execute(self, store: CourseStore) -> Result:
        sessions = store.sessions_for(self.course)
        if not sessions:
            return Result(lines=[f"No sessions logged for {self.course}."])
        total = sum(s.hours for s in sessions)
        return Result(
            lines=[f"{self.course}: {_plural(total, 'hour')} in {_plural(len(sessions), 'session')}"],
            headers=("#", "Hours", "Date"),
            rows=_session_rows(sessions),
        )


@dataclass(frozen=True)
class ResetCourseHours:
    """
    Set every session of a course to 0 hours.

    The argument is kept as typed; it is only checked on execute.
    """

    kind: ClassVar[str] = "reset"
    mutates: ClassVar[bool] = True

    course: str

    def execute(self, store: CourseStore) -> Result:
        if not self.course.strip():
            raise InvalidCommandError("Invalid reset command format. Usage: reset <course>")
        course = store.get_course(self.course)
        for s in course.sessions:
            s.hours = 0
        return Result(lines=[f"Reset hours of {course.name} ({_plural(len(course.sessions), 'session')})"])


@dataclass(frozen=True)
class EditCourseName:
    kind: ClassVar[str] = "edit-course-name"
    mutates: ClassVar[bool] = True

    course: str
    new_name: str

    def __post_init__(self) -> None:
        _course_arg(self.course)
        _course_arg(self.new_name)

    def execute(self, store: CourseStore) -> Result:
        store.rename_course(self.course, self.new_name)
        return Result(lines=[f"Renamed course {self.course} to {self.new_name}"])


@dataclass(frozen=True)
class EditSession:
    kind: ClassVar[str] = "edit-session"
    mutates: ClassVar[bool] = True

    course: str
    index: int
    new_hours: int

    def __post_init__(self) -> None:
        _course_arg(self.course)
        _index_arg(self.index)
        _hours_arg(self.new_hours)

    def execute(self, store: CourseStore) -> Result:
        session = store.get_session(self.course, self.index)
        old = session.hours
        session.hours = self.new_hours
        return Result(lines=[f"Session {self.index} of {self.course}: {old} -> {self.new_hours} hours"])


@dataclass(frozen=True)
class DeleteCourse:
    kind: ClassVar[str] = "delete-course"
    mutates: ClassVar[bool] = True

    course: str

    def __post_init__(self) -> None:
        _course_arg(self.course)

    def execute(self, store: CourseStore) -> Result:
        removed = store.remove_course(self.course)
        return Result(lines=[f"Deleted course {removed.name} ({_plural(len(removed.sessions), 'session')})"])


@dataclass(frozen=True)
class DeleteSessionByIndex:
    kind: ClassVar[str] = "delete-session-by-index"
    mutates: ClassVar[bool] = True

    course: str
    index: int

    def __post_init__(self) -> None:
        _course_arg(self.course)
        _index_arg(self.index)

    def execute(self, store: CourseStore) -> Result:
        removed = store.remove_session(self.course, self.index)
        return Result(
            lines=[f"Deleted session {self.index} of {self.course} ({_plural(removed.hours, 'hour')}, {_date_label(removed.date)})"]
        )


@dataclass(frozen=True)
class DeleteSessionsByDate:
    kind: ClassVar[str] = "delete-sessions-by-date"
    mutates: ClassVar[bool] = True

    date: date

    def execute(self, store: CourseStore) -> Result:
        removed = store.remove_sessions_by_date(self.date)
        label = format_date(self.date)
        if not removed:
            return Result(lines=[f"No sessions on {label}."])
        names = sorted({s.course.name for s in removed})
        return Result(lines=[f"Deleted {_plural(len(removed), 'session')} on {label} ({', '.join(names)})"])


@dataclass(frozen=True)
class FilterByName:
    kind: ClassVar[str] = "filter-by-name"
    mutates: ClassVar[bool] = False

    keyword: str

    def __post_init__(self) -> None:
        # plain search text, not checked against the course name rules
        if not isinstance(self.keyword, str) or not self.keyword:
            raise InvalidCommandError("Filter keyword cannot be empty")

    def execute(self, store: CourseStore) -> Result:
        matches = store.filter_courses(self.keyword)
        if not matches:
            return Result(lines=[f"No courses matching {self.keyword!r}."])
        rows = [(c.name, str(len(c.sessions)), str(c.total_hours)) for c in matches]
        return Result(headers=("Course", "Sessions", "Hours"), rows=rows)


@dataclass(frozen=True)
class Exit:
    kind: ClassVar[str] = "exit"
    mutates: ClassVar[bool] = False

    def execute(self, store: CourseStore) -> Result:
        return Result(lines=["Bye."], exit=True)


Command = Union[
    AddCourse,
    AddSession,
    ListCourses,
    ListSessions,
    ResetCourseHours,
    EditCourseName,
    EditSession,
    DeleteCourse,
    DeleteSessionByIndex,
    DeleteSessionsByDate,
    FilterByName,
    Exit,
]

COMMAND_TYPES: Tuple[type, ...] = Command.__args__  # type: ignore[attr-defined]
