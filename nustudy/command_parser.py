"""
Command parsing (raw input line -> Command).

The grammar is deliberately small. After the verb, the remaining words are
told apart only by how many there are and, for delete/filter, by whether the
single word looks like a date:

    add <course>                      add <course> <hours> [<date>]
    list                              list <course>
    reset <course>
    edit <course> <newName>           edit <course> <index> <newHours>
    delete <date>                     delete <course>
    delete <course> <index>
    exit
    filter <courseKeyword>

Known ambiguity: a course named like a date (e.g. "2024-03-01") is read as a
date by delete/filter. Numeric course names ("123") are not guarded against.

parse_command keeps no state between calls.
"""

from __future__ import annotations

import re
from typing import Callable, Dict, List

from nustudy.commands import (
    AddCourse,
    AddSession,
    Command,
    DeleteCourse,
    DeleteSessionByIndex,
    DeleteSessionsByDate,
    EditCourseName,
    EditSession,
    Exit,
    FilterByName,
    ListCourses,
    ListSessions,
    ResetCourseHours,
)
from nustudy.dates import is_valid_date, parse_date
from nustudy.errors import InvalidCommandError
from nustudy.model import WHITESPACE

ADD_USAGE = "Usage: add <course> OR add <course> <hours> [<date>]"
LIST_USAGE = "Usage: list OR list <course>"
EDIT_USAGE = "Usage: edit <course> <newName> OR edit <course> <index> <newHours>"
DELETE_USAGE = "Usage: delete <date> OR delete <course> OR delete <course> <index>"
FILTER_USAGE = "Usage: filter <course>"

# unicode spaces such as \xa0 stay inside a token
_SPLIT_RE = re.compile(f"[{re.escape(WHITESPACE)}]+")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _tokens(arguments: str) -> List[str]:
    stripped = arguments.strip(WHITESPACE)
    return _SPLIT_RE.split(stripped) if stripped else []


def _to_int(token: str, what: str, usage: str) -> int:
    # plain ASCII digits only; "-1", "+2" and "1.5" are rejected here
    if not token.isascii() or not token.isdigit():
        raise InvalidCommandError(f"{what} must be a whole number, got {token!r}. {usage}")
    return int(token)


# ---------------------------------------------------------------------------
# Per-verb parsers
# ---------------------------------------------------------------------------


def _parse_add(arguments: str) -> Command:
    parts = _tokens(arguments)
    if len(parts) == 1:
        return AddCourse(parts[0])
    if len(parts) in (2, 3):
        hours = _to_int(parts[1], "Hours", ADD_USAGE)
        session_date = parse_date(parts[2]) if len(parts) == 3 else None
        return AddSession(parts[0], hours, session_date)
    if not parts:
        raise InvalidCommandError(f"Add command requires arguments. {ADD_USAGE}")
    raise InvalidCommandError(f"Invalid add command format. {ADD_USAGE}")


def _parse_list(arguments: str) -> Command:
    parts = _tokens(arguments)
    if not parts:
        return ListCourses()
    if len(parts) == 1:
        return ListSessions(parts[0])
    raise InvalidCommandError(f"Invalid list command format. {LIST_USAGE}")


def _parse_reset(arguments: str) -> Command:
    return ResetCourseHours(arguments)


def _parse_edit(arguments: str) -> Command:
    parts = _tokens(arguments)
    if len(parts) == 2:
        return EditCourseName(parts[0], parts[1])
    if len(parts) == 3:
        index = _to_int(parts[1], "Index", EDIT_USAGE)
        new_hours = _to_int(parts[2], "Hours", EDIT_USAGE)
        return EditSession(parts[0], index, new_hours)
    raise InvalidCommandError(f"Invalid edit command format. {EDIT_USAGE}")


def _parse_delete(arguments: str) -> Command:
    parts = _tokens(arguments)
    if len(parts) == 1:
        if is_valid_date(parts[0]):
            return DeleteSessionsByDate(parse_date(parts[0]))
        return DeleteCourse(parts[0])
    if len(parts) == 2:
        index = _to_int(parts[1], "Index", DELETE_USAGE)
        return DeleteSessionByIndex(parts[0], index)
    raise InvalidCommandError(f"Invalid delete command format. {DELETE_USAGE}")


def _parse_exit(arguments: str) -> Command:
    if arguments:
        raise InvalidCommandError("Invalid exit command format. Usage: exit")
    return Exit()


def _parse_filter(arguments: str) -> Command:
    parts = _tokens(arguments)
    if len(parts) == 1 and not is_valid_date(parts[0]):
        return FilterByName(parts[0])
    # date and course+date filters are not supported yet
    raise InvalidCommandError(f"Invalid filter command. Currently supported: {FILTER_USAGE}")


_VERBS: Dict[str, Callable[[str], Command]] = {
    "add": _parse_add,
    "list": _parse_list,
    "reset": _parse_reset,
    "edit": _parse_edit,
    "delete": _parse_delete,
    "exit": _parse_exit,
    "filter": _parse_filter,
}

VERBS = tuple(_VERBS)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_command(text: str) -> Command:
    """
    Turn one line of user input into a Command.

    Raises InvalidCommandError for blank input, unknown verbs and argument
    shapes that fit no form of the verb, and InvalidDateError when an add
    command carries a malformed date.
    """
    stripped = text.strip(WHITESPACE) if text is not None else ""
    if not stripped:
        raise InvalidCommandError("Input cannot be empty")

    words = _SPLIT_RE.split(stripped, maxsplit=1)
    verb = words[0].lower()
    arguments = words[1].strip(WHITESPACE) if len(words) > 1 else ""

    handler = _VERBS.get(verb)
    if handler is None:
        raise InvalidCommandError("Wrong command")
    return handler(arguments)
