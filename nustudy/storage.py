"""
Persistent storage for the user's courses and sessions.

This module manages the file:

    data/nustudy.txt

One record per line (see nustudy.parse); each course line is followed by the
lines of its sessions.

Load policy (skip-and-warn):
- a missing file is an empty store (first run)
- a line that fails to parse (or is not valid UTF-8) is skipped and logged,
  never half-loaded
- a session whose course was not declared above it is skipped the same way
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Tuple

from nustudy.errors import DomainParseError, StorageError
from nustudy.model import Course, CourseStore
from nustudy.parse import parse_record

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent


def _default_data_path() -> Path:
    """
    Return the default path of the data file inside the package.

    Using a function instead of a constant makes testing easier,
    because tests can override the path.
    """
    return PACKAGE_DIR / "data" / "nustudy.txt"


def resolve_data_path(path: str | Path | None = None) -> Path:
    return Path(path) if path is not None else _default_data_path()


def load_store(path: str | Path | None = None) -> Tuple[CourseStore, List[int]]:
    """
    Load all courses and sessions from the data file.

    Returns the store and the (1-based) numbers of the lines that were skipped.
    """
    data_path = resolve_data_path(path)
    store = CourseStore()
    skipped: List[int] = []

    # First run: file does not exist yet -> nothing logged so far
    if not data_path.exists():
        logger.debug("no data file at %s, starting empty", data_path)
        return store, skipped

    try:
        raw = data_path.read_bytes()
    except OSError as e:
        raise StorageError(f"Could not read {data_path}: {e.strerror or e}") from e

    # decoded per line so one bad byte only costs its own record
    for lineno, raw_line in enumerate(raw.splitlines(), start=1):
        try:
            line = raw_line.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.warning("%s:%d: skipped: not valid UTF-8 (%s)", data_path, lineno, e.reason)
            skipped.append(lineno)
            continue

        if not line.strip():
            continue
        try:
            _load_line(store, line)
        except DomainParseError as e:
            logger.warning("%s:%d: skipped: %s", data_path, lineno, e)
            skipped.append(lineno)

    logger.debug("loaded %d courses from %s", len(store), data_path)
    return store, skipped


def _load_line(store: CourseStore, line: str) -> None:
    record = parse_record(line)

    if isinstance(record, Course):
        if record.name in store:
            raise DomainParseError(f"Duplicate course: {record.name}")
        store.add_course(record)
        return

    course = store.find_course(record.course.name)
    if course is None:
        raise DomainParseError(f"Session for undeclared course: {line!r}")
    record.course = course
    course.sessions.append(record)


def dump_lines(store: CourseStore) -> List[str]:
    lines: List[str] = []
    for course in store.courses():
        lines.append(course.to_storage_string())
        lines.extend(s.to_storage_string() for s in course.sessions)
    return lines


def save_store(store: CourseStore, path: str | Path | None = None) -> Path:
    """
    Write the whole store to the data file.

    Creates parent directories if needed. Raises StorageError if the file
    cannot be written; the in-memory store is left as it is.
    """
    data_path = resolve_data_path(path)
    lines = dump_lines(store)

    try:
        data_path.parent.mkdir(parents=True, exist_ok=True)
        data_path.write_text("".join(f"{x}\n" for x in lines), encoding="utf-8")
    except OSError as e:
        raise StorageError(f"Could not write {data_path}: {e.strerror or e}") from e

    logger.debug("saved %d records to %s", len(lines), data_path)
    return data_path
