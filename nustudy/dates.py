"""
Date tokens.

Dates are always written as YYYY-MM-DD (fixed width, zero-padded), both in
user commands and in the storage file.
"""

from __future__ import annotations

import re
from datetime import date, datetime

from nustudy.errors import InvalidDateError

DATE_FORMAT = "%Y-%m-%d"

# strptime alone accepts "2024-3-1", so the width is checked first
_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def is_valid_date(token: str) -> bool:
    """
    True if token is a zero-padded YYYY-MM-DD string naming a real day.
    """
    if not isinstance(token, str) or not _DATE_RE.fullmatch(token):
        return False
    try:
        datetime.strptime(token, DATE_FORMAT)
    except ValueError:
        return False
    return True


def parse_date(token: str) -> date:
    if not is_valid_date(token):
        raise InvalidDateError(f"Invalid date: {token!r} (expected YYYY-MM-DD)")
    return datetime.strptime(token, DATE_FORMAT).date()


def format_date(d: date) -> str:
    return d.isoformat()
