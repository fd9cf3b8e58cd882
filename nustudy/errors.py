"""
Exception types raised across the project.

Every error the user can trigger derives from NUStudyError, so the
interactive loop and the CLI only need to catch one type.
"""


class NUStudyError(Exception):
    pass


class InvalidCommandError(NUStudyError):
    """Malformed or unknown user input."""


class InvalidDateError(NUStudyError):
    """A token is not a calendar-valid YYYY-MM-DD date."""


class DomainParseError(NUStudyError):
    """A storage line could not be turned into a Course or Session."""


class DomainStateError(NUStudyError):
    """The command does not fit the current data (unknown course, bad index, ...)."""


class StorageError(NUStudyError):
    """The data file could not be written."""
