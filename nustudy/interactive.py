"""
Interactive read-eval loop.

Reads one command per line, runs it against the in-memory store and saves
the data file after every command that changed something. Errors are printed
and the loop continues; only "exit" (or end of input) stops it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from nustudy.command_parser import parse_command
from nustudy.commands import Result
from nustudy.errors import NUStudyError, StorageError
from nustudy.model import CourseStore
from nustudy.storage import save_store

logger = logging.getLogger(__name__)

console = Console(highlight=False)

HELP_TEXT = (
    "Commands:\n"
    "  add <course> | add <course> <hours> [<YYYY-MM-DD>]\n"
    "  list | list <course>\n"
    "  reset <course>\n"
    "  edit <course> <newName> | edit <course> <index> <newHours>\n"
    "  delete <date> | delete <course> | delete <course> <index>\n"
    "  filter <courseKeyword>\n"
    "  exit"
)


def _println(msg: str = "", out: Optional[Console] = None) -> None:
    (out or console).print(msg, markup=False)


def render_result(result: Result, out: Optional[Console] = None) -> None:
    out = out or console

    for line in result.lines:
        _println(line, out)

    if result.rows:
        table = Table(box=box.SIMPLE)
        for h in result.headers:
            table.add_column(h, justify="right" if h in ("#", "Hours", "Sessions") else "left")
        for row in result.rows:
            table.add_row(*[escape(cell) for cell in row])
        out.print(table)


def execute_line(store: CourseStore, text: str, data_path: Optional[Path] = None) -> Result:
    """
    Parse and run one input line. Saves the store if the command changed it.

    NUStudyError from parsing, execution or saving propagates to the caller.
    A failed save leaves the change in memory only and says so.
    """
    command = parse_command(text)
    logger.debug("running %s", command.kind)

    result = command.execute(store)
    if command.mutates:
        try:
            save_store(store, data_path)
        except StorageError as e:
            raise StorageError(f"{e}. The change was not saved.") from e
    return result


def run_interactive(store: CourseStore, data_path: Optional[Path] = None) -> None:
    _println("=== NUStudy ===")
    _println(f"Courses loaded: {len(store)}")
    _println(HELP_TEXT)

    while True:
        try:
            text = console.input("\n> ")
        except (EOFError, KeyboardInterrupt):
            _println("\nBye.")
            return

        if not text.strip():
            continue

        try:
            result = execute_line(store, text, data_path)
        except NUStudyError as e:
            _println(str(e))
            continue

        render_result(result)
        if result.exit:
            return
