"""
CLI (Command Line Interface).

    nustudy interactive             read-eval loop (default)
    nustudy run <command words...>  run exactly one command, e.g.
                                    nustudy run add CS2113 3 2024-03-01

Both accept --data <file> to use another data file than the default one
(see nustudy.storage) and -v for debug logging.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from nustudy.errors import NUStudyError
from nustudy.interactive import execute_line, render_result, run_interactive
from nustudy.model import CourseStore
from nustudy.storage import load_store, resolve_data_path

logger = logging.getLogger(__name__)


def skipped_warning(skipped: list[int], data_path: Path) -> str:
    lines = ", ".join(str(n) for n in skipped)
    return (
        f"Warning: skipped {len(skipped)} unreadable line(s) in {data_path} (lines: {lines}). "
        "They will be dropped from the file at the next change."
    )


def _load(args: argparse.Namespace) -> tuple[Path, CourseStore]:
    data_path = resolve_data_path(args.data)
    store, skipped = load_store(data_path)
    if skipped:
        print(skipped_warning(skipped, data_path))
    return data_path, store


def _cmd_run(args: argparse.Namespace) -> int:
    """
    Run one command given as separate CLI words.
    """
    text = " ".join(args.words).strip()
    if not text:
        print("Please provide a command, e.g.: nustudy run list")
        return 1

    try:
        data_path, store = _load(args)
        result = execute_line(store, text, data_path)
    except NUStudyError as e:
        print(e)
        return 1

    render_result(result)
    return 0


def _cmd_interactive(args: argparse.Namespace) -> int:
    try:
        data_path, store = _load(args)
    except NUStudyError as e:
        print(e)
        return 1

    run_interactive(store, data_path)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="nustudy", description="NUStudy – track study hours per course")
    parser.add_argument("--data", type=str, default=None, help="Data file (default: inside the package)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command")

    p_run = sub.add_parser("run", help="Run one command and exit")
    p_run.add_argument("words", nargs=argparse.REMAINDER, help="Command, e.g. 'add CS2113 3'")

    sub.add_parser("interactive", help="Interactive mode")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "run":
        raise SystemExit(_cmd_run(args))
    if args.command in (None, "interactive"):
        raise SystemExit(_cmd_interactive(args))

    raise SystemExit(2)
