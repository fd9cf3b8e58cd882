"""
Unit tests for command execution against an in-memory store.
"""

import unittest
from dataclasses import FrozenInstanceError
from datetime import date

from nustudy.command_parser import parse_command
from nustudy.commands import COMMAND_TYPES, Result
from nustudy.errors import DomainStateError, InvalidCommandError
from nustudy.model import CourseStore


def run(store: CourseStore, text: str) -> Result:
    return parse_command(text).execute(store)


class TestCommands(unittest.TestCase):
    def setUp(self) -> None:
        self.store = CourseStore()
        for text in ["add CS2113", "add MA1521", "add CS2113 2 2024-03-01", "add CS2113 3", "add MA1521 4 2024-03-01"]:
            run(self.store, text)

    def test_kinds_are_unique(self) -> None:
        kinds = [t.kind for t in COMMAND_TYPES]
        self.assertEqual(len(kinds), len(set(kinds)))

    def test_add_duplicate_course(self) -> None:
        with self.assertRaises(DomainStateError):
            run(self.store, "add CS2113")

    def test_add_session_unknown_course(self) -> None:
        with self.assertRaises(DomainStateError):
            run(self.store, "add CS9999 1")

    def test_list_courses(self) -> None:
        result = run(self.store, "list")
        self.assertEqual(result.headers, ("Course", "Sessions", "Hours"))
        self.assertEqual(result.rows, [("CS2113", "2", "5"), ("MA1521", "1", "4")])

    def test_list_sessions(self) -> None:
        result = run(self.store, "list CS2113")
        self.assertEqual(result.rows, [("1", "2", "2024-03-01"), ("2", "3", "-")])

    def test_list_empty_store(self) -> None:
        result = run(CourseStore(), "list")
        self.assertEqual(result.rows, [])
        self.assertEqual(result.lines, ["No courses yet."])

    def test_reset(self) -> None:
        run(self.store, "reset CS2113")
        self.assertEqual([s.hours for s in self.store.sessions_for("CS2113")], [0, 0])
        self.assertEqual(self.store.get_course("MA1521").total_hours, 4)

    def test_reset_checks_argument_on_execute(self) -> None:
        with self.assertRaises(InvalidCommandError):
            run(self.store, "reset")
        with self.assertRaises(DomainStateError):
            run(self.store, "reset CS2113 MA1521")

    def test_edit_course_name(self) -> None:
        run(self.store, "edit CS2113 CS2040")
        self.assertIn("CS2040", self.store)
        self.assertNotIn("CS2113", self.store)
        with self.assertRaises(DomainStateError):
            run(self.store, "edit CS2040 MA1521")

    def test_edit_session(self) -> None:
        run(self.store, "edit CS2113 2 7")
        self.assertEqual(self.store.get_session("CS2113", 2).hours, 7)
        with self.assertRaises(DomainStateError):
            run(self.store, "edit CS2113 3 1")

    def test_delete_course(self) -> None:
        run(self.store, "delete MA1521")
        self.assertEqual([c.name for c in self.store.courses()], ["CS2113"])

    def test_delete_session_by_index(self) -> None:
        run(self.store, "delete CS2113 1")
        self.assertEqual([s.hours for s in self.store.sessions_for("CS2113")], [3])

    def test_delete_sessions_by_date(self) -> None:
        result = run(self.store, "delete 2024-03-01")
        self.assertEqual(result.lines, ["Deleted 2 sessions on 2024-03-01 (CS2113, MA1521)"])
        self.assertEqual(self.store.get_course("CS2113").total_hours, 3)
        self.assertEqual(self.store.sessions_for("MA1521"), [])
        # courses themselves stay
        self.assertEqual(len(self.store), 2)

    def test_delete_by_date_nothing_found(self) -> None:
        result = run(self.store, "delete 2020-01-01")
        self.assertEqual(result.lines, ["No sessions on 2020-01-01."])

    def test_filter(self) -> None:
        result = run(self.store, "filter ma")
        self.assertEqual([r[0] for r in result.rows], ["MA1521"])

    def test_filter_with_separator_matches_nothing(self) -> None:
        result = run(self.store, "filter CS|MA")
        self.assertEqual(result.rows, [])
        self.assertEqual(result.lines, ["No courses matching 'CS|MA'."])

    def test_exit(self) -> None:
        self.assertTrue(run(self.store, "exit").exit)

    def test_read_only_commands_do_not_mutate(self) -> None:
        for text in ["list", "list CS2113", "filter CS", "exit"]:
            with self.subTest(text=text):
                self.assertFalse(parse_command(text).mutates)
        self.assertTrue(parse_command("delete 2024-03-01").mutates)

    def test_commands_are_immutable(self) -> None:
        cmd = parse_command("add CS2113 1")
        with self.assertRaises(FrozenInstanceError):
            cmd.hours = 5  # type: ignore[misc]


if __name__ == "__main__":
    unittest.main()
