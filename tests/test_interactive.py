import tempfile
import unittest
from pathlib import Path
from unittest import mock

import nustudy.interactive as interactive
from nustudy.errors import StorageError
from nustudy.model import CourseStore
from nustudy.storage import load_store


class TestInteractive(unittest.TestCase):
    def test_loop_runs_commands_until_exit(self) -> None:
        lines = ["add CS2113", "", "bogus", "add CS2113 2", "exit", "add never"]
        store = CourseStore()

        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "nustudy.txt"
            with mock.patch.object(interactive.console, "input", side_effect=lines) as fake_input:
                interactive.run_interactive(store, p)

            # "add never" is not read after exit
            self.assertEqual(fake_input.call_count, 5)
            loaded, _ = load_store(p)
            self.assertEqual(loaded.get_course("CS2113").total_hours, 2)

    def test_loop_stops_at_end_of_input(self) -> None:
        with mock.patch.object(interactive.console, "input", side_effect=EOFError):
            interactive.run_interactive(CourseStore(), None)


    def test_failed_save_is_reported(self) -> None:
        store = CourseStore()
        with tempfile.TemporaryDirectory() as d:
            # a directory cannot be written as the data file
            with self.assertRaises(StorageError) as ctx:
                interactive.execute_line(store, "add CS2113", Path(d))
        self.assertIn("not saved", str(ctx.exception))
        self.assertIn("CS2113", store)

    def test_loop_continues_after_failed_save(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            with mock.patch.object(interactive.console, "input", side_effect=["add CS2113", "exit"]) as fake_input:
                interactive.run_interactive(CourseStore(), Path(d))
            self.assertEqual(fake_input.call_count, 2)


if __name__ == "__main__":
    unittest.main()
