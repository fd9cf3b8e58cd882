import unittest
from datetime import date

from nustudy.dates import format_date, is_valid_date, parse_date
from nustudy.errors import InvalidDateError


class TestIsValidDate(unittest.TestCase):
    def test_normal_date(self) -> None:
        self.assertTrue(is_valid_date("2024-03-01"))

    def test_leap_day(self) -> None:
        self.assertTrue(is_valid_date("2024-02-29"))
        self.assertFalse(is_valid_date("2023-02-29"))
        self.assertFalse(is_valid_date("1900-02-29"))
        self.assertTrue(is_valid_date("2000-02-29"))

    def test_impossible_dates(self) -> None:
        self.assertFalse(is_valid_date("2024-02-30"))
        self.assertFalse(is_valid_date("2024-13-01"))
        self.assertFalse(is_valid_date("2024-00-10"))
        self.assertFalse(is_valid_date("2024-04-31"))

    def test_wrong_shape(self) -> None:
        # must be zero-padded, dash separated, nothing around it
        for token in ["2024-3-1", "24-03-01", "2024/03/01", " 2024-03-01", "2024-03-01x", "CS2113", ""]:
            with self.subTest(token=token):
                self.assertFalse(is_valid_date(token))


class TestParseDate(unittest.TestCase):
    def test_parse(self) -> None:
        self.assertEqual(parse_date("2024-03-01"), date(2024, 3, 1))

    def test_invalid_raises(self) -> None:
        with self.assertRaises(InvalidDateError):
            parse_date("2024-02-30")

    def test_format_is_inverse(self) -> None:
        self.assertEqual(format_date(parse_date("2024-01-05")), "2024-01-05")


if __name__ == "__main__":
    unittest.main()
