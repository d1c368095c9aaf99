# tests/test_validation.py

"""Tests for input validators."""

import unittest

from tradecore.errors import InvalidOperationError
from tradecore.filters.validation import (
    validate_appeal_reason,
    validate_cancel_reason,
    validate_description,
    validate_not_empty,
    validate_password,
    validate_price,
    validate_rating,
    validate_review_content,
    validate_title,
    validate_username,
)


class TestCancelReason(unittest.TestCase):
    """Cancel reasons must be 5-200 non-blank characters."""

    def test_valid(self) -> None:
        """A normal reason passes."""
        validate_cancel_reason("changed mind")

    def test_rejects_empty_and_blank(self) -> None:
        """None, empty and whitespace-only reasons fail."""
        for reason in (None, "", "    "):
            with self.subTest(reason=reason):
                with self.assertRaises(InvalidOperationError):
                    validate_cancel_reason(reason)

    def test_length_bounds(self) -> None:
        """Exactly 5 and 200 pass; 4 and 201 fail."""
        validate_cancel_reason("a" * 5)
        validate_cancel_reason("a" * 200)
        for reason in ("a" * 4, "a" * 201):
            with self.subTest(length=len(reason)):
                with self.assertRaises(InvalidOperationError):
                    validate_cancel_reason(reason)

    def test_length_counts_stripped_text(self) -> None:
        """Surrounding whitespace does not pad a short reason."""
        with self.assertRaises(InvalidOperationError):
            validate_cancel_reason("  abc   ")


class TestReviewInput(unittest.TestCase):
    """Ratings and review text."""

    def test_rating_range(self) -> None:
        """1-5 pass, anything else fails."""
        for rating in range(1, 6):
            validate_rating(rating)
        for rating in (0, 6):
            with self.subTest(rating=rating):
                with self.assertRaises(InvalidOperationError):
                    validate_rating(rating)

    def test_rating_must_be_int(self) -> None:
        """Floats, bools and strings are rejected even inside the range."""
        for rating in (4.5, 3.0, True, "5"):
            with self.subTest(rating=rating):
                with self.assertRaises(InvalidOperationError):
                    validate_rating(rating)

    def test_review_content_optional(self) -> None:
        """Empty content is allowed."""
        validate_review_content("")
        validate_review_content(None)

    def test_review_content_max(self) -> None:
        """Content over 500 characters fails."""
        validate_review_content("x" * 500)
        with self.assertRaises(InvalidOperationError):
            validate_review_content("x" * 501)


class TestProductInput(unittest.TestCase):
    """Listing fields."""

    def test_title(self) -> None:
        """Titles need 2-100 characters."""
        validate_title("TV")
        for title in ("", "X", "x" * 101):
            with self.subTest(title=title[:5]):
                with self.assertRaises(InvalidOperationError):
                    validate_title(title)

    def test_description(self) -> None:
        """Descriptions are optional, capped at 1000."""
        validate_description("")
        with self.assertRaises(InvalidOperationError):
            validate_description("d" * 1001)

    def test_price(self) -> None:
        """Prices must be positive with at most two decimals."""
        validate_price(0.01)
        validate_price(99.99)
        for price in (0.0, -1.0, 1_000_000.01, 1.234):
            with self.subTest(price=price):
                with self.assertRaises(InvalidOperationError):
                    validate_price(price)


class TestAccountInput(unittest.TestCase):
    """Usernames, passwords and appeals."""

    def test_not_empty_strips(self) -> None:
        """validate_not_empty returns the stripped value."""
        self.assertEqual(validate_not_empty("  ab ", "Field"), "ab")

    def test_username(self) -> None:
        """4-20 letters or digits."""
        validate_username("alice01")
        for name in ("abc", "a" * 21, "bad name", "bad_name"):
            with self.subTest(name=name):
                with self.assertRaises(InvalidOperationError):
                    validate_username(name)

    def test_password(self) -> None:
        """6-20 characters."""
        validate_password("secret")
        for pw in ("short", "p" * 21):
            with self.subTest(length=len(pw)):
                with self.assertRaises(InvalidOperationError):
                    validate_password(pw)

    def test_appeal_reason(self) -> None:
        """10-500 characters."""
        validate_appeal_reason("I was banned by mistake")
        with self.assertRaises(InvalidOperationError):
            validate_appeal_reason("too short")


if __name__ == "__main__":
    unittest.main()
