# tests/test_errors.py

"""Tests for the error taxonomy and the ServiceResult wrapper."""

import unittest

from tradecore.errors import (
    ErrorKind,
    InvalidOperationError,
    InvalidStateError,
    NotFoundError,
    PermissionDeniedError,
    TransactionError,
)
from tradecore.services.results import (
    ServiceResult,
    attempt,
    service_err,
    service_ok,
)


class TestErrorKinds(unittest.TestCase):
    """Each exception class carries its ErrorKind tag."""

    def test_kinds(self) -> None:
        """Subclasses map one-to-one onto ErrorKind members."""
        cases = {
            PermissionDeniedError: ErrorKind.PERMISSION_DENIED,
            NotFoundError: ErrorKind.NOT_FOUND,
            InvalidOperationError: ErrorKind.INVALID_OPERATION,
            InvalidStateError: ErrorKind.INVALID_STATE,
        }
        for cls, kind in cases.items():
            with self.subTest(cls=cls.__name__):
                err = cls("boom")
                self.assertIsInstance(err, TransactionError)
                self.assertIs(err.kind, kind)
                self.assertEqual(err.message, "boom")
                self.assertEqual(str(err), "boom")


class TestServiceResult(unittest.TestCase):
    """ServiceResult and attempt() behaviour."""

    def test_ok_result(self) -> None:
        """service_ok wraps a value with no error."""
        result = service_ok(5)
        self.assertTrue(result.ok)
        self.assertEqual(result.unwrap(), 5)

    def test_err_result(self) -> None:
        """service_err carries the kind and detail."""
        result = service_err(ErrorKind.NOT_FOUND, "missing")
        self.assertFalse(result.ok)
        self.assertIs(result.error, ErrorKind.NOT_FOUND)
        self.assertEqual(result.detail, "missing")

    def test_unwrap_reraises_matching_type(self) -> None:
        """unwrap turns the error kind back into its exception."""
        result: ServiceResult[int] = service_err(
            ErrorKind.INVALID_STATE, "bad state",
        )
        with self.assertRaises(InvalidStateError) as ctx:
            result.unwrap()
        self.assertEqual(ctx.exception.message, "bad state")

    def test_attempt_success(self) -> None:
        """attempt returns the function's value on success."""
        result = attempt(lambda a, b: a + b, 2, b=3)
        self.assertTrue(result.ok)
        self.assertEqual(result.value, 5)

    def test_attempt_folds_transaction_error(self) -> None:
        """A TransactionError becomes an error result."""

        def _fail() -> None:
            raise PermissionDeniedError("nope")

        result = attempt(_fail)
        self.assertFalse(result.ok)
        self.assertIs(result.error, ErrorKind.PERMISSION_DENIED)
        self.assertEqual(result.detail, "nope")

    def test_attempt_propagates_other_errors(self) -> None:
        """Programming errors are not swallowed."""

        def _bug() -> None:
            raise KeyError("oops")

        with self.assertRaises(KeyError):
            attempt(_bug)


if __name__ == "__main__":
    unittest.main()
