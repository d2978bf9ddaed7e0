import unittest
from unittest import TestCase

from keynd.domain._backend import BackendResult
from keynd.domain._errors import ArrayIndexError, ShapeError, StatusCode
from keynd.infrastructure.backend._status import (
    classify_exception,
    failure,
    guarded,
    last_error,
    set_last_error,
)


class TestClassifyException(TestCase):
    def test_keynd_errors_use_their_status(self):
        self.assertEqual(classify_exception(ShapeError("x")), StatusCode.SHAPE)
        self.assertEqual(classify_exception(ArrayIndexError("x")), StatusCode.INDEX)

    def test_builtin_types(self):
        self.assertEqual(classify_exception(MemoryError()), StatusCode.ALLOC)
        self.assertEqual(classify_exception(ZeroDivisionError()), StatusCode.MATH)
        self.assertEqual(classify_exception(IndexError()), StatusCode.INDEX)
        self.assertEqual(classify_exception(TypeError()), StatusCode.DTYPE)

    def test_message_keywords(self):
        self.assertEqual(
            classify_exception(ValueError("operands could not be broadcast together")),
            StatusCode.SHAPE,
        )
        self.assertEqual(
            classify_exception(RuntimeError("index 9 is out of bounds")),
            StatusCode.INDEX,
        )
        self.assertEqual(
            classify_exception(RuntimeError("Unable to allocate 8 GiB")),
            StatusCode.ALLOC,
        )
        self.assertEqual(
            classify_exception(RuntimeError("feature unsupported")),
            StatusCode.GENERIC,
        )

    def test_unknown_is_panic(self):
        self.assertEqual(classify_exception(RuntimeError("???")), StatusCode.PANIC)


class TestGuarded(TestCase):
    def setUp(self) -> None:
        set_last_error(None)

    def test_success_passes_through(self):
        @guarded
        def ok() -> BackendResult:
            return BackendResult(status=StatusCode.SUCCESS, value=3)

        self.assertEqual(ok().value, 3)
        self.assertIsNone(last_error())

    def test_failure_is_reported(self):
        @guarded
        def broken() -> BackendResult:
            raise ShapeError("nope")

        result = broken()
        self.assertFalse(result.ok)
        self.assertEqual(result.status, StatusCode.SHAPE)
        self.assertEqual(result.message, "broken: nope")
        self.assertEqual(last_error(), "broken: nope")

    def test_failure_unwraps_to_exception(self):
        with self.assertRaisesRegex(ShapeError, "bad"):
            failure(StatusCode.SHAPE, "bad").unwrap()

    def test_logs_failures_at_debug(self):
        with self.assertLogs("keynd.infrastructure.backend._status", level="DEBUG") as cm:
            failure(StatusCode.MATH, "overflow")
        self.assertTrue(any("overflow" in line for line in cm.output))


if __name__ == "__main__":
    unittest.main()
