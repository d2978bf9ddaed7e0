import unittest
from unittest import TestCase

from keynd.infrastructure.backend._numpy_backend import NumpyBackend
from keynd.infrastructure.backend._registry import get_backend, set_backend


class _RecordingBackend(NumpyBackend):
    name = "recording"

    def __init__(self) -> None:
        self.calls = 0

    def compact(self, *args, **kwargs):
        self.calls += 1
        return super().compact(*args, **kwargs)


class TestBackendRegistry(TestCase):
    def test_default_is_numpy(self):
        self.assertEqual(get_backend().name, "numpy")

    def test_set_backend_returns_previous(self):
        replacement = _RecordingBackend()
        previous = set_backend(replacement)
        try:
            self.assertIs(get_backend(), replacement)
        finally:
            set_backend(previous)
        self.assertIs(get_backend(), previous)

    def test_arrays_use_active_backend(self):
        from keynd import NDArray

        replacement = _RecordingBackend()
        previous = set_backend(replacement)
        try:
            NDArray.arange(4).copy()
        finally:
            set_backend(previous)
        self.assertEqual(replacement.calls, 1)

    def test_rejects_non_backends(self):
        with self.assertRaises(TypeError):
            set_backend(object())


if __name__ == "__main__":
    unittest.main()
