import gc
import unittest
from unittest import TestCase

import numpy as np

from keynd.domain._dtype import DType
from keynd.domain._errors import InternalError
from keynd.infrastructure.backend._storage import HostStorage


class _Owner:
    pass


class TestHostStorage(TestCase):
    def _storage(self, n: int = 4) -> HostStorage:
        return HostStorage(np.zeros(n, dtype=np.float32), DType.FLOAT32)

    def test_initial_state(self):
        s = self._storage()
        self.assertEqual(s.refcount, 1)
        self.assertFalse(s.released)
        self.assertEqual(s.length, 4)
        self.assertEqual(s.nbytes, 16)

    def test_requires_flat_buffer(self):
        with self.assertRaises(InternalError):
            HostStorage(np.zeros((2, 2)), DType.FLOAT64)

    def test_release_at_zero(self):
        s = self._storage()
        self.assertIs(s.incref(), s)
        s.decref()
        self.assertFalse(s.released)
        s.decref()
        self.assertTrue(s.released)
        self.assertEqual(s.length, 0)
        with self.assertRaises(InternalError):
            _ = s.data

    def test_release_happens_once(self):
        s = self._storage()
        s.decref()
        s.decref()
        self.assertTrue(s.released)
        self.assertEqual(s.refcount, 0)

    def test_incref_after_release(self):
        s = self._storage()
        s.decref()
        with self.assertRaises(InternalError):
            s.incref()

    def test_attach_releases_with_owner(self):
        s = self._storage()
        owner = _Owner()
        finalizer = s.attach(owner)
        self.assertTrue(finalizer.alive)
        del owner
        gc.collect()
        self.assertTrue(s.released)

    def test_shared_between_owners(self):
        s = self._storage()
        a, b = _Owner(), _Owner()
        s.attach(a)
        s.incref().attach(b)
        del a
        gc.collect()
        self.assertFalse(s.released)
        self.assertEqual(s.refcount, 1)
        del b
        gc.collect()
        self.assertTrue(s.released)


if __name__ == "__main__":
    unittest.main()
