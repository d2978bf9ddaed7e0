import unittest
from unittest import TestCase

import numpy as np

from keynd import DType, NDArray, ShapeError


class TestJoins(TestCase):
    def test_concatenate_matches_numpy(self):
        a = np.arange(6).reshape(2, 3)
        b = np.arange(3).reshape(1, 3)
        out = NDArray.concatenate([NDArray.from_numpy(a), NDArray.from_numpy(b)], axis=0)
        np.testing.assert_array_equal(out.to_numpy(), np.concatenate([a, b], axis=0))

    def test_concatenate_negative_axis_and_views(self):
        base = NDArray.arange(12).reshape(3, 4)
        ref = np.arange(12).reshape(3, 4)
        out = NDArray.concatenate([base.T, base.T.flip(1)], axis=-1)
        np.testing.assert_array_equal(
            out.to_numpy(), np.concatenate([ref.T, np.flip(ref.T, 1)], axis=-1)
        )

    def test_concatenate_promotes_dtypes(self):
        out = NDArray.concatenate([NDArray.arange(2), NDArray.array([0.5])])
        self.assertIs(out.dtype, DType.FLOAT64)
        np.testing.assert_allclose(out.to_numpy(), [0, 1, 0.5])

    def test_concatenate_errors(self):
        with self.assertRaises(ShapeError):
            NDArray.concatenate([])
        with self.assertRaises(ShapeError):
            NDArray.concatenate([NDArray.zeros((2, 3)), NDArray.zeros((4, 3))], axis=1)
        with self.assertRaises(ShapeError):
            NDArray.concatenate([NDArray.zeros((2, 3)), NDArray.zeros((2, 3))], axis=2)
        with self.assertRaises(ShapeError):
            NDArray.concatenate([NDArray.array(1.0), NDArray.array(2.0)])

    def test_stack(self):
        parts = [np.full((2, 3), i) for i in range(4)]
        arrays = [NDArray.from_numpy(p) for p in parts]
        for axis in (0, 1, 2, -1):
            np.testing.assert_array_equal(
                NDArray.stack(arrays, axis).to_numpy(), np.stack(parts, axis), axis
            )
        with self.assertRaises(ShapeError):
            NDArray.stack(arrays, 4)
        with self.assertRaises(ShapeError):
            NDArray.stack([NDArray.zeros(2), NDArray.zeros(3)])

    def test_vstack_hstack(self):
        a = NDArray.ones((2, 2))
        b = NDArray.zeros((1, 2))
        self.assertEqual(NDArray.vstack([a, b]).shape, (3, 2))
        self.assertEqual(NDArray.hstack([a, a]).shape, (2, 4))
        self.assertEqual(NDArray.hstack([NDArray.arange(2), NDArray.arange(3)]).shape, (5,))


class TestSplits(TestCase):
    def setUp(self) -> None:
        self.ref = np.arange(24).reshape(6, 4)
        self.a = NDArray.from_numpy(self.ref)

    def test_split_sections_are_views(self):
        parts = self.a.split(3)
        self.assertEqual(len(parts), 3)
        for part, ref in zip(parts, np.split(self.ref, 3)):
            self.assertTrue(part.shares_memory(self.a))
            self.assertIs(part.base, self.a)
            np.testing.assert_array_equal(part.to_numpy(), ref)

    def test_split_points(self):
        parts = self.a.split([1, 3], axis=1)
        for part, ref in zip(parts, np.split(self.ref, [1, 3], axis=1)):
            np.testing.assert_array_equal(part.to_numpy(), ref)

    def test_split_writes_through(self):
        top, _ = self.a.split(2)
        top.fill(-1)
        self.assertEqual(self.a.get(0, 0), -1)
        self.assertEqual(self.a.get(3, 0), 12)

    def test_vsplit_hsplit(self):
        self.assertEqual([p.shape for p in self.a.vsplit(2)], [(3, 4), (3, 4)])
        self.assertEqual([p.shape for p in self.a.hsplit(4)], [(6, 1)] * 4)

    def test_split_errors(self):
        with self.assertRaises(ShapeError):
            self.a.split(4)
        with self.assertRaises(ShapeError):
            self.a.split([3, 1])
        with self.assertRaises(ShapeError):
            self.a.split(2, axis=2)


if __name__ == "__main__":
    unittest.main()
