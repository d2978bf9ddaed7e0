import unittest
from unittest import TestCase

import numpy as np

from keynd.domain._errors import ShapeError
from keynd.domain._view import ViewMetadata
from keynd.infrastructure.views._broadcast import (
    broadcast_shapes,
    broadcast_shapes_n,
    broadcast_view,
    dot_shape,
    matmul_shape,
)


class TestBroadcastShapes(TestCase):
    def test_matches_numpy(self):
        cases = [
            ((2, 3), (3,)),
            ((4, 1, 3), (5, 1)),
            ((), (2, 2)),
            ((1,), (0,)),
            ((8, 1, 6, 1), (7, 1, 5)),
        ]
        for a, b in cases:
            self.assertEqual(broadcast_shapes(a, b), np.broadcast_shapes(a, b), (a, b))

    def test_incompatible(self):
        with self.assertRaises(ShapeError):
            broadcast_shapes((2, 3), (4,))
        with self.assertRaises(ShapeError):
            broadcast_shapes((0,), (2,))

    def test_n_shapes(self):
        self.assertEqual(broadcast_shapes_n((3, 1), (1, 4), (2, 1, 1)), (2, 3, 4))
        self.assertEqual(broadcast_shapes_n(), ())


class TestBroadcastView(TestCase):
    def test_stretched_axes_get_zero_stride(self):
        meta = ViewMetadata((3, 1), (1, 1), 2)
        out = broadcast_view(meta, (2, 3, 4))
        self.assertEqual(out, ViewMetadata((2, 3, 4), (0, 1, 0), 2))

    def test_identity(self):
        meta = ViewMetadata.contiguous((2, 3))
        self.assertEqual(broadcast_view(meta, (2, 3)), meta)

    def test_cannot_shrink(self):
        with self.assertRaises(ShapeError):
            broadcast_view(ViewMetadata.contiguous((2, 3)), (3,))
        with self.assertRaises(ShapeError):
            broadcast_view(ViewMetadata.contiguous((2,)), (3,))


class TestProductShapes(TestCase):
    def test_dot_shapes(self):
        self.assertEqual(dot_shape((3,), (3,)), ())
        self.assertEqual(dot_shape((2, 3), (3,)), (2,))
        self.assertEqual(dot_shape((3,), (3, 4)), (4,))
        self.assertEqual(dot_shape((2, 3), (3, 4)), (2, 4))
        self.assertEqual(dot_shape((5, 2, 3), (6, 3, 4)), (5, 2, 6, 4))

    def test_dot_mismatch(self):
        with self.assertRaises(ShapeError):
            dot_shape((2, 3), (4, 2))
        with self.assertRaises(ShapeError):
            dot_shape((), (3,))

    def test_matmul_shapes(self):
        self.assertEqual(matmul_shape((3,), (3,)), ())
        self.assertEqual(matmul_shape((2, 3), (3,)), (2,))
        self.assertEqual(matmul_shape((3,), (3, 4)), (4,))
        self.assertEqual(matmul_shape((5, 2, 3), (3, 4)), (5, 2, 4))
        self.assertEqual(matmul_shape((5, 1, 2, 3), (7, 3, 4)), (5, 7, 2, 4))

    def test_matmul_errors(self):
        with self.assertRaises(ShapeError):
            matmul_shape((2, 3), (2, 3))
        with self.assertRaises(ShapeError):
            matmul_shape((2, 2, 3), (4, 3, 1))
        with self.assertRaises(ShapeError):
            matmul_shape((), (3, 3))


if __name__ == "__main__":
    unittest.main()
