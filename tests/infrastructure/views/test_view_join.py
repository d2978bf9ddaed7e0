import unittest
from unittest import TestCase

from keynd.domain._errors import ShapeError
from keynd.domain._view import ViewMetadata
from keynd.infrastructure.views._join import (
    concatenate_shape,
    indices_for_equal_split,
    split_views,
    stack_shape,
)


class TestJoinShapes(TestCase):
    def test_concatenate(self):
        self.assertEqual(concatenate_shape([(2, 3), (4, 3)], 0), (6, 3))
        self.assertEqual(concatenate_shape([(2, 3), (2, 1)], -1), (2, 4))

    def test_concatenate_errors(self):
        with self.assertRaises(ShapeError):
            concatenate_shape([])
        with self.assertRaises(ShapeError):
            concatenate_shape([(2, 3), (2, 4)], 0)
        with self.assertRaises(ShapeError):
            concatenate_shape([(2, 3), (2, 3, 1)], 0)
        with self.assertRaises(ShapeError):
            concatenate_shape([(2, 3), (2, 3)], 2)
        with self.assertRaises(ShapeError):
            concatenate_shape([(), ()], 0)

    def test_stack(self):
        self.assertEqual(stack_shape([(2, 3)] * 4, 0), (4, 2, 3))
        self.assertEqual(stack_shape([(2, 3)] * 4, 2), (2, 3, 4))
        self.assertEqual(stack_shape([(2, 3)] * 4, -1), (2, 3, 4))
        self.assertEqual(stack_shape([()] * 3, 0), (3,))

    def test_stack_errors(self):
        with self.assertRaises(ShapeError):
            stack_shape([(2, 3), (3, 2)])
        with self.assertRaises(ShapeError):
            stack_shape([(2, 3)], 3)


class TestSplit(TestCase):
    def test_equal_split_points(self):
        self.assertEqual(indices_for_equal_split(6, 3), [2, 4])
        self.assertEqual(indices_for_equal_split(6, 1), [])
        with self.assertRaises(ShapeError):
            indices_for_equal_split(7, 3)
        with self.assertRaises(ShapeError):
            indices_for_equal_split(6, 0)

    def test_sections(self):
        meta = ViewMetadata.contiguous((6, 2))
        parts = split_views(meta, 3, 0)
        self.assertEqual(
            parts,
            [
                ViewMetadata((2, 2), (2, 1), 0),
                ViewMetadata((2, 2), (2, 1), 4),
                ViewMetadata((2, 2), (2, 1), 8),
            ],
        )

    def test_explicit_points(self):
        meta = ViewMetadata.contiguous((2, 5))
        parts = split_views(meta, [1, 3], axis=1)
        self.assertEqual([p.shape for p in parts], [(2, 1), (2, 2), (2, 2)])
        self.assertEqual([p.offset for p in parts], [0, 1, 3])
        self.assertTrue(all(p.strides == (5, 1) for p in parts))

    def test_points_may_produce_empty_parts(self):
        parts = split_views(ViewMetadata.contiguous((4,)), [0, 4])
        self.assertEqual([p.shape for p in parts], [(0,), (4,), (0,)])

    def test_points_must_ascend_within_axis(self):
        meta = ViewMetadata.contiguous((4,))
        with self.assertRaises(ShapeError):
            split_views(meta, [3, 1])
        with self.assertRaises(ShapeError):
            split_views(meta, [5])

    def test_split_respects_view_offset(self):
        meta = ViewMetadata((4,), (3,), 2)
        parts = split_views(meta, 2)
        self.assertEqual(parts[1], ViewMetadata((2,), (3,), 8))


if __name__ == "__main__":
    unittest.main()
