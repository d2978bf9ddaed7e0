import unittest
from unittest import TestCase

from keynd.domain._errors import ShapeError
from keynd.domain._view import ViewMetadata
from keynd.infrastructure.views._transform import (
    diagonal_view,
    expand_pad_constants,
    flip_view,
    infer_shape,
    insert_axis_view,
    invert_axis_view,
    merge_axes_view,
    normalize_pad_constants,
    normalize_pad_width,
    normalize_repeats,
    normalize_reps,
    pad_shape,
    permute_view,
    ravel_view,
    repeat_shape,
    reshape_view,
    squeeze_view,
    swap_axes_view,
    tile_shape,
    transpose_view,
)


class TestReshape(TestCase):
    def test_infer_shape(self):
        self.assertEqual(infer_shape((2, -1), 6), (2, 3))
        self.assertEqual(infer_shape(-1, 6), (6,))
        self.assertEqual(infer_shape((), 1), ())

    def test_infer_shape_errors(self):
        with self.assertRaises(ShapeError):
            infer_shape((-1, -1), 6)
        with self.assertRaises(ShapeError):
            infer_shape((4, -1), 6)
        with self.assertRaises(ShapeError):
            infer_shape((4, 2), 6)
        with self.assertRaises(ShapeError):
            infer_shape((0, -1), 0)

    def test_contiguous_reshape_is_zero_copy(self):
        meta = ViewMetadata.contiguous((2, 6), offset=3)
        out, must_copy = reshape_view(meta, (3, 4))
        self.assertFalse(must_copy)
        self.assertEqual(out, ViewMetadata((3, 4), (4, 1), 3))

    def test_f_order_strides(self):
        out, must_copy = reshape_view(ViewMetadata.contiguous((6,)), (2, 3), "F")
        self.assertFalse(must_copy)
        self.assertEqual(out.strides, (1, 2))

    def test_f_order_reshape_needs_f_contiguous_source(self):
        _, must_copy = reshape_view(ViewMetadata.contiguous((2, 3)), (3, 2), "F")
        self.assertTrue(must_copy)
        f_meta = ViewMetadata((2, 3), (1, 2), 5)
        out, must_copy = reshape_view(f_meta, (3, 2), "F")
        self.assertFalse(must_copy)
        self.assertEqual(out, ViewMetadata((3, 2), (1, 3), 5))

    def test_non_contiguous_requires_copy(self):
        transposed = ViewMetadata((3, 2), (1, 3), 0)
        out, must_copy = reshape_view(transposed, (6,))
        self.assertTrue(must_copy)
        self.assertEqual(out, ViewMetadata((6,), (1,), 0))

    def test_reshape_round_trip_restores_view(self):
        meta = ViewMetadata.contiguous((2, 6), offset=3)
        for shape in ((3, 4), (12,), (2, 3, 2), (1, 12, 1)):
            there, copied = reshape_view(meta, shape)
            back, copied_back = reshape_view(there, meta.shape)
            self.assertFalse(copied or copied_back, shape)
            self.assertEqual(back, meta, shape)

    def test_ravel(self):
        c = ViewMetadata.contiguous((2, 3), offset=2)
        self.assertEqual(ravel_view(c), (ViewMetadata((6,), (1,), 2), False))
        self.assertTrue(ravel_view(c, "F")[1])
        f = ViewMetadata((2, 3), (1, 2), 0)
        self.assertFalse(ravel_view(f, "F")[1])


class TestAxisPermutations(TestCase):
    def setUp(self) -> None:
        self.meta = ViewMetadata.contiguous((2, 3, 4))

    def test_transpose_reverses(self):
        self.assertEqual(
            transpose_view(self.meta), ViewMetadata((4, 3, 2), (1, 4, 12), 0)
        )

    def test_permute(self):
        out = permute_view(self.meta, (1, 0, 2))
        self.assertEqual(out, ViewMetadata((3, 2, 4), (4, 12, 1), 0))
        self.assertEqual(permute_view(self.meta, (-1, 0, 1)).shape, (4, 2, 3))

    def test_permute_rejects_non_permutations(self):
        with self.assertRaises(ShapeError):
            permute_view(self.meta, (0, 1))
        with self.assertRaises(ShapeError):
            permute_view(self.meta, (0, 0, 1))

    def test_swap_axes(self):
        out = swap_axes_view(self.meta, 0, -1)
        self.assertEqual(out, ViewMetadata((4, 3, 2), (1, 4, 12), 0))

    def test_merge_axes(self):
        # axis 0 (stride 12) folds into axis 1 (stride 4, len 3): 12 == 4 * 3
        out = merge_axes_view(self.meta, 0, 1)
        self.assertEqual(out, ViewMetadata((6, 4), (4, 1), 0))

    def test_merge_axes_incompatible(self):
        with self.assertRaises(ShapeError):
            merge_axes_view(self.meta, 1, 0)
        with self.assertRaises(ShapeError):
            merge_axes_view(self.meta, 1, 1)

    def test_merge_size_one_axis(self):
        meta = ViewMetadata((1, 5), (99, 1), 0)
        self.assertEqual(merge_axes_view(meta, 0, 1), ViewMetadata((5,), (1,), 0))


class TestSizeOneAxes(TestCase):
    def test_insert_axis(self):
        meta = ViewMetadata.contiguous((2, 3))
        self.assertEqual(insert_axis_view(meta, 0), ViewMetadata((1, 2, 3), (6, 3, 1), 0))
        self.assertEqual(insert_axis_view(meta, 2), ViewMetadata((2, 3, 1), (3, 1, 1), 0))
        self.assertEqual(insert_axis_view(meta, -1).shape, (2, 3, 1))
        with self.assertRaises(ShapeError):
            insert_axis_view(meta, 3)

    def test_squeeze_all(self):
        meta = ViewMetadata((1, 3, 1), (3, 1, 1), 4)
        self.assertEqual(squeeze_view(meta), ViewMetadata((3,), (1,), 4))

    def test_squeeze_never_below_one_dimension(self):
        meta = ViewMetadata((1, 1), (1, 1), 2)
        self.assertEqual(squeeze_view(meta), ViewMetadata((1,), (1,), 2))

    def test_squeeze_all_ones_uses_unit_stride(self):
        meta = ViewMetadata((1, 1), (7, 5), 2)
        self.assertEqual(squeeze_view(meta), ViewMetadata((1,), (1,), 2))
        self.assertEqual(squeeze_view(ViewMetadata((1,), (4,), 0)).strides, (1,))

    def test_squeeze_undoes_insert_axis(self):
        for meta in (
            ViewMetadata.contiguous((2, 3)),
            ViewMetadata((4, 1, 3), (1, 12, 4), 2),
            ViewMetadata((5,), (-2,), 8),
        ):
            for k in range(meta.ndim + 1):
                inserted = insert_axis_view(meta, k)
                self.assertEqual(squeeze_view(inserted, k), meta, (meta, k))
                if 1 not in meta.shape:
                    self.assertEqual(squeeze_view(inserted).shape, meta.shape, (meta, k))

    def test_squeeze_explicit_axis(self):
        meta = ViewMetadata((1, 3, 1), (3, 1, 1), 0)
        self.assertEqual(squeeze_view(meta, 0).shape, (3, 1))
        with self.assertRaises(ShapeError):
            squeeze_view(meta, 1)


class TestFlipsAndDiagonal(TestCase):
    def test_invert_axis_moves_offset(self):
        meta = ViewMetadata.contiguous((2, 3))
        self.assertEqual(invert_axis_view(meta, 1), ViewMetadata((2, 3), (3, -1), 2))
        self.assertEqual(invert_axis_view(meta, 0), ViewMetadata((2, 3), (-3, 1), 3))

    def test_flip_all(self):
        meta = ViewMetadata.contiguous((2, 3))
        self.assertEqual(flip_view(meta), ViewMetadata((2, 3), (-3, -1), 5))

    def test_flip_empty_axis_keeps_offset(self):
        meta = ViewMetadata((0, 3), (3, 1), 0)
        self.assertEqual(flip_view(meta, 0).offset, 0)

    def test_diagonal(self):
        meta = ViewMetadata.contiguous((3, 4))
        self.assertEqual(diagonal_view(meta), ViewMetadata((3,), (5,), 0))
        self.assertEqual(diagonal_view(meta, 1), ViewMetadata((3,), (5,), 1))
        self.assertEqual(diagonal_view(meta, -2), ViewMetadata((1,), (5,), 8))
        self.assertEqual(diagonal_view(meta, 9).shape, (0,))

    def test_diagonal_requires_2d(self):
        with self.assertRaises(ShapeError):
            diagonal_view(ViewMetadata.contiguous((3,)))


class TestPadTileRepeatArguments(TestCase):
    def test_pad_width_forms(self):
        self.assertEqual(normalize_pad_width(1, 2), ((1, 1), (1, 1)))
        self.assertEqual(normalize_pad_width((1, 2), 2), ((1, 2), (1, 2)))
        self.assertEqual(normalize_pad_width(((0, 1), (2, 3)), 2), ((0, 1), (2, 3)))

    def test_pad_width_errors(self):
        with self.assertRaises(ShapeError):
            normalize_pad_width(-1, 2)
        with self.assertRaises(ShapeError):
            normalize_pad_width(((0, 1),), 2)
        with self.assertRaises(ShapeError):
            normalize_pad_width((1, 2, 3), 2)

    def test_pad_shape(self):
        self.assertEqual(pad_shape((2, 3), ((1, 1), (0, 2))), (4, 5))

    def test_pad_constants(self):
        self.assertEqual(normalize_pad_constants(None, 2), ())
        self.assertEqual(normalize_pad_constants(5, 2), (5.0,))
        self.assertEqual(normalize_pad_constants((1, 2), 2), (1.0, 2.0))
        self.assertEqual(
            normalize_pad_constants(((1, 2), (3, 4)), 2), (1.0, 2.0, 3.0, 4.0)
        )
        with self.assertRaises(ShapeError):
            normalize_pad_constants((1, 2, 3), 2)

    def test_expand_pad_constants(self):
        self.assertEqual(expand_pad_constants((), 2), ((0.0, 0.0), (0.0, 0.0)))
        self.assertEqual(expand_pad_constants((7.0,), 1), ((7.0, 7.0),))
        self.assertEqual(expand_pad_constants((1.0, 2.0), 2), ((1.0, 2.0), (1.0, 2.0)))
        self.assertEqual(
            expand_pad_constants((1.0, 2.0, 3.0, 4.0), 2), ((1.0, 2.0), (3.0, 4.0))
        )

    def test_tile_shape(self):
        self.assertEqual(normalize_reps(2), (2,))
        self.assertEqual(tile_shape((2, 3), (2,)), (2, 6))
        self.assertEqual(tile_shape((3,), (2, 2)), (2, 6))
        with self.assertRaises(ShapeError):
            normalize_reps(())
        with self.assertRaises(ShapeError):
            normalize_reps((-1,))

    def test_repeat_shape(self):
        self.assertEqual(normalize_repeats(2, 3), (2,))
        self.assertEqual(repeat_shape((2, 3), (2,), None), (12,))
        self.assertEqual(repeat_shape((2, 3), (1, 2, 3), 1), (2, 6))
        with self.assertRaises(ShapeError):
            normalize_repeats((1, 2), 3)


if __name__ == "__main__":
    unittest.main()
