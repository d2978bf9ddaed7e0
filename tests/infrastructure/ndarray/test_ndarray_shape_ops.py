import unittest
from unittest import TestCase

import numpy as np

from keynd import NDArray, PadMode, ShapeError


class TestReshape(TestCase):
    def test_contiguous_reshape_is_view(self):
        a = NDArray.arange(6)
        b = a.reshape(2, 3)
        self.assertTrue(b.shares_memory(a))
        self.assertIs(b.base, a)
        np.testing.assert_array_equal(b.to_numpy(), np.arange(6).reshape(2, 3))
        self.assertEqual(a.reshape((3, -1)).shape, (3, 2))

    def test_non_contiguous_reshape_copies(self):
        a = NDArray.arange(6).reshape(2, 3)
        b = a.T.reshape(6)
        self.assertFalse(b.shares_memory(a))
        self.assertIsNone(b.base)
        np.testing.assert_array_equal(b.to_numpy(), np.arange(6).reshape(2, 3).T.reshape(6))

    def test_f_order_reshape(self):
        b = NDArray.arange(6).reshape((2, 3), order="F")
        np.testing.assert_array_equal(
            b.to_numpy(), np.arange(6).reshape((2, 3), order="F")
        )
        self.assertTrue(b.is_f_contiguous)

    def test_f_order_reshape_of_matrix_reads_in_f_order(self):
        ref = np.arange(6).reshape(2, 3)
        a = NDArray.from_numpy(ref)
        b = a.reshape((3, 2), order="F")
        np.testing.assert_array_equal(b.to_numpy(), ref.reshape((3, 2), order="F"))
        self.assertFalse(b.shares_memory(a))
        np.testing.assert_array_equal(
            b.reshape(6, order="F").to_numpy(), a.ravel("F").to_numpy()
        )

    def test_f_order_reshape_of_transposed_view_is_zero_copy(self):
        ref = np.arange(12).reshape(3, 4)
        a = NDArray.from_numpy(ref)
        flat = a.T.reshape(12, order="F")
        self.assertTrue(flat.shares_memory(a))
        np.testing.assert_array_equal(flat.to_numpy(), ref.T.reshape(12, order="F"))
        grid = a.T.reshape((2, 6), order="F")
        np.testing.assert_array_equal(grid.to_numpy(), ref.T.reshape((2, 6), order="F"))

    def test_f_order_reshape_of_strided_view(self):
        ref = np.arange(24).reshape(4, 6)
        view = NDArray.from_numpy(ref)[::2, 1:]
        np.testing.assert_array_equal(
            view.reshape((5, 2), order="F").to_numpy(),
            ref[::2, 1:].reshape((5, 2), order="F"),
        )

    def test_reshape_round_trip_on_offset_view(self):
        ref = np.arange(24.0).reshape(4, 6)
        a = NDArray.from_numpy(ref)
        rows = a[1:3]
        self.assertTrue(rows.is_contiguous)
        there = rows.reshape(3, 4)
        back = there.reshape(rows.shape)
        self.assertTrue(back.shares_memory(a))
        self.assertEqual(back.view_metadata, rows.view_metadata)
        np.testing.assert_array_equal(back.to_numpy(), ref[1:3])

    def test_bad_reshape(self):
        with self.assertRaises(ShapeError):
            NDArray.arange(6).reshape(4, 2)

    def test_ravel_and_flatten(self):
        a = NDArray.arange(6).reshape(2, 3)
        self.assertTrue(a.ravel().shares_memory(a))
        np.testing.assert_array_equal(a.T.ravel().to_numpy(), np.arange(6).reshape(2, 3).T.ravel())
        np.testing.assert_array_equal(a.ravel("F").to_numpy(), np.arange(6).reshape(2, 3).ravel("F"))
        flat = a.flatten()
        self.assertFalse(flat.shares_memory(a))
        self.assertEqual(flat.shape, (6,))


class TestAxisViews(TestCase):
    def setUp(self) -> None:
        self.ref = np.arange(24).reshape(2, 3, 4)
        self.a = NDArray.from_numpy(self.ref)

    def test_transpose_and_permute(self):
        np.testing.assert_array_equal(self.a.T.to_numpy(), self.ref.T)
        np.testing.assert_array_equal(
            self.a.transpose(1, 0, 2).to_numpy(), self.ref.transpose(1, 0, 2)
        )
        np.testing.assert_array_equal(
            self.a.permute((2, 0, 1)).to_numpy(), self.ref.transpose(2, 0, 1)
        )
        self.assertTrue(self.a.T.shares_memory(self.a))

    def test_swap_axes(self):
        np.testing.assert_array_equal(
            self.a.swap_axes(0, 2).to_numpy(), np.swapaxes(self.ref, 0, 2)
        )

    def test_merge_axes(self):
        merged = self.a.merge_axes(0, 1)
        self.assertEqual(merged.shape, (6, 4))
        self.assertTrue(merged.shares_memory(self.a))
        np.testing.assert_array_equal(merged.to_numpy(), self.ref.reshape(6, 4))
        with self.assertRaises(ShapeError):
            self.a.T.merge_axes(0, 1)

    def test_insert_and_squeeze(self):
        b = self.a.insert_axis(1)
        self.assertEqual(b.shape, (2, 1, 3, 4))
        self.assertEqual(b.squeeze().shape, (2, 3, 4))
        self.assertEqual(self.a.expand_dims(-1).shape, (2, 3, 4, 1))
        self.assertEqual(NDArray.zeros((1, 1)).squeeze().shape, (1,))
        corner = self.a[1:2, 2:3, 3:4].squeeze()
        self.assertEqual((corner.shape, corner.strides), ((1,), (1,)))
        self.assertEqual(corner.to_list(), [self.ref[1, 2, 3]])
        with self.assertRaises(ShapeError):
            self.a.squeeze(0)

    def test_flip(self):
        np.testing.assert_array_equal(self.a.flip().to_numpy(), np.flip(self.ref))
        np.testing.assert_array_equal(self.a.flip(1).to_numpy(), np.flip(self.ref, 1))
        np.testing.assert_array_equal(
            self.a.invert_axis(-1).to_numpy(), self.ref[..., ::-1]
        )

    def test_flipped_view_writes_through(self):
        v = NDArray.arange(4)
        f = v.flip()
        f.set(0, 100)
        self.assertEqual(v.get(3), 100)

    def test_diagonal(self):
        m = NDArray.arange(12).reshape(3, 4)
        ref = np.arange(12).reshape(3, 4)
        np.testing.assert_array_equal(m.diagonal().to_numpy(), np.diagonal(ref))
        np.testing.assert_array_equal(m.diagonal(1).to_numpy(), np.diagonal(ref, 1))
        np.testing.assert_array_equal(m.diagonal(-1).to_numpy(), np.diagonal(ref, -1))
        self.assertTrue(m.diagonal().shares_memory(m))

    def test_broadcast_to(self):
        row = NDArray.arange(3)
        b = row.broadcast_to((2, 3))
        self.assertEqual(b.strides, (0, 1))
        np.testing.assert_array_equal(b.to_numpy(), np.broadcast_to(np.arange(3), (2, 3)))
        with self.assertRaises(ShapeError):
            row.broadcast_to((4,))


class TestCopyingShapeOps(TestCase):
    def test_pad_modes_match_numpy(self):
        ref = np.arange(6).reshape(2, 3)
        a = NDArray.from_numpy(ref)
        np.testing.assert_array_equal(a.pad(1).to_numpy(), np.pad(ref, 1))
        np.testing.assert_array_equal(
            a.pad(((0, 1), (2, 0)), "reflect").to_numpy(),
            np.pad(ref, ((0, 1), (2, 0)), mode="reflect"),
        )
        np.testing.assert_array_equal(
            a.pad(1, PadMode.SYMMETRIC).to_numpy(), np.pad(ref, 1, mode="symmetric")
        )

    def test_pad_edge_repeats_border(self):
        ref = np.arange(6).reshape(2, 3)
        a = NDArray.from_numpy(ref)
        self.assertEqual(NDArray.arange(3).pad(1, mode="edge").to_list(), [0, 0, 1, 2, 2])
        np.testing.assert_array_equal(
            a.T.pad(((1, 0), (0, 2)), PadMode.EDGE).to_numpy(),
            np.pad(ref.T, ((1, 0), (0, 2)), mode="edge"),
        )
        with self.assertRaises(ShapeError):
            NDArray.zeros((0,)).pad(1, "edge")

    def test_pad_constants(self):
        a = NDArray.arange(3)
        self.assertEqual(a.pad((1, 2), constant_values=(-1, 9)).to_list(), [-1, 0, 1, 2, 9, 9])
        self.assertEqual(a.pad(1, constant_values=5).to_list(), [5, 0, 1, 2, 5])

    def test_pad_errors(self):
        with self.assertRaises(ShapeError):
            NDArray.arange(3).pad(-1)
        with self.assertRaises(ShapeError):
            NDArray.arange(3).pad(1, "wrap")

    def test_tile(self):
        ref = np.arange(3)
        a = NDArray.arange(3)
        np.testing.assert_array_equal(a.tile(2).to_numpy(), np.tile(ref, 2))
        np.testing.assert_array_equal(a.tile((2, 2)).to_numpy(), np.tile(ref, (2, 2)))

    def test_repeat(self):
        ref = np.arange(6).reshape(2, 3)
        a = NDArray.from_numpy(ref)
        np.testing.assert_array_equal(a.repeat(2).to_numpy(), np.repeat(ref, 2))
        np.testing.assert_array_equal(
            a.repeat([1, 0, 2], axis=1).to_numpy(), np.repeat(ref, [1, 0, 2], axis=1)
        )
        with self.assertRaises(ShapeError):
            a.repeat([1, 2], axis=1)


if __name__ == "__main__":
    unittest.main()
