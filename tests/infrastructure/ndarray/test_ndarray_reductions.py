import unittest
from unittest import TestCase

import numpy as np

from keynd import ArrayIndexError, DType, DTypeError, NDArray, ShapeError


class TestReductions(TestCase):
    def setUp(self) -> None:
        self.ref = np.array([[3.0, -1.0, 4.0], [1.0, 5.0, -9.0]])
        self.a = NDArray.from_numpy(self.ref)

    def test_full_reductions_return_scalars(self):
        for name in ("sum", "prod", "mean", "min", "max", "var", "std"):
            out = getattr(self.a, name)()
            self.assertIsInstance(out, float, name)
            self.assertAlmostEqual(out, float(getattr(np, name)(self.ref)), msg=name)
        self.assertEqual(self.a.argmax(), 4)
        self.assertEqual(self.a.argmin(), 5)

    def test_axis_reductions_match_numpy(self):
        for name in ("sum", "prod", "mean", "min", "max", "var", "std"):
            for axis in (0, 1, -1):
                np.testing.assert_allclose(
                    getattr(self.a, name)(axis).to_numpy(),
                    getattr(np, name)(self.ref, axis=axis),
                    err_msg=f"{name} axis={axis}",
                )
        np.testing.assert_array_equal(self.a.argmax(1).to_numpy(), [2, 1])
        np.testing.assert_array_equal(self.a.argmin(0).to_numpy(), [1, 0, 1])

    def test_keepdims(self):
        self.assertEqual(self.a.sum(1, keepdims=True).shape, (2, 1))
        self.assertEqual(self.a.sum(keepdims=True).shape, (1, 1))
        self.assertEqual(self.a.argmax(0, keepdims=True).shape, (1, 3))

    def test_ddof(self):
        self.assertAlmostEqual(self.a.var(ddof=1), float(np.var(self.ref, ddof=1)))
        np.testing.assert_allclose(
            self.a.std(0, ddof=1).to_numpy(), np.std(self.ref, axis=0, ddof=1)
        )

    def test_reduction_over_strided_view(self):
        view = self.a.T[::2]
        np.testing.assert_allclose(view.sum(0).to_numpy(), self.ref.T[::2].sum(0))

    def test_result_dtypes(self):
        ints = NDArray.array([1, 2, 3], dtype="int8")
        self.assertIs(ints.sum(0, keepdims=True).dtype, DType.INT64)
        self.assertIs(ints.mean(0, keepdims=True).dtype, DType.FLOAT64)
        self.assertIs(ints.max(0, keepdims=True).dtype, DType.INT8)
        self.assertIs(ints.argmax(0, keepdims=True).dtype, DType.INT64)
        self.assertIs(NDArray.array([1], dtype="uint8").sum(0, keepdims=True).dtype, DType.UINT64)
        self.assertIsInstance(ints.sum(), int)
        self.assertEqual(NDArray.array([True, True, False]).sum(), 2)

    def test_empty_inputs(self):
        empty = NDArray.zeros((0,))
        self.assertEqual(empty.sum(), 0.0)
        self.assertEqual(empty.prod(), 1.0)
        for name in ("min", "max", "argmin", "argmax"):
            with self.assertRaises(ShapeError, msg=name):
                getattr(empty, name)()
        self.assertEqual(NDArray.zeros((2, 0)).sum(1).to_list(), [0.0, 0.0])
        with self.assertRaises(ShapeError):
            NDArray.zeros((2, 0)).max(1)

    def test_axis_out_of_range(self):
        with self.assertRaises(ShapeError):
            self.a.sum(2)
        with self.assertRaises(ShapeError):
            self.a.cumsum(-3)


class TestCumulative(TestCase):
    def test_cumsum_cumprod(self):
        ref = np.arange(1, 7).reshape(2, 3)
        a = NDArray.from_numpy(ref)
        np.testing.assert_array_equal(a.cumsum().to_numpy(), np.cumsum(ref))
        np.testing.assert_array_equal(a.cumsum(1).to_numpy(), np.cumsum(ref, axis=1))
        np.testing.assert_array_equal(a.cumprod(0).to_numpy(), np.cumprod(ref, axis=0))
        self.assertEqual(a.cumsum().shape, (6,))
        self.assertIs(a.cumsum().dtype, DType.INT64)

    def test_cumsum_on_transposed_view(self):
        ref = np.arange(6.0).reshape(2, 3)
        a = NDArray.from_numpy(ref)
        np.testing.assert_allclose(a.T.cumsum().to_numpy(), np.cumsum(ref.T))


def _np_softmax(x: np.ndarray, axis: int) -> np.ndarray:
    e = np.exp(x - x.max(axis=axis, keepdims=True))
    return e / e.sum(axis=axis, keepdims=True)


class TestSoftmax(TestCase):
    def test_last_axis_by_default(self):
        ref = np.array([[1.0, 2.0, 3.0], [0.0, 0.0, 0.0]])
        out = NDArray.from_numpy(ref).softmax().to_numpy()
        np.testing.assert_allclose(out, _np_softmax(ref, -1))
        np.testing.assert_allclose(out.sum(axis=-1), [1.0, 1.0])

    def test_along_axis_of_transposed_view(self):
        ref = np.arange(12.0).reshape(3, 4) / 4
        a = NDArray.from_numpy(ref).T
        out = a.softmax(axis=0)
        self.assertEqual(out.shape, (4, 3))
        np.testing.assert_allclose(out.to_numpy(), _np_softmax(ref.T, 0))

    def test_keeps_float32(self):
        a = NDArray.array([1.0, 2.0], dtype="float32")
        self.assertIs(a.softmax().dtype, DType.FLOAT32)

    def test_large_inputs_do_not_overflow(self):
        out = NDArray.array([1000.0, 1000.0]).softmax().to_numpy()
        np.testing.assert_allclose(out, [0.5, 0.5])

    def test_non_finite_lane_falls_back_to_uniform(self):
        out = NDArray.array([[np.inf, np.inf, np.inf], [0.0, 0.0, 0.0]]).softmax()
        np.testing.assert_allclose(out.to_numpy(), np.full((2, 3), 1 / 3))

    def test_rejects_integers_and_bad_axis(self):
        with self.assertRaises(DTypeError):
            NDArray.arange(3).softmax()
        with self.assertRaises(ShapeError):
            NDArray.zeros((2, 2)).softmax(axis=2)


class TestBincount(TestCase):
    def test_counts_match_numpy(self):
        ref = np.array([[0, 1, 1], [3, 1, 0]])
        out = NDArray.from_numpy(ref).bincount()
        self.assertIs(out.dtype, DType.INT64)
        np.testing.assert_array_equal(out.to_numpy(), np.bincount(ref.ravel()))

    def test_minlength_pads_result(self):
        a = NDArray.array([1, 2])
        self.assertEqual(a.bincount(minlength=5).to_list(), [0, 1, 1, 0, 0])
        self.assertEqual(a.bincount(minlength=1).to_list(), [0, 1, 1])
        self.assertEqual(NDArray.zeros((0,), dtype="int32").bincount(3).to_list(), [0, 0, 0])

    def test_strided_view_and_bool_input(self):
        ref = np.arange(10).reshape(2, 5)
        view = NDArray.from_numpy(ref)[:, ::2]
        np.testing.assert_array_equal(
            view.bincount().to_numpy(), np.bincount(ref[:, ::2].ravel())
        )
        self.assertEqual(NDArray.array([True, False, True]).bincount().to_list(), [1, 2])

    def test_errors(self):
        with self.assertRaises(ArrayIndexError):
            NDArray.array([1, -1]).bincount()
        with self.assertRaises(DTypeError):
            NDArray.array([1.0, 2.0]).bincount()
        with self.assertRaises(ShapeError):
            NDArray.array([1, 2]).bincount(minlength=-1)


if __name__ == "__main__":
    unittest.main()
