"""
NumPy reference implementation of the compute backend contract.

Buffers are flat, C-contiguous NumPy arrays. A view descriptor is turned
into a strided NumPy view with `np.lib.stride_tricks.as_strided` anchored at
the descriptor's offset, using byte strides derived from element strides.
Kernels then run on that view and always produce fresh buffers.

Design notes
------------
- Every public method is wrapped by `guarded`, so failures come back as a
  `BackendResult` carrying a status code and never as an exception.
- Dtype promotion and result dtypes follow the rules in `_kernels`.
- Integer division by zero is reported as `StatusCode.MATH` instead of
  producing NumPy's silent zeros. Float division follows IEEE semantics.
"""

from __future__ import annotations

import logging
from math import prod
from typing import Any, Optional, Sequence
import warnings

import numpy as np
from numpy.lib.stride_tricks import as_strided

from ...domain._backend import BackendResult, BinaryOp, ReductionOp, UnaryOp
from ...domain._dtype import DType
from ...domain._errors import (
    ArrayIndexError,
    DTypeError,
    MathError,
    ShapeError,
    StatusCode,
)
from ...domain._modes import PadMode
from ...domain._view import ViewMetadata
from ..views._transform import expand_pad_constants
from . import _kernels as K
from ._status import guarded, last_error

logger = logging.getLogger(__name__)

_PAD_MODES = {
    PadMode.CONSTANT: "constant",
    PadMode.SYMMETRIC: "symmetric",
    PadMode.REFLECT: "reflect",
    PadMode.EDGE: "edge",
}


def strided(buffer: np.ndarray, meta: ViewMetadata, dtype: DType) -> np.ndarray:
    """
    Strided NumPy view of `buffer` described by `meta`.

    The result aliases `buffer`; writes through it are visible to every view
    of the same storage.
    """
    if meta.size == 0:
        return np.empty(meta.shape, dtype=dtype.numpy_dtype)
    item = buffer.itemsize
    return as_strided(
        buffer[meta.offset :],
        shape=meta.shape,
        strides=tuple(s * item for s in meta.strides),
    )


def _ok(arr: Any, dtype: DType) -> BackendResult:
    """Successful array result holding a fresh flat copy of `arr`."""
    out = np.array(arr, dtype=dtype.numpy_dtype, copy=True, order="C")
    return BackendResult(
        status=StatusCode.SUCCESS,
        buffer=out.reshape(-1),
        dtype=dtype,
        shape=tuple(out.shape),
    )


def _ok_value(value: Any, dtype: DType) -> BackendResult:
    """Successful scalar result converted to a Python scalar."""
    return BackendResult(
        status=StatusCode.SUCCESS,
        dtype=dtype,
        value=np.asarray(value, dtype=dtype.numpy_dtype).item(),
    )


_OK = BackendResult(status=StatusCode.SUCCESS)


def _check_scalar(value: Any, dtype: DType) -> Any:
    """
    Validate that `value` is representable in an integer `dtype`.
    """
    if isinstance(value, (bool, np.bool_)) or dtype.is_bool or dtype.is_float:
        return value
    if isinstance(value, (int, np.integer)):
        if value < dtype.min_value or value > dtype.max_value:
            raise DTypeError(f"Value {value} is out of range for dtype {dtype}")
    return value


class NumpyBackend:
    """
    Host backend executing every kernel with NumPy.

    Notes
    -----
    Instances hold no state; the last error message is thread-local and
    shared by all instances.
    """

    name = "numpy"

    def last_error(self) -> Optional[str]:
        """Message of this thread's most recent failed call."""
        return last_error()

    # ------------------------------------------------------------------
    # allocation / conversion
    # ------------------------------------------------------------------
    @guarded
    def allocate(
        self, shape: Sequence[int], dtype: DType, fill: Any = None
    ) -> BackendResult:
        n = prod(shape)
        if fill is None:
            buf = np.empty(n, dtype=dtype.numpy_dtype)
        else:
            buf = np.full(n, _check_scalar(fill, dtype), dtype=dtype.numpy_dtype)
        return BackendResult(
            status=StatusCode.SUCCESS, buffer=buf, dtype=dtype, shape=tuple(shape)
        )

    @guarded
    def from_values(
        self, values: Any, shape: Sequence[int], dtype: DType
    ) -> BackendResult:
        flat = np.array(values, dtype=dtype.numpy_dtype, copy=True).reshape(-1)
        if flat.shape[0] != prod(shape):
            raise ShapeError(
                f"cannot build shape {tuple(shape)} from {flat.shape[0]} values"
            )
        return BackendResult(
            status=StatusCode.SUCCESS, buffer=flat, dtype=dtype, shape=tuple(shape)
        )

    @guarded
    def arange(
        self, start: float, stop: float, step: float, dtype: DType
    ) -> BackendResult:
        if step == 0:
            raise ShapeError("arange step must not be zero")
        return _ok(np.arange(start, stop, step), dtype)

    @guarded
    def linspace(
        self, start: float, stop: float, num: int, endpoint: bool, dtype: DType
    ) -> BackendResult:
        if num < 0:
            raise ShapeError(f"number of samples must be non-negative, got {num}")
        return _ok(np.linspace(start, stop, num, endpoint=endpoint), dtype)

    @guarded
    def eye(self, n: int, m: int, k: int, dtype: DType) -> BackendResult:
        return _ok(np.eye(n, m, k), dtype)

    def to_numpy(self, buffer: np.ndarray, meta: ViewMetadata, dtype: DType) -> np.ndarray:
        """Copy the logical contents of a view into a new NumPy array."""
        return np.array(strided(buffer, meta, dtype), copy=True, order="C")

    # ------------------------------------------------------------------
    # element access
    # ------------------------------------------------------------------
    @guarded
    def get_element(self, buffer: np.ndarray, flat_offset: int, dtype: DType) -> BackendResult:
        if flat_offset < 0 or flat_offset >= buffer.shape[0]:
            raise ArrayIndexError(
                f"offset {flat_offset} is outside a buffer of {buffer.shape[0]} elements"
            )
        return _ok_value(buffer[flat_offset], dtype)

    @guarded
    def set_element(
        self, buffer: np.ndarray, flat_offset: int, value: Any, dtype: DType
    ) -> BackendResult:
        if flat_offset < 0 or flat_offset >= buffer.shape[0]:
            raise ArrayIndexError(
                f"offset {flat_offset} is outside a buffer of {buffer.shape[0]} elements"
            )
        buffer[flat_offset] = _check_scalar(value, dtype)
        return _OK

    # ------------------------------------------------------------------
    # elementwise
    # ------------------------------------------------------------------
    @guarded
    def unary(
        self, op: UnaryOp, buffer: np.ndarray, meta: ViewMetadata, dtype: DType
    ) -> BackendResult:
        out_dtype = K.unary_result_dtype(op, dtype)
        x = strided(buffer, meta, dtype)
        if op in K.FLOAT_UNARY_OPS:
            x = x.astype(out_dtype.numpy_dtype)
        with np.errstate(all="ignore"):
            return _ok(K.UNARY_KERNELS[op](x), out_dtype)

    @guarded
    def binary(
        self,
        op: BinaryOp,
        buffer_a: np.ndarray,
        meta_a: ViewMetadata,
        dtype_a: DType,
        buffer_b: np.ndarray,
        meta_b: ViewMetadata,
        dtype_b: DType,
    ) -> BackendResult:
        compute = K.binary_compute_dtype(op, dtype_a, dtype_b)
        out_dtype = K.binary_result_dtype(op, dtype_a, dtype_b)

        a = strided(buffer_a, meta_a, dtype_a).astype(compute.numpy_dtype)
        b = strided(buffer_b, meta_b, dtype_b).astype(compute.numpy_dtype)

        if op in K.INT_DIVISION_OPS and DType.promote(dtype_a, dtype_b).is_integer:
            if np.any(b == 0):
                raise MathError("integer division by zero")
        if op is BinaryOp.POWER and compute.is_integer and np.any(b < 0):
            raise MathError("integers to negative integer powers are not allowed")

        with np.errstate(all="ignore"):
            return _ok(K.BINARY_KERNELS[op](a, b), out_dtype)

    @guarded
    def reduce(
        self,
        op: ReductionOp,
        buffer: np.ndarray,
        meta: ViewMetadata,
        dtype: DType,
        axis: Optional[int] = None,
        keepdims: bool = False,
        ddof: int = 0,
    ) -> BackendResult:
        out_dtype = K.reduction_result_dtype(op, dtype)
        x = strided(buffer, meta, dtype)

        if op in K.IDENTITYLESS_REDUCTIONS:
            reduced = meta.size if axis is None else meta.shape[axis]
            if reduced == 0:
                raise ShapeError(f"{op.value} of an empty sequence is undefined")

        if op in (ReductionOp.SUM, ReductionOp.PROD, ReductionOp.MEAN):
            x = x.astype(out_dtype.numpy_dtype)

        with np.errstate(all="ignore"), warnings.catch_warnings():
            warnings.simplefilter("ignore", RuntimeWarning)
            result = K.REDUCTION_KERNELS[op](x, axis, keepdims, ddof)

        if axis is None and not keepdims:
            return _ok_value(result, out_dtype)
        return _ok(result, out_dtype)

    # ------------------------------------------------------------------
    # structural
    # ------------------------------------------------------------------
    @guarded
    def compact(self, buffer: np.ndarray, meta: ViewMetadata, dtype: DType) -> BackendResult:
        logger.debug("Materializing contiguous copy of shape %s", meta.shape)
        return _ok(strided(buffer, meta, dtype), dtype)

    @guarded
    def ravel_f(self, buffer: np.ndarray, meta: ViewMetadata, dtype: DType) -> BackendResult:
        logger.debug("Materializing F-order copy of shape %s", meta.shape)
        return _ok(strided(buffer, meta, dtype).ravel(order="F"), dtype)

    @guarded
    def astype(
        self, buffer: np.ndarray, meta: ViewMetadata, dtype: DType, target: DType
    ) -> BackendResult:
        with np.errstate(all="ignore"), warnings.catch_warnings():
            warnings.simplefilter("ignore", RuntimeWarning)
            return _ok(strided(buffer, meta, dtype), target)

    @guarded
    def fill(
        self, buffer: np.ndarray, meta: ViewMetadata, dtype: DType, value: Any
    ) -> BackendResult:
        if meta.size:
            strided(buffer, meta, dtype)[...] = _check_scalar(value, dtype)
        return _OK

    @guarded
    def assign(
        self,
        buffer: np.ndarray,
        meta: ViewMetadata,
        dtype: DType,
        src_buffer: np.ndarray,
        src_meta: ViewMetadata,
        src_dtype: DType,
    ) -> BackendResult:
        if meta.shape != src_meta.shape:
            raise ShapeError(
                f"could not assign shape {src_meta.shape} into shape {meta.shape}"
            )
        if meta.size:
            src = np.array(strided(src_buffer, src_meta, src_dtype), copy=True)
            strided(buffer, meta, dtype)[...] = src.astype(dtype.numpy_dtype)
        return _OK

    @guarded
    def clip(
        self,
        buffer: np.ndarray,
        meta: ViewMetadata,
        dtype: DType,
        lo: Optional[float],
        hi: Optional[float],
    ) -> BackendResult:
        if lo is not None and hi is not None and lo > hi:
            raise MathError(f"clip lower bound {lo} exceeds upper bound {hi}")
        return _ok(np.clip(strided(buffer, meta, dtype), lo, hi), dtype)

    @guarded
    def cumulative(
        self,
        op: ReductionOp,
        buffer: np.ndarray,
        meta: ViewMetadata,
        dtype: DType,
        axis: Optional[int] = None,
    ) -> BackendResult:
        kernel = K.CUMULATIVE_KERNELS.get(op)
        if kernel is None:
            raise DTypeError(f"{op.value} has no cumulative form")
        out_dtype = K.reduction_result_dtype(op, dtype)
        x = strided(buffer, meta, dtype).astype(out_dtype.numpy_dtype)
        return _ok(kernel(x, axis=axis), out_dtype)

    @guarded
    def softmax(
        self, buffer: np.ndarray, meta: ViewMetadata, dtype: DType, axis: int
    ) -> BackendResult:
        if not dtype.is_float:
            raise DTypeError(f"softmax requires a float array, got {dtype}")
        x = strided(buffer, meta, dtype)
        if x.size == 0:
            return _ok(x.copy(), dtype)
        with np.errstate(all="ignore"):
            e = np.exp(x - np.max(x, axis=axis, keepdims=True))
            s = np.sum(e, axis=axis, keepdims=True)
            # Rows whose sum overflowed or vanished fall back to uniform weights.
            uniform = np.full_like(e, 1.0 / x.shape[axis])
            out = np.where(np.isfinite(s) & (s > 0), e / s, uniform)
        return _ok(out.astype(dtype.numpy_dtype), dtype)

    @guarded
    def bincount(
        self, buffer: np.ndarray, meta: ViewMetadata, dtype: DType, minlength: int
    ) -> BackendResult:
        if dtype.is_float:
            raise DTypeError(f"bincount requires an integer or bool array, got {dtype}")
        if minlength < 0:
            raise ShapeError(f"minlength must be non-negative, got {minlength}")
        x = np.ravel(strided(buffer, meta, dtype)).astype(np.int64)
        if x.size and x.min() < 0:
            raise ArrayIndexError("bincount values must be non-negative")
        return _ok(np.bincount(x, minlength=minlength), DType.INT64)

    # ------------------------------------------------------------------
    # gather / scatter
    # ------------------------------------------------------------------
    @guarded
    def take_flat(
        self, buffer: np.ndarray, meta: ViewMetadata, dtype: DType, indices: Sequence[int]
    ) -> BackendResult:
        flat = np.ravel(strided(buffer, meta, dtype))
        return _ok(flat[np.asarray(indices, dtype=np.int64)], dtype)

    @guarded
    def take_axis(
        self,
        buffer: np.ndarray,
        meta: ViewMetadata,
        dtype: DType,
        indices: Sequence[int],
        axis: int,
    ) -> BackendResult:
        x = strided(buffer, meta, dtype)
        return _ok(np.take(x, np.asarray(indices, dtype=np.int64), axis=axis), dtype)

    @guarded
    def take_along_axis(
        self,
        buffer: np.ndarray,
        meta: ViewMetadata,
        dtype: DType,
        idx_buffer: np.ndarray,
        idx_meta: ViewMetadata,
        axis: int,
    ) -> BackendResult:
        x = strided(buffer, meta, dtype)
        idx = np.array(strided(idx_buffer, idx_meta, DType.INT64), dtype=np.int64)
        return _ok(np.take_along_axis(x, idx, axis=axis), dtype)

    @guarded
    def put_flat(
        self,
        buffer: np.ndarray,
        meta: ViewMetadata,
        dtype: DType,
        indices: Sequence[int],
        values: Any,
    ) -> BackendResult:
        out = np.array(strided(buffer, meta, dtype), copy=True, order="C")
        np.put(out, np.asarray(indices, dtype=np.int64), np.asarray(values).astype(out.dtype))
        return _ok(out, dtype)

    @guarded
    def put_along_axis(
        self,
        buffer: np.ndarray,
        meta: ViewMetadata,
        dtype: DType,
        idx_buffer: np.ndarray,
        idx_meta: ViewMetadata,
        values: Any,
        axis: int,
    ) -> BackendResult:
        out = np.array(strided(buffer, meta, dtype), copy=True, order="C")
        idx = np.array(strided(idx_buffer, idx_meta, DType.INT64), dtype=np.int64)
        np.put_along_axis(out, idx, np.asarray(values).astype(out.dtype), axis=axis)
        return _ok(out, dtype)

    @guarded
    def scatter_add_flat(
        self,
        buffer: np.ndarray,
        meta: ViewMetadata,
        dtype: DType,
        indices: Sequence[int],
        updates: Any,
    ) -> BackendResult:
        out = np.array(strided(buffer, meta, dtype), copy=True, order="C").reshape(-1)
        np.add.at(out, np.asarray(indices, dtype=np.int64), np.asarray(updates).astype(out.dtype))
        return _ok(out.reshape(meta.shape), dtype)

    @guarded
    def where(
        self,
        cond: tuple[np.ndarray, ViewMetadata, DType],
        x: tuple[np.ndarray, ViewMetadata, DType],
        y: tuple[np.ndarray, ViewMetadata, DType],
    ) -> BackendResult:
        out_dtype = DType.promote(x[2], y[2])
        c = strided(*cond).astype(bool)
        return _ok(np.where(c, strided(*x), strided(*y)), out_dtype)

    # ------------------------------------------------------------------
    # joins and shape kernels
    # ------------------------------------------------------------------
    @staticmethod
    def _promoted(parts: Sequence[tuple[np.ndarray, ViewMetadata, DType]]) -> DType:
        out = parts[0][2]
        for p in parts[1:]:
            out = DType.promote(out, p[2])
        return out

    @guarded
    def concatenate(
        self, parts: Sequence[tuple[np.ndarray, ViewMetadata, DType]], axis: int
    ) -> BackendResult:
        out_dtype = self._promoted(parts)
        arrays = [strided(*p).astype(out_dtype.numpy_dtype) for p in parts]
        return _ok(np.concatenate(arrays, axis=axis), out_dtype)

    @guarded
    def stack(
        self, parts: Sequence[tuple[np.ndarray, ViewMetadata, DType]], axis: int
    ) -> BackendResult:
        out_dtype = self._promoted(parts)
        arrays = [strided(*p).astype(out_dtype.numpy_dtype) for p in parts]
        return _ok(np.stack(arrays, axis=axis), out_dtype)

    @guarded
    def pad(
        self,
        buffer: np.ndarray,
        meta: ViewMetadata,
        dtype: DType,
        pad_width: Sequence[tuple[int, int]],
        mode: PadMode,
        constants: Sequence[float],
    ) -> BackendResult:
        x = strided(buffer, meta, dtype)
        if mode is PadMode.CONSTANT:
            fill = expand_pad_constants(constants, meta.ndim)
            out = np.pad(x, pad_width, mode="constant", constant_values=fill)
        else:
            out = np.pad(x, pad_width, mode=_PAD_MODES[mode])
        return _ok(out, dtype)

    @guarded
    def tile(
        self, buffer: np.ndarray, meta: ViewMetadata, dtype: DType, reps: Sequence[int]
    ) -> BackendResult:
        return _ok(np.tile(strided(buffer, meta, dtype), tuple(reps)), dtype)

    @guarded
    def repeat(
        self,
        buffer: np.ndarray,
        meta: ViewMetadata,
        dtype: DType,
        repeats: Sequence[int],
        axis: Optional[int],
    ) -> BackendResult:
        counts: Any = repeats[0] if len(repeats) == 1 else list(repeats)
        return _ok(np.repeat(strided(buffer, meta, dtype), counts, axis=axis), dtype)

    # ------------------------------------------------------------------
    # linear algebra
    # ------------------------------------------------------------------
    @guarded
    def dot(
        self,
        buffer_a: np.ndarray,
        meta_a: ViewMetadata,
        dtype_a: DType,
        buffer_b: np.ndarray,
        meta_b: ViewMetadata,
        dtype_b: DType,
    ) -> BackendResult:
        out_dtype = DType.promote(dtype_a, dtype_b)
        a = strided(buffer_a, meta_a, dtype_a).astype(out_dtype.numpy_dtype)
        b = strided(buffer_b, meta_b, dtype_b).astype(out_dtype.numpy_dtype)
        return _ok(np.dot(a, b), out_dtype)

    @guarded
    def matmul(
        self,
        buffer_a: np.ndarray,
        meta_a: ViewMetadata,
        dtype_a: DType,
        buffer_b: np.ndarray,
        meta_b: ViewMetadata,
        dtype_b: DType,
    ) -> BackendResult:
        out_dtype = DType.promote(dtype_a, dtype_b)
        a = strided(buffer_a, meta_a, dtype_a).astype(out_dtype.numpy_dtype)
        b = strided(buffer_b, meta_b, dtype_b).astype(out_dtype.numpy_dtype)
        return _ok(np.matmul(a, b), out_dtype)
