"""
Array factories.

This module defines `NDArrayFactoriesMixin`, the classmethod constructors of
`NDArray`: conversion from nested Python data or NumPy arrays, constant
fills, identity matrices and numeric ranges. Every factory returns a new
C-contiguous root array.

Design notes
------------
- Factories allocate through the active backend and wrap the result via the
  host class (`cls._from_result`), so subclasses get instances of
  themselves.
- Dtype inference follows `DType.from_value` / `DType.from_nested`: bool ->
  Bool, int -> Int64, float -> Float64.
"""

from __future__ import annotations

import math
from typing import Any, Optional, Sequence, Union

import numpy as np

from ....domain._dtype import DType
from ....domain._errors import DTypeError, ShapeError
from ....domain._view import normalize_shape

ShapeLike = Union[int, Sequence[int]]


class NDArrayFactoriesMixin:
    """
    Classmethod constructors for the concrete array class.

    Notes
    -----
    Methods assume the host class provides `_backend()`, `_from_result(...)`
    and `to_numpy()`.
    """

    @classmethod
    def array(cls, data: Any, dtype: Any = None) -> Any:
        """
        Create an array from nested sequences, a scalar, a NumPy array, or
        another array (always copied).

        Parameters
        ----------
        data : Any
            Nested lists/tuples of bool/int/float, a scalar, an
            `np.ndarray`, or an array.
        dtype : DType | str | None, optional
            Element type. Inferred from the data when None.

        Returns
        -------
        NDArray
            New root array.

        Raises
        ------
        ShapeError
            If the nested data is ragged or has too many dimensions.
        DTypeError
            If a leaf has an unsupported type or a value does not fit `dtype`.
        """
        if isinstance(data, np.ndarray):
            return cls.from_numpy(data, dtype)
        if hasattr(data, "view_metadata") and hasattr(data, "to_numpy"):
            return cls.from_numpy(data.to_numpy(), data.dtype if dtype is None else dtype)

        target = DType.from_nested(data) if dtype is None else DType.parse(dtype)
        try:
            values = np.array(data, dtype=target.numpy_dtype)
        except ValueError as e:
            raise ShapeError(f"cannot build an array from ragged data: {e}") from e
        except (OverflowError, TypeError) as e:
            raise DTypeError(f"cannot convert data to {target}: {e}") from e

        shape = normalize_shape(values.shape)
        return cls._from_result(cls._backend().from_values(values, shape, target))

    @classmethod
    def from_numpy(cls, arr: Any, dtype: Any = None) -> Any:
        """
        Copy a NumPy array into a new array.

        Raises
        ------
        DTypeError
            If the NumPy dtype has no KeyND counterpart.
        """
        arr = np.asarray(arr)
        target = DType.from_numpy(arr.dtype) if dtype is None else DType.parse(dtype)
        shape = normalize_shape(arr.shape)
        return cls._from_result(cls._backend().from_values(arr, shape, target))

    @classmethod
    def _filled(cls, shape: ShapeLike, dtype: DType, fill: Any) -> Any:
        shape = normalize_shape(shape)
        return cls._from_result(cls._backend().allocate(shape, dtype, fill))

    @classmethod
    def zeros(cls, shape: ShapeLike, dtype: Any = DType.FLOAT64) -> Any:
        """Array of the given shape filled with zeros."""
        dtype = DType.parse(dtype)
        return cls._filled(shape, dtype, False if dtype.is_bool else 0)

    @classmethod
    def ones(cls, shape: ShapeLike, dtype: Any = DType.FLOAT64) -> Any:
        """Array of the given shape filled with ones."""
        dtype = DType.parse(dtype)
        return cls._filled(shape, dtype, True if dtype.is_bool else 1)

    @classmethod
    def empty(cls, shape: ShapeLike, dtype: Any = DType.FLOAT64) -> Any:
        """Array of the given shape with unspecified contents."""
        return cls._filled(shape, DType.parse(dtype), None)

    @classmethod
    def full(cls, shape: ShapeLike, fill_value: Any, dtype: Any = None) -> Any:
        """
        Array of the given shape filled with `fill_value`.

        The dtype is inferred from `fill_value` when not given.
        """
        dtype = DType.from_value(fill_value) if dtype is None else DType.parse(dtype)
        return cls._filled(shape, dtype, fill_value)

    @classmethod
    def zeros_like(cls, other: Any, dtype: Any = None) -> Any:
        """Zeros with the shape (and by default the dtype) of `other`."""
        return cls.zeros(other.shape, other.dtype if dtype is None else dtype)

    @classmethod
    def ones_like(cls, other: Any, dtype: Any = None) -> Any:
        """Ones with the shape (and by default the dtype) of `other`."""
        return cls.ones(other.shape, other.dtype if dtype is None else dtype)

    @classmethod
    def empty_like(cls, other: Any, dtype: Any = None) -> Any:
        return cls.empty(other.shape, other.dtype if dtype is None else dtype)

    @classmethod
    def full_like(cls, other: Any, fill_value: Any, dtype: Any = None) -> Any:
        """`fill_value` with the shape (and by default the dtype) of `other`."""
        return cls.full(other.shape, fill_value, other.dtype if dtype is None else dtype)

    @classmethod
    def eye(
        cls, n: int, m: Optional[int] = None, k: int = 0, dtype: Any = DType.FLOAT64
    ) -> Any:
        """
        2-D array with ones on the `k`-th diagonal and zeros elsewhere.

        Parameters
        ----------
        n : int
            Number of rows.
        m : Optional[int], optional
            Number of columns. Defaults to `n`.
        k : int, optional
            Diagonal offset: positive above, negative below the main one.
        """
        m = n if m is None else m
        normalize_shape((n, m))
        return cls._from_result(cls._backend().eye(n, m, k, DType.parse(dtype)))

    @classmethod
    def arange(
        cls,
        start: float,
        stop: Optional[float] = None,
        step: float = 1,
        dtype: Any = None,
    ) -> Any:
        """
        Evenly spaced values in the half-open interval `[start, stop)`.

        With a single argument the range is `[0, start)`. The dtype defaults
        to Int64 when every argument is an int, Float64 otherwise.

        Raises
        ------
        ShapeError
            If `step` is zero.
        DTypeError
            If `dtype` is Bool.
        """
        if stop is None:
            start, stop = 0, start
        if step == 0:
            raise ShapeError("arange step must not be zero")

        if dtype is None:
            dtype = DType.INT64
            if any(DType.from_value(v).is_float for v in (start, stop, step)):
                dtype = DType.FLOAT64
        dtype = DType.parse(dtype)
        if dtype.is_bool:
            raise DTypeError("arange does not support the bool dtype")

        return cls._from_result(cls._backend().arange(start, stop, step, dtype))

    @classmethod
    def linspace(
        cls,
        start: float,
        stop: float,
        num: int = 50,
        endpoint: bool = True,
        dtype: Any = DType.FLOAT64,
    ) -> Any:
        """
        `num` evenly spaced samples from `start` to `stop`.

        Raises
        ------
        ShapeError
            If `num` is not positive.
        DTypeError
            If `dtype` is not a float type.
        """
        if num <= 0:
            raise ShapeError(f"number of samples, {num}, must be positive")
        dtype = DType.parse(dtype)
        if not dtype.is_float:
            raise DTypeError("linspace only supports Float32 and Float64")
        return cls._from_result(
            cls._backend().linspace(start, stop, num, endpoint, dtype)
        )

    @classmethod
    def logspace(
        cls,
        start: float,
        stop: float,
        num: int = 50,
        endpoint: bool = True,
        base: float = 10.0,
        dtype: Any = DType.FLOAT64,
    ) -> Any:
        """
        Samples spaced evenly on a log scale: `base ** linspace(start, stop)`.
        """
        exponents = cls.linspace(start, stop, num, endpoint, dtype)
        return cls.full((), float(base), dtype) ** exponents

    @classmethod
    def geomspace(
        cls,
        start: float,
        stop: float,
        num: int = 50,
        endpoint: bool = True,
        dtype: Any = DType.FLOAT64,
    ) -> Any:
        """
        Geometric progression from `start` to `stop`.

        Raises
        ------
        ShapeError
            If the bounds are zero or differ in sign.
        """
        if start == 0 or stop == 0 or (start < 0) != (stop < 0):
            raise ShapeError("geomspace bounds must be non-zero and share a sign")
        sign = -1.0 if start < 0 else 1.0
        logs = cls.linspace(
            math.log(abs(start)), math.log(abs(stop)), num, endpoint, dtype
        )
        return logs.exp() * sign
