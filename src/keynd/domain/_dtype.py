"""
Element data types supported by KeyND arrays.

This module defines `DType`, the closed set of element types an array may
hold, together with the classification helpers, representable value ranges,
and the promotion rule applied whenever two arrays are combined.

Design notes
------------
- Enum values are stable integer tags and are part of the backend contract.
- Item size and classification are pure functions of the tag.
- Promotion is total and commutative over the whole set.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

import numpy as np

from ._errors import DTypeError

Number = Union[bool, int, float]


class DType(Enum):
    """
    Enumeration of array element types.

    Attributes
    ----------
    INT8, INT16, INT32, INT64 : DType
        Signed integers.
    UINT8, UINT16, UINT32, UINT64 : DType
        Unsigned integers.
    FLOAT32, FLOAT64 : DType
        IEEE floating point.
    BOOL : DType
        Boolean, stored as one byte per element.
    """

    INT8 = 0
    INT16 = 1
    INT32 = 2
    INT64 = 3
    UINT8 = 4
    UINT16 = 5
    UINT32 = 6
    UINT64 = 7
    FLOAT32 = 8
    FLOAT64 = 9
    BOOL = 10

    # ---------------------------------------------------------------------
    # Classification
    # ---------------------------------------------------------------------
    @property
    def item_size(self) -> int:
        """
        Size of one element in bytes.

        Returns
        -------
        int
            1, 2, 4 or 8.
        """
        return _ITEM_SIZES[self]

    @property
    def is_signed(self) -> bool:
        """True for signed integer types."""
        return self in _SIGNED

    @property
    def is_unsigned(self) -> bool:
        """True for unsigned integer types."""
        return self in _UNSIGNED

    @property
    def is_integer(self) -> bool:
        """True for signed or unsigned integer types."""
        return self.is_signed or self.is_unsigned

    @property
    def is_float(self) -> bool:
        """True for floating-point types."""
        return self in (DType.FLOAT32, DType.FLOAT64)

    @property
    def is_bool(self) -> bool:
        """True for the boolean type."""
        return self is DType.BOOL

    @property
    def min_value(self) -> Number:
        """
        Smallest representable value.

        Returns
        -------
        bool | int | float
            The minimum value of the type. Floats report the most negative
            finite value.
        """
        if self is DType.BOOL:
            return False
        if self.is_float:
            return float(np.finfo(self.numpy_dtype).min)
        return int(np.iinfo(self.numpy_dtype).min)

    @property
    def max_value(self) -> Number:
        """
        Largest representable value.

        Returns
        -------
        bool | int | float
            The maximum value of the type. Floats report the largest finite
            value.
        """
        if self is DType.BOOL:
            return True
        if self.is_float:
            return float(np.finfo(self.numpy_dtype).max)
        return int(np.iinfo(self.numpy_dtype).max)

    @property
    def numpy_dtype(self) -> np.dtype:
        """
        NumPy dtype used by the host backend to store this type.
        """
        return np.dtype(_NUMPY_NAMES[self])

    def __str__(self) -> str:
        return _NUMPY_NAMES[self]

    # ---------------------------------------------------------------------
    # Promotion
    # ---------------------------------------------------------------------
    @staticmethod
    def promote(a: "DType", b: "DType") -> "DType":
        """
        Result type when combining values of dtypes `a` and `b`.

        Rules, applied in order:
        - identical types are returned unchanged,
        - Bool defers to the other operand,
        - any Float64 gives Float64, then any Float32 gives Float32,
        - any Int64 gives Int64,
        - UInt64 mixed with a signed integer gives Float64,
        - unsigned mixed with a signed type of equal or larger width gives the
          next wider signed type (capped at Int64),
        - otherwise the wider of the two.

        Parameters
        ----------
        a, b : DType
            Operand dtypes.

        Returns
        -------
        DType
            The promoted dtype. The function is commutative.
        """
        a = DType.parse(a)
        b = DType.parse(b)

        if a is b:
            return a
        if a is DType.BOOL:
            return b
        if b is DType.BOOL:
            return a
        if DType.FLOAT64 in (a, b):
            return DType.FLOAT64
        if DType.FLOAT32 in (a, b):
            return DType.FLOAT32
        if DType.INT64 in (a, b):
            return DType.INT64
        if (a is DType.UINT64 and b.is_signed) or (b is DType.UINT64 and a.is_signed):
            return DType.FLOAT64

        if a.is_signed != b.is_signed:
            signed, unsigned = (a, b) if a.is_signed else (b, a)
            if unsigned.item_size >= signed.item_size:
                return _SIGNED_BY_SIZE[min(unsigned.item_size * 2, 8)]
            return signed

        return a if a.item_size >= b.item_size else b

    # ---------------------------------------------------------------------
    # Inference / parsing
    # ---------------------------------------------------------------------
    @staticmethod
    def from_value(value: Any) -> "DType":
        """
        Infer a dtype from a scalar value.

        Parameters
        ----------
        value : Any
            Python bool/int/float or NumPy scalar.

        Returns
        -------
        DType
            BOOL for bools, INT64 for ints, FLOAT64 for floats. NumPy scalars
            keep their own dtype.

        Raises
        ------
        DTypeError
            If the value type is not supported.
        """
        if isinstance(value, np.generic):
            return DType.from_numpy(value.dtype)
        # bool must be checked before int
        if isinstance(value, bool):
            return DType.BOOL
        if isinstance(value, int):
            return DType.INT64
        if isinstance(value, float):
            return DType.FLOAT64
        raise DTypeError(
            f"Cannot infer dtype from value of type '{type(value).__name__}'. "
            "Expected bool, int, or float."
        )

    @staticmethod
    def from_nested(values: Any) -> "DType":
        """
        Infer a dtype from nested sequences by inspecting every leaf.

        Promotion order is float > int > bool. Empty input defaults to
        FLOAT64.

        Parameters
        ----------
        values : Any
            Nested lists/tuples of scalars (or a single scalar).

        Returns
        -------
        DType
            The inferred dtype.

        Raises
        ------
        DTypeError
            If any leaf has an unsupported type.
        """
        has_float = has_int = has_bool = False

        stack = [values]
        while stack:
            current = stack.pop()
            if isinstance(current, (list, tuple)):
                stack.extend(current)
                continue

            kind = DType.from_value(current)
            if kind.is_float:
                has_float = True
            elif kind.is_integer:
                has_int = True
            else:
                has_bool = True

        if has_float:
            return DType.FLOAT64
        if has_int:
            return DType.INT64
        if has_bool:
            return DType.BOOL
        return DType.FLOAT64

    @staticmethod
    def from_numpy(dtype: Any) -> "DType":
        """
        Map a NumPy dtype (or dtype-like) onto a `DType`.

        Raises
        ------
        DTypeError
            If NumPy does not recognize `dtype` or KeyND has no counterpart.
        """
        if dtype is None:
            raise DTypeError("dtype must not be None")
        try:
            name = np.dtype(dtype).name
        except TypeError as e:
            raise DTypeError(f"Unrecognized dtype: {dtype!r}") from e

        found = _DTYPE_BY_NUMPY_NAME.get(name)
        if found is None:
            raise DTypeError(f"Unsupported dtype: {name}")
        return found

    @staticmethod
    def parse(value: Any) -> "DType":
        """
        Coerce a DType, integer tag, dtype name, or NumPy dtype to `DType`.

        Raises
        ------
        DTypeError
            If the value does not name a supported dtype.
        """
        if isinstance(value, DType):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return DType(value)
            except ValueError as e:
                raise DTypeError(f"Invalid dtype tag: {value}") from e
        if isinstance(value, str):
            found = _DTYPE_BY_NUMPY_NAME.get(value.lower())
            if found is not None:
                return found
        return DType.from_numpy(value)


_ITEM_SIZES = {
    DType.INT8: 1,
    DType.UINT8: 1,
    DType.BOOL: 1,
    DType.INT16: 2,
    DType.UINT16: 2,
    DType.INT32: 4,
    DType.UINT32: 4,
    DType.FLOAT32: 4,
    DType.INT64: 8,
    DType.UINT64: 8,
    DType.FLOAT64: 8,
}

_SIGNED = frozenset((DType.INT8, DType.INT16, DType.INT32, DType.INT64))
_UNSIGNED = frozenset((DType.UINT8, DType.UINT16, DType.UINT32, DType.UINT64))

_SIGNED_BY_SIZE = {
    1: DType.INT8,
    2: DType.INT16,
    4: DType.INT32,
    8: DType.INT64,
}

_NUMPY_NAMES = {
    DType.INT8: "int8",
    DType.INT16: "int16",
    DType.INT32: "int32",
    DType.INT64: "int64",
    DType.UINT8: "uint8",
    DType.UINT16: "uint16",
    DType.UINT32: "uint32",
    DType.UINT64: "uint64",
    DType.FLOAT32: "float32",
    DType.FLOAT64: "float64",
    DType.BOOL: "bool",
}

_DTYPE_BY_NUMPY_NAME = {name: dt for dt, name in _NUMPY_NAMES.items()}
