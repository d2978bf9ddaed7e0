"""
Operand coercion for mixed array/scalar expressions.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from ...domain._dtype import DType


def scalar_dtype(value: Any, array_dtype: DType) -> DType:
    """
    Dtype a Python scalar takes when combined with an array of `array_dtype`.

    Scalars are weakly typed: they adopt the array's dtype unless their kind
    is wider (an int with a Bool array gives Int64, a float with a non-float
    array gives Float64). NumPy scalars keep their own dtype.
    """
    if isinstance(value, np.generic):
        return DType.from_numpy(value.dtype)
    if isinstance(value, bool):
        return array_dtype
    if isinstance(value, int):
        return DType.INT64 if array_dtype.is_bool else array_dtype
    if isinstance(value, float):
        return array_dtype if array_dtype.is_float else DType.FLOAT64
    return DType.from_value(value)


def as_operand(like: Any, value: Any) -> Any:
    """
    Convert `value` into an array of the same class as `like`.

    Arrays are returned unchanged, scalars become 0-d arrays typed by
    `scalar_dtype`, and nested data goes through `array()`.
    """
    if hasattr(value, "view_metadata"):
        return value
    if isinstance(value, (bool, int, float, np.generic)):
        return like.__class__.full((), value, scalar_dtype(value, like.dtype))
    return like.__class__.array(value)
