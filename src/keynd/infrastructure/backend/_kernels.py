"""
Enum-keyed kernel tables for the NumPy backend.

Each table maps an operation enum to a NumPy callable. The backend looks
kernels up by enum member; there is no name-based dispatch. Result-dtype
rules live next to the tables so that the NDArray layer and the backend
agree on them.
"""

from __future__ import annotations

from typing import Callable, Optional

import numpy as np

from ...domain._backend import BinaryOp, ReductionOp, UnaryOp
from ...domain._dtype import DType
from ...domain._errors import DTypeError


def _sigmoid(x: np.ndarray) -> np.ndarray:
    return 1.0 / (1.0 + np.exp(-x))


UNARY_KERNELS: dict[UnaryOp, Callable[[np.ndarray], np.ndarray]] = {
    UnaryOp.NEGATIVE: np.negative,
    UnaryOp.ABS: np.abs,
    UnaryOp.SIGN: np.sign,
    UnaryOp.FLOOR: np.floor,
    UnaryOp.CEIL: np.ceil,
    UnaryOp.ROUND: np.round,
    UnaryOp.SQUARE: np.square,
    UnaryOp.SQRT: np.sqrt,
    UnaryOp.EXP: np.exp,
    UnaryOp.LOG: np.log,
    UnaryOp.LOG2: np.log2,
    UnaryOp.LOG10: np.log10,
    UnaryOp.LOG1P: np.log1p,
    UnaryOp.SIN: np.sin,
    UnaryOp.COS: np.cos,
    UnaryOp.TAN: np.tan,
    UnaryOp.ASIN: np.arcsin,
    UnaryOp.ACOS: np.arccos,
    UnaryOp.ATAN: np.arctan,
    UnaryOp.SINH: np.sinh,
    UnaryOp.COSH: np.cosh,
    UnaryOp.TANH: np.tanh,
    UnaryOp.SIGMOID: _sigmoid,
    UnaryOp.LOGICAL_NOT: np.logical_not,
    UnaryOp.INVERT: np.invert,
}

FLOAT_UNARY_OPS = frozenset(
    (
        UnaryOp.SQRT,
        UnaryOp.EXP,
        UnaryOp.LOG,
        UnaryOp.LOG2,
        UnaryOp.LOG10,
        UnaryOp.LOG1P,
        UnaryOp.SIN,
        UnaryOp.COS,
        UnaryOp.TAN,
        UnaryOp.ASIN,
        UnaryOp.ACOS,
        UnaryOp.ATAN,
        UnaryOp.SINH,
        UnaryOp.COSH,
        UnaryOp.TANH,
        UnaryOp.SIGMOID,
    )
)

# Operations that are meaningless on booleans.
NUMERIC_UNARY_OPS = frozenset((UnaryOp.NEGATIVE, UnaryOp.SIGN))

BINARY_KERNELS: dict[BinaryOp, Callable[[np.ndarray, np.ndarray], np.ndarray]] = {
    BinaryOp.ADD: np.add,
    BinaryOp.SUBTRACT: np.subtract,
    BinaryOp.MULTIPLY: np.multiply,
    BinaryOp.DIVIDE: np.true_divide,
    BinaryOp.FLOOR_DIVIDE: np.floor_divide,
    BinaryOp.REMAINDER: np.remainder,
    BinaryOp.POWER: np.power,
    BinaryOp.MINIMUM: np.minimum,
    BinaryOp.MAXIMUM: np.maximum,
    BinaryOp.HYPOT: np.hypot,
    BinaryOp.EQUAL: np.equal,
    BinaryOp.NOT_EQUAL: np.not_equal,
    BinaryOp.GREATER: np.greater,
    BinaryOp.GREATER_EQUAL: np.greater_equal,
    BinaryOp.LESS: np.less,
    BinaryOp.LESS_EQUAL: np.less_equal,
    BinaryOp.LOGICAL_AND: np.logical_and,
    BinaryOp.LOGICAL_OR: np.logical_or,
    BinaryOp.LOGICAL_XOR: np.logical_xor,
    BinaryOp.BITWISE_AND: np.bitwise_and,
    BinaryOp.BITWISE_OR: np.bitwise_or,
    BinaryOp.BITWISE_XOR: np.bitwise_xor,
}

BOOL_BINARY_OPS = frozenset(
    (
        BinaryOp.EQUAL,
        BinaryOp.NOT_EQUAL,
        BinaryOp.GREATER,
        BinaryOp.GREATER_EQUAL,
        BinaryOp.LESS,
        BinaryOp.LESS_EQUAL,
        BinaryOp.LOGICAL_AND,
        BinaryOp.LOGICAL_OR,
        BinaryOp.LOGICAL_XOR,
    )
)

FLOAT_BINARY_OPS = frozenset((BinaryOp.DIVIDE, BinaryOp.HYPOT))

# Integer and bool only.
BITWISE_BINARY_OPS = frozenset(
    (BinaryOp.BITWISE_AND, BinaryOp.BITWISE_OR, BinaryOp.BITWISE_XOR)
)

# Integer kernels that must reject a zero divisor.
INT_DIVISION_OPS = frozenset((BinaryOp.DIVIDE, BinaryOp.FLOOR_DIVIDE, BinaryOp.REMAINDER))

# Arithmetic that booleans do not support.
NUMERIC_BINARY_OPS = frozenset(
    (
        BinaryOp.SUBTRACT,
        BinaryOp.DIVIDE,
        BinaryOp.FLOOR_DIVIDE,
        BinaryOp.REMAINDER,
        BinaryOp.POWER,
        BinaryOp.HYPOT,
    )
)


def _var(x: np.ndarray, axis: Optional[int], keepdims: bool, ddof: int) -> np.ndarray:
    return np.var(x, axis=axis, keepdims=keepdims, ddof=ddof)


def _std(x: np.ndarray, axis: Optional[int], keepdims: bool, ddof: int) -> np.ndarray:
    return np.std(x, axis=axis, keepdims=keepdims, ddof=ddof)


REDUCTION_KERNELS: dict[
    ReductionOp, Callable[[np.ndarray, Optional[int], bool, int], np.ndarray]
] = {
    ReductionOp.SUM: lambda x, axis, keepdims, ddof: np.sum(x, axis=axis, keepdims=keepdims),
    ReductionOp.PROD: lambda x, axis, keepdims, ddof: np.prod(x, axis=axis, keepdims=keepdims),
    ReductionOp.MEAN: lambda x, axis, keepdims, ddof: np.mean(x, axis=axis, keepdims=keepdims),
    ReductionOp.MIN: lambda x, axis, keepdims, ddof: np.min(x, axis=axis, keepdims=keepdims),
    ReductionOp.MAX: lambda x, axis, keepdims, ddof: np.max(x, axis=axis, keepdims=keepdims),
    ReductionOp.VAR: _var,
    ReductionOp.STD: _std,
    ReductionOp.ARGMIN: lambda x, axis, keepdims, ddof: np.argmin(x, axis=axis, keepdims=keepdims),
    ReductionOp.ARGMAX: lambda x, axis, keepdims, ddof: np.argmax(x, axis=axis, keepdims=keepdims),
}

CUMULATIVE_KERNELS: dict[ReductionOp, Callable[..., np.ndarray]] = {
    ReductionOp.SUM: np.cumsum,
    ReductionOp.PROD: np.cumprod,
}

# Reductions with no identity element; they reject empty input.
IDENTITYLESS_REDUCTIONS = frozenset(
    (ReductionOp.MIN, ReductionOp.MAX, ReductionOp.ARGMIN, ReductionOp.ARGMAX)
)


def _float_of(dtype: DType) -> DType:
    return DType.FLOAT32 if dtype is DType.FLOAT32 else DType.FLOAT64


def unary_result_dtype(op: UnaryOp, dtype: DType) -> DType:
    """
    Result dtype of a unary operation.

    Raises
    ------
    DTypeError
        For sign/negation of booleans, or bitwise NOT of floats.
    """
    if op is UnaryOp.LOGICAL_NOT:
        return DType.BOOL
    if op is UnaryOp.INVERT and dtype.is_float:
        raise DTypeError(f"{op.value} is not supported for {dtype} arrays")
    if op in FLOAT_UNARY_OPS:
        return _float_of(dtype)
    if dtype is DType.BOOL and op in NUMERIC_UNARY_OPS:
        raise DTypeError(f"{op.value} is not supported for bool arrays")
    return dtype


def binary_compute_dtype(op: BinaryOp, a: DType, b: DType) -> DType:
    """
    Dtype both operands are cast to before the kernel runs.

    Raises
    ------
    DTypeError
        For arithmetic that booleans do not support, or bitwise operations
        on floats.
    """
    promoted = DType.promote(a, b)
    if op in BITWISE_BINARY_OPS and promoted.is_float:
        raise DTypeError(f"{op.value} requires integer or bool operands, got {promoted}")
    if op in FLOAT_BINARY_OPS:
        return _float_of(promoted)
    if promoted is DType.BOOL and op in NUMERIC_BINARY_OPS:
        raise DTypeError(f"{op.value} is not supported for bool arrays")
    return promoted


def binary_result_dtype(op: BinaryOp, a: DType, b: DType) -> DType:
    """
    Result dtype of a binary operation.
    """
    if op in BOOL_BINARY_OPS:
        return DType.BOOL
    return binary_compute_dtype(op, a, b)


def reduction_result_dtype(op: ReductionOp, dtype: DType) -> DType:
    """
    Result dtype of a reduction.

    - sum/prod accumulate in Int64 (bool, signed) or UInt64 (unsigned);
      floats keep their type.
    - mean/var/std give Float32 for Float32 input and Float64 otherwise.
    - min/max keep the input type.
    - argmin/argmax give Int64.
    """
    if op in (ReductionOp.SUM, ReductionOp.PROD):
        if dtype.is_float:
            return dtype
        return DType.UINT64 if dtype.is_unsigned else DType.INT64
    if op in (ReductionOp.MEAN, ReductionOp.VAR, ReductionOp.STD):
        return _float_of(dtype)
    if op in (ReductionOp.ARGMIN, ReductionOp.ARGMAX):
        return DType.INT64
    return dtype
