"""
Elementwise arithmetic, comparison and logical operations.

This module defines `NDArrayOpsMixin`. Every operation produces a new
C-contiguous root array; operands are never modified.

Design notes
------------
- Binary operations broadcast both operands to a common shape with
  stride-0 views (`broadcast_view`), so no operand data is copied before the
  kernel runs.
- Python scalars are weakly typed (see `_coerce.scalar_dtype`): `a + 1`
  keeps the dtype of `a`.
- `__eq__` / `__ne__` are elementwise, so arrays are unhashable.
"""

from __future__ import annotations

from typing import Any, Optional

from ....domain._backend import BinaryOp, UnaryOp
from ...views._broadcast import broadcast_shapes, broadcast_shapes_n, broadcast_view
from .._coerce import as_operand


class NDArrayOpsMixin:
    """
    Elementwise operations for the concrete array class.

    Notes
    -----
    Methods assume the host class provides `_backend()`, `_operand()`,
    `_from_result(...)`, `view_metadata`, `shape` and `dtype`.
    """

    __hash__ = None  # type: ignore[assignment]

    # ------------------------------------------------------------------
    # dispatch helpers
    # ------------------------------------------------------------------
    def _unary(self, op: UnaryOp) -> Any:
        return self._from_result(self._backend().unary(op, *self._operand()))

    def _binary(self, op: BinaryOp, other: Any, reflected: bool = False) -> Any:
        """
        Apply `op` to `self` and `other` after broadcasting.

        With `reflected=True` the operands are swapped (`other op self`).

        Raises
        ------
        ShapeError
            If the shapes cannot be broadcast together.
        """
        a, b = self, as_operand(self, other)
        if reflected:
            a, b = b, a
        shape = broadcast_shapes(a.shape, b.shape)
        ma = broadcast_view(a.view_metadata, shape)
        mb = broadcast_view(b.view_metadata, shape)
        return self._from_result(
            self._backend().binary(op, a._buffer, ma, a.dtype, b._buffer, mb, b.dtype)
        )

    # ------------------------------------------------------------------
    # unary
    # ------------------------------------------------------------------
    def neg(self) -> Any:
        return self._unary(UnaryOp.NEGATIVE)

    def abs(self) -> Any:
        return self._unary(UnaryOp.ABS)

    def sign(self) -> Any:
        return self._unary(UnaryOp.SIGN)

    def floor(self) -> Any:
        return self._unary(UnaryOp.FLOOR)

    def ceil(self) -> Any:
        return self._unary(UnaryOp.CEIL)

    def round(self) -> Any:
        """Round half to even."""
        return self._unary(UnaryOp.ROUND)

    def square(self) -> Any:
        return self._unary(UnaryOp.SQUARE)

    def sqrt(self) -> Any:
        """Square root; negative inputs give NaN."""
        return self._unary(UnaryOp.SQRT)

    def exp(self) -> Any:
        return self._unary(UnaryOp.EXP)

    def log(self) -> Any:
        """Natural logarithm; `log(0)` is `-inf`, negative inputs give NaN."""
        return self._unary(UnaryOp.LOG)

    def log2(self) -> Any:
        return self._unary(UnaryOp.LOG2)

    def log10(self) -> Any:
        return self._unary(UnaryOp.LOG10)

    def log1p(self) -> Any:
        return self._unary(UnaryOp.LOG1P)

    def sin(self) -> Any:
        return self._unary(UnaryOp.SIN)

    def cos(self) -> Any:
        return self._unary(UnaryOp.COS)

    def tan(self) -> Any:
        return self._unary(UnaryOp.TAN)

    def asin(self) -> Any:
        return self._unary(UnaryOp.ASIN)

    def acos(self) -> Any:
        return self._unary(UnaryOp.ACOS)

    def atan(self) -> Any:
        return self._unary(UnaryOp.ATAN)

    def sinh(self) -> Any:
        return self._unary(UnaryOp.SINH)

    def cosh(self) -> Any:
        return self._unary(UnaryOp.COSH)

    def tanh(self) -> Any:
        return self._unary(UnaryOp.TANH)

    def sigmoid(self) -> Any:
        """Logistic function `1 / (1 + exp(-x))`."""
        return self._unary(UnaryOp.SIGMOID)

    def logical_not(self) -> Any:
        return self._unary(UnaryOp.LOGICAL_NOT)

    def invert(self) -> Any:
        """Bitwise NOT (`~`). Logical NOT on bool arrays; floats are rejected."""
        return self._unary(UnaryOp.INVERT)

    # ------------------------------------------------------------------
    # binary
    # ------------------------------------------------------------------
    def add(self, other: Any) -> Any:
        return self._binary(BinaryOp.ADD, other)

    def subtract(self, other: Any) -> Any:
        return self._binary(BinaryOp.SUBTRACT, other)

    def multiply(self, other: Any) -> Any:
        return self._binary(BinaryOp.MULTIPLY, other)

    def divide(self, other: Any) -> Any:
        """
        True division. Always produces a float dtype.

        Raises
        ------
        MathError
            If both operands are integers and a divisor is zero.
        """
        return self._binary(BinaryOp.DIVIDE, other)

    def floor_divide(self, other: Any) -> Any:
        return self._binary(BinaryOp.FLOOR_DIVIDE, other)

    def remainder(self, other: Any) -> Any:
        """Remainder with the sign of the divisor."""
        return self._binary(BinaryOp.REMAINDER, other)

    def power(self, other: Any) -> Any:
        """
        Elementwise power.

        Raises
        ------
        MathError
            For negative exponents on integer operands.
        """
        return self._binary(BinaryOp.POWER, other)

    def minimum(self, other: Any) -> Any:
        return self._binary(BinaryOp.MINIMUM, other)

    def maximum(self, other: Any) -> Any:
        return self._binary(BinaryOp.MAXIMUM, other)

    def hypot(self, other: Any) -> Any:
        """`sqrt(self**2 + other**2)` without intermediate overflow."""
        return self._binary(BinaryOp.HYPOT, other)

    def eq(self, other: Any) -> Any:
        return self._binary(BinaryOp.EQUAL, other)

    def ne(self, other: Any) -> Any:
        return self._binary(BinaryOp.NOT_EQUAL, other)

    def gt(self, other: Any) -> Any:
        return self._binary(BinaryOp.GREATER, other)

    def gte(self, other: Any) -> Any:
        return self._binary(BinaryOp.GREATER_EQUAL, other)

    def lt(self, other: Any) -> Any:
        return self._binary(BinaryOp.LESS, other)

    def lte(self, other: Any) -> Any:
        return self._binary(BinaryOp.LESS_EQUAL, other)

    def logical_and(self, other: Any) -> Any:
        return self._binary(BinaryOp.LOGICAL_AND, other)

    def logical_or(self, other: Any) -> Any:
        return self._binary(BinaryOp.LOGICAL_OR, other)

    def logical_xor(self, other: Any) -> Any:
        return self._binary(BinaryOp.LOGICAL_XOR, other)

    def bitwise_and(self, other: Any) -> Any:
        return self._binary(BinaryOp.BITWISE_AND, other)

    def bitwise_or(self, other: Any) -> Any:
        """
        Elementwise bitwise OR, also available as `|`.

        Integer and bool operands only; the result keeps the promoted dtype,
        so OR of two bool arrays stays bool.

        Raises
        ------
        DTypeError
            If either operand is a float.
        """
        return self._binary(BinaryOp.BITWISE_OR, other)

    def bitwise_xor(self, other: Any) -> Any:
        return self._binary(BinaryOp.BITWISE_XOR, other)

    def clip(self, lo: Optional[float] = None, hi: Optional[float] = None) -> Any:
        """
        Limit values to `[lo, hi]`. Either bound may be None.

        Raises
        ------
        MathError
            If `lo > hi`.
        """
        return self._from_result(self._backend().clip(*self._operand(), lo, hi))

    @staticmethod
    def where(cond: Any, x: Any, y: Any) -> Any:
        """
        Elements of `x` where `cond` is true, of `y` elsewhere.

        The three operands are broadcast together. `x` and `y` may be
        scalars; at least one of the three operands must be an array.

        Raises
        ------
        ShapeError
            If the operands cannot be broadcast together.
        TypeError
            If none of the operands is an array.
        """
        like = next((v for v in (cond, x, y) if hasattr(v, "view_metadata")), None)
        if like is None:
            raise TypeError("where() needs at least one array operand")
        c, a, b = (as_operand(like, v) for v in (cond, x, y))
        shape = broadcast_shapes_n(c.shape, a.shape, b.shape)
        return like._from_result(
            like._backend().where(
                (c._buffer, broadcast_view(c.view_metadata, shape), c.dtype),
                (a._buffer, broadcast_view(a.view_metadata, shape), a.dtype),
                (b._buffer, broadcast_view(b.view_metadata, shape), b.dtype),
            )
        )

    # ------------------------------------------------------------------
    # operators
    # ------------------------------------------------------------------
    def __neg__(self) -> Any:
        return self.neg()

    def __pos__(self) -> Any:
        return self.copy()

    def __abs__(self) -> Any:
        return self.abs()

    def __invert__(self) -> Any:
        return self.invert()

    def __add__(self, other: Any) -> Any:
        return self._binary(BinaryOp.ADD, other)

    def __radd__(self, other: Any) -> Any:
        return self._binary(BinaryOp.ADD, other, reflected=True)

    def __sub__(self, other: Any) -> Any:
        return self._binary(BinaryOp.SUBTRACT, other)

    def __rsub__(self, other: Any) -> Any:
        return self._binary(BinaryOp.SUBTRACT, other, reflected=True)

    def __mul__(self, other: Any) -> Any:
        return self._binary(BinaryOp.MULTIPLY, other)

    def __rmul__(self, other: Any) -> Any:
        return self._binary(BinaryOp.MULTIPLY, other, reflected=True)

    def __truediv__(self, other: Any) -> Any:
        return self._binary(BinaryOp.DIVIDE, other)

    def __rtruediv__(self, other: Any) -> Any:
        return self._binary(BinaryOp.DIVIDE, other, reflected=True)

    def __floordiv__(self, other: Any) -> Any:
        return self._binary(BinaryOp.FLOOR_DIVIDE, other)

    def __rfloordiv__(self, other: Any) -> Any:
        return self._binary(BinaryOp.FLOOR_DIVIDE, other, reflected=True)

    def __mod__(self, other: Any) -> Any:
        return self._binary(BinaryOp.REMAINDER, other)

    def __rmod__(self, other: Any) -> Any:
        return self._binary(BinaryOp.REMAINDER, other, reflected=True)

    def __pow__(self, other: Any) -> Any:
        return self._binary(BinaryOp.POWER, other)

    def __rpow__(self, other: Any) -> Any:
        return self._binary(BinaryOp.POWER, other, reflected=True)

    def __eq__(self, other: Any) -> Any:  # type: ignore[override]
        return self._binary(BinaryOp.EQUAL, other)

    def __ne__(self, other: Any) -> Any:  # type: ignore[override]
        return self._binary(BinaryOp.NOT_EQUAL, other)

    def __gt__(self, other: Any) -> Any:
        return self._binary(BinaryOp.GREATER, other)

    def __ge__(self, other: Any) -> Any:
        return self._binary(BinaryOp.GREATER_EQUAL, other)

    def __lt__(self, other: Any) -> Any:
        return self._binary(BinaryOp.LESS, other)

    def __le__(self, other: Any) -> Any:
        return self._binary(BinaryOp.LESS_EQUAL, other)

    def __and__(self, other: Any) -> Any:
        return self._binary(BinaryOp.BITWISE_AND, other)

    def __rand__(self, other: Any) -> Any:
        return self._binary(BinaryOp.BITWISE_AND, other, reflected=True)

    def __or__(self, other: Any) -> Any:
        return self._binary(BinaryOp.BITWISE_OR, other)

    def __ror__(self, other: Any) -> Any:
        return self._binary(BinaryOp.BITWISE_OR, other, reflected=True)

    def __xor__(self, other: Any) -> Any:
        return self._binary(BinaryOp.BITWISE_XOR, other)

    def __rxor__(self, other: Any) -> Any:
        return self._binary(BinaryOp.BITWISE_XOR, other, reflected=True)
