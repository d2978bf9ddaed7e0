"""
Reductions, cumulative scans, softmax and bincount.

Full reductions (`axis=None`, `keepdims=False`) return a Python scalar;
every other form returns a new array.
"""

from __future__ import annotations

from typing import Any, Optional

from ....domain._backend import ReductionOp
from ...views._indexing import normalize_axis


class NDArrayReductionsMixin:
    """
    Reduction methods for the concrete array class.

    Notes
    -----
    Methods assume the host class provides `_backend()`, `_operand()`,
    `_from_result(...)` and `ndim`.
    """

    def _reduce(
        self,
        op: ReductionOp,
        axis: Optional[int],
        keepdims: bool,
        ddof: int = 0,
    ) -> Any:
        ax = None if axis is None else normalize_axis(axis, self.ndim)
        result = self._backend().reduce(
            op, *self._operand(), axis=ax, keepdims=keepdims, ddof=ddof
        ).unwrap()
        if result.buffer is None:
            return result.value
        return self._from_result(result)

    def sum(self, axis: Optional[int] = None, keepdims: bool = False) -> Any:
        """
        Sum of elements.

        Integer and bool inputs accumulate in Int64 (UInt64 for unsigned
        inputs). The sum of an empty array is 0.

        Parameters
        ----------
        axis : Optional[int], optional
            Axis to reduce. None reduces over every element.
        keepdims : bool, optional
            Keep reduced axes with length 1.

        Returns
        -------
        Any
            Python scalar for a full reduction, otherwise an array.

        Raises
        ------
        ShapeError
            If `axis` is out of range.
        """
        return self._reduce(ReductionOp.SUM, axis, keepdims)

    def prod(self, axis: Optional[int] = None, keepdims: bool = False) -> Any:
        """Product of elements; the product of an empty array is 1."""
        return self._reduce(ReductionOp.PROD, axis, keepdims)

    def mean(self, axis: Optional[int] = None, keepdims: bool = False) -> Any:
        """Arithmetic mean in a float dtype. Empty input gives NaN."""
        return self._reduce(ReductionOp.MEAN, axis, keepdims)

    def min(self, axis: Optional[int] = None, keepdims: bool = False) -> Any:
        """
        Minimum element.

        Raises
        ------
        ShapeError
            If the reduced extent is empty.
        """
        return self._reduce(ReductionOp.MIN, axis, keepdims)

    def max(self, axis: Optional[int] = None, keepdims: bool = False) -> Any:
        """
        Maximum element.

        Raises
        ------
        ShapeError
            If the reduced extent is empty.
        """
        return self._reduce(ReductionOp.MAX, axis, keepdims)

    def var(
        self, axis: Optional[int] = None, keepdims: bool = False, ddof: int = 0
    ) -> Any:
        """Variance with `ddof` delta degrees of freedom."""
        return self._reduce(ReductionOp.VAR, axis, keepdims, ddof)

    def std(
        self, axis: Optional[int] = None, keepdims: bool = False, ddof: int = 0
    ) -> Any:
        """Standard deviation with `ddof` delta degrees of freedom."""
        return self._reduce(ReductionOp.STD, axis, keepdims, ddof)

    def argmin(self, axis: Optional[int] = None, keepdims: bool = False) -> Any:
        """
        Index of the first minimum.

        With `axis=None` the index refers to the C-order flattened array.
        """
        return self._reduce(ReductionOp.ARGMIN, axis, keepdims)

    def argmax(self, axis: Optional[int] = None, keepdims: bool = False) -> Any:
        """
        Index of the first maximum.

        With `axis=None` the index refers to the C-order flattened array.
        """
        return self._reduce(ReductionOp.ARGMAX, axis, keepdims)

    def _cumulative(self, op: ReductionOp, axis: Optional[int]) -> Any:
        ax = None if axis is None else normalize_axis(axis, self.ndim)
        return self._from_result(
            self._backend().cumulative(op, *self._operand(), axis=ax)
        )

    def cumsum(self, axis: Optional[int] = None) -> Any:
        """
        Running sum along `axis`, or over the flattened array when None.
        """
        return self._cumulative(ReductionOp.SUM, axis)

    def cumprod(self, axis: Optional[int] = None) -> Any:
        """
        Running product along `axis`, or over the flattened array when None.
        """
        return self._cumulative(ReductionOp.PROD, axis)

    def softmax(self, axis: int = -1) -> Any:
        """
        Normalized exponentials along `axis` (the last axis by default).

        The maximum is subtracted before exponentiating. Lanes whose sum is
        not finite and positive come back as uniform weights `1/n`.

        Raises
        ------
        DTypeError
            For integer or bool arrays.
        ShapeError
            If `axis` is out of range.
        """
        ax = normalize_axis(axis, self.ndim)
        return self._from_result(self._backend().softmax(*self._operand(), axis=ax))

    def bincount(self, minlength: int = 0) -> Any:
        """
        Count occurrences of each non-negative integer in the flattened array.

        The result is a 1-D Int64 array of length `max(max + 1, minlength)`.

        Raises
        ------
        DTypeError
            For float arrays.
        ArrayIndexError
            If any value is negative.
        ShapeError
            If `minlength` is negative.
        """
        return self._from_result(
            self._backend().bincount(*self._operand(), minlength=minlength)
        )
