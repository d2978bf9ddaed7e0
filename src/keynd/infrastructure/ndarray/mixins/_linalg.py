"""
Linear algebra on arrays.

This module defines `NDArrayLinalgMixin`: `dot`, `matmul` (and the `@`
operator), `trace` and entrywise vector norms. Output shapes are validated
with `dot_shape` / `matmul_shape` before the backend runs, so shape errors
are reported the same way regardless of backend.
"""

from __future__ import annotations

import math
from typing import Any, Optional, Union

from ....domain._dtype import DType
from ....domain._errors import ShapeError
from ...views._broadcast import dot_shape, matmul_shape
from .._coerce import as_operand

NormOrder = Union[None, int, float, str]


class NDArrayLinalgMixin:
    """
    Linear algebra methods for the concrete array class.

    Notes
    -----
    Methods assume the host class provides `_backend()`, `_operand()`,
    `_from_result(...)`, `diagonal`, the elementwise operators and the
    reductions.
    """

    def _product(self, other: Any, kind: str, reflected: bool = False) -> Any:
        a, b = self, as_operand(self, other)
        if reflected:
            a, b = b, a
        if kind == "dot":
            shape = dot_shape(a.shape, b.shape)
            result = self._backend().dot(*a._operand(), *b._operand())
        else:
            shape = matmul_shape(a.shape, b.shape)
            result = self._backend().matmul(*a._operand(), *b._operand())
        out = self._from_result(result)
        return out.item() if shape == () else out

    def dot(self, other: Any) -> Any:
        """
        Dot product.

        1-D . 1-D gives a Python scalar (inner product). For N-D operands
        the last axis of `self` is contracted with the second-to-last axis of
        `other` (the only axis when `other` is 1-D).

        Raises
        ------
        ShapeError
            If an operand is 0-d or the contracted lengths differ.
        """
        return self._product(other, "dot")

    def matmul(self, other: Any) -> Any:
        """
        Matrix product with broadcast batch dimensions.

        1-D operands are treated as row (left) or column (right) vectors and
        the added axis is dropped from the result, so vector @ vector gives a
        Python scalar.

        Raises
        ------
        ShapeError
            If an operand is 0-d, the inner dimensions differ, or batch
            dimensions do not broadcast.
        """
        return self._product(other, "matmul")

    def __matmul__(self, other: Any) -> Any:
        return self._product(other, "matmul")

    def __rmatmul__(self, other: Any) -> Any:
        return self._product(other, "matmul", reflected=True)

    def trace(self, k: int = 0) -> Any:
        """
        Sum of the `k`-th diagonal of a 2-D array.

        Raises
        ------
        ShapeError
            If the array is not 2-D.
        """
        return self.diagonal(k).sum()

    def norm(
        self,
        ord: NormOrder = None,
        axis: Optional[int] = None,
        keepdims: bool = False,
    ) -> Any:
        """
        Entrywise vector norm over all elements or along `axis`.

        Parameters
        ----------
        ord : None | int | float | str, optional
            - None, 2 or "fro": Euclidean norm
            - 1: sum of absolute values
            - inf / -inf: largest / smallest absolute value
            - 0: number of non-zero elements
            - any other positive p: `sum(|x|**p) ** (1/p)`
        axis : Optional[int], optional
            Axis to reduce. None reduces over every element.
        keepdims : bool, optional
            Keep the reduced axis with length 1.

        Returns
        -------
        Any
            Python float for a full reduction, otherwise a float array.

        Raises
        ------
        ShapeError
            If `ord` is not supported or `axis` is out of range.
        """
        if ord == "fro":
            ord = 2
        if isinstance(ord, str):
            raise ShapeError(f"unsupported norm order {ord!r}")

        float_dtype = DType.FLOAT32 if self.dtype is DType.FLOAT32 else DType.FLOAT64
        x = self.astype(float_dtype).abs()

        if ord is None or ord == 2:
            return _root(x.square().sum(axis, keepdims), 2)
        if ord == 1:
            return x.sum(axis, keepdims)
        if ord == math.inf:
            return x.max(axis, keepdims)
        if ord == -math.inf:
            return x.min(axis, keepdims)
        if ord == 0:
            count = (x != 0).sum(axis, keepdims)
            return float(count) if isinstance(count, int) else count.astype(float_dtype)
        if ord < 0:
            raise ShapeError(f"unsupported norm order {ord!r}")
        return _root((x ** float(ord)).sum(axis, keepdims), ord)


def _root(value: Any, p: float) -> Any:
    if hasattr(value, "view_metadata"):
        return value.sqrt() if p == 2 else value ** (1.0 / p)
    return math.sqrt(value) if p == 2 else value ** (1.0 / p)
