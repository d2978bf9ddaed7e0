"""
Conversion, copying and bulk mutation.

This module defines `NDArrayConversionMixin`: export to NumPy / Python
lists, scalar extraction, copies and dtype casts, and the bulk write
operations (`fill`, `assign`) that mutate shared storage.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from ....domain._dtype import DType
from ....domain._errors import ShapeError
from .._coerce import as_operand
from ...views._broadcast import broadcast_view


class NDArrayConversionMixin:
    """
    Conversion and mutation methods for the concrete array class.

    Notes
    -----
    - `copy` and `astype` always return new C-contiguous roots.
    - `fill` and `assign` write through this array's view, so every other
      view of the same storage observes the change.
    """

    def to_numpy(self) -> np.ndarray:
        """
        Copy the logical contents into a new C-contiguous `np.ndarray`.
        """
        return self._backend().to_numpy(*self._operand())

    def to_list(self) -> Any:
        """
        Nested Python lists of Python scalars (a bare scalar for 0-d arrays).
        """
        return self.to_numpy().tolist()

    tolist = to_list

    def item(self) -> Any:
        """
        The single element of a size-1 array as a Python scalar.

        Raises
        ------
        ShapeError
            If the array does not have exactly one element.
        """
        if self.size != 1:
            raise ShapeError(
                f"can only convert an array of size 1 to a Python scalar, got size {self.size}"
            )
        return self.get_at(0)

    def copy(self) -> Any:
        """
        C-contiguous copy with its own storage.
        """
        return self._from_result(self._backend().compact(*self._operand()))

    def astype(self, dtype: Any) -> Any:
        """
        Copy cast to `dtype`. Always returns a new array, even when the
        dtype does not change.
        """
        target = DType.parse(dtype)
        return self._from_result(self._backend().astype(*self._operand(), target))

    def fill(self, value: Any) -> None:
        """
        Set every element of this view to `value`.
        """
        self._backend().fill(*self._operand(), value).unwrap()

    def assign(self, source: Any) -> None:
        """
        Copy `source` into this view.

        `source` (an array, nested data or a scalar) is broadcast to this
        view's shape.

        Raises
        ------
        ShapeError
            If `source` cannot be broadcast to this view's shape.
        """
        src = as_operand(self, source)
        src_meta = broadcast_view(src.view_metadata, self.shape)
        self._backend().assign(
            *self._operand(), src._buffer, src_meta, src.dtype
        ).unwrap()
