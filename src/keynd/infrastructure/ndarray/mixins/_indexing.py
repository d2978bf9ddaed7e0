"""
Element access, gather/scatter and subscript syntax.

This module defines `NDArrayIndexingMixin`, which implements:

- `get` / `set` for multi-dimensional indices (partial `get` returns a
  view),
- `get_at` / `set_at` for logical C-order flat indices,
- gather/scatter helpers (`take`, `take_along_axis`, `put`,
  `put_along_axis`, `scatter_add`),
- `__getitem__` / `__setitem__` dispatching to the above or to `slice()`,
- the `flat` iterator.

Design notes
------------
- Indices are normalized and bounds-checked here, before the backend is
  called; the backend receives resolved offsets and index lists only.
- `put`, `put_along_axis` and `scatter_add` return a modified copy and
  leave the receiver untouched.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

import numpy as np

from ....domain._dtype import DType
from ....domain._errors import ArrayIndexError, DTypeError, ShapeError
from ....domain._slice import EllipsisSelector, RangeSelector, Slice, parse_selectors
from ...views._indexing import (
    flat_offset,
    logical_to_storage,
    normalize_axis,
    normalize_flat_indices,
    normalize_index,
    partial_view,
)
from .._flat_iterator import FlatIterator


def _index_array(indices: Any) -> np.ndarray:
    """
    Integer index array from an int, a sequence, or an array.

    Raises
    ------
    DTypeError
        If the indices are not integers.
    """
    if hasattr(indices, "view_metadata"):
        if not indices.dtype.is_integer:
            raise DTypeError(f"indices must be an integer array, got {indices.dtype}")
        return indices.to_numpy().astype(np.int64)

    arr = np.asarray(indices)
    if arr.size == 0:
        return arr.astype(np.int64)
    if arr.dtype == np.bool_ or not np.issubdtype(arr.dtype, np.integer):
        raise DTypeError(f"indices must be integers, got {arr.dtype}")
    return arr.astype(np.int64)


def _values_array(values: Any) -> np.ndarray:
    if hasattr(values, "view_metadata"):
        return values.to_numpy()
    return np.asarray(values)


def _is_int(key: Any) -> bool:
    return not isinstance(key, bool) and isinstance(key, (int, np.integer))


class NDArrayIndexingMixin:
    """
    Indexing methods for the concrete array class.

    Notes
    -----
    Methods assume the host class provides `view_metadata`, `_view(meta)`,
    `_operand()`, `_buffer`, `_backend()`, `_from_result(...)` and `slice()`.
    """

    # ------------------------------------------------------------------
    # element access
    # ------------------------------------------------------------------
    def get(self, *indices: int) -> Any:
        """
        Read an element, or derive a view from a partial index.

        Parameters
        ----------
        *indices : int
            Between 1 and `ndim` indices. Negative values count from the end.

        Returns
        -------
        bool | int | float | NDArray
            A Python scalar when `ndim` indices are given, otherwise a view
            over the remaining trailing dimensions.

        Raises
        ------
        ArrayIndexError
            If no index or more than `ndim` indices are given, or any index
            is out of range.
        """
        meta = self.view_metadata
        if not 1 <= len(indices) <= meta.ndim:
            raise ArrayIndexError(
                f"get() expects between 1 and {meta.ndim} indices, got {len(indices)}"
            )
        if len(indices) < meta.ndim:
            return self._view(partial_view(meta, indices))

        result = self._backend().get_element(
            self._buffer, flat_offset(meta, indices), self.dtype
        )
        return result.unwrap().value

    def set(self, indices: Sequence[int], value: Any) -> None:
        """
        Write one element.

        Raises
        ------
        ArrayIndexError
            If the number of indices differs from `ndim` or any index is out
            of range.
        DTypeError
            If `value` does not fit the dtype.
        """
        if _is_int(indices):
            indices = (indices,)
        offset = flat_offset(self.view_metadata, tuple(indices))
        self._backend().set_element(self._buffer, offset, value, self.dtype).unwrap()

    def get_at(self, flat_index: int) -> Any:
        """
        Read the element at a logical C-order flat index.
        """
        offset = logical_to_storage(self.view_metadata, flat_index)
        return self._backend().get_element(self._buffer, offset, self.dtype).unwrap().value

    def set_at(self, flat_index: int, value: Any) -> None:
        """
        Write the element at a logical C-order flat index.
        """
        offset = logical_to_storage(self.view_metadata, flat_index)
        self._backend().set_element(self._buffer, offset, value, self.dtype).unwrap()

    @property
    def flat(self) -> FlatIterator:
        """Flat C-order access to the elements."""
        return FlatIterator(self)

    # ------------------------------------------------------------------
    # gather
    # ------------------------------------------------------------------
    def take(self, indices: Any, axis: Optional[int] = None) -> Any:
        """
        Gather elements by index.

        Parameters
        ----------
        indices : int | Sequence[int] | NDArray
            Integer indices. Negative values count from the end.
        axis : Optional[int], optional
            Axis to gather along. When None the array is treated as flat
            (C order) and the result has the shape of `indices`.

        Raises
        ------
        ArrayIndexError
            If an index is out of range.
        ShapeError
            If `axis` is out of range.
        """
        idx = _index_array(indices)

        if axis is None:
            resolved = np.asarray(
                normalize_flat_indices(idx.reshape(-1).tolist(), self.size), dtype=np.int64
            ).reshape(idx.shape)
            return self._from_result(self._backend().take_flat(*self._operand(), resolved))

        ax = normalize_axis(axis, self.ndim)
        n = self.shape[ax]
        resolved = np.asarray(
            [normalize_index(i, n, ax) for i in idx.reshape(-1).tolist()], dtype=np.int64
        ).reshape(idx.shape)
        return self._from_result(self._backend().take_axis(*self._operand(), resolved, ax))

    def _along_axis_indices(self, indices: Any, axis: int) -> tuple[Any, int]:
        if not hasattr(indices, "view_metadata"):
            indices = self.__class__.array(indices)
        if not indices.dtype.is_integer:
            raise DTypeError(f"indices must be an integer array, got {indices.dtype}")
        if indices.ndim != self.ndim:
            raise ShapeError(
                f"indices and array must have the same number of dimensions "
                f"({indices.ndim} != {self.ndim})"
            )
        if indices.dtype is not DType.INT64:
            indices = indices.astype(DType.INT64)
        return indices, normalize_axis(axis, self.ndim)

    def take_along_axis(self, indices: Any, axis: int) -> Any:
        """
        Gather values along `axis` using an index array of the same ndim.

        Raises
        ------
        DTypeError
            If `indices` is not integer typed.
        ShapeError
            If the ndims differ or `axis` is out of range.
        ArrayIndexError
            If an index is out of range.
        """
        indices, ax = self._along_axis_indices(indices, axis)
        result = self._backend().take_along_axis(
            *self._operand(), indices._buffer, indices.view_metadata, ax
        )
        return self._from_result(result)

    # ------------------------------------------------------------------
    # scatter (copying)
    # ------------------------------------------------------------------
    def put(self, indices: Any, values: Any) -> Any:
        """
        Copy of this array with flat positions `indices` replaced by
        `values` (repeated cyclically when shorter).
        """
        idx = _index_array(indices).reshape(-1)
        resolved = normalize_flat_indices(idx.tolist(), self.size)
        result = self._backend().put_flat(*self._operand(), resolved, _values_array(values))
        return self._from_result(result)

    def put_along_axis(self, indices: Any, values: Any, axis: int) -> Any:
        """
        Copy of this array with `values` written at `indices` along `axis`.
        """
        indices, ax = self._along_axis_indices(indices, axis)
        result = self._backend().put_along_axis(
            *self._operand(),
            indices._buffer,
            indices.view_metadata,
            _values_array(values),
            ax,
        )
        return self._from_result(result)

    def scatter_add(self, indices: Any, updates: Any) -> Any:
        """
        Copy of this array with `updates` added at flat positions `indices`.

        Repeated indices accumulate.
        """
        idx = _index_array(indices).reshape(-1)
        resolved = normalize_flat_indices(idx.tolist(), self.size)
        result = self._backend().scatter_add_flat(
            *self._operand(), resolved, _values_array(updates)
        )
        return self._from_result(result)

    # ------------------------------------------------------------------
    # subscript syntax
    # ------------------------------------------------------------------
    def _resolve_key(self, key: Any) -> tuple[str, tuple]:
        """
        Classify a subscript as ("get", ints) or ("slice", selectors).
        """
        if isinstance(key, str):
            parts = parse_selectors(key)
            if any(isinstance(p, (RangeSelector, EllipsisSelector)) for p in parts):
                return "slice", parts
            return "get", tuple(p.index for p in parts)
        if _is_int(key):
            return "get", (int(key),)
        if isinstance(key, tuple):
            if key and all(_is_int(k) for k in key):
                return "get", tuple(int(k) for k in key)
            return "slice", key
        if key is Ellipsis or isinstance(key, (slice, Slice)):
            return "slice", (key,)
        raise ArrayIndexError(f"Invalid index type: {type(key).__name__}")

    def __getitem__(self, key: Any) -> Any:
        kind, parts = self._resolve_key(key)
        if kind == "get":
            return self.get(*parts)
        return self.slice(*parts)

    def __setitem__(self, key: Any, value: Any) -> None:
        kind, parts = self._resolve_key(key)
        if kind == "get" and len(parts) == self.ndim:
            self.set(parts, value)
            return
        target = self.get(*parts) if kind == "get" else self.slice(*parts)
        target.assign(value)
