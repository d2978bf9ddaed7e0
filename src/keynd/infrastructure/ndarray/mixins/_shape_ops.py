"""
Shape-transforming operations.

This module defines `NDArrayShapeOpsMixin`. Most operations here are pure
view derivations computed by `views._transform` and return views sharing
storage. Operations that cannot be expressed as a view (reshape/ravel of a
non-contiguous array, flatten, pad, tile, repeat) go through the backend
and return new roots.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, Union

from ....domain._modes import MemoryOrder, PadMode
from ....domain._view import normalize_shape
from ...views._broadcast import broadcast_view
from ...views._indexing import normalize_axis
from ...views._transform import (
    diagonal_view,
    flip_view,
    insert_axis_view,
    invert_axis_view,
    merge_axes_view,
    normalize_pad_constants,
    normalize_pad_width,
    normalize_repeats,
    normalize_reps,
    permute_view,
    ravel_view,
    reshape_view,
    squeeze_view,
    swap_axes_view,
    transpose_view,
)


class NDArrayShapeOpsMixin:
    """
    Shape operations for the concrete array class.

    Notes
    -----
    Methods assume the host class provides `view_metadata`, `_view(meta)`,
    `_adopt(source, meta)`, `_operand()`, `_backend()`, `_from_result(...)`,
    `_from_buffer(...)` and `copy()`.
    """

    def reshape(
        self, *shape: Union[int, Sequence[int]], order: Union[str, MemoryOrder] = "C"
    ) -> Any:
        """
        Give the array a new shape.

        Parameters
        ----------
        *shape : int | Sequence[int]
            Target shape, either as one sequence or as separate ints. One
            entry may be -1 and is inferred.
        order : str | MemoryOrder, optional
            Read and write elements in "C" (row-major) or "F" (column-major)
            order, as NumPy does.

        Returns
        -------
        NDArray
            A view when this array is contiguous in `order`; otherwise a
            reshaped copy.

        Raises
        ------
        ShapeError
            If the new shape does not match the number of elements.
        """
        target: Any = shape[0] if len(shape) == 1 else shape
        meta, must_copy = reshape_view(self.view_metadata, target, order)
        if not must_copy:
            return self._view(meta)
        if MemoryOrder.parse(order) is MemoryOrder.F:
            return self._adopt(
                self._from_result(self._backend().ravel_f(*self._operand())), meta
            )
        return self._adopt(self.copy(), meta)

    def transpose(self, *axes: int) -> Any:
        """
        Permuted view. Without arguments the axis order is reversed.
        """
        if len(axes) == 1 and not isinstance(axes[0], int):
            axes = tuple(axes[0])
        return self._view(transpose_view(self.view_metadata, axes or None))

    @property
    def T(self) -> Any:
        """Reversed-axes view."""
        return self.transpose()

    def permute(self, *axes: int) -> Any:
        """
        View with dimensions reordered by `axes`.

        Raises
        ------
        ShapeError
            If `axes` is not a permutation of `range(ndim)`.
        """
        if len(axes) == 1 and not isinstance(axes[0], int):
            axes = tuple(axes[0])
        return self._view(permute_view(self.view_metadata, axes))

    def swap_axes(self, axis1: int, axis2: int) -> Any:
        """View with two axes exchanged."""
        return self._view(swap_axes_view(self.view_metadata, axis1, axis2))

    def merge_axes(self, take: int, into: int) -> Any:
        """
        View with axis `take` folded into axis `into`.

        Raises
        ------
        ShapeError
            If the two axes cannot be traversed as one axis with `into`
            moving fastest.
        """
        return self._view(merge_axes_view(self.view_metadata, take, into))

    def insert_axis(self, axis: int) -> Any:
        """View with a new size-1 axis at `axis`."""
        return self._view(insert_axis_view(self.view_metadata, axis))

    expand_dims = insert_axis

    def squeeze(self, axes: Optional[Union[int, Sequence[int]]] = None) -> Any:
        """
        View without size-1 axes.

        With no `axes` every size-1 axis is removed, but the result keeps at
        least shape `(1,)`. Explicit axes must have size 1.
        """
        return self._view(squeeze_view(self.view_metadata, axes))

    def invert_axis(self, axis: int) -> Any:
        """View with the order of one axis reversed."""
        return self._view(invert_axis_view(self.view_metadata, axis))

    def flip(self, axis: Optional[Union[int, Sequence[int]]] = None) -> Any:
        """View with the given axes (all by default) reversed."""
        return self._view(flip_view(self.view_metadata, axis))

    def diagonal(self, k: int = 0) -> Any:
        """View of the `k`-th diagonal of a 2-D array."""
        return self._view(diagonal_view(self.view_metadata, k))

    def broadcast_to(self, shape: Sequence[int]) -> Any:
        """
        Read-only-by-convention view broadcast to `shape` (stride 0 on
        stretched axes).
        """
        return self._view(broadcast_view(self.view_metadata, normalize_shape(shape)))

    def flatten(self) -> Any:
        """
        One-dimensional C-order copy.
        """
        result = self._backend().compact(*self._operand()).unwrap()
        return self._from_buffer(result.buffer, (self.size,), result.dtype)

    def ravel(self, order: Union[str, MemoryOrder] = "C") -> Any:
        """
        One-dimensional array of all elements in `order`.

        Returns a view when the array is contiguous in that order, otherwise
        a copy.
        """
        order = MemoryOrder.parse(order)
        meta, must_copy = ravel_view(self.view_metadata, order)
        if not must_copy:
            return self._view(meta)
        if order is MemoryOrder.F:
            return self._from_result(self._backend().ravel_f(*self._operand()))
        return self.flatten()

    def pad(
        self,
        pad_width: Any,
        mode: Union[str, int, PadMode] = PadMode.CONSTANT,
        constant_values: Any = None,
    ) -> Any:
        """
        Padded copy.

        Parameters
        ----------
        pad_width : int | (int, int) | Sequence[(int, int)]
            Width before and after each axis.
        mode : PadMode | str | int, optional
            CONSTANT (default), SYMMETRIC, REFLECT or EDGE.
        constant_values : scalar | pair | per-axis pairs, optional
            Fill values for CONSTANT mode; zeros when omitted.

        Raises
        ------
        ShapeError
            On malformed widths or constants, or when a non-constant mode
            is asked to pad an empty axis.
        """
        widths = normalize_pad_width(pad_width, self.ndim)
        mode = PadMode.parse(mode)
        constants = normalize_pad_constants(constant_values, self.ndim)
        return self._from_result(
            self._backend().pad(*self._operand(), widths, mode, constants)
        )

    def tile(self, reps: Union[int, Sequence[int]]) -> Any:
        """Copy repeated `reps` times along each axis."""
        return self._from_result(
            self._backend().tile(*self._operand(), normalize_reps(reps))
        )

    def repeat(
        self, repeats: Union[int, Sequence[int]], axis: Optional[int] = None
    ) -> Any:
        """
        Copy with each element repeated.

        With `axis=None` the array is flattened first. `repeats` is a single
        count or one count per element along the axis.
        """
        if axis is None:
            counts = normalize_repeats(repeats, self.size)
            ax = None
        else:
            ax = normalize_axis(axis, self.ndim)
            counts = normalize_repeats(repeats, self.shape[ax])
        return self._from_result(self._backend().repeat(*self._operand(), counts, ax))
