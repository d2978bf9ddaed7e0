"""
Strided view descriptor.

This module defines `ViewMetadata`, the immutable `(shape, strides, offset)`
triple that describes how a logical N-dimensional index maps onto a position
in a flat root buffer:

    flat = offset + sum(index[i] * strides[i])

Strides are expressed in elements, not bytes. Descriptors are value objects:
every shape-transforming or indexing operation returns a new descriptor.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import prod
from typing import Sequence

from ._errors import ShapeError

MAX_NDIM = 32
"""Maximum number of dimensions an array may have."""


def compute_strides(shape: Sequence[int]) -> tuple[int, ...]:
    """
    Compute canonical row-major (C-order) strides for `shape`.

    For shape (3, 4, 5) the strides are (20, 5, 1).

    Parameters
    ----------
    shape : Sequence[int]
        Array shape.

    Returns
    -------
    tuple[int, ...]
        One stride per dimension; empty for 0-d shapes.
    """
    strides = [1] * len(shape)
    for i in range(len(shape) - 2, -1, -1):
        strides[i] = strides[i + 1] * int(shape[i + 1])
    return tuple(strides)


def compute_f_strides(shape: Sequence[int]) -> tuple[int, ...]:
    """
    Compute column-major (F-order) strides for `shape`.

    For shape (3, 4, 5) the strides are (1, 3, 12).
    """
    strides = [1] * len(shape)
    for i in range(1, len(shape)):
        strides[i] = strides[i - 1] * int(shape[i - 1])
    return tuple(strides)


def normalize_shape(shape: Sequence[int] | int) -> tuple[int, ...]:
    """
    Validate and coerce a user supplied shape to a tuple of ints.

    Raises
    ------
    ShapeError
        If a dimension is negative or not an integer, or if the shape has
        more than `MAX_NDIM` dimensions.
    """
    if isinstance(shape, int):
        shape = (shape,)

    out: list[int] = []
    for d in shape:
        if isinstance(d, bool) or not isinstance(d, int):
            try:
                d = int(d.__index__())
            except (AttributeError, TypeError) as e:
                raise ShapeError(f"Shape entries must be integers, got {d!r}") from e
        if d < 0:
            raise ShapeError(f"Negative dimensions are not allowed: {tuple(shape)}")
        out.append(int(d))

    if len(out) > MAX_NDIM:
        raise ShapeError(f"ndim {len(out)} exceeds the maximum of {MAX_NDIM}")
    return tuple(out)


@dataclass(frozen=True)
class ViewMetadata:
    """
    Shape, strides, and offset of an array view.

    Attributes
    ----------
    shape : tuple[int, ...]
        Logical extent of each dimension.
    strides : tuple[int, ...]
        Element step per dimension. May be zero (broadcast) or negative
        (flipped axis).
    offset : int
        Flat element offset of index (0, ..., 0) inside the root buffer.

    Notes
    -----
    Every index reached through a view must resolve to a position inside the
    root buffer. The view algebra guarantees this structurally; descriptors
    built by hand are the caller's responsibility.
    """

    shape: tuple[int, ...]
    strides: tuple[int, ...]
    offset: int = 0

    def __post_init__(self) -> None:
        if len(self.shape) != len(self.strides):
            raise ShapeError(
                f"shape {self.shape} and strides {self.strides} differ in length"
            )

    @classmethod
    def contiguous(cls, shape: Sequence[int], offset: int = 0) -> "ViewMetadata":
        """
        Build a C-contiguous descriptor for `shape`.
        """
        shape = tuple(int(d) for d in shape)
        return cls(shape=shape, strides=compute_strides(shape), offset=int(offset))

    @property
    def ndim(self) -> int:
        """Number of dimensions."""
        return len(self.shape)

    @property
    def size(self) -> int:
        """Number of elements (1 for 0-d views)."""
        return prod(self.shape)

    @property
    def is_contiguous(self) -> bool:
        """
        Whether the view is C-contiguous.

        Dimensions of size <= 1 are ignored because their stride never
        contributes to an offset. Empty views are contiguous.
        """
        return self._matches(compute_strides(self.shape))

    @property
    def is_f_contiguous(self) -> bool:
        """
        Whether the view is F-contiguous (column-major), with the same
        relaxations as `is_contiguous`.
        """
        return self._matches(compute_f_strides(self.shape))

    def _matches(self, expected: tuple[int, ...]) -> bool:
        if self.size == 0:
            return True
        return all(
            dim <= 1 or actual == want
            for dim, actual, want in zip(self.shape, self.strides, expected)
        )
