"""
Index normalization and offset arithmetic for strided views.

All functions here are pure: they map view descriptors and user supplied
indices onto flat buffer offsets or new descriptors without touching any
buffer.

Design notes
------------
- Explicit element indices are bounds-checked and raise `ArrayIndexError`.
  Axis arguments raise `ShapeError`, matching how the rest of the shape
  algebra reports bad axes.
- Logical flat indices always follow C order over the view's shape,
  whatever the view's strides are.
"""

from __future__ import annotations

from typing import Sequence

from ...domain._errors import ArrayIndexError, ShapeError
from ...domain._view import ViewMetadata


def normalize_index(index: int, size: int, dim: int | None = None) -> int:
    """
    Resolve a possibly negative index against a dimension of length `size`.

    Parameters
    ----------
    index : int
        Index in `[-size, size)`.
    size : int
        Dimension length.
    dim : int | None, optional
        Dimension number, used only for the error message.

    Returns
    -------
    int
        Index in `[0, size)`.

    Raises
    ------
    ArrayIndexError
        If the index is out of range.
    """
    index = int(index)
    resolved = index + size if index < 0 else index
    if resolved < 0 or resolved >= size:
        where = f" for dimension {dim}" if dim is not None else ""
        raise ArrayIndexError(
            f"Index {index} is out of bounds{where} with size {size}"
        )
    return resolved


def normalize_axis(axis: int, ndim: int, inclusive: bool = False) -> int:
    """
    Resolve a possibly negative axis.

    Parameters
    ----------
    axis : int
        Axis number. Negative values count from the end.
    ndim : int
        Number of dimensions of the array.
    inclusive : bool, optional
        When True the valid range is `[0, ndim]` (used when inserting a new
        axis). Defaults to False.

    Raises
    ------
    ShapeError
        If the axis is out of range.
    """
    upper = ndim + 1 if inclusive else ndim
    resolved = axis + upper if axis < 0 else axis
    if resolved < 0 or resolved >= upper:
        raise ShapeError(f"axis {axis} is out of bounds for array of dimension {ndim}")
    return resolved


def flat_offset(meta: ViewMetadata, indices: Sequence[int]) -> int:
    """
    Buffer offset of a fully indexed element.

    Computes `offset + sum(index[i] * strides[i])` after normalizing every
    index against its dimension.

    Raises
    ------
    ArrayIndexError
        If the number of indices differs from `ndim` or any index is out of
        range.
    """
    if len(indices) != meta.ndim:
        raise ArrayIndexError(
            f"Expected {meta.ndim} indices, got {len(indices)}"
        )
    pos = meta.offset
    for dim, (i, n, s) in enumerate(zip(indices, meta.shape, meta.strides)):
        pos += normalize_index(i, n, dim) * s
    return pos


def partial_view(meta: ViewMetadata, indices: Sequence[int]) -> ViewMetadata:
    """
    Descriptor obtained by fixing the leading `len(indices)` dimensions.

    The offset advances by the supplied indices; the remaining shape and
    strides are the unconsumed trailing dimensions.

    Raises
    ------
    ArrayIndexError
        If more indices than dimensions are supplied, or any index is out of
        range.
    """
    k = len(indices)
    if k > meta.ndim:
        raise ArrayIndexError(
            f"Too many indices: array is {meta.ndim}-dimensional, but {k} were indexed"
        )
    pos = meta.offset
    for dim in range(k):
        pos += normalize_index(indices[dim], meta.shape[dim], dim) * meta.strides[dim]
    return ViewMetadata(meta.shape[k:], meta.strides[k:], pos)


def unravel_index(flat_index: int, shape: Sequence[int]) -> tuple[int, ...]:
    """
    Convert a C-order flat index into per-dimension indices.
    """
    out = [0] * len(shape)
    rem = flat_index
    for dim in range(len(shape) - 1, -1, -1):
        n = shape[dim]
        if n > 0:
            rem, out[dim] = divmod(rem, n)
    return tuple(out)


def logical_to_storage(meta: ViewMetadata, flat_index: int) -> int:
    """
    Map a logical C-order flat index to its buffer offset.

    Negative indices count from the end of the logical sequence.

    Raises
    ------
    ArrayIndexError
        If the flat index is out of range.
    """
    flat = normalize_index(flat_index, meta.size)
    coords = unravel_index(flat, meta.shape)
    return meta.offset + sum(c * s for c, s in zip(coords, meta.strides))


def normalize_flat_indices(indices: Sequence[int], size: int) -> list[int]:
    """
    Normalize a list of flat indices against `size`.

    Raises
    ------
    ArrayIndexError
        If any index is out of range.
    """
    return [normalize_index(i, size) for i in indices]
