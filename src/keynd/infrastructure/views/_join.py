"""
Join and split shape algebra.

`concatenate_shape` and `stack_shape` validate the inputs of a join and
compute its output shape; the data movement itself is done by the backend.
`split_views` is pure view algebra: every part is a zero-copy view that
shares the source buffer.
"""

from __future__ import annotations

from typing import Sequence, Union

from ...domain._errors import ShapeError
from ...domain._view import ViewMetadata
from ._indexing import normalize_axis


def concatenate_shape(shapes: Sequence[Sequence[int]], axis: int = 0) -> tuple[int, ...]:
    """
    Output shape of joining arrays along an existing axis.

    Raises
    ------
    ShapeError
        If `shapes` is empty, any input is 0-d, the inputs differ in ndim or
        in any non-axis dimension, or `axis` is out of range.
    """
    if not shapes:
        raise ShapeError("concatenate requires at least one array")

    first = tuple(shapes[0])
    ndim = len(first)
    if ndim == 0:
        raise ShapeError("zero-dimensional arrays cannot be concatenated")
    ax = normalize_axis(axis, ndim)

    total = 0
    for i, s in enumerate(shapes):
        s = tuple(s)
        if len(s) != ndim:
            raise ShapeError(
                "concatenate requires all arrays to have the same number of "
                f"dimensions (array {i} has {len(s)}, expected {ndim})"
            )
        for d in range(ndim):
            if d != ax and s[d] != first[d]:
                raise ShapeError(
                    f"concatenate: dimension {d} of array {i} is {s[d]}, expected {first[d]}"
                )
        total += s[ax]

    return first[:ax] + (total,) + first[ax + 1 :]


def stack_shape(shapes: Sequence[Sequence[int]], axis: int = 0) -> tuple[int, ...]:
    """
    Output shape of joining equally shaped arrays along a new axis.

    Raises
    ------
    ShapeError
        If `shapes` is empty, the shapes differ, or `axis` is outside
        `[-ndim-1, ndim]`.
    """
    if not shapes:
        raise ShapeError("stack requires at least one array")

    first = tuple(shapes[0])
    for i, s in enumerate(shapes):
        if tuple(s) != first:
            raise ShapeError(
                f"stack requires all input arrays to have the same shape "
                f"(array {i} has {tuple(s)}, expected {first})"
            )

    ax = normalize_axis(axis, len(first), inclusive=True)
    return first[:ax] + (len(shapes),) + first[ax:]


def indices_for_equal_split(axis_len: int, sections: int) -> list[int]:
    """
    Split points dividing an axis into `sections` equal parts.

    Raises
    ------
    ShapeError
        If `sections < 1` or `axis_len` is not divisible by `sections`.
    """
    if sections < 1:
        raise ShapeError("number of sections must be >= 1")
    if axis_len % sections != 0:
        raise ShapeError(
            "array split does not result in an equal division "
            f"(axis length {axis_len} not divisible by {sections})"
        )
    chunk = axis_len // sections
    return [i * chunk for i in range(1, sections)]


def split_views(
    meta: ViewMetadata,
    indices_or_sections: Union[int, Sequence[int]],
    axis: int = 0,
) -> list[ViewMetadata]:
    """
    Split a view into sub-views along `axis`.

    Parameters
    ----------
    meta : ViewMetadata
        Source descriptor.
    indices_or_sections : int | Sequence[int]
        Number of equal sections, or ascending split points within
        `[0, axis_len]`.
    axis : int, optional
        Axis to split. Defaults to 0.

    Returns
    -------
    list[ViewMetadata]
        `len(points) + 1` descriptors. Part `i` covers
        `[points[i-1], points[i])` along the axis with offset
        `offset + start * strides[axis]`; other dimensions are unchanged.

    Raises
    ------
    ShapeError
        On an invalid axis, an unequal section count, or split points that
        are not ascending or fall outside the axis.
    """
    ax = normalize_axis(axis, meta.ndim)
    n = meta.shape[ax]

    if isinstance(indices_or_sections, int):
        points = indices_for_equal_split(n, indices_or_sections)
    else:
        points = [int(p) for p in indices_or_sections]
        prev = 0
        for p in points:
            if p < prev or p > n:
                raise ShapeError(
                    f"split indices must be ascending within [0, {n}], got {points}"
                )
            prev = p

    bounds = [0] + points + [n]
    stride = meta.strides[ax]
    parts = []
    for start, stop in zip(bounds[:-1], bounds[1:]):
        shape = list(meta.shape)
        shape[ax] = stop - start
        parts.append(
            ViewMetadata(tuple(shape), meta.strides, meta.offset + start * stride)
        )
    return parts
