"""
Shape transformation engine.

Pure functions mapping a `ViewMetadata` (plus parameters) onto a new
descriptor. Functions that may be unable to express their result as a view
return a `(ViewMetadata, must_copy)` pair instead: when `must_copy` is True
the caller is expected to materialize a contiguous copy through the backend
and apply the transformation to that copy.

Design notes
------------
- Every function validates its parameters before building anything, so a
  failure never leaves a half-built descriptor behind.
- Axis arguments accept negative values and raise `ShapeError` when out of
  range.
- Tile/repeat/pad helpers only normalize arguments and compute shapes; the
  data movement is performed by the backend.
"""

from __future__ import annotations

from math import prod
from typing import Any, Optional, Sequence, Union

from ...domain._errors import ShapeError
from ...domain._modes import MemoryOrder
from ...domain._view import (
    ViewMetadata,
    compute_f_strides,
    compute_strides,
    normalize_shape,
)
from ._indexing import normalize_axis

PadWidth = Union[int, Sequence[int], Sequence[Sequence[int]]]


# ---------------------------------------------------------------------------
# reshape / ravel
# ---------------------------------------------------------------------------
def infer_shape(new_shape: Union[int, Sequence[int]], size: int) -> tuple[int, ...]:
    """
    Resolve a reshape target, inferring at most one `-1` entry.

    Raises
    ------
    ShapeError
        On more than one `-1`, other negative entries, or a product that does
        not equal `size`.
    """
    if isinstance(new_shape, int):
        new_shape = (new_shape,)
    dims = [int(d) for d in new_shape]

    unknown = [i for i, d in enumerate(dims) if d == -1]
    if len(unknown) > 1:
        raise ShapeError("can only specify one unknown dimension")

    if unknown:
        known = prod(d for d in dims if d != -1)
        if known == 0 or size % known != 0:
            raise ShapeError(
                f"cannot reshape array of size {size} into shape {tuple(new_shape)}"
            )
        dims[unknown[0]] = size // known

    shape = normalize_shape(dims)
    if prod(shape) != size:
        raise ShapeError(
            f"cannot reshape array of size {size} into shape {tuple(new_shape)}"
        )
    return shape


def reshape_view(
    meta: ViewMetadata,
    new_shape: Union[int, Sequence[int]],
    order: Union[str, MemoryOrder] = MemoryOrder.C,
) -> tuple[ViewMetadata, bool]:
    """
    Reshape a view.

    Parameters
    ----------
    meta : ViewMetadata
        Source descriptor.
    new_shape : int | Sequence[int]
        Target shape. One entry may be -1.
    order : str | MemoryOrder, optional
        Order in which elements are read from the source and written to the
        result. "C" gives row-major strides; "F" gives column-major strides
        (`strides[0] = 1`) and is zero-copy only for F-contiguous sources.
        Defaults to "C".

    Returns
    -------
    tuple[ViewMetadata, bool]
        The reshaped descriptor and whether the source must first be copied
        into a contiguous buffer. When `must_copy` is True the returned
        descriptor has offset 0 and applies to that copy, which must be laid
        out in `order` (a C compact or an F ravel of the source).

    Raises
    ------
    ShapeError
        If the target shape is incompatible with the source size.
    """
    order = MemoryOrder.parse(order)
    shape = infer_shape(new_shape, meta.size)

    if order is MemoryOrder.F:
        strides, in_place = compute_f_strides(shape), meta.is_f_contiguous
    else:
        strides, in_place = compute_strides(shape), meta.is_contiguous

    if in_place:
        return ViewMetadata(shape, strides, meta.offset), False
    return ViewMetadata(shape, strides, 0), True


def ravel_view(
    meta: ViewMetadata, order: Union[str, MemoryOrder] = MemoryOrder.C
) -> tuple[ViewMetadata, bool]:
    """
    One-dimensional view of all elements in the requested order.

    Zero-copy when the view is contiguous in that order; otherwise
    `must_copy` is True and the caller should compact (or F-ravel) the data.
    """
    order = MemoryOrder.parse(order)
    contiguous = meta.is_f_contiguous if order is MemoryOrder.F else meta.is_contiguous
    flat = ViewMetadata((meta.size,), (1,), meta.offset if contiguous else 0)
    return flat, not contiguous


# ---------------------------------------------------------------------------
# axis permutations
# ---------------------------------------------------------------------------
def permute_view(meta: ViewMetadata, axes: Sequence[int]) -> ViewMetadata:
    """
    Reorder dimensions according to `axes`.

    Raises
    ------
    ShapeError
        If `axes` is not a permutation of `range(ndim)`.
    """
    if len(axes) != meta.ndim:
        raise ShapeError(f"axes {tuple(axes)} don't match array of dimension {meta.ndim}")
    resolved = [normalize_axis(a, meta.ndim) for a in axes]
    if len(set(resolved)) != len(resolved):
        raise ShapeError(f"repeated axis in permutation {tuple(axes)}")

    return ViewMetadata(
        tuple(meta.shape[a] for a in resolved),
        tuple(meta.strides[a] for a in resolved),
        meta.offset,
    )


def transpose_view(
    meta: ViewMetadata, axes: Optional[Sequence[int]] = None
) -> ViewMetadata:
    """
    Reverse the dimension order, or apply `axes` when given.
    """
    if axes is None:
        return ViewMetadata(meta.shape[::-1], meta.strides[::-1], meta.offset)
    return permute_view(meta, axes)


def swap_axes_view(meta: ViewMetadata, axis1: int, axis2: int) -> ViewMetadata:
    """
    Exchange two dimensions.
    """
    a = normalize_axis(axis1, meta.ndim)
    b = normalize_axis(axis2, meta.ndim)
    order = list(range(meta.ndim))
    order[a], order[b] = order[b], order[a]
    return permute_view(meta, order)


def merge_axes_view(meta: ViewMetadata, take: int, into: int) -> ViewMetadata:
    """
    Fold axis `take` into axis `into`.

    The merged axis has extent `shape[into] * shape[take]` and axis `take`
    is removed. Along the merged axis, `into` moves fastest, so the pair is
    foldable only when

        strides[take] == strides[into] * shape[into]

    Size-1 axes are always foldable.

    Raises
    ------
    ShapeError
        If the axes are equal, out of range, or not stride-compatible.
    """
    t = normalize_axis(take, meta.ndim)
    i = normalize_axis(into, meta.ndim)
    if t == i:
        raise ShapeError(f"cannot merge axis {take} into itself")

    shape = list(meta.shape)
    strides = list(meta.strides)
    n_take, n_into = shape[t], shape[i]

    if n_take == 1:
        merged_stride = strides[i]
    elif n_into == 1:
        merged_stride = strides[t]
    elif strides[t] == strides[i] * n_into:
        merged_stride = strides[i]
    else:
        raise ShapeError(
            f"axes {take} and {into} are not stride-compatible for merging "
            f"(shape={meta.shape}, strides={meta.strides})"
        )

    shape[i] = n_into * n_take
    strides[i] = merged_stride
    del shape[t]
    del strides[t]
    return ViewMetadata(tuple(shape), tuple(strides), meta.offset)


# ---------------------------------------------------------------------------
# size-1 axes
# ---------------------------------------------------------------------------
def insert_axis_view(meta: ViewMetadata, axis: int) -> ViewMetadata:
    """
    Insert a size-1 dimension at `axis` (valid range `[-ndim-1, ndim]`).
    """
    a = normalize_axis(axis, meta.ndim, inclusive=True)
    stride = meta.strides[a] * meta.shape[a] if a < meta.ndim else 1
    return ViewMetadata(
        meta.shape[:a] + (1,) + meta.shape[a:],
        meta.strides[:a] + (stride,) + meta.strides[a:],
        meta.offset,
    )


expand_dims_view = insert_axis_view


def squeeze_view(
    meta: ViewMetadata, axes: Optional[Union[int, Sequence[int]]] = None
) -> ViewMetadata:
    """
    Remove size-1 dimensions.

    Parameters
    ----------
    meta : ViewMetadata
        Source descriptor.
    axes : int | Sequence[int] | None, optional
        Axes to remove. When None every size-1 axis is removed, but the
        result never drops below shape `(1,)` (stride 1) for a non-0-d input.

    Raises
    ------
    ShapeError
        If an explicit axis is out of range or its size is not 1.
    """
    if axes is None:
        keep = [d for d in range(meta.ndim) if meta.shape[d] != 1]
        if not keep and meta.ndim > 0:
            return ViewMetadata((1,), (1,), meta.offset)
    else:
        if isinstance(axes, int):
            axes = (axes,)
        drop = {normalize_axis(a, meta.ndim) for a in axes}
        for d in drop:
            if meta.shape[d] != 1:
                raise ShapeError(
                    f"cannot select an axis to squeeze out which has size "
                    f"not equal to one (axis {d}, size {meta.shape[d]})"
                )
        keep = [d for d in range(meta.ndim) if d not in drop]

    return ViewMetadata(
        tuple(meta.shape[d] for d in keep),
        tuple(meta.strides[d] for d in keep),
        meta.offset,
    )


# ---------------------------------------------------------------------------
# flips / diagonal
# ---------------------------------------------------------------------------
def invert_axis_view(meta: ViewMetadata, axis: int) -> ViewMetadata:
    """
    Reverse one axis without copying.

    The stride is negated and the offset moves to the last element along the
    axis. Empty axes keep their offset.
    """
    a = normalize_axis(axis, meta.ndim)
    n, s = meta.shape[a], meta.strides[a]
    offset = meta.offset + (n - 1) * s if n > 0 else meta.offset

    strides = list(meta.strides)
    strides[a] = -s
    return ViewMetadata(meta.shape, tuple(strides), offset)


def flip_view(
    meta: ViewMetadata, axis: Optional[Union[int, Sequence[int]]] = None
) -> ViewMetadata:
    """
    Reverse the given axes (all axes when `axis` is None).
    """
    if axis is None:
        axes: Sequence[int] = range(meta.ndim)
    elif isinstance(axis, int):
        axes = (axis,)
    else:
        axes = axis

    for a in axes:
        meta = invert_axis_view(meta, a)
    return meta


def diagonal_view(meta: ViewMetadata, k: int = 0) -> ViewMetadata:
    """
    One-dimensional view of the `k`-th diagonal of a 2-D view.

    The diagonal advances both indices at once, so its stride is
    `strides[0] + strides[1]`.

    Raises
    ------
    ShapeError
        If the view is not 2-D.
    """
    if meta.ndim != 2:
        raise ShapeError(f"diagonal requires a 2-D array, got ndim={meta.ndim}")

    (n0, n1), (s0, s1) = meta.shape, meta.strides
    if k >= 0:
        length = max(0, min(n0, n1 - k))
        start = k * s1
    else:
        length = max(0, min(n0 + k, n1))
        start = -k * s0

    offset = meta.offset + start if length > 0 else meta.offset
    return ViewMetadata((length,), (s0 + s1,), offset)


# ---------------------------------------------------------------------------
# pad / tile / repeat argument algebra
# ---------------------------------------------------------------------------
def normalize_pad_width(pad_width: PadWidth, ndim: int) -> tuple[tuple[int, int], ...]:
    """
    Normalize a pad specification to one `(before, after)` pair per axis.

    Accepted forms
    --------------
    - `n`                -> `(n, n)` on every axis
    - `(before, after)`  -> the same pair on every axis
    - `((b0, a0), ...)`  -> one pair per axis (length must equal `ndim`)

    Raises
    ------
    ShapeError
        On negative widths, wrong lengths, or non-integer entries.
    """

    def _as_int(v: Any) -> int:
        if isinstance(v, bool) or not hasattr(v, "__index__"):
            raise ShapeError(f"pad widths must be integers, got {v!r}")
        v = int(v.__index__())
        if v < 0:
            raise ShapeError("pad widths must be non-negative")
        return v

    if isinstance(pad_width, Sequence) and len(pad_width) > 0 and all(
        isinstance(p, Sequence) for p in pad_width
    ):
        if len(pad_width) != ndim:
            raise ShapeError(
                f"pad_width has {len(pad_width)} entries but the array has {ndim} dimensions"
            )
        out = []
        for p in pad_width:
            if len(p) != 2:
                raise ShapeError(f"each pad entry must be a (before, after) pair, got {p!r}")
            out.append((_as_int(p[0]), _as_int(p[1])))
        return tuple(out)

    if isinstance(pad_width, Sequence):
        if len(pad_width) == 1:
            pair = (_as_int(pad_width[0]),) * 2
        elif len(pad_width) == 2:
            pair = (_as_int(pad_width[0]), _as_int(pad_width[1]))
        else:
            raise ShapeError(f"invalid pad_width {pad_width!r}")
        return (pair,) * ndim

    n = _as_int(pad_width)
    return ((n, n),) * ndim


def pad_shape(
    shape: Sequence[int], pad_width: Sequence[tuple[int, int]]
) -> tuple[int, ...]:
    """
    Output shape after padding: `shape[i] + before[i] + after[i]`.
    """
    return tuple(n + b + a for n, (b, a) in zip(shape, pad_width))


def normalize_pad_constants(
    values: Any, ndim: int
) -> tuple[float, ...]:
    """
    Normalize constant-mode fill values.

    Returns
    -------
    tuple[float, ...]
        `()` for None (zeros), 1 value for a scalar, 2 values for a
        `(before, after)` pair applied to every axis, or `2 * ndim` values
        for per-axis pairs.

    Raises
    ------
    ShapeError
        For any other number of values.
    """
    if values is None:
        return ()
    if isinstance(values, (bool, int, float)):
        return (float(values),)

    flat: list[float] = []
    for v in values:
        if isinstance(v, (list, tuple)):
            flat.extend(float(x) for x in v)
        else:
            flat.append(float(v))

    if len(flat) in (0, 1, 2) or len(flat) == 2 * ndim:
        return tuple(flat)
    raise ShapeError(
        f"constant values must have 1, 2 or {2 * ndim} entries, got {len(flat)}"
    )


def expand_pad_constants(
    constants: Sequence[float], ndim: int
) -> tuple[tuple[float, float], ...]:
    """
    Per-axis `(before, after)` constants from the normalized form.
    """
    if len(constants) == 0:
        return ((0.0, 0.0),) * ndim
    if len(constants) == 1:
        return ((constants[0], constants[0]),) * ndim
    if len(constants) == 2 and ndim != 1:
        return ((constants[0], constants[1]),) * ndim
    return tuple((constants[2 * i], constants[2 * i + 1]) for i in range(ndim))


def _non_negative_ints(values: Sequence[Any], what: str) -> tuple[int, ...]:
    out = []
    for v in values:
        if isinstance(v, bool) or not hasattr(v, "__index__"):
            raise ShapeError(f"{what} must be integers, got {v!r}")
        v = int(v.__index__())
        if v < 0:
            raise ShapeError(f"{what} must be non-negative")
        out.append(v)
    return tuple(out)


def normalize_reps(reps: Union[int, Sequence[int]]) -> tuple[int, ...]:
    """
    Normalize `tile` repetitions to a non-empty tuple of non-negative ints.
    """
    if isinstance(reps, int):
        reps = (reps,)
    reps = _non_negative_ints(reps, "reps")
    if not reps:
        raise ShapeError("reps must not be empty")
    return reps


def tile_shape(shape: Sequence[int], reps: Sequence[int]) -> tuple[int, ...]:
    """
    Output shape of `tile`: both sequences are left-padded with 1s to the same
    length and multiplied position by position.
    """
    n = max(len(shape), len(reps))
    s = (1,) * (n - len(shape)) + tuple(shape)
    r = (1,) * (n - len(reps)) + tuple(reps)
    return tuple(a * b for a, b in zip(s, r))


def normalize_repeats(
    repeats: Union[int, Sequence[int]], axis_len: int
) -> tuple[int, ...]:
    """
    Normalize `repeat` counts.

    Returns either a single count (applied to every element) or one count
    per element along the axis.

    Raises
    ------
    ShapeError
        On negative counts or a length that is neither 1 nor `axis_len`.
    """
    if isinstance(repeats, int):
        repeats = (repeats,)
    repeats = _non_negative_ints(repeats, "repeats")
    if len(repeats) not in (1, axis_len):
        raise ShapeError(
            f"repeats has {len(repeats)} entries, expected 1 or {axis_len}"
        )
    return repeats


def repeat_shape(
    shape: Sequence[int], repeats: Sequence[int], axis: Optional[int]
) -> tuple[int, ...]:
    """
    Output shape of `repeat`. With `axis=None` the input is flattened first.
    """
    if axis is None:
        n = prod(shape)
        total = n * repeats[0] if len(repeats) == 1 else sum(repeats)
        return (total,)

    out = list(shape)
    n = out[axis]
    out[axis] = n * repeats[0] if len(repeats) == 1 else sum(repeats)
    return tuple(out)
