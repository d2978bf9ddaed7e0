"""
Broadcasting and linear-algebra shape resolution.
"""

from __future__ import annotations

from typing import Sequence

from ...domain._errors import ShapeError
from ...domain._view import ViewMetadata


def broadcast_shapes(a: Sequence[int], b: Sequence[int]) -> tuple[int, ...]:
    """
    Broadcast two shapes.

    Shapes are right-aligned and the shorter one is left-padded with 1s. Per
    aligned position the result is `max(x, y)` when `x == y`, `x == 1` or
    `y == 1`.

    Parameters
    ----------
    a, b : Sequence[int]
        Operand shapes.

    Returns
    -------
    tuple[int, ...]
        Broadcast shape.

    Raises
    ------
    ShapeError
        If some aligned pair differs and neither side is 1.
    """
    n = max(len(a), len(b))
    pa = (1,) * (n - len(a)) + tuple(a)
    pb = (1,) * (n - len(b)) + tuple(b)

    out = []
    for x, y in zip(pa, pb):
        if x == y or y == 1:
            out.append(x)
        elif x == 1:
            out.append(y)
        else:
            raise ShapeError(
                f"cannot broadcast shapes {tuple(a)} and {tuple(b)}"
            )
    return tuple(out)


def broadcast_shapes_n(*shapes: Sequence[int]) -> tuple[int, ...]:
    """
    Broadcast any number of shapes (left fold of `broadcast_shapes`).
    """
    out: tuple[int, ...] = ()
    for s in shapes:
        out = broadcast_shapes(out, s)
    return out


def broadcast_view(meta: ViewMetadata, shape: Sequence[int]) -> ViewMetadata:
    """
    Zero-copy view of `meta` broadcast to `shape`.

    New leading axes and stretched size-1 axes get stride 0.

    Raises
    ------
    ShapeError
        If `meta.shape` cannot be broadcast to exactly `shape`.
    """
    shape = tuple(int(d) for d in shape)
    lead = len(shape) - meta.ndim
    if lead < 0:
        raise ShapeError(f"cannot broadcast shape {meta.shape} to {shape}")

    strides = [0] * lead
    for src_n, src_s, dst_n in zip(meta.shape, meta.strides, shape[lead:]):
        if src_n == dst_n:
            strides.append(src_s)
        elif src_n == 1:
            strides.append(0)
        else:
            raise ShapeError(f"cannot broadcast shape {meta.shape} to {shape}")

    return ViewMetadata(shape, tuple(strides), meta.offset)


def dot_shape(a: Sequence[int], b: Sequence[int]) -> tuple[int, ...]:
    """
    Output shape of `dot(a, b)`.

    - 1-D . 1-D -> `()`
    - 2-D . 1-D -> `(M,)`
    - 1-D . 2-D -> `(N,)`
    - 2-D . 2-D -> `(M, N)`
    - N-D . 1-D -> `a[:-1]`
    - N-D . M-D -> `a[:-1] + b[:-2] + b[-1:]` (last axis of `a` against the
      second-to-last axis of `b`)

    Raises
    ------
    ShapeError
        If either operand is 0-d or the contracted lengths differ.
    """
    a, b = tuple(a), tuple(b)
    if not a or not b:
        raise ShapeError("dot does not accept 0-d operands")

    k_b = b[0] if len(b) == 1 else b[-2]
    if a[-1] != k_b:
        raise ShapeError(
            f"shapes {a} and {b} not aligned: {a[-1]} (dim {len(a) - 1}) != {k_b}"
        )

    if len(b) == 1:
        return a[:-1]
    return a[:-1] + b[:-2] + b[-1:]


def matmul_shape(a: Sequence[int], b: Sequence[int]) -> tuple[int, ...]:
    """
    Output shape of `matmul(a, b)`.

    1-D operands are promoted to matrices (a row vector on the left, a
    column vector on the right) and the promoted axis is removed from the
    result. Leading batch dimensions broadcast.

    Raises
    ------
    ShapeError
        On 0-d operands, mismatched inner dimensions, or batch dimensions that
        do not broadcast.
    """
    a, b = tuple(a), tuple(b)
    if not a or not b:
        raise ShapeError("matmul does not accept 0-d operands")

    a2 = (1,) + a if len(a) == 1 else a
    b2 = b + (1,) if len(b) == 1 else b

    if a2[-1] != b2[-2]:
        raise ShapeError(
            f"matmul: input operand 1 has a mismatch in its core dimension 0 "
            f"({b2[-2]} is different from {a2[-1]}), shapes {a} and {b}"
        )

    batch = broadcast_shapes(a2[:-2], b2[:-2])
    out = batch + (a2[-2], b2[-1])

    if len(a) == 1:
        out = out[:-2] + out[-1:]
    if len(b) == 1:
        out = out[:-1]
    return out
