"""
Zero-copy slicing of strided views.
"""

from __future__ import annotations

from typing import Any, Sequence

from ...domain._errors import ArrayIndexError
from ...domain._slice import (
    EllipsisSelector,
    IndexSelector,
    RangeSelector,
    Selector,
    Slice,
    to_selector,
)
from ...domain._view import ViewMetadata
from ._indexing import normalize_index


def expand_selectors(selectors: Sequence[Any], ndim: int) -> list[Selector]:
    """
    Convert `selectors` to tagged form and expand the Ellipsis.

    The result holds exactly `ndim` Index or Range selectors. Missing
    trailing selectors become full ranges.

    Raises
    ------
    ArrayIndexError
        On more than one Ellipsis, or more non-Ellipsis selectors than
        dimensions.
    """
    tagged = [to_selector(s) for s in selectors]

    n_ellipsis = sum(isinstance(s, EllipsisSelector) for s in tagged)
    if n_ellipsis > 1:
        raise ArrayIndexError("an index can only have a single ellipsis ('...')")

    n_explicit = len(tagged) - n_ellipsis
    if n_explicit > ndim:
        raise ArrayIndexError(
            f"Too many indices: array is {ndim}-dimensional, but {n_explicit} were indexed"
        )

    full = RangeSelector(Slice())
    out: list[Selector] = []
    for s in tagged:
        if isinstance(s, EllipsisSelector):
            out.extend([full] * (ndim - n_explicit))
        else:
            out.append(s)
    out.extend([full] * (ndim - len(out)))
    return out


def slice_view(meta: ViewMetadata, selectors: Sequence[Any]) -> ViewMetadata:
    """
    Apply selectors to a view without copying.

    Index selectors consume their dimension. Range selectors keep it, with

        offset += start * stride
        shape   = resolved.shape
        stride *= step

    Parameters
    ----------
    meta : ViewMetadata
        Source descriptor.
    selectors : Sequence[Any]
        Selectors or anything `to_selector` accepts.

    Returns
    -------
    ViewMetadata
        Descriptor of the selected region.

    Raises
    ------
    ArrayIndexError
        On malformed selectors or out-of-range Index selectors. Range bounds
        are clamped and never raise.
    """
    expanded = expand_selectors(selectors, meta.ndim)

    offset = meta.offset
    shape: list[int] = []
    strides: list[int] = []

    for dim, sel in enumerate(expanded):
        n = meta.shape[dim]
        stride = meta.strides[dim]
        if isinstance(sel, IndexSelector):
            offset += normalize_index(sel.index, n, dim) * stride
            continue

        resolved = sel.slice.resolve(n)
        if resolved.shape > 0:
            offset += resolved.start * stride
        shape.append(resolved.shape)
        strides.append(stride * resolved.step)

    return ViewMetadata(tuple(shape), tuple(strides), offset)
