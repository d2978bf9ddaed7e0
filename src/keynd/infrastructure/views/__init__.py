"""
Pure view algebra.

Every function in this package maps view descriptors (and parameters) to new
descriptors or shapes. None of them read or write buffer contents.
"""

from ._broadcast import (
    broadcast_shapes,
    broadcast_shapes_n,
    broadcast_view,
    dot_shape,
    matmul_shape,
)
from ._indexing import (
    flat_offset,
    logical_to_storage,
    normalize_axis,
    normalize_flat_indices,
    normalize_index,
    partial_view,
    unravel_index,
)
from ._join import (
    concatenate_shape,
    indices_for_equal_split,
    split_views,
    stack_shape,
)
from ._slicing import expand_selectors, slice_view
from ._transform import (
    diagonal_view,
    expand_dims_view,
    expand_pad_constants,
    flip_view,
    infer_shape,
    insert_axis_view,
    invert_axis_view,
    merge_axes_view,
    normalize_pad_constants,
    normalize_pad_width,
    normalize_repeats,
    normalize_reps,
    pad_shape,
    permute_view,
    ravel_view,
    repeat_shape,
    reshape_view,
    squeeze_view,
    swap_axes_view,
    tile_shape,
    transpose_view,
)

__all__ = [
    broadcast_shapes.__name__,
    broadcast_shapes_n.__name__,
    broadcast_view.__name__,
    dot_shape.__name__,
    matmul_shape.__name__,
    flat_offset.__name__,
    logical_to_storage.__name__,
    normalize_axis.__name__,
    normalize_flat_indices.__name__,
    normalize_index.__name__,
    partial_view.__name__,
    unravel_index.__name__,
    concatenate_shape.__name__,
    indices_for_equal_split.__name__,
    split_views.__name__,
    stack_shape.__name__,
    expand_selectors.__name__,
    slice_view.__name__,
    diagonal_view.__name__,
    "expand_dims_view",
    expand_pad_constants.__name__,
    flip_view.__name__,
    infer_shape.__name__,
    insert_axis_view.__name__,
    invert_axis_view.__name__,
    merge_axes_view.__name__,
    normalize_pad_constants.__name__,
    normalize_pad_width.__name__,
    normalize_repeats.__name__,
    normalize_reps.__name__,
    pad_shape.__name__,
    permute_view.__name__,
    ravel_view.__name__,
    repeat_shape.__name__,
    reshape_view.__name__,
    squeeze_view.__name__,
    swap_axes_view.__name__,
    tile_shape.__name__,
    transpose_view.__name__,
]
