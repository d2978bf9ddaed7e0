"""
N-dimensional array interface definitions.

This module defines the domain-level interface for array-like objects using
structural typing. It captures the view-related surface (shape, strides,
offset, dtype, ownership) that backend-agnostic code relies on, so helpers
can type against `INDArray` without importing the concrete implementation.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable

from ._dtype import DType
from ._view import ViewMetadata


@runtime_checkable
class INDArray(Protocol):
    """
    Array interface.

    An `INDArray` is a strided view over a flat buffer. Any object providing
    these members can be passed where an array is expected.

    Notes
    -----
    `base` is None for a root array and refers to the root for every
    derived view.
    """

    @property
    def shape(self) -> tuple[int, ...]:
        """Logical extent of each dimension."""
        ...

    @property
    def strides(self) -> tuple[int, ...]:
        """Element strides of each dimension."""
        ...

    @property
    def offset(self) -> int:
        """Element offset of index (0, ..., 0) inside the root buffer."""
        ...

    @property
    def ndim(self) -> int:
        """Number of dimensions."""
        ...

    @property
    def size(self) -> int:
        """Number of elements."""
        ...

    @property
    def dtype(self) -> DType:
        """Element type."""
        ...

    @property
    def base(self) -> Optional["INDArray"]:
        """Root array for views, None for roots."""
        ...

    @property
    def view_metadata(self) -> ViewMetadata:
        """The `(shape, strides, offset)` descriptor of this array."""
        ...

    def to_numpy(self) -> Any:
        """
        Copy the logical contents into a new `np.ndarray`.

        Returns
        -------
        Any
            Backend-native array (a NumPy array for the host backend).
        """
        ...

    def to_list(self) -> Any:
        """Nested Python lists (or a scalar for 0-d arrays)."""
        ...
