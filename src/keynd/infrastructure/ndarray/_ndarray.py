"""
Concrete N-dimensional array backed by shared host storage.

This module provides `NDArray`, the user-facing array type. An `NDArray` is a
`ViewMetadata` descriptor paired with a dtype and a reference-counted
`HostStorage`. Views share the storage of their root and never copy data;
every numeric operation is delegated to the active compute backend.

Design notes
------------
- The class is assembled from cohesive mixins (factories, conversion,
  indexing, slicing, shape ops, stacking, elementwise ops, reductions and
  linear algebra). Mixins construct new arrays through `self.__class__` /
  `cls` and never import `NDArray` directly, which keeps the import graph
  acyclic.
- `base` is None for a root and points at the root for every derived view,
  so ownership is a single arrow and never a cycle.
- Each array holds one storage reference that is released by a
  `weakref.finalize` callback when the array is garbage-collected.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional, Sequence

import numpy as np

from ...domain._backend import BackendResult, IArrayBackend
from ...domain._dtype import DType
from ...domain._errors import ShapeError
from ...domain._ndarray import INDArray
from ...domain._view import ViewMetadata
from ..backend._registry import get_backend
from ..backend._storage import HostStorage
from ._formatting import format_array
from .mixins import (
    NDArrayConversionMixin,
    NDArrayFactoriesMixin,
    NDArrayIndexingMixin,
    NDArrayLinalgMixin,
    NDArrayOpsMixin,
    NDArrayReductionsMixin,
    NDArrayShapeOpsMixin,
    NDArraySlicingMixin,
    NDArrayStackingMixin,
)


class NDArray(
    NDArrayFactoriesMixin,
    NDArrayConversionMixin,
    NDArrayIndexingMixin,
    NDArraySlicingMixin,
    NDArrayShapeOpsMixin,
    NDArrayStackingMixin,
    NDArrayOpsMixin,
    NDArrayReductionsMixin,
    NDArrayLinalgMixin,
):
    """
    Strided N-dimensional array.

    Parameters
    ----------
    storage : HostStorage
        Shared flat buffer. The caller must hand over one reference: a fresh
        storage (count 1) for roots, or a storage already `incref`'d for
        views.
    meta : ViewMetadata
        Shape, strides and offset of this array inside `storage`.
    dtype : DType
        Element type.
    base : Optional[NDArray], optional
        Root array when this array is a view. Defaults to None.

    Notes
    -----
    Users normally create arrays through the factories (`array`, `zeros`,
    `arange`, ...) rather than by calling the constructor.
    """

    # Make NumPy defer to NDArray's reflected operators.
    __array_priority__ = 1000

    def __init__(
        self,
        storage: HostStorage,
        meta: ViewMetadata,
        dtype: DType,
        base: Optional["NDArray"] = None,
    ) -> None:
        self._storage = storage
        self._meta = meta
        self._dtype = DType.parse(dtype)
        self._base = base
        self._finalizer = storage.attach(self)

    # ------------------------------------------------------------------
    # internal constructors
    # ------------------------------------------------------------------
    @classmethod
    def _from_buffer(
        cls, buffer: np.ndarray, shape: Sequence[int], dtype: DType
    ) -> "NDArray":
        """Wrap a fresh flat buffer as a new C-contiguous root."""
        return cls(HostStorage(buffer, dtype), ViewMetadata.contiguous(shape), dtype)

    @classmethod
    def _from_result(cls, result: BackendResult) -> "NDArray":
        """Wrap an array-valued backend result, raising on failure."""
        result.unwrap()
        return cls._from_buffer(result.buffer, result.shape, result.dtype)

    def _view(self, meta: ViewMetadata) -> "NDArray":
        """New view sharing this array's storage, rooted at `self.root`."""
        return self.__class__(self._storage.incref(), meta, self._dtype, self.root)

    def _adopt(self, source: "NDArray", meta: ViewMetadata) -> "NDArray":
        """
        New root over the storage of a freshly materialized `source`.

        Used when an operation had to copy first: the copy is private, so
        the result owns its storage instead of being a view of the copy.
        """
        return self.__class__(source._storage.incref(), meta, source._dtype)

    @staticmethod
    def _backend() -> IArrayBackend:
        return get_backend()

    @property
    def _buffer(self) -> np.ndarray:
        return self._storage.data

    def _operand(self) -> tuple[np.ndarray, ViewMetadata, DType]:
        """`(buffer, meta, dtype)` triple handed to backend kernels."""
        return self._buffer, self._meta, self._dtype

    # ------------------------------------------------------------------
    # metadata
    # ------------------------------------------------------------------
    @property
    def shape(self) -> tuple[int, ...]:
        """Logical extent of each dimension."""
        return self._meta.shape

    @property
    def strides(self) -> tuple[int, ...]:
        """Element strides of each dimension."""
        return self._meta.strides

    @property
    def offset(self) -> int:
        """Element offset of index (0, ..., 0) in the root buffer."""
        return self._meta.offset

    @property
    def ndim(self) -> int:
        return self._meta.ndim

    @property
    def size(self) -> int:
        return self._meta.size

    @property
    def dtype(self) -> DType:
        return self._dtype

    @property
    def itemsize(self) -> int:
        """Bytes per element."""
        return self._dtype.item_size

    @property
    def nbytes(self) -> int:
        """Bytes spanned by the logical elements (`size * itemsize`)."""
        return self.size * self.itemsize

    @property
    def view_metadata(self) -> ViewMetadata:
        return self._meta

    @property
    def base(self) -> Optional["NDArray"]:
        """Root array for views, None for roots."""
        return self._base

    @property
    def root(self) -> "NDArray":
        """The array owning the storage (`self` for roots)."""
        return self if self._base is None else self._base

    @property
    def is_view(self) -> bool:
        return self._base is not None

    @property
    def is_contiguous(self) -> bool:
        return self._meta.is_contiguous

    @property
    def is_f_contiguous(self) -> bool:
        return self._meta.is_f_contiguous

    @property
    def storage(self) -> HostStorage:
        """Shared storage of this array and all related views."""
        return self._storage

    def shares_memory(self, other: INDArray) -> bool:
        """Whether `other` views the same storage as this array."""
        return isinstance(other, NDArray) and other._storage is self._storage

    # ------------------------------------------------------------------
    # Python protocols
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        if self.ndim == 0:
            raise TypeError("len() of unsized object")
        return self.shape[0]

    def __iter__(self) -> Iterator[Any]:
        if self.ndim == 0:
            raise TypeError("iteration over a 0-d array")
        for i in range(self.shape[0]):
            yield self.get(i)

    def __bool__(self) -> bool:
        if self.size != 1:
            raise ShapeError(
                "The truth value of an array with more than one element is ambiguous"
            )
        return bool(self.item())

    def __array__(self, dtype: Any = None, copy: Any = None) -> np.ndarray:
        out = self.to_numpy()
        return out if dtype is None else out.astype(dtype)

    def __str__(self) -> str:
        return format_array(self)

    def __repr__(self) -> str:
        body = np.array2string(self.to_numpy(), separator=", ", prefix="NDArray(")
        return f"NDArray({body}, dtype={self._dtype})"
