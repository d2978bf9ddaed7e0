"""
Host storage and lifetime management.

This module defines `HostStorage`, a reference-counted wrapper around one
flat host buffer. A root array and every view derived from it share a single
storage object; the buffer is released exactly once, when the last array
referencing it goes away.

Core Concepts
-------------
- **Shared storage**:
    Views never copy data. They reference the same `HostStorage` as their
    root and differ only in their `(shape, strides, offset)` descriptor.

- **Reference counting**:
    A storage starts with a count of 1, owned by the root that allocated it.
    Every derived array calls `incref()` and registers a `weakref.finalize`
    callback that calls `decref()` when the array is garbage-collected.

- **Release**:
    When the count reaches zero the buffer reference is dropped and the
    storage is marked released. Further use raises `InternalError`.

Thread Safety
-------------
Reference count updates are protected by an internal lock. Buffer contents
are not locked; concurrent writers must synchronize externally.

Design Notes
------------
- `HostStorage` avoids `__del__`; arrays attach finalizers instead, so
  release ordering never depends on interpreter shutdown.
- Storage does not know about shapes or strides. Layout is the
  responsibility of the view descriptors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import threading
import weakref
from typing import Any, Optional

import numpy as np

from ...domain._dtype import DType
from ...domain._errors import InternalError

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class HostStorage:
    """
    Reference-counted wrapper around a flat host buffer.

    Parameters
    ----------
    buffer : np.ndarray
        One-dimensional, C-contiguous NumPy array holding every element of
        the root allocation.
    dtype : DType
        Element type of `buffer`.

    Notes
    -----
    - The count starts at 1 for the allocating root.
    - Once released, `buffer` is None and `data` raises `InternalError`.
    """

    buffer: Optional[np.ndarray]
    dtype: DType

    _refcnt: int = 1
    _released: bool = False
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def __post_init__(self) -> None:
        if self.buffer is None or self.buffer.ndim != 1:
            raise InternalError("HostStorage requires a one-dimensional buffer")

    @property
    def data(self) -> np.ndarray:
        """
        The underlying flat buffer.

        Raises
        ------
        InternalError
            If the storage has already been released.
        """
        if self._released or self.buffer is None:
            raise InternalError("Storage has already been released")
        return self.buffer

    @property
    def refcount(self) -> int:
        """Current number of arrays referencing this storage."""
        return self._refcnt

    @property
    def released(self) -> bool:
        """Whether the buffer has been released."""
        return self._released

    @property
    def length(self) -> int:
        """Number of elements in the buffer (0 once released)."""
        return 0 if self.buffer is None else int(self.buffer.shape[0])

    @property
    def nbytes(self) -> int:
        """Size of the buffer in bytes (0 once released)."""
        return self.length * self.dtype.item_size

    def incref(self) -> "HostStorage":
        """
        Increment the reference count.

        Returns
        -------
        HostStorage
            `self`, for chaining at construction sites.

        Raises
        ------
        InternalError
            If the storage has already been released.
        """
        with self._lock:
            if self._released:
                raise InternalError("Cannot reference released storage")
            self._refcnt += 1
        return self

    def decref(self) -> None:
        """
        Decrement the reference count and release the buffer at zero.

        Calls after the release are no-ops, so the buffer is released
        exactly once.
        """
        with self._lock:
            if self._released:
                return
            self._refcnt -= 1
            if self._refcnt > 0:
                return
            nbytes = self.nbytes
            self.buffer = None
            self._released = True
        logger.debug("Released host storage (%d bytes, dtype=%s)", nbytes, self.dtype)

    def attach(self, owner: Any) -> weakref.finalize:
        """
        Tie one reference to the lifetime of `owner`.

        The caller must already hold the reference (the initial count for a
        root, or a prior `incref()` for a view). The returned finalizer calls
        `decref()` when `owner` is garbage-collected.
        """
        return weakref.finalize(owner, self.decref)
