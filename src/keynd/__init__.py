"""
KeyND: strided N-dimensional arrays over a flat typed buffer.

The public surface is the `NDArray` class plus module-level shortcuts for
its factories and join functions:

>>> import keynd as knd
>>> a = knd.arange(6).reshape(2, 3)
>>> a.T.shape
(3, 2)
"""

from .domain import (
    MAX_NDIM,
    AllocationError,
    ArrayIndexError,
    DType,
    DTypeError,
    IArrayBackend,
    INDArray,
    InternalError,
    MathError,
    MemoryOrder,
    NDArrayError,
    PadMode,
    PrintOptions,
    ShapeError,
    Slice,
    StatusCode,
    ViewMetadata,
)
from .infrastructure.backend import NumpyBackend, get_backend, set_backend
from .infrastructure.ndarray import FlatIterator, NDArray, format_array

array = NDArray.array
from_numpy = NDArray.from_numpy
zeros = NDArray.zeros
ones = NDArray.ones
empty = NDArray.empty
full = NDArray.full
zeros_like = NDArray.zeros_like
ones_like = NDArray.ones_like
empty_like = NDArray.empty_like
full_like = NDArray.full_like
eye = NDArray.eye
arange = NDArray.arange
linspace = NDArray.linspace
logspace = NDArray.logspace
geomspace = NDArray.geomspace

concatenate = NDArray.concatenate
stack = NDArray.stack
vstack = NDArray.vstack
hstack = NDArray.hstack
where = NDArray.where

__all__ = [
    "MAX_NDIM",
    AllocationError.__name__,
    ArrayIndexError.__name__,
    DType.__name__,
    DTypeError.__name__,
    IArrayBackend.__name__,
    INDArray.__name__,
    InternalError.__name__,
    MathError.__name__,
    MemoryOrder.__name__,
    NDArrayError.__name__,
    PadMode.__name__,
    PrintOptions.__name__,
    ShapeError.__name__,
    Slice.__name__,
    StatusCode.__name__,
    ViewMetadata.__name__,
    NumpyBackend.__name__,
    get_backend.__name__,
    set_backend.__name__,
    FlatIterator.__name__,
    NDArray.__name__,
    format_array.__name__,
    "array",
    "from_numpy",
    "zeros",
    "ones",
    "empty",
    "full",
    "zeros_like",
    "ones_like",
    "empty_like",
    "full_like",
    "eye",
    "arange",
    "linspace",
    "logspace",
    "geomspace",
    "concatenate",
    "stack",
    "vstack",
    "hstack",
    "where",
]
