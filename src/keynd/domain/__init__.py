from ._backend import BackendResult, BinaryOp, IArrayBackend, ReductionOp, UnaryOp
from ._dtype import DType
from ._errors import (
    AllocationError,
    ArrayIndexError,
    DTypeError,
    InternalError,
    MathError,
    NDArrayError,
    ShapeError,
    StatusCode,
    raise_for_status,
)
from ._modes import MemoryOrder, PadMode
from ._ndarray import INDArray
from ._print_options import PrintOptions
from ._slice import (
    EllipsisSelector,
    IndexSelector,
    RangeSelector,
    ResolvedSlice,
    Selector,
    Slice,
    parse_selectors,
    to_selector,
)
from ._view import MAX_NDIM, ViewMetadata, compute_f_strides, compute_strides

__all__ = [
    BackendResult.__name__,
    BinaryOp.__name__,
    IArrayBackend.__name__,
    ReductionOp.__name__,
    UnaryOp.__name__,
    DType.__name__,
    AllocationError.__name__,
    ArrayIndexError.__name__,
    DTypeError.__name__,
    InternalError.__name__,
    MathError.__name__,
    NDArrayError.__name__,
    ShapeError.__name__,
    StatusCode.__name__,
    raise_for_status.__name__,
    MemoryOrder.__name__,
    PadMode.__name__,
    INDArray.__name__,
    PrintOptions.__name__,
    EllipsisSelector.__name__,
    IndexSelector.__name__,
    RangeSelector.__name__,
    ResolvedSlice.__name__,
    "Selector",
    Slice.__name__,
    parse_selectors.__name__,
    to_selector.__name__,
    "MAX_NDIM",
    ViewMetadata.__name__,
    compute_f_strides.__name__,
    compute_strides.__name__,
]
