"""
Compute backend contract for KeyND.

The view layer never touches buffer contents. Numeric work (elementwise
math, reductions, gathers/scatters, joins, padding, linear algebra) is
delegated to an object satisfying `IArrayBackend`, which receives fully
resolved `(buffer, ViewMetadata, DType)` descriptors and reports a
`BackendResult`.

Design notes
------------
- Operations are grouped by category and keyed by enums (`UnaryOp`,
  `BinaryOp`, `ReductionOp`). Implementations dispatch through tables keyed
  by these enums rather than building kernel names from strings.
- Backend calls never raise. Failures are reported through
  `BackendResult.status`, and the matching message is available from
  `last_error()`. Callers convert a failed result into an exception with
  `BackendResult.unwrap()`.
- Buffers are opaque to the domain layer. The reference backend uses flat
  NumPy arrays.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from ._dtype import DType
from ._errors import StatusCode, raise_for_status
from ._modes import PadMode
from ._view import ViewMetadata


class UnaryOp(Enum):
    """
    Elementwise operations with one operand.

    Float-valued operations (everything from `SQRT` through `SIGMOID`)
    produce Float64, or Float32 when the input is Float32. `LOGICAL_NOT`
    produces Bool. `INVERT` is bitwise NOT for integer and bool inputs and
    rejects floats. The remaining operations preserve the input dtype.
    """

    NEGATIVE = "negative"
    ABS = "abs"
    SIGN = "sign"
    FLOOR = "floor"
    CEIL = "ceil"
    ROUND = "round"
    SQUARE = "square"
    SQRT = "sqrt"
    EXP = "exp"
    LOG = "log"
    LOG2 = "log2"
    LOG10 = "log10"
    LOG1P = "log1p"
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    ASIN = "asin"
    ACOS = "acos"
    ATAN = "atan"
    SINH = "sinh"
    COSH = "cosh"
    TANH = "tanh"
    SIGMOID = "sigmoid"
    LOGICAL_NOT = "logical_not"
    INVERT = "invert"


class BinaryOp(Enum):
    """
    Elementwise operations with two broadcast operands.

    Comparisons and logical operations produce Bool. `DIVIDE` and `HYPOT`
    produce a float type. Bitwise operations accept integer and bool
    operands only. Everything else uses the promoted dtype of the operands.
    """

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    FLOOR_DIVIDE = "floor_divide"
    REMAINDER = "remainder"
    POWER = "power"
    MINIMUM = "minimum"
    MAXIMUM = "maximum"
    HYPOT = "hypot"
    EQUAL = "equal"
    NOT_EQUAL = "not_equal"
    GREATER = "greater"
    GREATER_EQUAL = "greater_equal"
    LESS = "less"
    LESS_EQUAL = "less_equal"
    LOGICAL_AND = "logical_and"
    LOGICAL_OR = "logical_or"
    LOGICAL_XOR = "logical_xor"
    BITWISE_AND = "bitwise_and"
    BITWISE_OR = "bitwise_or"
    BITWISE_XOR = "bitwise_xor"


class ReductionOp(Enum):
    """
    Reductions over the whole array or along one axis.
    """

    SUM = "sum"
    PROD = "prod"
    MEAN = "mean"
    MIN = "min"
    MAX = "max"
    VAR = "var"
    STD = "std"
    ARGMIN = "argmin"
    ARGMAX = "argmax"


@dataclass(frozen=True)
class BackendResult:
    """
    Outcome of a backend call.

    Attributes
    ----------
    status : StatusCode
        `StatusCode.SUCCESS` or the failure category.
    buffer : Any
        Newly allocated, C-contiguous flat buffer for array results, or
        None.
    dtype : Optional[DType]
        Element type of `buffer` or `value`.
    shape : tuple[int, ...]
        Logical shape of `buffer`.
    value : Any
        Python scalar for scalar results (element reads, full reductions).
    message : Optional[str]
        Error message for failed calls.
    """

    status: StatusCode
    buffer: Any = None
    dtype: Optional[DType] = None
    shape: tuple[int, ...] = ()
    value: Any = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        """Whether the call succeeded."""
        return self.status == StatusCode.SUCCESS

    def unwrap(self) -> "BackendResult":
        """
        Return `self` on success, otherwise raise the mapped exception.

        Raises
        ------
        NDArrayError
            Subclass selected by `raise_for_status`.
        """
        raise_for_status(self.status, self.message)
        return self


@runtime_checkable
class IArrayBackend(Protocol):
    """
    Duck-typed compute backend contract.

    Every method accepts raw buffers together with the view descriptor that
    says how to read them, and returns a `BackendResult`. Array results are
    always fresh, C-contiguous buffers; inputs are never modified except by
    the explicit write operations (`set_element`, `fill`, `assign`).

    Notes
    -----
    Index lists handed to gather/scatter operations are already normalized
    and bounds-checked by the caller.
    """

    name: str

    def allocate(
        self, shape: Sequence[int], dtype: DType, fill: Any = None
    ) -> BackendResult: ...

    def from_values(
        self, values: Any, shape: Sequence[int], dtype: DType
    ) -> BackendResult: ...

    def arange(
        self, start: float, stop: float, step: float, dtype: DType
    ) -> BackendResult: ...

    def linspace(
        self, start: float, stop: float, num: int, endpoint: bool, dtype: DType
    ) -> BackendResult: ...

    def eye(self, n: int, m: int, k: int, dtype: DType) -> BackendResult: ...

    def to_numpy(self, buffer: Any, meta: ViewMetadata, dtype: DType) -> Any: ...

    def last_error(self) -> Optional[str]: ...

    # element access
    def get_element(self, buffer: Any, flat_offset: int, dtype: DType) -> BackendResult: ...
    def set_element(
        self, buffer: Any, flat_offset: int, value: Any, dtype: DType
    ) -> BackendResult: ...

    # elementwise
    def unary(
        self, op: UnaryOp, buffer: Any, meta: ViewMetadata, dtype: DType
    ) -> BackendResult: ...

    def binary(
        self,
        op: BinaryOp,
        buffer_a: Any,
        meta_a: ViewMetadata,
        dtype_a: DType,
        buffer_b: Any,
        meta_b: ViewMetadata,
        dtype_b: DType,
    ) -> BackendResult: ...

    def reduce(
        self,
        op: ReductionOp,
        buffer: Any,
        meta: ViewMetadata,
        dtype: DType,
        axis: Optional[int] = None,
        keepdims: bool = False,
        ddof: int = 0,
    ) -> BackendResult: ...

    # structural
    def compact(self, buffer: Any, meta: ViewMetadata, dtype: DType) -> BackendResult: ...
    def ravel_f(self, buffer: Any, meta: ViewMetadata, dtype: DType) -> BackendResult: ...
    def astype(
        self, buffer: Any, meta: ViewMetadata, dtype: DType, target: DType
    ) -> BackendResult: ...
    def fill(
        self, buffer: Any, meta: ViewMetadata, dtype: DType, value: Any
    ) -> BackendResult: ...
    def assign(
        self,
        buffer: Any,
        meta: ViewMetadata,
        dtype: DType,
        src_buffer: Any,
        src_meta: ViewMetadata,
        src_dtype: DType,
    ) -> BackendResult: ...
    def clip(
        self,
        buffer: Any,
        meta: ViewMetadata,
        dtype: DType,
        lo: Optional[float],
        hi: Optional[float],
    ) -> BackendResult: ...
    def cumulative(
        self,
        op: ReductionOp,
        buffer: Any,
        meta: ViewMetadata,
        dtype: DType,
        axis: Optional[int] = None,
    ) -> BackendResult: ...
    def softmax(
        self, buffer: Any, meta: ViewMetadata, dtype: DType, axis: int
    ) -> BackendResult: ...
    def bincount(
        self, buffer: Any, meta: ViewMetadata, dtype: DType, minlength: int
    ) -> BackendResult: ...

    # gather / scatter
    def take_flat(
        self, buffer: Any, meta: ViewMetadata, dtype: DType, indices: Sequence[int]
    ) -> BackendResult: ...
    def take_axis(
        self,
        buffer: Any,
        meta: ViewMetadata,
        dtype: DType,
        indices: Sequence[int],
        axis: int,
    ) -> BackendResult: ...
    def take_along_axis(
        self,
        buffer: Any,
        meta: ViewMetadata,
        dtype: DType,
        idx_buffer: Any,
        idx_meta: ViewMetadata,
        axis: int,
    ) -> BackendResult: ...
    def put_flat(
        self,
        buffer: Any,
        meta: ViewMetadata,
        dtype: DType,
        indices: Sequence[int],
        values: Any,
    ) -> BackendResult: ...
    def put_along_axis(
        self,
        buffer: Any,
        meta: ViewMetadata,
        dtype: DType,
        idx_buffer: Any,
        idx_meta: ViewMetadata,
        values: Any,
        axis: int,
    ) -> BackendResult: ...
    def scatter_add_flat(
        self,
        buffer: Any,
        meta: ViewMetadata,
        dtype: DType,
        indices: Sequence[int],
        updates: Any,
    ) -> BackendResult: ...
    def where(
        self,
        cond: tuple[Any, ViewMetadata, DType],
        x: tuple[Any, ViewMetadata, DType],
        y: tuple[Any, ViewMetadata, DType],
    ) -> BackendResult: ...

    # joins and shape kernels
    def concatenate(
        self, parts: Sequence[tuple[Any, ViewMetadata, DType]], axis: int
    ) -> BackendResult: ...
    def stack(
        self, parts: Sequence[tuple[Any, ViewMetadata, DType]], axis: int
    ) -> BackendResult: ...
    def pad(
        self,
        buffer: Any,
        meta: ViewMetadata,
        dtype: DType,
        pad_width: Sequence[tuple[int, int]],
        mode: PadMode,
        constants: Sequence[float],
    ) -> BackendResult: ...
    def tile(
        self, buffer: Any, meta: ViewMetadata, dtype: DType, reps: Sequence[int]
    ) -> BackendResult: ...
    def repeat(
        self,
        buffer: Any,
        meta: ViewMetadata,
        dtype: DType,
        repeats: Sequence[int],
        axis: Optional[int],
    ) -> BackendResult: ...

    # linear algebra
    def dot(
        self,
        buffer_a: Any,
        meta_a: ViewMetadata,
        dtype_a: DType,
        buffer_b: Any,
        meta_b: ViewMetadata,
        dtype_b: DType,
    ) -> BackendResult: ...
    def matmul(
        self,
        buffer_a: Any,
        meta_a: ViewMetadata,
        dtype_a: DType,
        buffer_b: Any,
        meta_b: ViewMetadata,
        dtype_b: DType,
    ) -> BackendResult: ...
