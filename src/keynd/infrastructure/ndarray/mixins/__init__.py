"""
Mixins composing the concrete `NDArray` class.

Each mixin groups one family of operations and relies only on the small
internal surface of the host class (`_backend()`, `_operand()`,
`_from_result(...)`, `_view(...)`, `view_metadata`), never on `NDArray`
itself.
"""

from ._conversion import NDArrayConversionMixin
from ._factories import NDArrayFactoriesMixin
from ._indexing import NDArrayIndexingMixin
from ._linalg import NDArrayLinalgMixin
from ._ops import NDArrayOpsMixin
from ._reductions import NDArrayReductionsMixin
from ._shape_ops import NDArrayShapeOpsMixin
from ._slicing import NDArraySlicingMixin
from ._stacking import NDArrayStackingMixin

__all__ = [
    NDArrayConversionMixin.__name__,
    NDArrayFactoriesMixin.__name__,
    NDArrayIndexingMixin.__name__,
    NDArrayLinalgMixin.__name__,
    NDArrayOpsMixin.__name__,
    NDArrayReductionsMixin.__name__,
    NDArrayShapeOpsMixin.__name__,
    NDArraySlicingMixin.__name__,
    NDArrayStackingMixin.__name__,
]
