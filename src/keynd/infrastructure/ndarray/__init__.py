from ._flat_iterator import FlatIterator
from ._formatting import DEFAULT_PRINT_OPTIONS, format_array, format_header
from ._ndarray import NDArray

__all__ = [
    NDArray.__name__,
    FlatIterator.__name__,
    format_array.__name__,
    format_header.__name__,
    "DEFAULT_PRINT_OPTIONS",
]
