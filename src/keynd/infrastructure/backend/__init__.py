from ._numpy_backend import NumpyBackend
from ._registry import get_backend, set_backend
from ._status import classify_exception, guarded, last_error
from ._storage import HostStorage

__all__ = [
    NumpyBackend.__name__,
    get_backend.__name__,
    set_backend.__name__,
    classify_exception.__name__,
    guarded.__name__,
    last_error.__name__,
    HostStorage.__name__,
]
