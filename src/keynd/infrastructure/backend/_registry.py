"""
Active backend selection.

The NDArray layer resolves its backend through `get_backend()`. The NumPy
backend is active by default; `set_backend` swaps in any object satisfying
`IArrayBackend` (for example a test double).
"""

from __future__ import annotations

import logging
import threading

from ...domain._backend import IArrayBackend
from ._numpy_backend import NumpyBackend

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_active: IArrayBackend = NumpyBackend()


def get_backend() -> IArrayBackend:
    """Return the active compute backend."""
    return _active


def set_backend(backend: IArrayBackend) -> IArrayBackend:
    """
    Install `backend` as the active compute backend.

    Parameters
    ----------
    backend : IArrayBackend
        Object implementing the backend contract.

    Returns
    -------
    IArrayBackend
        The previously active backend, so callers can restore it.

    Raises
    ------
    TypeError
        If `backend` does not satisfy `IArrayBackend`.
    """
    global _active
    if not isinstance(backend, IArrayBackend):
        raise TypeError(
            f"{type(backend).__name__} does not implement the IArrayBackend contract"
        )
    with _lock:
        previous, _active = _active, backend
    logger.debug("Switched array backend from %s to %s", previous.name, backend.name)
    return previous
