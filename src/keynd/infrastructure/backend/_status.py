"""
Status reporting for backend calls.

Backend methods never let exceptions cross the contract boundary. The
`guarded` decorator runs a kernel, converts any exception into a
`StatusCode`, stores its message in a thread-local slot readable through
`last_error()`, and returns a failed `BackendResult`.

Exception classification
------------------------
1. KeyND errors carry their own status.
2. Built-in exception types map directly (`MemoryError` -> ALLOC,
   `ArithmeticError` -> MATH, `IndexError` -> INDEX, `TypeError` -> DTYPE).
3. Everything else is classified by keywords in its message, falling back to
   PANIC for unexpected failures.
"""

from __future__ import annotations

from functools import wraps
import logging
import threading
from typing import Any, Callable, Optional, TypeVar

from ...domain._backend import BackendResult
from ...domain._errors import NDArrayError, StatusCode

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., BackendResult])

_state = threading.local()

_KEYWORDS: tuple[tuple[StatusCode, tuple[str, ...]], ...] = (
    (
        StatusCode.SHAPE,
        (
            "broadcast",
            "incompatible shape",
            "shape mismatch",
            "dimension mismatch",
            "not aligned",
            "mismatch in its core dimension",
            "cannot reshape",
            "axis",
            "empty axis",
            "zero-size array",
            "pad",
        ),
    ),
    (StatusCode.INDEX, ("out of bounds", "out of range", "index")),
    (StatusCode.MATH, ("overflow", "division by zero", "divide by zero", "invalid value")),
    (StatusCode.DTYPE, ("cannot cast", "dtype", "not supported for the input types")),
    (StatusCode.ALLOC, ("unable to allocate", "out of memory")),
    (StatusCode.GENERIC, ("unsupported",)),
)


def classify_exception(exc: BaseException) -> StatusCode:
    """
    Map an exception raised inside a kernel to a status code.

    Parameters
    ----------
    exc : BaseException
        The exception to classify.

    Returns
    -------
    StatusCode
        Never `StatusCode.SUCCESS`.
    """
    if isinstance(exc, NDArrayError):
        return exc.status
    if isinstance(exc, MemoryError):
        return StatusCode.ALLOC
    if isinstance(exc, ArithmeticError):
        return StatusCode.MATH
    if isinstance(exc, IndexError):
        return StatusCode.INDEX
    if isinstance(exc, TypeError):
        return StatusCode.DTYPE

    message = str(exc).lower()
    for status, keywords in _KEYWORDS:
        if any(k in message for k in keywords):
            return status
    return StatusCode.PANIC


def set_last_error(message: Optional[str]) -> None:
    """Store the calling thread's last error message."""
    _state.message = message


def last_error() -> Optional[str]:
    """
    Message of the calling thread's most recent failed backend call.
    """
    return getattr(_state, "message", None)


def failure(status: StatusCode, message: str) -> BackendResult:
    """
    Build a failed result and record its message.
    """
    set_last_error(message)
    logger.debug("Backend call failed: status=%s message=%s", status.name, message)
    return BackendResult(status=status, message=message)


def guarded(fn: F) -> F:
    """
    Decorate a backend method so that it reports failures as status codes.

    The wrapped method returns the kernel's `BackendResult` on success. Any
    exception becomes a failed result whose status comes from
    `classify_exception`.
    """

    @wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> BackendResult:
        try:
            return fn(*args, **kwargs)
        except Exception as e:
            status = classify_exception(e)
            message = str(e) or type(e).__name__
            return failure(status, f"{fn.__name__}: {message}")

    return wrapper  # type: ignore[return-value]
