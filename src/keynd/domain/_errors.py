"""
Array-related exceptions and backend status codes for KeyND.

This module defines the error taxonomy used across the view layer and the
compute backend. Every error derives from `NDArrayError` and also from the
closest built-in exception, so callers can catch either the KeyND type or the
familiar Python one (e.g. `except IndexError`).

Backend calls never raise across the contract boundary. They report a
`StatusCode` instead, and `raise_for_status` translates a non-success code
into the matching exception on the caller's side.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Optional


class NDArrayError(RuntimeError):
    """
    Base class for all KeyND array errors.

    Attributes
    ----------
    status : StatusCode
        Status code associated with this error kind.
    """

    status: "StatusCode"


class ShapeError(NDArrayError, ValueError):
    """
    Raised when shapes are incompatible.

    Typical causes are an invalid reshape target, shapes that cannot be
    broadcast together, mismatched join/split inputs, an out-of-range axis,
    or a malformed pad specification.
    """


class DTypeError(NDArrayError, TypeError):
    """
    Raised when a dtype is unsupported, unrecognized, or mismatched.
    """


class ArrayIndexError(NDArrayError, IndexError):
    """
    Raised for out-of-bounds indices, malformed slice syntax, or too many
    indices for the array's dimensionality.

    Notes
    -----
    Slice bounds are clamped, never rejected. Only explicit element indices
    (`get`, `set`, `take`, ...) raise this error when out of range.
    """


class AllocationError(NDArrayError, MemoryError):
    """
    Raised when the backend fails to allocate a buffer.
    """


class MathError(NDArrayError, ArithmeticError):
    """
    Raised for domain errors reported by backend kernels
    (e.g. integer division by zero).
    """


class InternalError(NDArrayError):
    """
    Raised for anything not covered by a more specific error, including
    unexpected failures that escaped a backend kernel.
    """


class StatusCode(IntEnum):
    """
    Discriminated status returned by every backend call.

    The integer values are part of the backend contract and must not change.
    """

    SUCCESS = 0
    GENERIC = 1
    SHAPE = 2
    DTYPE = 3
    ALLOC = 4
    PANIC = 5
    INDEX = 6
    MATH = 7


ShapeError.status = StatusCode.SHAPE
DTypeError.status = StatusCode.DTYPE
ArrayIndexError.status = StatusCode.INDEX
AllocationError.status = StatusCode.ALLOC
MathError.status = StatusCode.MATH
InternalError.status = StatusCode.PANIC
NDArrayError.status = StatusCode.GENERIC

_ERROR_BY_STATUS: dict[int, type[NDArrayError]] = {
    StatusCode.SHAPE: ShapeError,
    StatusCode.DTYPE: DTypeError,
    StatusCode.ALLOC: AllocationError,
    StatusCode.INDEX: ArrayIndexError,
    StatusCode.MATH: MathError,
}


def raise_for_status(code: int, message: Optional[str] = None) -> None:
    """
    Translate a backend status code into an exception.

    Parameters
    ----------
    code : int
        Status returned by the backend.
    message : Optional[str], optional
        Human-readable error message retrieved from the backend.

    Raises
    ------
    NDArrayError
        The error class mapped to `code`. GENERIC, PANIC and unknown codes
        map to `InternalError`.
    """
    if code == StatusCode.SUCCESS:
        return

    error_cls = _ERROR_BY_STATUS.get(int(code), InternalError)
    raise error_cls(message or "Unknown error")
