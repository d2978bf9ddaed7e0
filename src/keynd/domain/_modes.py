"""
Enumerations for padding modes and memory orders.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Any

from ._errors import ShapeError


class PadMode(IntEnum):
    """
    Padding strategy used by `NDArray.pad`.

    Attributes
    ----------
    CONSTANT : PadMode
        Fill the border with constant values.
    SYMMETRIC : PadMode
        Mirror the array including the edge element.
    REFLECT : PadMode
        Mirror the array excluding the edge element.
    EDGE : PadMode
        Repeat the edge element.
    """

    CONSTANT = 0
    SYMMETRIC = 1
    REFLECT = 2
    EDGE = 3

    @staticmethod
    def parse(value: Any) -> "PadMode":
        """
        Coerce a `PadMode`, integer tag, or mode name.

        Raises
        ------
        ShapeError
            If the value does not name a pad mode.
        """
        if isinstance(value, PadMode):
            return value
        if isinstance(value, str):
            try:
                return PadMode[value.upper()]
            except KeyError as e:
                raise ShapeError(f"Unknown pad mode: {value!r}") from e
        try:
            return PadMode(int(value))
        except (TypeError, ValueError) as e:
            raise ShapeError(f"Unknown pad mode: {value!r}") from e


class MemoryOrder(str, Enum):
    """Element traversal order: row-major (C) or column-major (F)."""

    C = "C"
    F = "F"

    @staticmethod
    def parse(value: Any) -> "MemoryOrder":
        """
        Coerce "C"/"F" (case-insensitive) or a `MemoryOrder`.

        Raises
        ------
        ShapeError
            For any other value.
        """
        if isinstance(value, MemoryOrder):
            return value
        if isinstance(value, str) and value.upper() in ("C", "F"):
            return MemoryOrder(value.upper())
        raise ShapeError(f"order must be 'C' or 'F', got {value!r}")
