"""
Slice specifications and index selectors.

This module defines:

- `Slice`: a `start:stop:step` value object with NumPy-compatible parsing and
  resolution against a concrete dimension size,
- `ResolvedSlice`: the concrete `(start, stop, step, shape)` produced by
  resolution,
- selector variants (`IndexSelector`, `RangeSelector`, `EllipsisSelector`)
  forming the tagged union consumed by the slicing engine, and
- `to_selector` / `parse_selectors`, the single conversion point from user
  input to selectors.

Slice bounds are clamped into the dimension, never rejected. Negative steps
are not supported and raise `ArrayIndexError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from typing_extensions import TypeAlias

from ._errors import ArrayIndexError


@dataclass(frozen=True)
class ResolvedSlice:
    """
    A slice resolved against a dimension.

    Attributes
    ----------
    start : int
        First selected index, clamped into [0, dim_size].
    stop : int
        Exclusive end, clamped into [0, dim_size]. Equal to `start` when the
        selection is empty.
    step : int
        Positive step.
    shape : int
        Number of selected elements.
    """

    start: int
    stop: int
    step: int
    shape: int


@dataclass(frozen=True)
class Slice:
    """
    Value object representing `start:stop:step`.

    Parameters
    ----------
    start : Optional[int]
        First index, or None for "from the beginning".
    stop : Optional[int]
        Exclusive end, or None for "to the end".
    step : int, optional
        Positive step. Defaults to 1.

    Raises
    ------
    ArrayIndexError
        If `step` is zero or negative.
    """

    start: Optional[int] = None
    stop: Optional[int] = None
    step: int = 1

    def __post_init__(self) -> None:
        if self.step == 0:
            raise ArrayIndexError("Slice step cannot be zero")
        if self.step < 0:
            raise ArrayIndexError("Negative slice steps are not yet supported")

    @classmethod
    def parse(cls, spec: str) -> "Slice":
        """
        Parse textual slice syntax.

        Formats
        -------
        ":"      -> start=None, stop=None, step=1
        "i:j"    -> start=i, stop=j, step=1
        "i:j:k"  -> start=i, stop=j, step=k
        "::k"    -> start=None, stop=None, step=k

        Parameters
        ----------
        spec : str
            Slice text. Whitespace around components is ignored.

        Returns
        -------
        Slice
            The parsed slice.

        Raises
        ------
        ArrayIndexError
            On more than two colons, a non-integer component, or an invalid
            step.
        """
        parts = spec.split(":")
        if len(parts) > 3:
            raise ArrayIndexError(f"Invalid slice syntax '{spec}': too many colons")

        def _component(text: str) -> Optional[int]:
            text = text.strip()
            if text == "":
                return None
            try:
                return int(text)
            except ValueError as e:
                raise ArrayIndexError(
                    f"Invalid slice component '{text}' in '{spec}'"
                ) from e

        start = _component(parts[0])
        stop = _component(parts[1]) if len(parts) > 1 else None
        step = _component(parts[2]) if len(parts) > 2 else None

        return cls(start, stop, 1 if step is None else step)

    @classmethod
    def from_builtin(cls, value: slice) -> "Slice":
        """
        Convert a Python `slice` object.
        """
        return cls(value.start, value.stop, 1 if value.step is None else value.step)

    def resolve(self, dim_size: int) -> ResolvedSlice:
        """
        Resolve the slice against a dimension of size `dim_size`.

        Negative bounds count from the end. Bounds are clamped into
        [0, dim_size], so out-of-range slices yield a smaller or empty
        selection instead of an error.

        Returns
        -------
        ResolvedSlice
            Concrete start, stop, step, and number of selected elements.
        """
        step = self.step
        start = 0 if self.start is None else self.start
        stop = dim_size if self.stop is None else self.stop

        if start < 0:
            start += dim_size
        if stop < 0:
            stop += dim_size

        start = max(0, min(dim_size, start))
        stop = max(0, min(dim_size, stop))

        if start >= stop:
            return ResolvedSlice(start, start, step, 0)

        return ResolvedSlice(start, stop, step, -(-(stop - start) // step))

    def __str__(self) -> str:
        start = "" if self.start is None else str(self.start)
        stop = "" if self.stop is None else str(self.stop)
        return f"{start}:{stop}" if self.step == 1 else f"{start}:{stop}:{self.step}"


@dataclass(frozen=True)
class IndexSelector:
    """Select a single position and drop the dimension."""

    index: int


@dataclass(frozen=True)
class RangeSelector:
    """Select a range and keep the dimension."""

    slice: Slice


@dataclass(frozen=True)
class EllipsisSelector:
    """Expand to as many full ranges as needed."""


Selector: TypeAlias = Union[IndexSelector, RangeSelector, EllipsisSelector]

_ELLIPSIS_TOKENS = ("...", "…")


def to_selector(value: Any) -> Selector:
    """
    Convert one user-facing selector to its tagged form.

    Accepted inputs
    ---------------
    - an existing selector (returned unchanged),
    - an int (or object implementing `__index__`) -> `IndexSelector`,
    - a `Slice`, a Python `slice`, or text containing ':' -> `RangeSelector`,
    - `Ellipsis` or the text "..." -> `EllipsisSelector`,
    - integer text such as "3" -> `IndexSelector`.

    Raises
    ------
    ArrayIndexError
        For any other input.
    """
    if isinstance(value, (IndexSelector, RangeSelector, EllipsisSelector)):
        return value
    if value is Ellipsis:
        return EllipsisSelector()
    if isinstance(value, Slice):
        return RangeSelector(value)
    if isinstance(value, slice):
        return RangeSelector(Slice.from_builtin(value))
    if isinstance(value, str):
        text = value.strip()
        if text in _ELLIPSIS_TOKENS:
            return EllipsisSelector()
        if ":" in text:
            return RangeSelector(Slice.parse(text))
        try:
            return IndexSelector(int(text))
        except ValueError as e:
            raise ArrayIndexError(f"Invalid slice selector: '{text}'") from e
    if isinstance(value, bool):
        raise ArrayIndexError("Boolean values are not valid selectors")
    if hasattr(value, "__index__"):
        return IndexSelector(int(value.__index__()))

    raise ArrayIndexError(f"Invalid selector type: {type(value).__name__}")


def parse_selectors(text: str) -> tuple[Selector, ...]:
    """
    Parse a comma separated selector string such as "0:2, 1" or "..., 1:3".
    """
    return tuple(to_selector(part) for part in text.split(","))
