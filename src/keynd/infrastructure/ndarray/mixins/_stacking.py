"""
Joining and splitting arrays.

This module defines `NDArrayStackingMixin`. Joins validate shapes with the
join algebra in `views._join` and let the backend copy the data into a new
root. Splits are pure view derivations: every part shares the source
storage.
"""

from __future__ import annotations

from typing import Any, Sequence, Union

from ....domain._errors import ShapeError
from ...views._indexing import normalize_axis
from ...views._join import concatenate_shape, split_views, stack_shape


def _checked(arrays: Sequence[Any], what: str) -> list[Any]:
    arrays = list(arrays)
    if not arrays:
        raise ShapeError(f"{what} requires at least one array")
    return arrays


class NDArrayStackingMixin:
    """
    Join and split operations for the concrete array class.

    Notes
    -----
    Join functions are staticmethods; they build results through the class
    of the first input (`arrays[0].__class__`).
    """

    @staticmethod
    def concatenate(arrays: Sequence[Any], axis: int = 0) -> Any:
        """
        Join arrays along an existing axis.

        The result dtype is the promotion of all input dtypes.

        Raises
        ------
        ShapeError
            If no arrays are given, ndims differ, non-axis dimensions differ,
            or `axis` is out of range.
        """
        arrays = _checked(arrays, "concatenate")
        concatenate_shape([a.shape for a in arrays], axis)
        ax = normalize_axis(axis, arrays[0].ndim)
        first = arrays[0]
        return first._from_result(
            first._backend().concatenate([a._operand() for a in arrays], ax)
        )

    @staticmethod
    def stack(arrays: Sequence[Any], axis: int = 0) -> Any:
        """
        Join equally shaped arrays along a new axis.

        Raises
        ------
        ShapeError
            If no arrays are given, shapes differ, or `axis` is outside
            `[-ndim-1, ndim]`.
        """
        arrays = _checked(arrays, "stack")
        stack_shape([a.shape for a in arrays], axis)
        ax = normalize_axis(axis, arrays[0].ndim, inclusive=True)
        first = arrays[0]
        return first._from_result(
            first._backend().stack([a._operand() for a in arrays], ax)
        )

    @staticmethod
    def vstack(arrays: Sequence[Any]) -> Any:
        """Concatenate along axis 0."""
        return NDArrayStackingMixin.concatenate(arrays, 0)

    @staticmethod
    def hstack(arrays: Sequence[Any]) -> Any:
        """
        Concatenate along axis 1 (axis 0 when the inputs are 1-D).
        """
        arrays = _checked(arrays, "hstack")
        axis = 0 if arrays[0].ndim == 1 else 1
        return NDArrayStackingMixin.concatenate(arrays, axis)

    def split(
        self, indices_or_sections: Union[int, Sequence[int]], axis: int = 0
    ) -> list[Any]:
        """
        Split into views along `axis`.

        Parameters
        ----------
        indices_or_sections : int | Sequence[int]
            Number of equal sections, or ascending split points.
        axis : int, optional
            Axis to split. Defaults to 0.

        Returns
        -------
        list[NDArray]
            Views sharing this array's storage.

        Raises
        ------
        ShapeError
            If the axis length is not divisible by the section count, or the
            split points are not ascending within the axis.
        """
        return [
            self._view(meta)
            for meta in split_views(self.view_metadata, indices_or_sections, axis)
        ]

    def vsplit(self, indices_or_sections: Union[int, Sequence[int]]) -> list[Any]:
        """Split along axis 0."""
        return self.split(indices_or_sections, 0)

    def hsplit(self, indices_or_sections: Union[int, Sequence[int]]) -> list[Any]:
        """Split along axis 1."""
        return self.split(indices_or_sections, 1)
