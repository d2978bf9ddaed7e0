"""
Flat (C-order) element access over an array of any shape.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterator

from ...domain._errors import ArrayIndexError

if TYPE_CHECKING:
    from ._ndarray import NDArray


class FlatIterator:
    """
    Sequence view over the logical elements of an array in C order.

    Reads and writes go through the array's storage, so writes are visible
    to every view sharing it. Negative positions count from the end.

    Parameters
    ----------
    array : NDArray
        Array to traverse. It may be a non-contiguous view.
    """

    def __init__(self, array: "NDArray") -> None:
        self.array = array

    def __len__(self) -> int:
        return self.array.size

    def __iter__(self) -> Iterator[Any]:
        for i in range(self.array.size):
            yield self.array.get_at(i)

    def _check_key(self, key: Any) -> int:
        if isinstance(key, bool) or not isinstance(key, int):
            raise ArrayIndexError(
                f"flat indices must be integers, got {type(key).__name__}"
            )
        return key

    def __getitem__(self, key: int) -> Any:
        return self.array.get_at(self._check_key(key))

    def __setitem__(self, key: int, value: Any) -> None:
        self.array.set_at(self._check_key(key), value)

    def to_list(self) -> list[Any]:
        """All elements as a flat Python list."""
        return self.array.to_numpy().reshape(-1).tolist()
