"""
Zero-copy slicing.
"""

from __future__ import annotations

from typing import Any

from ....domain._slice import parse_selectors
from ...views._slicing import slice_view


class NDArraySlicingMixin:
    """
    `slice()` for the concrete array class.

    Notes
    -----
    Methods assume the host class provides `_view(meta)` and
    `view_metadata`.
    """

    def slice(self, *selectors: Any) -> Any:
        """
        View of the region selected by `selectors`.

        Each selector may be an int (drops the dimension), a `Slice`, a
        Python `slice`, slice text such as "1:3" or "::2", or an Ellipsis
        ("..."). A single string containing commas is split into several
        selectors, so `a.slice("0:2, 1")` equals `a.slice("0:2", 1)`.

        Returns
        -------
        NDArray
            A view sharing this array's storage. Slicing never copies.

        Raises
        ------
        ArrayIndexError
            On malformed selectors, more than one Ellipsis, too many
            selectors, or an out-of-range integer selector.
        """
        if len(selectors) == 1 and isinstance(selectors[0], str) and "," in selectors[0]:
            selectors = parse_selectors(selectors[0])
        return self._view(slice_view(self.view_metadata, selectors))
