"""
Formatting options for array string rendering.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PrintOptions:
    """
    Controls how arrays are rendered as text.

    Attributes
    ----------
    threshold : int
        Arrays with more elements than this are summarized with "...".
    edgeitems : int
        Number of leading and trailing items shown per summarized axis.
    precision : int
        Number of significant digits used for floating-point values.

    Notes
    -----
    Options are passed explicitly to the formatter. There is no process-wide
    setting to mutate.
    """

    threshold: int = 1000
    edgeitems: int = 3
    precision: int = 8

    def __post_init__(self) -> None:
        if self.threshold < 0 or self.edgeitems < 1 or self.precision < 0:
            raise ValueError(
                "PrintOptions requires threshold >= 0, edgeitems >= 1 and "
                f"precision >= 0, got {self}"
            )
