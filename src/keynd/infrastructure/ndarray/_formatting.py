"""
Text rendering of arrays.

`format_array` prints a header with the shape followed by the elements in
nested-bracket form. Large arrays are summarized with "..." according to
`PrintOptions`; the options are passed explicitly, never read from global
state.
"""

from __future__ import annotations

import numpy as np

from ...domain._ndarray import INDArray
from ...domain._print_options import PrintOptions

DEFAULT_PRINT_OPTIONS = PrintOptions()


def format_header(shape: tuple[int, ...]) -> str:
    """
    Header line such as "array(2, 3)". 0-d arrays print "array()".
    """
    return "array(" + ", ".join(str(d) for d in shape) + ")"


def format_array(array: INDArray, options: PrintOptions = DEFAULT_PRINT_OPTIONS) -> str:
    """
    Render `array` as text.

    Parameters
    ----------
    array : INDArray
        Array to render.
    options : PrintOptions, optional
        Summarization threshold, edge items and float precision.

    Returns
    -------
    str
        Header line, newline, then the bracketed elements.
    """
    body = np.array2string(
        array.to_numpy(),
        threshold=options.threshold,
        edgeitems=options.edgeitems,
        precision=options.precision,
        separator=" ",
    )
    return f"{format_header(array.shape)}\n{body}"
