"""
Cell-value normalizer.

Every cell, whatever the source, is rendered to one canonical string.
Downstream consumers treat all values as text, so this is the single
place that absorbs the type-system differences between workbooks and
delimited text.

Rules (in priority order):
1. Absent cell -> ``BLANK_OR_NULL``.
2. Formula -> its cached value, rendered by the rules below.
3. Text -> verbatim (no trimming here; the delimited-text path trims
   before calling in).
4. Date/time -> ``str()`` of the Python value.
5. Integral number -> integer text (``42.0`` -> ``"42"``).
6. Other number -> plain positional decimal, no exponent.
7. Boolean -> ``"true"`` / ``"false"``.
8. Blank -> ``BLANK``.
9. Error -> ``FORMULA_ERROR``.
10. Unknown -> ``UNKNOWN``.
"""

from __future__ import annotations

import numpy as np

from tabular_extract.cells import (
    Blank,
    Boolean,
    Cell,
    DateTime,
    Error,
    Formula,
    Number,
    Text,
    Unknown,
)

# Sentinels -- all distinct from each other
BLANK_OR_NULL = "[BLANK/NULL]"
BLANK = "[BLANK]"
FORMULA_ERROR = "[FORMULA ERROR]"
UNKNOWN = "[UNKNOWN]"
OUT_OF_BOUNDS = "[OUT_OF_BOUNDS]"
ROW_MISSING = "[ROW_MISSING]"

SENTINELS = frozenset(
    {BLANK_OR_NULL, BLANK, FORMULA_ERROR, UNKNOWN, OUT_OF_BOUNDS, ROW_MISSING}
)


def format_number(value: float) -> str:
    """Render a non-date number without a decimal point when integral.

    Non-integral values use the shortest positional form that round-trips
    (``0.1`` -> ``"0.1"``, ``1e-05`` -> ``"0.00001"``).
    """
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return np.format_float_positional(value, trim="-")


def normalize_cell(cell: Cell | None) -> str:
    """Return the canonical string for *cell* (``None`` = absent).

    Raises:
        TypeError: If *cell* is not one of the ``tabular_extract.cells``
            variants.
    """
    if cell is None:
        return BLANK_OR_NULL
    if isinstance(cell, Formula):
        if cell.cached is None or isinstance(cell.cached, Formula):
            return UNKNOWN
        return normalize_cell(cell.cached)
    if isinstance(cell, Text):
        return cell.value
    if isinstance(cell, DateTime):
        return str(cell.value)
    if isinstance(cell, Number):
        return format_number(cell.value)
    if isinstance(cell, Boolean):
        return "true" if cell.value else "false"
    if isinstance(cell, Blank):
        return BLANK
    if isinstance(cell, Error):
        return FORMULA_ERROR
    if isinstance(cell, Unknown):
        return UNKNOWN
    raise TypeError(f"Not a cell: {cell!r}")
