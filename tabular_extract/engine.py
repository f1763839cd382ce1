"""
Extraction engine for tabular-extract.

Works purely on a ``LogicalGrid``; it performs no I/O and behaves the
same for every source. Two sub-procedures:

Fixed-cell extraction:
  Each configured address (``D3``...) is split into column letters and
  row number. A row that does not exist yields ``ROW_MISSING`` for that
  address instead of failing the whole extraction.

Ranged extraction:
  Starting at the layout's start row, every row's column window is
  normalized. Extraction stops *before* the first row that is absent or
  effectively blank, and nothing after it is included, even if later
  rows hold data.

Source-specific policy (selected by ``grid.kind``):
  - delimited: text is trimmed; a column past the record's physical
    length is ``OUT_OF_BOUNDS``; empty strings and out-of-bounds count
    as blank.
  - spreadsheet: text is verbatim; only absent and ``Blank`` cells count
    as blank.
"""

from __future__ import annotations

import logging

from tabular_extract.addressing import column_index, column_letter, split_address
from tabular_extract.cells import Cell, LogicalGrid, Row, Text
from tabular_extract.layout_registry import ExtractionLayout, default_layout
from tabular_extract.normalize import (
    BLANK,
    BLANK_OR_NULL,
    OUT_OF_BOUNDS,
    ROW_MISSING,
    normalize_cell,
)
from tabular_extract.result import ExtractionResult

logger = logging.getLogger(__name__)

_SPREADSHEET_BLANKS = frozenset({BLANK_OR_NULL, BLANK})
_DELIMITED_BLANKS = frozenset({BLANK_OR_NULL, BLANK, OUT_OF_BOUNDS, ""})


def _render(cell: Cell | None, grid: LogicalGrid) -> str:
    if grid.kind == "delimited" and isinstance(cell, Text):
        return cell.value.strip()
    return normalize_cell(cell)


def _render_window(row: Row, columns: range, grid: LogicalGrid) -> list[str]:
    values = []
    for col in columns:
        if grid.kind == "delimited" and col >= len(row):
            values.append(OUT_OF_BOUNDS)
        else:
            values.append(_render(grid.cell(row, col), grid))
    return values


def is_blank_row(values: list[str], grid: LogicalGrid) -> bool:
    """True if every normalized value in the window is blank-equivalent."""
    blanks = _DELIMITED_BLANKS if grid.kind == "delimited" else _SPREADSHEET_BLANKS
    return all(v in blanks for v in values)


def extract_fixed_cells(grid: LogicalGrid, addresses: list[str]) -> dict[str, str]:
    """Read single-cell addresses such as ``["D3", "D4"]``.

    Raises:
        ValueError: If an address is malformed (programming error).
    """
    values: dict[str, str] = {}
    for address in addresses:
        letters, row_number = split_address(address)
        row_index = row_number - 1
        col = column_index(letters)

        row = grid.row(row_index)
        if row is None:
            logger.debug("%s: row %d is missing", address, row_number)
            values[address] = ROW_MISSING
        else:
            values[address] = _render(grid.cell(row, col), grid)
    return values


def extract_data_block(
    grid: LogicalGrid,
    start_index: int,
    columns: range,
    result: ExtractionResult,
) -> None:
    """Fill ``result.rows`` with the data block, stopping at the first gap.

    Args:
        grid: The logical grid to scan.
        start_index: 0-based index of the first data row.
        columns: 0-based column indices of the window, in order.
        result: Receives ``rows``, ``row_numbers``, ``stop_reason`` and
            ``stopped_at``.
    """
    r = start_index
    while r < len(grid):
        row = grid.rows[r]
        if row is None:
            logger.info("Reached missing row at %d, stopping data extraction", r + 1)
            result.stop_reason = "missing_row"
            result.stopped_at = r + 1
            return

        values = _render_window(row, columns, grid)
        if is_blank_row(values, grid):
            logger.info(
                "All cells in the window of row %d are blank, stopping data extraction",
                r + 1,
            )
            result.stop_reason = "blank_row"
            result.stopped_at = r + 1
            return

        logger.debug("Row %d: %s", r + 1, values)
        result.rows.append(values)
        result.row_numbers.append(r + 1)
        r += 1

    result.stop_reason = "end_of_data"
    result.stopped_at = r + 1


def extract(
    grid: LogicalGrid,
    layout: ExtractionLayout | None = None,
    source_name: str = "",
) -> ExtractionResult:
    """Run fixed-cell and ranged extraction over *grid*.

    Args:
        grid: Logical grid from any source adapter.
        layout: Which cells and block to read. Defaults to the built-in
            ``default`` layout.
        source_name: Declared filename, recorded on the result.

    Returns:
        A fresh ``ExtractionResult``.
    """
    layout = layout or default_layout()
    block = layout.data_block
    columns = block.columns

    result = ExtractionResult(
        columns=[column_letter(c) for c in columns],
        source_name=source_name,
        source_kind=grid.kind,
    )
    result.fixed_cells = extract_fixed_cells(grid, layout.fixed_cells)
    extract_data_block(grid, block.start_index, columns, result)

    logger.info(
        "Extracted %d fixed cells and %d data rows from %s (stop: %s at row %s)",
        len(result.fixed_cells), len(result.rows), source_name or "<grid>",
        result.stop_reason, result.stopped_at,
    )
    return result
