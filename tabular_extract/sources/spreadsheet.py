"""
Spreadsheet source adapters (``.xlsx`` via openpyxl, ``.xls`` via xlrd).

Only the first worksheet is read. Both adapters map the library's cell
representation onto ``tabular_extract.cells`` and release every
workbook they opened in a ``finally`` block, including when loading
fails partway.

xlsx specifics:
  openpyxl exposes either the cached formula results (``data_only=True``)
  or the formula text, never both, so the file bytes are loaded twice:
  once for values and once to learn which cells hold formulas. A cell
  with no value is *absent* unless it carries a style, in which case it
  is ``Blank``. A row whose cells are all absent is an absent row.

xls specifics:
  xlrd only ever exposes cached formula results. Rows with zero physical
  length are absent; ``XL_CELL_EMPTY`` is absent and ``XL_CELL_BLANK``
  (formatting-only cells) is ``Blank``. Dates are converted using the
  workbook's date mode.
"""

from __future__ import annotations

import io
import logging
import zipfile
from datetime import date, datetime, time, timedelta
from typing import Any, BinaryIO

import xlrd
from xlrd.compdoc import CompDocError
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from tabular_extract.cells import (
    Blank,
    Boolean,
    Cell,
    DateTime,
    Error,
    Formula,
    LogicalGrid,
    Number,
    Row,
    Text,
    Unknown,
)
from tabular_extract.exceptions import SourceReadError
from tabular_extract.sources.base import BaseSource

logger = logging.getLogger(__name__)


def _read_bytes(stream: BinaryIO, filename: str) -> bytes:
    try:
        return stream.read()
    except OSError as e:
        raise SourceReadError(f"Could not read {filename}: {e}") from e


def _trim_row(cells: Row) -> Row | None:
    """Drop trailing absent cells; an all-absent row is itself absent."""
    end = len(cells)
    while end and cells[end - 1] is None:
        end -= 1
    return cells[:end] if end else None


# ---------------------------------------------------------------------------
# xlsx (openpyxl)
# ---------------------------------------------------------------------------

def _value_to_cell(value: Any, data_type: str) -> Cell:
    """Map one openpyxl value (from a ``data_only`` workbook) to a Cell."""
    if data_type == "e":
        return Error(str(value))
    # bool before int/float: bool is an int subclass
    if isinstance(value, bool):
        return Boolean(value)
    if isinstance(value, (datetime, date, time, timedelta)):
        return DateTime(value)
    if isinstance(value, (int, float)):
        return Number(float(value))
    if isinstance(value, str):
        return Text(value)
    return Unknown()


def _xlsx_cell(value_cell: Any, formula_cell: Any) -> Cell | None:
    value = value_cell.value
    if formula_cell is not None and formula_cell.data_type == "f":
        # ArrayFormula / DataTableFormula objects carry the text in .text
        text = getattr(formula_cell.value, "text", formula_cell.value)
        if value is not None:
            cached = _value_to_cell(value, value_cell.data_type)
        elif value_cell.data_type == "str":
            # String result cached as an empty <v>
            cached = Text("")
        else:
            cached = None
        return Formula(text=str(text), cached=cached)
    if value is None:
        return Blank() if value_cell.has_style else None
    return _value_to_cell(value, value_cell.data_type)


class XlsxSource(BaseSource):
    """Adapter for ``.xlsx`` workbooks (Office Open XML)."""

    suffixes = (".xlsx",)

    def read(self, stream: BinaryIO, filename: str) -> LogicalGrid:
        logger.info("Reading xlsx workbook: %s", filename)
        data = _read_bytes(stream, filename)

        values_wb = None
        formulas_wb = None
        try:
            # Malformed XML parts: ElementTree.ParseError and lxml.etree.XMLSyntaxError
            # both derive from SyntaxError
            try:
                values_wb = load_workbook(io.BytesIO(data), data_only=True)
                formulas_wb = load_workbook(io.BytesIO(data), data_only=False)
            except (InvalidFileException, zipfile.BadZipFile, SyntaxError,
                    KeyError, ValueError, OSError) as e:
                raise SourceReadError(f"Could not load workbook {filename}: {e}") from e

            if not values_wb.worksheets:
                return LogicalGrid(rows=[], kind="spreadsheet")

            values_ws = values_wb.worksheets[0]
            formulas_ws = formulas_wb.worksheets[0]
            max_row = values_ws.max_row
            max_col = values_ws.max_column
            logger.debug(
                "First sheet '%s': %d rows x %d columns",
                values_ws.title, max_row, max_col,
            )

            bounds = dict(min_row=1, max_row=max_row, min_col=1, max_col=max_col)
            rows: list[Row | None] = []
            for value_row, formula_row in zip(
                values_ws.iter_rows(**bounds), formulas_ws.iter_rows(**bounds)
            ):
                cells = [_xlsx_cell(v, f) for v, f in zip(value_row, formula_row)]
                rows.append(_trim_row(cells))
        finally:
            if formulas_wb is not None:
                formulas_wb.close()
            if values_wb is not None:
                values_wb.close()

        # Trailing absent rows carry no information
        while rows and rows[-1] is None:
            rows.pop()
        logger.info("Loaded %d rows from %s", len(rows), filename)
        return LogicalGrid(rows=rows, kind="spreadsheet")


# ---------------------------------------------------------------------------
# xls (xlrd)
# ---------------------------------------------------------------------------

def _xls_cell(cell: Any, datemode: int) -> Cell | None:
    ctype = cell.ctype
    if ctype == xlrd.XL_CELL_EMPTY:
        return None
    if ctype == xlrd.XL_CELL_BLANK:
        return Blank()
    if ctype == xlrd.XL_CELL_TEXT:
        return Text(cell.value)
    if ctype == xlrd.XL_CELL_NUMBER:
        return Number(float(cell.value))
    if ctype == xlrd.XL_CELL_DATE:
        try:
            return DateTime(xlrd.xldate.xldate_as_datetime(cell.value, datemode))
        except xlrd.xldate.XLDateError:
            logger.debug("Date value %r out of range, keeping it numeric", cell.value)
            return Number(float(cell.value))
    if ctype == xlrd.XL_CELL_BOOLEAN:
        return Boolean(bool(cell.value))
    if ctype == xlrd.XL_CELL_ERROR:
        return Error(xlrd.error_text_from_code.get(cell.value, ""))
    return Unknown()


class XlsSource(BaseSource):
    """Adapter for legacy ``.xls`` workbooks (BIFF)."""

    suffixes = (".xls",)

    def read(self, stream: BinaryIO, filename: str) -> LogicalGrid:
        logger.info("Reading xls workbook: %s", filename)
        data = _read_bytes(stream, filename)

        book = None
        try:
            try:
                book = xlrd.open_workbook(
                    file_contents=data, formatting_info=True, on_demand=True
                )
            except (xlrd.XLRDError, CompDocError, OSError, EOFError, AssertionError) as e:
                raise SourceReadError(f"Could not load workbook {filename}: {e}") from e

            if book.nsheets == 0:
                return LogicalGrid(rows=[], kind="spreadsheet")

            sheet = book.sheet_by_index(0)
            logger.debug(
                "First sheet '%s': %d rows x %d columns",
                sheet.name, sheet.nrows, sheet.ncols,
            )
            rows: list[Row | None] = []
            for r in range(sheet.nrows):
                cells = [_xls_cell(sheet.cell(r, c), book.datemode)
                         for c in range(sheet.row_len(r))]
                rows.append(_trim_row(cells))
        finally:
            if book is not None:
                book.release_resources()

        while rows and rows[-1] is None:
            rows.pop()
        logger.info("Loaded %d rows from %s", len(rows), filename)
        return LogicalGrid(rows=rows, kind="spreadsheet")
