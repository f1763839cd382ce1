"""
Shared test fixtures for tabular-extract tests.

Workbooks are generated into ``tmp_path`` with openpyxl so no binary
fixtures live in the repository. ``.xls`` behavior is covered with a
fake xlrd book (see tests/unit/test_spreadsheet.py) because no
maintained library writes BIFF files.
"""

from __future__ import annotations

import re
import zipfile
from pathlib import Path

import pytest
from openpyxl import Workbook
from openpyxl.styles import PatternFill

from tabular_extract.cells import LogicalGrid, Text

YELLOW = PatternFill("solid", fgColor="FFFF00")
SHEET1 = "xl/worksheets/sheet1.xml"

# A typical report as CSV: header values in column D rows 3-6, data
# block from row 10 in columns B-I, terminated by a blank row.
REPORT_CSV = '''\
Report,,,,
,,,,
Plant,,,North,
Date,,,2024-01-02,
Operator,,,  Kim  ,
Shift,,,2,
,,,,
,,,,
No,Item,Qty,Unit,Price,Remarks,,,
1,Bolt,10,ea,0.5,,,,
2,"Nut, hex",20,ea,0.25,"say ""hi""",,,
,,,,,,,,
3,Washer,30,ea,0.1,,,,
'''


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (runs the full file pipeline)",
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def text_grid(records: list[list[str]]) -> LogicalGrid:
    """A delimited-kind grid built from plain string records."""
    return LogicalGrid(
        rows=[[Text(v) for v in record] for record in records],
        kind="delimited",
    )


def read_sheet_xml(path: Path) -> str:
    with zipfile.ZipFile(path) as zf:
        return zf.read(SHEET1).decode("utf-8")


def replace_sheet_xml(path: Path, sheet: str) -> None:
    """Rewrite the archive at *path* with new sheet1 XML."""
    with zipfile.ZipFile(path) as zf:
        contents = {name: zf.read(name) for name in zf.namelist()}
    contents[SHEET1] = sheet.encode("utf-8")

    with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, data in contents.items():
            zf.writestr(name, data)


def inject_cached_value(
    path: Path, formula: str, cached: str, cell_type: str | None = None
) -> None:
    """Give a formula cell in sheet1 a cached result.

    openpyxl never evaluates formulas, so it writes them with an empty
    ``<v>``. This patches the saved archive the way Excel would leave it.
    ``cell_type`` sets the cell's ``t`` attribute (``"str"`` for string
    formula results).
    """
    sheet = read_sheet_xml(path)
    pattern = re.compile(
        r'(<c r="[A-Z]+\d+")([^>]*>)(<f>' + re.escape(formula)
        + r"</f>)(?:<v\s*/>|<v>[^<]*</v>)?"
    )
    attrs = r"\g<2>" if cell_type is None else f' t="{cell_type}"' + r"\g<2>"
    patched, count = pattern.subn(
        r"\g<1>" + attrs + r"\g<3><v>" + cached + "</v>", sheet
    )
    assert count == 1, f"formula {formula!r} not found in sheet1.xml"
    replace_sheet_xml(path, patched)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def report_workbook(tmp_path) -> Path:
    """An .xlsx report exercising every cell type the adapter maps.

    Layout:
      D3 formula ``=40+2`` with cached 42, D4 date, D5 styled blank,
      row 6 missing entirely.
      Rows 10-11 data, row 12 blank except a styled empty cell,
      row 13 data after the gap.
    """
    from datetime import datetime

    wb = Workbook()
    ws = wb.active
    ws.title = "Report"
    ws["A1"] = "Report"
    ws["D3"] = "=40+2"
    ws["D4"] = datetime(2024, 1, 2)
    ws["D5"].fill = YELLOW

    ws["A10"] = 1
    ws["B10"] = "Bolt"
    ws["C10"] = 10
    ws["D10"] = 0.5
    ws["E10"] = True
    ws["F10"] = "#DIV/0!"
    ws["B11"] = "  padded  "
    ws["C11"] = 20.0
    ws["C12"].fill = YELLOW
    ws["B13"] = "after gap"

    # A second sheet that must never be read
    other = wb.create_sheet("Other")
    other["D3"] = "wrong sheet"

    path = tmp_path / "report.xlsx"
    wb.save(path)
    inject_cached_value(path, "40+2", "42")
    return path


@pytest.fixture()
def report_csv(tmp_path) -> Path:
    path = tmp_path / "report.csv"
    path.write_text(REPORT_CSV, encoding="utf-8")
    return path
