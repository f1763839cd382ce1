"""
Logical grid model shared by every source adapter.

A ``Cell`` is one of a closed set of frozen dataclasses. ``None`` is
used for an *absent* cell (no cell exists at that position), which is
different from ``Blank`` (a cell exists but carries no value). Rows
follow the same convention: a ``None`` entry in ``LogicalGrid.rows``
means the source has no row object at that index.

The spreadsheet and delimited-text adapters both produce a
``LogicalGrid``; the extraction engine only ever sees this model.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Literal, Optional, Union

SourceKind = Literal["spreadsheet", "delimited"]


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class Boolean:
    value: bool


@dataclass(frozen=True)
class DateTime:
    """A numeric cell the source flagged as a date and/or time."""
    value: Union[datetime, date, time, timedelta]


@dataclass(frozen=True)
class Blank:
    """A cell that exists (e.g. carries formatting) but holds no value."""


@dataclass(frozen=True)
class Error:
    """An error value such as ``#DIV/0!``."""
    code: str = ""


@dataclass(frozen=True)
class Unknown:
    """A cell whose type the adapter could not map."""


@dataclass(frozen=True)
class Formula:
    """A formula cell together with the value the workbook last computed.

    ``cached`` is ``None`` when the file carries no cached result (for
    example a workbook written by a library that never evaluated it).
    """
    text: str
    cached: Optional[ValueCell] = None


ValueCell = Union[Text, Number, Boolean, DateTime, Blank, Error, Unknown]
Cell = Union[ValueCell, Formula]

Row = list[Optional[Cell]]


@dataclass
class LogicalGrid:
    """One table of rows, 0-indexed, as read from a single source.

    Attributes:
        rows: Row-major cells. A ``None`` row is absent.
        kind: ``"spreadsheet"`` or ``"delimited"``; selects the trimming
            and out-of-bounds policy applied during extraction.
    """
    rows: list[Optional[Row]] = field(default_factory=list)
    kind: SourceKind = "spreadsheet"

    def __len__(self) -> int:
        return len(self.rows)

    def row(self, index: int) -> Optional[Row]:
        """Return the row at *index*, or ``None`` if absent or out of range."""
        if index < 0 or index >= len(self.rows):
            return None
        return self.rows[index]

    @staticmethod
    def cell(row: Row, col: int) -> Optional[Cell]:
        """Return the cell at *col*, or ``None`` past the row's physical length."""
        if col < 0 or col >= len(row):
            return None
        return row[col]
