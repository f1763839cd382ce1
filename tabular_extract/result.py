"""
Extraction result container.

``ExtractionResult`` is the only output of the core: header values keyed
by address plus the data block as lists of canonical strings. Nothing is
cached or persisted; callers decide how to render or store it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Literal

import pandas as pd

from tabular_extract.cells import SourceKind

StopReason = Literal["missing_row", "blank_row", "end_of_data"]


@dataclass
class ExtractionResult:
    """Values pulled from one file.

    Attributes:
        fixed_cells: Address label (e.g. ``"D3"``) -> canonical string.
        rows: Data block rows, each a list of canonical strings in column
            order for the layout's column window.
        row_numbers: Display (1-based) row number of each entry in ``rows``.
        columns: Column letters of the window (e.g. ``["B", ..., "I"]``).
        source_name: Declared filename of the input.
        source_kind: ``"spreadsheet"`` or ``"delimited"``.
        stop_reason: Why ranged extraction ended.
        stopped_at: Display row number of the row that ended extraction
            (the missing or blank row, or one past the last row).
    """

    fixed_cells: dict[str, str] = field(default_factory=dict)
    rows: list[list[str]] = field(default_factory=list)
    row_numbers: list[int] = field(default_factory=list)
    columns: list[str] = field(default_factory=list)
    source_name: str = ""
    source_kind: SourceKind = "spreadsheet"
    stop_reason: StopReason = "end_of_data"
    stopped_at: int | None = None

    def records(self) -> Iterator[dict[str, str]]:
        """Yield each data row as ``{column letter: value}``."""
        for row in self.rows:
            yield dict(zip(self.columns, row))

    def to_frame(self) -> pd.DataFrame:
        """Data block as a string DataFrame indexed by display row number."""
        df = pd.DataFrame(self.rows, columns=self.columns, dtype=str)
        df.index = pd.Index(self.row_numbers, name="row")
        return df
