"""
tabular-extract: read header cells and a data block from spreadsheets and CSV.

Public API surface:

- ``process_file(stream, filename, ...)`` -- **core entry point**. Takes
  an already-open binary stream plus its declared filename, dispatches
  on the suffix (``.xlsx`` / ``.xls`` / ``.csv``), loads the first table
  into a logical grid and returns an ``ExtractionResult``.

- ``process_path(path, ...)`` -- convenience wrapper that dispatches on
  the path's suffix first and only then opens the file.

Both use the built-in ``default`` layout (D3-D6, rows 10+, columns B-I)
unless an ``ExtractionLayout`` is passed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, TextIO

from tabular_extract.detect import detect_source
from tabular_extract.engine import extract
from tabular_extract.exceptions import (
    ConfigValidationError,
    ParsingError,
    SourceReadError,
    TabularExtractError,
    UnsupportedFormatError,
)
from tabular_extract.layout_registry import ExtractionLayout, load_layout, load_layout_file
from tabular_extract.result import ExtractionResult

__all__ = [
    "process_file",
    "process_path",
    "ExtractionLayout",
    "ExtractionResult",
    "load_layout",
    "load_layout_file",
    "TabularExtractError",
    "UnsupportedFormatError",
    "SourceReadError",
    "ParsingError",
    "ConfigValidationError",
]

logger = logging.getLogger(__name__)


def process_file(
    stream: BinaryIO | TextIO,
    filename: str,
    layout: ExtractionLayout | None = None,
) -> ExtractionResult:
    """Extract header cells and the data block from an open stream.

    Orchestration:
      1. ``detect_source()`` -> adapter chosen by suffix (no I/O yet).
      2. ``adapter.read()`` -> ``LogicalGrid`` for the first table.
      3. ``extract()`` -> ``ExtractionResult``.

    The stream is read but not closed; its owner closes it.

    Args:
        stream: Readable binary stream positioned at the start of the file.
            ``.csv`` content may also be passed as an already decoded text stream.
        filename: Declared filename; the suffix selects the format.
        layout: Extraction layout. Defaults to the built-in ``default``.

    Returns:
        The extraction result.

    Raises:
        UnsupportedFormatError: If the suffix is not supported.
        SourceReadError: If the stream cannot be read or the workbook
            cannot be loaded.
        ParsingError: If CSV content is malformed.
    """
    source = detect_source(filename)
    logger.info("process_file() -- %s via %s", filename, type(source).__name__)

    grid = source.read(stream, filename)
    logger.info("Loaded grid: %d rows (%s)", len(grid), grid.kind)

    return extract(grid, layout, source_name=filename)


def process_path(
    path: str | Path,
    layout: ExtractionLayout | None = None,
) -> ExtractionResult:
    """Open *path* and run :func:`process_file` on it.

    The format is checked before the file is opened, so an unsupported
    suffix never touches the filesystem.

    Raises:
        UnsupportedFormatError: If the suffix is not supported.
        SourceReadError: If the file cannot be opened or read.
        ParsingError: If CSV content is malformed.
    """
    path = Path(path)
    detect_source(path.name)
    try:
        f = open(path, "rb")
    except OSError as e:
        raise SourceReadError(f"Could not open {path}: {e}") from e
    with f:
        return process_file(f, path.name, layout)
