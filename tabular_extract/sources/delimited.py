"""
Delimited-text (CSV) source adapter.

The whole file is materialized in memory with the standard ``csv``
module in strict mode, so quoted fields may contain commas and line
breaks, a doubled quote inside a quoted field is a literal quote, and
an unterminated quoted field is an error instead of silently swallowing
the rest of the file.

Every field becomes a ``Text`` cell. Records are never absent; a column
past a record's physical length is simply missing from that row, which
the extraction engine reports as out of bounds.
"""

from __future__ import annotations

import csv
import io
import logging
from typing import BinaryIO, TextIO

from tabular_extract.cells import LogicalGrid, Text
from tabular_extract.exceptions import ParsingError, SourceReadError
from tabular_extract.sources.base import BaseSource

logger = logging.getLogger(__name__)

_ENCODING = "utf-8-sig"


def parse_records(text_stream: TextIO) -> list[list[str]]:
    """Parse a text stream into a list of records.

    Raises:
        ParsingError: On malformed quoting or undecodable input.
    """
    reader = csv.reader(text_stream, strict=True)
    try:
        return list(reader)
    except csv.Error as e:
        raise ParsingError(
            f"Malformed delimited text near line {reader.line_num}: {e}"
        ) from e
    except UnicodeDecodeError as e:
        raise ParsingError(
            f"Delimited text is not valid {_ENCODING}: {e}"
        ) from e


def _parse_stream(text_stream: TextIO, filename: str) -> list[list[str]]:
    try:
        return parse_records(text_stream)
    except OSError as e:
        raise SourceReadError(f"Could not read {filename}: {e}") from e


class DelimitedTextSource(BaseSource):
    """Adapter for ``.csv`` files."""

    suffixes = (".csv",)

    def __init__(self, encoding: str = _ENCODING) -> None:
        self.encoding = encoding

    def read(self, stream: BinaryIO | TextIO, filename: str) -> LogicalGrid:
        """Parse *stream* into a grid.

        Binary streams are decoded with ``self.encoding``; text streams
        are taken as already decoded and read as-is.
        """
        logger.info("Reading delimited text: %s", filename)

        if isinstance(stream, io.TextIOBase):
            records = _parse_stream(stream, filename)
        else:
            # newline="" lets the csv module see embedded line breaks in quotes
            text_stream = io.TextIOWrapper(stream, encoding=self.encoding, newline="")
            try:
                records = _parse_stream(text_stream, filename)
            finally:
                # Hand the underlying stream back to the caller open
                text_stream.detach()

        rows = [[Text(field) for field in record] for record in records]
        logger.info("Parsed %d records from %s", len(rows), filename)
        return LogicalGrid(rows=rows, kind="delimited")
