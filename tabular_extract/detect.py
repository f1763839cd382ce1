"""
Format dispatch for tabular-extract.

The adapter is chosen once, from the declared filename's suffix
(case-insensitive), before any I/O happens. An unrecognized suffix
fails immediately so an unsupported upload never gets opened.

Design: Strategy Pattern
- detect_source() returns an adapter instance.
- New formats are added by registering a BaseSource subclass in
  _SOURCE_MAP.
"""

from __future__ import annotations

import logging
from pathlib import PurePath

from tabular_extract.exceptions import UnsupportedFormatError
from tabular_extract.sources.base import BaseSource

logger = logging.getLogger(__name__)

# Maps lower-case suffix to adapter class
_SOURCE_MAP: dict[str, type[BaseSource]] = {}


def _get_source_map() -> dict[str, type[BaseSource]]:
    """Lazily build the suffix map so openpyxl/xlrd load on first use."""
    if not _SOURCE_MAP:
        from tabular_extract.sources.delimited import DelimitedTextSource
        from tabular_extract.sources.spreadsheet import XlsSource, XlsxSource

        for source_cls in (XlsxSource, XlsSource, DelimitedTextSource):
            for suffix in source_cls.suffixes:
                _SOURCE_MAP[suffix] = source_cls
    return _SOURCE_MAP


def supported_suffixes() -> list[str]:
    """Return the accepted suffixes, e.g. ``['.csv', '.xls', '.xlsx']``."""
    return sorted(_get_source_map())


def detect_source(filename: str) -> BaseSource:
    """Pick the source adapter for *filename*.

    Args:
        filename: Declared name of the file (a path is fine; only the
            suffix is inspected).

    Returns:
        A fresh adapter instance.

    Raises:
        UnsupportedFormatError: If the suffix is not supported.
    """
    suffix = PurePath(filename).suffix.lower()
    source_cls = _get_source_map().get(suffix)
    if source_cls is None:
        raise UnsupportedFormatError(
            f"Unsupported file type: '{filename}'. "
            "Please provide an Excel (.xls, .xlsx) or CSV (.csv) file."
        )
    logger.debug("Dispatching %s to %s", filename, source_cls.__name__)
    return source_cls()
