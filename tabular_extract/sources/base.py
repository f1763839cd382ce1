"""
Base source adapter ABC for tabular-extract.

All source adapters implement one contract: ``read()`` takes a readable
stream plus the declared filename and returns a ``LogicalGrid`` holding
the first table of the file. Adapters own the stream handling and
resource cleanup for their format; the extraction engine never does I/O.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO

from tabular_extract.cells import LogicalGrid


class BaseSource(ABC):
    """Abstract base class for file-format adapters."""

    #: Lower-case suffixes (with leading dot) handled by this adapter.
    suffixes: tuple[str, ...] = ()

    @abstractmethod
    def read(self, stream: BinaryIO, filename: str) -> LogicalGrid:
        """Load *stream* into a logical grid.

        Args:
            stream: Readable binary stream positioned at the start of the file.
            filename: Declared name of the file; only its suffix is used.

        Returns:
            A ``LogicalGrid`` for the first table in the file.

        Raises:
            SourceReadError: If the stream cannot be read or loaded.
            ParsingError: If the content is malformed (delimited text only).
        """
