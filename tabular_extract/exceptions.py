"""
Custom exception hierarchy for tabular-extract.

Callers can tell an unsupported upload apart from an unreadable file or
malformed CSV content without inspecting messages. Missing rows and
out-of-range columns are *not* errors; they surface as sentinel values
in the extraction result.
"""


class TabularExtractError(Exception):
    """Base exception for all tabular-extract errors."""


class UnsupportedFormatError(TabularExtractError):
    """Raised when the filename suffix is not ``.xlsx``, ``.xls`` or ``.csv``.

    Always raised before the input stream is touched.
    """


class SourceReadError(TabularExtractError):
    """Raised when the input could not be opened or read.

    Covers OS-level read failures as well as workbooks that openpyxl or
    xlrd refuse to load (corrupt archive, wrong binary format, etc.).
    """


class ParsingError(TabularExtractError):
    """Raised when delimited-text content is not well-formed.

    For example an unterminated quoted field, characters after a closing
    quote, or bytes that do not decode as UTF-8.
    """


class ConfigValidationError(TabularExtractError):
    """Raised when an extraction layout YAML file fails validation.

    This can happen if:
    - The file is empty.
    - A cell address does not look like ``D3``.
    - The column window is reversed (first column after last column).
    """
