"""
Spreadsheet-style addressing helpers.

Column letters use bijective base-26: ``A`` -> 0, ``Z`` -> 25,
``AA`` -> 26, ``AB`` -> 27, ``BA`` -> 52. There is no zero digit, so a
positional base-26 formula gives the wrong answer for multi-letter
columns. Row numbers in addresses are 1-based; everything returned
here is 0-based unless stated otherwise.
"""

from __future__ import annotations

import re

_LETTERS = re.compile(r"[A-Za-z]+")
_ADDRESS = re.compile(r"([A-Za-z]+)([0-9]+)")


def column_index(letters: str) -> int:
    """Convert column letters (case-insensitive) to a 0-indexed column.

    Raises:
        ValueError: If *letters* is not a non-empty run of ASCII letters.
    """
    if not _LETTERS.fullmatch(letters):
        raise ValueError(f"Invalid column letters: {letters!r}")
    index = -1
    for ch in letters.upper():
        index = (index + 1) * 26 + (ord(ch) - ord("A"))
    return index


def column_letter(index: int) -> str:
    """Inverse of :func:`column_index` (0 -> ``"A"``, 26 -> ``"AA"``)."""
    if index < 0:
        raise ValueError(f"Column index must be >= 0, got {index}")
    letters = ""
    n = index + 1
    while n:
        n, rem = divmod(n - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


def split_address(address: str) -> tuple[str, int]:
    """Split ``"D3"`` into ``("D", 3)``.

    The row number is returned exactly as written (1-based display
    number); callers subtract one for the grid index.

    Raises:
        ValueError: If *address* is not letters followed by digits.
    """
    match = _ADDRESS.fullmatch(address.strip())
    if match is None:
        raise ValueError(f"Invalid cell address: {address!r}")
    return match.group(1).upper(), int(match.group(2))
