"""
Extraction layout loader for tabular-extract.

Loads layout YAML files from tabular_extract/layouts/ (or any path) and
provides structured access via Pydantic models. Each layout defines:
- layout_name: unique identifier (e.g., "default")
- fixed_cells: single-cell addresses read from the header block
- data_block: the display row where the data block starts and the
  inclusive column window (letters) scanned on every data row

Cell coordinates live in YAML so a template change only needs an edited
file, not a code change. The built-in ``default`` layout reads D3-D6 and
the block starting at row 10 across columns B-I.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from tabular_extract.addressing import column_index, split_address
from tabular_extract.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)

# Directory containing layout YAML files (sibling package)
_LAYOUTS_DIR = Path(__file__).parent / "layouts"


class DataBlock(BaseModel):
    """Where the variable-length data block lives."""
    start_row: int = Field(10, ge=1, description="Display (1-based) row number")
    first_column: str = "B"
    last_column: str = "I"

    @field_validator("first_column", "last_column")
    @classmethod
    def _check_letters(cls, value: str) -> str:
        column_index(value)  # raises ValueError on anything but letters
        return value.upper()

    @model_validator(mode="after")
    def _check_window(self) -> DataBlock:
        if column_index(self.first_column) > column_index(self.last_column):
            raise ValueError(
                f"first_column {self.first_column} is after "
                f"last_column {self.last_column}"
            )
        return self

    @property
    def start_index(self) -> int:
        return self.start_row - 1

    @property
    def columns(self) -> range:
        """0-indexed column indices of the window, inclusive."""
        return range(column_index(self.first_column), column_index(self.last_column) + 1)


class ExtractionLayout(BaseModel):
    """A complete extraction layout loaded from YAML."""
    layout_name: str
    description: str = ""
    fixed_cells: list[str] = Field(default_factory=lambda: ["D3", "D4", "D5", "D6"])
    data_block: DataBlock = Field(default_factory=DataBlock)

    @field_validator("fixed_cells")
    @classmethod
    def _check_addresses(cls, value: list[str]) -> list[str]:
        normalized = []
        for address in value:
            letters, row_number = split_address(address)
            if row_number < 1:
                raise ValueError(f"Row number must be >= 1 in {address!r}")
            normalized.append(f"{letters}{row_number}")
        return normalized


def load_layout_file(path: str | Path) -> ExtractionLayout:
    """Load and validate a single layout YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigValidationError: If the file is empty or fails validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Layout file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Layout file is empty: {path}")
    try:
        layout = ExtractionLayout.model_validate(raw)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid layout {path}:\n{e}") from e
    logger.debug("Loaded layout: %s from %s", layout.layout_name, path)
    return layout


def available_layouts(layouts_dir: Path | None = None) -> list[str]:
    """Names of the layout YAML files in *layouts_dir* (built-in by default)."""
    layouts_dir = layouts_dir or _LAYOUTS_DIR
    return sorted(p.stem for p in layouts_dir.glob("*.yaml"))


def load_layout(name: str, layouts_dir: Path | None = None) -> ExtractionLayout:
    """Load a layout by name from *layouts_dir* (built-in by default).

    Raises:
        ConfigValidationError: If no layout with that name exists or it is
            invalid.
    """
    layouts_dir = layouts_dir or _LAYOUTS_DIR
    path = layouts_dir / f"{name}.yaml"
    if not path.exists():
        raise ConfigValidationError(
            f"Unknown layout '{name}'. "
            f"Available layouts: {available_layouts(layouts_dir)}"
        )
    return load_layout_file(path)


@lru_cache(maxsize=1)
def default_layout() -> ExtractionLayout:
    """The built-in ``default`` layout (D3-D6, rows 10+, columns B-I)."""
    return load_layout("default")
