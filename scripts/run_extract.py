"""
Demo script: run extraction over the files given on the command line.

Usage:
    uv run python scripts/run_extract.py inputs/report.xlsx inputs/report.csv
    uv run python scripts/run_extract.py --layout path/to/layout.yaml inputs/report.xls

For each file, logs the header cells and every data row, the way the
desktop importer used to print them to its console.
"""

from __future__ import annotations

import argparse
import logging
import sys

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("run_extract")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    import tabular_extract

    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("paths", nargs="+", help="Excel (.xlsx/.xls) or CSV files")
    parser.add_argument("--layout", help="Path to an extraction layout YAML file")
    args = parser.parse_args(argv)

    layout = tabular_extract.load_layout_file(args.layout) if args.layout else None

    failures = 0
    for path in args.paths:
        log.info("=" * 70)
        log.info("Processing: %s", path)
        log.info("=" * 70)
        try:
            result = tabular_extract.process_path(path, layout)
        except tabular_extract.TabularExtractError as e:
            log.error("FAILED  %s  (%s: %s)", path, type(e).__name__, e)
            failures += 1
            continue

        log.info("--- Specific cells ---")
        for address, value in result.fixed_cells.items():
            log.info("  %s: %s", address, value)

        first, last = result.columns[0], result.columns[-1]
        log.info("--- Data rows, columns %s-%s ---", first, last)
        for row_number, values in zip(result.row_numbers, result.rows):
            log.info("  Row %d: %s", row_number, "\t".join(values))
        log.info(
            "Stopped at row %s (%s), %d data rows",
            result.stopped_at, result.stop_reason, len(result.rows),
        )

    log.info("All files processed (%d failed).", failures)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
