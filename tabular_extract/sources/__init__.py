"""
Source adapters sub-package for tabular-extract.

Each adapter turns one file format into the shared ``LogicalGrid``
model so the extraction engine never has to know where a cell came
from.

Design: Strategy Pattern
- base.py defines the BaseSource ABC (protocol).
- spreadsheet.py implements XlsxSource (openpyxl) and XlsSource (xlrd).
- delimited.py implements DelimitedTextSource (csv module).

The format dispatcher (detect.py) selects the adapter by file suffix.
"""
