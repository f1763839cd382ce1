"""
Layout definitions sub-package for tabular-extract.

Contains YAML files that define which header cells and which data block
to extract. The loader module (layout_registry.py in the parent package)
reads these files at runtime.
"""
