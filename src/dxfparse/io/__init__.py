"""DXF I/O package.

This package provides:
- DXFScanner: typed group stream over the lines of a DXF text
- group code type table and value conversion
- JsonExporter: Document to JSON export

The file reader lives in ``dxfparse.io.dxf_reader``, it depends on the
parser which in turn depends on the scanner.
"""

from .group_codes import ValueType, code_to_type, parse_group_value
from .json_exporter import JsonExporter
from .scanner import DXFScanner

__all__ = [
    "DXFScanner",
    "JsonExporter",
    "ValueType",
    "code_to_type",
    "parse_group_value",
]
