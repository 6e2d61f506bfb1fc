"""Parser for DXF drawings.

Reads the HEADER, TABLES, BLOCKS and ENTITIES sections of an ASCII DXF
file into a typed Document.
"""

from .config import ParserConfig
from .errors import DXFParseError, EmptyFileError
from .io.dxf_reader import DXFReader, parse_file
from .models import Document, EntityType
from .parser import DXFParser, parse
from .reporting import Anomaly, AnomalyKind, Reporter

__all__ = [
    "Anomaly",
    "AnomalyKind",
    "DXFParseError",
    "DXFParser",
    "DXFReader",
    "Document",
    "EmptyFileError",
    "EntityType",
    "ParserConfig",
    "Reporter",
    "parse",
    "parse_file",
]
