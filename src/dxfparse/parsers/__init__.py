"""Section, table, block and entity parsers working on a DXFScanner."""

from .blocks import parse_blocks
from .common import parse_app_group, parse_point
from .entities import ENTITY_PARSERS, parse_entity
from .header import parse_header
from .tables import parse_tables

__all__ = [
    "ENTITY_PARSERS",
    "parse_app_group",
    "parse_blocks",
    "parse_entity",
    "parse_header",
    "parse_point",
    "parse_tables",
]
