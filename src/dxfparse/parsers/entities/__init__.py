"""Entity parsers and the dispatch table keyed by entity type name."""

import logging

from ...io.scanner import DXFScanner
from ...models import Entity
from ...protocols import IEntityParser, IReporter
from .base import EntityParser, skip_to_next_entity
from .curves import ArcParser, CircleParser, EllipseParser, SplineParser
from .inserts import DimensionParser, InsertParser
from .linear import LineParser, LwpolylineParser, PolylineParser, VertexParser
from .points import PointParser, SolidParser
from .text import AttdefParser, MTextParser, TextParser

log = logging.getLogger(__name__)

_VERTEX_PARSER = VertexParser()

ENTITY_PARSERS: dict[str, IEntityParser] = {
    parser.entity_type.value: parser
    for parser in (
        LineParser(),
        ArcParser(),
        CircleParser(),
        TextParser(),
        MTextParser(),
        SplineParser(),
        EllipseParser(),
        InsertParser(),
        SolidParser(),
        PointParser(),
        _VERTEX_PARSER,
        AttdefParser(),
        DimensionParser(),
        LwpolylineParser(),
        PolylineParser(_VERTEX_PARSER),
    )
}


def parse_entity(scanner: DXFScanner, reporter: IReporter) -> Entity | None:
    """Parse the entity starting at the current code 0 group.

    Entity types without a parser are skipped without a report, drawings
    routinely contain kinds no parser is written for.

    Parameters
    ----------
    scanner : DXFScanner
        Scanner positioned at the entity's ``(0, TYPE)`` group
    reporter : IReporter
        Sink for non-fatal anomalies

    Returns
    -------
    Entity | None
        Parsed entity or None for unsupported types. In both cases the
        scanner is left at the last group of the entity.
    """
    entity_type = scanner.peek().value
    parser = ENTITY_PARSERS.get(entity_type)
    if parser is None:
        log.debug(f"Skipping unsupported entity {entity_type}")
        skip_to_next_entity(scanner)
        return None
    return parser.parse(scanner, reporter)


__all__ = [
    "ENTITY_PARSERS",
    "EntityParser",
    "parse_entity",
    "skip_to_next_entity",
]
