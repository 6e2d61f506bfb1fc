"""Parsers for POINT and SOLID."""

from ...io.scanner import DXFScanner
from ...models import EntityType, Group, PointEntity, SolidEntity
from ...protocols import IReporter
from ..common import parse_point
from .base import EntityParser, Fields

SOLID_CORNER_CODES = (10, 11, 12, 13)


class PointParser(EntityParser):
    entity_type = EntityType.POINT
    entity_class = PointEntity

    def parse_group(self, group: Group, scanner: DXFScanner, fields: Fields, reporter: IReporter) -> bool:
        if group.code == 10:
            fields["position"] = parse_point(scanner)
        elif group.code == 39:
            fields["thickness"] = group.value
        elif group.code == 210:
            fields["extrusion_direction"] = parse_point(scanner)
        else:
            return False
        return True


class SolidParser(EntityParser):
    """Solid, corners are stored by their index 0-3."""

    entity_type = EntityType.SOLID
    entity_class = SolidEntity

    def init_fields(self, fields: Fields) -> None:
        fields["points"] = [None] * len(SOLID_CORNER_CODES)

    def parse_group(self, group: Group, scanner: DXFScanner, fields: Fields, reporter: IReporter) -> bool:
        if group.code in SOLID_CORNER_CODES:
            fields["points"][group.code - 10] = parse_point(scanner)
        elif group.code == 210:
            fields["extrusion_direction"] = parse_point(scanner)
        else:
            return False
        return True

    def finish(self, fields: Fields, reporter: IReporter) -> None:
        fields["points"] = tuple(fields["points"])
