"""Parsers for block referencing entities: INSERT and DIMENSION."""

import logging

from ...io.scanner import DXFScanner
from ...models import DimensionEntity, EntityType, Group, InsertEntity
from ...protocols import IReporter
from ..common import parse_point
from .base import EntityParser, Fields

log = logging.getLogger(__name__)


class InsertParser(EntityParser):
    """Block reference, ``Document.resolve_block`` looks up the block."""

    entity_type = EntityType.INSERT
    entity_class = InsertEntity

    def parse_group(self, group: Group, scanner: DXFScanner, fields: Fields, reporter: IReporter) -> bool:
        code = group.code
        if code == 2:
            fields["name"] = group.value
        elif code == 10:
            fields["position"] = parse_point(scanner)
        elif code == 41:
            fields["x_scale"] = group.value
        elif code == 42:
            fields["y_scale"] = group.value
        elif code == 43:
            fields["z_scale"] = group.value
        elif code == 44:
            fields["column_spacing"] = group.value
        elif code == 45:
            fields["row_spacing"] = group.value
        elif code == 50:
            fields["rotation"] = group.value
        elif code == 66:
            fields["attributes_follow"] = group.value != 0
        elif code == 70:
            fields["column_count"] = group.value
        elif code == 71:
            fields["row_count"] = group.value
        elif code == 210:
            fields["extrusion_direction"] = parse_point(scanner)
        else:
            return False
        return True


class DimensionParser(EntityParser):
    entity_type = EntityType.DIMENSION
    entity_class = DimensionEntity

    def parse_group(self, group: Group, scanner: DXFScanner, fields: Fields, reporter: IReporter) -> bool:
        code = group.code
        if code == 1:
            fields["text"] = group.value
        elif code == 2:
            fields["block"] = group.value
        elif code == 10:
            fields["anchor_point"] = parse_point(scanner)
        elif code == 11:
            fields["middle_of_text"] = parse_point(scanner)
        elif code == 42:
            fields["actual_measurement"] = group.value
        elif code == 50:
            fields["angle"] = group.value
        elif code == 70:
            # upper bits flag block usage, the type is in the lower 3 bits
            fields["dimension_type"] = group.value & 7
        elif code == 71:
            # 5 is middle center
            fields["attachment_point"] = group.value
        else:
            return False
        return True
