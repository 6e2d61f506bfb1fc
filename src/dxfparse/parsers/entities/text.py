"""Parsers for text entities: TEXT, MTEXT and ATTDEF."""

import logging

from ...io.scanner import DXFScanner
from ...models import AttdefEntity, EntityType, Group, MTextEntity, TextEntity
from ...protocols import IReporter
from ..common import parse_point
from .base import EntityParser, Fields

log = logging.getLogger(__name__)


class TextParser(EntityParser):
    """Single line text, rotation stays in degrees."""

    entity_type = EntityType.TEXT
    entity_class = TextEntity

    def parse_group(self, group: Group, scanner: DXFScanner, fields: Fields, reporter: IReporter) -> bool:
        code = group.code
        if code == 1:
            fields["text"] = group.value
        elif code == 7:
            fields["text_style"] = group.value
        elif code == 10:
            fields["start_point"] = parse_point(scanner)
        elif code == 11:
            fields["end_point"] = parse_point(scanner)
        elif code == 40:
            fields["text_height"] = group.value
        elif code == 41:
            fields["x_scale"] = group.value
        elif code == 50:
            fields["rotation"] = group.value
        elif code == 72:
            fields["halign"] = group.value
        elif code == 73:
            fields["valign"] = group.value
        else:
            return False
        return True


class MTextParser(EntityParser):
    """Multiline text.

    Long texts are split into 250 character chunks, written as groups 3
    followed by a final group 1. All chunks are joined untrimmed in
    stream order.
    """

    entity_type = EntityType.MTEXT
    entity_class = MTextEntity

    def init_fields(self, fields: Fields) -> None:
        fields["text"] = []

    def parse_group(self, group: Group, scanner: DXFScanner, fields: Fields, reporter: IReporter) -> bool:
        code = group.code
        if code in (1, 3):
            fields["text"].append(scanner.peek_raw_value())
        elif code == 7:
            fields["text_style"] = group.value
        elif code == 10:
            fields["position"] = parse_point(scanner)
        elif code == 40:
            fields["height"] = group.value
        elif code == 41:
            fields["width"] = group.value
        elif code == 50:
            fields["rotation"] = group.value
        elif code == 71:
            # 1-9, top left to bottom right
            fields["attachment_point"] = group.value
        elif code == 72:
            fields["drawing_direction"] = group.value
        else:
            return False
        return True

    def finish(self, fields: Fields, reporter: IReporter) -> None:
        chunks = fields.pop("text")
        if chunks:
            fields["text"] = "".join(chunks)


class AttdefParser(EntityParser):
    entity_type = EntityType.ATTDEF
    entity_class = AttdefEntity

    def parse_group(self, group: Group, scanner: DXFScanner, fields: Fields, reporter: IReporter) -> bool:
        code = group.code
        if code == 1:
            fields["text"] = group.value
        elif code == 2:
            fields["tag"] = group.value
        elif code == 3:
            fields["prompt"] = group.value
        elif code == 7:
            fields["text_style"] = group.value
        elif code == 10:
            fields["start_point"] = parse_point(scanner)
        elif code == 11:
            fields["end_point"] = parse_point(scanner)
        elif code == 39:
            fields["thickness"] = group.value
        elif code == 40:
            fields["text_height"] = group.value
        elif code == 41:
            fields["scale"] = group.value
        elif code == 50:
            fields["rotation"] = group.value
        elif code == 51:
            fields["oblique_angle"] = group.value
        elif code == 70:
            flags = group.value
            fields["invisible"] = (flags & 1) != 0
            fields["constant"] = (flags & 2) != 0
            fields["verification_required"] = (flags & 4) != 0
            fields["preset"] = (flags & 8) != 0
        elif code == 71:
            fields["backwards"] = (group.value & 2) != 0
            fields["mirrored"] = (group.value & 4) != 0
        elif code == 72:
            fields["horizontal_justification"] = group.value
        elif code == 73:
            fields["field_length"] = group.value
        elif code == 74:
            fields["vertical_justification"] = group.value
        elif code == 210:
            fields["extrusion_direction_x"] = group.value
        elif code == 220:
            fields["extrusion_direction_y"] = group.value
        elif code == 230:
            fields["extrusion_direction_z"] = group.value
        else:
            return False
        return True
