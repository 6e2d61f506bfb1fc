"""Common entity parsing.

Every entity parser reads the shared entity header first and then runs a
flat per-group dispatch over the entity specific codes. Parsers keep no
state between calls, the fields of the entity under construction live in
a plain dict that is turned into the entity dataclass at the end.
"""

import logging
from typing import Any

from ...io.scanner import DXFScanner
from ...models import Entity, EntityType, Group
from ...protocols import IReporter
from ..common import app_group_name, parse_app_group

log = logging.getLogger(__name__)

HEADER_CODES = frozenset({5, 6, 8, 48, 60, 62, 67, 102, 330})
SUBCLASS_MARKER = 100

Fields = dict[str, Any]


class EntityParser:
    """Base parser for one entity kind.

    Subclasses set ``entity_type`` and ``entity_class`` and implement
    ``parse_group``. ``init_fields`` and ``finish`` can be overridden for
    defaults and derived fields.
    """

    entity_type: EntityType
    entity_class: type[Entity] = Entity

    def parse(self, scanner: DXFScanner, reporter: IReporter) -> Entity:
        """Parse one entity, the scanner must be at its ``(0, TYPE)`` group.

        On return the scanner is at the last group of the entity.
        """
        fields = self.parse_header(scanner, reporter)
        self.init_fields(fields)
        self.parse_body(scanner, fields, reporter)
        self.finish(fields, reporter)
        return self.entity_class(**fields)

    def parse_header(self, scanner: DXFScanner, reporter: IReporter) -> Fields:
        """Parse the common entity header.

        The header ends at the first subclass marker, which is consumed, or
        at the first group that is not a header code, which is left for the
        entity body. Files without subclass markers take the second path.
        """
        fields: Fields = {"type": self.entity_type}
        while True:
            group = scanner.next().peek()
            if group.code == SUBCLASS_MARKER:
                break
            if group.code not in HEADER_CODES or group.value is None:
                scanner.rewind()
                break
            self.apply_header_group(group, scanner, fields, reporter)
        return fields

    def apply_header_group(self, group: Group, scanner: DXFScanner, fields: Fields, reporter: IReporter) -> bool:
        """Store a common header group, returns False for any other code."""
        code = group.code
        if code == 5:
            fields["handle"] = group.value
        elif code == 6:
            fields["line_type"] = group.value
        elif code == 8:
            fields["layer"] = group.value
        elif code == 48:
            fields["line_type_scale"] = group.value
        elif code == 60:
            fields["visible"] = group.value == 0
        elif code == 62:
            # 0 is BYBLOCK and 256 is BYLAYER
            fields["color_index"] = group.value
        elif code == 67:
            fields["in_paper_space"] = group.value != 0
        elif code == 330:
            fields["owner_handle"] = group.value
        elif code == 102:
            app_groups = fields.setdefault("app_groups", {})
            app_groups[app_group_name(group)] = parse_app_group(scanner, reporter, self.entity_type.value)
        else:
            return False
        return True

    def init_fields(self, fields: Fields) -> None:
        """Set defaults before the body is parsed."""

    def parse_body(self, scanner: DXFScanner, fields: Fields, reporter: IReporter) -> None:
        """Dispatch the entity groups up to the next code 0 group."""
        while True:
            group = scanner.next().peek()
            if group.code == 0:
                scanner.rewind()
                break
            if group.code == SUBCLASS_MARKER or group.value is None:
                continue
            if self.parse_group(group, scanner, fields, reporter):
                continue
            if group.code in HEADER_CODES and self.apply_header_group(group, scanner, fields, reporter):
                continue
            reporter.unhandled_group(group, self.entity_type.value)

    def parse_group(self, group: Group, scanner: DXFScanner, fields: Fields, reporter: IReporter) -> bool:
        """Store an entity specific group.

        Parameters
        ----------
        group : Group
            Current group
        scanner : DXFScanner
            Scanner positioned at ``group``, multi group values such as
            points are read from it
        fields : Fields
            Fields of the entity under construction
        reporter : IReporter
            Sink for non-fatal anomalies

        Returns
        -------
        bool
            True if the group was consumed, False to fall back to the
            common header codes
        """
        return False

    def finish(self, fields: Fields, reporter: IReporter) -> None:
        """Derive fields once all groups are read."""


def skip_to_next_entity(scanner: DXFScanner) -> None:
    """Skip the groups of the current entity, leaving the next code 0 group."""
    while True:
        group = scanner.next().peek()
        if group.code == 0:
            scanner.rewind()
            return
