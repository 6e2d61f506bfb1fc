"""Parsers for curved entities: CIRCLE, ARC, ELLIPSE and SPLINE."""

import logging
import math

from ...io.scanner import DXFScanner
from ...models import (
    ArcEntity,
    CircleEntity,
    EllipseEntity,
    EntityType,
    Group,
    SplineEntity,
    wrap_angle_length,
)
from ...protocols import IReporter
from ..common import parse_point
from .base import EntityParser, Fields

log = logging.getLogger(__name__)


class CircleParser(EntityParser):
    """Circle, angles are converted from degrees to radians."""

    entity_type = EntityType.CIRCLE
    entity_class = CircleEntity

    def parse_group(self, group: Group, scanner: DXFScanner, fields: Fields, reporter: IReporter) -> bool:
        code = group.code
        if code == 10:
            fields["center"] = parse_point(scanner)
        elif code == 39:
            fields["thickness"] = group.value
        elif code == 40:
            fields["radius"] = group.value
        elif code == 50:
            fields["start_angle"] = math.radians(group.value)
        elif code == 51:
            fields["end_angle"] = math.radians(group.value)
        elif code == 210:
            fields["extrusion_direction"] = parse_point(scanner)
        else:
            return False
        return True

    def finish(self, fields: Fields, reporter: IReporter) -> None:
        end_angle = fields.get("end_angle")
        if end_angle is None:
            return
        # a missing start angle counts as 0 but stays unset on the entity
        start_angle = fields.get("start_angle") or 0.0
        fields["angle_length"] = wrap_angle_length(start_angle, end_angle)


class ArcParser(CircleParser):
    entity_type = EntityType.ARC
    entity_class = ArcEntity


class EllipseParser(EntityParser):
    """Ellipse, start and end are curve parameters already in radians."""

    entity_type = EntityType.ELLIPSE
    entity_class = EllipseEntity

    def parse_group(self, group: Group, scanner: DXFScanner, fields: Fields, reporter: IReporter) -> bool:
        code = group.code
        if code == 10:
            fields["center"] = parse_point(scanner)
        elif code == 11:
            fields["major_axis_end_point"] = parse_point(scanner)
        elif code == 40:
            fields["axis_ratio"] = group.value
        elif code == 41:
            fields["start_angle"] = group.value
        elif code == 42:
            fields["end_angle"] = group.value
        elif code == 210:
            fields["extrusion_direction"] = parse_point(scanner)
        else:
            return False
        return True


class SplineParser(EntityParser):
    entity_type = EntityType.SPLINE
    entity_class = SplineEntity

    def init_fields(self, fields: Fields) -> None:
        fields["control_points"] = []
        fields["fit_points"] = []
        fields["knot_values"] = []

    def parse_group(self, group: Group, scanner: DXFScanner, fields: Fields, reporter: IReporter) -> bool:
        code = group.code
        if code == 10:
            fields["control_points"].append(parse_point(scanner))
        elif code == 11:
            fields["fit_points"].append(parse_point(scanner))
        elif code == 12:
            fields["start_tangent"] = parse_point(scanner)
        elif code == 13:
            fields["end_tangent"] = parse_point(scanner)
        elif code == 40:
            fields["knot_values"].append(group.value)
        elif code == 70:
            flags = group.value
            fields["closed"] = (flags & 1) != 0
            fields["periodic"] = (flags & 2) != 0
            fields["rational"] = (flags & 4) != 0
            # linear splines are always planar
            fields["planar"] = (flags & 8) != 0 or (flags & 16) != 0
            fields["linear"] = (flags & 16) != 0
        elif code == 71:
            fields["degree_of_spline_curve"] = group.value
        elif code == 72:
            fields["number_of_knots"] = group.value
        elif code == 73:
            fields["number_of_control_points"] = group.value
        elif code == 74:
            fields["number_of_fit_points"] = group.value
        elif code == 210:
            fields["normal_vector"] = parse_point(scanner)
        else:
            return False
        return True

    def finish(self, fields: Fields, reporter: IReporter) -> None:
        for name in ("control_points", "fit_points", "knot_values"):
            fields[name] = tuple(fields[name])
