"""Parsers for straight-segment entities: LINE, LWPOLYLINE, POLYLINE and VERTEX."""

import dataclasses
import logging

from ...io.scanner import DXFScanner
from ...models import (
    EntityType,
    Group,
    LineEntity,
    LwpolylineEntity,
    LwpolylineVertex,
    PolylineEntity,
    VertexEntity,
)
from ...protocols import IReporter
from ...reporting import AnomalyKind
from ..common import parse_point
from .base import EntityParser, Fields, skip_to_next_entity

log = logging.getLogger(__name__)

LWPOLYLINE_VERTEX_CODES = frozenset({10, 20, 30, 40, 41, 42})


class LineParser(EntityParser):
    entity_type = EntityType.LINE
    entity_class = LineEntity

    def init_fields(self, fields: Fields) -> None:
        fields["vertices"] = []

    def parse_group(self, group: Group, scanner: DXFScanner, fields: Fields, reporter: IReporter) -> bool:
        if group.code == 10:
            fields["vertices"].insert(0, parse_point(scanner))
        elif group.code == 11:
            fields["vertices"].append(parse_point(scanner))
        elif group.code == 210:
            fields["extrusion_direction"] = parse_point(scanner)
        else:
            return False
        return True

    def finish(self, fields: Fields, reporter: IReporter) -> None:
        fields["vertices"] = tuple(fields["vertices"])


def parse_lwpolyline_vertices(scanner: DXFScanner, count: int) -> list[LwpolylineVertex]:
    """Read a run of LWPOLYLINE vertices.

    Each vertex starts with a group 10. The run ends after ``count``
    vertices or at the first group that is not a vertex code, whichever
    comes first. ``count`` of 0 or less reads until such a group. The
    group that ended the run is left for the caller.

    Parameters
    ----------
    scanner : DXFScanner
        Scanner positioned at the group 10 of the first vertex
    count : int
        Maximum number of vertices to read

    Returns
    -------
    list[LwpolylineVertex]
        Vertices in drawing order
    """
    vertices: list[LwpolylineVertex] = []
    current: dict[str, float] = {}

    scanner.rewind()
    while True:
        group = scanner.next().peek()
        if group.code not in LWPOLYLINE_VERTEX_CODES or group.value is None:
            scanner.rewind()
            break

        if group.code == 10:
            if current:
                vertices.append(LwpolylineVertex(**current))
                current = {}
                if 0 < count <= len(vertices):
                    scanner.rewind()
                    break
            current["x"] = group.value
        elif group.code == 20:
            current["y"] = group.value
        elif group.code == 30:
            current["z"] = group.value
        elif group.code == 40:
            current["start_width"] = group.value
        elif group.code == 41:
            current["end_width"] = group.value
        elif group.code == 42:
            if group.value != 0:
                current["bulge"] = group.value

    if current:
        vertices.append(LwpolylineVertex(**current))
    return vertices


class LwpolylineParser(EntityParser):
    entity_type = EntityType.LWPOLYLINE
    entity_class = LwpolylineEntity

    def init_fields(self, fields: Fields) -> None:
        fields["vertices"] = []
        fields["number_of_vertices"] = 0

    def parse_group(self, group: Group, scanner: DXFScanner, fields: Fields, reporter: IReporter) -> bool:
        code = group.code
        if code == 38:
            fields["elevation"] = group.value
        elif code == 39:
            fields["depth"] = group.value
        elif code == 70:
            fields["shape"] = (group.value & 1) == 1
            fields["has_continuous_linetype_pattern"] = (group.value & 128) == 128
        elif code == 90:
            fields["number_of_vertices"] = group.value
        elif code == 10:
            expected = fields["number_of_vertices"]
            vertices = fields["vertices"]
            if 0 < expected <= len(vertices):
                return False
            remaining = expected - len(vertices) if expected > 0 else 0
            vertices.extend(parse_lwpolyline_vertices(scanner, remaining))
        elif code == 43:
            if group.value != 0:
                fields["width"] = group.value
        elif code == 210:
            fields["extrusion_direction_x"] = group.value
        elif code == 220:
            fields["extrusion_direction_y"] = group.value
        elif code == 230:
            fields["extrusion_direction_z"] = group.value
        else:
            return False
        return True

    def finish(self, fields: Fields, reporter: IReporter) -> None:
        vertices = fields["vertices"]
        expected = fields["number_of_vertices"]
        if expected and expected != len(vertices):
            reporter.report(
                AnomalyKind.VERTEX_COUNT_MISMATCH,
                f"LWPOLYLINE {fields.get('handle')} declares {expected} vertices but has {len(vertices)}",
                code=90,
                value=expected,
                context=self.entity_type.value,
            )
        fields["vertices"] = tuple(vertices)


class VertexParser(EntityParser):
    entity_type = EntityType.VERTEX
    entity_class = VertexEntity

    def init_fields(self, fields: Fields) -> None:
        fields["face_indices"] = []

    def parse_group(self, group: Group, scanner: DXFScanner, fields: Fields, reporter: IReporter) -> bool:
        code = group.code
        if code == 10:
            fields["x"] = group.value
        elif code == 20:
            fields["y"] = group.value
        elif code == 30:
            fields["z"] = group.value
        elif code in (40, 41, 42):
            # zero widths and bulge mean "not set"
            if group.value != 0:
                fields[("start_width", "end_width", "bulge")[code - 40]] = group.value
        elif code == 50:
            fields["curve_fit_tangent_direction"] = group.value
        elif code == 70:
            flags = group.value
            fields["curve_fitting_vertex"] = (flags & 1) != 0
            fields["curve_fit_tangent"] = (flags & 2) != 0
            fields["spline_vertex"] = (flags & 8) != 0
            fields["spline_control_point"] = (flags & 16) != 0
            fields["three_d_polyline_vertex"] = (flags & 32) != 0
            fields["three_d_polyline_mesh"] = (flags & 64) != 0
            fields["polyface_mesh_vertex"] = (flags & 128) != 0
        elif 71 <= code <= 74:
            fields["face_indices"].append(group.value)
        else:
            return False
        return True

    def finish(self, fields: Fields, reporter: IReporter) -> None:
        fields["face_indices"] = tuple(fields["face_indices"])


class PolylineParser(EntityParser):
    """Heavy polyline, collects the VERTEX entities that follow it.

    The polyline ends with a SEQEND entity which is consumed together
    with the vertices.
    """

    entity_type = EntityType.POLYLINE
    entity_class = PolylineEntity

    def __init__(self, vertex_parser: VertexParser | None = None) -> None:
        self.vertex_parser = vertex_parser or VertexParser()

    def parse(self, scanner: DXFScanner, reporter: IReporter) -> PolylineEntity:
        polyline = super().parse(scanner, reporter)
        vertices = self.parse_vertices(scanner, reporter)
        return dataclasses.replace(polyline, vertices=tuple(vertices))

    def parse_vertices(self, scanner: DXFScanner, reporter: IReporter) -> list[VertexEntity]:
        vertices: list[VertexEntity] = []
        while True:
            group = scanner.next().peek()
            if group.code == 0 and group.value == EntityType.VERTEX.value:
                vertices.append(self.vertex_parser.parse(scanner, reporter))
            elif group.code == 0 and group.value == "SEQEND":
                skip_to_next_entity(scanner)
                break
            else:
                log.debug(f"POLYLINE ended by {group} without SEQEND")
                scanner.rewind()
                break
        return vertices

    def parse_group(self, group: Group, scanner: DXFScanner, fields: Fields, reporter: IReporter) -> bool:
        code = group.code
        if code == 66:
            fields["vertices_follow"] = group.value != 0
        elif code == 10:
            fields["elevation"] = parse_point(scanner)
        elif code == 39:
            fields["thickness"] = group.value
        elif code == 70:
            fields["flags"] = group.value
        elif code == 40:
            fields["default_start_width"] = group.value
        elif code == 41:
            fields["default_end_width"] = group.value
        elif code == 71:
            fields["mesh_m_count"] = group.value
        elif code == 72:
            fields["mesh_n_count"] = group.value
        elif code == 73:
            fields["smooth_m_density"] = group.value
        elif code == 74:
            fields["smooth_n_density"] = group.value
        elif code == 75:
            fields["curve_type"] = group.value
        elif code == 210:
            fields["extrusion_direction"] = parse_point(scanner)
        else:
            return False
        return True
