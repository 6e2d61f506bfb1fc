"""Data models for parsed DXF documents.

This module contains the dataclasses that represent everything the parser
produces: typed groups, points, the entity variants, symbol table records,
block definitions and the top-level Document that owns them.
"""

import logging
import math
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from .reporting import Anomaly, AnomalyKind

if TYPE_CHECKING:
    from .protocols import IReporter

log = logging.getLogger(__name__)


GroupValue = str | int | float | bool | None


@dataclass(frozen=True, slots=True)
class Group:
    """One (code, value) pair of a DXF stream.

    Parameters
    ----------
    code : int
        Group code, determines the type of ``value``
    value : str | int | float | bool | None
        Typed group value, ``None`` if the raw value could not be converted
    """

    code: int
    value: GroupValue

    def __repr__(self) -> str:
        return f"Group({self.code}, {self.value!r})"


@dataclass(frozen=True, slots=True)
class Point:
    """A 2D or 3D point read from consecutive coordinate groups.

    Parameters
    ----------
    x : float
        Value of the base group code
    y : float | None
        Value of the base code + 10, if present
    z : float | None
        Value of the base code + 20, ``None`` for 2D points
    """

    x: float
    y: float | None = None
    z: float | None = None

    @property
    def is_3d(self) -> bool:
        return self.z is not None

    def to_dict(self) -> dict[str, float]:
        """Convert point to dictionary format, omitting absent coordinates."""
        point = {"x": self.x}
        if self.y is not None:
            point["y"] = self.y
        if self.z is not None:
            point["z"] = self.z
        return point


HeaderValue = str | int | float | bool | Point | None


@dataclass(frozen=True, slots=True)
class AppGroup:
    """Application defined group (102 ``{NAME`` ... 102 ``}``).

    Parameters
    ----------
    name : str
        Application name without the leading brace, e.g. ``ACAD_REACTORS``
    hard_owner_handle : str | None
        Value of group 330 inside the app group
    soft_owner_handle : str | None
        Value of group 360 inside the app group
    groups : tuple[Group, ...]
        All other groups found inside the app group
    """

    name: str
    hard_owner_handle: str | None = None
    soft_owner_handle: str | None = None
    groups: tuple[Group, ...] = ()


class EntityType(Enum):
    """Entity kinds the parser builds typed records for."""

    LINE = "LINE"
    ARC = "ARC"
    CIRCLE = "CIRCLE"
    TEXT = "TEXT"
    MTEXT = "MTEXT"
    SPLINE = "SPLINE"
    ELLIPSE = "ELLIPSE"
    INSERT = "INSERT"
    SOLID = "SOLID"
    POINT = "POINT"
    VERTEX = "VERTEX"
    ATTDEF = "ATTDEF"
    DIMENSION = "DIMENSION"
    LWPOLYLINE = "LWPOLYLINE"
    POLYLINE = "POLYLINE"


BYLAYER = "BYLAYER"


@dataclass(frozen=True, kw_only=True)
class Entity:
    """Common header shared by all entity kinds.

    ``color_index`` keeps the string ``"BYLAYER"`` until a group 62 is read,
    after that it holds the AutoCAD color index (0 = BYBLOCK, 256 = BYLAYER).
    """

    type: EntityType
    handle: str | None = None
    layer: str | None = None
    line_type: str = BYLAYER
    line_type_scale: float = 1.0
    color_index: int | str = BYLAYER
    visible: bool = True
    in_paper_space: bool = False
    owner_handle: str | None = None
    app_groups: dict[str, AppGroup] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class LineEntity(Entity):
    type: EntityType = EntityType.LINE
    vertices: tuple[Point, ...] = ()
    extrusion_direction: Point | None = None


@dataclass(frozen=True, kw_only=True)
class CircleEntity(Entity):
    """Circle, angles in radians.

    ``angle_length`` is only set when an end angle was read.
    """

    type: EntityType = EntityType.CIRCLE
    center: Point | None = None
    radius: float | None = None
    start_angle: float | None = None
    end_angle: float | None = None
    angle_length: float | None = None
    thickness: float | None = None
    extrusion_direction: Point | None = None


@dataclass(frozen=True, kw_only=True)
class ArcEntity(CircleEntity):
    type: EntityType = EntityType.ARC


@dataclass(frozen=True, kw_only=True)
class EllipseEntity(Entity):
    """Ellipse, start and end angle are parameters in radians."""

    type: EntityType = EntityType.ELLIPSE
    center: Point | None = None
    major_axis_end_point: Point | None = None
    axis_ratio: float | None = None
    start_angle: float | None = None
    end_angle: float | None = None
    extrusion_direction: Point | None = None


@dataclass(frozen=True, kw_only=True)
class TextEntity(Entity):
    """Single line text.

    ``halign`` and ``valign`` are only meaningful if ``end_point`` is set.
    """

    type: EntityType = EntityType.TEXT
    text: str | None = None
    start_point: Point | None = None
    end_point: Point | None = None
    text_height: float | None = None
    x_scale: float | None = None
    rotation: float | None = None
    text_style: str | None = None
    halign: int | None = None
    valign: int | None = None


@dataclass(frozen=True, kw_only=True)
class MTextEntity(Entity):
    type: EntityType = EntityType.MTEXT
    text: str | None = None
    position: Point | None = None
    height: float | None = None
    width: float | None = None
    rotation: float | None = None
    text_style: str | None = None
    attachment_point: int | None = None
    drawing_direction: int | None = None


@dataclass(frozen=True, kw_only=True)
class SplineEntity(Entity):
    type: EntityType = EntityType.SPLINE
    control_points: tuple[Point, ...] = ()
    fit_points: tuple[Point, ...] = ()
    start_tangent: Point | None = None
    end_tangent: Point | None = None
    knot_values: tuple[float, ...] = ()
    closed: bool = False
    periodic: bool = False
    rational: bool = False
    planar: bool = False
    linear: bool = False
    degree_of_spline_curve: int | None = None
    number_of_knots: int | None = None
    number_of_control_points: int | None = None
    number_of_fit_points: int | None = None
    normal_vector: Point | None = None


@dataclass(frozen=True, kw_only=True)
class PointEntity(Entity):
    type: EntityType = EntityType.POINT
    position: Point | None = None
    thickness: float | None = None
    extrusion_direction: Point | None = None


@dataclass(frozen=True, kw_only=True)
class VertexEntity(Entity):
    """Vertex of a POLYLINE, widths and bulge are only kept when nonzero."""

    type: EntityType = EntityType.VERTEX
    x: float | None = None
    y: float | None = None
    z: float | None = None
    start_width: float | None = None
    end_width: float | None = None
    bulge: float | None = None
    curve_fitting_vertex: bool = False
    curve_fit_tangent: bool = False
    spline_vertex: bool = False
    spline_control_point: bool = False
    three_d_polyline_vertex: bool = False
    three_d_polyline_mesh: bool = False
    polyface_mesh_vertex: bool = False
    curve_fit_tangent_direction: float | None = None
    face_indices: tuple[int, ...] = ()


@dataclass(frozen=True, kw_only=True)
class SolidEntity(Entity):
    """Filled triangle or quadrilateral, ``points`` holds the corners by index."""

    type: EntityType = EntityType.SOLID
    points: tuple[Point | None, ...] = (None, None, None, None)
    extrusion_direction: Point | None = None


@dataclass(frozen=True, kw_only=True)
class InsertEntity(Entity):
    """Block reference, ``name`` is the referenced block."""

    type: EntityType = EntityType.INSERT
    name: str | None = None
    position: Point | None = None
    x_scale: float | None = None
    y_scale: float | None = None
    z_scale: float | None = None
    rotation: float | None = None
    column_count: int | None = None
    row_count: int | None = None
    column_spacing: float | None = None
    row_spacing: float | None = None
    attributes_follow: bool = False
    extrusion_direction: Point | None = None


@dataclass(frozen=True, kw_only=True)
class AttdefEntity(Entity):
    type: EntityType = EntityType.ATTDEF
    text: str | None = None
    tag: str | None = None
    prompt: str | None = None
    text_style: str = "STANDARD"
    start_point: Point | None = None
    end_point: Point | None = None
    thickness: float | None = None
    text_height: float | None = None
    scale: float = 1.0
    rotation: float | None = None
    oblique_angle: float | None = None
    invisible: bool = False
    constant: bool = False
    verification_required: bool = False
    preset: bool = False
    backwards: bool = False
    mirrored: bool = False
    horizontal_justification: int | None = None
    field_length: int | None = None
    vertical_justification: int | None = None
    extrusion_direction_x: float | None = None
    extrusion_direction_y: float | None = None
    extrusion_direction_z: float | None = None


@dataclass(frozen=True, kw_only=True)
class DimensionEntity(Entity):
    """Dimension, ``block`` names the anonymous block holding its geometry."""

    type: EntityType = EntityType.DIMENSION
    block: str | None = None
    dimension_type: int | None = None
    anchor_point: Point | None = None
    middle_of_text: Point | None = None
    actual_measurement: float | None = None
    text: str | None = None
    angle: float | None = None
    attachment_point: int | None = None


@dataclass(frozen=True, slots=True)
class LwpolylineVertex:
    x: float
    y: float | None = None
    z: float | None = None
    start_width: float | None = None
    end_width: float | None = None
    bulge: float | None = None


@dataclass(frozen=True, kw_only=True)
class LwpolylineEntity(Entity):
    type: EntityType = EntityType.LWPOLYLINE
    elevation: float | None = None
    depth: float | None = None
    shape: bool = False
    has_continuous_linetype_pattern: bool = False
    number_of_vertices: int = 0
    vertices: tuple[LwpolylineVertex, ...] = ()
    width: float | None = None
    extrusion_direction_x: float | None = None
    extrusion_direction_y: float | None = None
    extrusion_direction_z: float | None = None


@dataclass(frozen=True, kw_only=True)
class PolylineEntity(Entity):
    """Heavy polyline, owns the VERTEX entities that followed it up to SEQEND."""

    type: EntityType = EntityType.POLYLINE
    vertices_follow: bool = False
    elevation: Point | None = None
    thickness: float | None = None
    flags: int = 0
    default_start_width: float | None = None
    default_end_width: float | None = None
    mesh_m_count: int | None = None
    mesh_n_count: int | None = None
    smooth_m_density: int | None = None
    smooth_n_density: int | None = None
    curve_type: int | None = None
    extrusion_direction: Point | None = None
    vertices: tuple[VertexEntity, ...] = ()

    @property
    def closed(self) -> bool:
        return bool(self.flags & 1)

    @property
    def is_3d_polyline(self) -> bool:
        return bool(self.flags & 8)

    @property
    def is_3d_mesh(self) -> bool:
        return bool(self.flags & 16)

    @property
    def is_polyface_mesh(self) -> bool:
        return bool(self.flags & 64)


@dataclass(frozen=True, kw_only=True)
class TableRecord:
    """Fields shared by all symbol table records."""

    name: str | None = None
    handle: str | None = None
    owner_handle: str | None = None
    app_groups: dict[str, AppGroup] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class LineTypeRecord(TableRecord):
    description: str | None = None
    flags: int | None = None
    alignment: int | None = None
    elements: int | None = None
    pattern_length: float | None = None
    pattern: tuple[float, ...] = ()


@dataclass(frozen=True, kw_only=True)
class ViewportRecord(TableRecord):
    flags: int | None = None
    lower_left_corner: Point | None = None
    upper_right_corner: Point | None = None
    center: Point | None = None
    snap_base_point: Point | None = None
    snap_spacing: Point | None = None
    grid_spacing: Point | None = None
    view_direction_from_target: Point | None = None
    view_target: Point | None = None
    view_height: float | None = None
    aspect_ratio: float | None = None
    lens_length: float | None = None
    front_clipping_plane: float | None = None
    back_clipping_plane: float | None = None
    snap_rotation_angle: float | None = None
    view_twist_angle: float | None = None
    orthographic_type: int | None = None
    ucs_origin: Point | None = None
    ucs_x_axis: Point | None = None
    ucs_y_axis: Point | None = None
    render_mode: int | None = None
    default_lighting_on: bool | None = None
    ambient_color: int | str | None = None


@dataclass(frozen=True, kw_only=True)
class LayerRecord(TableRecord):
    """Layer, a negative color index in the file means the layer is off."""

    line_type: str | None = None
    color_index: int | None = None
    visible: bool = True
    true_color: int | None = None
    frozen: bool = False
    locked: bool = False
    plottable: bool = True
    line_weight: int | None = None


@dataclass(frozen=True, kw_only=True)
class DimStyleRecord(TableRecord):
    std_flags: int | None = None
    text_style_handle: str | None = None
    variables: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class Table:
    """Symbol table, VPORT keeps a list since names repeat across configurations."""

    name: str
    handle: str | None = None
    max_entries: int | None = None
    owner_handle: str | None = None
    app_groups: dict[str, AppGroup] = field(default_factory=dict)
    records: dict[str, TableRecord] | list[TableRecord] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class BlockBegin:
    name: str | None = None
    handle: str | None = None
    layer: str | None = None
    position: Point | None = None
    paper_space: bool = False
    type: int | None = None
    owner_handle: str | None = None
    xref_path: str | None = None
    alt_name: str | None = None
    app_groups: dict[str, AppGroup] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class BlockEnd:
    handle: str | None = None
    layer: str | None = None
    owner_handle: str | None = None
    app_groups: dict[str, AppGroup] = field(default_factory=dict)


@dataclass(frozen=True)
class Block:
    begin_block: BlockBegin
    entities: tuple[Entity, ...] = ()
    end_block: BlockEnd = field(default_factory=BlockEnd)

    @property
    def name(self) -> str | None:
        return self.begin_block.name


@dataclass
class Document:
    """Top-level result of a parse.

    The document owns all nested structures. It is filled section by
    section while parsing and handed to the caller once EOF is reached.
    """

    header: dict[str, HeaderValue] = field(default_factory=dict)
    tables: dict[str, Table] = field(default_factory=dict)
    blocks: dict[str, Block] = field(default_factory=dict)
    entities: list[Entity] = field(default_factory=list)
    anomalies: list[Anomaly] = field(default_factory=list)

    def query(self, *types: EntityType | str) -> Iterator[Entity]:
        """Iterate the top-level entities of the given kinds.

        Parameters
        ----------
        *types : EntityType | str
            Entity kinds to yield, all entities if empty

        Returns
        -------
        Iterator[Entity]
            Matching entities in drawing order
        """
        wanted = {EntityType(entity_type) for entity_type in types}
        for entity in self.entities:
            if not wanted or entity.type in wanted:
                yield entity

    def resolve_block(self, name: str, reporter: "IReporter | None" = None) -> Block | None:
        """Look up a block definition referenced by an INSERT or DIMENSION.

        Parameters
        ----------
        name : str
            Name of the referenced block
        reporter : IReporter | None
            Sink for the missing-block anomaly, the module logger if None

        Returns
        -------
        Block | None
            The block definition or None if the document has none by that name
        """
        block = self.blocks.get(name)
        if block is not None:
            return block
        message = f"Block '{name}' is referenced but not defined"
        if reporter is None:
            log.warning(message)
        else:
            reporter.report(AnomalyKind.MISSING_BLOCK, message, value=name, context="BLOCKS")
        return None

    def layer_names(self) -> list[str]:
        """Get all layer names from the LAYER table."""
        table = self.tables.get("LAYER")
        if table is None or not isinstance(table.records, dict):
            return []
        return list(table.records)

    @property
    def version(self) -> str | None:
        value = self.header.get("$ACADVER")
        return value if isinstance(value, str) else None


def wrap_angle_length(start_angle: float, end_angle: float) -> float:
    """Angle swept counter-clockwise from ``start_angle`` to ``end_angle``."""
    if end_angle < start_angle:
        return end_angle + 2 * math.pi - start_angle
    return end_angle - start_angle
