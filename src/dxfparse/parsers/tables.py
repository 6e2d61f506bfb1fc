"""TABLES section parsing.

Each TABLE holds a small header followed by its records. Records start
with a code 0 group naming the record type and end at the next code 0
group. Only LTYPE, VPORT, LAYER and DIMSTYLE records are parsed, the
other known tables are skipped as a whole.
"""

import logging
from typing import Any

from ..colors import true_color
from ..io.scanner import DXFScanner
from ..models import (
    DimStyleRecord,
    Group,
    LayerRecord,
    LineTypeRecord,
    Table,
    TableRecord,
    ViewportRecord,
)
from ..protocols import IReporter
from ..reporting import AnomalyKind
from .common import app_group_name, parse_app_group, parse_point
from .entities import skip_to_next_entity

log = logging.getLogger(__name__)

CONTEXT = "TABLES"
SUBCLASS_MARKER = 100

UNSUPPORTED_TABLES = frozenset({"BLOCK_RECORD", "STYLE", "UCS", "VIEW", "APPID"})

# group code of a DIMSTYLE record -> dimension variable it stores
DIMSTYLE_VARIABLES: dict[int, str] = {
    3: "DIMPOST",
    4: "DIMAPOST",
    5: "DIMBLK",
    6: "DIMBLK1",
    7: "DIMBLK2",
    40: "DIMSCALE",
    41: "DIMASZ",
    42: "DIMEXO",
    43: "DIMDLI",
    44: "DIMEXE",
    45: "DIMRND",
    46: "DIMDLE",
    47: "DIMTP",
    48: "DIMTM",
    71: "DIMTOL",
    72: "DIMLIM",
    73: "DIMTIH",
    74: "DIMTOH",
    75: "DIMSE1",
    76: "DIMSE2",
    77: "DIMTAD",
    78: "DIMZIN",
    140: "DIMTXT",
    141: "DIMCEN",
    142: "DIMTSZ",
    143: "DIMALTF",
    144: "DIMLFAC",
    145: "DIMTVP",
    146: "DIMTFAC",
    147: "DIMGAP",
    170: "DIMALT",
    171: "DIMALTD",
    172: "DIMTOFL",
    173: "DIMSAH",
    174: "DIMTIX",
    175: "DIMSOXD",
    176: "DIMCLRD",
    177: "DIMCLRE",
    178: "DIMCLRT",
    270: "DIMUNIT",
    271: "DIMDEC",
    272: "DIMTDEC",
    273: "DIMALTU",
    274: "DIMALTTD",
    275: "DIMAUNIT",
    280: "DIMJUST",
    281: "DIMSD1",
    282: "DIMSD2",
    283: "DIMTOLJ",
    284: "DIMTZIN",
    285: "DIMALTZ",
    286: "DIMALTTZ",
    287: "DIMFIT",
    288: "DIMUPT",
}

Fields = dict[str, Any]


class RecordParser:
    """Base parser for the records of one symbol table.

    Record specific codes are tried first, so a table can give one of the
    common codes another meaning (DIMSTYLE stores DIMBLK in group 5).
    """

    table_name: str
    record_class: type[TableRecord] = TableRecord

    def parse(self, scanner: DXFScanner, reporter: IReporter) -> TableRecord:
        """Parse one record, the scanner must be at its ``(0, TYPE)`` group."""
        fields: Fields = {}
        self.init_fields(fields)
        while True:
            group = scanner.next().peek()
            if group.code == 0:
                scanner.rewind()
                break
            if group.code == SUBCLASS_MARKER or group.value is None:
                continue
            if self.parse_group(group, scanner, fields, reporter):
                continue
            if self.parse_common_group(group, scanner, fields, reporter):
                continue
            reporter.unhandled_group(group, self.table_name)
        self.finish(fields, reporter)
        return self.record_class(**fields)

    def parse_common_group(self, group: Group, scanner: DXFScanner, fields: Fields, reporter: IReporter) -> bool:
        if group.code == 2:
            fields["name"] = group.value
        elif group.code == 5:
            fields["handle"] = group.value
        elif group.code == 330:
            fields["owner_handle"] = group.value
        elif group.code == 102:
            app_groups = fields.setdefault("app_groups", {})
            app_groups[app_group_name(group)] = parse_app_group(scanner, reporter, self.table_name)
        else:
            return False
        return True

    def init_fields(self, fields: Fields) -> None:
        """Set defaults before the groups are read."""

    def parse_group(self, group: Group, scanner: DXFScanner, fields: Fields, reporter: IReporter) -> bool:
        return False

    def finish(self, fields: Fields, reporter: IReporter) -> None:
        """Derive fields once all groups are read."""


class LineTypeParser(RecordParser):
    table_name = "LTYPE"
    record_class = LineTypeRecord

    def init_fields(self, fields: Fields) -> None:
        fields["pattern"] = []

    def parse_group(self, group: Group, scanner: DXFScanner, fields: Fields, reporter: IReporter) -> bool:
        code = group.code
        if code == 3:
            fields["description"] = group.value
        elif code == 70:
            fields["flags"] = group.value
        elif code == 72:
            fields["alignment"] = group.value
        elif code == 73:
            # number of dashes, dots and spaces
            fields["elements"] = group.value
        elif code == 40:
            fields["pattern_length"] = group.value
        elif code == 49:
            fields["pattern"].append(group.value)
        else:
            return False
        return True

    def finish(self, fields: Fields, reporter: IReporter) -> None:
        pattern = fields["pattern"]
        elements = fields.get("elements") or 0
        if elements > 0 and elements != len(pattern):
            reporter.report(
                AnomalyKind.PATTERN_LENGTH_MISMATCH,
                f"LTYPE '{fields.get('name')}' declares {elements} pattern elements but has {len(pattern)}",
                code=73,
                value=fields.get("name"),
                context=self.table_name,
            )
        fields["pattern"] = tuple(pattern)


class ViewportParser(RecordParser):
    table_name = "VPORT"
    record_class = ViewportRecord

    POINTS = {
        10: "lower_left_corner",
        11: "upper_right_corner",
        12: "center",
        13: "snap_base_point",
        14: "snap_spacing",
        15: "grid_spacing",
        16: "view_direction_from_target",
        17: "view_target",
        110: "ucs_origin",
        111: "ucs_x_axis",
        112: "ucs_y_axis",
    }
    VALUES = {
        40: "view_height",
        41: "aspect_ratio",
        42: "lens_length",
        43: "front_clipping_plane",
        44: "back_clipping_plane",
        45: "view_height",
        50: "snap_rotation_angle",
        51: "view_twist_angle",
        70: "flags",
        79: "orthographic_type",
        281: "render_mode",
        292: "default_lighting_on",
        63: "ambient_color",
        421: "ambient_color",
        431: "ambient_color",
    }

    def parse_group(self, group: Group, scanner: DXFScanner, fields: Fields, reporter: IReporter) -> bool:
        if group.code in self.POINTS:
            fields[self.POINTS[group.code]] = parse_point(scanner)
        elif group.code in self.VALUES:
            fields[self.VALUES[group.code]] = group.value
        else:
            return False
        return True


class LayerParser(RecordParser):
    table_name = "LAYER"
    record_class = LayerRecord

    def parse_group(self, group: Group, scanner: DXFScanner, fields: Fields, reporter: IReporter) -> bool:
        code = group.code
        if code == 6:
            fields["line_type"] = group.value
        elif code == 62:
            # a negative color number turns the layer off
            fields["visible"] = group.value >= 0
            fields["color_index"] = abs(group.value)
            fields["true_color"] = true_color(abs(group.value))
        elif code == 70:
            fields["frozen"] = (group.value & 1) != 0 or (group.value & 2) != 0
            fields["locked"] = (group.value & 4) != 0
        elif code == 290:
            fields["plottable"] = group.value
        elif code == 370:
            fields["line_weight"] = group.value
        else:
            return False
        return True


class DimStyleParser(RecordParser):
    """Dimension style, the DIMxxx variables are kept by name."""

    table_name = "DIMSTYLE"
    record_class = DimStyleRecord

    def init_fields(self, fields: Fields) -> None:
        fields["variables"] = {}

    def parse_group(self, group: Group, scanner: DXFScanner, fields: Fields, reporter: IReporter) -> bool:
        code = group.code
        if code in DIMSTYLE_VARIABLES:
            fields["variables"][DIMSTYLE_VARIABLES[code]] = group.value
        elif code == 105:
            fields["handle"] = group.value
        elif code == 70:
            fields["std_flags"] = group.value
        elif code == 340:
            fields["text_style_handle"] = group.value
        else:
            return False
        return True


RECORD_PARSERS: dict[str, RecordParser] = {
    parser.table_name: parser
    for parser in (LineTypeParser(), ViewportParser(), LayerParser(), DimStyleParser())
}


def _store_record(table_name: str, records: dict | list, record: TableRecord, reporter: IReporter) -> None:
    if isinstance(records, list):
        records.append(record)
        return
    if record.name is None:
        reporter.report(
            AnomalyKind.MISSING_RECORD_NAME,
            f"{table_name} record with handle {record.handle} has no name, dropped",
            value=record.handle,
            context=table_name,
        )
        return
    records[record.name] = record


def parse_table(scanner: DXFScanner, reporter: IReporter) -> Table | None:
    """Parse one table up to its ENDTAB.

    Parameters
    ----------
    scanner : DXFScanner
        Scanner positioned at the ``(0, TABLE)`` group
    reporter : IReporter
        Sink for unsupported tables and unhandled groups

    Returns
    -------
    Table | None
        The table, or None for tables without a record parser. The
        scanner is left at the ENDTAB group.
    """
    group = scanner.next().peek()
    if group.code == 2:
        name = group.value
    else:
        # nameless table, the group is read again by the table loop
        scanner.rewind()
        name = None

    record_parser = RECORD_PARSERS.get(name)
    if record_parser is None:
        if name in UNSUPPORTED_TABLES:
            reporter.report(
                AnomalyKind.UNSUPPORTED_TABLE,
                f"Skipping table '{name}', its records are not parsed",
                value=name,
                context=CONTEXT,
            )
        else:
            reporter.report(AnomalyKind.UNKNOWN_TABLE, f"Skipping unknown table '{name}'", value=name, context=CONTEXT)

    fields: Fields = {"name": name}
    records: dict[str, TableRecord] | list[TableRecord] = [] if name == "VPORT" else {}
    while True:
        group = scanner.next().peek()
        if group.code == 0:
            if group.value == "ENDTAB":
                break
            if record_parser is None:
                skip_to_next_entity(scanner)
                continue
            if group.value != name:
                log.debug(f"Record type {group.value} in table {name}")
            record = record_parser.parse(scanner, reporter)
            _store_record(name, records, record, reporter)
            continue
        if group.value is None or group.code == SUBCLASS_MARKER:
            continue

        if group.code == 5:
            fields["handle"] = group.value
        elif group.code == 70:
            fields["max_entries"] = group.value
        elif group.code == 330:
            fields["owner_handle"] = group.value
        elif group.code == 102:
            app_groups = fields.setdefault("app_groups", {})
            app_groups[app_group_name(group)] = parse_app_group(scanner, reporter, name or CONTEXT)
        else:
            reporter.unhandled_group(group, name or CONTEXT)

    if record_parser is None:
        return None
    log.debug(f"Table {name}: {len(records)} records")
    return Table(records=records, **fields)


def parse_tables(scanner: DXFScanner, reporter: IReporter) -> dict[str, Table]:
    """Parse all tables of the TABLES section.

    Parameters
    ----------
    scanner : DXFScanner
        Scanner positioned at the ``(2, TABLES)`` group
    reporter : IReporter
        Sink for non-fatal anomalies

    Returns
    -------
    dict[str, Table]
        Parsed tables by name. The scanner is left at the last group
        before ENDSEC.
    """
    tables: dict[str, Table] = {}
    while True:
        group = scanner.next().peek()
        if scanner.is_start_of_table():
            table = parse_table(scanner, reporter)
            if table is not None:
                tables[table.name] = table
        elif scanner.is_end_of_section():
            scanner.rewind()
            break
        else:
            reporter.unhandled_group(group, CONTEXT)
    return tables
