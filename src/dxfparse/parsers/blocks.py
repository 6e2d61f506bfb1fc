"""BLOCKS section parsing."""

import logging
from typing import Any

from ..io.scanner import DXFScanner
from ..models import Block, BlockBegin, BlockEnd, Entity
from ..protocols import IReporter
from ..reporting import AnomalyKind
from .common import app_group_name, parse_app_group, parse_point
from .entities import parse_entity

log = logging.getLogger(__name__)

CONTEXT = "BLOCKS"
SUBCLASS_MARKER = 100
BLOCK_END_MARKER = "AcDbBlockEnd"


def parse_begin_block(scanner: DXFScanner, reporter: IReporter) -> BlockBegin:
    """Parse a BLOCK header up to the first entity or ENDBLK.

    Parameters
    ----------
    scanner : DXFScanner
        Scanner positioned at the ``(0, BLOCK)`` group
    reporter : IReporter
        Sink for unhandled groups

    Returns
    -------
    BlockBegin
        Block header, the scanner is left at its last group
    """
    fields: dict[str, Any] = {}
    while True:
        group = scanner.next().peek()
        code = group.code
        if code == 0:
            scanner.rewind()
            break
        if code == SUBCLASS_MARKER or group.value is None:
            continue

        if code == 1:
            fields["xref_path"] = group.value
        elif code == 2:
            fields["name"] = group.value
        elif code == 3:
            fields["alt_name"] = group.value
        elif code == 5:
            fields["handle"] = group.value
        elif code == 8:
            fields["layer"] = group.value
        elif code == 10:
            fields["position"] = parse_point(scanner)
        elif code == 67:
            fields["paper_space"] = group.value == 1
        elif code == 70:
            # 0 is an ordinary block
            if group.value != 0:
                fields["type"] = group.value
        elif code == 102:
            app_groups = fields.setdefault("app_groups", {})
            app_groups[app_group_name(group)] = parse_app_group(scanner, reporter, "BLOCK")
        elif code == 330:
            fields["owner_handle"] = group.value
        else:
            reporter.unhandled_group(group, "BLOCK")
    return BlockBegin(**fields)


def parse_end_block(scanner: DXFScanner, reporter: IReporter) -> BlockEnd:
    """Parse an ENDBLK trailer.

    The trailer ends with the ``AcDbBlockEnd`` subclass marker. Files
    without subclass markers end it at the next code 0 group instead.
    """
    fields: dict[str, Any] = {}
    while True:
        group = scanner.next().peek()
        code = group.code
        if code == SUBCLASS_MARKER and group.value == BLOCK_END_MARKER:
            break
        if code == 0:
            scanner.rewind()
            break
        if code == SUBCLASS_MARKER or group.value is None:
            continue

        if code == 5:
            fields["handle"] = group.value
        elif code == 8:
            fields["layer"] = group.value
        elif code == 102:
            app_groups = fields.setdefault("app_groups", {})
            app_groups[app_group_name(group)] = parse_app_group(scanner, reporter, "ENDBLK")
        elif code == 330:
            fields["owner_handle"] = group.value
        else:
            reporter.unhandled_group(group, "ENDBLK")
    return BlockEnd(**fields)


def _report_unclosed(begin_block: BlockBegin, closed_by: str, reporter: IReporter) -> None:
    reporter.report(
        AnomalyKind.UNCLOSED_BLOCK,
        f"Block '{begin_block.name}' is not closed by ENDBLK before {closed_by}, dropped",
        value=begin_block.name,
        context=CONTEXT,
    )


def parse_blocks(scanner: DXFScanner, reporter: IReporter) -> dict[str, Block]:
    """Parse all block definitions of the BLOCKS section.

    Blocks without a name are reported and dropped.

    Parameters
    ----------
    scanner : DXFScanner
        Scanner positioned at the ``(2, BLOCKS)`` group
    reporter : IReporter
        Sink for non-fatal anomalies

    Returns
    -------
    dict[str, Block]
        Block definitions by name. The scanner is left at the last group
        before ENDSEC.
    """
    blocks: dict[str, Block] = {}
    begin_block: BlockBegin | None = None
    entities: list[Entity] = []

    while True:
        group = scanner.next().peek()
        if group.code != 0:
            reporter.unhandled_group(group, CONTEXT)
            continue
        if scanner.is_end_of_section():
            if begin_block is not None:
                _report_unclosed(begin_block, "ENDSEC", reporter)
            scanner.rewind()
            break

        if scanner.is_start_of_block():
            if begin_block is not None:
                _report_unclosed(begin_block, "BLOCK", reporter)
            begin_block = parse_begin_block(scanner, reporter)
            entities = []
        elif scanner.is_end_of_block():
            end_block = parse_end_block(scanner, reporter)
            if begin_block is None:
                reporter.report(
                    AnomalyKind.ORPHAN_BLOCK_END,
                    f"ENDBLK with handle {end_block.handle} has no BLOCK",
                    value=end_block.handle,
                    context=CONTEXT,
                )
            elif begin_block.name is None:
                reporter.report(
                    AnomalyKind.MISSING_BLOCK_NAME,
                    f"Block with handle {begin_block.handle} is missing a name, dropped",
                    value=begin_block.handle,
                    context=CONTEXT,
                )
            else:
                blocks[begin_block.name] = Block(begin_block, tuple(entities), end_block)
            begin_block = None
            entities = []
        else:
            entity = parse_entity(scanner, reporter)
            if entity is None:
                continue
            if begin_block is None:
                reporter.report(
                    AnomalyKind.ENTITY_OUTSIDE_BLOCK,
                    f"{entity.type.value} with handle {entity.handle} is outside of a block, dropped",
                    value=entity.handle,
                    context=CONTEXT,
                )
                continue
            entities.append(entity)

    log.debug(f"Read {len(blocks)} blocks")
    return blocks
