"""Tests for BLOCKS section parsing."""

import pytest

from dxfparse.models import EntityType, Group, Point
from dxfparse.parsers import parse_blocks
from dxfparse.reporting import AnomalyKind

SHAFT_BLOCK = (
    (0, "BLOCK"),
    (5, "20"),
    (330, "1F"),
    (100, "AcDbEntity"),
    (8, "0"),
    (100, "AcDbBlockBegin"),
    (2, "SHAFT"),
    (70, "0"),
    (10, "1.0"),
    (20, "2.0"),
    (30, "0.0"),
    (3, "SHAFT"),
    (0, "CIRCLE"),
    (8, "0"),
    (10, "0.0"),
    (20, "0.0"),
    (40, "1.5"),
    (0, "LINE"),
    (10, "-1.0"),
    (20, "0.0"),
    (11, "1.0"),
    (21, "0.0"),
    (0, "ENDBLK"),
    (5, "21"),
    (330, "1F"),
    (100, "AcDbEntity"),
    (8, "0"),
    (100, "AcDbBlockEnd"),
)


@pytest.fixture
def parse_groups(scanner_for, reporter):
    """Parse the given groups as the body of a BLOCKS section."""

    def parse(*groups):
        scanner = scanner_for((2, "BLOCKS"), *groups)
        blocks = parse_blocks(scanner, reporter)
        assert scanner.next().peek() == Group(0, "ENDSEC")
        return blocks

    return parse


class TestParseBlocks:
    """Test block definitions."""

    def test_block_with_entities(self, parse_groups, reporter):
        blocks = parse_groups(*SHAFT_BLOCK)

        block = blocks["SHAFT"]
        assert block.name == "SHAFT"
        assert block.begin_block.handle == "20"
        assert block.begin_block.owner_handle == "1F"
        assert block.begin_block.layer == "0"
        assert block.begin_block.position == Point(1.0, 2.0, 0.0)
        assert block.begin_block.alt_name == "SHAFT"
        assert block.begin_block.type is None
        assert [entity.type for entity in block.entities] == [EntityType.CIRCLE, EntityType.LINE]
        assert block.end_block.handle == "21"
        assert block.end_block.layer == "0"
        assert reporter.anomalies == []

    def test_block_without_subclass_markers(self, parse_groups):
        blocks = parse_groups(
            (0, "BLOCK"),
            (8, "0"),
            (2, "*D1"),
            (70, "1"),
            (67, "1"),
            (0, "ENDBLK"),
            (8, "0"),
        )

        begin_block = blocks["*D1"].begin_block
        assert begin_block.type == 1
        assert begin_block.paper_space is True
        assert blocks["*D1"].entities == ()

    def test_several_blocks(self, parse_groups):
        other = tuple((code, "OTHER" if code in (2, 3) else value) for code, value in SHAFT_BLOCK)

        blocks = parse_groups(*SHAFT_BLOCK, *other)

        assert list(blocks) == ["SHAFT", "OTHER"]

    def test_block_without_name(self, parse_groups, reporter):
        blocks = parse_groups((0, "BLOCK"), (5, "40"), (0, "ENDBLK"))

        assert blocks == {}
        assert reporter.anomalies[0].kind is AnomalyKind.MISSING_BLOCK_NAME
        assert reporter.anomalies[0].value == "40"

    def test_orphan_block_end(self, parse_groups, reporter):
        blocks = parse_groups((0, "ENDBLK"), (5, "30"), (100, "AcDbBlockEnd"), *SHAFT_BLOCK)

        assert list(blocks) == ["SHAFT"]
        assert reporter.anomalies[0].kind is AnomalyKind.ORPHAN_BLOCK_END
        assert reporter.anomalies[0].value == "30"

    def test_unclosed_block_is_dropped(self, parse_groups, reporter):
        blocks = parse_groups((0, "BLOCK"), (2, "OPEN"), (0, "POINT"), (10, "0.0"), (20, "0.0"), *SHAFT_BLOCK)

        assert list(blocks) == ["SHAFT"]
        assert len(blocks["SHAFT"].entities) == 2
        assert [anomaly.kind for anomaly in reporter.anomalies] == [AnomalyKind.UNCLOSED_BLOCK]
        assert reporter.anomalies[0].value == "OPEN"

    def test_block_open_at_section_end(self, parse_groups, reporter):
        blocks = parse_groups(*SHAFT_BLOCK, (0, "BLOCK"), (2, "OPEN"), (0, "POINT"), (10, "0.0"), (20, "0.0"))

        assert list(blocks) == ["SHAFT"]
        assert [anomaly.kind for anomaly in reporter.anomalies] == [AnomalyKind.UNCLOSED_BLOCK]
        assert reporter.anomalies[0].value == "OPEN"

    def test_entity_before_first_block(self, parse_groups, reporter):
        blocks = parse_groups((0, "POINT"), (5, "1A"), (10, "0.0"), (20, "0.0"), *SHAFT_BLOCK)

        assert list(blocks) == ["SHAFT"]
        assert len(blocks["SHAFT"].entities) == 2
        assert [anomaly.kind for anomaly in reporter.anomalies] == [AnomalyKind.ENTITY_OUTSIDE_BLOCK]
        assert reporter.anomalies[0].value == "1A"
