"""Tests for the DXF group scanner."""

import pytest

from dxfparse.errors import AlreadyAtEOF, InvalidGroupCodeError, UnexpectedEndOfInput
from dxfparse.io.scanner import DXFScanner, split_lines
from dxfparse.models import Group
from dxfparse.reporting import AnomalyKind, Reporter


class TestSplitLines:
    """Test line splitting on all line break styles."""

    def test_mixed_line_breaks(self):
        assert split_lines("0\r\nSECTION\r2\nHEADER") == ["0", "SECTION", "2", "HEADER"]


class TestDXFScanner:
    """Test scanner stepping, lookahead and EOF handling."""

    @pytest.fixture
    def scanner(self, build_dxf):
        text = build_dxf((0, "SECTION"), (2, "ENTITIES"), (10, "1.5"), (0, "ENDSEC"), (0, "EOF"))
        return DXFScanner.from_text(text)

    def test_peek_reads_typed_group(self, scanner):
        """Test peek converts the value by its group code."""
        assert scanner.peek() == Group(0, "SECTION")
        assert scanner.next().next().peek() == Group(10, 1.5)

    def test_peek_does_not_advance(self, scanner):
        position = scanner.ftell()

        scanner.peek()
        scanner.peek()

        assert scanner.ftell() == position

    def test_values_are_trimmed(self, build_dxf):
        scanner = DXFScanner.from_text(build_dxf(("  0", "  SECTION  "), (0, "EOF")))

        assert scanner.peek() == Group(0, "SECTION")

    def test_peek_raw_value_keeps_spaces(self, build_dxf):
        scanner = DXFScanner.from_text(build_dxf((3, " chunk "), (0, "EOF")))

        assert scanner.peek() == Group(3, "chunk")
        assert scanner.peek_raw_value() == " chunk "
        assert scanner.ftell() == 0

    def test_next_then_rewind_restores_position(self, scanner):
        """Test rewind symmetry for every position with data left."""
        while scanner.has_next():
            position = scanner.ftell()
            before = scanner.peek()
            if before == Group(0, "ENDSEC"):
                break

            scanner.next()
            scanner.rewind(1)

            assert scanner.ftell() == position
            assert scanner.peek() == before
            scanner.next()

    def test_rewind_multiple_steps(self, scanner):
        scanner.next().next().next()

        scanner.rewind(3)

        assert scanner.peek() == Group(0, "SECTION")

    def test_eof_is_latched(self, scanner):
        """Test the EOF group ends the stream."""
        for _ in range(4):
            scanner.next()

        assert scanner.is_eof()
        assert not scanner.has_next()
        with pytest.raises(AlreadyAtEOF):
            scanner.next()
        with pytest.raises(AlreadyAtEOF):
            scanner.peek()

    def test_unexpected_end_of_input(self, build_dxf):
        """Test running out of data before EOF is fatal."""
        scanner = DXFScanner.from_text(build_dxf((0, "SECTION"), (2, "ENTITIES")))
        scanner.next()

        with pytest.raises(UnexpectedEndOfInput, match="EOF group not read"):
            scanner.next()

    def test_empty_text_has_no_group(self):
        scanner = DXFScanner.from_text("")

        assert not scanner.has_next()
        with pytest.raises(UnexpectedEndOfInput):
            scanner.peek()

    def test_invalid_group_code(self):
        scanner = DXFScanner.from_text("SECTION\n0\n")

        with pytest.raises(InvalidGroupCodeError, match="not an integer"):
            scanner.peek()

    def test_unmapped_code_reported_once(self, build_dxf):
        """Test repeated peeks do not report the same group twice."""
        reporter = Reporter()
        scanner = DXFScanner.from_text(build_dxf((150, "x"), (0, "EOF")), reporter)

        scanner.peek()
        scanner.peek()

        kinds = [anomaly.kind for anomaly in reporter.anomalies]
        assert kinds == [AnomalyKind.UNMAPPED_GROUP_CODE]

    def test_boundary_predicates(self, build_dxf):
        text = build_dxf(
            (0, "SECTION"),
            (0, "TABLE"),
            (0, "ENDTAB"),
            (0, "BLOCK"),
            (0, "ENDBLK"),
            (102, "{ACAD_REACTORS"),
            (102, "}"),
            (0, "ENDSEC"),
            (0, "EOF"),
        )
        scanner = DXFScanner.from_text(text)

        assert scanner.is_start_of_section()
        assert scanner.next().is_start_of_table()
        assert scanner.next().is_end_of_table()
        assert scanner.next().is_start_of_block()
        assert scanner.next().is_end_of_block()
        assert scanner.next().is_start_of_app_group()
        assert not scanner.is_end_of_app_group()
        assert scanner.next().is_end_of_app_group()
        assert not scanner.is_start_of_app_group()
        assert scanner.next().is_end_of_section()

    def test_custom_comparator(self, build_dxf):
        scanner = DXFScanner.from_text(build_dxf((2, "*Model_Space"), (0, "EOF")))

        def starts_with(current, expected):
            return current.code == expected.code and current.value.startswith(expected.value)

        assert scanner.is_current_group(2, "*", starts_with)
        assert not scanner.is_current_group(2, "*")
