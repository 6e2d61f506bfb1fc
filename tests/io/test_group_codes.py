"""Tests for the group code type table."""

import math

import pytest

from dxfparse.errors import MalformedBooleanError
from dxfparse.io.group_codes import (
    MAX_GROUP_CODE,
    ValueType,
    code_to_type,
    is_mapped_code,
    parse_bool,
    parse_group_value,
)
from dxfparse.reporting import AnomalyKind, Reporter


class TestCodeToType:
    """Test group code to value type mapping."""

    @pytest.mark.parametrize(
        "code, expected",
        [
            (0, ValueType.STRING),
            (9, ValueType.STRING),
            (10, ValueType.FLOAT),
            (59, ValueType.FLOAT),
            (60, ValueType.INTEGER),
            (99, ValueType.INTEGER),
            (100, ValueType.STRING),
            (110, ValueType.FLOAT),
            (160, ValueType.INTEGER),
            (210, ValueType.FLOAT),
            (270, ValueType.INTEGER),
            (290, ValueType.BOOLEAN),
            (299, ValueType.BOOLEAN),
            (330, ValueType.STRING),
            (370, ValueType.INTEGER),
            (390, ValueType.STRING),
            (420, ValueType.INTEGER),
            (460, ValueType.FLOAT),
            (481, ValueType.STRING),
            (999, ValueType.STRING),
            (1000, ValueType.STRING),
            (1010, ValueType.FLOAT),
            (1071, ValueType.INTEGER),
        ],
    )
    def test_documented_ranges(self, code, expected):
        """Test the range boundaries of the type table."""
        assert code_to_type(code) is expected

    def test_total_over_all_codes(self):
        """Test every code in 0-1071 maps to a type without raising."""
        for code in range(MAX_GROUP_CODE + 1):
            assert code_to_type(code) in ValueType

    @pytest.mark.parametrize("code", [150, 180, 250, 500, 998, 1072, -1])
    def test_unmapped_codes_are_strings(self, code):
        """Test unmapped codes pass through as string."""
        assert not is_mapped_code(code)
        assert code_to_type(code) is ValueType.STRING


class TestParseBool:
    """Test strict boolean parsing."""

    def test_valid_literals(self):
        assert parse_bool("0") is False
        assert parse_bool("1") is True

    @pytest.mark.parametrize("value", ["true", "2", "", "01"])
    def test_invalid_literal_raises(self, value):
        """Test anything but "0" and "1" is fatal."""
        with pytest.raises(MalformedBooleanError, match="cannot be cast to Boolean"):
            parse_bool(value)


class TestParseGroupValue:
    """Test value conversion by group code."""

    def test_converts_by_type(self):
        assert parse_group_value(1, "text") == "text"
        assert parse_group_value(10, "1.5") == 1.5
        assert parse_group_value(70, "12") == 12
        assert parse_group_value(290, "1") is True

    def test_integer_written_as_float(self):
        """Test integers written with a fraction are truncated."""
        assert parse_group_value(70, "1.0") == 1

    def test_malformed_float_becomes_nan(self):
        reporter = Reporter()

        value = parse_group_value(40, "abc", reporter)

        assert math.isnan(value)
        assert reporter.anomalies[0].kind is AnomalyKind.MALFORMED_VALUE
        assert reporter.anomalies[0].code == 40

    def test_malformed_integer_becomes_none(self):
        reporter = Reporter()

        assert parse_group_value(62, "red", reporter) is None
        assert reporter.anomalies[0].kind is AnomalyKind.MALFORMED_VALUE

    def test_unmapped_code_keeps_raw_string(self):
        """Test unmapped codes are reported and passed through."""
        reporter = Reporter()

        value = parse_group_value(150, "42", reporter)

        assert value == "42"
        assert len(reporter.anomalies) == 1
        assert reporter.anomalies[0].kind is AnomalyKind.UNMAPPED_GROUP_CODE

    def test_malformed_boolean_raises(self):
        with pytest.raises(MalformedBooleanError):
            parse_group_value(291, "yes")
