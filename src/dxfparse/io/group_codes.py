"""Group code type table.

Maps every documented DXF group code range to the type its values are
stored as (AutoCAD 2012 DXF Reference, "Group Code Value Types").
"""

import logging
import math
from enum import Enum
from typing import TYPE_CHECKING

from ..errors import MalformedBooleanError
from ..reporting import AnomalyKind

if TYPE_CHECKING:
    from ..models import GroupValue
    from ..protocols import IReporter

log = logging.getLogger(__name__)


class ValueType(Enum):
    STRING = "string"
    FLOAT = "float"
    INTEGER = "integer"
    BOOLEAN = "boolean"


CODE_RANGES: tuple[tuple[int, int, ValueType], ...] = (
    (0, 9, ValueType.STRING),
    (10, 59, ValueType.FLOAT),
    (60, 99, ValueType.INTEGER),
    (100, 109, ValueType.STRING),
    (110, 149, ValueType.FLOAT),
    (160, 179, ValueType.INTEGER),
    (210, 239, ValueType.FLOAT),
    (270, 289, ValueType.INTEGER),
    (290, 299, ValueType.BOOLEAN),
    (300, 369, ValueType.STRING),
    (370, 389, ValueType.INTEGER),
    (390, 399, ValueType.STRING),
    (400, 409, ValueType.INTEGER),
    (410, 419, ValueType.STRING),
    (420, 429, ValueType.INTEGER),
    (430, 439, ValueType.STRING),
    (440, 459, ValueType.INTEGER),
    (460, 469, ValueType.FLOAT),
    (470, 481, ValueType.STRING),
    (999, 999, ValueType.STRING),
    (1000, 1009, ValueType.STRING),
    (1010, 1059, ValueType.FLOAT),
    (1060, 1071, ValueType.INTEGER),
)

MAX_GROUP_CODE = 1071


def _build_type_table() -> list[ValueType | None]:
    table: list[ValueType | None] = [None] * (MAX_GROUP_CODE + 1)
    for first, last, value_type in CODE_RANGES:
        for code in range(first, last + 1):
            table[code] = value_type
    return table


_TYPE_TABLE = _build_type_table()


def is_mapped_code(code: int) -> bool:
    """Check if ``code`` lies in one of the documented ranges."""
    return 0 <= code <= MAX_GROUP_CODE and _TYPE_TABLE[code] is not None


def code_to_type(code: int) -> ValueType:
    """Get the value type of a group code.

    Unmapped codes are passed through as strings, so this never raises.

    Parameters
    ----------
    code : int
        DXF group code

    Returns
    -------
    ValueType
        Type the group value is converted to
    """
    if not is_mapped_code(code):
        return ValueType.STRING
    return _TYPE_TABLE[code]


def parse_bool(value: str) -> bool:
    """Parse a strict DXF boolean, only "0" and "1" are valid.

    Raises
    ------
    MalformedBooleanError
        If value is neither "0" nor "1"
    """
    if value == "0":
        return False
    if value == "1":
        return True
    raise MalformedBooleanError(f"String '{value}' cannot be cast to Boolean type")


def _report_malformed(reporter: "IReporter | None", code: int, value: str, type_name: str) -> None:
    message = f"Group {code}: value {value!r} is not a valid {type_name}"
    if reporter is None:
        log.warning(message)
        return
    reporter.report(AnomalyKind.MALFORMED_VALUE, message, code=code, value=value)


def parse_group_value(code: int, value: str, reporter: "IReporter | None" = None) -> "GroupValue":
    """Convert a trimmed raw value to the type of its group code.

    Parameters
    ----------
    code : int
        DXF group code
    value : str
        Whitespace-trimmed raw value line
    reporter : IReporter | None
        Sink for unmapped codes and unconvertible numbers

    Returns
    -------
    GroupValue
        Converted value. NaN for unconvertible floats, None for
        unconvertible integers and the raw string for unmapped codes.

    Raises
    ------
    MalformedBooleanError
        If a boolean group holds anything but "0" or "1"
    """
    if not is_mapped_code(code):
        message = f"Group code {code} does not have a defined type, keeping {value!r}"
        if reporter is None:
            log.warning(message)
        else:
            reporter.report(AnomalyKind.UNMAPPED_GROUP_CODE, message, code=code, value=value)
        return value

    value_type = _TYPE_TABLE[code]
    if value_type is ValueType.STRING:
        return value
    if value_type is ValueType.BOOLEAN:
        return parse_bool(value)
    if value_type is ValueType.FLOAT:
        try:
            return float(value)
        except ValueError:
            _report_malformed(reporter, code, value, "float")
            return math.nan
    try:
        return int(value)
    except ValueError:
        pass
    try:
        # some producers write integers as "1.0"
        return int(float(value))
    except (ValueError, OverflowError):
        _report_malformed(reporter, code, value, "integer")
        return None
