"""Group scanner over the lines of a DXF text.

The scanner is an index-addressable cursor over the materialized lines.
Each group occupies two lines, the group code and the value, so moving
by one group moves the cursor by two lines. The cursor always points at
the current group, which ``peek()`` reads without advancing.

Typical use is "advance, then look"::

    group = scanner.next().peek()

and, if the group does not belong to the construct being parsed,
``scanner.rewind()`` so the caller sees it again.
"""

import logging
import re
from collections.abc import Callable, Sequence

from ..errors import AlreadyAtEOF, InvalidGroupCodeError, UnexpectedEndOfInput
from ..models import Group
from ..protocols import IReporter
from .group_codes import parse_group_value

log = logging.getLogger(__name__)

LINE_BREAK = re.compile(r"\r\n|\r|\n")

GroupComparator = Callable[[Group, Group], bool]


def split_lines(text: str) -> list[str]:
    """Split DXF text on CRLF, CR or LF."""
    return LINE_BREAK.split(text)


class DXFScanner:
    """Stateful group stream with one-step lookahead and rewind.

    Parameters
    ----------
    lines : Sequence[str]
        DXF text split into lines
    reporter : IReporter | None
        Sink for unmapped group codes and unconvertible values
    """

    def __init__(self, lines: Sequence[str], reporter: IReporter | None = None) -> None:
        self._data = list(lines)
        self._pointer = 0
        self._eof = False
        self._reporter = reporter
        self._groups: dict[int, Group] = {}

    @classmethod
    def from_text(cls, text: str, reporter: IReporter | None = None) -> "DXFScanner":
        return cls(split_lines(text), reporter)

    def has_next(self) -> bool:
        """Check if a complete group is available and EOF was not consumed."""
        if self._eof:
            return False
        return self._has_group_at(self._pointer)

    def is_eof(self) -> bool:
        return self._eof

    def ftell(self) -> int:
        """Current position as a line index."""
        return self._pointer

    def next(self) -> "DXFScanner":
        """Advance the cursor by one group.

        Returns
        -------
        DXFScanner
            The scanner itself, so calls can be chained with ``peek()``

        Raises
        ------
        AlreadyAtEOF
            If the EOF group was already consumed
        UnexpectedEndOfInput
            If the data ends before an EOF group was read
        """
        if self._eof:
            raise AlreadyAtEOF("Cannot call 'next' after EOF group has been read")
        if not self._has_group_at(self._pointer + 2):
            raise UnexpectedEndOfInput(
                f"Unexpected end of input: EOF group not read before end of file. "
                f"Ended on line {self._pointer + 1}"
            )
        self._pointer += 2
        if self._is_eof_group(self._pointer):
            self._eof = True
        return self

    def peek(self) -> Group:
        """Read the group at the cursor without advancing.

        Raises
        ------
        AlreadyAtEOF
            If the EOF group was already consumed
        UnexpectedEndOfInput
            If no complete group is left at the cursor
        InvalidGroupCodeError
            If the code line does not hold an integer
        MalformedBooleanError
            If a boolean group holds anything but "0" or "1"
        """
        if self._eof:
            raise AlreadyAtEOF("Cannot call 'peek' after EOF group has been read")
        if not self._has_group_at(self._pointer):
            raise UnexpectedEndOfInput(
                f"Unexpected end of input: EOF group not read before end of file. "
                f"Ended on line {self._pointer + 1}"
            )
        return self._group_at(self._pointer)

    def peek_raw_value(self) -> str:
        """Read the value line of the current group without trimming.

        Text split into several groups, such as MTEXT chunks, may be cut
        next to a space that trimming would drop.
        """
        self.peek()
        return self._data[self._pointer + 1]

    def rewind(self, steps: int = 1) -> None:
        """Move the cursor back by ``steps`` groups."""
        self._pointer -= 2 * steps
        # EOF can only be latched on the group the cursor just left
        self._eof = False

    def is_current_group(self, code: int, value: object, comparator: GroupComparator | None = None) -> bool:
        """Check the current group against ``(code, value)``.

        Parameters
        ----------
        code : int
            Expected group code
        value : object
            Expected group value
        comparator : GroupComparator | None
            Called with the current and the expected group, exact
            equality on code and value if None
        """
        current = self.peek()
        if comparator is None:
            return current.code == code and current.value == value
        return comparator(current, Group(code, value))

    def is_start_of_section(self) -> bool:
        return self.is_current_group(0, "SECTION")

    def is_end_of_section(self) -> bool:
        return self.is_current_group(0, "ENDSEC")

    def is_start_of_table(self) -> bool:
        return self.is_current_group(0, "TABLE")

    def is_end_of_table(self) -> bool:
        return self.is_current_group(0, "ENDTAB")

    def is_start_of_block(self) -> bool:
        return self.is_current_group(0, "BLOCK")

    def is_end_of_block(self) -> bool:
        return self.is_current_group(0, "ENDBLK")

    def is_start_of_app_group(self) -> bool:
        """Check for ``102 {APPNAME``, e.g. ``{ACAD_REACTORS`` or ``{ACAD_XDICTIONARY``."""
        return self.is_current_group(102, "{", _starts_with_marker)

    def is_end_of_app_group(self) -> bool:
        return self.is_current_group(102, "}")

    def _has_group_at(self, pointer: int) -> bool:
        return 0 <= pointer and pointer + 1 < len(self._data)

    def _is_eof_group(self, pointer: int) -> bool:
        return self._data[pointer].strip() == "0" and self._data[pointer + 1].strip() == "EOF"

    def _group_at(self, pointer: int) -> Group:
        group = self._groups.get(pointer)
        if group is not None:
            return group
        raw_code = self._data[pointer].strip()
        try:
            code = int(raw_code)
        except ValueError:
            raise InvalidGroupCodeError(
                f"Group code {raw_code!r} on line {pointer + 1} is not an integer"
            ) from None
        value = parse_group_value(code, self._data[pointer + 1].strip(), self._reporter)
        group = Group(code, value)
        self._groups[pointer] = group
        return group


def _starts_with_marker(current: Group, expected: Group) -> bool:
    return (
        current.code == expected.code
        and isinstance(current.value, str)
        and current.value.startswith(expected.value)
        and len(current.value) > 1
    )
