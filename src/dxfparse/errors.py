"""Exceptions raised for fatal DXF parse failures.

Non-fatal anomalies never raise; they are collected by the reporter
(see :mod:`dxfparse.reporting`). Everything in this module aborts the
whole parse and propagates to the caller of :func:`dxfparse.parse`.
"""


class DXFParseError(Exception):
    """Base class for all fatal DXF parse failures."""


class ScannerError(DXFParseError):
    """The group stream contract was violated."""


class UnexpectedEndOfInput(ScannerError):
    """The data ran out before the EOF group was read."""


class AlreadyAtEOF(ScannerError):
    """The scanner was advanced or read after the EOF group was consumed."""


class EmptyFileError(DXFParseError):
    """The input contains no group at all."""


class MalformedBooleanError(DXFParseError, ValueError):
    """A boolean group value is neither "0" nor "1"."""


class InvalidGroupCodeError(DXFParseError, ValueError):
    """A group code line does not hold an integer."""


class InputTooLargeError(DXFParseError):
    """The input file exceeds the configured size bound."""
