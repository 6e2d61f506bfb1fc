"""HEADER section parsing."""

import logging

from ..io.scanner import DXFScanner
from ..models import HeaderValue
from ..protocols import IReporter
from .common import parse_point

log = logging.getLogger(__name__)

VARIABLE_NAME_CODE = 9
CONTEXT = "HEADER"


def parse_header(scanner: DXFScanner, reporter: IReporter) -> dict[str, HeaderValue]:
    """Parse the header variables up to ENDSEC.

    Each variable is a ``(9, $NAME)`` group followed by either a point,
    starting at code 10, or a single value.

    Parameters
    ----------
    scanner : DXFScanner
        Scanner positioned at the ``(2, HEADER)`` group
    reporter : IReporter
        Sink for groups outside of a variable

    Returns
    -------
    dict[str, HeaderValue]
        Variable name to value, in file order
    """
    header: dict[str, HeaderValue] = {}
    while True:
        group = scanner.next().peek()
        if group.code == 0:
            if not scanner.is_end_of_section():
                reporter.unhandled_group(group, CONTEXT)
            scanner.rewind()
            break
        if group.code != VARIABLE_NAME_CODE:
            reporter.unhandled_group(group, CONTEXT)
            continue

        name = group.value
        group = scanner.next().peek()
        if group.code == 0:
            # variable without value
            scanner.rewind()
            continue
        if group.code == 10:
            header[name] = parse_point(scanner)
        else:
            header[name] = group.value
    log.debug(f"Read {len(header)} header variables")
    return header
