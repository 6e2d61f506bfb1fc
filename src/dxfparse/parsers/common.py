"""Parsing helpers shared by entities, table records and blocks."""

import logging

from ..io.scanner import DXFScanner
from ..models import AppGroup, Group, Point
from ..protocols import IReporter
from ..reporting import AnomalyKind

log = logging.getLogger(__name__)

COORDINATE_OFFSET = 10


def parse_point(scanner: DXFScanner) -> Point:
    """Parse a 2D or 3D point starting at the current group.

    The current group holds x. y is expected at the x code + 10 and z at
    the x code + 20. A group with another code ends the point and is left
    for the caller.

    Parameters
    ----------
    scanner : DXFScanner
        Scanner positioned at the x coordinate group

    Returns
    -------
    Point
        Point with ``y`` and ``z`` set only if their groups were present
    """
    group = scanner.peek()
    code = group.code
    x = group.value

    code += COORDINATE_OFFSET
    group = scanner.next().peek()
    if group.code != code:
        scanner.rewind()
        return Point(x=x)
    y = group.value

    code += COORDINATE_OFFSET
    group = scanner.next().peek()
    if group.code != code:
        scanner.rewind()
        return Point(x=x, y=y)

    return Point(x=x, y=y, z=group.value)


def app_group_name(group: Group) -> str:
    """Name of an app group without its leading brace, e.g. ``ACAD_REACTORS``."""
    value = str(group.value)
    return value[1:] if value.startswith("{") else value


def parse_app_group(scanner: DXFScanner, reporter: IReporter, context: str) -> AppGroup:
    """Parse an application defined group up to its closing ``102 }``.

    Parameters
    ----------
    scanner : DXFScanner
        Scanner positioned at the opening ``102 {NAME`` group
    reporter : IReporter
        Sink for an app group left open
    context : str
        Construct owning the app group, used in reports

    Returns
    -------
    AppGroup
        Owner handles and the remaining groups of the app group
    """
    name = app_group_name(scanner.peek())
    hard_owner_handle = None
    soft_owner_handle = None
    groups: list[Group] = []

    while True:
        group = scanner.next().peek()
        if group.code == 102 and group.value == "}":
            break
        if group.code == 0:
            reporter.report(
                AnomalyKind.UNCLOSED_APP_GROUP,
                f"App group '{name}' in {context} is not closed before {group.value!r}",
                code=102,
                value=name,
                context=context,
            )
            scanner.rewind()
            break

        if group.code == 330:
            hard_owner_handle = group.value
        elif group.code == 360:
            soft_owner_handle = group.value
        else:
            groups.append(group)

    return AppGroup(
        name=name,
        hard_owner_handle=hard_owner_handle,
        soft_owner_handle=soft_owner_handle,
        groups=tuple(groups),
    )
