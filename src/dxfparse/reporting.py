"""Reporting sink for non-fatal parse anomalies.

Anomalies never interrupt parsing. The :class:`Reporter` collects them as
structured records, which end up on ``Document.anomalies``, and logs each
one through the module logger.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models import Group

log = logging.getLogger(__name__)


class AnomalyKind(Enum):
    """Classes of non-fatal problems found while parsing."""

    UNMAPPED_GROUP_CODE = "unmapped_group_code"
    MALFORMED_VALUE = "malformed_value"
    UNHANDLED_GROUP = "unhandled_group"
    UNEXPECTED_SECTION_CODE = "unexpected_section_code"
    UNKNOWN_SECTION = "unknown_section"
    UNSUPPORTED_TABLE = "unsupported_table"
    UNKNOWN_TABLE = "unknown_table"
    MISSING_RECORD_NAME = "missing_record_name"
    MISSING_BLOCK_NAME = "missing_block_name"
    ORPHAN_BLOCK_END = "orphan_block_end"
    UNCLOSED_BLOCK = "unclosed_block"
    ENTITY_OUTSIDE_BLOCK = "entity_outside_block"
    MISSING_BLOCK = "missing_block"
    PATTERN_LENGTH_MISMATCH = "pattern_length_mismatch"
    VERTEX_COUNT_MISMATCH = "vertex_count_mismatch"
    UNCLOSED_APP_GROUP = "unclosed_app_group"


@dataclass(frozen=True, slots=True)
class Anomaly:
    """A single reported anomaly.

    Parameters
    ----------
    kind : AnomalyKind
        Class of the anomaly
    message : str
        Human readable description
    code : int | None
        Group code involved, if any
    value : Any
        Group value or name involved, if any
    context : str | None
        Construct being parsed, e.g. ``"LINE"`` or ``"TABLES"``
    """

    kind: AnomalyKind
    message: str
    code: int | None = None
    value: Any = None
    context: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert anomaly to dictionary format."""
        anomaly = {"kind": self.kind.value, "message": self.message}
        if self.code is not None:
            anomaly["code"] = self.code
        if self.value is not None:
            anomaly["value"] = self.value
        if self.context is not None:
            anomaly["context"] = self.context
        return anomaly


class Reporter:
    """Collects anomalies of one parse call and logs them.

    Unhandled group codes are logged at DEBUG level since real drawings
    produce them in bulk, everything else at WARNING level.
    """

    def __init__(self, record_unhandled_groups: bool = True) -> None:
        """Initialize an empty reporter.

        Parameters
        ----------
        record_unhandled_groups : bool
            Keep UNHANDLED_GROUP anomalies, they are only logged if False
        """
        self.record_unhandled_groups = record_unhandled_groups
        self.anomalies: list[Anomaly] = []

    def report(
        self,
        kind: AnomalyKind,
        message: str,
        code: int | None = None,
        value: Any = None,
        context: str | None = None,
    ) -> None:
        if kind is AnomalyKind.UNHANDLED_GROUP:
            log.debug(message)
            if not self.record_unhandled_groups:
                return
        else:
            log.warning(message)
        self.anomalies.append(Anomaly(kind=kind, message=message, code=code, value=value, context=context))

    def unhandled_group(self, group: "Group", context: str) -> None:
        """Report a group the parser of ``context`` does not interpret."""
        self.report(
            AnomalyKind.UNHANDLED_GROUP,
            f"Unhandled group {group.code}: {group.value!r} in {context}",
            code=group.code,
            value=group.value,
            context=context,
        )
