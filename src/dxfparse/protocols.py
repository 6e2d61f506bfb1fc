"""Protocol definitions for the exchangeable parts of the parser.

This module defines the interfaces that let callers plug in their own
anomaly sink, entity parsers or exporters.
"""

from typing import TYPE_CHECKING, Any, Protocol

from .reporting import Anomaly, AnomalyKind

if TYPE_CHECKING:
    from .io.scanner import DXFScanner
    from .models import Document, Entity, EntityType, Group


class IReporter(Protocol):
    """Protocol for the sink receiving non-fatal anomalies.

    Implementations must never raise, parsing continues after every report.
    """

    anomalies: list[Anomaly]

    def report(
        self,
        kind: AnomalyKind,
        message: str,
        code: int | None = None,
        value: Any = None,
        context: str | None = None,
    ) -> None:
        """Record one anomaly.

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
            Construct being parsed
        """
        ...

    def unhandled_group(self, group: "Group", context: str) -> None:
        """Record a group the parser of ``context`` does not interpret."""
        ...


class IEntityParser(Protocol):
    """Protocol for the stateless parser of one entity kind."""

    entity_type: "EntityType"

    def parse(self, scanner: "DXFScanner", reporter: IReporter) -> "Entity":
        """Parse one entity.

        The scanner must be positioned on the entity's ``(0, TYPE)`` group.
        On return it is positioned on the last group of the entity, so the
        caller's next ``next()`` lands on the following code 0 group.

        Parameters
        ----------
        scanner : DXFScanner
            Scanner positioned at the entity's introducing group
        reporter : IReporter
            Sink for non-fatal anomalies

        Returns
        -------
        Entity
            Fully populated entity record
        """
        ...


class IExporter(Protocol):
    """Protocol for exporting a parsed document."""

    def export_document(self, document: "Document") -> None:
        """Export the document to the exporter's target.

        Parameters
        ----------
        document : Document
            Parsed document to export
        """
        ...

    def export_statistics(self, document: "Document") -> dict[str, dict[str, int]]:
        """Get statistics of the exported document.

        Returns
        -------
        dict[str, dict[str, int]]
            Counts grouped by category (entities, tables, blocks, anomalies)
        """
        ...
