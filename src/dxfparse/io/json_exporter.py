"""JSON export of parsed DXF documents.

Dataclasses are exported field by field, fields that are None are left
out. Points only carry the coordinates they were read with, enums are
written by value and non-finite floats become null.
"""

import json
import logging
import math
from collections import Counter
from dataclasses import fields, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from ..models import Document, Point

log = logging.getLogger(__name__)


def _export_float(value: float) -> float | None:
    if math.isfinite(value):
        return value
    return None


def _export_point(point: Point) -> dict[str, float | None]:
    return {key: _export_float(value) for key, value in point.to_dict().items()}


def export_value(value: Any) -> Any:
    """Convert a model value to JSON compatible data.

    Parameters
    ----------
    value : Any
        Dataclass, enum, container or scalar of the parsed document

    Returns
    -------
    Any
        Dicts, lists and scalars only
    """
    if isinstance(value, Point):
        return _export_point(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return _export_float(value)
    if is_dataclass(value) and not isinstance(value, type):
        return _export_dataclass(value)
    if isinstance(value, dict):
        return {str(key): export_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [export_value(item) for item in value]
    return value


def _export_dataclass(value: Any) -> dict[str, Any]:
    data = {}
    for field in fields(value):
        field_value = getattr(value, field.name)
        if field_value is None:
            continue
        data[field.name] = export_value(field_value)
    return data


def document_statistics(document: Document) -> dict[str, dict[str, int]]:
    """Count the content of a document.

    Returns
    -------
    dict[str, dict[str, int]]
        Counts per section, per entity type, records per table, entities
        per block and anomalies per kind
    """
    entity_counts = Counter(entity.type.value for entity in document.entities)
    anomaly_counts = Counter(anomaly.kind.value for anomaly in document.anomalies)
    return {
        "sections": {
            "header_variables": len(document.header),
            "tables": len(document.tables),
            "blocks": len(document.blocks),
            "entities": len(document.entities),
            "anomalies": len(document.anomalies),
        },
        "entities": dict(sorted(entity_counts.items())),
        "tables": {name: len(table.records) for name, table in document.tables.items()},
        "blocks": {name: len(block.entities) for name, block in document.blocks.items()},
        "anomalies": dict(sorted(anomaly_counts.items())),
    }


class JsonExporter:
    """Exports a parsed DXF document to a JSON file."""

    def __init__(self, output_path: Path, include_anomalies: bool = True) -> None:
        """Initialize JSON exporter with output file path.

        Parameters
        ----------
        output_path : Path
            Path where the JSON file will be saved
        include_anomalies : bool
            Write the anomalies of the parse next to the document content
        """
        self.output_path = output_path
        self.include_anomalies = include_anomalies

    def export_document(self, document: Document) -> None:
        """Write the document as JSON.

        Raises
        ------
        OSError
            If the JSON file cannot be written
        """
        export_data = self.document_to_dict(document)
        try:
            with open(self.output_path, "w", encoding="utf-8") as json_file:
                json.dump(export_data, json_file, indent=2, ensure_ascii=False)
        except OSError as e:
            raise OSError(f"Cannot write JSON file {self.output_path}: {e}") from e
        log.info(f"Exported DXF document to {self.output_path}")

    def document_to_dict(self, document: Document) -> dict[str, Any]:
        export_data = {
            "header": export_value(document.header),
            "tables": export_value(document.tables),
            "blocks": export_value(document.blocks),
            "entities": export_value(document.entities),
        }
        if self.include_anomalies:
            export_data["anomalies"] = [anomaly.to_dict() for anomaly in document.anomalies]
        return export_data

    def export_statistics(self, document: Document) -> dict[str, dict[str, int]]:
        return document_statistics(document)
