"""DXF document parser.

Walks the sections of a DXF text and dispatches HEADER, TABLES, BLOCKS and
ENTITIES to their parsers. All other sections are skipped group by group.
"""

import logging

from .config import ParserConfig
from .errors import EmptyFileError
from .io.scanner import DXFScanner
from .models import Document, Entity
from .parsers import parse_blocks, parse_entity, parse_header, parse_tables
from .protocols import IReporter
from .reporting import AnomalyKind, Reporter

log = logging.getLogger(__name__)

CONTEXT = "SECTION"
SECTION_NAME_CODE = 2
SKIPPED_SECTIONS = frozenset({"CLASSES", "OBJECTS", "EOF"})


def parse_entities(scanner: DXFScanner, reporter: IReporter) -> list[Entity]:
    """Parse the ENTITIES section.

    Parameters
    ----------
    scanner : DXFScanner
        Scanner positioned at the ``(2, ENTITIES)`` group
    reporter : IReporter
        Sink for non-fatal anomalies

    Returns
    -------
    list[Entity]
        Entities in drawing order, the scanner is left at the last group
        before ENDSEC
    """
    entities: list[Entity] = []
    while True:
        group = scanner.next().peek()
        if group.code != 0:
            reporter.unhandled_group(group, "ENTITIES")
            continue
        if scanner.is_end_of_section():
            scanner.rewind()
            break
        entity = parse_entity(scanner, reporter)
        if entity is not None:
            entities.append(entity)
    log.debug(f"Read {len(entities)} entities")
    return entities


class DXFParser:
    """Parses DXF text into a Document.

    The parser holds no state between calls, every call to ``parse`` uses
    a fresh scanner and document.
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        """Initialize parser.

        Parameters
        ----------
        config : ParserConfig | None
            Parser settings, defaults if None
        """
        self.config = config or ParserConfig()

    def create_reporter(self) -> Reporter:
        return Reporter(record_unhandled_groups=self.config.record_unhandled_groups)

    def parse(self, source: str, reporter: IReporter | None = None) -> Document:
        """Parse a DXF text.

        Parameters
        ----------
        source : str
            Complete DXF text, lines separated by CRLF, CR or LF
        reporter : IReporter | None
            Sink for non-fatal anomalies, a new Reporter if None

        Returns
        -------
        Document
            Parsed document with the anomalies of this call

        Raises
        ------
        TypeError
            If source is not a string
        EmptyFileError
            If source holds no group
        ScannerError
            If the text ends before the EOF group
        MalformedBooleanError
            If a boolean group holds anything but "0" or "1"
        InvalidGroupCodeError
            If a group code line is not an integer
        """
        if not isinstance(source, str):
            raise TypeError(f"Cannot read DXF data of type {type(source).__name__}, expected str")

        if reporter is None:
            reporter = self.create_reporter()
        scanner = DXFScanner.from_text(source, reporter)
        if not scanner.has_next():
            raise EmptyFileError("Empty file")

        document = self._parse_sections(scanner, reporter)
        document.anomalies = list(reporter.anomalies)
        return document

    def _parse_sections(self, scanner: DXFScanner, reporter: IReporter) -> Document:
        document = Document()
        while not scanner.is_eof():
            if scanner.is_current_group(0, "EOF"):
                # only reached if the text starts with EOF
                break
            if not scanner.is_start_of_section():
                scanner.next()
                continue

            group = scanner.next().peek()
            if group.code != SECTION_NAME_CODE:
                reporter.report(
                    AnomalyKind.UNEXPECTED_SECTION_CODE,
                    f"Unexpected group {group.code} after SECTION, expected {SECTION_NAME_CODE}",
                    code=group.code,
                    value=group.value,
                    context=CONTEXT,
                )
                continue

            name = group.value
            log.debug(f"> {name}")
            if name == "HEADER":
                document.header = parse_header(scanner, reporter)
            elif name == "TABLES":
                document.tables = parse_tables(scanner, reporter)
            elif name == "BLOCKS":
                document.blocks = parse_blocks(scanner, reporter)
            elif name == "ENTITIES":
                document.entities = parse_entities(scanner, reporter)
            elif name in SKIPPED_SECTIONS:
                log.debug(f"Skipping section {name}")
            else:
                reporter.report(
                    AnomalyKind.UNKNOWN_SECTION,
                    f"Skipping unknown section '{name}'",
                    value=name,
                    context=CONTEXT,
                )
        return document


def parse(source: str, config: ParserConfig | None = None, reporter: IReporter | None = None) -> Document:
    """Parse a DXF text into a Document.

    Parameters
    ----------
    source : str
        Complete DXF text
    config : ParserConfig | None
        Parser settings, defaults if None
    reporter : IReporter | None
        Sink for non-fatal anomalies, a new Reporter if None

    Returns
    -------
    Document
        Parsed document
    """
    return DXFParser(config).parse(source, reporter)
