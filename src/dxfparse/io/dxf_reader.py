"""DXF file reader handling file access and decoding.

The reader loads a file from disk, checks its size and decodes it before
the text is handed to the DXFParser.
"""

import logging
from pathlib import Path

from ..config import ParserConfig
from ..errors import InputTooLargeError
from ..models import Document
from ..parser import DXFParser
from ..protocols import IReporter

log = logging.getLogger(__name__)


class DXFReader:
    """DXF file reader producing a parsed Document."""

    def __init__(self, dxf_path: Path, config: ParserConfig | None = None) -> None:
        """Initialize DXF reader with file path.

        Parameters
        ----------
        dxf_path : Path
            Path to the DXF file to read
        config : ParserConfig | None
            Reader and parser settings, defaults if None
        """
        self.dxf_path = dxf_path
        self.config = config or ParserConfig()
        self._doc: Document | None = None

    def read_text(self) -> str:
        """Read and decode the DXF file.

        Raises
        ------
        FileNotFoundError
            If DXF file does not exist
        InputTooLargeError
            If the file exceeds the configured maximum size
        """
        if not self.dxf_path.exists():
            raise FileNotFoundError(f"DXF file not found: {self.dxf_path}")

        max_file_size = self.config.max_file_size
        if max_file_size is not None:
            file_size = self.dxf_path.stat().st_size
            if file_size > max_file_size:
                raise InputTooLargeError(
                    f"DXF file {self.dxf_path} has {file_size} bytes, the limit is {max_file_size}"
                )

        data = self.dxf_path.read_bytes()
        return data.decode(self.config.encoding, errors=self.config.encoding_errors)

    def load_file(self, reporter: IReporter | None = None) -> None:
        """Load and parse the DXF file.

        Parameters
        ----------
        reporter : IReporter | None
            Sink for non-fatal anomalies, a new Reporter if None

        Raises
        ------
        FileNotFoundError
            If DXF file does not exist
        InputTooLargeError
            If the file exceeds the configured maximum size
        DXFParseError
            If the DXF content cannot be parsed
        """
        text = self.read_text()
        parser = DXFParser(self.config)
        self._doc = parser.parse(text, reporter)
        log.info(f"Successfully loaded DXF file: {self.dxf_path}")

    @property
    def document(self) -> Document:
        """Get the parsed document.

        Raises
        ------
        RuntimeError
            If DXF file is not loaded
        """
        if self._doc is None:
            raise RuntimeError("DXF file not loaded. Call load_file() first.")
        return self._doc

    def is_loaded(self) -> bool:
        return self._doc is not None

    def get_layer_names(self) -> list[str]:
        """Get all layer names from the LAYER table.

        Raises
        ------
        RuntimeError
            If DXF file is not loaded
        """
        return self.document.layer_names()


def parse_file(path: Path, config: ParserConfig | None = None, reporter: IReporter | None = None) -> Document:
    """Read and parse a DXF file.

    Parameters
    ----------
    path : Path
        DXF file to read
    config : ParserConfig | None
        Reader and parser settings, defaults if None
    reporter : IReporter | None
        Sink for non-fatal anomalies, a new Reporter if None

    Returns
    -------
    Document
        Parsed document
    """
    reader = DXFReader(Path(path), config)
    reader.load_file(reporter)
    return reader.document
