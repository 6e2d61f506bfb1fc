"""Tests for the DXFReader class."""

import pytest

from dxfparse.config import ParserConfig
from dxfparse.errors import InputTooLargeError
from dxfparse.io.dxf_reader import DXFReader, parse_file
from dxfparse.models import EntityType
from dxfparse.reporting import Reporter


@pytest.fixture
def dxf_path(tmp_path, entities_dxf):
    """DXF file with one TEXT entity holding a non-ASCII character."""
    path = tmp_path / "text.dxf"
    text = entities_dxf((0, "TEXT"), (10, "0.0"), (20, "0.0"), (1, "Schacht Ä"))
    path.write_bytes(text.encode("cp1252"))
    return path


class TestDXFReader:
    """Test DXFReader class."""

    def test_reader_initialization(self, dxf_path):
        reader = DXFReader(dxf_path)

        assert reader.dxf_path == dxf_path
        assert reader.config == ParserConfig()
        assert not reader.is_loaded()

        # document property should raise RuntimeError when not loaded
        with pytest.raises(RuntimeError, match="not loaded"):
            _ = reader.document

    def test_load_file(self, dxf_path):
        reader = DXFReader(dxf_path, ParserConfig(encoding="cp1252"))

        reader.load_file()

        assert reader.is_loaded()
        text = reader.document.entities[0]
        assert text.type is EntityType.TEXT
        assert text.text == "Schacht Ä"

    def test_decoding_errors_are_replaced(self, dxf_path):
        reader = DXFReader(dxf_path)

        reader.load_file()

        assert reader.document.entities[0].text == "Schacht �"

    def test_strict_decoding(self, dxf_path):
        reader = DXFReader(dxf_path, ParserConfig(encoding_errors="strict"))

        with pytest.raises(UnicodeDecodeError):
            reader.load_file()

    def test_load_file_not_found(self, tmp_path):
        reader = DXFReader(tmp_path / "missing.dxf")

        with pytest.raises(FileNotFoundError, match="DXF file not found"):
            reader.load_file()

    def test_file_size_limit(self, dxf_path):
        reader = DXFReader(dxf_path, ParserConfig(max_file_size=10))

        with pytest.raises(InputTooLargeError, match="the limit is 10"):
            reader.load_file()
        assert not reader.is_loaded()

    def test_get_layer_names(self, tmp_path, build_dxf):
        path = tmp_path / "layers.dxf"
        path.write_text(
            build_dxf(
                (0, "SECTION"),
                (2, "TABLES"),
                (0, "TABLE"),
                (2, "LAYER"),
                (0, "LAYER"),
                (2, "0"),
                (0, "LAYER"),
                (2, "PIPES"),
                (0, "ENDTAB"),
                (0, "ENDSEC"),
                (0, "EOF"),
            ),
            encoding="utf-8",
        )
        reader = DXFReader(path)
        reader.load_file()

        assert reader.get_layer_names() == ["0", "PIPES"]


class TestParseFile:
    def test_parse_file(self, dxf_path):
        reporter = Reporter()

        document = parse_file(dxf_path, ParserConfig(encoding="cp1252"), reporter)

        assert len(document.entities) == 1
        assert document.anomalies == reporter.anomalies == []

    def test_accepts_string_path(self, dxf_path):
        document = parse_file(str(dxf_path), ParserConfig(encoding="cp1252"))

        assert document.entities[0].text == "Schacht Ä"
