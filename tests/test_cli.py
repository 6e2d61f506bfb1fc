"""Tests for CLI interface."""

import json

import pytest
from click.testing import CliRunner

from dxfparse.cli import create_config, main
from dxfparse.config import ConfigurationHandler


@pytest.fixture
def runner():
    return CliRunner()


class TestCLI:
    """Test CLI commands."""

    def test_main_help(self, runner):
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "DXF parser" in result.output
        assert "parse" in result.output
        assert "inspect" in result.output
        assert "create-config" in result.output

    def test_parse_help(self, runner):
        result = runner.invoke(main, ["parse", "--help"])

        assert result.exit_code == 0
        assert "--output" in result.output
        assert "--config" in result.output

    def test_parse(self, runner, ezdxf_file, tmp_path):
        output = tmp_path / "out.json"

        result = runner.invoke(main, ["parse", str(ezdxf_file), "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert f"Exported 9 entities to {output}" in result.output
        with open(output, encoding="utf-8") as f:
            data = json.load(f)
        assert len(data["entities"]) == 9

    def test_parse_default_output(self, runner, ezdxf_file):
        result = runner.invoke(main, ["parse", str(ezdxf_file)])

        assert result.exit_code == 0, result.output
        assert ezdxf_file.with_suffix(".json").exists()

    def test_parse_with_config(self, runner, ezdxf_file, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"IncludeAnomalies": False}), encoding="utf-8")
        output = tmp_path / "out.json"

        result = runner.invoke(main, ["parse", str(ezdxf_file), "-o", str(output), "-c", str(config_path)])

        assert result.exit_code == 0, result.output
        with open(output, encoding="utf-8") as f:
            assert "anomalies" not in json.load(f)

    def test_parse_truncated_file(self, runner, tmp_path):
        dxf_file = tmp_path / "truncated.dxf"
        dxf_file.write_text("0\nSECTION\n2\nENTITIES\n0\nLINE\n", encoding="utf-8")

        result = runner.invoke(main, ["parse", str(dxf_file)])

        assert result.exit_code == 1
        assert "Parsing failed" in result.output

    def test_parse_file_too_large(self, runner, ezdxf_file, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"MaxFileSize": 100}), encoding="utf-8")

        result = runner.invoke(main, ["parse", str(ezdxf_file), "-c", str(config_path)])

        assert result.exit_code == 1
        assert "the limit is 100" in result.output

    def test_parse_with_missing_file(self, runner, tmp_path):
        result = runner.invoke(main, ["parse", str(tmp_path / "missing.dxf")])

        assert result.exit_code != 0
        assert "does not exist" in result.output

    def test_inspect(self, runner, ezdxf_file):
        result = runner.invoke(main, ["inspect", str(ezdxf_file)])

        assert result.exit_code == 0, result.output
        assert "Version: AC1024" in result.output
        for title in ("DOCUMENT", "ENTITIES", "TABLES", "BLOCKS", "ANOMALIES", "LAYERS"):
            assert title in result.output
        assert "PIPES" in result.output
        assert "#ff0000" in result.output
        assert "Anomalies:" not in result.output

    def test_inspect_show_anomalies(self, runner, tmp_path, entities_dxf):
        dxf_file = tmp_path / "point.dxf"
        dxf_file.write_text(entities_dxf((0, "POINT"), (10, "1.0"), (20, "1.0"), (1001, "APP")), encoding="utf-8")

        result = runner.invoke(main, ["inspect", str(dxf_file), "--show-anomalies"])

        assert result.exit_code == 0, result.output
        assert "Version: unknown" in result.output
        assert "Anomalies:" in result.output
        assert "[unhandled_group] Unhandled group 1001: 'APP' in POINT" in result.output

    def test_create_config_command(self, runner, tmp_path):
        config_path = tmp_path / "config.json"

        result = runner.invoke(create_config, [str(config_path)])

        assert result.exit_code == 0
        assert "Sample configuration created" in result.output
        with open(config_path, encoding="utf-8") as f:
            config_data = json.load(f)
        assert config_data == ConfigurationHandler.sample_config()
        assert config_data["Encoding"] == "utf-8"

    def test_verbose_flag(self, runner, ezdxf_file, tmp_path):
        result = runner.invoke(main, ["-v", "parse", str(ezdxf_file), "-o", str(tmp_path / "out.json")])

        assert result.exit_code == 0, result.output
