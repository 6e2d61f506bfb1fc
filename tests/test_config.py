"""Tests for the parser configuration."""

import json

import pytest

from dxfparse.config import CONFIG_KEYS, ConfigurationHandler, ParserConfig


@pytest.fixture
def write_config(tmp_path):
    """Return a function writing a configuration file."""

    def write(data):
        path = tmp_path / "config.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return write


class TestConfigurationHandler:
    """Test loading configuration files."""

    def test_load_all_settings(self, write_config):
        path = write_config(
            {
                "Encoding": "cp1252",
                "EncodingErrors": "strict",
                "MaxFileSize": 1024,
                "RecordUnhandledGroups": False,
                "IncludeAnomalies": False,
            }
        )

        config = ConfigurationHandler(path).load_config()

        assert config == ParserConfig(
            encoding="cp1252",
            encoding_errors="strict",
            max_file_size=1024,
            record_unhandled_groups=False,
            include_anomalies=False,
        )

    def test_missing_keys_keep_defaults(self, write_config):
        path = write_config({"Encoding": "latin-1"})

        config = ConfigurationHandler(path).load_config()

        assert config.encoding == "latin-1"
        assert config.max_file_size is None
        assert config.record_unhandled_groups is True

    def test_invalid_values_fall_back_to_default(self, write_config, caplog):
        path = write_config({"MaxFileSize": True, "IncludeAnomalies": "yes", "Encoding": 5})

        config = ConfigurationHandler(path).load_config()

        assert config == ParserConfig()
        assert "Invalid value" in caplog.text

    def test_unknown_key_is_ignored(self, write_config, caplog):
        path = write_config({"Layers": ["PIPES"]})

        config = ConfigurationHandler(path).load_config()

        assert config == ParserConfig()
        assert "Unknown configuration key: Layers" in caplog.text

    def test_not_an_object(self, write_config):
        path = write_config(["Encoding"])

        assert ConfigurationHandler(path).load_config() == ParserConfig()

    def test_missing_file(self, tmp_path):
        handler = ConfigurationHandler(tmp_path / "missing.json")

        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            handler.load_config()

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{Encoding: utf-8", encoding="utf-8")

        with pytest.raises(json.JSONDecodeError, match="Invalid JSON"):
            ConfigurationHandler(path).load_config()

    def test_sample_config_round_trip(self, write_config):
        """Test the sample configuration loads back to the defaults."""
        sample = ConfigurationHandler.sample_config()
        assert set(sample) == set(CONFIG_KEYS)

        config = ConfigurationHandler(write_config(sample)).load_config()

        assert config == ParserConfig()
