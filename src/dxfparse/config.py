import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParserConfig:
    """Settings for reading and parsing DXF files.

    Parameters
    ----------
    encoding : str
        Text encoding of the DXF file
    encoding_errors : str
        Error handler used while decoding, see ``bytes.decode``
    max_file_size : int | None
        Largest file in bytes the reader accepts, no limit if None
    record_unhandled_groups : bool
        Keep unhandled group anomalies, they are only logged if False
    include_anomalies : bool
        Write the anomaly list into the JSON export
    """

    encoding: str = "utf-8"
    encoding_errors: str = "replace"
    max_file_size: int | None = None
    record_unhandled_groups: bool = True
    include_anomalies: bool = True


# JSON key -> (field name, accepted types)
CONFIG_KEYS: dict[str, tuple[str, tuple[type, ...]]] = {
    "Encoding": ("encoding", (str,)),
    "EncodingErrors": ("encoding_errors", (str,)),
    "MaxFileSize": ("max_file_size", (int, type(None))),
    "RecordUnhandledGroups": ("record_unhandled_groups", (bool,)),
    "IncludeAnomalies": ("include_anomalies", (bool,)),
}


class ConfigurationHandler:
    """Loads the parser configuration from a JSON file.

    Unknown keys are ignored, values of the wrong type fall back to the
    default of their setting.
    """

    def __init__(self, config_path: Path) -> None:
        """Initialize handler with configuration file.

        Parameters
        ----------
        config_path : Path
            Path to JSON configuration file
        """
        self.config_path = config_path
        self.config = ParserConfig()

    def _create_value(self, key: str, value: object) -> object:
        field_name, types = CONFIG_KEYS[key]
        # bool is an int subclass, a size of true is a mistake
        is_valid = isinstance(value, types) and not (isinstance(value, bool) and bool not in types)
        if is_valid:
            return value
        default = getattr(ParserConfig, field_name)
        log.warning(f"Invalid value {value!r} for {key}, defaulting to {default!r}")
        return default

    def _create_config(self, config_data: dict) -> ParserConfig:
        values = {}
        for key, value in config_data.items():
            if key not in CONFIG_KEYS:
                log.warning(f"Unknown configuration key: {key}")
                continue
            field_name, _ = CONFIG_KEYS[key]
            values[field_name] = self._create_value(key, value)
        return ParserConfig(**values)

    def load_config(self) -> ParserConfig:
        """Load parser configuration from JSON file.

        Expected JSON format:
        {
            "Encoding": "cp1252",
            "EncodingErrors": "replace",
            "MaxFileSize": 52428800,
            "RecordUnhandledGroups": false,
            "IncludeAnomalies": true
        }

        Raises
        ------
        FileNotFoundError
            If configuration file does not exist
        json.JSONDecodeError
            If configuration file is not valid JSON
        """
        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, encoding="utf-8") as f:
                config_data = json.load(f)
        except json.JSONDecodeError as e:
            raise json.JSONDecodeError(f"Invalid JSON in configuration file: {e}", e.doc, e.pos) from e

        if not isinstance(config_data, dict):
            log.warning(f"Configuration in {self.config_path} is not an object, using defaults")
            config_data = {}
        self.config = self._create_config(config_data)
        return self.config

    @staticmethod
    def sample_config() -> dict:
        """Configuration file content with every setting at its default."""
        defaults = asdict(ParserConfig())
        return {key: defaults[field_name] for key, (field_name, _) in CONFIG_KEYS.items()}
