"""Configuration management functionality for pickle-installer."""

from pathlib import Path

from .config import KNOWN_KEYS, Config
from .exceptions import InvalidConfigError
from .path_helper import PathHelper
from .types import ConfigData

MAX_CONFIG_SIZE = 1024 * 1024


class ConfigManager:
    """Manages configuration file loading."""

    @staticmethod
    def find_config_file() -> Path | None:
        """Find pickle-installer.conf config file path."""
        return PathHelper.get_config_path()

    @staticmethod
    def load_default() -> Config:
        """Load the config file if there is one, otherwise return defaults."""
        config_file = ConfigManager.find_config_file()
        if config_file is None:
            return Config()
        return ConfigManager.load_config(config_file)

    @staticmethod
    def load_config(config_file: Path) -> Config:
        """
        Load configuration from a KEY=VALUE file.

        Args:
            config_file: Path to the configuration file

        Returns:
            Config holding the values found in the file

        Raises:
            InvalidConfigError: If config file has invalid format or content
        """
        values: ConfigData = {}

        try:
            file_size = config_file.stat().st_size
            if file_size > MAX_CONFIG_SIZE:
                raise InvalidConfigError(
                    str(config_file),
                    message=f"Config file too large ({file_size} bytes)",
                )

            with open(config_file, "r", encoding="utf-8") as f:
                for line_num, line in enumerate(f, 1):
                    ConfigManager._process_config_line(
                        line, line_num, str(config_file), values
                    )
        except UnicodeDecodeError as e:
            raise InvalidConfigError(
                str(config_file), message=f"Invalid file encoding: {e}"
            ) from e
        except OSError as e:
            raise InvalidConfigError(
                str(config_file), message=f"Cannot read config file: {e}"
            ) from e

        return Config(values)

    @staticmethod
    def _process_config_line(
        line: str, line_num: int, config_file: str, values: ConfigData
    ) -> None:
        """Process a single configuration line."""
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            return

        if "=" not in stripped:
            raise InvalidConfigError(config_file, line_num, "Expected KEY=VALUE")

        key, value = stripped.split("=", 1)
        key = ConfigManager._strip_quotes(key.strip())

        if key not in KNOWN_KEYS:
            raise InvalidConfigError(config_file, line_num, f"Unknown key: '{key}'")

        values[key] = ConfigManager._strip_quotes(value.strip())

    @staticmethod
    def _strip_quotes(value: str) -> str:
        """Strip matching surrounding quotes if present."""
        if len(value) >= 2 and (
            (value.startswith('"') and value.endswith('"'))
            or (value.startswith("'") and value.endswith("'"))
        ):
            return value[1:-1]
        return value
