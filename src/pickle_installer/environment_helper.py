"""Environment variable operations for pickle-installer."""

import os
import shlex
import sys
from pathlib import Path

from .exceptions import InvalidConfigError
from .types import ArgsList

PICKLE_PATH_VAR = "COMPOSER_PICKLE_PATH"
DEBUG_VAR = "PICKLE_INSTALLER_DEBUG"
DEFAULT_PICKLE_COMMAND = "pickle"


def debug_log(message: str) -> None:
    """Log debug message when PICKLE_INSTALLER_DEBUG=1 is set."""
    if os.environ.get(DEBUG_VAR, "").lower() in ("1", "true", "yes", "on"):
        print(f"[DEBUG] {message}", file=sys.stderr, flush=True)


class EnvironmentHelper:
    """Utility class for environment variable operations."""

    @staticmethod
    def get_pickle_command(configured: str | None = None) -> ArgsList:
        """
        Get the pickle command as an argument list.

        COMPOSER_PICKLE_PATH wins over the configured value, which wins over
        plain "pickle". Values are split with shell rules so that
        "php /opt/pickle.phar" becomes two arguments.
        """
        override = os.environ.get(PICKLE_PATH_VAR, "").strip()
        if override:
            debug_log(f"get_pickle_command: using {PICKLE_PATH_VAR}={override}")
            return EnvironmentHelper._split_command(override, PICKLE_PATH_VAR)

        if configured and configured.strip():
            debug_log(f"get_pickle_command: using configured pickle-path={configured}")
            return EnvironmentHelper._split_command(configured, "pickle-path")

        return [DEFAULT_PICKLE_COMMAND]

    @staticmethod
    def _split_command(value: str, source: str) -> ArgsList:
        """Split a command string, reporting malformed quoting against its source."""
        try:
            return shlex.split(value)
        except ValueError as e:
            raise InvalidConfigError(
                source, message=f"Cannot parse pickle command {value!r}: {e}"
            ) from e

    @staticmethod
    def get_default_cache_dir() -> str:
        """Get the default composer file cache directory."""
        # COMPOSER_CACHE_DIR first, matching the host's own lookup order
        if cache_home := os.environ.get("COMPOSER_CACHE_DIR"):
            return str(Path(cache_home) / "files")

        if xdg_cache := os.environ.get("XDG_CACHE_HOME"):
            return str(Path(xdg_cache) / "composer" / "files")

        return str(Path.home() / ".cache" / "composer" / "files")
