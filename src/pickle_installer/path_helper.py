"""Path operations for pickle-installer."""

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

CONFIG_FILE_NAME = "pickle-installer.conf"
MANIFEST_NAME = "composer.json"
STAGING_PREFIX = "pickle"


class PathHelper:
    """Utility class for path operations."""

    @staticmethod
    def get_config_path() -> Path | None:
        """Get the path to the config file."""
        # Check XDG_CONFIG_HOME first (standard location)
        if xdg_config_home := os.getenv("XDG_CONFIG_HOME"):
            config_path = Path(xdg_config_home) / CONFIG_FILE_NAME
            if config_path.exists():
                return config_path

        # Fall back to HOME/.config/pickle-installer.conf
        home = os.getenv("HOME")
        if home:
            config_path = Path(home) / ".config" / CONFIG_FILE_NAME
            if config_path.exists():
                return config_path

        return None

    @staticmethod
    def executable_exists(name: str) -> bool:
        """Check if executable exists, either as a path or in PATH."""
        if os.sep in name or (os.altsep and os.altsep in name):
            return PathHelper._is_executable_file(Path(name))

        path = os.environ.get("PATH", "")
        if not path:
            return False

        for path_dir in path.split(os.pathsep):
            if PathHelper._is_valid_path_directory(path_dir):
                if PathHelper._is_executable_file(Path(path_dir) / name):
                    return True
        return False

    @staticmethod
    def _is_valid_path_directory(path_dir: str) -> bool:
        """Check if path directory is valid."""
        return bool(path_dir) and Path(path_dir).is_dir()

    @staticmethod
    def _is_executable_file(executable_path: Path) -> bool:
        """Check if path is an existing file with the executable bit set."""
        return executable_path.is_file() and os.access(executable_path, os.X_OK)

    @staticmethod
    def find_composer_json(basedir: str | Path) -> Path | None:
        """
        Locate the package manifest inside an extracted archive.

        Archives either carry composer.json at their root or wrap everything in
        a single top-level folder, so only one level down is searched. The
        first match in sorted order wins; no further validation is done.
        """
        base = Path(basedir)
        top_level = base / MANIFEST_NAME
        if top_level.exists():
            return top_level

        nested = sorted(base.glob(f"*/{MANIFEST_NAME}"))
        if nested:
            return nested[0]

        return None

    @staticmethod
    @contextmanager
    def staging_directory(cache_dir: str | Path) -> Iterator[Path]:
        """
        Yield a fresh, uniquely named staging directory under cache_dir.

        The directory and everything in it is removed when the block exits,
        whether it exits normally or through an exception.
        """
        cache_path = Path(cache_dir)
        cache_path.mkdir(parents=True, exist_ok=True)
        with tempfile.TemporaryDirectory(
            prefix=STAGING_PREFIX, dir=cache_path
        ) as staging:
            yield Path(staging)
