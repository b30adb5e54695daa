"""Host configuration container for pickle-installer."""

from .environment_helper import EnvironmentHelper
from .types import ConfigData

CACHE_FILE_DIR = "cache-file-dir"
PICKLE_PATH = "pickle-path"

KNOWN_KEYS = (CACHE_FILE_DIR, PICKLE_PATH)


class Config:
    """Holds configured values, falling back to computed defaults."""

    def __init__(self, values: ConfigData | None = None):
        self.values: ConfigData = dict(values or {})

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return a configured value, its default, or the given fallback."""
        if key in self.values:
            return self.values[key]
        if key == CACHE_FILE_DIR:
            return EnvironmentHelper.get_default_cache_dir()
        return default

    def __contains__(self, key):
        """Allow checking if a key was explicitly configured using 'in'."""
        return key in self.values
