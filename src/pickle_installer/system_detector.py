"""System detection functionality for pickle-installer."""

from .path_helper import PathHelper


class SystemDetector:
    """Handles environment detection functionality."""

    @staticmethod
    def find_executable(name: str) -> bool:
        """Check if executable exists in PATH."""
        return PathHelper.executable_exists(name)
