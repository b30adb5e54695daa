"""Download managers that stage package sources for pickle-installer."""

import shutil
import tarfile
from pathlib import Path
from typing import Protocol

from .archive import local_path_from_url
from .environment_helper import debug_log
from .exceptions import DownloadError
from .package import Package

TAR_SUFFIXES = (".tar", ".tar.gz", ".tgz", ".tar.bz2", ".tbz2", ".tar.xz")


class DownloadManager(Protocol):
    """Fetches a package's distribution into a target directory."""

    def download(self, package: Package, target_dir: str | Path) -> None:
        ...


class LocalDownloadManager:
    """
    Stages distributions that are already on the local filesystem.

    Directories are copied as-is and tar archives are extracted. Remote
    fetching is left to the host's own download manager.
    """

    def download(self, package: Package, target_dir: str | Path) -> None:
        source = local_path_from_url(package.dist_url)
        target = Path(target_dir)
        debug_log(f"download: {source} -> {target}")

        if not source.exists():
            raise DownloadError(package.dist_url, "source does not exist")

        if source.is_dir():
            shutil.copytree(source, target, dirs_exist_ok=True)
            return

        if source.name.lower().endswith(TAR_SUFFIXES):
            self._extract_tar(package.dist_url, source, target)
            return

        raise DownloadError(package.dist_url, "unsupported distribution format")

    @staticmethod
    def _extract_tar(dist_url: str, source: Path, target: Path) -> None:
        """Extract a tar archive, refusing members outside the target."""
        try:
            with tarfile.open(source) as tf:
                tf.extractall(target, filter="data")
        except tarfile.TarError as e:
            raise DownloadError(dist_url, f"cannot extract tar archive ({e})") from e
        except OSError as e:
            raise DownloadError(dist_url, str(e)) from e
