"""Distribution archive handling for pickle-installer."""

import zipfile
from pathlib import Path
from urllib.parse import unquote, urlparse

from .environment_helper import debug_log
from .exceptions import ArchiveExtractionError


def is_zip_url(url: str) -> bool:
    """Check whether a distribution URL points at a zip archive."""
    return url.lower().endswith("zip")


def local_path_from_url(url: str) -> Path:
    """Turn a plain path or a file:// URL into a filesystem path."""
    parsed = urlparse(url)
    if parsed.scheme == "file":
        return Path(unquote(parsed.path))
    return Path(url)


def uncompress(dist_url: str, extract_dir: str | Path) -> Path:
    """
    Extract a zip distribution into extract_dir.

    Args:
        dist_url: Local path or file:// URL of the zip archive
        extract_dir: Existing directory to extract into

    Returns:
        The extraction directory

    Raises:
        ArchiveExtractionError: If the archive cannot be opened, is corrupt,
            or contains members that would land outside extract_dir
    """
    archive_path = local_path_from_url(dist_url)
    target = Path(extract_dir).resolve()
    debug_log(f"uncompress: {archive_path} -> {target}")

    try:
        with zipfile.ZipFile(archive_path) as zf:
            for member in zf.namelist():
                destination = (target / member).resolve()
                if destination != target and target not in destination.parents:
                    raise ArchiveExtractionError(
                        dist_url, f"member '{member}' escapes the extraction directory"
                    )
            zf.extractall(target)
    except zipfile.BadZipFile as e:
        raise ArchiveExtractionError(dist_url, f"not a valid zip file ({e})") from e
    except OSError as e:
        raise ArchiveExtractionError(dist_url, str(e)) from e

    return target
