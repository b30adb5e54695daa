"""Prerequisite check for the pickle executable."""

import re

from packaging.version import InvalidVersion, Version

from .command_executor import ProcessExecutor
from .environment_helper import debug_log
from .exceptions import ExecutableNotFoundError, PickleCommandError, PickleVersionError
from .system_detector import SystemDetector
from .types import ArgsList

PICKLE_MIN_VERSION = "0.4.0"

_VERSION_TOKEN = re.compile(r"version\s*:?\s*v?(\d[^\s,;)]*)", re.IGNORECASE)
_RELEASE_PREFIX = re.compile(r"\d+(?:\.\d+)*")


def parse_pickle_version(output: str) -> str | None:
    """Extract the version token following the word 'version' in free-form output."""
    match = _VERSION_TOKEN.search(output)
    if not match:
        return None
    return match.group(1)


def coerce_version(token: str) -> Version:
    """
    Parse a reported version token.

    Tokens that are not PEP 440, such as git-describe builds
    ("0.7.11-3-g1a2b3c4") or a trailing period ("0.7.11."), are compared
    on their leading numeric release.
    """
    try:
        return Version(token)
    except InvalidVersion:
        match = _RELEASE_PREFIX.match(token)
        if not match:
            raise
        return Version(match.group())


def is_version_supported(version: str, minimum: str = PICKLE_MIN_VERSION) -> bool:
    """Return True when version is at least minimum."""
    return coerce_version(version) >= Version(minimum)


def check_pickle(
    executor: ProcessExecutor,
    pickle_cmd: ArgsList,
    system_detector: SystemDetector | None = None,
    minimum: str = PICKLE_MIN_VERSION,
) -> str:
    """
    Make sure pickle is available and recent enough.

    Returns:
        The version string pickle reported

    Raises:
        ExecutableNotFoundError: If the pickle executable does not exist
        PickleCommandError: If `pickle --version` exits non-zero
        PickleVersionError: If no version can be read or it is below minimum
    """
    detector = system_detector or SystemDetector()
    if not detector.find_executable(pickle_cmd[0]):
        raise ExecutableNotFoundError(pickle_cmd[0])

    result = executor.execute(pickle_cmd + ["--version"])
    if result.exit_code != 0:
        raise PickleCommandError(result.exit_code, result.output)

    version = parse_pickle_version(result.output)
    debug_log(f"check_pickle: reported version {version!r}")
    if version is None:
        raise PickleVersionError(
            f"Could not determine pickle version from output: {result.output.strip()!r}"
        )

    if not is_version_supported(version, minimum):
        raise PickleVersionError(
            f"pickle >= {minimum} required, found {version}", found=version
        )

    return version
