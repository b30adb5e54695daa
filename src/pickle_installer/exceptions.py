"""Custom exceptions for pickle-installer."""


class InstallerError(Exception):
    """Base exception for pickle-installer errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ExecutableNotFoundError(InstallerError):
    """Raised when the pickle executable cannot be found."""

    def __init__(self, executable: str):
        super().__init__(f"Required executable '{executable}' not found in PATH")
        self.executable = executable


class PickleCommandError(InstallerError):
    """Raised when `pickle --version` exits with a non-zero status."""

    def __init__(self, exit_code: int, output: str = ""):
        message = f"Error while calling pickle command: {exit_code}"
        if output:
            message += f"\n{output.strip()}"
        super().__init__(message)
        self.exit_code = exit_code
        self.output = output


class PickleVersionError(InstallerError):
    """Raised when the installed pickle version is missing or too old."""

    def __init__(self, message: str, found: str | None = None):
        super().__init__(message)
        self.found = found


class CommandExecutionError(InstallerError):
    """Raised when command execution fails."""

    def __init__(self, command: str, exit_code: int, log_path: str = ""):
        message = f"Command execution failed: {command} (exit code: {exit_code})"
        if log_path:
            message += f"\nSee logs in {log_path}"
        super().__init__(message)
        self.command = command
        self.exit_code = exit_code
        self.log_path = log_path


class ArchiveExtractionError(InstallerError):
    """Raised when a distribution archive cannot be opened or extracted."""

    def __init__(self, archive: str, reason: str):
        super().__init__(f"Cannot extract archive {archive}: {reason}")
        self.archive = archive
        self.reason = reason


class DownloadError(InstallerError):
    """Raised when the download manager cannot stage a package."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Cannot download {url}: {reason}")
        self.url = url
        self.reason = reason


class UnsupportedOperationError(InstallerError):
    """Raised for operations the extension installer does not implement."""


class InvalidPackageError(InstallerError):
    """Raised when a package descriptor is unusable."""


class InvalidConfigError(InstallerError):
    """Raised when config file has invalid format or content."""

    def __init__(
        self,
        path: str,
        line_num: int | None = None,
        message: str = "Invalid config format",
    ):
        full_message = f"Invalid config in {path}"
        if line_num:
            full_message += f" at line {line_num}"
        full_message += f": {message}"
        super().__init__(full_message)
        self.path = path
        self.line_num = line_num
