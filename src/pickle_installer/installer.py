"""Extension installer: stages a package and hands it to pickle."""

import os
from pathlib import Path

from .archive import is_zip_url, uncompress
from .command_executor import ProcessExecutor
from .composer import Composer
from .config import CACHE_FILE_DIR, PICKLE_PATH
from .environment_helper import EnvironmentHelper, debug_log
from .exceptions import CommandExecutionError, UnsupportedOperationError
from .io_interface import IOInterface
from .package import EXTENSION_TYPE, Package
from .path_helper import PathHelper
from .repository import InstalledRepository
from .system_detector import SystemDetector
from .types import ArgsList
from .version_check import check_pickle

STATE_DIR_NAME = "pickle"


class ExtensionInstaller:
    """
    Installer for packages of type "extension".

    Compilation and installation are done by the external pickle tool; this
    class checks pickle is usable, stages the package sources in a scratch
    directory and runs `pickle install` on them.
    """

    def __init__(
        self,
        io: IOInterface,
        composer: Composer,
        executor: ProcessExecutor | None = None,
        system_detector: SystemDetector | None = None,
    ):
        self.io = io
        self.composer = composer
        self.download_manager = composer.get_download_manager()
        self.process = executor or ProcessExecutor()
        self.system_detector = system_detector or SystemDetector()

        config = composer.get_config()
        self.cache_dir = str(config.get(CACHE_FILE_DIR)).rstrip("/") or "/"
        self.pickle_cmd: ArgsList = EnvironmentHelper.get_pickle_command(
            config.get(PICKLE_PATH)
        )
        self.pickle_version: str | None = None

    def supports(self, package_type: str) -> bool:
        return package_type == EXTENSION_TYPE

    def is_installed(self, repo: InstalledRepository, package: Package) -> bool:
        return repo.has_package(package) and os.access(
            self.get_install_path(package), os.R_OK
        )

    def install(self, repo: InstalledRepository, package: Package) -> None:
        """
        Build and install an extension with pickle.

        Raises:
            ExecutableNotFoundError: If pickle cannot be found
            PickleCommandError, PickleVersionError: If pickle is unusable
            ArchiveExtractionError: If a zip distribution cannot be extracted
            DownloadError: If the download manager cannot stage the package
            CommandExecutionError: If `pickle install` exits non-zero
        """
        self.check_pickle_cmd()
        self.io.write(f"Pickle: fetching {package.pretty_name}")

        log_dir = Path(self.get_install_path(package)) / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)

        with PathHelper.staging_directory(self.cache_dir) as staging:
            source_dir = self._stage_sources(package, staging)
            argv = self.pickle_cmd + [
                "install",
                "-q",
                "-n",
                f"--save-logs={log_dir}",
                str(source_dir),
            ]
            exit_code = self.process.run_nonblocking(argv, self.io.write)

        if exit_code != 0:
            raise CommandExecutionError(
                self.process.format_command(argv), exit_code, str(log_dir)
            )

        if not repo.has_package(package):
            repo.add_package(package)

    def update(
        self, repo: InstalledRepository, initial: Package, target: Package
    ) -> None:
        # no in-place upgrade in pickle, install the target over the old build
        if repo.has_package(initial):
            repo.remove_package(initial)
        self.install(repo, target)

    def uninstall(self, repo: InstalledRepository, package: Package) -> None:
        raise UnsupportedOperationError(f"no uninstall supported: {package}")

    def get_install_path(self, package: Package) -> str:
        """Directory this installer keeps per package (holds pickle's logs)."""
        return str(Path(self.cache_dir) / STATE_DIR_NAME / package.safe_name())

    def check_pickle_cmd(self) -> str:
        self.pickle_version = check_pickle(
            self.process, self.pickle_cmd, self.system_detector
        )
        return self.pickle_version

    def _stage_sources(self, package: Package, staging: Path) -> Path:
        """Put the package sources under staging and return the directory pickle should build."""
        if not is_zip_url(package.dist_url):
            self.download_manager.download(package, staging)
            return staging

        uncompress(package.dist_url, staging)
        manifest = PathHelper.find_composer_json(staging)
        if manifest is None:
            self.io.write_error(
                f"Pickle: no composer.json found in {package.dist_url}, "
                "using the archive root"
            )
            return staging

        debug_log(f"_stage_sources: manifest found at {manifest}")
        return manifest.parent
