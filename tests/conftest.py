import zipfile
from pathlib import Path

import pytest


def pytest_configure():
    """Add the src directory to the Python path before any tests run."""
    import sys

    src_dir = Path(__file__).parent.parent / "src"
    if str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


class FakeExecutor:
    """
    Stand-in for ProcessExecutor that never spawns processes.

    `--version` calls return `version_result`; everything else is treated as
    `pickle install` and replays `install_lines` before returning
    `install_exit_code`. The source directory passed to pickle is inspected
    while the call is in progress, since it is gone afterwards.
    """

    def __init__(self, version_output="Pickle version 0.4.0", version_exit=0):
        from pickle_installer.types import CommandResult

        self.version_result = CommandResult(version_exit, version_output)
        self.install_exit_code = 0
        self.install_lines = ["Build done"]
        self.executed = []
        self.streamed = []
        self.source_snapshot = None

    @staticmethod
    def format_command(argv):
        from pickle_installer.command_executor import ProcessExecutor

        return ProcessExecutor.format_command(argv)

    def execute(self, argv):
        self.executed.append(list(argv))
        return self.version_result

    def run_nonblocking(self, argv, on_line):
        self.streamed.append(list(argv))
        source = Path(argv[-1])
        self.source_snapshot = {
            "path": source,
            "exists": source.is_dir(),
            "files": sorted(p.name for p in source.iterdir()) if source.is_dir() else [],
        }
        for line in self.install_lines:
            on_line(line)
        return self.install_exit_code


@pytest.fixture
def fake_executor():
    """Fixture for an executor reporting pickle 0.4.0 and successful installs."""
    return FakeExecutor()


@pytest.fixture
def clean_env(monkeypatch):
    """Fixture removing environment variables that change installer behavior."""
    for var in (
        "COMPOSER_PICKLE_PATH",
        "PICKLE_INSTALLER_DEBUG",
        "COMPOSER_CACHE_DIR",
        "XDG_CACHE_HOME",
        "XDG_CONFIG_HOME",
    ):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


@pytest.fixture
def mock_pickle_found(mocker):
    """Fixture for a pickle executable that is always found."""
    return mocker.patch(
        "pickle_installer.system_detector.SystemDetector.find_executable",
        return_value=True,
    )


@pytest.fixture
def cache_dir(tmp_path):
    """Fixture for an isolated composer file cache directory."""
    path = tmp_path / "cache"
    path.mkdir()
    return path


@pytest.fixture
def composer(cache_dir):
    """Fixture for a host context whose cache-file-dir points at cache_dir."""
    from pickle_installer.composer import Composer
    from pickle_installer.config import Config

    return Composer(Config({"cache-file-dir": str(cache_dir) + "/"}))


@pytest.fixture
def buffer_io():
    """Fixture for an IO sink that records everything written to it."""
    from pickle_installer.io_interface import BufferIO

    return BufferIO()


@pytest.fixture
def installer(clean_env, buffer_io, composer, fake_executor, mock_pickle_found):
    """Fixture for an ExtensionInstaller wired to fakes."""
    from pickle_installer.installer import ExtensionInstaller

    return ExtensionInstaller(buffer_io, composer, executor=fake_executor)


@pytest.fixture
def make_zip(tmp_path):
    """
    Fixture for building zip archives on disk.

    Usage:
        def test_something(make_zip):
            archive = make_zip("ext.zip", {"ext-1.0/composer.json": "{}"})
    """

    def _make_zip(name, members):
        archive = tmp_path / name
        with zipfile.ZipFile(archive, "w") as zf:
            for member, content in members.items():
                zf.writestr(member, content)
        return archive

    return _make_zip


@pytest.fixture
def extension_package():
    """Factory fixture for extension package descriptors."""
    from pickle_installer.package import Package

    def _package(dist_url, name="pecl/apcu", version="5.1.23"):
        return Package(name, version, str(dist_url), package_type="extension")

    return _package
