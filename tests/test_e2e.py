"""End-to-end tests running the installer against a scripted pickle executable."""

import json
import sys
import textwrap

import pytest

from pickle_installer.application import main
from pickle_installer.composer import Composer
from pickle_installer.config import Config
from pickle_installer.exceptions import CommandExecutionError, PickleVersionError
from pickle_installer.installer import ExtensionInstaller
from pickle_installer.io_interface import BufferIO
from pickle_installer.package import Package
from pickle_installer.repository import InMemoryInstalledRepository


@pytest.fixture
def fake_pickle(tmp_path, clean_env):
    """
    Fixture for a fake `pickle` on PATH.

    The script answers `--version` with the configured version and, for
    `install`, records its arguments plus the files it was given into
    calls.json before exiting with the configured status.
    """
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    record = tmp_path / "calls.json"
    script = bin_dir / "pickle"

    def _write(version="0.4.0", install_exit=0):
        script.write_text(
            textwrap.dedent(
                f"""\
                #!{sys.executable}
                import json, os, sys
                args = sys.argv[1:]
                if args == ["--version"]:
                    print("Pickle version {version}")
                    sys.exit(0)
                source = args[-1]
                with open({str(record)!r}, "w") as f:
                    json.dump({{"args": args, "files": sorted(os.listdir(source))}}, f)
                print("compiling")
                sys.exit({install_exit})
                """
            )
        )
        script.chmod(0o755)
        return record

    clean_env.setenv("PATH", str(bin_dir))
    return _write


def _installer(tmp_path, io):
    composer = Composer(Config({"cache-file-dir": str(tmp_path / "cache")}))
    return ExtensionInstaller(io, composer)


class TestEndToEnd:
    def test_install_zip(self, tmp_path, fake_pickle, make_zip):
        record = fake_pickle()
        archive = make_zip(
            "apcu.zip", {"apcu-5.1.23/composer.json": "{}", "apcu-5.1.23/apc.c": ""}
        )
        io = BufferIO()
        repo = InMemoryInstalledRepository()
        package = Package("pecl/apcu", "5.1.23", str(archive), "extension")
        installer = _installer(tmp_path, io)

        installer.install(repo, package)

        call = json.loads(record.read_text())
        assert call["args"][:3] == ["install", "-q", "-n"]
        assert call["args"][3].startswith("--save-logs=")
        assert call["files"] == ["apc.c", "composer.json"]
        assert "compiling" in io.lines
        assert installer.is_installed(repo, package)
        assert installer.pickle_version == "0.4.0"

    def test_failed_build(self, tmp_path, fake_pickle, make_zip):
        fake_pickle(install_exit=1)
        archive = make_zip("apcu.zip", {"composer.json": "{}"})
        repo = InMemoryInstalledRepository()
        package = Package("pecl/apcu", "5.1.23", str(archive), "extension")

        with pytest.raises(CommandExecutionError):
            _installer(tmp_path, BufferIO()).install(repo, package)

        assert not repo.has_package(package)
        staging_left = [
            p for p in (tmp_path / "cache").iterdir() if p.name.startswith("pickle") and p.name != "pickle"
        ]
        assert staging_left == []

    def test_too_old(self, tmp_path, fake_pickle, make_zip):
        record = fake_pickle(version="0.3.0")
        archive = make_zip("apcu.zip", {"composer.json": "{}"})
        package = Package("pecl/apcu", "5.1.23", str(archive), "extension")

        with pytest.raises(PickleVersionError):
            _installer(tmp_path, BufferIO()).install(InMemoryInstalledRepository(), package)

        assert not record.exists()

    def test_cli_install(self, tmp_path, fake_pickle, make_zip, mocker, capsys):
        record = fake_pickle()
        archive = make_zip("apcu.zip", {"composer.json": "{}"})
        config = tmp_path / "pickle-installer.conf"
        config.write_text(f"cache-file-dir={tmp_path / 'cache'}\n")
        mocker.patch(
            "pickle_installer.config_manager.ConfigManager.find_config_file",
            return_value=config,
        )
        mocker.patch("sys.argv", ["pickle-installer", "install", str(archive)])

        assert main() == 0

        assert record.exists()
        assert "Pickle: installed apcu dev" in capsys.readouterr().out
