#!/usr/bin/env python3
"""Command line front end for pickle-installer."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .composer import Composer
from .config_manager import ConfigManager
from .environment_helper import debug_log
from .exceptions import InstallerError
from .installer import ExtensionInstaller
from .io_interface import ConsoleIO, IOInterface
from .package import EXTENSION_TYPE, Package
from .repository import InMemoryInstalledRepository
from .types import ArgsList, ExitCode


def print_help() -> None:
    """Print concise help message about pickle-installer functionality."""
    help_text = """pickle-installer - install PHP extensions through pickle
Usage:
  pickle-installer check                                   # Verify pickle >= 0.4.0
  pickle-installer install ./apcu-5.1.23.zip               # Install from a zip
  pickle-installer install ./apcu --name pecl/apcu --version 5.1.23

  Config file: $XDG_CONFIG_HOME/pickle-installer.conf or $HOME/.config/pickle-installer.conf
  Config format: KEY=VALUE (keys: cache-file-dir, pickle-path)
  Supports COMPOSER_PICKLE_PATH=... and PICKLE_INSTALLER_DEBUG=1
"""
    print(help_text)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pickle-installer", add_help=False)
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("check", add_help=False)

    install = sub.add_parser("install", add_help=False)
    install.add_argument("dist_url", help="Path or file:// URL of the distribution")
    install.add_argument("--name", default=None, help="Package name (vendor/name)")
    install.add_argument("--version", default="dev", help="Package version")
    return parser


def package_from_dist_url(
    dist_url: str, name: Optional[str] = None, version: str = "dev"
) -> Package:
    """Build an extension package descriptor for a distribution given on the command line."""
    if not name:
        stem = Path(dist_url.rstrip("/")).name
        for suffix in (".zip", ".tgz", ".tar.gz", ".tar.bz2", ".tar"):
            if stem.lower().endswith(suffix):
                stem = stem[: -len(suffix)]
                break
        name = stem
    return Package(name, version, dist_url, package_type=EXTENSION_TYPE)


class Application:
    """Main application orchestrator."""

    def __init__(
        self,
        io: Optional[IOInterface] = None,
        composer: Optional[Composer] = None,
        installer: Optional[ExtensionInstaller] = None,
    ):
        self.io = io or ConsoleIO()
        self.composer = composer or Composer(ConfigManager.load_default())
        self.installer = installer or ExtensionInstaller(self.io, self.composer)
        self.repository = InMemoryInstalledRepository()

    def run(self, args: ArgsList) -> ExitCode:
        """Run the application with the given arguments."""
        if not args or "--help" in args or "-h" in args:
            print_help()
            return 0

        try:
            parsed = build_parser().parse_args(args)
        except SystemExit as e:
            return 2 if e.code else 0

        debug_log(f"run: parsed arguments {vars(parsed)}")

        if parsed.command == "check":
            version = self.installer.check_pickle_cmd()
            self.io.write(f"pickle {version} found")
            return 0

        package = package_from_dist_url(parsed.dist_url, parsed.name, parsed.version)
        if not self.installer.supports(package.type):
            logging.error(f"Package type '{package.type}' is not supported")
            return 1

        self.installer.install(self.repository, package)
        self.io.write(f"Pickle: installed {package}")
        return 0


def main() -> ExitCode:
    """Main entry point."""
    logging.basicConfig(format="%(levelname)s: %(message)s")
    try:
        app = Application()
        return app.run(sys.argv[1:])
    except InstallerError as e:
        logging.error(str(e))
        return 1
    except Exception as e:
        logging.error(f"Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
