"""Installed-package repositories for pickle-installer."""

from typing import Dict, List, Protocol

from .package import Package


class InstalledRepository(Protocol):
    """The host's record of which packages are installed."""

    def has_package(self, package: Package) -> bool:
        ...

    def add_package(self, package: Package) -> None:
        ...

    def remove_package(self, package: Package) -> None:
        ...

    def get_packages(self) -> List[Package]:
        ...


class InMemoryInstalledRepository:
    """Installed repository that lives for the duration of one process."""

    def __init__(self, packages: List[Package] | None = None):
        self._packages: Dict[str, Package] = {}
        for package in packages or []:
            self.add_package(package)

    def has_package(self, package: Package) -> bool:
        return package.unique_name in self._packages

    def add_package(self, package: Package) -> None:
        self._packages[package.unique_name] = package

    def remove_package(self, package: Package) -> None:
        self._packages.pop(package.unique_name, None)

    def get_packages(self) -> List[Package]:
        return list(self._packages.values())

    def __len__(self):
        return len(self._packages)
