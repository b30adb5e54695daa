"""Package descriptor for pickle-installer."""

import re

from .exceptions import InvalidPackageError

EXTENSION_TYPE = "extension"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class Package:
    """A package as handed over by the host. Treated as read-only."""

    def __init__(
        self,
        name: str,
        version: str,
        dist_url: str,
        package_type: str = "library",
        pretty_name: str | None = None,
    ):
        if not name or not name.strip():
            raise InvalidPackageError("Package name must not be empty")
        self.name = name.strip().lower()
        self.version = version
        self.dist_url = dist_url
        self.type = package_type
        self.pretty_name = pretty_name or name.strip()

    @property
    def unique_name(self) -> str:
        """Name and version, used as the identity inside repositories."""
        return f"{self.name}-{self.version}"

    def safe_name(self) -> str:
        """Filesystem-safe form of the name, e.g. 'pecl/apcu' -> 'pecl--apcu'."""
        parts = []
        for part in self.name.split("/"):
            cleaned = _UNSAFE_CHARS.sub("_", part)
            # never let a bare "." or ".." through as a path component
            parts.append("_" if cleaned.strip(".") == "" else cleaned)
        return "--".join(parts)

    def __eq__(self, other):
        if not isinstance(other, Package):
            return NotImplemented
        return self.unique_name == other.unique_name

    def __hash__(self):
        return hash(self.unique_name)

    def __str__(self):
        return f"{self.pretty_name} {self.version}"

    def __repr__(self):
        return (
            f"Package(name={self.name!r}, version={self.version!r}, "
            f"type={self.type!r}, dist_url={self.dist_url!r})"
        )
