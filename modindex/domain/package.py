"""
Package domain objects for modindex.

Package is one importable unit inside a module version. Version is the
aggregate of a module version with all of its packages, ordered by path.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from .license import LicenseMetadata
from .version import VersionInfo, VersionType


@dataclass(frozen=True)
class Package:
    """One package of a module version."""
    path: str
    name: str
    synopsis: str = ""
    suffix: str = ""
    licenses: Tuple[LicenseMetadata, ...] = ()
    documentation: bytes = b''

    def to_dict(self) -> Dict[str, Any]:
        return {
            'path': self.path,
            'name': self.name,
            'synopsis': self.synopsis,
            'suffix': self.suffix,
            'licenses': [lic.to_dict() for lic in self.licenses],
        }


@dataclass(frozen=True)
class VersionedPackage:
    """A package together with the module version it belongs to."""
    package: Package
    version_info: VersionInfo

    @property
    def path(self) -> str:
        return self.package.path

    @property
    def module_path(self) -> str:
        return self.version_info.module_path

    @property
    def version(self) -> str:
        return self.version_info.version

    def to_dict(self) -> Dict[str, Any]:
        d = self.package.to_dict()
        d.update(self.version_info.to_dict())
        return d


@dataclass(frozen=True)
class Version:
    """A module version and its packages, ordered by package path."""
    version: str
    module_path: str = ""
    version_type: Optional[VersionType] = None
    commit_time: Optional[datetime] = None
    readme_file_path: Optional[str] = None
    readme_contents: Optional[bytes] = None
    packages: Tuple[Package, ...] = ()

    @property
    def version_info(self) -> VersionInfo:
        return VersionInfo(
            module_path=self.module_path,
            version=self.version,
            version_type=self.version_type,
            commit_time=self.commit_time,
            readme_file_path=self.readme_file_path,
            readme_contents=self.readme_contents,
        )

    def to_dict(self) -> Dict[str, Any]:
        d = self.version_info.to_dict()
        d['packages'] = [pkg.to_dict() for pkg in self.packages]
        return d


@dataclass(frozen=True)
class Import:
    """An import edge from (from_path, from_version) to the package at path."""
    path: str
    name: str
    from_path: str = ""
    from_version: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'from_path': self.from_path,
            'from_version': self.from_version,
            'path': self.path,
            'name': self.name,
        }
