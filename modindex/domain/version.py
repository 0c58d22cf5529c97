"""
Version domain objects for modindex.

A module version string looks like ``v1.2.3``, ``v1.3.0-beta.1`` or, for an
untagged commit, a pseudo-version such as ``v0.0.0-20190101123456-abcdef123456``.

Ordering is always *descending*: the newest version comes first. The same
ordering is used by the version history queries (``ORDER BY major DESC, minor
DESC, patch DESC, prerelease DESC, module_path DESC``) and by ``sort_versions``
so that rows coming from any source can be ordered identically in memory.
Module path only breaks ties: ``example.com/mod/v10`` is newer than
``example.com/mod/v9`` even though it is smaller as a string.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..errors import InconsistencyError, InvalidArgumentError

# Stored in place of an empty prerelease. '~' sorts after every character
# allowed in a prerelease, so a release is "newer" under DESC ordering.
RELEASE_PRERELEASE = '~'

_SEMVER_RE = re.compile(
    r'^v(?P<major>0|[1-9]\d*)'
    r'\.(?P<minor>0|[1-9]\d*)'
    r'\.(?P<patch>0|[1-9]\d*)'
    r'(?:-(?P<prerelease>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?'
    r'(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$'
)

_PSEUDO_RE = re.compile(
    r'^v[0-9]+\.(0\.0-|\d+\.\d+-([^+]*\.)?0\.)\d{14}-[A-Za-z0-9]+'
    r'(\+[0-9A-Za-z-]+(\.[0-9A-Za-z-]+)*)?$'
)


class VersionType(Enum):
    """Kind of a module version; the value is what storage holds."""
    RELEASE = "release"
    PRERELEASE = "prerelease"
    PSEUDO = "pseudo"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SemanticVersion:
    """
    A parsed ``vMAJOR.MINOR.PATCH[-PRERELEASE][+BUILD]`` version.

    Examples:
        SemanticVersion.parse("v1.2.3")        -> (1, 2, 3, "")
        SemanticVersion.parse("v2.0.0-rc.1")   -> (2, 0, 0, "rc.1")
    """

    major: int
    minor: int
    patch: int
    prerelease: str = ""
    build: str = ""

    @classmethod
    def parse(cls, version: str) -> 'SemanticVersion':
        """
        Parse a version string.

        Raises:
            InvalidArgumentError: if the string is not a semantic version
        """
        match = _SEMVER_RE.match(version or '')
        if not match:
            raise InvalidArgumentError(f"invalid semantic version: {version!r}")
        return cls(
            major=int(match.group('major')),
            minor=int(match.group('minor')),
            patch=int(match.group('patch')),
            prerelease=match.group('prerelease') or '',
            build=match.group('build') or '',
        )

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    @property
    def sort_prerelease(self) -> str:
        """Prerelease as stored for ordering (sentinel for releases)."""
        return self.prerelease or RELEASE_PRERELEASE

    def __str__(self) -> str:
        s = f"v{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            s += f"-{self.prerelease}"
        if self.build:
            s += f"+{self.build}"
        return s


def is_pseudo_version(version: str) -> bool:
    """Report whether version is a pseudo-version (synthesized for an untagged commit)."""
    return (
        version.count('-') >= 2
        and _SEMVER_RE.match(version) is not None
        and _PSEUDO_RE.match(version) is not None
    )


def classify_version(version: str) -> VersionType:
    """
    Determine the VersionType of a version string.

    Raises:
        InvalidArgumentError: if the string is not a semantic version
    """
    semver = SemanticVersion.parse(version)
    if is_pseudo_version(version):
        return VersionType.PSEUDO
    if semver.is_prerelease:
        return VersionType.PRERELEASE
    return VersionType.RELEASE


@dataclass(frozen=True)
class VersionInfo:
    """One version of one module."""

    module_path: str
    version: str
    version_type: Optional[VersionType] = None
    commit_time: Optional[datetime] = None
    readme_file_path: Optional[str] = None
    readme_contents: Optional[bytes] = None

    @property
    def sort_key(self) -> Tuple[int, int, int, str, str]:
        """
        Raises:
            InconsistencyError: if the stored version string is malformed
        """
        try:
            return version_sort_key(self.module_path, self.version)
        except InvalidArgumentError as e:
            raise InconsistencyError(
                f"{self.module_path}@{self.version}: stored version is not a semantic version"
            ) from e

    def to_dict(self) -> Dict[str, Any]:
        return {
            'module_path': self.module_path,
            'version': self.version,
            'version_type': self.version_type.value if self.version_type else None,
            'commit_time': self.commit_time.isoformat() if self.commit_time else None,
            'readme_file_path': self.readme_file_path,
            'has_readme': bool(self.readme_contents),
        }


def version_sort_key(module_path: str, version: str) -> Tuple[int, int, int, str, str]:
    """
    Ascending sort key matching the storage ORDER BY columns.

    Sort with ``reverse=True`` to get the descending (newest first) order.
    """
    semver = SemanticVersion.parse(version)
    return (semver.major, semver.minor, semver.patch, semver.sort_prerelease, module_path)


def version_orders_before(a: VersionInfo, b: VersionInfo) -> bool:
    """Report whether a comes strictly before b in descending version order."""
    return a.sort_key > b.sort_key


def sort_versions(versions: Iterable[VersionInfo]) -> List[VersionInfo]:
    """Return versions in descending order (newest first)."""
    return sorted(versions, key=lambda v: v.sort_key, reverse=True)
