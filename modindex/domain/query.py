"""
Version history queries for modindex.

A VersionQuery selects, for one package path, the versions of every package in
the same series (same series path and suffix) whose version type is in a given
set, newest first, optionally truncated. The storage layer compiles it to SQL;
``apply`` evaluates it over rows that came from anywhere else.
"""

from dataclasses import dataclass
from typing import Iterable, List, NamedTuple, Optional, Tuple

from ..errors import InvalidArgumentError
from .series import SeriesIndex
from .version import VersionInfo, VersionType, sort_versions

# Pseudo-version histories only show the most recent entries.
PSEUDO_VERSION_LIMIT = 10

TAGGED_VERSION_TYPES = (VersionType.RELEASE, VersionType.PRERELEASE)
PSEUDO_VERSION_TYPES = (VersionType.PSEUDO,)


class SeriesEntry(NamedTuple):
    """A package occurrence in some module version."""
    module_path: str
    suffix: str
    info: VersionInfo


@dataclass(frozen=True)
class VersionQuery:
    """
    Version history query for the series of one package.

    Attributes:
        package_path: Path of the package whose series is listed
        version_types: Version types to include (never empty)
        limit: Maximum number of results, or None for all
    """

    package_path: str
    version_types: Tuple[VersionType, ...]
    limit: Optional[int] = None

    @classmethod
    def create(cls, package_path: str, version_types: Iterable[VersionType]) -> 'VersionQuery':
        """
        Validate arguments and pick the result limit.

        A query for pseudo-versions only is truncated to PSEUDO_VERSION_LIMIT.

        Raises:
            InvalidArgumentError: if version_types is empty or has non-VersionType items
        """
        types: List[VersionType] = []
        for vt in version_types:
            if not isinstance(vt, VersionType):
                raise InvalidArgumentError(f"not a version type: {vt!r}")
            if vt not in types:
                types.append(vt)
        if not types:
            raise InvalidArgumentError("must specify at least one version type")

        limit = PSEUDO_VERSION_LIMIT if types == [VersionType.PSEUDO] else None
        return cls(package_path=package_path, version_types=tuple(types), limit=limit)

    @classmethod
    def tagged(cls, package_path: str) -> 'VersionQuery':
        return cls.create(package_path, TAGGED_VERSION_TYPES)

    @classmethod
    def pseudo(cls, package_path: str) -> 'VersionQuery':
        return cls.create(package_path, PSEUDO_VERSION_TYPES)

    def apply(self, entries: Iterable[SeriesEntry]) -> List[VersionInfo]:
        """Evaluate the query in memory over package occurrences."""
        index: SeriesIndex[VersionInfo] = SeriesIndex()
        index.extend(entries)

        matched = [
            info for info in index.match(self.package_path)
            if info.version_type in self.version_types
        ]
        ordered = sort_versions(matched)
        if self.limit is not None:
            ordered = ordered[:self.limit]
        return ordered
