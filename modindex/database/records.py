"""
Row decoding for modindex.

Maps storage rows (sqlite3.Row or plain dicts with the same column names) to
domain objects, and folds the rows of one module version into a Version.
"""

import json
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional

from ..domain.license import zip_license_metadata
from ..domain.package import Package, Version, VersionedPackage
from ..domain.version import VersionInfo, VersionType
from ..errors import InconsistencyError


def _get(row: Mapping[str, Any], key: str, default: Any = None) -> Any:
    """Column value, or default when the projection does not include it."""
    if key in row.keys():
        value = row[key]
        return default if value is None else value
    return default


def _parse_time(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value))
    except ValueError as e:
        raise InconsistencyError(f"invalid commit time {value!r}") from e


def _parse_version_type(value: Any) -> Optional[VersionType]:
    if value is None:
        return None
    try:
        return VersionType(value)
    except ValueError as e:
        raise InconsistencyError(f"invalid version type {value!r}") from e


def _json_list(value: Any, column: str) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    try:
        decoded = json.loads(value)
    except (json.JSONDecodeError, TypeError) as e:
        raise InconsistencyError(f"{column} is not a JSON array: {value!r}") from e
    if not isinstance(decoded, list):
        raise InconsistencyError(f"{column} is not a JSON array: {value!r}")
    return decoded


def row_to_package(row: Mapping[str, Any], path: Optional[str] = None) -> Package:
    """
    Decode a package-level row into a Package.

    The license_types and license_paths columns are zipped into sorted
    license metadata.

    Raises:
        InconsistencyError: if the license columns disagree or are malformed
    """
    licenses = zip_license_metadata(
        _json_list(_get(row, 'license_types'), 'license_types'),
        _json_list(_get(row, 'license_paths'), 'license_paths'),
    )
    return Package(
        path=path if path is not None else row['path'],
        name=_get(row, 'name', ''),
        synopsis=_get(row, 'synopsis', ''),
        suffix=_get(row, 'suffix', ''),
        licenses=tuple(licenses),
        documentation=bytes(_get(row, 'documentation', b'')),
    )


def row_to_version_info(row: Mapping[str, Any], version: Optional[str] = None) -> VersionInfo:
    """Decode the version-level columns of a row."""
    readme = _get(row, 'readme_contents')
    return VersionInfo(
        module_path=row['module_path'],
        version=version if version is not None else row['version'],
        version_type=_parse_version_type(_get(row, 'version_type')),
        commit_time=_parse_time(_get(row, 'commit_time')),
        readme_file_path=_get(row, 'readme_file_path'),
        readme_contents=bytes(readme) if readme is not None else None,
    )


def row_to_versioned_package(
    row: Mapping[str, Any],
    path: str,
    version: Optional[str] = None,
) -> VersionedPackage:
    return VersionedPackage(
        package=row_to_package(row, path=path),
        version_info=row_to_version_info(row, version=version),
    )


class _VersionBuilder:
    """Accumulates the rows of one module version; not exposed until built."""

    def __init__(self, version: str):
        self.version = version
        self.info: Optional[VersionInfo] = None
        self.packages: List[Package] = []

    def add(self, row: Mapping[str, Any]) -> None:
        self.info = row_to_version_info(row, version=self.version)
        self.packages.append(row_to_package(row))

    def build(self) -> Version:
        if self.info is None:
            return Version(version=self.version)
        return Version(
            version=self.version,
            module_path=self.info.module_path,
            version_type=self.info.version_type,
            commit_time=self.info.commit_time,
            readme_file_path=self.info.readme_file_path,
            readme_contents=self.info.readme_contents,
            packages=tuple(self.packages),
        )


def assemble_version(version: str, rows: Iterable[Mapping[str, Any]]) -> Version:
    """
    Fold the package rows of one module version into a Version.

    Rows must already be ordered by package path; packages keep the order in
    which rows arrive. Version-level fields come from the last row. With no
    rows, only the version string is set.
    """
    builder = _VersionBuilder(version)
    for row in rows:
        builder.add(row)
    return builder.build()
