"""
Domain layer for modindex.

Contains pure domain objects with no I/O or side effects:
- VersionInfo / SemanticVersion / VersionType: module versions and their order
- SeriesKey / SeriesIndex: grouping of packages across major versions
- LicenseMetadata / License: detected licenses and their order
- Package / Version / VersionedPackage / Import: package-level records
- VersionQuery: version history selection, evaluated in memory

These objects are immutable and provide to_dict() for output.
"""

from .version import (
    VersionType,
    SemanticVersion,
    VersionInfo,
    classify_version,
    is_pseudo_version,
    sort_versions,
    version_orders_before,
    version_sort_key,
)
from .series import SeriesKey, SeriesIndex, series_key, series_path, package_suffix
from .license import License, LicenseMetadata, compare_licenses, sort_licenses, zip_license_metadata
from .package import Import, Package, Version, VersionedPackage
from .query import PSEUDO_VERSION_LIMIT, SeriesEntry, VersionQuery

__all__ = [
    'VersionType',
    'SemanticVersion',
    'VersionInfo',
    'classify_version',
    'is_pseudo_version',
    'sort_versions',
    'version_orders_before',
    'version_sort_key',
    'SeriesKey',
    'SeriesIndex',
    'series_key',
    'series_path',
    'package_suffix',
    'License',
    'LicenseMetadata',
    'compare_licenses',
    'sort_licenses',
    'zip_license_metadata',
    'Import',
    'Package',
    'Version',
    'VersionedPackage',
    'PSEUDO_VERSION_LIMIT',
    'SeriesEntry',
    'VersionQuery',
]
