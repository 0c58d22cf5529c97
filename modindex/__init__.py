"""
modindex - Version resolution and metadata ordering for a module index.

Given a package path, modindex determines the latest version, lists tagged
and pseudo versions across a module series (example.com/mod, example.com/mod/v2,
...), and returns license metadata in a deterministic order.

Quick Start:
    from modindex.database import Database, get_latest_package
    from modindex.database import get_tagged_versions_for_package_series

    with Database(read_only=True) as db:
        latest = get_latest_package(db, "example.com/mod/foo")
        print(latest.version, latest.module_path)

        for info in get_tagged_versions_for_package_series(db, "example.com/mod/foo"):
            print(info.version, info.version_type)

Ordering without a database:
    from modindex.domain import VersionInfo, sort_versions, zip_license_metadata

    sort_versions(infos)                    # newest first
    zip_license_metadata(types, paths)      # most specific license first

Errors (modindex.errors):
    InvalidArgumentError - empty or malformed input
    NotFoundError        - lookup matched nothing
    InconsistencyError   - corrupted projection (e.g. license lists differ)
    StorageError         - database failure; CancelledError on cancel/deadline
"""

__version__ = "0.1.0"

from .errors import (
    ModIndexError,
    InvalidArgumentError,
    NotFoundError,
    InconsistencyError,
    StorageError,
    CancelledError,
)

__all__ = [
    '__version__',
    'ModIndexError',
    'InvalidArgumentError',
    'NotFoundError',
    'InconsistencyError',
    'StorageError',
    'CancelledError',
]
