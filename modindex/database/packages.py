"""
Package lookups for modindex.

Point lookups of a package at a version, of the latest version of a package,
of all packages in a module version, and of a package's licenses.
"""

import logging
from typing import List, Optional

from ..domain.license import License, sort_licenses
from ..domain.package import Version, VersionedPackage
from ..errors import InvalidArgumentError, NotFoundError
from .connection import Database
from .context import QueryContext
from .records import assemble_version, row_to_versioned_package

logger = logging.getLogger(__name__)

# Columns shared by the package-level projections
_PACKAGE_COLUMNS = """
    p.path,
    m.series_path,
    v.module_path,
    v.version,
    p.name,
    p.synopsis,
    p.suffix,
    p.license_types,
    p.license_paths,
    v.readme_file_path,
    v.readme_contents,
    v.commit_time,
    v.version_type,
    p.documentation
"""

_PACKAGE_JOINS = """
    FROM vw_licensed_packages p
    INNER JOIN versions v
        ON v.module_path = p.module_path
        AND v.version = p.version
    INNER JOIN modules m
        ON m.path = v.module_path
"""


def get_package(
    db: Database,
    path: str,
    version: str,
    ctx: Optional[QueryContext] = None,
) -> VersionedPackage:
    """
    Get the package with path at version.

    If several modules contain a package with this path and version, the one
    with the greatest module path is returned.

    Raises:
        InvalidArgumentError: if path or version is empty
        NotFoundError: if no such package exists
    """
    if not path or not version:
        raise InvalidArgumentError("path and version cannot be empty")

    sql = f"""
        SELECT {_PACKAGE_COLUMNS}
        {_PACKAGE_JOINS}
        WHERE p.path = ? AND p.version = ?
        ORDER BY v.module_path DESC
        LIMIT 1
    """
    row = db.query_one(sql, (path, version), ctx=ctx)
    if row is None:
        logger.debug(f"package {path}@{version} not found")
        raise NotFoundError(f"package {path}@{version} not found")
    return row_to_versioned_package(row, path=path, version=version)


def get_latest_package(
    db: Database,
    path: str,
    ctx: Optional[QueryContext] = None,
) -> VersionedPackage:
    """
    Get the latest version of the package with path.

    Latest means the first row in descending (module path, major, minor,
    patch, prerelease) order, across every module containing the path.

    Raises:
        InvalidArgumentError: if path is empty
        NotFoundError: if no package has this path
    """
    if not path:
        raise InvalidArgumentError("path cannot be empty")

    sql = f"""
        SELECT {_PACKAGE_COLUMNS}
        {_PACKAGE_JOINS}
        WHERE p.path = ?
        ORDER BY
            v.module_path DESC,
            v.major DESC,
            v.minor DESC,
            v.patch DESC,
            v.prerelease DESC
        LIMIT 1
    """
    row = db.query_one(sql, (path,), ctx=ctx)
    if row is None:
        logger.debug(f"package {path} not found")
        raise NotFoundError(f"package {path} not found")
    return row_to_versioned_package(row, path=path)


def get_version_for_package(
    db: Database,
    path: str,
    version: str,
    ctx: Optional[QueryContext] = None,
) -> Version:
    """
    Get the module version containing the package at path, with all of its
    packages sorted by package path.

    An unknown path or version gives a Version with no packages.

    Raises:
        InvalidArgumentError: if path or version is empty
    """
    if not path or not version:
        raise InvalidArgumentError("path and version cannot be empty")

    sql = f"""
        SELECT {_PACKAGE_COLUMNS}
        {_PACKAGE_JOINS}
        WHERE p.version = ?
            AND p.module_path IN (
                SELECT module_path
                FROM packages
                WHERE path = ?
            )
        ORDER BY p.path
    """
    rows = db.query(sql, (version, path), ctx=ctx)
    return assemble_version(version, rows)


def get_licenses(
    db: Database,
    path: str,
    version: str,
    ctx: Optional[QueryContext] = None,
) -> List[License]:
    """
    Get all licenses, with contents, that apply to the package at version.

    Raises:
        InvalidArgumentError: if path or version is empty
    """
    if not path or not version:
        raise InvalidArgumentError("path and version cannot be empty")

    sql = """
        SELECT
            l.type,
            l.file_path,
            l.contents
        FROM licenses l
        INNER JOIN package_licenses pl
            ON pl.module_path = l.module_path
            AND pl.version = l.version
            AND pl.file_path = l.file_path
        INNER JOIN packages p
            ON p.module_path = pl.module_path
            AND p.version = pl.version
            AND p.path = pl.package_path
        WHERE p.path = ? AND p.version = ?
        ORDER BY l.file_path
    """
    rows = db.query(sql, (path, version), ctx=ctx)
    licenses = [
        License(
            type=row['type'],
            file_path=row['file_path'],
            contents=bytes(row['contents'] or b''),
        )
        for row in rows
    ]
    return sort_licenses(licenses)
