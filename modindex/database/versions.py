"""
Version history queries for modindex.

Lists the versions of every package in the series of a given package path
(same series path, same suffix), newest first. This is how my.mod/foo shows
up in the history of my.mod/v2/foo.
"""

import logging
from typing import Iterable, List, Optional

from ..domain.query import VersionQuery
from ..domain.version import VersionInfo, VersionType
from ..errors import InvalidArgumentError, NotFoundError
from .connection import Database
from .context import QueryContext
from .records import row_to_version_info

logger = logging.getLogger(__name__)

_SERIES_QUERY = """
    WITH package_series AS (
        SELECT
            m.series_path,
            p.path AS package_path,
            p.suffix AS package_suffix,
            p.module_path,
            v.version,
            v.commit_time,
            p.synopsis,
            v.major,
            v.minor,
            v.patch,
            v.prerelease,
            v.version_type
        FROM modules m
        INNER JOIN packages p
            ON p.module_path = m.path
        INNER JOIN versions v
            ON p.module_path = v.module_path
            AND p.version = v.version
    )
    SELECT
        series_path,
        module_path,
        version,
        commit_time,
        synopsis,
        version_type
    FROM package_series
    WHERE
        (series_path, package_suffix) IN (
            SELECT series_path, package_suffix
            FROM package_series
            WHERE package_path = ?
        )
        AND version_type IN ({placeholders})
    ORDER BY
        major DESC,
        minor DESC,
        patch DESC,
        prerelease DESC,
        module_path DESC
"""


def compile_version_query(query: VersionQuery) -> tuple:
    """Build the SQL text and parameters for a VersionQuery."""
    placeholders = ', '.join('?' for _ in query.version_types)
    sql = _SERIES_QUERY.format(placeholders=placeholders)
    params: list = [query.package_path]
    params.extend(vt.value for vt in query.version_types)
    if query.limit is not None:
        sql += "\n    LIMIT ?"
        params.append(query.limit)
    return sql, tuple(params)


def run_version_query(
    db: Database,
    query: VersionQuery,
    ctx: Optional[QueryContext] = None,
) -> List[VersionInfo]:
    sql, params = compile_version_query(query)
    rows = db.query(sql, params, ctx=ctx)
    return [row_to_version_info(row) for row in rows]


def list_versions(
    db: Database,
    package_path: str,
    version_types: Iterable[VersionType],
    ctx: Optional[QueryContext] = None,
) -> List[VersionInfo]:
    """
    List versions of the series of package_path whose type is in version_types.

    Results are sorted in descending order by major, minor and patch number,
    then lexicographically by prerelease, then by module path. Asking for pseudo
    versions only returns at most the 10 most recent.

    Raises:
        InvalidArgumentError: if version_types is empty
    """
    query = VersionQuery.create(package_path, version_types)
    return run_version_query(db, query, ctx=ctx)


def get_tagged_versions_for_package_series(
    db: Database,
    path: str,
    ctx: Optional[QueryContext] = None,
) -> List[VersionInfo]:
    """All release and prerelease versions in the series of path, newest first."""
    return run_version_query(db, VersionQuery.tagged(path), ctx=ctx)


def get_pseudo_versions_for_package_series(
    db: Database,
    path: str,
    ctx: Optional[QueryContext] = None,
) -> List[VersionInfo]:
    """The 10 most recent pseudo-versions in the series of path, newest first."""
    return run_version_query(db, VersionQuery.pseudo(path), ctx=ctx)


def get_version(
    db: Database,
    module_path: str,
    version: str,
    ctx: Optional[QueryContext] = None,
) -> VersionInfo:
    """
    Get a module version by its primary key (module_path, version).

    Raises:
        InvalidArgumentError: if module_path or version is empty
        NotFoundError: if the module version does not exist
    """
    if not module_path or not version:
        raise InvalidArgumentError("module_path and version cannot be empty")

    sql = """
        SELECT
            m.series_path,
            v.module_path,
            v.version,
            v.commit_time,
            v.readme_file_path,
            v.readme_contents,
            v.version_type
        FROM versions v
        INNER JOIN modules m
            ON m.path = v.module_path
        WHERE v.module_path = ? AND v.version = ?
    """
    row = db.query_one(sql, (module_path, version), ctx=ctx)
    if row is None:
        logger.debug(f"version {module_path}@{version} not found")
        raise NotFoundError(f"version {module_path}@{version} not found")
    return row_to_version_info(row)
