"""
Import edge lookups for modindex.
"""

from typing import List, Optional

from ..domain.package import Import
from ..errors import InvalidArgumentError
from .connection import Database
from .context import QueryContext


def get_imports(
    db: Database,
    path: str,
    version: str,
    ctx: Optional[QueryContext] = None,
) -> List[Import]:
    """
    Get the imports of the package with path at version, ordered by
    (to_path, to_name). If several packages share the path and version, the
    imports of all of them are returned.

    Raises:
        InvalidArgumentError: if path or version is empty
    """
    if not path or not version:
        raise InvalidArgumentError("path and version cannot be empty")

    rows = db.query("""
        SELECT from_path, from_version, to_name, to_path
        FROM imports
        WHERE from_path = ? AND from_version = ?
        ORDER BY to_path, to_name
    """, (path, version), ctx=ctx)
    return [
        Import(
            path=row['to_path'],
            name=row['to_name'],
            from_path=row['from_path'],
            from_version=row['from_version'],
        )
        for row in rows
    ]


def get_imported_by(
    db: Database,
    path: str,
    ctx: Optional[QueryContext] = None,
) -> List[str]:
    """
    Get the distinct paths of packages that import path, in ascending order.

    Raises:
        InvalidArgumentError: if path is empty
    """
    if not path:
        raise InvalidArgumentError("path cannot be empty")

    rows = db.query("""
        SELECT DISTINCT from_path
        FROM imports
        WHERE to_path = ?
        ORDER BY from_path
    """, (path,), ctx=ctx)
    return [row['from_path'] for row in rows]
