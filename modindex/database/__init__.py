"""
Database module for modindex.

Provides read access to a SQLite module index: package lookups, version
histories across module series, imports and licenses.

Key components:
- connection: Database connection management and error translation
- context: Query cancellation and deadlines
- schema: Table definitions and schema versioning
- records: Row decoding and version assembly
- packages: Package, module version and license lookups
- versions: Version histories (tagged and pseudo)
- imports: Import edges
"""

from .connection import (
    get_connection,
    get_db_path,
    Database,
    get_database_info,
)
from .context import QueryContext, background
from .schema import CURRENT_VERSION, ensure_schema
from .records import (
    assemble_version,
    row_to_package,
    row_to_version_info,
    row_to_versioned_package,
)
from .packages import (
    get_package,
    get_latest_package,
    get_version_for_package,
    get_licenses,
)
from .versions import (
    compile_version_query,
    list_versions,
    get_tagged_versions_for_package_series,
    get_pseudo_versions_for_package_series,
    get_version,
)
from .imports import get_imports, get_imported_by

__all__ = [
    # Connection
    'get_connection',
    'get_db_path',
    'Database',
    'get_database_info',
    'QueryContext',
    'background',
    # Schema
    'ensure_schema',
    'CURRENT_VERSION',
    # Records
    'assemble_version',
    'row_to_package',
    'row_to_version_info',
    'row_to_versioned_package',
    # Packages
    'get_package',
    'get_latest_package',
    'get_version_for_package',
    'get_licenses',
    # Versions
    'compile_version_query',
    'list_versions',
    'get_tagged_versions_for_package_series',
    'get_pseudo_versions_for_package_series',
    'get_version',
    # Imports
    'get_imports',
    'get_imported_by',
]
