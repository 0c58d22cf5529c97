"""
Database schema for modindex.

This module defines the SQLite schema of the module index:
- modules: one row per module path, with its series path
- versions: one row per module version, with the numeric version columns
  used for ordering (release versions store '~' as prerelease)
- packages: one row per package per module version
- licenses / package_licenses: detected license files and which packages
  they apply to
- imports: import edges between packages

The vw_licensed_packages view aggregates each package's license types and
paths into two JSON arrays built in the same pass, so they stay aligned.
"""

import logging
import sqlite3

logger = logging.getLogger(__name__)

# Current schema version - increment when schema changes
# v1: Initial schema
CURRENT_VERSION = 1

SCHEMA_V1 = """
-- Schema version tracking
CREATE TABLE IF NOT EXISTS _schema_info (
    version INTEGER PRIMARY KEY,
    applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    description TEXT
);

CREATE TABLE IF NOT EXISTS modules (
    path TEXT PRIMARY KEY,
    series_path TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS versions (
    module_path TEXT NOT NULL,
    version TEXT NOT NULL,
    major INTEGER NOT NULL,
    minor INTEGER NOT NULL,
    patch INTEGER NOT NULL,
    prerelease TEXT NOT NULL,  -- '~' for releases
    version_type TEXT NOT NULL CHECK (version_type IN ('release', 'prerelease', 'pseudo')),
    commit_time TIMESTAMP,
    readme_file_path TEXT,
    readme_contents BLOB,
    PRIMARY KEY (module_path, version),
    FOREIGN KEY (module_path) REFERENCES modules(path) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS packages (
    path TEXT NOT NULL,
    module_path TEXT NOT NULL,
    version TEXT NOT NULL,
    name TEXT NOT NULL,
    synopsis TEXT,
    suffix TEXT NOT NULL DEFAULT '',
    documentation BLOB,
    PRIMARY KEY (path, module_path, version),
    FOREIGN KEY (module_path, version) REFERENCES versions(module_path, version) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS licenses (
    module_path TEXT NOT NULL,
    version TEXT NOT NULL,
    file_path TEXT NOT NULL,
    type TEXT NOT NULL,
    contents BLOB,
    PRIMARY KEY (module_path, version, file_path),
    FOREIGN KEY (module_path, version) REFERENCES versions(module_path, version) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS package_licenses (
    module_path TEXT NOT NULL,
    version TEXT NOT NULL,
    package_path TEXT NOT NULL,
    file_path TEXT NOT NULL,
    PRIMARY KEY (module_path, version, package_path, file_path),
    FOREIGN KEY (module_path, version, file_path)
        REFERENCES licenses(module_path, version, file_path) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS imports (
    from_path TEXT NOT NULL,
    from_version TEXT NOT NULL,
    to_path TEXT NOT NULL,
    to_name TEXT NOT NULL,
    PRIMARY KEY (from_path, from_version, to_path)
);

-- Indexes for the lookups
CREATE INDEX IF NOT EXISTS idx_packages_module_version ON packages(module_path, version);
CREATE INDEX IF NOT EXISTS idx_packages_version ON packages(version);
CREATE INDEX IF NOT EXISTS idx_modules_series ON modules(series_path);
CREATE INDEX IF NOT EXISTS idx_versions_type ON versions(version_type);
CREATE INDEX IF NOT EXISTS idx_imports_to_path ON imports(to_path);

-- Packages with their license types and paths as parallel JSON arrays
CREATE VIEW IF NOT EXISTS vw_licensed_packages AS
SELECT
    p.path,
    p.module_path,
    p.version,
    p.name,
    p.synopsis,
    p.suffix,
    p.documentation,
    CASE WHEN COUNT(l.file_path) = 0 THEN '[]' ELSE json_group_array(l.type) END AS license_types,
    CASE WHEN COUNT(l.file_path) = 0 THEN '[]' ELSE json_group_array(l.file_path) END AS license_paths
FROM packages p
LEFT JOIN package_licenses pl
    ON pl.module_path = p.module_path
    AND pl.version = p.version
    AND pl.package_path = p.path
LEFT JOIN licenses l
    ON l.module_path = pl.module_path
    AND l.version = pl.version
    AND l.file_path = pl.file_path
GROUP BY p.path, p.module_path, p.version;
"""


def get_schema_version(conn: sqlite3.Connection) -> int:
    """Get current schema version from database."""
    try:
        cursor = conn.execute("SELECT MAX(version) FROM _schema_info")
        result = cursor.fetchone()
        return result[0] if result[0] is not None else 0
    except sqlite3.OperationalError:
        # Table doesn't exist yet
        return 0


def apply_schema(conn: sqlite3.Connection) -> None:
    """Apply the current schema to the database."""
    current = get_schema_version(conn)
    if current != 0 and current < CURRENT_VERSION:
        logger.info(f"Schema version {current} -> {CURRENT_VERSION}")

    conn.executescript(SCHEMA_V1)
    conn.execute(
        "INSERT OR REPLACE INTO _schema_info (version, description) VALUES (?, ?)",
        (CURRENT_VERSION, "Initial module index schema")
    )
    conn.commit()


def ensure_schema(conn: sqlite3.Connection) -> None:
    """Ensure database has current schema."""
    if get_schema_version(conn) < CURRENT_VERSION:
        apply_schema(conn)
