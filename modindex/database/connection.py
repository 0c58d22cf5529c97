"""
Database connection management for modindex.

Provides connection setup, a context manager and error translation.
The index is a SQLite database; modindex only reads from it.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, List, Optional

from ..errors import CancelledError, StorageError
from .context import QueryContext
from .schema import ensure_schema

logger = logging.getLogger(__name__)

# Number of SQLite VM instructions between cancellation checks
PROGRESS_INTERVAL = 1000


def get_db_path(config: Optional[dict] = None) -> Path:
    """
    Get the database file path.

    Checks in order:
    1. MODINDEX_DB environment variable
    2. config['database']['path'] if provided
    3. Default: ~/.modindex/index.db

    Args:
        config: Optional configuration dictionary

    Returns:
        Path to database file
    """
    # Environment variable override
    if 'MODINDEX_DB' in os.environ:
        return Path(os.environ['MODINDEX_DB'])

    # Config override
    if config and 'database' in config and config['database'].get('path'):
        return Path(config['database']['path']).expanduser()

    # Default location
    return Path.home() / '.modindex' / 'index.db'


def get_connection(
    db_path: Optional[Path] = None,
    config: Optional[dict] = None,
    read_only: bool = False
) -> sqlite3.Connection:
    """
    Get a database connection.

    Writable connections create the database and apply the schema if needed.
    Read-only connections require an existing database.

    Args:
        db_path: Optional explicit path to database
        config: Optional configuration dictionary
        read_only: If True, open in read-only mode

    Returns:
        SQLite connection
    """
    if db_path is None:
        db_path = get_db_path(config)

    if read_only:
        uri = f"file:{db_path}?mode=ro"
        conn = sqlite3.connect(uri, uri=True)
    else:
        db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(db_path))

    # Configure connection
    conn.row_factory = sqlite3.Row  # Enable dict-like access
    conn.execute("PRAGMA foreign_keys = ON")

    if not read_only:
        conn.execute("PRAGMA journal_mode = WAL")
        conn.execute("PRAGMA synchronous = NORMAL")
        ensure_schema(conn)

    return conn


class Database:
    """
    Database context manager for modindex.

    Every lookup function takes a Database explicitly; nothing holds one in
    module state.

    Usage:
        with Database(read_only=True) as db:
            rows = db.query("SELECT path FROM modules")

        # With cancellation
        ctx = QueryContext(timeout=5)
        with Database(config=my_config, read_only=True) as db:
            rows = db.query(sql, params, ctx=ctx)
    """

    def __init__(
        self,
        db_path: Optional[Path] = None,
        config: Optional[dict] = None,
        read_only: bool = False
    ):
        self.db_path = db_path
        self.config = config
        self.read_only = read_only
        self._conn: Optional[sqlite3.Connection] = None
        self._cursor: Optional[sqlite3.Cursor] = None

    def __enter__(self) -> 'Database':
        try:
            self._conn = get_connection(
                db_path=self.db_path,
                config=self.config,
                read_only=self.read_only
            )
        except sqlite3.Error as e:
            path = self.db_path or get_db_path(self.config)
            raise StorageError(f"cannot open database {path}: {e}") from e
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._cursor:
            self._cursor.close()
            self._cursor = None
        if self._conn:
            if exc_type is None and not self.read_only:
                self._conn.commit()
            self._conn.close()
            self._conn = None

    @property
    def conn(self) -> sqlite3.Connection:
        """Get the underlying connection."""
        if self._conn is None:
            raise RuntimeError("Database not connected. Use 'with Database() as db:'")
        return self._conn

    @contextmanager
    def _guarded(self, ctx: Optional[QueryContext]) -> Generator[None, None, None]:
        """Abort the running statement when ctx is done; translate sqlite errors."""
        if ctx is not None:
            ctx.check()
            self.conn.set_progress_handler(ctx.done, PROGRESS_INTERVAL)
        try:
            yield
        except sqlite3.Error as e:
            if ctx is not None and ctx.done():
                raise CancelledError(ctx.reason()) from e
            logger.debug(f"Storage failure: {e}")
            raise StorageError(f"{type(e).__name__}: {e}") from e
        finally:
            if ctx is not None:
                self.conn.set_progress_handler(None, 0)

    def execute(self, sql: str, params: tuple = (), ctx: Optional[QueryContext] = None) -> sqlite3.Cursor:
        """Execute SQL statement."""
        with self._guarded(ctx):
            self._cursor = self.conn.execute(sql, params)
        return self._cursor

    def executemany(self, sql: str, params_seq) -> sqlite3.Cursor:
        """Execute SQL statement with multiple parameter sets."""
        with self._guarded(None):
            self._cursor = self.conn.executemany(sql, params_seq)
        return self._cursor

    def fetchone(self) -> Optional[sqlite3.Row]:
        """Fetch one row from last query."""
        if self._cursor is None:
            return None
        return self._cursor.fetchone()

    def fetchall(self) -> list:
        """Fetch all rows from last query."""
        if self._cursor is None:
            return []
        return self._cursor.fetchall()

    def query(self, sql: str, params: tuple = (), ctx: Optional[QueryContext] = None) -> List[sqlite3.Row]:
        """
        Run a query and drain every row before returning.

        The cursor is closed whether or not iteration succeeds, so a failed
        fetch never leaves a half-read cursor behind and never yields a partial
        result.
        """
        with self._guarded(ctx):
            cursor = self.conn.execute(sql, params)
            try:
                return cursor.fetchall()
            finally:
                cursor.close()

    def query_one(self, sql: str, params: tuple = (), ctx: Optional[QueryContext] = None) -> Optional[sqlite3.Row]:
        """Run a query and return its first row, or None."""
        with self._guarded(ctx):
            cursor = self.conn.execute(sql, params)
            try:
                return cursor.fetchone()
            finally:
                cursor.close()


def get_database_info(config: Optional[dict] = None, db_path: Optional[Path] = None) -> dict:
    """
    Get information about the database.

    Returns:
        Dictionary with database stats
    """
    if db_path is None:
        db_path = get_db_path(config)

    if not db_path.exists():
        return {
            'exists': False,
            'path': str(db_path),
        }

    with Database(db_path=db_path, read_only=True) as db:
        counts = {}
        for table in ('modules', 'versions', 'packages', 'licenses', 'imports'):
            row = db.query_one(f"SELECT COUNT(*) FROM {table}")
            counts[table] = row[0] if row else 0

        row = db.query_one("SELECT MAX(version) FROM _schema_info")
        schema_version = row[0] if row else 0

        file_size = db_path.stat().st_size

        return {
            'exists': True,
            'path': str(db_path),
            'size_bytes': file_size,
            'size_human': _human_size(file_size),
            'schema_version': schema_version,
            **counts,
        }


def _human_size(size_bytes: int) -> str:
    """Convert bytes to human-readable size."""
    size: float = float(size_bytes)
    for unit in ['B', 'KB', 'MB', 'GB']:
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"
