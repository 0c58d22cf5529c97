"""
Shared fixtures for modindex tests.

IndexBuilder writes rows straight into a temporary index database; modindex
itself only reads.
"""

from datetime import datetime, timedelta
from pathlib import Path
from typing import Iterable, Optional

import pytest

from modindex.database import Database
from modindex.domain.series import package_path, series_path
from modindex.domain.version import SemanticVersion, VersionType, classify_version

BASE_TIME = datetime(2019, 1, 1, 12, 0, 0)


class IndexBuilder:
    """Populates a temporary module index."""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        # Creates the file and applies the schema
        with Database(db_path=db_path):
            pass

    def add_version(
        self,
        module_path: str,
        version: str,
        commit_time: Optional[datetime] = None,
        readme_file_path: Optional[str] = None,
        readme_contents: Optional[bytes] = None,
        version_type: Optional[VersionType] = None,
    ) -> None:
        semver = SemanticVersion.parse(version)
        vtype = version_type or classify_version(version)
        with Database(db_path=self.db_path) as db:
            db.execute(
                "INSERT OR IGNORE INTO modules (path, series_path) VALUES (?, ?)",
                (module_path, series_path(module_path)),
            )
            db.execute(
                """INSERT INTO versions
                   (module_path, version, major, minor, patch, prerelease, version_type,
                    commit_time, readme_file_path, readme_contents)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    module_path, version, semver.major, semver.minor, semver.patch,
                    semver.sort_prerelease, vtype.value,
                    (commit_time or BASE_TIME).isoformat(),
                    readme_file_path, readme_contents,
                ),
            )

    def add_package(
        self,
        module_path: str,
        version: str,
        suffix: str,
        name: Optional[str] = None,
        synopsis: str = "",
        documentation: bytes = b"",
    ) -> str:
        path = package_path(module_path, suffix)
        with Database(db_path=self.db_path) as db:
            db.execute(
                """INSERT INTO packages
                   (path, module_path, version, name, synopsis, suffix, documentation)
                   VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (path, module_path, version, name or path.rsplit('/', 1)[-1],
                 synopsis, suffix, documentation),
            )
        return path

    def add_license(
        self,
        module_path: str,
        version: str,
        file_path: str,
        license_type: str,
        contents: bytes = b"",
        packages: Iterable[str] = (),
    ) -> None:
        with Database(db_path=self.db_path) as db:
            db.execute(
                """INSERT INTO licenses (module_path, version, file_path, type, contents)
                   VALUES (?, ?, ?, ?, ?)""",
                (module_path, version, file_path, license_type, contents),
            )
            db.executemany(
                """INSERT INTO package_licenses (module_path, version, package_path, file_path)
                   VALUES (?, ?, ?, ?)""",
                [(module_path, version, pkg, file_path) for pkg in packages],
            )

    def add_import(self, from_path: str, from_version: str, to_path: str, to_name: str) -> None:
        with Database(db_path=self.db_path) as db:
            db.execute(
                "INSERT INTO imports (from_path, from_version, to_path, to_name) VALUES (?, ?, ?, ?)",
                (from_path, from_version, to_path, to_name),
            )


def seed_series(builder: IndexBuilder) -> None:
    """
    example.com/mod        v1.0.0 v1.1.0 v1.2.0 v1.3.0-beta + 12 pseudo-versions
    example.com/mod/v2     v2.0.0 v2.1.0-rc.1 (root package only at v2.0.0)
    example.com/latest     v1.2.0 v1.3.0-beta (with a "v2" directory package)
    example.com/latest/v2  v2.0.0
    """
    mod = "example.com/mod"
    for i, version in enumerate(["v1.0.0", "v1.1.0", "v1.2.0", "v1.3.0-beta"]):
        builder.add_version(mod, version, commit_time=BASE_TIME + timedelta(days=i),
                            readme_file_path="README.md", readme_contents=b"# mod")
        builder.add_package(mod, version, "", name="mod")
        builder.add_package(mod, version, "bar")
        if version != "v1.1.0":
            builder.add_package(mod, version, "foo", synopsis=f"foo at {version}")

    for i in range(12):
        version = f"v0.0.0-201902{i + 1:02d}000000-abcdef{i:06d}"
        builder.add_version(mod, version, commit_time=BASE_TIME + timedelta(days=30 + i))
        builder.add_package(mod, version, "foo")

    mod2 = "example.com/mod/v2"
    for i, version in enumerate(["v2.0.0", "v2.1.0-rc.1"]):
        builder.add_version(mod2, version, commit_time=BASE_TIME + timedelta(days=60 + i))
        builder.add_package(mod2, version, "foo", synopsis=f"foo v2 at {version}")
        builder.add_package(mod2, version, "baz")
        if version == "v2.0.0":
            builder.add_package(mod2, version, "", name="mod")

    builder.add_license(mod, "v1.2.0", "LICENSE", "MIT", b"MIT text",
                        packages=["example.com/mod/foo", "example.com/mod/bar"])
    builder.add_license(mod, "v1.2.0", "foo/LICENSE", "BSD-3-Clause", b"BSD text",
                        packages=["example.com/mod/foo"])
    builder.add_license(mod, "v1.2.0", "foo/internal/LICENSE", "Apache-2.0", b"Apache text",
                        packages=["example.com/mod/foo"])

    latest = "example.com/latest"
    for version in ["v1.2.0", "v1.3.0-beta"]:
        builder.add_version(latest, version)
        builder.add_package(latest, version, "v2", name="v2")
    builder.add_version("example.com/latest/v2", "v2.0.0")
    builder.add_package("example.com/latest/v2", "v2.0.0", "", name="latest")

    builder.add_import("example.com/mod/foo", "v1.2.0", "fmt", "fmt")
    builder.add_import("example.com/mod/foo", "v1.2.0", "example.com/mod/bar", "bar")
    builder.add_import("example.com/mod/foo", "v1.2.0", "example.com/dep", "dep")
    builder.add_import("example.com/mod/foo", "v1.0.0", "example.com/mod/bar", "bar")
    builder.add_import("example.com/app", "v0.1.0", "example.com/mod/bar", "bar")


@pytest.fixture
def index(tmp_path) -> IndexBuilder:
    """An empty index database."""
    return IndexBuilder(tmp_path / 'index.db')


@pytest.fixture
def seeded_index(index) -> IndexBuilder:
    """An index holding the example.com/mod series and friends."""
    seed_series(index)
    return index


@pytest.fixture
def db(seeded_index):
    """Read-only connection to the seeded index."""
    with Database(db_path=seeded_index.db_path, read_only=True) as database:
        yield database
