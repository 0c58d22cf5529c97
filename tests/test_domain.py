"""Tests for the domain layer."""

import itertools
from datetime import datetime

import pytest

from modindex.domain import (
    License,
    LicenseMetadata,
    SemanticVersion,
    SeriesEntry,
    SeriesIndex,
    SeriesKey,
    VersionInfo,
    VersionQuery,
    VersionType,
    classify_version,
    compare_licenses,
    is_pseudo_version,
    package_suffix,
    series_key,
    series_path,
    sort_licenses,
    sort_versions,
    version_orders_before,
    zip_license_metadata,
)
from modindex.domain.package import Package, Version, VersionedPackage
from modindex.domain.query import PSEUDO_VERSION_LIMIT
from modindex.domain.series import package_path, same_series
from modindex.errors import InconsistencyError, InvalidArgumentError


def info(version, module_path="example.com/mod", version_type=None):
    return VersionInfo(
        module_path=module_path,
        version=version,
        version_type=version_type or classify_version(version),
    )


class TestSemanticVersion:
    """Tests for version parsing and classification."""

    def test_parse_release(self):
        v = SemanticVersion.parse("v1.2.3")
        assert (v.major, v.minor, v.patch, v.prerelease) == (1, 2, 3, "")
        assert not v.is_prerelease
        assert v.sort_prerelease == "~"

    def test_parse_prerelease_and_build(self):
        v = SemanticVersion.parse("v2.0.0-rc.1+meta")
        assert (v.major, v.minor, v.patch) == (2, 0, 0)
        assert v.prerelease == "rc.1"
        assert v.build == "meta"
        assert str(v) == "v2.0.0-rc.1+meta"

    @pytest.mark.parametrize("bad", ["", "1.2.3", "v1.2", "v01.2.3", "v1.2.3-", "latest"])
    def test_parse_invalid(self, bad):
        with pytest.raises(InvalidArgumentError):
            SemanticVersion.parse(bad)

    def test_classify(self):
        assert classify_version("v1.0.0") == VersionType.RELEASE
        assert classify_version("v1.3.0-beta") == VersionType.PRERELEASE
        assert classify_version("v0.0.0-20190101123456-abcdef123456") == VersionType.PSEUDO
        assert classify_version("v1.2.4-0.20190101123456-abcdef123456") == VersionType.PSEUDO

    def test_is_pseudo_version(self):
        assert is_pseudo_version("v0.0.0-20190101123456-abcdef123456")
        assert not is_pseudo_version("v1.0.0-beta.1")
        assert not is_pseudo_version("v1.0.0")

    def test_version_type_storage_strings(self):
        assert [vt.value for vt in VersionType] == ["release", "prerelease", "pseudo"]
        assert str(VersionType.PSEUDO) == "pseudo"


class TestVersionOrder:
    """Tests for the descending version comparator."""

    SAMPLE = [
        info("v1.0.0"),
        info("v1.0.1"),
        info("v1.2.0"),
        info("v1.10.0"),
        info("v1.3.0-beta"),
        info("v1.3.0-alpha"),
        info("v1.3.0"),
        info("v2.0.0", module_path="example.com/mod/v2"),
        info("v0.0.0-20190101123456-abcdef123456"),
    ]

    def test_numeric_not_lexicographic(self):
        assert version_orders_before(info("v1.10.0"), info("v1.2.0"))
        assert not version_orders_before(info("v1.2.0"), info("v1.10.0"))

    def test_release_before_its_prereleases(self):
        assert version_orders_before(info("v1.3.0"), info("v1.3.0-beta"))
        assert version_orders_before(info("v1.3.0"), info("v1.3.0-rc.9"))
        assert not version_orders_before(info("v1.3.0-beta"), info("v1.3.0"))

    def test_prereleases_lexicographic_descending(self):
        assert version_orders_before(info("v1.3.0-beta"), info("v1.3.0-alpha"))
        assert version_orders_before(info("v1.3.0-rc.1"), info("v1.3.0-beta.2"))

    def test_higher_major_module_first(self):
        assert version_orders_before(info("v2.0.0", "example.com/mod/v2"), info("v1.9.0"))

    def test_major_ten_after_major_nine(self):
        # "example.com/mod/v10" < "example.com/mod/v9" as strings
        v10 = info("v10.0.0", "example.com/mod/v10")
        v9 = info("v9.0.0", "example.com/mod/v9")
        assert version_orders_before(v10, v9)
        assert not version_orders_before(v9, v10)
        assert sort_versions([v9, v10]) == [v10, v9]

    def test_module_path_breaks_ties(self):
        a = info("v1.0.0", "example.com/b")
        b = info("v1.0.0", "example.com/a")
        assert version_orders_before(a, b)
        assert version_orders_before(info("v1.0.1", "example.com/a"), a)

    def test_malformed_stored_version(self):
        broken = VersionInfo(module_path="example.com/mod", version="1.0",
                             version_type=VersionType.RELEASE)
        with pytest.raises(InconsistencyError):
            sort_versions([broken, info("v1.0.0")])

    def test_irreflexive(self):
        for v in self.SAMPLE:
            assert not version_orders_before(v, v)

    def test_transitive_and_asymmetric(self):
        for a, b, c in itertools.permutations(self.SAMPLE, 3):
            if version_orders_before(a, b) and version_orders_before(b, c):
                assert version_orders_before(a, c)
            if version_orders_before(a, b):
                assert not version_orders_before(b, a)

    def test_sort_versions(self):
        ordered = [v.version for v in sort_versions(reversed(self.SAMPLE))]
        assert ordered == [
            "v2.0.0",
            "v1.10.0",
            "v1.3.0",
            "v1.3.0-beta",
            "v1.3.0-alpha",
            "v1.2.0",
            "v1.0.1",
            "v1.0.0",
            "v0.0.0-20190101123456-abcdef123456",
        ]

    def test_version_info_to_dict(self):
        v = VersionInfo(
            module_path="example.com/mod",
            version="v1.0.0",
            version_type=VersionType.RELEASE,
            commit_time=datetime(2019, 1, 1),
            readme_file_path="README.md",
            readme_contents=b"# hi",
        )
        d = v.to_dict()
        assert d['version_type'] == "release"
        assert d['commit_time'] == "2019-01-01T00:00:00"
        assert d['has_readme'] is True


class TestSeries:
    """Tests for series path and series matching."""

    @pytest.mark.parametrize("module_path,expected", [
        ("example.com/mod", "example.com/mod"),
        ("example.com/mod/v2", "example.com/mod"),
        ("example.com/mod/v10", "example.com/mod"),
        ("example.com/mod/v1", "example.com/mod/v1"),
        ("example.com/mod/v0", "example.com/mod/v0"),
        ("example.com/mod/v02", "example.com/mod/v02"),
        ("example.com/mod/v2/sub", "example.com/mod/v2/sub"),
        ("gopkg.in/yaml.v2", "gopkg.in/yaml"),
        ("gopkg.in/check.v1-unstable", "gopkg.in/check"),
    ])
    def test_series_path(self, module_path, expected):
        assert series_path(module_path) == expected

    def test_same_series_across_majors(self):
        assert series_key("example.com/mod", "foo") == series_key("example.com/mod/v2", "foo")
        assert same_series("example.com/mod", "foo", "example.com/mod/v3", "foo")

    def test_different_suffix_different_series(self):
        assert series_key("example.com/mod", "foo") != series_key("example.com/mod", "bar")

    def test_empty_suffix_is_a_key(self):
        assert series_key("example.com/mod", "") == series_key("example.com/mod/v2", "")
        assert series_key("example.com/mod", "") != series_key("example.com/mod", "foo")

    def test_package_suffix(self):
        assert package_suffix("example.com/mod", "example.com/mod") == ""
        assert package_suffix("example.com/mod", "example.com/mod/a/b") == "a/b"
        with pytest.raises(ValueError):
            package_suffix("example.com/mod", "example.com/module/a")
        assert package_path("example.com/mod", "") == "example.com/mod"
        assert str(SeriesKey("example.com/mod", "foo")) == "example.com/mod/foo"

    def test_index_match(self):
        index = SeriesIndex()
        index.add("example.com/mod", "foo", "mod-foo")
        index.add("example.com/mod/v2", "foo", "v2-foo")
        index.add("example.com/mod", "bar", "mod-bar")
        index.add("example.com/other", "foo", "other-foo")

        assert sorted(index.match("example.com/mod/v2/foo")) == ["mod-foo", "v2-foo"]
        assert index.match("example.com/mod/bar") == ["mod-bar"]
        assert index.match("example.com/unknown") == []
        assert index.match("") == []
        assert len(index) == 4

    def test_index_match_root(self):
        index = SeriesIndex()
        index.add("example.com/mod", "", "root-v1")
        index.add("example.com/mod/v2", "", "root-v2")
        index.add("example.com/mod/v2", "foo", "v2-foo")
        assert sorted(index.match("example.com/mod")) == ["root-v1", "root-v2"]


class TestLicenses:
    """Tests for license zipping and ordering."""

    def test_deepest_first(self):
        lics = zip_license_metadata(
            ["MIT", "Apache-2.0", "BSD-3-Clause"],
            ["a/b/LICENSE", "LICENSE", "a/LICENSE"],
        )
        assert [l.file_path for l in lics] == ["a/b/LICENSE", "a/LICENSE", "LICENSE"]
        assert [l.type for l in lics] == ["MIT", "BSD-3-Clause", "Apache-2.0"]

    def test_equal_depth_path_then_type(self):
        lics = zip_license_metadata(
            ["MIT", "Apache-2.0", "MIT", "Apache-2.0"],
            ["b/LICENSE", "a/COPYING", "a/COPYING", "LICENSE"],
        )
        assert [(l.file_path, l.type) for l in lics] == [
            ("a/COPYING", "Apache-2.0"),
            ("a/COPYING", "MIT"),
            ("b/LICENSE", "MIT"),
            ("LICENSE", "Apache-2.0"),
        ]

    def test_shallow_path_never_before_deeper(self):
        # "A" < "z/LICENSE" lexicographically, but depth decides first
        shallow = LicenseMetadata(type="MIT", file_path="A")
        deep = LicenseMetadata(type="MIT", file_path="z/LICENSE")
        assert compare_licenses(deep, shallow)
        assert not compare_licenses(shallow, deep)

    def test_mismatched_lengths(self):
        with pytest.raises(InconsistencyError):
            zip_license_metadata(["MIT", "BSD"], ["LICENSE"])
        with pytest.raises(InconsistencyError):
            zip_license_metadata([], ["LICENSE"])

    def test_empty(self):
        assert zip_license_metadata([], []) == []

    def test_sort_full_licenses(self):
        lics = sort_licenses([
            License(type="MIT", file_path="LICENSE", contents=b"mit"),
            License(type="BSD", file_path="x/LICENSE", contents=b"bsd"),
        ])
        assert [l.file_path for l in lics] == ["x/LICENSE", "LICENSE"]
        assert lics[0].metadata == LicenseMetadata(type="BSD", file_path="x/LICENSE")
        assert lics[0].to_dict()['contents'] == "bsd"


class TestPackages:
    """Tests for package-level records."""

    def test_versioned_package_to_dict(self):
        pkg = Package(
            path="example.com/mod/foo",
            name="foo",
            suffix="foo",
            licenses=(LicenseMetadata(type="MIT", file_path="LICENSE"),),
        )
        vp = VersionedPackage(package=pkg, version_info=info("v1.0.0"))
        assert vp.path == "example.com/mod/foo"
        assert vp.module_path == "example.com/mod"
        d = vp.to_dict()
        assert d['licenses'] == [{'type': "MIT", 'file_path': "LICENSE"}]
        assert d['version'] == "v1.0.0"

    def test_version_defaults(self):
        v = Version(version="v1.0.0")
        assert v.packages == ()
        assert v.version_info.version == "v1.0.0"
        assert v.to_dict()['packages'] == []


class TestVersionQuery:
    """Tests for the in-memory version query."""

    def entries(self):
        out = []
        for version in ["v1.0.0", "v1.1.0", "v1.2.0-beta"]:
            out.append(SeriesEntry("example.com/mod", "foo", info(version)))
        for version in ["v2.0.0", "v2.1.0"]:
            out.append(SeriesEntry("example.com/mod/v2", "foo", info(version, "example.com/mod/v2")))
        out.append(SeriesEntry("example.com/mod", "bar", info("v1.5.0")))
        for day in range(1, 13):
            version = f"v0.0.0-201901{day:02d}000000-abcdef123456"
            out.append(SeriesEntry("example.com/mod", "foo", info(version)))
        return out

    def test_empty_version_types(self):
        with pytest.raises(InvalidArgumentError):
            VersionQuery.create("example.com/mod/foo", [])

    def test_rejects_non_version_types(self):
        with pytest.raises(InvalidArgumentError):
            VersionQuery.create("example.com/mod/foo", ["release"])

    def test_limits(self):
        assert VersionQuery.tagged("x").limit is None
        assert VersionQuery.pseudo("x").limit == PSEUDO_VERSION_LIMIT == 10
        mixed = VersionQuery.create("x", [VersionType.PSEUDO, VersionType.RELEASE])
        assert mixed.limit is None

    def test_duplicate_types_collapse(self):
        q = VersionQuery.create("x", [VersionType.PSEUDO, VersionType.PSEUDO])
        assert q.version_types == (VersionType.PSEUDO,)
        assert q.limit == PSEUDO_VERSION_LIMIT

    def test_tagged(self):
        result = VersionQuery.tagged("example.com/mod/v2/foo").apply(self.entries())
        assert [(v.module_path, v.version) for v in result] == [
            ("example.com/mod/v2", "v2.1.0"),
            ("example.com/mod/v2", "v2.0.0"),
            ("example.com/mod", "v1.2.0-beta"),
            ("example.com/mod", "v1.1.0"),
            ("example.com/mod", "v1.0.0"),
        ]

    def test_pseudo_top_ten(self):
        result = VersionQuery.pseudo("example.com/mod/foo").apply(self.entries())
        assert len(result) == 10
        assert [v.version for v in result] == [
            f"v0.0.0-201901{day:02d}000000-abcdef123456" for day in range(12, 2, -1)
        ]

    def test_unknown_path(self):
        assert VersionQuery.tagged("").apply(self.entries()) == []
        assert VersionQuery.tagged("example.com/nope").apply(self.entries()) == []

    def test_double_digit_major_in_history(self):
        entries = [
            SeriesEntry("example.com/mod/v9", "foo", info("v9.1.0", "example.com/mod/v9")),
            SeriesEntry("example.com/mod/v10", "foo", info("v10.0.0", "example.com/mod/v10")),
            SeriesEntry("example.com/mod/v11", "foo", info("v11.0.0-rc.1", "example.com/mod/v11")),
        ]
        result = VersionQuery.tagged("example.com/mod/v10/foo").apply(entries)
        assert [v.version for v in result] == ["v11.0.0-rc.1", "v10.0.0", "v9.1.0"]
