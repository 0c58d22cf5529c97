"""
Module series for modindex.

A series is the set of module paths that are successive major versions of the
same module: ``example.com/mod``, ``example.com/mod/v2``, ``example.com/mod/v3``.
Packages are grouped across those modules by their suffix, so
``example.com/mod/foo`` and ``example.com/mod/v2/foo`` are the same package
in different majors.
"""

import re
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Generic, Iterable, List, Set, Tuple, TypeVar

# example.com/mod/v2 -> example.com/mod (v0, v1 and leading zeros are not majors)
_MAJOR_SUFFIX_RE = re.compile(r'^(?P<prefix>.+)/v(?P<major>[1-9]\d*)$')
# gopkg.in/yaml.v2 -> gopkg.in/yaml
_GOPKG_IN_RE = re.compile(r'^(?P<prefix>gopkg\.in/.+)\.v(?P<major>0|[1-9]\d*)(?:-unstable)?$')

T = TypeVar('T')


def series_path(module_path: str) -> str:
    """Strip the major version element from a module path, if it has one."""
    match = _GOPKG_IN_RE.match(module_path)
    if match:
        return match.group('prefix')

    match = _MAJOR_SUFFIX_RE.match(module_path)
    if match and match.group('major') != '1':
        return match.group('prefix')

    return module_path


def package_suffix(module_path: str, package_path: str) -> str:
    """
    Path of a package relative to its module root ("" for the root package).

    Raises:
        ValueError: if package_path is not inside module_path
    """
    if package_path == module_path:
        return ''
    prefix = module_path + '/'
    if not package_path.startswith(prefix):
        raise ValueError(f"package {package_path!r} is not in module {module_path!r}")
    return package_path[len(prefix):]


def package_path(module_path: str, suffix: str) -> str:
    """Inverse of package_suffix."""
    return f"{module_path}/{suffix}" if suffix else module_path


@dataclass(frozen=True)
class SeriesKey:
    """Identity of a package across the major versions of its module."""
    series_path: str
    suffix: str

    def __str__(self) -> str:
        return package_path(self.series_path, self.suffix)


def series_key(module_path: str, suffix: str) -> SeriesKey:
    """Build the series key of the package at suffix within module_path."""
    return SeriesKey(series_path=series_path(module_path), suffix=suffix)


def same_series(module_a: str, suffix_a: str, module_b: str, suffix_b: str) -> bool:
    """Report whether two packages belong to the same series."""
    return series_key(module_a, suffix_a) == series_key(module_b, suffix_b)


class SeriesIndex(Generic[T]):
    """
    In-memory series lookup.

    Entries are added as (module_path, suffix, item). ``match(path)`` mirrors the
    storage self-join: resolve the keys of every entry whose package path is
    ``path``, then return all entries sharing one of those keys.

    Usage:
        index = SeriesIndex()
        index.add("example.com/mod", "foo", "v1.0.0")
        index.add("example.com/mod/v2", "foo", "v2.0.0")
        index.match("example.com/mod/v2/foo")   # -> ["v1.0.0", "v2.0.0"]
    """

    def __init__(self) -> None:
        self._by_key: Dict[SeriesKey, List[T]] = defaultdict(list)
        self._keys_by_path: Dict[str, Set[SeriesKey]] = defaultdict(set)

    def add(self, module_path: str, suffix: str, item: T) -> SeriesKey:
        key = series_key(module_path, suffix)
        self._by_key[key].append(item)
        self._keys_by_path[package_path(module_path, suffix)].add(key)
        return key

    def extend(self, entries: Iterable[Tuple[str, str, T]]) -> None:
        for module_path, suffix, item in entries:
            self.add(module_path, suffix, item)

    def keys_for(self, path: str) -> Set[SeriesKey]:
        """Series keys of the packages whose path is exactly path."""
        return set(self._keys_by_path.get(path, ()))

    def lookup(self, key: SeriesKey) -> List[T]:
        return list(self._by_key.get(key, ()))

    def match(self, path: str) -> List[T]:
        """All items in the same series as the package at path, in insertion order per key."""
        matched: List[T] = []
        for key in sorted(self.keys_for(path), key=lambda k: (k.series_path, k.suffix)):
            matched.extend(self.lookup(key))
        return matched

    def __len__(self) -> int:
        return sum(len(items) for items in self._by_key.values())
