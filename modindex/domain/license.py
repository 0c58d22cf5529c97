"""
License domain objects for modindex.

Licenses are ordered so that the most specific file comes first: deeper file
paths before shallower ones, then by path, then by license type.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple, TypeVar

from ..errors import InconsistencyError

logger = logging.getLogger(__name__)

L = TypeVar('L', bound='LicenseMetadata')


@dataclass(frozen=True)
class LicenseMetadata:
    """A detected license: its type (e.g. MIT) and the file it was found in."""
    type: str
    file_path: str

    @property
    def depth(self) -> int:
        """Number of '/'-separated components in file_path."""
        return len(self.file_path.split('/'))

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type, 'file_path': self.file_path}


@dataclass(frozen=True)
class License(LicenseMetadata):
    """License metadata together with the license file contents."""
    contents: bytes = b''

    @property
    def metadata(self) -> LicenseMetadata:
        return LicenseMetadata(type=self.type, file_path=self.file_path)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d['contents'] = self.contents.decode('utf-8', errors='replace')
        return d


def license_sort_key(lic: LicenseMetadata) -> Tuple[int, str, str]:
    """Composite key: depth descending, then file path, then type."""
    return (-lic.depth, lic.file_path, lic.type)


def compare_licenses(i: LicenseMetadata, j: LicenseMetadata) -> bool:
    """Report whether i sorts before j."""
    return license_sort_key(i) < license_sort_key(j)


def sort_licenses(licenses: Sequence[L]) -> List[L]:
    return sorted(licenses, key=license_sort_key)


def zip_license_metadata(license_types: Sequence[str], license_paths: Sequence[str]) -> List[LicenseMetadata]:
    """
    Pair license types with license paths by position, then sort.

    Both lists come from one correlated storage projection, so a length
    mismatch means the data is broken; it is never padded or truncated.

    Raises:
        InconsistencyError: if the lists have different lengths
    """
    if len(license_types) != len(license_paths):
        logger.error(
            f"BUG: got {len(license_types)} license types and "
            f"{len(license_paths)} license paths"
        )
        raise InconsistencyError(
            f"got {len(license_types)} license types and {len(license_paths)} license paths"
        )
    metadata = [
        LicenseMetadata(type=t, file_path=p)
        for t, p in zip(license_types, license_paths)
    ]
    return sort_licenses(metadata)
