"""
Error taxonomy for modindex.

Every failure raised by the lookup and query functions is one of:

- InvalidArgumentError: empty or malformed identifying input (never retried)
- NotFoundError: a well-formed lookup matched zero rows
- InconsistencyError: an internal invariant was violated (a data-integrity bug)
- StorageError: anything else coming out of the storage collaborator
- CancelledError: the caller cancelled the query or its deadline elapsed

Callers distinguish them with isinstance checks; NotFoundError is a LookupError
and InvalidArgumentError is a ValueError so generic handlers still work.
"""


class ModIndexError(Exception):
    """Base class for all modindex errors."""


class InvalidArgumentError(ModIndexError, ValueError):
    """Raised when identifying input (path, version, version types) is empty or malformed."""


class NotFoundError(ModIndexError, LookupError):
    """Raised when a well-formed lookup matches no rows."""


class InconsistencyError(ModIndexError):
    """Raised when rows from a single projection disagree with each other."""


class StorageError(ModIndexError):
    """Raised for storage failures not classified above (I/O, locking, SQL errors)."""


class CancelledError(StorageError):
    """Raised when a query was cancelled or ran past its deadline."""
