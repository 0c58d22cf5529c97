"""
Query contexts for modindex.

A QueryContext travels with every storage call. It can be cancelled from
another thread and may carry a deadline; the connection polls it while a
statement runs and aborts the statement once it is done.
"""

import threading
import time
from typing import Optional

from ..errors import CancelledError


class QueryContext:
    """
    Cancellation and deadline for a single logical request.

    Usage:
        ctx = QueryContext(timeout=2.0)
        versions = get_tagged_versions_for_package_series(db, path, ctx=ctx)

        # From another thread
        ctx.cancel()
    """

    def __init__(self, timeout: Optional[float] = None):
        self._cancelled = threading.Event()
        self.deadline: Optional[float] = (
            time.monotonic() + timeout if timeout is not None else None
        )

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def done(self) -> bool:
        """True once the context is cancelled or past its deadline."""
        return self.cancelled or self.expired

    def reason(self) -> str:
        if self.cancelled:
            return "query cancelled"
        if self.expired:
            return "query deadline exceeded"
        return ""

    def check(self) -> None:
        """Raise CancelledError if the context is done."""
        if self.done():
            raise CancelledError(self.reason())


def background() -> QueryContext:
    """A context that is never cancelled and has no deadline."""
    return QueryContext()
