"""
In-memory conversion history.

Holds the most-recent-first log of conversion attempts for the lifetime
of the process. A single instance is created by ``create_app()`` and
handed to request handlers through the ``get_history`` dependency.
"""

import threading

from fastapi import Request

from .models import ConversionRecord


class ConversionHistory:
    """
    Ordered, append-only log of conversion records.

    Storage is unbounded; readers ask for a limited window with ``list()``.
    Appends and reads are serialized by a lock so a reader never observes
    a partially inserted entry.
    """

    def __init__(self) -> None:
        self._records: list[ConversionRecord] = []
        self._lock = threading.Lock()

    def record(self, entry: ConversionRecord) -> None:
        """Insert an entry at the front (most recent first)."""
        with self._lock:
            self._records.insert(0, entry)

    def list(self, limit: int | None = None) -> list[ConversionRecord]:
        """Return up to ``limit`` most recent entries without mutating the log."""
        with self._lock:
            if limit is None:
                return list(self._records)
            return self._records[: max(limit, 0)]

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


def get_history(request: Request) -> ConversionHistory:
    """
    Dependency that provides the application's history store.

    Usage in FastAPI:
        @router.get("/api/history")
        def list_history(history: ConversionHistory = Depends(get_history)):
            ...
    """
    return request.app.state.history
