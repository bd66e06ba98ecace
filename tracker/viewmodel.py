# -*- coding: utf-8 -*-
"""In-memory source of truth for one logging session.

Mutations update the in-memory state first and then queue a save of a snapshot;
the caller never waits for the disk. A failed save only sets ``error_message``.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Collection, Iterable, List, Optional
from uuid import UUID

from .models import LoggedRecord, utc_now
from .storage import JsonLogStore

logger = logging.getLogger(__name__)


class LogViewModel:
    domain: str = ""

    def __init__(self, store: JsonLogStore, *, clock: Callable[[], datetime] | None = None) -> None:
        self._store = store
        self._clock = clock or utc_now
        self._lock = threading.RLock()
        self._entries: List[Any] = []
        self._catalog: List[Any] = self.default_catalog()
        self.error_message: Optional[str] = None

    def default_catalog(self) -> List[Any]:
        return []

    @property
    def entries(self) -> List[Any]:
        with self._lock:
            return list(self._entries)

    @property
    def catalog(self) -> List[Any]:
        with self._lock:
            return list(self._catalog)

    def clear_error(self) -> None:
        self.error_message = None

    # ---- Loading ----

    def load_entries(self) -> "Future[bool]":
        """Replace entries and catalog with the stored payload.

        The returned future resolves to ``False`` on failure instead of raising.
        """
        result: Future = Future()

        def apply(future: Future) -> None:
            try:
                payload = future.result()
            except Exception as exc:
                self._fail("load", exc)
                result.set_result(False)
                return
            with self._lock:
                self._entries = list(payload.entries)
                self._catalog = list(payload.catalog)
            result.set_result(True)

        self._store.load().add_done_callback(apply)
        return result

    # ---- Deletion ----

    def delete_entry(self, entry: LoggedRecord) -> None:
        with self._lock:
            self._entries = [e for e in self._entries if e.id != entry.id]
            self._persist()

    def delete_entries(self, ids: Collection[UUID]) -> None:
        if not ids:
            return
        wanted = set(ids)
        with self._lock:
            self._entries = [e for e in self._entries if e.id not in wanted]
            self._persist()

    # ---- Export ----

    def export_log(self, entries: Iterable[LoggedRecord]) -> "Future[Optional[Path]]":
        """Export a caller-chosen subset; resolves to ``None`` on failure or when empty."""
        subset = list(entries)
        result: Future = Future()
        if not subset:
            result.set_result(None)
            return result

        def done(future: Future) -> None:
            try:
                result.set_result(future.result())
            except Exception as exc:
                self._fail("export", exc)
                result.set_result(None)

        self._store.export(subset).add_done_callback(done)
        return result

    def flush(self, timeout: float | None = None) -> None:
        """Wait for queued saves to reach the disk."""
        self._store.drain(timeout)

    # ---- Helpers for subclasses ----

    def _index_of(self, entry_id: UUID) -> Optional[int]:
        for index, existing in enumerate(self._entries):
            if existing.id == entry_id:
                return index
        return None

    def _resort(self) -> None:
        self._entries.sort(key=lambda e: e.date, reverse=True)

    def _persist(self) -> None:
        with self._lock:
            future = self._store.save(list(self._entries), list(self._catalog))
        future.add_done_callback(self._on_saved)

    def _on_saved(self, future: Future) -> None:
        exc = future.exception()
        if exc is not None:
            self._fail("save", exc)

    def _fail(self, operation: str, exc: BaseException) -> None:
        logger.warning("%s %s failed: %s", operation, self.domain, exc)
        self.error_message = f"Failed to {operation} {self.domain}."
