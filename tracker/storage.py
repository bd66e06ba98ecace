# -*- coding: utf-8 -*-
"""JSON log storage shared by the workout and diet domains.

Each store owns one canonical JSON file and runs every file operation on its
own single-worker executor, so reads and writes on that file never interleave.
Documents are serialized in the caller's thread: a queued write always holds a
snapshot of the state at the moment it was requested.
"""

from __future__ import annotations

import json
import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Generic, Iterable, List, Sequence, TypeVar

from pydantic import BaseModel

from .config import settings
from .models import utc_now
from .text import fold, sort_key

logger = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT", bound=BaseModel)

Parser = Callable[[Any], Any]


class StoreError(RuntimeError):
    """The one failure a store reports; the message is shown to the user."""

    def __init__(self, operation: str, domain: str) -> None:
        super().__init__(f"Failed to {operation} {domain}.")
        self.operation = operation
        self.domain = domain


class SchemaError(ValueError):
    """No parser in the decode chain accepted the document."""


def require_document(raw: Any) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise TypeError(f"expected a JSON object, got {type(raw).__name__}")
    if "entries" not in raw and "catalog" not in raw:
        raise ValueError("object has neither 'entries' nor 'catalog'")
    return raw


def decode_first(raw: Any, parsers: Sequence[Parser]) -> Any:
    """Try each parser in order; the first one that accepts ``raw`` wins."""
    failures: List[str] = []
    for parser in parsers:
        try:
            return parser(raw)
        except (ValueError, TypeError) as exc:
            logger.debug("Parser %s rejected document: %s", parser.__name__, exc)
            failures.append(f"{parser.__name__}: {exc}")
    raise SchemaError("; ".join(failures) or "no parsers configured")


def dump_document(document: Dict[str, Any]) -> str:
    return json.dumps(document, ensure_ascii=False, indent=2, sort_keys=True, allow_nan=False) + "\n"


def atomic_write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        with tmp.open("w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise


def _failed_future(error: StoreError, cause: BaseException) -> Future:
    error.__cause__ = cause
    future: Future = Future()
    future.set_exception(error)
    return future


class JsonLogStore(Generic[PayloadT]):
    """Base store: subclasses name the domain, payload type and parser chain."""

    domain: str = ""
    export_prefix: str = ""
    payload_type: type = BaseModel

    def __init__(
        self,
        path: Path | None = None,
        *,
        export_dir: Path | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.path = Path(path) if path is not None else self.default_path()
        self.export_dir = Path(export_dir) if export_dir is not None else settings.export_dir
        self._clock = clock or utc_now
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=type(self).__name__)

    # ---- Domain hooks ----

    def default_path(self) -> Path:
        raise NotImplementedError

    def parsers(self) -> Sequence[Parser]:
        raise NotImplementedError

    def default_catalog(self) -> List[Any]:
        return []

    def catalog_name(self, item: Any) -> str:
        return item.name

    # ---- Public API ----

    def load(self) -> "Future[PayloadT]":
        return self._submit("load", self._load_sync)

    def save(self, entries: Iterable[BaseModel], catalog: Iterable[Any]) -> "Future[None]":
        try:
            text = dump_document(self.build_document(entries, catalog))
        except Exception as exc:
            logger.exception("Could not serialize %s for saving", self.domain)
            return _failed_future(StoreError("save", self.domain), exc)
        return self._submit("save", self._save_sync, text)

    def export(self, entries: Iterable[BaseModel]) -> "Future[Path]":
        try:
            text = dump_document({"entries": [e.to_document() for e in entries]})
        except Exception as exc:
            logger.exception("Could not serialize %s for export", self.domain)
            return _failed_future(StoreError("export", self.domain), exc)
        return self._submit("export", self._export_sync, text, self._clock())

    def export_path(self, moment: datetime) -> Path:
        stamp = moment.strftime(settings.export_timestamp_format)
        return self.export_dir / f"{self.export_prefix}-{stamp}.json"

    def drain(self, timeout: float | None = None) -> None:
        """Block until everything queued before this call has run."""
        self._executor.submit(lambda: None).result(timeout=timeout)

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "JsonLogStore[PayloadT]":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ---- Document shaping ----

    def build_document(self, entries: Iterable[BaseModel], catalog: Iterable[Any]) -> Dict[str, Any]:
        return {
            "entries": [e.to_document() for e in entries],
            "catalog": [c.to_document() if isinstance(c, BaseModel) else c for c in catalog],
        }

    def normalize(self, payload: Any) -> PayloadT:
        entries = sorted(payload.entries, key=lambda e: e.date, reverse=True)
        catalog = self.sorted_catalog(payload.catalog)
        if not catalog:
            logger.info("Empty %s catalog in %s; using defaults", self.domain, self.path)
            catalog = self.default_catalog()
        return self.payload_type(entries=entries, catalog=catalog)

    def sorted_catalog(self, items: Iterable[Any]) -> List[Any]:
        seen = set()
        unique: List[Any] = []
        for item in items:
            key = fold(self.catalog_name(item))
            if not key or key in seen:
                continue
            seen.add(key)
            unique.append(item)
        return sorted(unique, key=lambda item: sort_key(self.catalog_name(item)))

    # ---- Worker side ----

    def _submit(self, operation: str, fn: Callable[..., Any], *args: Any) -> Future:
        def run() -> Any:
            try:
                return fn(*args)
            except Exception as exc:
                logger.exception("Failed to %s %s (%s)", operation, self.domain, self.path)
                raise StoreError(operation, self.domain) from exc

        return self._executor.submit(run)

    def _load_sync(self) -> PayloadT:
        if not self.path.exists():
            logger.info("No %s log at %s yet; starting empty", self.domain, self.path)
            return self.payload_type(entries=[], catalog=self.default_catalog())
        raw = json.loads(self.path.read_text(encoding="utf-8"))
        payload = self.normalize(decode_first(raw, self.parsers()))
        logger.info("Loaded %d %s from %s", len(payload.entries), self.domain, self.path)
        return payload

    def _save_sync(self, text: str) -> None:
        atomic_write_text(self.path, text)
        logger.debug("Saved %s to %s", self.domain, self.path)

    def _export_sync(self, text: str, moment: datetime) -> Path:
        target = self.export_path(moment)
        if target.exists():
            target.unlink()
        atomic_write_text(target, text)
        logger.info("Exported %s to %s", self.domain, target)
        return target
