# -*- coding: utf-8 -*-
"""Diet: JSON file storage."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Sequence

from pydantic import TypeAdapter

from ..config import settings
from ..storage import JsonLogStore, Parser, require_document
from .models import DEFAULT_FOODS, DietEntry, DietPayload, FoodCatalogItem

logger = logging.getLogger(__name__)

_ENTRY_LIST = TypeAdapter(List[DietEntry])


def parse_payload_document(raw: Any) -> DietPayload:
    """Current shape: entries plus structured food catalog items."""
    return DietPayload.model_validate(require_document(raw))


def parse_legacy_name_catalog(raw: Any) -> DietPayload:
    """Older shape whose catalog holds plain food names.

    Each name becomes a catalog item with the default 100 g portion and no
    macro values: the macros are unknown, which is not the same as zero.
    Object items mixed into such a catalog are decoded normally.
    """
    document = require_document(raw)
    catalog = document.get("catalog") or []
    if not isinstance(catalog, list):
        raise TypeError(f"expected catalog array, got {type(catalog).__name__}")
    if not any(isinstance(item, str) for item in catalog):
        raise ValueError("catalog has no plain-name items")

    items: List[FoodCatalogItem] = []
    migrated = 0
    for item in catalog:
        if isinstance(item, str):
            name = item.strip()
            if not name:
                continue
            items.append(FoodCatalogItem(name=name))
            migrated += 1
        else:
            items.append(FoodCatalogItem.model_validate(item))

    payload = DietPayload(entries=document.get("entries"), catalog=items)
    logger.warning("Migrated %d plain-name food catalog entries without macros", migrated)
    return payload


def parse_bare_entries(raw: Any) -> DietPayload:
    """Oldest shape: a bare array of meals with no catalog."""
    if not isinstance(raw, list):
        raise TypeError(f"expected a JSON array, got {type(raw).__name__}")
    return DietPayload(entries=_ENTRY_LIST.validate_python(raw))


class DietStore(JsonLogStore[DietPayload]):
    domain = "meals"
    export_prefix = "DietLog"
    payload_type = DietPayload

    def default_path(self) -> Path:
        return settings.diet_log_path

    def parsers(self) -> Sequence[Parser]:
        return (parse_payload_document, parse_legacy_name_catalog, parse_bare_entries)

    def default_catalog(self) -> List[FoodCatalogItem]:
        return [item.model_copy() for item in DEFAULT_FOODS]
