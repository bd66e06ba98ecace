# -*- coding: utf-8 -*-
"""Diet: session view-model."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, List, Optional, Sequence

from ..forms import parse_amount
from ..text import fold, matching, same_name, sort_key
from ..viewmodel import LogViewModel
from .macros import build_item
from .models import DietEntry, DietItemEntry, FoodCatalogItem, MealType
from .storage import DietStore


def _valid_items(items: Sequence[DietItemEntry]) -> bool:
    if not items:
        return False
    seen = set()
    for item in items:
        key = fold(item.name)
        if not key or key in seen:
            return False
        seen.add(key)
    return True


class DietViewModel(LogViewModel):
    domain = "meals"

    def __init__(self, store: DietStore | None = None, *, clock: Callable[[], datetime] | None = None) -> None:
        super().__init__(store if store is not None else DietStore(), clock=clock)

    def add_entry(self, meal_type: MealType, items: Sequence[DietItemEntry]) -> Optional[DietEntry]:
        if not _valid_items(items):
            return None
        entry = DietEntry(meal_type=meal_type, items=list(items), date=self._clock())
        with self._lock:
            self._entries.insert(0, entry)
            self._persist()
        return entry

    def update_entry(self, entry: DietEntry) -> Optional[DietEntry]:
        if not _valid_items(entry.items):
            return None
        with self._lock:
            index = self._index_of(entry.id)
            if index is None:
                return None
            updated = entry.model_copy(update={"items": list(entry.items), "date": self._clock()})
            self._entries[index] = updated
            self._resort()
            self._persist()
        return updated

    def make_item(self, name: str, quantity: str) -> Optional[DietItemEntry]:
        """Meal item with macros snapshotted from the catalog at this moment.

        Macros stay absent when the food is not cataloged or the quantity has
        no readable amount; callers should warn rather than record zeros.
        """
        trimmed_name = (name or "").strip()
        trimmed_quantity = (quantity or "").strip()
        if not trimmed_name or not trimmed_quantity:
            return None
        food = self.catalog_item(trimmed_name)
        return build_item(
            food.name if food else trimmed_name,
            trimmed_quantity,
            parse_amount(trimmed_quantity),
            food,
        )

    # ---- Catalog ----

    def catalog_item(self, name: str) -> Optional[FoodCatalogItem]:
        with self._lock:
            for item in self._catalog:
                if same_name(item.name, name):
                    return item
        return None

    def add_catalog_item(self, item: FoodCatalogItem) -> Optional[FoodCatalogItem]:
        """Insert or update by name; an update keeps the existing item's id."""
        trimmed = (item.name or "").strip()
        if not trimmed:
            return None
        with self._lock:
            stored = item.model_copy(update={"name": trimmed})
            for index, existing in enumerate(self._catalog):
                if same_name(existing.name, trimmed):
                    stored = item.model_copy(update={"name": trimmed, "id": existing.id})
                    self._catalog[index] = stored
                    break
            else:
                self._catalog.append(stored)
            self._catalog.sort(key=lambda food: sort_key(food.name))
            self._persist()
        return stored

    def remove_catalog_item(self, name: str) -> bool:
        with self._lock:
            kept = [food for food in self._catalog if not same_name(food.name, name)]
            if len(kept) == len(self._catalog):
                return False
            self._catalog = kept
            self._persist()
        return True

    def matching_foods(self, query: str) -> List[str]:
        return matching([food.name for food in self.catalog], query)
