# -*- coding: utf-8 -*-
"""Workout: session view-model."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Callable, List, Optional

from ..text import contains_name, matching, same_name, sort_key, sorted_names
from ..viewmodel import LogViewModel
from .models import DEFAULT_EXERCISES, WorkoutEntry
from .storage import WorkoutStore


def _valid_count(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


def _valid_weight(value: Optional[float]) -> bool:
    if value is None:
        return True
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value >= 0


class WorkoutViewModel(LogViewModel):
    domain = "workouts"

    def __init__(self, store: WorkoutStore | None = None, *, clock: Callable[[], datetime] | None = None) -> None:
        super().__init__(store if store is not None else WorkoutStore(), clock=clock)

    def default_catalog(self) -> List[str]:
        return sorted_names(DEFAULT_EXERCISES)

    def add_entry(
        self,
        exercise_name: str,
        reps: int,
        sets: int,
        weight: Optional[float] = None,
    ) -> Optional[WorkoutEntry]:
        name = (exercise_name or "").strip()
        if not name or not _valid_count(reps) or not _valid_count(sets) or not _valid_weight(weight):
            return None
        entry = WorkoutEntry(exercise_name=name, reps=reps, sets=sets, weight=weight, date=self._clock())
        with self._lock:
            self._entries.insert(0, entry)
            self._merge_catalog_name(name)
            self._persist()
        return entry

    def update_entry(self, entry: WorkoutEntry) -> Optional[WorkoutEntry]:
        """Replace the entry with the same id; an edit makes it the most recent."""
        name = (entry.exercise_name or "").strip()
        if not name or not _valid_count(entry.reps) or not _valid_count(entry.sets) or not _valid_weight(entry.weight):
            return None
        with self._lock:
            index = self._index_of(entry.id)
            if index is None:
                return None
            updated = entry.model_copy(update={"exercise_name": name, "date": self._clock()})
            self._entries[index] = updated
            self._resort()
            self._merge_catalog_name(name)
            self._persist()
        return updated

    # ---- Catalog ----

    def add_catalog_item(self, name: str) -> bool:
        trimmed = (name or "").strip()
        if not trimmed:
            return False
        with self._lock:
            if not self._merge_catalog_name(trimmed):
                return False
            self._persist()
        return True

    def remove_catalog_item(self, name: str) -> bool:
        """Drop a name from the catalog; logged entries keep it."""
        with self._lock:
            kept = [existing for existing in self._catalog if not same_name(existing, name)]
            if len(kept) == len(self._catalog):
                return False
            self._catalog = kept
            self._persist()
        return True

    def matching_exercises(self, query: str) -> List[str]:
        return matching(self.catalog, query)

    def _merge_catalog_name(self, name: str) -> bool:
        if contains_name(self._catalog, name):
            return False
        self._catalog.append(name)
        self._catalog.sort(key=sort_key)
        return True
