# -*- coding: utf-8 -*-
"""Workout: JSON file storage."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Sequence

from pydantic import TypeAdapter

from ..config import settings
from ..storage import JsonLogStore, Parser, require_document
from ..text import sorted_names
from .models import DEFAULT_EXERCISES, WorkoutEntry, WorkoutPayload

_ENTRY_LIST = TypeAdapter(List[WorkoutEntry])


def parse_payload_document(raw: Any) -> WorkoutPayload:
    """Current shape: ``{"entries": [...], "catalog": ["Deadlift", ...]}``."""
    return WorkoutPayload.model_validate(require_document(raw))


def parse_bare_entries(raw: Any) -> WorkoutPayload:
    """Oldest shape: a bare array of entries with no catalog."""
    if not isinstance(raw, list):
        raise TypeError(f"expected a JSON array, got {type(raw).__name__}")
    return WorkoutPayload(entries=_ENTRY_LIST.validate_python(raw))


class WorkoutStore(JsonLogStore[WorkoutPayload]):
    domain = "workouts"
    export_prefix = "WorkoutLog"
    payload_type = WorkoutPayload

    def default_path(self) -> Path:
        return settings.workout_log_path

    def parsers(self) -> Sequence[Parser]:
        return (parse_payload_document, parse_bare_entries)

    def default_catalog(self) -> List[str]:
        return sorted_names(DEFAULT_EXERCISES)

    def catalog_name(self, item: str) -> str:
        return item
