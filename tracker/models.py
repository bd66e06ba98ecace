# -*- coding: utf-8 -*-
"""Shared Pydantic building blocks for logged records."""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from typing import Any, Dict
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Older files stored dates as seconds since this instant instead of ISO-8601.
REFERENCE_EPOCH = datetime(2001, 1, 1, tzinfo=timezone.utc)

MACRO_FIELDS = ("calories", "protein", "carbs", "fat")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def coerce_timestamp(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return REFERENCE_EPOCH + timedelta(seconds=float(value))
    return value


def round_up_macro(value: Any) -> Any:
    """Integer macro value; real values from older files are rounded up."""
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Invalid macro value: {value}")
        return math.ceil(value)
    return value


class WireModel(BaseModel):
    """camelCase on disk, snake_case in Python; either is accepted on input."""

    model_config = ConfigDict(populate_by_name=True)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class LoggedRecord(WireModel):
    id: UUID = Field(default_factory=uuid4)
    date: datetime = Field(default_factory=utc_now)

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_legacy_date(cls, value: Any) -> Any:
        return coerce_timestamp(value)

    @field_validator("date")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
