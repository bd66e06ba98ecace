# -*- coding: utf-8 -*-
"""History filters; the filtered list is also what gets exported."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import List, Optional, Sequence, TypeVar

from .diet.models import DietEntry, MealType
from .models import LoggedRecord

RecordT = TypeVar("RecordT", bound=LoggedRecord)


def _local_tz() -> tzinfo:
    return datetime.now().astimezone().tzinfo or timezone.utc


@dataclass(frozen=True)
class DateRange:
    start: datetime
    end: datetime

    @classmethod
    def for_days(cls, start_day: date, end_day: date, tz: Optional[tzinfo] = None) -> "DateRange":
        """Start of ``start_day`` through the last second of ``end_day``."""
        tz = tz or _local_tz()
        if end_day < start_day:
            end_day = start_day
        start = datetime.combine(start_day, time.min, tzinfo=tz)
        end = datetime.combine(end_day + timedelta(days=1), time.min, tzinfo=tz) - timedelta(seconds=1)
        return cls(start=start, end=end)

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end

    def describe(self) -> str:
        first = self.start.date()
        last = self.end.date()
        if first == last:
            return first.isoformat()
        return f"{first.isoformat()} – {last.isoformat()}"


def filter_by_range(entries: Sequence[RecordT], date_range: Optional[DateRange]) -> List[RecordT]:
    if date_range is None:
        return list(entries)
    return [e for e in entries if date_range.contains(e.date)]


def filter_meals(
    entries: Sequence[DietEntry],
    *,
    day: Optional[date] = None,
    meal_type: Optional[MealType] = None,
    tz: Optional[tzinfo] = None,
) -> List[DietEntry]:
    day_range = DateRange.for_days(day, day, tz) if day is not None else None
    out: List[DietEntry] = []
    for entry in entries:
        if day_range is not None and not day_range.contains(entry.date):
            continue
        if meal_type is not None and entry.meal_type != meal_type:
            continue
        out.append(entry)
    return out
