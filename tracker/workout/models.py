# -*- coding: utf-8 -*-
"""Workout: Pydantic models."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import Field, field_validator

from ..models import LoggedRecord, WireModel

DEFAULT_EXERCISES: tuple[str, ...] = (
    "Back Squat",
    "Front Squat",
    "Deadlift",
    "Romanian Deadlift",
    "Bench Press",
    "Incline Bench Press",
    "Overhead Press",
    "Push Up",
    "Pull Up",
    "Bent Over Row",
    "Lat Pulldown",
    "Seated Row",
    "Biceps Curl",
    "Triceps Extension",
    "Lateral Raise",
    "Leg Press",
    "Leg Extension",
    "Leg Curl",
    "Hip Thrust",
    "Calf Raise",
    "Plank",
    "Russian Twist",
    "Mountain Climber",
    "Burpee",
)


class WorkoutEntry(LoggedRecord):
    exercise_name: str = Field(..., alias="exerciseName", min_length=1)
    reps: int = Field(..., ge=1)
    sets: int = Field(..., ge=1)
    weight: Optional[float] = Field(None, ge=0, description="kg; absent for bodyweight exercises")

    @property
    def has_weight(self) -> bool:
        return self.weight is not None

    @property
    def formatted_weight(self) -> str:
        if self.weight is None:
            return "Bodyweight"
        if float(self.weight).is_integer():
            return f"{int(self.weight)} kg"
        return f"{self.weight:.1f} kg"


class WorkoutPayload(WireModel):
    entries: List[WorkoutEntry] = Field(default_factory=list)
    catalog: List[str] = Field(default_factory=list)

    @field_validator("entries", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("catalog", mode="before")
    @classmethod
    def _coerce_catalog(cls, value: Any) -> Any:
        """Catalog items are names; tolerate `{"name": ...}` objects and nulls."""
        if value is None:
            return []
        if not isinstance(value, list):
            return value
        names: List[Any] = []
        for item in value:
            if isinstance(item, dict):
                item = item.get("name")
            if item is None:
                continue
            if isinstance(item, str):
                item = item.strip()
                if not item:
                    continue
            names.append(item)
        return names
