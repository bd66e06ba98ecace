# -*- coding: utf-8 -*-
"""Diet: Pydantic models."""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, List, Optional
from uuid import UUID, uuid4

from pydantic import Field, field_validator

from ..models import MACRO_FIELDS, LoggedRecord, WireModel, round_up_macro

DEFAULT_PORTION_AMOUNT = 100.0

# Ships empty; foods are added by the user with their own portion definitions.
DEFAULT_FOODS: tuple = ()


class MealType(str, Enum):
    pre_workout = "preWorkout"
    post_workout = "postWorkout"
    lunch = "lunch"
    evening_meal = "eveningMeal"
    dinner = "dinner"
    extras = "extras"

    @property
    def display_name(self) -> str:
        return _MEAL_DISPLAY_NAMES[self]


_MEAL_DISPLAY_NAMES = {
    MealType.pre_workout: "Pre-Workout",
    MealType.post_workout: "Post-Workout",
    MealType.lunch: "Lunch",
    MealType.evening_meal: "Evening Snacks",
    MealType.dinner: "Dinner",
    MealType.extras: "Extras",
}


class PortionUnit(str, Enum):
    grams = "grams"
    milliliters = "milliliters"

    @property
    def abbreviation(self) -> str:
        return "g" if self is PortionUnit.grams else "ml"


class MacroFields(WireModel):
    calories: Optional[int] = Field(None, ge=0, description="kcal")
    protein: Optional[int] = Field(None, ge=0, description="g")
    carbs: Optional[int] = Field(None, ge=0, description="g")
    fat: Optional[int] = Field(None, ge=0, description="g")

    @field_validator(*MACRO_FIELDS, mode="before")
    @classmethod
    def _round_up(cls, value: Any) -> Any:
        return round_up_macro(value)


class DietItemEntry(MacroFields):
    id: UUID = Field(default_factory=uuid4)
    name: str = Field(..., min_length=1, description="Food name, e.g. 'Rice'")
    quantity: str = Field("", description="Free text, e.g. '80 g'")


class DietEntry(LoggedRecord):
    meal_type: MealType = Field(..., alias="mealType")
    items: List[DietItemEntry] = Field(default_factory=list)

    @property
    def summary_line(self) -> str:
        return ", ".join(f"{item.name} {item.quantity}".strip() for item in self.items)


class FoodCatalogItem(MacroFields):
    """A food with macro values defined per standard portion."""

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(..., min_length=1)
    portion_amount: float = Field(DEFAULT_PORTION_AMOUNT, alias="portionAmount")
    unit: PortionUnit = PortionUnit.grams

    @field_validator("portion_amount", mode="before")
    @classmethod
    def _coerce_portion(cls, value: Any) -> Any:
        if value is None:
            return DEFAULT_PORTION_AMOUNT
        return value

    @field_validator("portion_amount")
    @classmethod
    def _usable_portion(cls, value: float) -> float:
        # Scaling divides by the portion amount.
        if not math.isfinite(value) or value <= 0:
            return DEFAULT_PORTION_AMOUNT
        return value

    @property
    def portion_label(self) -> str:
        amount = self.portion_amount
        shown = str(int(amount)) if float(amount).is_integer() else f"{amount:g}"
        return f"{shown} {self.unit.abbreviation}"


class DietPayload(WireModel):
    entries: List[DietEntry] = Field(default_factory=list)
    catalog: List[FoodCatalogItem] = Field(default_factory=list)

    @field_validator("entries", "catalog", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value
