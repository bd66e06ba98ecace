# -*- coding: utf-8 -*-
"""Macro scaling from catalog portions to logged amounts."""

from __future__ import annotations

import math
from typing import Dict, Iterable, Optional, Union

from ..models import MACRO_FIELDS
from .models import DietEntry, DietItemEntry, FoodCatalogItem

Number = Union[int, float]


def scale_macros(food: FoodCatalogItem, amount: float, *, integral: bool = True) -> Dict[str, Number]:
    """Scale ``food``'s per-portion macros to ``amount`` (same unit as the portion).

    Only macros known on the catalog item appear in the result.
    """
    if amount < 0:
        raise ValueError(f"Amount must be non-negative, got {amount}")
    factor = amount / food.portion_amount
    scaled: Dict[str, Number] = {}
    for field in MACRO_FIELDS:
        value = getattr(food, field)
        if value is None:
            continue
        product = value * factor
        # Rounded first so float noise (300.0000000001) is not bumped up.
        scaled[field] = math.ceil(round(product, 6)) if integral else product
    return scaled


def build_item(
    name: str,
    quantity: str,
    amount: Optional[float],
    food: Optional[FoodCatalogItem],
) -> DietItemEntry:
    macros: Dict[str, Number] = {}
    if food is not None and amount is not None:
        macros = scale_macros(food, amount)
    return DietItemEntry(name=name, quantity=quantity, **macros)


def meal_totals(items_or_entries: Iterable[Union[DietItemEntry, DietEntry]]) -> Dict[str, Optional[int]]:
    """Sum each macro; a macro no item carries stays ``None``."""
    totals: Dict[str, Optional[int]] = {field: None for field in MACRO_FIELDS}
    for obj in items_or_entries:
        items = obj.items if isinstance(obj, DietEntry) else [obj]
        for item in items:
            for field in MACRO_FIELDS:
                value = getattr(item, field)
                if value is None:
                    continue
                totals[field] = (totals[field] or 0) + value
    return totals
