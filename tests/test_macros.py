# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from tracker.diet.macros import build_item, meal_totals, scale_macros
from tracker.diet.models import DietEntry, DietItemEntry, FoodCatalogItem, MealType


class TestMacroScaling(unittest.TestCase):
    def test_scales_by_portion(self) -> None:
        food = FoodCatalogItem(name="Chicken", portion_amount=100, calories=200)
        self.assertEqual(scale_macros(food, 150), {"calories": 300})

    def test_rounds_up(self) -> None:
        food = FoodCatalogItem(name="Yogurt", portion_amount=100, protein=3, fat=1)
        self.assertEqual(scale_macros(food, 50), {"protein": 2, "fat": 1})

    def test_float_noise_does_not_bump_value(self) -> None:
        # 10 * 1.1 is 11.000000000000002 in binary floating point.
        food = FoodCatalogItem(name="Bread", portion_amount=100, calories=10)
        self.assertEqual(scale_macros(food, 110), {"calories": 11})

    def test_real_mode_keeps_fractions(self) -> None:
        food = FoodCatalogItem(name="Oil", portion_amount=10, fat=9)
        self.assertAlmostEqual(scale_macros(food, 5, integral=False)["fat"], 4.5)

    def test_unknown_macros_stay_absent(self) -> None:
        food = FoodCatalogItem(name="Tea", portion_amount=250)
        self.assertEqual(scale_macros(food, 500), {})
        item = build_item("Tea", "500 ml", 500, food)
        self.assertIsNone(item.calories)

    def test_negative_amount_rejected(self) -> None:
        food = FoodCatalogItem(name="Rice", calories=130)
        with self.assertRaises(ValueError):
            scale_macros(food, -1)

    def test_build_item_without_food(self) -> None:
        item = build_item("Mystery stew", "1 bowl", 1, None)
        self.assertEqual(item.name, "Mystery stew")
        self.assertEqual(item.quantity, "1 bowl")
        for field in ("calories", "protein", "carbs", "fat"):
            self.assertIsNone(getattr(item, field))

    def test_meal_totals(self) -> None:
        meal = DietEntry(
            meal_type=MealType.dinner,
            items=[
                DietItemEntry(name="Rice", quantity="150 g", calories=195, carbs=42),
                DietItemEntry(name="Salmon", quantity="120 g", calories=250, protein=25),
            ],
        )
        snack = DietItemEntry(name="Apple", quantity="1", calories=95)
        totals = meal_totals([meal, snack])
        self.assertEqual(totals, {"calories": 540, "protein": 25, "carbs": 42, "fat": None})


if __name__ == "__main__":
    unittest.main()
