# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from concurrent.futures import Future
from datetime import datetime, timezone
from unittest import mock

from tracker.diet.models import DietEntry, DietItemEntry, DietPayload, FoodCatalogItem, MealType, PortionUnit
from tracker.diet.storage import DietStore
from tracker.diet.viewmodel import DietViewModel
from tracker.storage import StoreError

UTC = timezone.utc
NOW = datetime(2024, 5, 1, 20, 0, tzinfo=UTC)


def _done(value: object = None) -> Future:
    future: Future = Future()
    future.set_result(value)
    return future


def _meal(day: int, meal_type: MealType = MealType.lunch) -> DietEntry:
    return DietEntry(
        meal_type=meal_type,
        date=datetime(2024, 4, day, 12, 0, tzinfo=UTC),
        items=[DietItemEntry(name="Rice", quantity="150 g", calories=195)],
    )


class TestDietViewModel(unittest.TestCase):
    def setUp(self) -> None:
        self.store = mock.create_autospec(DietStore, instance=True)
        self.store.save.return_value = _done()
        self.rice = FoodCatalogItem(name="Rice", portion_amount=100, calories=130, carbs=28)
        self.milk = FoodCatalogItem(name="Milk", portion_amount=250, unit=PortionUnit.milliliters, calories=160, fat=8)
        self.vm = DietViewModel(self.store, clock=lambda: NOW)

    def _seed(self, *entries: DietEntry) -> None:
        self.store.load.return_value = _done(DietPayload(entries=list(entries), catalog=[self.milk, self.rice]))
        self.assertTrue(self.vm.load_entries().result(timeout=5))
        self.store.save.reset_mock()

    def test_initial_catalog_is_empty(self) -> None:
        self.assertEqual(self.vm.catalog, [])

    def test_add_entry(self) -> None:
        self._seed(_meal(3))
        items = [DietItemEntry(name="Oats", quantity="80 g"), DietItemEntry(name="Milk", quantity="200 ml")]
        entry = self.vm.add_entry(MealType.pre_workout, items)

        self.assertEqual(entry.date, NOW)
        self.assertEqual(self.vm.entries[0], entry)
        self.assertEqual(entry.summary_line, "Oats 80 g, Milk 200 ml")
        self.store.save.assert_called_once()
        # Logging a meal never adds foods to the catalog.
        self.assertEqual([f.name for f in self.vm.catalog], ["Milk", "Rice"])

    def test_meal_validation(self) -> None:
        self.assertIsNone(self.vm.add_entry(MealType.lunch, []))
        duplicate = [DietItemEntry(name="Rice", quantity="1"), DietItemEntry(name="rice ", quantity="2")]
        self.assertIsNone(self.vm.add_entry(MealType.lunch, duplicate))
        self.assertEqual(self.vm.entries, [])
        self.store.save.assert_not_called()

    def test_update_resorts_and_bumps_date(self) -> None:
        newest, middle, oldest = _meal(9), _meal(5), _meal(1)
        self._seed(newest, middle, oldest)

        edited = oldest.model_copy(update={"meal_type": MealType.dinner})
        updated = self.vm.update_entry(edited)

        self.assertEqual([e.id for e in self.vm.entries], [oldest.id, newest.id, middle.id])
        self.assertEqual(updated.meal_type, MealType.dinner)
        self.assertEqual(updated.date, NOW)

    def test_update_rejects_empty_meal(self) -> None:
        meal = _meal(4)
        self._seed(meal)
        self.assertIsNone(self.vm.update_entry(meal.model_copy(update={"items": []})))
        self.store.save.assert_not_called()

    def test_delete_entries_with_empty_set_is_noop(self) -> None:
        self._seed(_meal(4))
        self.vm.delete_entries([])
        self.assertEqual(len(self.vm.entries), 1)
        self.store.save.assert_not_called()

    def test_catalog_lookup_is_case_and_accent_insensitive(self) -> None:
        self._seed()
        self.assertEqual(self.vm.catalog_item("rice"), self.rice)
        self.assertEqual(self.vm.catalog_item("MÍLK"), self.milk)
        self.assertIsNone(self.vm.catalog_item("Bread"))
        self.assertEqual(self.vm.matching_foods("i"), ["Milk", "Rice"])

    def test_add_catalog_item_upserts_by_name(self) -> None:
        self._seed()
        edited = FoodCatalogItem(name=" rice ", portion_amount=50, calories=70)
        stored = self.vm.add_catalog_item(edited)

        self.assertEqual(stored.id, self.rice.id)
        self.assertEqual(stored.name, "rice")
        self.assertEqual(stored.portion_amount, 50)
        self.assertEqual(len(self.vm.catalog), 2)
        self.store.save.assert_called_once()

        bread = self.vm.add_catalog_item(FoodCatalogItem(name="Bread", calories=265))
        self.assertEqual([f.name for f in self.vm.catalog], ["Bread", "Milk", "rice"])
        self.assertEqual(bread.portion_amount, 100)

    def test_non_finite_portion_falls_back_to_default(self) -> None:
        self._seed()
        soup = self.vm.add_catalog_item(FoodCatalogItem(name="Soup", portion_amount=float("nan"), calories=100))
        tea = self.vm.add_catalog_item(FoodCatalogItem(name="Tea", portion_amount=float("inf"), calories=2))
        self.assertEqual(soup.portion_amount, 100)
        self.assertEqual(tea.portion_amount, 100)

        self.assertEqual(self.vm.make_item("Soup", "200 g").calories, 200)
        self.assertEqual(self.vm.make_item("Tea", "200 ml").calories, 4)

    def test_negative_macros_are_rejected(self) -> None:
        with self.assertRaises(ValueError):
            FoodCatalogItem(name="Soup", calories=-50)
        with self.assertRaises(ValueError):
            DietItemEntry(name="Soup", quantity="1 bowl", fat=-1)

    def test_add_catalog_item_rejects_blank_name(self) -> None:
        self.assertIsNone(self.vm.add_catalog_item(FoodCatalogItem(name=" ")))
        self.store.save.assert_not_called()

    def test_remove_catalog_item_keeps_history(self) -> None:
        meal = _meal(2)
        self._seed(meal)
        self.assertTrue(self.vm.remove_catalog_item("RICE"))
        self.assertEqual([f.name for f in self.vm.catalog], ["Milk"])
        self.assertEqual(self.vm.entries[0].items[0].calories, 195)
        self.assertFalse(self.vm.remove_catalog_item("Rice"))

    def test_make_item_scales_macros(self) -> None:
        self._seed()
        item = self.vm.make_item("rice", "150 g")
        self.assertEqual(item.name, "Rice")
        self.assertEqual(item.quantity, "150 g")
        self.assertEqual(item.calories, 195)
        self.assertEqual(item.carbs, 42)
        self.assertIsNone(item.protein)

        milk = self.vm.make_item("Milk", "100 ml")
        self.assertEqual(milk.calories, 64)
        self.assertEqual(milk.fat, 4)

    def test_make_item_snapshots_macros(self) -> None:
        self._seed()
        item = self.vm.make_item("Rice", "100 g")
        self.vm.add_catalog_item(FoodCatalogItem(name="Rice", calories=999))
        self.assertEqual(item.calories, 130)

    def test_make_item_without_catalog_entry(self) -> None:
        self._seed()
        item = self.vm.make_item("Dragonfruit", "1 piece")
        self.assertEqual(item.name, "Dragonfruit")
        self.assertIsNone(item.calories)
        self.assertIsNone(item.fat)
        self.assertIsNone(self.vm.make_item("Rice", "   "))

    def test_make_item_without_amount(self) -> None:
        self._seed()
        item = self.vm.make_item("Rice", "a handful")
        self.assertIsNone(item.calories)

    def test_save_failure_sets_message(self) -> None:
        failed: Future = Future()
        failed.set_exception(StoreError("save", "meals"))
        self.store.save.return_value = failed
        entry = self.vm.add_entry(MealType.extras, [DietItemEntry(name="Apple", quantity="1")])
        self.assertEqual(self.vm.entries, [entry])
        self.assertEqual(self.vm.error_message, "Failed to save meals.")

    def test_export_log_passes_subset(self) -> None:
        lunch, dinner = _meal(2), _meal(3, MealType.dinner)
        self._seed(dinner, lunch)
        self.store.export.return_value = _done(None)
        self.vm.export_log([lunch])
        self.store.export.assert_called_once_with([lunch])


if __name__ == "__main__":
    unittest.main()
