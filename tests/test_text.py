# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from tracker.text import contains_name, dedupe_names, fold, matching, same_name, sorted_names


class TestNameFolding(unittest.TestCase):
    def test_fold_ignores_case_accents_and_padding(self) -> None:
        self.assertEqual(fold("  Crème Brûlée "), "creme brulee")
        self.assertTrue(same_name("ZUMBA", "zumba"))
        self.assertTrue(same_name("Écarté", "ecarte"))
        self.assertFalse(same_name("Row", "Rows"))

    def test_sorted_names_is_case_insensitive(self) -> None:
        self.assertEqual(sorted_names(["zumba", "Bench Press", "ab wheel", "Écarté"]), ["ab wheel", "Bench Press", "Écarté", "zumba"])

    def test_sort_tie_break_is_deterministic(self) -> None:
        self.assertEqual(sorted_names(["row", "Row"]), ["Row", "row"])
        self.assertEqual(sorted_names(["Row", "row"]), ["Row", "row"])

    def test_contains_and_dedupe(self) -> None:
        self.assertTrue(contains_name(["Deadlift"], " deadlift"))
        self.assertEqual(dedupe_names(["Plank", "plank", "", "Burpee"]), ["Plank", "Burpee"])

    def test_matching(self) -> None:
        names = ["Back Squat", "Front Squat", "Crêpe"]
        self.assertEqual(matching(names, "SQU"), ["Back Squat", "Front Squat"])
        self.assertEqual(matching(names, "crep"), ["Crêpe"])
        self.assertEqual(matching(names, ""), names)


if __name__ == "__main__":
    unittest.main()
