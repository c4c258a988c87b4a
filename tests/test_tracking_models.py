# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from datetime import datetime, timezone

from glucowise.tracking.models import (
    BloodReading,
    BloodReadingType,
    FoodItem,
    InvalidQuantityError,
    Meal,
    MealType,
    ReadingStatus,
)


def _apple() -> FoodItem:
    return FoodItem(name="Apple", quantity=100, calories=52, carbs=14, fats=0.2, proteins=0.3, fiber=2.4, gi_index=38)


def _rice() -> FoodItem:
    return FoodItem(name="Rice", quantity=150, calories=195, carbs=40, fats=0.3, proteins=3.5, fiber=1.0, gi_index=73)


class TestFoodItemScaling(unittest.TestCase):
    def test_doubling_quantity_doubles_nutrients_but_not_gi(self) -> None:
        scaled = _apple().adjusted_nutrients(200)
        self.assertEqual(scaled.quantity, 200)
        self.assertAlmostEqual(scaled.calories, 104)
        self.assertAlmostEqual(scaled.carbs, 28)
        self.assertAlmostEqual(scaled.fats, 0.4)
        self.assertAlmostEqual(scaled.proteins, 0.6)
        self.assertAlmostEqual(scaled.fiber, 4.8)
        self.assertEqual(scaled.gi_index, 38)
        self.assertEqual(scaled.name, "Apple")

    def test_same_quantity_is_identity(self) -> None:
        rice = _rice()
        same = rice.adjusted_nutrients(rice.quantity)
        for field in ("quantity", "calories", "carbs", "fats", "proteins", "fiber", "gi_index"):
            self.assertEqual(getattr(same, field), getattr(rice, field), field)

    def test_non_positive_quantity_is_rejected(self) -> None:
        with self.assertRaises(InvalidQuantityError):
            _apple().adjusted_nutrients(0)
        with self.assertRaises(ValueError):
            _apple().adjusted_nutrients(-5)


class TestMealNutrition(unittest.TestCase):
    def test_totals_sum_items_and_average_gi(self) -> None:
        meal = Meal(type=MealType.breakfast, food_items=[_apple(), _rice()], date=datetime(2026, 3, 1, 8, tzinfo=timezone.utc))
        totals = meal.total_nutrition()
        self.assertAlmostEqual(totals.calories, 247)
        self.assertAlmostEqual(totals.carbs, 54)
        self.assertAlmostEqual(totals.fats, 0.5)
        self.assertAlmostEqual(totals.proteins, 3.8)
        self.assertAlmostEqual(totals.fiber, 3.4)
        self.assertAlmostEqual(totals.gi_index, 55.5)
        self.assertAlmostEqual(totals.glycemic_load, 55.5 * 54 / 100)

    def test_empty_meal_has_zero_totals(self) -> None:
        totals = Meal(type=MealType.snacks, date=datetime(2026, 3, 1, 15)).total_nutrition()
        self.assertEqual(totals.calories, 0.0)
        self.assertEqual(totals.gi_index, 0.0)
        self.assertEqual(totals.glycemic_load, 0.0)


class TestReadingStatus(unittest.TestCase):
    def test_status_bands(self) -> None:
        when = datetime(2026, 3, 1, 7)
        cases = [(90, ReadingStatus.good), (120, ReadingStatus.good), (150, ReadingStatus.neutral), (180, ReadingStatus.neutral), (181, ReadingStatus.bad)]
        for value, expected in cases:
            reading = BloodReading(type=BloodReadingType.fasting, value=value, date=when)
            self.assertEqual(reading.status, expected, value)


if __name__ == "__main__":
    unittest.main()
