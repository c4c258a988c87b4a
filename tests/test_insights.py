# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from datetime import datetime, timezone

from glucowise.insights.calculator import (
    blood_sugar_difference,
    daily_overview,
    estimate_hba1c,
    glucose_averages,
    hba1c_from_glucose,
)
from glucowise.insights.models import EstimateStatus
from glucowise.insights.recommender import daily_tips, recommend_next_meals
from glucowise.profile.models import Goals
from glucowise.tracking.models import ActivityProgress, BloodReading, BloodReadingType, FoodItem, Meal, MealType
from glucowise.tracking.store import HealthDataStore

UTC = timezone.utc
NOW = datetime(2026, 3, 20, tzinfo=UTC)


def _at(day: str, hour: int = 12) -> datetime:
    return datetime.fromisoformat(day).replace(hour=hour, tzinfo=UTC)


def _add_readings(store: HealthDataStore, day: str, *values: float) -> None:
    for value in values:
        store.add_blood_reading(BloodReading(type=BloodReadingType.pre_meal, value=value, date=_at(day, 8)), now=NOW)


def _food(gi: float, carbs: float, fiber: float) -> FoodItem:
    return FoodItem(name="Test food", quantity=100, calories=200, carbs=carbs, fats=5, proteins=10, fiber=fiber, gi_index=gi)


class TestHbA1cEstimate(unittest.TestCase):
    def setUp(self) -> None:
        self.store = HealthDataStore()

    def test_single_day_example(self) -> None:
        _add_readings(self.store, "2026-03-10", 90, 95, 100)
        estimate = estimate_hba1c(self.store, 7, as_of="2026-03-10")
        self.assertEqual(estimate.status, EstimateStatus.ok)
        self.assertEqual(estimate.average_glucose, 95.0)
        self.assertEqual(estimate.hba1c_pct, 4.94)
        self.assertEqual(estimate.days_with_readings, 1)

    def test_averages_daily_means_not_raw_readings(self) -> None:
        _add_readings(self.store, "2026-03-09", 100, 100, 100, 100)
        _add_readings(self.store, "2026-03-10", 160)
        estimate = estimate_hba1c(self.store, "3", as_of="2026-03-10")
        self.assertEqual(estimate.status, EstimateStatus.ok)
        self.assertEqual(estimate.days, 3)
        self.assertEqual(estimate.average_glucose, 130.0)
        self.assertEqual(estimate.hba1c_pct, round((130 + 46.7) / 28.7, 2))

    def test_invalid_inputs_are_reported(self) -> None:
        _add_readings(self.store, "2026-03-10", 100)
        for days in (0, -3, "abc", "", "7.5", None, 2.5, True):
            estimate = estimate_hba1c(self.store, days, as_of="2026-03-10")
            self.assertEqual(estimate.status, EstimateStatus.invalid_input, repr(days))
            self.assertIsNone(estimate.hba1c_pct)

    def test_no_readings_in_window(self) -> None:
        _add_readings(self.store, "2026-03-01", 100)
        estimate = estimate_hba1c(self.store, 5, as_of="2026-03-10")
        self.assertEqual(estimate.status, EstimateStatus.no_data)
        self.assertIsNone(estimate.hba1c_pct)

    def test_very_long_window_is_bounded(self) -> None:
        _add_readings(self.store, "2026-03-10", 100)
        for days in ("1000000", 10 ** 12):
            estimate = estimate_hba1c(self.store, days, as_of="2026-03-10")
            self.assertEqual(estimate.status, EstimateStatus.ok, repr(days))
            self.assertEqual(estimate.days_with_readings, 1)
            self.assertEqual(estimate.average_glucose, 100.0)
        empty = estimate_hba1c(HealthDataStore(), "1000000", as_of="2026-03-10")
        self.assertEqual(empty.status, EstimateStatus.no_data)

    def test_window_reaching_the_first_calendar_day(self) -> None:
        estimate = estimate_hba1c(self.store, 30, as_of="0001-01-01")
        self.assertEqual(estimate.status, EstimateStatus.no_data)

    def test_formula(self) -> None:
        self.assertAlmostEqual(hba1c_from_glucose(154), (154 + 46.7) / 28.7)


class TestGlucoseMetrics(unittest.TestCase):
    def test_rolling_windows(self) -> None:
        store = HealthDataStore()
        _add_readings(store, "2026-03-10", 100)
        _add_readings(store, "2026-02-20", 140)
        result = glucose_averages(store, as_of="2026-03-10")
        by_days = {w.days: w.average_glucose for w in result.windows}
        self.assertEqual(by_days, {7: 100.0, 14: 100.0, 30: 120.0, 60: 120.0})

    def test_difference_result(self) -> None:
        store = HealthDataStore()
        _add_readings(store, "2026-03-09", 120)
        _add_readings(store, "2026-03-10", 100, 110)
        diff = blood_sugar_difference(store, "2026-03-10")
        self.assertTrue(diff.available)
        self.assertEqual(diff.previous_date, "2026-03-09")
        self.assertAlmostEqual(diff.difference, -15)

        missing = blood_sugar_difference(store, "2026-03-09")
        self.assertFalse(missing.available)
        self.assertIsNone(missing.difference)
        self.assertEqual(missing.today_average, 120)

    def test_difference_on_first_calendar_day(self) -> None:
        diff = blood_sugar_difference(HealthDataStore(), "0001-01-01")
        self.assertFalse(diff.available)
        self.assertIsNone(diff.previous_date)
        self.assertIsNone(diff.difference)


class TestRecommendations(unittest.TestCase):
    def _recommend(self, meal_type: MealType, item: FoodItem):
        store = HealthDataStore()
        store.add_meal(Meal(type=meal_type, food_items=[item], date=_at("2026-03-10", 8)))
        return recommend_next_meals(store, "2026-03-10")

    def test_no_meals_no_recommendation(self) -> None:
        result = recommend_next_meals(HealthDataStore(), "2026-03-10")
        self.assertEqual(result.recommendations, [])
        self.assertIsNone(result.last_meal)

    def test_high_gi_takes_precedence(self) -> None:
        result = self._recommend(MealType.breakfast, _food(gi=73, carbs=80, fiber=1))
        self.assertEqual(len(result.recommendations), 1)
        rec = result.recommendations[0]
        self.assertEqual(rec.title, "Lentil salad with leafy greens")
        self.assertEqual(rec.type, MealType.lunch)
        self.assertIsNotNone(rec.recipe_url)

    def test_high_carbs(self) -> None:
        rec = self._recommend(MealType.lunch, _food(gi=50, carbs=70, fiber=1)).recommendations[0]
        self.assertEqual(rec.title, "Grilled chicken with steamed vegetables")
        self.assertEqual(rec.type, MealType.dinner)

    def test_low_fiber(self) -> None:
        rec = self._recommend(MealType.dinner, _food(gi=40, carbs=20, fiber=2)).recommendations[0]
        self.assertEqual(rec.title, "Oatmeal with chia seeds and berries")

    def test_balanced(self) -> None:
        rec = self._recommend(MealType.snacks, _food(gi=40, carbs=20, fiber=8)).recommendations[0]
        self.assertEqual(rec.title, "Quinoa bowl with vegetables and tofu")

    def test_uses_last_meal_of_the_day(self) -> None:
        store = HealthDataStore()
        store.add_meal(Meal(type=MealType.breakfast, food_items=[_food(gi=80, carbs=20, fiber=8)], date=_at("2026-03-10", 8)))
        store.add_meal(Meal(type=MealType.lunch, food_items=[_food(gi=40, carbs=20, fiber=8)], date=_at("2026-03-10", 13)))
        result = recommend_next_meals(store, "2026-03-10")
        self.assertEqual(result.recommendations[0].title, "Quinoa bowl with vegetables and tofu")
        self.assertEqual(result.last_meal.gi_index, 40)


class TestTipsAndOverview(unittest.TestCase):
    def test_tips_follow_weekday(self) -> None:
        weekday, tips = daily_tips("2026-10-19")
        self.assertEqual(weekday, "Monday")
        self.assertEqual(tips[0].title, "Monday Motivation")
        weekday, tips = daily_tips("2026-10-18")
        self.assertEqual(weekday, "Sunday")
        self.assertEqual(len(tips), 3)

    def test_overview_against_goals(self) -> None:
        store = HealthDataStore()
        store.add_meal(Meal(type=MealType.lunch, food_items=[_food(gi=40, carbs=20, fiber=8)], date=_at("2026-03-10", 13)))
        store.add_activity(ActivityProgress(date=_at("2026-03-10"), calories_burned=300, workout_minutes=45, total_steps=8000))
        _add_readings(store, "2026-03-10", 100, 120)

        goals = Goals(steps=10000, calories_kcal=2000, activity_minutes=30)
        overview = daily_overview(store, "2026-03-10", goals, burn_goal=400)
        self.assertEqual(overview.steps.value, 8000)
        self.assertEqual(overview.steps.remaining, 2000)
        self.assertAlmostEqual(overview.steps.progress, 0.8)
        self.assertEqual(overview.calories_consumed.value, 200)
        self.assertAlmostEqual(overview.calories_burned.progress, 0.75)
        self.assertEqual(overview.workout_minutes.progress, 1.0)
        self.assertEqual(overview.workout_minutes.remaining, 0.0)
        self.assertEqual(overview.average_glucose, 110.0)
        self.assertEqual(overview.reading_count, 2)
        self.assertIsNone(overview.glucose_difference)

    def test_overview_on_first_calendar_day(self) -> None:
        overview = daily_overview(HealthDataStore(), "0001-01-01", Goals(steps=10000, calories_kcal=2000, activity_minutes=30), burn_goal=400)
        self.assertEqual(overview.date, "0001-01-01")
        self.assertIsNone(overview.glucose_difference)
        self.assertIsNone(overview.average_glucose)


if __name__ == "__main__":
    unittest.main()
