# -*- coding: utf-8 -*-
"""Rule-based next-meal suggestions and day-of-week tips."""

from __future__ import annotations

from typing import Dict, List, Tuple

from ..config import settings
from ..tracking.models import FoodItem, MealType, NutritionTotals
from ..tracking.store import DayLike, HealthDataStore, to_date
from .models import MealRecommendation, RecommendationsResponse, Tip

# Meal that usually follows the last logged one.
_NEXT_MEAL: Dict[MealType, MealType] = {
    MealType.breakfast: MealType.lunch,
    MealType.lunch: MealType.dinner,
    MealType.dinner: MealType.snacks,
    MealType.snacks: MealType.dinner,
}


def _food(name: str, quantity: float, calories: float, carbs: float, fats: float, proteins: float, fiber: float, gi: float) -> FoodItem:
    return FoodItem(
        name=name,
        quantity=quantity,
        calories=calories,
        carbs=carbs,
        fats=fats,
        proteins=proteins,
        fiber=fiber,
        gi_index=gi,
    )


def _low_gi_meal() -> Tuple[str, List[FoodItem], str]:
    return (
        "Lentil salad with leafy greens",
        [
            _food("Boiled lentils", 150, 174, 30, 0.6, 13.5, 12, 29),
            _food("Spinach", 60, 14, 2.2, 0.2, 1.7, 1.3, 15),
        ],
        "https://www.allrecipes.com/search?q=lentil+salad",
    )


def _low_carb_meal() -> Tuple[str, List[FoodItem], str]:
    return (
        "Grilled chicken with steamed vegetables",
        [
            _food("Grilled chicken breast", 120, 198, 0, 4.3, 37, 0, 0),
            _food("Steamed broccoli", 150, 53, 10.5, 0.6, 3.6, 5, 15),
        ],
        "https://www.allrecipes.com/search?q=grilled+chicken+vegetables",
    )


def _fiber_rich_meal() -> Tuple[str, List[FoodItem], str]:
    return (
        "Oatmeal with chia seeds and berries",
        [
            _food("Rolled oats", 40, 150, 27, 2.6, 5.3, 4, 55),
            _food("Chia seeds", 15, 73, 6.3, 4.6, 2.5, 5.2, 1),
            _food("Blueberries", 75, 43, 10.9, 0.2, 0.6, 1.8, 53),
        ],
        "https://www.allrecipes.com/search?q=chia+oatmeal",
    )


def _balanced_meal() -> Tuple[str, List[FoodItem], str]:
    return (
        "Quinoa bowl with vegetables and tofu",
        [
            _food("Cooked quinoa", 150, 180, 32, 2.9, 6.6, 4.2, 53),
            _food("Firm tofu", 100, 144, 2.8, 8.7, 15.7, 2.3, 15),
            _food("Mixed vegetables", 100, 65, 13, 0.3, 2.6, 4, 40),
        ],
        "https://www.allrecipes.com/search?q=quinoa+tofu+bowl",
    )


def choose_rule(totals: NutritionTotals) -> Tuple[str, Tuple[str, List[FoodItem], str]]:
    """Pick the first matching rule for a meal's nutrition; returns (reason, meal)."""
    if totals.gi_index >= settings.high_gi_threshold:
        return (
            f"Last meal had a high glycemic index ({totals.gi_index:.0f}). Choose low-GI, fiber-rich foods next.",
            _low_gi_meal(),
        )
    if totals.carbs >= settings.high_carb_threshold:
        return (
            f"Last meal was high in carbs ({totals.carbs:.0f} g). Favor protein and non-starchy vegetables next.",
            _low_carb_meal(),
        )
    if totals.fiber < settings.low_fiber_threshold:
        return (
            f"Last meal was low in fiber ({totals.fiber:.1f} g). Add fiber to help stabilize blood sugar.",
            _fiber_rich_meal(),
        )
    return ("Last meal was well balanced. Keep it up with another balanced plate.", _balanced_meal())


def recommend_next_meals(store: HealthDataStore, day: DayLike) -> RecommendationsResponse:
    current = to_date(day)
    meals = store.get_meals(current)
    if not meals:
        return RecommendationsResponse(date=current.isoformat(), last_meal=None, recommendations=[])

    last = meals[-1]
    totals = last.total_nutrition()
    reason, (title, items, recipe_url) = choose_rule(totals)
    recommendation = MealRecommendation(
        type=_NEXT_MEAL[last.type],
        title=title,
        reason=reason,
        food_items=items,
        recipe_url=recipe_url,
    )
    return RecommendationsResponse(date=current.isoformat(), last_meal=totals, recommendations=[recommendation])


# Monday is 0, following date.weekday().
_TIPS: Dict[int, List[Tuple[str, str, str]]] = {
    0: [
        ("figure.run", "Monday Motivation", "Start your week with 30 minutes of exercise to boost energy levels."),
        ("drop.fill", "Hydration Focus", "Keep a water bottle with you and aim to drink 8 glasses today."),
        ("chart.line.uptrend.xyaxis", "Track Progress", "Record your blood sugar levels and note any patterns."),
    ],
    1: [
        ("fork.knife", "Healthy Eating", "Focus on portion control and balanced meals today."),
        ("pills.fill", "Medication Check", "Review your medication schedule and ensure you're on track."),
        ("figure.walk", "Active Lifestyle", "Take short walks during breaks to maintain activity levels."),
    ],
    2: [
        ("moon.fill", "Sleep Quality", "Ensure 7-8 hours of quality sleep for better blood sugar control."),
        ("heart.text.square.fill", "Heart Health", "Monitor blood pressure and maintain heart-healthy habits."),
        ("brain.head.profile", "Mental Wellness", "Practice positive thinking and stress management techniques."),
    ],
    3: [
        ("leaf.circle.fill", "Nutrition Focus", "Include more fiber-rich foods in your meals today."),
        ("figure.run.circle.fill", "Exercise Variety", "Try a new form of exercise to keep your routine interesting."),
        ("hand.raised.fill", "Support System", "Connect with family or friends for emotional support."),
    ],
    4: [
        ("star.fill", "Weekend Prep", "Plan healthy activities for the weekend to stay on track."),
        ("checkmark.circle.fill", "Goal Review", "Review your weekly health goals and celebrate progress."),
        ("sunrise.fill", "Morning Routine", "Establish a consistent morning routine for better control."),
    ],
    5: [
        ("house.fill", "Home Health", "Prepare healthy meals at home to control ingredients."),
        ("figure.walk.motion", "Weekend Activity", "Engage in outdoor activities for physical and mental health."),
        ("book.fill", "Health Education", "Learn about new diabetes management techniques."),
    ],
    6: [
        ("sun.max.fill", "Sunday Wellness", "Start your week with a morning walk and healthy breakfast."),
        ("heart.fill", "Stress Management", "Practice mindfulness and meditation to reduce stress levels."),
        ("leaf.fill", "Meal Planning", "Plan your meals for the week ahead to maintain healthy eating habits."),
    ],
}

_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def daily_tips(day: DayLike) -> Tuple[str, List[Tip]]:
    weekday = to_date(day).weekday()
    tips = [Tip(icon=icon, title=title, message=message) for icon, title, message in _TIPS[weekday]]
    return _WEEKDAYS[weekday], tips
