# -*- coding: utf-8 -*-
"""Tracking — Pydantic models (meals, food items, readings, activity)."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, computed_field


class InvalidQuantityError(ValueError):
    """Raised when a food item is rescaled to a non-positive quantity."""


class MealType(str, Enum):
    breakfast = "Breakfast"
    lunch = "Lunch"
    dinner = "Dinner"
    snacks = "Snacks"


class BloodReadingType(str, Enum):
    fasting = "Fasting"
    pre_meal = "Pre-Meal"
    post_meal = "Post-Meal"
    pre_workout = "Pre-Workout"
    post_workout = "Post-Workout"


class ReadingStatus(str, Enum):
    good = "good"
    neutral = "neutral"
    bad = "bad"


def _new_id() -> str:
    return str(uuid4())


class NutritionTotals(BaseModel):
    calories: float = Field(0.0, ge=0)
    carbs: float = Field(0.0, ge=0)
    fats: float = Field(0.0, ge=0)
    proteins: float = Field(0.0, ge=0)
    fiber: float = Field(0.0, ge=0)
    gi_index: float = Field(0.0, ge=0, description="Mean glycemic index of the food items")
    glycemic_load: float = Field(0.0, ge=0, description="gi_index * carbs / 100")


def nutrition_from_items(items: List["FoodItem"]) -> NutritionTotals:
    """Sum nutrients over food items; GI is the plain mean over items."""
    calories = 0.0
    carbs = 0.0
    fats = 0.0
    proteins = 0.0
    fiber = 0.0
    gi_sum = 0.0
    for item in items:
        calories += item.calories
        carbs += item.carbs
        fats += item.fats
        proteins += item.proteins
        fiber += item.fiber
        gi_sum += item.gi_index
    gi_avg = gi_sum / len(items) if items else 0.0
    return NutritionTotals(
        calories=calories,
        carbs=carbs,
        fats=fats,
        proteins=proteins,
        fiber=fiber,
        gi_index=gi_avg,
        glycemic_load=gi_avg * carbs / 100.0,
    )


class FoodItem(BaseModel):
    id: str = Field(default_factory=_new_id)
    name: str = Field(..., min_length=1, description="Food name, e.g. 'Apple'")
    quantity: float = Field(..., gt=0, description="Reference quantity the nutrients are given for, e.g. 100 (g)")
    calories: float = Field(0.0, ge=0)
    carbs: float = Field(0.0, ge=0)
    fats: float = Field(0.0, ge=0)
    proteins: float = Field(0.0, ge=0)
    fiber: float = Field(0.0, ge=0)
    gi_index: float = Field(0.0, ge=0)

    def adjusted_nutrients(self, new_quantity: float) -> "FoodItem":
        """Return a copy rescaled to ``new_quantity``; the glycemic index is kept."""
        if new_quantity <= 0:
            raise InvalidQuantityError(f"quantity must be positive, got {new_quantity}")
        factor = new_quantity / self.quantity
        return FoodItem(
            name=self.name,
            quantity=new_quantity,
            calories=self.calories * factor,
            carbs=self.carbs * factor,
            fats=self.fats * factor,
            proteins=self.proteins * factor,
            fiber=self.fiber * factor,
            gi_index=self.gi_index,
        )


class Meal(BaseModel):
    id: str = Field(default_factory=_new_id)
    type: MealType
    food_items: List[FoodItem] = Field(default_factory=list)
    date: datetime

    def total_nutrition(self) -> NutritionTotals:
        return nutrition_from_items(self.food_items)


class BloodReading(BaseModel):
    id: str = Field(default_factory=_new_id)
    type: BloodReadingType
    value: float = Field(..., gt=0, description="Blood sugar in mg/dL")
    date: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> ReadingStatus:
        if self.value <= 120:
            return ReadingStatus.good
        if self.value <= 180:
            return ReadingStatus.neutral
        return ReadingStatus.bad


class ActivityProgress(BaseModel):
    date: datetime
    calories_burned: float = Field(0.0, ge=0)
    workout_minutes: int = Field(0, ge=0)
    total_steps: int = Field(0, ge=0)


class DailyNutrition(BaseModel):
    date: str = Field(..., description="YYYY-MM-DD")
    totals: NutritionTotals
    meal_count: int = Field(0, ge=0)
    item_count: int = Field(0, ge=0)


class StoreSnapshot(BaseModel):
    """Serialized form of one user's tracking store."""

    meals: Dict[str, List[Meal]] = Field(default_factory=dict)
    readings: Dict[str, List[BloodReading]] = Field(default_factory=dict)
    activities: Dict[str, ActivityProgress] = Field(default_factory=dict)


# ---- API payloads ----


class MealCreateRequest(BaseModel):
    type: MealType
    date: datetime = Field(..., description="ISO8601 timestamp")
    food_items: List[FoodItem] = Field(default_factory=list)


class MealResponse(BaseModel):
    meal: Meal
    totals: NutritionTotals


class MealsResponse(BaseModel):
    date: str
    count: int
    meals: List[MealResponse]


class FoodAdjustRequest(BaseModel):
    item: FoodItem
    quantity: float = Field(..., gt=0)


class ReadingCreateRequest(BaseModel):
    type: BloodReadingType
    value: float = Field(..., gt=0, le=1000)
    date: datetime = Field(..., description="ISO8601 timestamp")


class ReadingsResponse(BaseModel):
    date: str
    count: int
    average: Optional[float] = None
    last_reading_at: Optional[datetime] = None
    readings: List[BloodReading]


class ActivityResponse(BaseModel):
    date: str
    activity: Optional[ActivityProgress] = None


class StepsDay(BaseModel):
    date: str
    steps: int = Field(0, ge=0)


class StepsResponse(BaseModel):
    end: str
    days: List[StepsDay]
