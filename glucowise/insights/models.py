# -*- coding: utf-8 -*-
"""Insights — Pydantic models."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from ..tracking.models import FoodItem, MealType, NutritionTotals


class EstimateStatus(str, Enum):
    ok = "ok"
    invalid_input = "invalid_input"
    no_data = "no_data"


class HbA1cEstimate(BaseModel):
    status: EstimateStatus
    days: Optional[int] = Field(None, description="Requested window; None when the input was not a number")
    as_of: str = Field(..., description="YYYY-MM-DD, last day of the window")
    days_with_readings: int = Field(0, ge=0)
    average_glucose: Optional[float] = Field(None, description="mg/dL")
    hba1c_pct: Optional[float] = None
    message: Optional[str] = None


class GlucoseAverage(BaseModel):
    days: int
    average_glucose: Optional[float] = Field(None, description="mg/dL; None when the window has no readings")


class GlucoseAveragesResponse(BaseModel):
    as_of: str
    windows: List[GlucoseAverage]


class BloodSugarDifference(BaseModel):
    date: str
    previous_date: Optional[str] = None
    available: bool
    today_average: Optional[float] = None
    previous_average: Optional[float] = None
    difference: Optional[float] = Field(None, description="today_average - previous_average, mg/dL")


class MealRecommendation(BaseModel):
    type: MealType
    title: str
    reason: str
    food_items: List[FoodItem] = Field(default_factory=list)
    recipe_url: Optional[str] = None


class RecommendationsResponse(BaseModel):
    date: str
    last_meal: Optional[NutritionTotals] = None
    recommendations: List[MealRecommendation]


class Tip(BaseModel):
    icon: str
    title: str
    message: str


class TipsResponse(BaseModel):
    date: str
    weekday: str
    tips: List[Tip]


class GoalProgress(BaseModel):
    value: float = 0.0
    goal: float = 0.0
    remaining: float = 0.0
    progress: float = Field(0.0, ge=0, le=1, description="value / goal, capped at 1")


class DailyOverview(BaseModel):
    date: str
    calories_consumed: GoalProgress
    steps: GoalProgress
    calories_burned: GoalProgress
    workout_minutes: GoalProgress
    average_glucose: Optional[float] = None
    reading_count: int = 0
    glucose_difference: Optional[float] = None
