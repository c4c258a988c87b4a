# -*- coding: utf-8 -*-
"""Tracking — API endpoints (meals, food items, blood readings, activity)."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_user
from .models import (
    ActivityProgress,
    ActivityResponse,
    BloodReading,
    DailyNutrition,
    FoodAdjustRequest,
    FoodItem,
    Meal,
    MealCreateRequest,
    MealResponse,
    MealsResponse,
    MealType,
    ReadingCreateRequest,
    ReadingsResponse,
    StepsDay,
    StepsResponse,
)
from .store import FutureReadingError, day_key, registry, to_date, today

router = APIRouter(prefix="/api", tags=["Tracking"])


def parse_day_or_400(value: str | None) -> date:
    if not value:
        return today()
    try:
        return to_date(value)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid date (expected YYYY-MM-DD): {value}") from exc


def _meal_response(meal: Meal) -> MealResponse:
    return MealResponse(meal=meal, totals=meal.total_nutrition())


@router.post("/meals", response_model=MealResponse, status_code=201, summary="Log a meal")
def create_meal(request: MealCreateRequest, user: dict = Depends(get_current_user)):
    with registry.editing(user["id"]) as store:
        meal = store.add_meal(Meal(type=request.type, food_items=request.food_items, date=request.date))
    return _meal_response(meal)


@router.get("/meals", response_model=MealsResponse, summary="List meals for a day")
def list_meals(
    date: str | None = Query(default=None, description="YYYY-MM-DD, defaults to today"),
    meal_type: MealType | None = Query(default=None),
    user: dict = Depends(get_current_user),
):
    day = parse_day_or_400(date)
    meals = registry.get(user["id"]).get_meals(day, meal_type=meal_type)
    return MealsResponse(date=day.isoformat(), count=len(meals), meals=[_meal_response(m) for m in meals])


@router.get("/meals/nutrition", response_model=DailyNutrition, summary="Nutrition rollup for a day")
def meal_nutrition(
    date: str | None = Query(default=None, description="YYYY-MM-DD, defaults to today"),
    user: dict = Depends(get_current_user),
):
    return registry.get(user["id"]).daily_nutrition(parse_day_or_400(date))


@router.post("/foods/adjust", response_model=FoodItem, summary="Rescale a food item to a new quantity")
def adjust_food(request: FoodAdjustRequest, user: dict = Depends(get_current_user)):  # noqa: ARG001
    return request.item.adjusted_nutrients(request.quantity)


@router.post("/readings", response_model=BloodReading, status_code=201, summary="Log a blood sugar reading")
def create_reading(request: ReadingCreateRequest, user: dict = Depends(get_current_user)):
    try:
        with registry.editing(user["id"]) as store:
            reading = store.add_blood_reading(BloodReading(type=request.type, value=request.value, date=request.date))
    except FutureReadingError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return reading


@router.get("/readings", response_model=ReadingsResponse, summary="Blood sugar readings for a day")
def list_readings(
    date: str | None = Query(default=None, description="YYYY-MM-DD, defaults to today"),
    user: dict = Depends(get_current_user),
):
    day = parse_day_or_400(date)
    store = registry.get(user["id"])
    readings = store.get_readings(day)
    average = store.get_average(day)
    return ReadingsResponse(
        date=day.isoformat(),
        count=len(readings),
        average=round(average, 1) if average is not None else None,
        last_reading_at=readings[-1].date if readings else None,
        readings=readings,
    )


@router.put("/activity", response_model=ActivityResponse, summary="Set the activity record for a day")
def put_activity(request: ActivityProgress, user: dict = Depends(get_current_user)):
    with registry.editing(user["id"]) as store:
        activity = store.add_activity(request)
    return ActivityResponse(date=day_key(activity.date), activity=activity)


@router.get("/activity", response_model=ActivityResponse, summary="Activity record for a day")
def get_activity(
    date: str | None = Query(default=None, description="YYYY-MM-DD, defaults to today"),
    user: dict = Depends(get_current_user),
):
    day = parse_day_or_400(date)
    return ActivityResponse(date=day.isoformat(), activity=registry.get(user["id"]).get_activity(day))


@router.get("/activity/steps", response_model=StepsResponse, summary="Daily steps for the last few days")
def recent_steps(
    date: str | None = Query(default=None, description="Last day (YYYY-MM-DD), defaults to today"),
    days: int = Query(default=5, ge=1, le=90),
    user: dict = Depends(get_current_user),
):
    day = parse_day_or_400(date)
    steps = registry.get(user["id"]).recent_steps(day, days)
    return StepsResponse(end=day.isoformat(), days=[StepsDay(date=d, steps=s) for d, s in steps.items()])
