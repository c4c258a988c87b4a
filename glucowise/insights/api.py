# -*- coding: utf-8 -*-
"""Insights — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ..auth.security import get_current_user
from ..config import settings
from ..profile.storage import effective_goals
from ..tracking.api import parse_day_or_400
from ..tracking.store import registry
from .calculator import blood_sugar_difference, daily_overview, estimate_hba1c, glucose_averages
from .models import (
    BloodSugarDifference,
    DailyOverview,
    GlucoseAveragesResponse,
    HbA1cEstimate,
    RecommendationsResponse,
    TipsResponse,
)
from .recommender import daily_tips, recommend_next_meals

router = APIRouter(prefix="/api/insights", tags=["Insights"])


@router.get("/difference", response_model=BloodSugarDifference, summary="Mean glucose change since the previous day")
def difference(
    date: str | None = Query(default=None, description="YYYY-MM-DD, defaults to today"),
    user: dict = Depends(get_current_user),
):
    return blood_sugar_difference(registry.get(user["id"]), parse_day_or_400(date))


@router.get("/hba1c", response_model=HbA1cEstimate, summary="Estimate HbA1c from recent readings")
def hba1c(
    days: str = Query(default="", description="Number of days to average; invalid input is reported, not rejected"),
    as_of: str | None = Query(default=None, description="Last day of the window (YYYY-MM-DD), defaults to today"),
    user: dict = Depends(get_current_user),
):
    return estimate_hba1c(registry.get(user["id"]), days, as_of=parse_day_or_400(as_of))


@router.get("/glucose-averages", response_model=GlucoseAveragesResponse, summary="Average glucose over 7/14/30/60 days")
def averages(
    as_of: str | None = Query(default=None, description="YYYY-MM-DD, defaults to today"),
    user: dict = Depends(get_current_user),
):
    return glucose_averages(registry.get(user["id"]), as_of=parse_day_or_400(as_of))


@router.get("/recommendations", response_model=RecommendationsResponse, summary="Suggested next meal")
def recommendations(
    date: str | None = Query(default=None, description="YYYY-MM-DD, defaults to today"),
    user: dict = Depends(get_current_user),
):
    return recommend_next_meals(registry.get(user["id"]), parse_day_or_400(date))


@router.get("/tips", response_model=TipsResponse, summary="Tips for the day of the week")
def tips(
    date: str | None = Query(default=None, description="YYYY-MM-DD, defaults to today"),
    user: dict = Depends(get_current_user),  # noqa: ARG001
):
    day = parse_day_or_400(date)
    weekday, items = daily_tips(day)
    return TipsResponse(date=day.isoformat(), weekday=weekday, tips=items)


@router.get("/overview", response_model=DailyOverview, summary="Daily progress against goals")
def overview(
    date: str | None = Query(default=None, description="YYYY-MM-DD, defaults to today"),
    user: dict = Depends(get_current_user),
):
    goals = effective_goals(user["id"])
    return daily_overview(registry.get(user["id"]), parse_day_or_400(date), goals, settings.default_burn_goal)
