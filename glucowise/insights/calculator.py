# -*- coding: utf-8 -*-
"""Glucose metrics: HbA1c estimate, rolling averages, day-over-day change, daily overview."""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from ..profile.models import Goals
from ..tracking.store import DayLike, HealthDataStore, previous_day, to_date, today
from .models import (
    BloodSugarDifference,
    DailyOverview,
    EstimateStatus,
    GlucoseAverage,
    GlucoseAveragesResponse,
    GoalProgress,
    HbA1cEstimate,
)

# Linear relation between mean glucose (mg/dL) and HbA1c (%).
HBA1C_OFFSET = 46.7
HBA1C_SLOPE = 28.7

DEFAULT_WINDOWS = (7, 14, 30, 60)


def hba1c_from_glucose(average_glucose: float) -> float:
    return (average_glucose + HBA1C_OFFSET) / HBA1C_SLOPE


def _parse_days(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def estimate_hba1c(store: HealthDataStore, days: Any, as_of: Optional[DayLike] = None) -> HbA1cEstimate:
    """Estimate HbA1c from the mean glucose of the last ``days`` days.

    ``days`` is taken as the user typed it; anything that is not a positive
    whole number gives an ``invalid_input`` result.
    """
    end = to_date(as_of) if as_of is not None else today()
    n = _parse_days(days)
    if n is None or n <= 0:
        return HbA1cEstimate(
            status=EstimateStatus.invalid_input,
            days=n,
            as_of=end.isoformat(),
            message="Number of days must be a positive whole number",
        )

    daily = store.daily_averages(n, as_of=end)
    if not daily:
        return HbA1cEstimate(
            status=EstimateStatus.no_data,
            days=n,
            as_of=end.isoformat(),
            message="No blood sugar readings in the requested period",
        )
    average = sum(daily.values()) / len(daily)
    return HbA1cEstimate(
        status=EstimateStatus.ok,
        days=n,
        as_of=end.isoformat(),
        days_with_readings=len(daily),
        average_glucose=round(average, 1),
        hba1c_pct=round(hba1c_from_glucose(average), 2),
    )


def glucose_averages(
    store: HealthDataStore,
    as_of: Optional[DayLike] = None,
    windows: Sequence[int] = DEFAULT_WINDOWS,
) -> GlucoseAveragesResponse:
    end = to_date(as_of) if as_of is not None else today()
    out: List[GlucoseAverage] = []
    for days in windows:
        avg = store.average_glucose(days, as_of=end)
        out.append(GlucoseAverage(days=days, average_glucose=round(avg, 1) if avg is not None else None))
    return GlucoseAveragesResponse(as_of=end.isoformat(), windows=out)


def blood_sugar_difference(store: HealthDataStore, day: DayLike) -> BloodSugarDifference:
    current = to_date(day)
    previous = previous_day(current)
    today_avg = store.get_average(current)
    previous_avg = store.get_average(previous) if previous is not None else None
    diff = store.difference_between_blood_sugar(current)
    return BloodSugarDifference(
        date=current.isoformat(),
        previous_date=previous.isoformat() if previous is not None else None,
        available=diff is not None,
        today_average=today_avg,
        previous_average=previous_avg,
        difference=diff,
    )


def _progress(value: float, goal: float) -> GoalProgress:
    ratio = value / goal if goal > 0 else 0.0
    return GoalProgress(
        value=value,
        goal=goal,
        remaining=max(goal - value, 0.0),
        progress=min(max(ratio, 0.0), 1.0),
    )


def daily_overview(store: HealthDataStore, day: DayLike, goals: Goals, burn_goal: float) -> DailyOverview:
    current = to_date(day)
    activity = store.get_activity(current)
    readings = store.get_readings(current)
    average = store.get_average(current)
    return DailyOverview(
        date=current.isoformat(),
        calories_consumed=_progress(store.get_calories_consumed(current), float(goals.calories_kcal or 0)),
        steps=_progress(float(store.get_steps_taken(current)), float(goals.steps or 0)),
        calories_burned=_progress(activity.calories_burned if activity else 0.0, burn_goal),
        workout_minutes=_progress(float(activity.workout_minutes if activity else 0), float(goals.activity_minutes or 0)),
        average_glucose=round(average, 1) if average is not None else None,
        reading_count=len(readings),
        glucose_difference=store.difference_between_blood_sugar(current),
    )
