# -*- coding: utf-8 -*-
"""Tracking — in-memory health-data store, bucketed by calendar day.

Every collection is keyed by a ``YYYY-MM-DD`` day key derived from the entry's
timestamp in the configured timezone. Aggregates are re-derived from the stored
entries on every call.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from contextlib import contextmanager
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union
from zoneinfo import ZoneInfo

from .models import (
    ActivityProgress,
    BloodReading,
    BloodReadingType,
    DailyNutrition,
    FoodItem,
    Meal,
    MealType,
    StoreSnapshot,
    nutrition_from_items,
)

from ..config import settings

logger = logging.getLogger(__name__)

DayLike = Union[str, date, datetime]


class FutureReadingError(ValueError):
    """Raised when a blood reading is timestamped after the current time."""


def _zone() -> ZoneInfo:
    return ZoneInfo(settings.timezone)


def _as_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=_zone())
    return value


def day_key(value: DayLike) -> str:
    """Format a timestamp, date or ``YYYY-MM-DD`` string as a day key."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(_zone())
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    # Raises ValueError on malformed input.
    return date.fromisoformat(str(value).strip()[:10]).isoformat()


def to_date(value: DayLike) -> date:
    return date.fromisoformat(day_key(value))


def today() -> date:
    return datetime.now(_zone()).date()


def previous_day(value: date) -> Optional[date]:
    if value == date.min:
        return None
    return value - timedelta(days=1)


def window_start(end: date, days: int) -> date:
    """First day of a ``days``-long window ending at ``end``, clamped to ``date.min``."""
    span = min(max(days, 1), (end - date.min).days + 1)
    return end - timedelta(days=span - 1)


class HealthDataStore:
    """One user's meals, blood readings and activity records."""

    def __init__(self) -> None:
        self._meals_by_date: Dict[str, List[Meal]] = {}
        self._readings_by_date: Dict[str, List[BloodReading]] = {}
        self._activities_by_date: Dict[str, ActivityProgress] = {}

    # ---- meals ----

    def add_meal(self, meal: Meal) -> Meal:
        self._meals_by_date.setdefault(day_key(meal.date), []).append(meal)
        return meal

    def get_meals(self, day: DayLike, meal_type: Optional[MealType] = None) -> List[Meal]:
        meals = list(self._meals_by_date.get(day_key(day), []))
        if meal_type is not None:
            meals = [m for m in meals if m.type == meal_type]
        return meals

    def daily_nutrition(self, day: DayLike) -> DailyNutrition:
        key = day_key(day)
        meals = self._meals_by_date.get(key, [])
        items: List[FoodItem] = [item for meal in meals for item in meal.food_items]
        return DailyNutrition(
            date=key,
            totals=nutrition_from_items(items),
            meal_count=len(meals),
            item_count=len(items),
        )

    def get_calories_consumed(self, day: DayLike) -> float:
        return sum(meal.total_nutrition().calories for meal in self.get_meals(day))

    # ---- blood readings ----

    def add_blood_reading(self, reading: BloodReading, now: Optional[datetime] = None) -> BloodReading:
        current = _as_aware(now) if now is not None else datetime.now(timezone.utc)
        if _as_aware(reading.date) > current:
            logger.info("Rejected blood reading %s dated in the future (%s)", reading.id, reading.date.isoformat())
            raise FutureReadingError("Blood reading cannot have a future timestamp")
        self._readings_by_date.setdefault(day_key(reading.date), []).append(reading)
        return reading

    def get_readings(self, day: DayLike) -> List[BloodReading]:
        return list(self._readings_by_date.get(day_key(day), []))

    def get_average(self, day: DayLike) -> Optional[float]:
        readings = self._readings_by_date.get(day_key(day), [])
        if not readings:
            return None
        return sum(r.value for r in readings) / len(readings)

    def difference_between_blood_sugar(self, day: DayLike) -> Optional[float]:
        """Mean glucose of ``day`` minus that of the previous day; None if either has no readings."""
        current = to_date(day)
        previous = previous_day(current)
        if previous is None:
            return None
        today_avg = self.get_average(current)
        previous_avg = self.get_average(previous)
        if today_avg is None or previous_avg is None:
            return None
        return today_avg - previous_avg

    def average_glucose(self, days: int, as_of: Optional[DayLike] = None) -> Optional[float]:
        """Average of per-day means over the ``days`` calendar days ending at ``as_of``.

        Days without readings are skipped rather than counted as zero.
        """
        averages = self.daily_averages(days, as_of=as_of)
        if not averages:
            return None
        return sum(averages.values()) / len(averages)

    def daily_averages(self, days: int, as_of: Optional[DayLike] = None) -> Dict[str, float]:
        """Mean glucose per day, for the days inside the window that have readings."""
        end = to_date(as_of) if as_of is not None else today()
        if days <= 0:
            return {}
        first = window_start(end, days).isoformat()
        last = end.isoformat()
        out: Dict[str, float] = {}
        for key, readings in sorted(self._readings_by_date.items()):
            if first <= key <= last and readings:
                out[key] = sum(r.value for r in readings) / len(readings)
        return out

    # ---- activity ----

    def add_activity(self, activity: ActivityProgress) -> ActivityProgress:
        self._activities_by_date[day_key(activity.date)] = activity
        return activity

    def get_activity(self, day: DayLike) -> Optional[ActivityProgress]:
        return self._activities_by_date.get(day_key(day))

    def get_steps_taken(self, day: DayLike) -> int:
        activity = self.get_activity(day)
        return activity.total_steps if activity else 0

    def recent_steps(self, end: DayLike, days: int) -> Dict[str, int]:
        """Steps per day for the ``days`` days ending at ``end``, oldest first."""
        last = to_date(end)
        if days <= 0:
            return {}
        d = window_start(last, days)
        out: Dict[str, int] = {}
        while d <= last:
            out[d.isoformat()] = self.get_steps_taken(d)
            if d == last:
                break
            d += timedelta(days=1)
        return out

    # ---- snapshot ----

    def to_snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(
            meals={k: list(v) for k, v in self._meals_by_date.items()},
            readings={k: list(v) for k, v in self._readings_by_date.items()},
            activities=dict(self._activities_by_date),
        )

    @classmethod
    def from_snapshot(cls, snapshot: StoreSnapshot) -> "HealthDataStore":
        store = cls()
        # Re-key from the timestamps so a timezone change is picked up on load.
        for meals in snapshot.meals.values():
            for meal in meals:
                store.add_meal(meal)
        for readings in snapshot.readings.values():
            for reading in readings:
                store._readings_by_date.setdefault(day_key(reading.date), []).append(reading)
        for activity in snapshot.activities.values():
            store.add_activity(activity)
        return store


class StoreRegistry:
    """Hands out per-user stores, backed by a JSON snapshot file per user."""

    def __init__(self, data_root: Path | None = None, persist: bool | None = None) -> None:
        self._data_root = data_root
        self._persist = persist
        self._stores: Dict[str, HealthDataStore] = {}
        self._lock = threading.RLock()
        self._user_locks: Dict[str, threading.RLock] = {}

    @property
    def persist(self) -> bool:
        return settings.persist_store if self._persist is None else self._persist

    def _snapshot_path(self, user_id: str) -> Path:
        root = self._data_root or settings.data_root
        return root / "users" / user_id / "tracking.json"

    def get(self, user_id: str) -> HealthDataStore:
        with self._lock:
            store = self._stores.get(user_id)
            if store is None:
                store = self._load(user_id)
                self._stores[user_id] = store
            return store

    def _user_lock(self, user_id: str) -> threading.RLock:
        with self._lock:
            return self._user_locks.setdefault(user_id, threading.RLock())

    @contextmanager
    def editing(self, user_id: str) -> Iterator[HealthDataStore]:
        """Hold the user's lock while the store is changed, then save it."""
        with self._user_lock(user_id):
            store = self.get(user_id)
            yield store
            self.save(user_id)

    def _load(self, user_id: str) -> HealthDataStore:
        if not self.persist:
            return HealthDataStore()
        fp = self._snapshot_path(user_id)
        if not fp.exists():
            return HealthDataStore()
        try:
            raw = json.loads(fp.read_text(encoding="utf-8"))
            return HealthDataStore.from_snapshot(StoreSnapshot.model_validate(raw))
        except Exception as exc:
            logger.warning("Ignoring unreadable tracking snapshot %s: %s", fp, exc)
            return HealthDataStore()

    def save(self, user_id: str) -> None:
        if not self.persist:
            return
        store = self._stores.get(user_id)
        if store is None:
            return
        fp = self._snapshot_path(user_id)
        fp.parent.mkdir(parents=True, exist_ok=True)
        with self._user_lock(user_id):
            tmp = fp.with_name(f"{fp.name}.{threading.get_ident()}.tmp")
            tmp.write_text(store.to_snapshot().model_dump_json(indent=2), encoding="utf-8")
            os.replace(tmp, fp)
        logger.debug("Saved tracking snapshot for user %s", user_id)

    def clear(self) -> None:
        with self._lock:
            self._stores.clear()


registry = StoreRegistry()


def seed_demo_data(store: HealthDataStore, now: Optional[datetime] = None) -> None:
    """Load a day of sample meals, readings and activity."""
    current = now or datetime.now(_zone())
    apple = FoodItem(name="Apple", quantity=100, calories=52, carbs=14, fats=0.2, proteins=0.3, fiber=2.4, gi_index=38)

    def rice() -> FoodItem:
        return FoodItem(name="Rice", quantity=150, calories=195, carbs=40, fats=0.3, proteins=3.5, fiber=1.0, gi_index=73)

    store.add_meal(Meal(type=MealType.breakfast, food_items=[apple, rice()], date=current))
    store.add_meal(Meal(type=MealType.lunch, food_items=[rice()], date=current))

    store.add_blood_reading(BloodReading(type=BloodReadingType.fasting, value=90.0, date=current), now=current)
    store.add_blood_reading(BloodReading(type=BloodReadingType.post_meal, value=125.0, date=current), now=current)

    store.add_activity(ActivityProgress(date=current, calories_burned=300, workout_minutes=45, total_steps=8000))
