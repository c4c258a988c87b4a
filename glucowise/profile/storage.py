# -*- coding: utf-8 -*-
"""Profile storage helpers (SQLite)."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from ..app_db import db_conn
from ..config import settings
from .models import Goals, ProfileUpdateRequest, UserProfile

_PROFILE_FIELDS = (
    "age",
    "gender",
    "weight_kg",
    "height_cm",
    "target_blood_sugar",
    "current_blood_sugar",
    "activity_level",
)
_GOAL_FIELDS = ("weight_kg", "blood_glucose_mg_dl", "hba1c_pct", "activity_minutes", "steps", "calories_kcal")


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def get_profile(user: Dict[str, Any]) -> UserProfile:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM profiles WHERE user_id = ?", (user["id"],)).fetchone()
    data = dict(row) if row else {}
    return UserProfile(
        id=user["id"],
        email=user["email"],
        name=user["name"],
        updated_at=data.get("updated_at"),
        **{k: data.get(k) for k in _PROFILE_FIELDS},
    )


def update_profile(user: Dict[str, Any], update: ProfileUpdateRequest) -> UserProfile:
    """Merge the non-null fields of ``update`` into the stored profile."""
    current = get_profile(user).model_dump(include=set(_PROFILE_FIELDS), mode="json")
    current.update(update.model_dump(exclude_none=True, mode="json"))
    now = _iso_now()
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO profiles (user_id, age, gender, weight_kg, height_cm, target_blood_sugar,
                                  current_blood_sugar, activity_level, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(user_id) DO UPDATE SET
                age = excluded.age,
                gender = excluded.gender,
                weight_kg = excluded.weight_kg,
                height_cm = excluded.height_cm,
                target_blood_sugar = excluded.target_blood_sugar,
                current_blood_sugar = excluded.current_blood_sugar,
                activity_level = excluded.activity_level,
                updated_at = excluded.updated_at
            """,
            (user["id"], *[current.get(k) for k in _PROFILE_FIELDS], now),
        )
    return get_profile(user)


def get_goals(user_id: str) -> Goals:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM goals WHERE user_id = ?", (user_id,)).fetchone()
    return Goals(**{k: row[k] for k in _GOAL_FIELDS}) if row else Goals()


def effective_goals(user_id: str) -> Goals:
    """Stored goals with unset daily targets filled from settings."""
    goals = get_goals(user_id)
    return goals.model_copy(
        update={
            "activity_minutes": goals.activity_minutes if goals.activity_minutes is not None else settings.default_activity_minutes_goal,
            "steps": goals.steps if goals.steps is not None else settings.default_steps_goal,
            "calories_kcal": goals.calories_kcal if goals.calories_kcal is not None else settings.default_calories_goal,
        }
    )


def update_goals(user_id: str, update: Goals) -> Goals:
    merged = get_goals(user_id).model_dump()
    merged.update(update.model_dump(exclude_none=True))
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO goals (user_id, weight_kg, blood_glucose_mg_dl, hba1c_pct, activity_minutes,
                               steps, calories_kcal, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(user_id) DO UPDATE SET
                weight_kg = excluded.weight_kg,
                blood_glucose_mg_dl = excluded.blood_glucose_mg_dl,
                hba1c_pct = excluded.hba1c_pct,
                activity_minutes = excluded.activity_minutes,
                steps = excluded.steps,
                calories_kcal = excluded.calories_kcal,
                updated_at = excluded.updated_at
            """,
            (user_id, *[merged.get(k) for k in _GOAL_FIELDS], _iso_now()),
        )
    return get_goals(user_id)
