# -*- coding: utf-8 -*-
"""Profile — Pydantic models (demographics, activity level, goals)."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Gender(str, Enum):
    male = "Male"
    female = "Female"
    other = "Other"


class ActivityLevel(str, Enum):
    sedentary = "Sedentary"
    active = "Active"
    very_active = "Very Active"
    moderate_active = "Moderately Active"


class ProfileUpdateRequest(BaseModel):
    age: Optional[int] = Field(None, ge=1, le=130)
    gender: Optional[Gender] = None
    weight_kg: Optional[float] = Field(None, gt=0, le=500)
    height_cm: Optional[float] = Field(None, gt=0, le=300)
    target_blood_sugar: Optional[float] = Field(None, gt=0, le=1000, description="mg/dL")
    current_blood_sugar: Optional[float] = Field(None, gt=0, le=1000, description="mg/dL")
    activity_level: Optional[ActivityLevel] = None


class UserProfile(ProfileUpdateRequest):
    """A user: identity plus demographics."""

    id: str
    email: str
    name: str
    updated_at: Optional[str] = None


class Goals(BaseModel):
    weight_kg: Optional[float] = Field(None, gt=0, le=500)
    blood_glucose_mg_dl: Optional[float] = Field(None, gt=0, le=1000)
    hba1c_pct: Optional[float] = Field(None, gt=0, le=20)
    activity_minutes: Optional[int] = Field(None, ge=0, le=1440)
    steps: Optional[int] = Field(None, ge=0)
    calories_kcal: Optional[float] = Field(None, ge=0)
