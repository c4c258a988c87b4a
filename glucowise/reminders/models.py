# -*- coding: utf-8 -*-
"""Reminders — Pydantic models."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class RepeatSchedule(str, Enum):
    never = "Never"
    every_hour = "Every Hour"
    daily = "Daily"
    weekly = "Weekly"
    monthly = "Monthly"


class ReminderUpsertRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    schedule: RepeatSchedule = RepeatSchedule.never
    time_of_day: Optional[str] = Field(None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$", description="HH:MM")


class Reminder(ReminderUpsertRequest):
    id: str
    created_at: str
    updated_at: str


class RemindersResponse(BaseModel):
    count: int
    reminders: List[Reminder]
