# -*- coding: utf-8 -*-
"""Reminders — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ..auth.security import get_current_user
from .models import Reminder, RemindersResponse, ReminderUpsertRequest
from .storage import create_reminder, delete_reminder, list_reminders, update_reminder

router = APIRouter(prefix="/api/reminders", tags=["Reminders"])


@router.get("", response_model=RemindersResponse, summary="List reminders")
def list_all(user: dict = Depends(get_current_user)):
    reminders = list_reminders(user["id"])
    return RemindersResponse(count=len(reminders), reminders=reminders)


@router.post("", response_model=Reminder, status_code=201, summary="Add a reminder")
def create(request: ReminderUpsertRequest, user: dict = Depends(get_current_user)):
    return create_reminder(user["id"], request)


@router.put("/{reminder_id}", response_model=Reminder, summary="Edit a reminder")
def update(reminder_id: str, request: ReminderUpsertRequest, user: dict = Depends(get_current_user)):
    reminder = update_reminder(user["id"], reminder_id, request)
    if reminder is None:
        raise HTTPException(status_code=404, detail="Reminder not found")
    return reminder


@router.delete("/{reminder_id}", summary="Delete a reminder")
def delete(reminder_id: str, user: dict = Depends(get_current_user)):
    if not delete_reminder(user["id"], reminder_id):
        raise HTTPException(status_code=404, detail="Reminder not found")
    return {"status": "ok"}
