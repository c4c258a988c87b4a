# -*- coding: utf-8 -*-
"""Reminder storage helpers (SQLite)."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings
from .models import Reminder, ReminderUpsertRequest


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _row_to_reminder(row: Dict[str, Any]) -> Reminder:
    return Reminder(
        id=row["id"],
        title=row["title"],
        schedule=row["schedule"],
        time_of_day=row.get("time_of_day"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def list_reminders(user_id: str) -> List[Reminder]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM reminders WHERE user_id = ? ORDER BY created_at ASC, id ASC",
            (user_id,),
        ).fetchall()
    return [_row_to_reminder(dict(r)) for r in rows]


def create_reminder(user_id: str, request: ReminderUpsertRequest) -> Reminder:
    reminder_id = str(uuid4())
    now = _iso_now()
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO reminders (id, user_id, title, schedule, time_of_day, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (reminder_id, user_id, request.title.strip(), request.schedule.value, request.time_of_day, now, now),
        )
    return Reminder(id=reminder_id, created_at=now, updated_at=now, **request.model_dump())


def update_reminder(user_id: str, reminder_id: str, request: ReminderUpsertRequest) -> Optional[Reminder]:
    now = _iso_now()
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute(
            """
            UPDATE reminders SET title = ?, schedule = ?, time_of_day = ?, updated_at = ?
            WHERE id = ? AND user_id = ?
            """,
            (request.title.strip(), request.schedule.value, request.time_of_day, now, reminder_id, user_id),
        )
        if cur.rowcount == 0:
            return None
        row = conn.execute("SELECT * FROM reminders WHERE id = ?", (reminder_id,)).fetchone()
    return _row_to_reminder(dict(row))


def delete_reminder(user_id: str, reminder_id: str) -> bool:
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("DELETE FROM reminders WHERE id = ? AND user_id = ?", (reminder_id, user_id))
        return cur.rowcount > 0
