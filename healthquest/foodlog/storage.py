# -*- coding: utf-8 -*-
"""Food log — DB storage helpers and stale-entry cleanup."""

from __future__ import annotations

import json
import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings
from .models import CleanupResult, DailyTotals, FoodLogEntry, FoodLogIn, Meal

logger = logging.getLogger(__name__)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _row_to_entry(row: Dict[str, Any]) -> FoodLogEntry:
    meals: List[Meal] = []
    try:
        raw_meals = json.loads(row.get("meals_json") or "[]")
    except json.JSONDecodeError:
        raw_meals = []
    for raw in raw_meals if isinstance(raw_meals, list) else []:
        try:
            meals.append(Meal.model_validate(raw))
        except ValueError:
            logger.warning("Skipping malformed meal in food log %s", row.get("id"))
    return FoodLogEntry(
        id=row["id"],
        user_id=row["user_id"],
        date=row["date"],
        calories=float(row.get("calories") or 0.0),
        protein=float(row.get("protein") or 0.0),
        carbs=float(row.get("carbs") or 0.0),
        fat=float(row.get("fat") or 0.0),
        meals=meals,
        created_at=row["created_at"],
    )


def create_food_log(user_id: str, food_log: FoodLogIn) -> FoodLogEntry:
    entry = FoodLogEntry(
        id=str(uuid4()),
        user_id=user_id,
        date=food_log.date,
        calories=float(food_log.calories or 0.0),
        protein=float(food_log.protein or 0.0),
        carbs=float(food_log.carbs or 0.0),
        fat=float(food_log.fat or 0.0),
        meals=food_log.meals,
        created_at=_utc_now(),
    )
    meals_json = json.dumps([m.model_dump() for m in entry.meals], ensure_ascii=False)
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO food_logs (id, user_id, date, calories, protein, carbs, fat, meals_json, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                entry.id,
                entry.user_id,
                entry.date,
                entry.calories,
                entry.protein,
                entry.carbs,
                entry.fat,
                meals_json,
                entry.created_at,
            ),
        )
    return entry


def list_food_logs(user_id: str, *, date: Optional[str] = None) -> List[FoodLogEntry]:
    query = "SELECT * FROM food_logs WHERE user_id = ?"
    params: List[Any] = [user_id]
    if date:
        query += " AND date = ?"
        params.append(date)
    query += " ORDER BY created_at DESC, rowid DESC"
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(query, params).fetchall()
        return [_row_to_entry(dict(r)) for r in rows]


def get_daily_totals(user_id: str, date: str) -> DailyTotals:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(
            """
            SELECT
                COALESCE(SUM(calories), 0) AS calories,
                COALESCE(SUM(protein), 0) AS protein,
                COALESCE(SUM(carbs), 0) AS carbs,
                COALESCE(SUM(fat), 0) AS fat
            FROM food_logs
            WHERE user_id = ? AND date = ?
            """,
            (user_id, date),
        ).fetchone()
    return DailyTotals(
        calories=round(float(row["calories"]), 1),
        protein=round(float(row["protein"]), 1),
        carbs=round(float(row["carbs"]), 1),
        fat=round(float(row["fat"]), 1),
    )


def delete_food_log(user_id: str, food_log_id: str) -> Optional[FoodLogEntry]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(
            "SELECT * FROM food_logs WHERE id = ? AND user_id = ?",
            (food_log_id, user_id),
        ).fetchone()
        if not row:
            return None
        conn.execute("DELETE FROM food_logs WHERE id = ?", (food_log_id,))
        return _row_to_entry(dict(row))


def stale_cutoff(today: Optional[date] = None, retention_days: Optional[int] = None) -> str:
    """First date (YYYY-MM-DD) that is still kept; anything earlier is stale."""
    day = today or datetime.now(timezone.utc).date()
    days = settings.foodlog_retention_days if retention_days is None else retention_days
    return (day - timedelta(days=days)).isoformat()


def delete_stale_food_logs(today: Optional[date] = None) -> CleanupResult:
    cutoff = stale_cutoff(today)
    logger.info("Deleting food logs older than %s", cutoff)
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("DELETE FROM food_logs WHERE date < ?", (cutoff,))
        deleted = cur.rowcount
    logger.info("Deleted %d food logs", deleted)
    return CleanupResult(cutoff=cutoff, deleted=deleted)
