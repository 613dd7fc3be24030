# -*- coding: utf-8 -*-
"""Users — DB storage helpers."""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn
from ..config import settings
from .models import DEFAULT_AVATAR, UserCreateRequest, UserUpdateRequest
from .passwords import hash_password

_PROFILE_COLUMNS = (
    "full_name",
    "age",
    "gender",
    "height_cm",
    "weight_kg",
    "primary_goal",
    "activity_level",
    "average_sleep",
    "water_intake",
    "meal_frequency",
    "diet_type",
    "dietary_notes",
    "username",
    "target_weight",
)

# Text columns declared NOT NULL; a missing or null value is stored as "".
_BLANK_TEXT_COLUMNS = {"full_name", "gender", "dietary_notes"}

_BMI_MIN = 10.0
_BMI_MAX = 60.0


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def compute_bmi(height_cm: Optional[float], weight_kg: Optional[float]) -> Optional[float]:
    if not height_cm or not weight_kg:
        return None
    height_m = float(height_cm) / 100.0
    bmi = round(float(weight_kg) / (height_m * height_m), 1)
    if bmi < _BMI_MIN or bmi > _BMI_MAX:
        return None
    return bmi


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


def row_to_user(row: Dict[str, Any]) -> Dict[str, Any]:
    """Convert a users row into the public shape (never includes the password hash)."""
    data = {k: v for k, v in row.items() if k not in {"password_hash", "allergies_json"}}
    try:
        allergies = json.loads(row.get("allergies_json") or "[]")
    except json.JSONDecodeError:
        allergies = []
    data["allergies"] = allergies if isinstance(allergies, list) else []
    return data


def list_users() -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute("SELECT * FROM users ORDER BY created_at ASC").fetchall()
        return [row_to_user(dict(r)) for r in rows]


def get_user_row_by_email(email: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM users WHERE email = ?", (email.lower().strip(),)).fetchone()
        return dict(row) if row else None


def get_user_by_email(email: str) -> Optional[Dict[str, Any]]:
    row = get_user_row_by_email(email)
    return row_to_user(row) if row else None


def get_user_by_id(user_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        return row_to_user(dict(row)) if row else None


def create_user(request: UserCreateRequest) -> Dict[str, Any]:
    user_id = str(uuid4())
    now = _utc_now()
    values: Dict[str, Any] = {
        "id": user_id,
        "email": request.email,
        "password_hash": hash_password(request.password),
        "profile_name": request.profile_name,
        "avatar": DEFAULT_AVATAR,
        "allergies_json": json.dumps([_enum_value(a) for a in request.allergies or []]),
        "bmi": compute_bmi(request.height_cm, request.weight_kg),
        "start_date": now,
        "last_login": now,
        "created_at": now,
    }
    for column in _PROFILE_COLUMNS:
        value = _enum_value(getattr(request, column))
        if value is None and column in _BLANK_TEXT_COLUMNS:
            value = ""
        values[column] = value

    columns = ", ".join(values.keys())
    placeholders = ", ".join("?" for _ in values)
    try:
        with db_conn(settings.app_db_path) as conn:
            conn.execute(f"INSERT INTO users ({columns}) VALUES ({placeholders})", tuple(values.values()))
    except sqlite3.IntegrityError as exc:
        raise HTTPException(status_code=400, detail=_conflict_detail(exc)) from exc

    created = dict(values)
    return row_to_user(created)


def update_user(email: str, request: UserUpdateRequest) -> Optional[Dict[str, Any]]:
    current = get_user_row_by_email(email)
    if not current:
        return None

    updates: Dict[str, Any] = {}
    supplied = request.model_dump(exclude_unset=True)
    for column in _PROFILE_COLUMNS:
        if column in supplied:
            value = _enum_value(getattr(request, column))
            if value is None and column in _BLANK_TEXT_COLUMNS:
                value = ""
            updates[column] = value
    if "allergies" in supplied:
        updates["allergies_json"] = json.dumps([_enum_value(a) for a in request.allergies or []])
    if request.profile_name:
        updates["profile_name"] = request.profile_name
    if request.avatar:
        updates["avatar"] = request.avatar
    if request.password:
        updates["password_hash"] = hash_password(request.password)
    if request.email and request.email != current["email"]:
        updates["email"] = request.email

    height = updates.get("height_cm", current.get("height_cm"))
    weight = updates.get("weight_kg", current.get("weight_kg"))
    updates["bmi"] = compute_bmi(height, weight)

    assignments = ", ".join(f"{column} = ?" for column in updates)
    try:
        with db_conn(settings.app_db_path) as conn:
            conn.execute(
                f"UPDATE users SET {assignments} WHERE id = ?",
                (*updates.values(), current["id"]),
            )
            if "email" in updates:
                conn.execute(
                    "UPDATE insights SET user_email = ? WHERE user_email = ?",
                    (updates["email"], current["email"]),
                )
    except sqlite3.IntegrityError as exc:
        raise HTTPException(status_code=400, detail=_conflict_detail(exc)) from exc

    current.update(updates)
    return row_to_user(current)


def delete_user(email: str) -> bool:
    """Delete a user; food logs go by cascade, insights are keyed by email and removed here."""
    normalized = email.lower().strip()
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("DELETE FROM users WHERE email = ?", (normalized,))
        if cur.rowcount == 0:
            return False
        conn.execute("DELETE FROM insights WHERE user_email = ?", (normalized,))
        return True


def _conflict_detail(exc: sqlite3.IntegrityError) -> str:
    message = str(exc)
    if "users.username" in message:
        return "Username already exists"
    if "users.email" in message:
        return "Email already exists"
    return f"Constraint violation: {message}"
