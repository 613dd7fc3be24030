# -*- coding: utf-8 -*-
"""Insights — DB storage helpers."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, List
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings
from .models import Insight, InsightCreateRequest


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _row_to_insight(row: Dict[str, Any]) -> Insight:
    raw = row.get("value_json")
    try:
        value = json.loads(raw) if raw is not None else None
    except json.JSONDecodeError:
        value = raw
    return Insight(
        id=row["id"],
        user_email=row["user_email"],
        date=row.get("date"),
        metric=row["metric"],
        value=value,
        created_at=row["created_at"],
    )


def create_insight(user_email: str, request: InsightCreateRequest) -> Insight:
    insight = Insight(
        id=str(uuid4()),
        user_email=user_email.lower().strip(),
        date=request.date,
        metric=request.metric,
        value=request.value,
        created_at=_utc_now(),
    )
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO insights (id, user_email, date, metric, value_json, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                insight.id,
                insight.user_email,
                insight.date,
                insight.metric,
                json.dumps(insight.value, ensure_ascii=False),
                insight.created_at,
            ),
        )
    return insight


def list_insights(user_email: str) -> List[Insight]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM insights WHERE user_email = ? ORDER BY created_at DESC, rowid DESC",
            (user_email.lower().strip(),),
        ).fetchall()
        return [_row_to_insight(dict(r)) for r in rows]
