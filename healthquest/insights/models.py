# -*- coding: utf-8 -*-
"""Insights — Pydantic models."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class InsightCreateRequest(BaseModel):
    date: Optional[str] = Field(None, description="YYYY-MM-DD the insight refers to")
    metric: str = Field(..., min_length=1, max_length=100, description="e.g. 'calories', 'posture_score'")
    value: Any = None


class Insight(BaseModel):
    id: str
    user_email: str
    date: Optional[str] = None
    metric: str
    value: Any = None
    created_at: str
