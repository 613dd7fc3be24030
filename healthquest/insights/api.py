# -*- coding: utf-8 -*-
"""Insights — API endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException

from ..users.storage import get_user_by_email
from .models import Insight, InsightCreateRequest
from .storage import create_insight, list_insights

router = APIRouter(prefix="/api/insights", tags=["Insights"])


@router.get("/{email}", response_model=List[Insight], summary="List insights for a user")
def get_insights(email: str):
    insights = list_insights(email)
    if not insights:
        raise HTTPException(status_code=404, detail="No insights found for this user")
    return insights


@router.post("/{email}", response_model=Insight, summary="Record an insight for a user")
def add_insight(email: str, request: InsightCreateRequest):
    if not get_user_by_email(email):
        raise HTTPException(status_code=404, detail="User not found")
    return create_insight(email, request)
