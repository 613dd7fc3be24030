# -*- coding: utf-8 -*-
"""Food log — API endpoints."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Query

from ..users.storage import get_user_by_id
from .models import (
    CleanupResponse,
    DailyTotals,
    DeletedFoodLog,
    FoodLogAddRequest,
    FoodLogAddResponse,
    FoodLogDeleteResponse,
    FoodLogEntry,
)
from .storage import (
    create_food_log,
    delete_food_log,
    delete_stale_food_logs,
    get_daily_totals,
    list_food_logs,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/foodentry", tags=["Food log"])


@router.post("/add", response_model=FoodLogAddResponse, summary="Add a food log entry")
def add_food_log(request: FoodLogAddRequest):
    if not request.user_id or request.food_log is None:
        raise HTTPException(status_code=400, detail="Missing userId or foodLog")

    user = get_user_by_id(request.user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    try:
        entry = create_food_log(user["id"], request.food_log)
    except Exception as exc:
        logger.error("Error saving food log for %s: %s", user["email"], exc, exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to save food log: {exc}") from exc
    logger.info("Food log %s saved for %s (%s)", entry.id, user["email"], entry.date)

    try:
        delete_stale_food_logs()
    except Exception as exc:
        logger.warning("Failed to clean up old food logs: %s", exc)

    return FoodLogAddResponse(message="Food log saved successfully", food_log_id=entry.id)


@router.get("/user/{user_id}", response_model=List[FoodLogEntry], summary="List food logs for a user")
def user_food_logs(
    user_id: str,
    date: str | None = Query(default=None, description="YYYY-MM-DD"),
):
    return list_food_logs(user_id, date=date)


@router.get("/daily-totals/{user_id}", response_model=DailyTotals, summary="Daily nutrition totals for a user")
def daily_totals(
    user_id: str,
    date: str | None = Query(default=None, description="YYYY-MM-DD"),
):
    if not date:
        raise HTTPException(status_code=400, detail="Date parameter is required")
    return get_daily_totals(user_id, date)


@router.delete("/delete/{food_log_id}", response_model=FoodLogDeleteResponse, summary="Delete a food log entry")
def delete(
    food_log_id: str,
    user_id: str = Query(..., alias="userId", min_length=1),
):
    deleted = delete_food_log(user_id, food_log_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Food log not found")
    logger.info("Food log %s deleted for user %s", food_log_id, user_id)
    return FoodLogDeleteResponse(
        message="Food log deleted successfully",
        deleted_food_log=DeletedFoodLog(
            id=deleted.id,
            date=deleted.date,
            calories=deleted.calories,
            protein=deleted.protein,
        ),
    )


@router.post("/cleanup-old-logs", response_model=CleanupResponse, summary="Delete stale food logs now")
def cleanup_old_logs():
    try:
        result = delete_stale_food_logs()
    except Exception as exc:
        logger.error("Error during manual cleanup: %s", exc, exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to clean up old food logs: {exc}") from exc
    return CleanupResponse(message="Old food logs cleaned up successfully", deleted_count=result)
