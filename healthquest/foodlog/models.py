# -*- coding: utf-8 -*-
"""Food log — Pydantic models."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _check_iso_date(value: object) -> object:
    # Stored dates are compared as strings, so only the calendar YYYY-MM-DD form is accepted.
    if isinstance(value, str):
        v = value.strip()
        try:
            datetime.strptime(v, "%Y-%m-%d")
        except ValueError as exc:
            raise ValueError("date must be YYYY-MM-DD") from exc
        if len(v) != 10:
            raise ValueError("date must be YYYY-MM-DD")
        return v
    return value


class Meal(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=200)
    items: List[str] = Field(default_factory=list)
    total_calories: float = Field(
        0.0,
        ge=0,
        validation_alias=AliasChoices("total_calories", "totalCalories"),
        serialization_alias="totalCalories",
    )


class FoodLogIn(BaseModel):
    date: str = Field(..., description="YYYY-MM-DD")
    calories: Optional[float] = Field(0.0, ge=0)
    protein: Optional[float] = Field(0.0, ge=0)
    carbs: Optional[float] = Field(0.0, ge=0)
    fat: Optional[float] = Field(0.0, ge=0)
    meals: List[Meal] = Field(default_factory=list)

    @field_validator("date", mode="before")
    @classmethod
    def _date(cls, value: object) -> object:
        return _check_iso_date(value)


class FoodLogAddRequest(BaseModel):
    user_id: Optional[str] = Field(None, validation_alias=AliasChoices("user_id", "userId"))
    food_log: Optional[FoodLogIn] = Field(None, validation_alias=AliasChoices("food_log", "foodLog"))


class FoodLogAddResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    food_log_id: str = Field(..., alias="foodLogId")


class FoodLogEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    user_id: str = Field(..., alias="userId")
    date: str
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    meals: List[Meal] = []
    created_at: str = Field(..., alias="createdAt")


class DailyTotals(BaseModel):
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0


class DeletedFoodLog(BaseModel):
    id: str
    date: str
    calories: float
    protein: float


class FoodLogDeleteResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    deleted_food_log: DeletedFoodLog = Field(..., alias="deletedFoodLog")


class CleanupResult(BaseModel):
    cutoff: str = Field(..., description="Entries dated before this YYYY-MM-DD were removed")
    deleted: int = Field(0, ge=0)


class CleanupResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    deleted_count: CleanupResult = Field(..., alias="deletedCount")
