# -*- coding: utf-8 -*-
"""Nutrition lookup — Pydantic models."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, Field


class FoodQueryRequest(BaseModel):
    query: str | None = Field(None, max_length=500, description="Free text, e.g. 'apple' or '1 cup rice'")


class FoodSource(str, Enum):
    nutritionix = "nutritionix"
    fallback = "fallback"


class FoodSearchResult(BaseModel):
    """Envelope shared by search and nutrition lookups.

    ``foods`` keeps the upstream Nutritionix item shape untouched so the client
    can read ``food_name``/``nf_calories``/``full_nutrients`` the same way for
    live and fallback results.
    """

    success: bool = True
    foods: List[Dict[str, Any]] = Field(default_factory=list)
    total: int = Field(0, ge=0)
    source: FoodSource
