# -*- coding: utf-8 -*-
"""Nutrition lookup — API endpoints (mounted next to the food log routes)."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from .client import client_from_settings
from .models import FoodQueryRequest, FoodSearchResult
from .service import lookup_nutrition, search_foods

router = APIRouter(prefix="/api/foodentry", tags=["Nutrition"])


@router.post("/search", response_model=FoodSearchResult, summary="Search foods (Nutritionix, local fallback)")
def search(request: FoodQueryRequest):
    if not request.query or not request.query.strip():
        raise HTTPException(status_code=400, detail="Search query is required")
    return search_foods(request.query, client_from_settings())


@router.post("/nutrition", response_model=FoodSearchResult, summary="Nutrition facts for a food query")
def nutrition(request: FoodQueryRequest):
    if not request.query or not request.query.strip():
        raise HTTPException(status_code=400, detail="Food query is required")
    return lookup_nutrition(request.query, client_from_settings())
