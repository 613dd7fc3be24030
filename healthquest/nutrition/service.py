# -*- coding: utf-8 -*-
"""Food search and nutrition lookup with a local fallback when Nutritionix is unavailable."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .client import NutritionixClient, NutritionixError
from .models import FoodSearchResult, FoodSource

logger = logging.getLogger(__name__)


def _generic(name: str, qty: float, unit: str, item_id: str) -> Dict[str, Any]:
    return {
        "food_name": name,
        "brand_name": "Generic",
        "serving_qty": qty,
        "serving_unit": unit,
        "nix_item_id": item_id,
    }


FALLBACK_FOODS: List[Dict[str, Any]] = [
    _generic("Apple", 1, "medium", "513fceb475b8dbbc21002e24"),
    _generic("Banana", 1, "medium", "513fceb475b8dbbc21002e25"),
    _generic("Chicken Breast", 100, "g", "513fceb475b8dbbc21002e26"),
    _generic("Rice", 100, "g", "513fceb475b8dbbc21002e27"),
    _generic("Salmon", 100, "g", "513fceb475b8dbbc21002e28"),
    _generic("Broccoli", 100, "g", "513fceb475b8dbbc21002e29"),
    _generic("Eggs", 1, "large", "513fceb475b8dbbc21002e30"),
    _generic("Oatmeal", 100, "g", "513fceb475b8dbbc21002e31"),
    _generic("Milk", 240, "ml", "513fceb475b8dbbc21002e32"),
    _generic("Bread", 1, "slice", "513fceb475b8dbbc21002e33"),
    _generic("Yogurt", 170, "g", "513fceb475b8dbbc21002e34"),
    _generic("Spinach", 100, "g", "513fceb475b8dbbc21002e35"),
    _generic("Sweet Potato", 100, "g", "513fceb475b8dbbc21002e36"),
    _generic("Avocado", 1, "medium", "513fceb475b8dbbc21002e37"),
    _generic("Almonds", 28, "g", "513fceb475b8dbbc21002e38"),
    _generic("Greek Yogurt", 170, "g", "513fceb475b8dbbc21002e39"),
    _generic("Quinoa", 100, "g", "513fceb475b8dbbc21002e40"),
    _generic("Tuna", 100, "g", "513fceb475b8dbbc21002e41"),
    _generic("Carrots", 100, "g", "513fceb475b8dbbc21002e42"),
    _generic("Blueberries", 100, "g", "513fceb475b8dbbc21002e43"),
]

# Nutritionix attribute ids used by full_nutrients.
ATTR_PROTEIN = 203
ATTR_FAT = 204
ATTR_CARBS = 205
ATTR_ENERGY_KCAL = 208


def search_fallback_foods(query: str) -> List[Dict[str, Any]]:
    term = query.strip().lower()
    return [dict(food) for food in FALLBACK_FOODS if term in food["food_name"].lower()]


def fallback_nutrition(query: str) -> List[Dict[str, Any]]:
    term = query.strip().lower()
    return [
        {
            "food_name": term,
            "serving_qty": 1,
            "serving_unit": "serving",
            "nix_item_id": "fallback",
            "alt_measures": [],
            "photo": {"thumb": None},
            "tags": {"item": term},
            "brand_name": "Generic",
            "full_nutrients": [
                {"attr_id": ATTR_PROTEIN, "value": 100},
                {"attr_id": ATTR_FAT, "value": 10},
                {"attr_id": ATTR_CARBS, "value": 200},
                {"attr_id": ATTR_ENERGY_KCAL, "value": 1300},
            ],
        }
    ]


def _result(foods: List[Dict[str, Any]], source: FoodSource) -> FoodSearchResult:
    return FoodSearchResult(success=True, foods=foods, total=len(foods), source=source)


def search_foods(query: str, client: Optional[NutritionixClient]) -> FoodSearchResult:
    term = query.strip()
    logger.info('[FOOD SEARCH] Searching for: "%s"', term)
    if client is not None:
        try:
            foods = client.search_instant(term)
        except NutritionixError as exc:
            logger.warning("[FOOD SEARCH] Nutritionix API failed: %s, using fallback database", exc)
        else:
            logger.info('[FOOD SEARCH] Found %d foods from Nutritionix for "%s"', len(foods), term)
            return _result(foods, FoodSource.nutritionix)
    else:
        logger.info("[FOOD SEARCH] Nutritionix not configured, using fallback database")

    foods = search_fallback_foods(term)
    logger.info('[FOOD SEARCH] Found %d foods from fallback database for "%s"', len(foods), term)
    return _result(foods, FoodSource.fallback)


def lookup_nutrition(query: str, client: Optional[NutritionixClient]) -> FoodSearchResult:
    term = query.strip()
    logger.info('[FOOD NUTRITION] Getting nutrition for: "%s"', term)
    if client is not None:
        try:
            foods = client.natural_nutrients(term)
        except NutritionixError as exc:
            logger.warning("[FOOD NUTRITION] Nutritionix API failed: %s, using fallback nutrition data", exc)
        else:
            return _result(foods, FoodSource.nutritionix)

    return _result(fallback_nutrition(term), FoodSource.fallback)
