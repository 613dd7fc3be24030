# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import os
import shutil
import sys
import tempfile
import unittest
from pathlib import Path

import httpx
from fastapi.testclient import TestClient

from healthquest.nutrition.client import NutritionixClient, NutritionixError
from healthquest.nutrition.models import FoodSource
from healthquest.nutrition.service import (
    FALLBACK_FOODS,
    lookup_nutrition,
    search_fallback_foods,
    search_foods,
)


def _client(handler) -> NutritionixClient:
    return NutritionixClient(
        app_id="app-id",
        app_key="app-key",
        base_url="https://nutritionix.test/v2/",
        transport=httpx.MockTransport(handler),
    )


class TestNutritionixClient(unittest.TestCase):
    def test_search_instant_merges_common_and_branded(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["headers"] = request.headers
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={
                    "common": [{"food_name": "apple"}],
                    "branded": [{"food_name": "Apple Chips", "brand_name": "Crunch"}],
                },
            )

        foods = _client(handler).search_instant("apple")
        self.assertEqual([f["food_name"] for f in foods], ["apple", "Apple Chips"])
        self.assertEqual(seen["url"], "https://nutritionix.test/v2/search/instant")
        self.assertEqual(seen["headers"]["x-app-id"], "app-id")
        self.assertEqual(seen["headers"]["x-app-key"], "app-key")
        self.assertEqual(seen["body"], {"query": "apple", "detailed": True})

    def test_natural_nutrients(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            self.assertEqual(request.url.path, "/v2/natural/nutrients")
            self.assertEqual(json.loads(request.content), {"query": "1 cup rice"})
            return httpx.Response(200, json={"foods": [{"food_name": "rice", "nf_calories": 205}]})

        foods = _client(handler).natural_nutrients("1 cup rice")
        self.assertEqual(foods, [{"food_name": "rice", "nf_calories": 205}])

    def test_missing_lists_are_empty(self) -> None:
        foods = _client(lambda request: httpx.Response(200, json={})).search_instant("x")
        self.assertEqual(foods, [])

    def test_http_error_status(self) -> None:
        client = _client(lambda request: httpx.Response(401, json={"message": "unauthorized"}))
        with self.assertRaises(NutritionixError) as ctx:
            client.search_instant("apple")
        self.assertIn("401", str(ctx.exception))

    def test_non_json_body(self) -> None:
        client = _client(lambda request: httpx.Response(200, text="<html>oops</html>"))
        with self.assertRaises(NutritionixError):
            client.natural_nutrients("apple")

    def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with self.assertRaises(NutritionixError):
            _client(handler).search_instant("apple")


class TestFoodSearchFallback(unittest.TestCase):
    def test_fallback_list(self) -> None:
        self.assertEqual(len(FALLBACK_FOODS), 20)
        names = [f["food_name"] for f in search_fallback_foods("  YOGURT ")]
        self.assertEqual(names, ["Yogurt", "Greek Yogurt"])
        self.assertEqual(search_fallback_foods("pizza"), [])

    def test_search_uses_nutritionix_when_available(self) -> None:
        client = _client(lambda request: httpx.Response(200, json={"common": [{"food_name": "kiwi"}]}))
        result = search_foods(" kiwi ", client)
        self.assertEqual(result.source, FoodSource.nutritionix)
        self.assertEqual(result.total, 1)

    def test_search_falls_back_on_api_failure(self) -> None:
        client = _client(lambda request: httpx.Response(503))
        result = search_foods("rice", client)
        self.assertTrue(result.success)
        self.assertEqual(result.source, FoodSource.fallback)
        self.assertEqual([f["food_name"] for f in result.foods], ["Rice"])
        self.assertEqual(result.total, 1)

    def test_search_without_client_uses_fallback(self) -> None:
        result = search_foods("ea", None)
        self.assertEqual(result.source, FoodSource.fallback)
        self.assertEqual([f["food_name"] for f in result.foods], ["Chicken Breast", "Oatmeal", "Bread"])

    def test_fallback_results_are_copies(self) -> None:
        result = search_foods("apple", None)
        result.foods[0]["food_name"] = "changed"
        self.assertEqual(FALLBACK_FOODS[0]["food_name"], "Apple")

    def test_lookup_fallback_item(self) -> None:
        result = lookup_nutrition("  Mango ", _client(lambda request: httpx.Response(500)))
        self.assertEqual(result.source, FoodSource.fallback)
        self.assertEqual(result.total, 1)
        food = result.foods[0]
        self.assertEqual(food["food_name"], "mango")
        nutrients = {n["attr_id"]: n["value"] for n in food["full_nutrients"]}
        self.assertEqual(nutrients, {203: 100, 204: 10, 205: 200, 208: 1300})


class TestNutritionApi(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls._tmp = Path(tempfile.mkdtemp(prefix="healthquest-test-"))
        data_root = cls._tmp / "data"
        os.environ["HEALTHQUEST_DATA_ROOT"] = str(data_root)
        os.environ["HEALTHQUEST_DB_PATH"] = str(data_root / "healthquest.db")
        os.environ["FOODLOG_CLEANUP_ENABLED"] = "false"
        # Configured but unreachable: the API must fail fast and fall back.
        os.environ["NUTRITIONIX_APP_ID"] = "test-app"
        os.environ["NUTRITIONIX_APP_KEY"] = "test-key"
        os.environ["NUTRITIONIX_BASE_URL"] = "http://127.0.0.1:1/v2"
        os.environ["NUTRITIONIX_TIMEOUT"] = "2"

        for name in list(sys.modules.keys()):
            if name == "healthquest" or name.startswith("healthquest."):
                sys.modules.pop(name, None)

        from healthquest.api import app  # noqa: WPS433

        cls.client = TestClient(app)

    @classmethod
    def tearDownClass(cls) -> None:
        cls.client.close()
        for key in ("NUTRITIONIX_APP_ID", "NUTRITIONIX_APP_KEY", "NUTRITIONIX_BASE_URL", "NUTRITIONIX_TIMEOUT"):
            os.environ.pop(key, None)
        shutil.rmtree(cls._tmp, ignore_errors=True)

    def test_search_requires_query(self) -> None:
        for body in ({}, {"query": ""}, {"query": "   "}):
            resp = self.client.post("/api/foodentry/search", json=body)
            self.assertEqual(resp.status_code, 400)
            self.assertEqual(resp.json()["detail"], "Search query is required")

    def test_nutrition_requires_query(self) -> None:
        resp = self.client.post("/api/foodentry/nutrition", json={"query": " "})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "Food query is required")

    def test_search_falls_back_when_api_unreachable(self) -> None:
        resp = self.client.post("/api/foodentry/search", json={"query": "chicken"})
        self.assertEqual(resp.status_code, 200)
        payload = resp.json()
        self.assertEqual(payload["source"], "fallback")
        self.assertEqual(payload["total"], 1)
        self.assertEqual(payload["foods"][0]["food_name"], "Chicken Breast")

    def test_nutrition_falls_back_when_api_unreachable(self) -> None:
        resp = self.client.post("/api/foodentry/nutrition", json={"query": "Oatmeal"})
        self.assertEqual(resp.status_code, 200)
        payload = resp.json()
        self.assertEqual(payload["source"], "fallback")
        self.assertEqual(payload["foods"][0]["food_name"], "oatmeal")


if __name__ == "__main__":
    unittest.main()
