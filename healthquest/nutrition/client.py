# -*- coding: utf-8 -*-
"""Nutritionix v2 API client (instant search + natural-language nutrients)."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from ..config import settings


class NutritionixError(RuntimeError):
    """Raised for any failed Nutritionix call: transport, HTTP status or payload."""


class NutritionixClient:
    def __init__(
        self,
        *,
        app_id: str,
        app_key: str,
        base_url: str = "https://trackapi.nutritionix.com/v2",
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.app_id = app_id
        self.app_key = app_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-app-id": self.app_id,
            "x-app-key": self.app_key,
        }

    def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                resp = client.post(url, headers=self._headers(), json=payload)
        except httpx.HTTPError as exc:
            raise NutritionixError(f"Nutritionix request failed: {exc}") from exc

        if resp.status_code < 200 or resp.status_code >= 300:
            raise NutritionixError(f"Nutritionix API error: {resp.status_code} {resp.reason_phrase}")
        try:
            data = resp.json()
        except ValueError as exc:
            raise NutritionixError("Failed to parse response data") from exc
        if not isinstance(data, dict):
            raise NutritionixError("Unexpected Nutritionix payload")
        return data

    def search_instant(self, query: str) -> List[Dict[str, Any]]:
        """Instant search; common foods first, then branded ones."""
        data = self._post("/search/instant", {"query": query, "detailed": True})
        return list(data.get("common") or []) + list(data.get("branded") or [])

    def natural_nutrients(self, query: str) -> List[Dict[str, Any]]:
        data = self._post("/natural/nutrients", {"query": query})
        return list(data.get("foods") or [])


def client_from_settings() -> Optional[NutritionixClient]:
    if not settings.nutritionix_configured:
        return None
    return NutritionixClient(
        app_id=str(settings.nutritionix_app_id),
        app_key=str(settings.nutritionix_app_key),
        base_url=settings.nutritionix_base_url,
        timeout=settings.nutritionix_timeout,
    )
