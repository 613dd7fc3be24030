# -*- coding: utf-8 -*-
"""
HealthQuest API

User profiles, food logging with stale-entry cleanup, food search with a local
fallback, and per-user insights.
"""

from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .app_db import init_app_db
from .config import settings
from .foodlog.api import router as foodlog_router
from .foodlog.cleanup import CleanupScheduler
from .insights.api import router as insights_router
from .nutrition.api import router as nutrition_router
from .users.api import router as users_router

logger = logging.getLogger(__name__)

app = FastAPI(
    title="HealthQuest API",
    description="Fitness tracking backend: profiles, food logs, food search and insights",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
    allow_headers=["Content-Type", "Authorization"],
)

cleanup_scheduler = CleanupScheduler()


@app.on_event("startup")
def _startup_init_db() -> None:
    init_app_db(settings.app_db_path)


@app.on_event("startup")
async def _startup_cleanup() -> None:
    if settings.foodlog_cleanup_enabled:
        cleanup_scheduler.start()
    else:
        logger.info("Scheduled food log cleanup disabled")


@app.on_event("shutdown")
async def _shutdown_cleanup() -> None:
    await cleanup_scheduler.stop()


# Ensure the app DB exists even when lifespan events are not triggered (e.g. some test clients).
init_app_db(settings.app_db_path)


@app.middleware("http")
async def _log_requests(request: Request, call_next):
    logger.info("%s %s", request.method, request.url.path)
    return await call_next(request)


_AVAILABLE_ROUTES = {
    "health": "GET /",
    "users": "GET /api/getUser",
    "createUser": "POST /api/createUser",
    "foodLog": "POST /api/foodentry/add",
    "foodSearch": "POST /api/foodentry/search",
    "insights": "GET /api/insights/{email}",
}


@app.exception_handler(StarletteHTTPException)
async def _route_not_found(request: Request, exc: StarletteHTTPException):
    # Only unmatched routes get the route listing; handler-raised 404s keep their detail.
    if exc.status_code == 404 and exc.detail == "Not Found":
        logger.info("404 - %s %s not found", request.method, request.url.path)
        return JSONResponse(
            status_code=404,
            content={
                "error": "Route not found",
                "method": request.method,
                "url": str(request.url.path),
                "availableRoutes": _AVAILABLE_ROUTES,
            },
        )
    return await http_exception_handler(request, exc)


app.include_router(users_router)
app.include_router(foodlog_router)
app.include_router(nutrition_router)
app.include_router(insights_router)


@app.get("/", include_in_schema=False)
def root():
    return {"message": "HealthQuest API is running!"}


# Browser client (dashboard, food log, onboarding pages) when shipped alongside the API.
if settings.public_dir.exists():
    app.mount("/Public", StaticFiles(directory=settings.public_dir, html=True), name="public")


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    host = os.environ.get("HEALTHQUEST_HOST") or os.environ.get("HOST") or "127.0.0.1"
    port_raw = os.environ.get("HEALTHQUEST_PORT") or os.environ.get("PORT") or "3001"
    try:
        port = int(port_raw)
    except ValueError:
        port = 3001

    uvicorn.run("healthquest.api:app", host=host, port=port, reload=False)
