# -*- coding: utf-8 -*-
"""
GlucoWise API

Meal, blood sugar and activity logging with daily rollups, HbA1c estimation
and next-meal suggestions.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .app_db import init_app_db
from .auth.api import router as auth_router
from .auth.security import get_current_user_from_request
from .config import settings
from .insights.api import router as insights_router
from .profile.api import router as profile_router
from .reminders.api import router as reminders_router
from .tracking.api import router as tracking_router

logger = logging.getLogger(__name__)

app = FastAPI(
    title="GlucoWise",
    description="Diabetes self-management: meals, blood sugar, activity and insights",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Created at import so test clients that skip lifespan events still get a schema.
init_app_db(settings.app_db_path)
logger.info("App database ready at %s", settings.app_db_path)


_AUTH_EXEMPT_PREFIXES = (
    "/api/auth/login",
    "/api/auth/register",
    "/api/docs",
    "/api/redoc",
    "/api/openapi.json",
)


@app.middleware("http")
async def _auth_gate(request: Request, call_next):
    path = request.url.path
    if path.startswith("/api") and path != "/api/health" and not any(path.startswith(p) for p in _AUTH_EXEMPT_PREFIXES):
        try:
            request.state.user = get_current_user_from_request(request)
        except HTTPException as exc:
            return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
    return await call_next(request)


app.include_router(auth_router)
app.include_router(profile_router)
app.include_router(tracking_router)
app.include_router(insights_router)
app.include_router(reminders_router)


@app.get("/api/health")
def health() -> dict:
    return {"ok": True}
