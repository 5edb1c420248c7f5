"""Root API router for v1 endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from app.api.v1 import admin, auth, health, portal, survey

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(survey.router)
api_router.include_router(portal.router)
api_router.include_router(admin.router)


def get_api_router() -> APIRouter:
    return api_router
