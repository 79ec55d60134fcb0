"""Master API router: mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from app.api import camera_path, capture, compose, health, llm, scene

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(scene.router)
api_router.include_router(compose.router)
api_router.include_router(camera_path.router)
api_router.include_router(llm.router)
api_router.include_router(capture.router)
