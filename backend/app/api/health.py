"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.composer import get_registry
from app.dependencies import get_engine
from app.llm.engine import PathEngine
from app.llm.model_router import configured_providers
from app.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(engine: PathEngine = Depends(get_engine)) -> HealthResponse:
    config = engine.config
    return HealthResponse(
        status="ok",
        version="0.1.0",
        patterns_registered=get_registry().names(),
        provider=config.provider if config is not None else None,
        configured_providers=configured_providers(),
    )


@router.get("/patterns")
async def patterns() -> dict[str, str]:
    return {spec.name: spec.description for spec in get_registry().all()}
