"""Engine configuration + metrics endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from app.config import Settings
from app.dependencies import engine_config_from_settings, get_engine, get_settings
from app.errors import UNSUPPORTED_PROVIDER, UnsupportedCapability
from app.llm.engine import PathEngine
from app.models.camera_path import PerformanceMetrics
from app.models.requests import SwitchProviderRequest
from app.models.responses import ProviderResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/llm")


@router.post("/switch-provider", response_model=ProviderResponse)
async def switch_provider(
    req: SwitchProviderRequest,
    engine: PathEngine = Depends(get_engine),
    settings: Settings = Depends(get_settings),
) -> ProviderResponse:
    if req.provider not in engine.supported_providers:
        error = UnsupportedCapability(f"Unsupported provider type: {req.provider}", code=UNSUPPORTED_PROVIDER)
        raise HTTPException(status_code=400, detail=error.to_dict())

    base = engine_config_from_settings(settings, req.provider)
    overrides = req.model_dump(exclude={"provider"}, exclude_none=True)
    config = base.model_copy(update=overrides)
    engine.initialize(config)
    logger.info("Switched path engine provider to %s", config.provider)

    return ProviderResponse(provider=config.provider, model=config.model, supported=engine.supported_providers)


@router.get("/provider", response_model=ProviderResponse)
async def current_provider(engine: PathEngine = Depends(get_engine)) -> ProviderResponse:
    config = engine.config
    if config is None:
        raise HTTPException(status_code=503, detail="Path engine not initialized")
    return ProviderResponse(provider=config.provider, model=config.model, supported=engine.supported_providers)


@router.get("/metrics", response_model=PerformanceMetrics)
async def metrics(engine: PathEngine = Depends(get_engine)) -> PerformanceMetrics:
    return engine.get_performance_metrics()
