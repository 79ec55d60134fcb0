"""FastAPI dependency injection."""

from __future__ import annotations

from functools import lru_cache

from app.capture.store import JsonMetadataStore
from app.capture.workflow import CaptureWorkflow
from app.config import Settings, settings
from app.llm.engine import PathEngine
from app.llm.model_router import get_model_for_provider
from app.models.camera_path import LLMEngineConfig


def get_settings() -> Settings:
    return settings


def engine_config_from_settings(s: Settings, provider: str | None = None) -> LLMEngineConfig:
    provider = provider or s.llm_provider
    return LLMEngineConfig(
        provider=provider,
        model=get_model_for_provider(provider),
        temperature=s.llm_temperature,
        max_tokens=s.llm_max_tokens,
        timeout_seconds=s.llm_timeout_seconds,
        default_duration=s.default_path_duration,
    )


@lru_cache
def get_engine() -> PathEngine:
    """Process-wide engine handle, initialized from settings on first use."""
    return PathEngine(engine_config_from_settings(settings))


@lru_cache
def get_capture() -> CaptureWorkflow:
    return CaptureWorkflow(JsonMetadataStore(settings.metadata_dir))
