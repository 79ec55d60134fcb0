"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from app.models.camera_path import CameraKeyframe
from app.models.primitives import Primitive


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    patterns_registered: list[str] = Field(default_factory=list)
    provider: str | None = None
    configured_providers: list[str] = Field(default_factory=list)


class SafePositionResponse(BaseModel):
    safe: bool


class FallbackPathResponse(BaseModel):
    keyframes: list[CameraKeyframe]
    duration: float


class ComposeResponse(BaseModel):
    primitives: list[Primitive]
    durations: list[float] | None = None


class ProviderResponse(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    provider: str
    model: str | None = None
    supported: list[str] = Field(default_factory=list)
