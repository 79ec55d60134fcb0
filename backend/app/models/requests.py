"""API request models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.models.camera_path import CameraPath, CompiledPrompt
from app.models.geometry import CameraState, SceneGeometry, SceneSnapshot, Vec3


class SceneAnalyzeRequest(BaseModel):
    scene: SceneSnapshot
    camera: CameraState | None = Field(default=None, description="Live camera, if one is attached")


class SafePositionRequest(BaseModel):
    position: Vec3
    target: Vec3
    geometry: SceneGeometry


class FallbackPathRequest(BaseModel):
    geometry: SceneGeometry
    instruction: str = Field(default="", description="Free-text shot instruction, e.g. 'slow wide orbit'")
    num_points: int = Field(default=8, ge=1, le=64)


class ComposeRequest(BaseModel):
    pattern: dict[str, Any] = Field(..., description="Pattern descriptor with a 'pattern' tag")
    geometry: SceneGeometry
    total_duration: float | None = Field(default=None, gt=0, description="Seconds to spread over the primitives")


class CameraPathRequest(BaseModel):
    prompt: CompiledPrompt
    timeout_seconds: float | None = Field(default=None, gt=0)


class ValidatePathRequest(BaseModel):
    path: CameraPath
    geometry: SceneGeometry | None = None


class SwitchProviderRequest(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    provider: str = Field(..., description="anthropic, openai or gemini")
    model: str | None = Field(default=None, description="Model id; settings default when omitted")
    temperature: float | None = None
    max_tokens: int | None = None
    timeout_seconds: float | None = None


class LockRequest(BaseModel):
    locked: bool
    scene: SceneSnapshot | None = None
    camera: CameraState | None = None
