"""Camera path, compiled prompt and engine configuration models."""

from __future__ import annotations

import time

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.models.geometry import Vec3


class CameraKeyframe(BaseModel):
    position: Vec3
    target: Vec3
    duration: float = Field(..., gt=0, description="Seconds spent reaching this keyframe")


class RestrictedZone(BaseModel):
    """Axis-aligned box the camera may not enter."""

    min: Vec3
    max: Vec3

    def contains(self, point: Vec3) -> bool:
        return (
            self.min.x <= point.x <= self.max.x
            and self.min.y <= point.y <= self.max.y
            and self.min.z <= point.z <= self.max.z
        )


class CameraConstraints(BaseModel):
    """Constraint block carried by a compiled prompt. Heights are optional there."""

    min_distance: float
    max_distance: float
    min_height: float | None = None
    max_height: float | None = None
    max_speed: float
    restricted_zones: list[RestrictedZone] | None = None


class SafetyConstraints(BaseModel):
    min_distance: float
    max_distance: float
    min_height: float = 0.0
    max_height: float = 100.0
    max_speed: float
    restricted_zones: list[RestrictedZone] | None = None

    @model_validator(mode="after")
    def _check_bounds(self) -> SafetyConstraints:
        if self.min_distance > self.max_distance:
            raise ValueError("min_distance must not exceed max_distance")
        if self.min_height > self.max_height:
            raise ValueError("min_height must not exceed max_height")
        return self

    @classmethod
    def from_prompt(cls, constraints: CameraConstraints) -> SafetyConstraints:
        return cls(
            min_distance=constraints.min_distance,
            max_distance=constraints.max_distance,
            min_height=constraints.min_height if constraints.min_height is not None else 0.0,
            max_height=constraints.max_height if constraints.max_height is not None else 100.0,
            max_speed=constraints.max_speed,
            restricted_zones=constraints.restricted_zones,
        )


class PathMetadata(BaseModel):
    style: str = "unknown"
    focus: str = "unknown"
    safety_constraints: SafetyConstraints


class CameraPath(BaseModel):
    keyframes: list[CameraKeyframe]
    duration: float
    metadata: PathMetadata


class CompiledPrompt(BaseModel):
    """Structured request produced by the external prompt compiler."""

    system_message: str = ""
    user_message: str = ""
    constraints: CameraConstraints
    duration: float | None = Field(default=None, gt=0)
    style: str | None = None
    focus: str | None = None


class LLMEngineConfig(BaseModel):
    """Immutable engine configuration. Replaced wholesale on re-initialization."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    provider: str
    model: str | None = None  # provider default when None
    temperature: float = 0.7
    max_tokens: int = 2000
    timeout_seconds: float | None = 60.0
    default_duration: float = Field(default=10.0, gt=0)


class ValidationResult(BaseModel):
    is_valid: bool = True
    errors: list[str] = Field(default_factory=list)


class OperationMetrics(BaseModel):
    name: str
    duration: float  # milliseconds
    success: bool
    error: str | None = None


class PerformanceMetrics(BaseModel):
    start_time: float = Field(default_factory=time.time)
    end_time: float = Field(default_factory=time.time)
    duration: float = 0.0  # seconds between start_time and end_time
    operations: list[OperationMetrics] = Field(default_factory=list)
    average_response_time: float = 0.0  # milliseconds
