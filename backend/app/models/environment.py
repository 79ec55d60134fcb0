"""Environmental metadata: the locked camera/lighting/constraint record per model."""

from __future__ import annotations

import time

from pydantic import BaseModel, ConfigDict, Field

from app.models.geometry import Vec3


class Lighting(BaseModel):
    intensity: float = 1.0
    color: str = "#ffffff"
    position: Vec3 = Vec3(x=0.0, y=10.0, z=0.0)


class CameraSetup(BaseModel):
    position: Vec3
    target: Vec3
    fov: float


class SceneLook(BaseModel):
    background: str = "#000000"
    ground: str = "#808080"
    atmosphere: str = "#87CEEB"


class Dimensions(BaseModel):
    width: float = 0.0
    height: float = 0.0
    depth: float = 0.0


class Bounds(BaseModel):
    min: Vec3
    max: Vec3
    center: Vec3
    dimensions: Dimensions


class EnvironmentConstraints(BaseModel):
    min_distance: float
    max_distance: float
    min_height: float
    max_height: float
    max_speed: float = 2.0
    max_angle_change: float = 45.0  # degrees
    min_framing_margin: float = 0.1


class EnvironmentalMetadata(BaseModel):
    lighting: Lighting = Field(default_factory=Lighting)
    camera: CameraSetup
    scene: SceneLook = Field(default_factory=SceneLook)
    constraints: EnvironmentConstraints
    bounds: Bounds | None = None
    updated_at: float = Field(default_factory=time.time)


class CaptureOutcome(BaseModel):
    """What a lock toggle did."""

    model_config = ConfigDict(protected_namespaces=())

    model_id: str
    locked: bool
    captured: bool = False
    record: EnvironmentalMetadata | None = None
    reason: str = ""
