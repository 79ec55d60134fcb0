"""Scene snapshot + geometry descriptor models."""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, Field, model_validator


class Vec3(BaseModel):
    """3-vector in world space. Y is vertical."""

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @model_validator(mode="before")
    @classmethod
    def _accept_sequence(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            if len(value) != 3:
                raise ValueError(f"Vec3 needs 3 components, got {len(value)}")
            return {"x": value[0], "y": value[1], "z": value[2]}
        if isinstance(value, np.ndarray):
            return {"x": float(value[0]), "y": float(value[1]), "z": float(value[2])}
        return value

    def to_array(self) -> NDArray[np.float64]:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: NDArray[np.float64]) -> Vec3:
        return cls(x=float(arr[0]), y=float(arr[1]), z=float(arr[2]))

    def distance_to(self, other: Vec3) -> float:
        return float(np.linalg.norm(self.to_array() - other.to_array()))


UP = Vec3(x=0.0, y=1.0, z=0.0)


class SceneNode(BaseModel):
    """One positioned sub-object of a scene graph.

    A node is renderable when it carries vertices. Its local transform is
    ``matrix`` (row-major 4x4) when given, else translate(position) * scale(scale).
    """

    name: str = ""
    position: Vec3 = Field(default_factory=Vec3)
    scale: Vec3 = Field(default_factory=lambda: Vec3(x=1.0, y=1.0, z=1.0))
    matrix: list[list[float]] | None = None
    # Local-space vertices, each (x, y, z)
    vertices: list[tuple[float, float, float]] = Field(default_factory=list)
    visible: bool = True
    children: list[SceneNode] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_matrix(self) -> SceneNode:
        if self.matrix is not None:
            if len(self.matrix) != 4 or any(len(row) != 4 for row in self.matrix):
                raise ValueError("matrix must be 4x4")
        return self

    @property
    def renderable(self) -> bool:
        return len(self.vertices) > 0

    def local_matrix(self) -> NDArray[np.float64]:
        if self.matrix is not None:
            return np.array(self.matrix, dtype=np.float64)
        m = np.diag([self.scale.x, self.scale.y, self.scale.z, 1.0])
        m[:3, 3] = self.position.to_array()
        return m


class SceneSnapshot(BaseModel):
    """World-space scene graph handed to the analyzer."""

    root: SceneNode = Field(default_factory=SceneNode)


class CameraState(BaseModel):
    """Live camera: position, orbit-control target, vertical field of view."""

    position: Vec3
    target: Vec3
    fov: float = 50.0


# ---------------------------------------------------------------------------
# Geometry descriptor
# ---------------------------------------------------------------------------


class BoundingBox(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: Vec3
    max: Vec3
    center: Vec3
    size: Vec3

    @property
    def max_dimension(self) -> float:
        return max(self.size.x, self.size.y, self.size.z)


class BoundingSphere(BaseModel):
    model_config = ConfigDict(frozen=True)

    center: Vec3
    radius: float = 0.0


class Floor(BaseModel):
    model_config = ConfigDict(frozen=True)

    height: float = 0.0
    normal: Vec3 = UP


class SafeDistance(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: float = 0.0
    max: float = 0.0


class ModelOrientation(BaseModel):
    model_config = ConfigDict(frozen=True)

    front: Vec3 = Vec3(x=0.0, y=0.0, z=1.0)
    up: Vec3 = UP


class CameraSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    position: Vec3
    target: Vec3
    model_orientation: ModelOrientation = Field(default_factory=ModelOrientation)


class SceneGeometry(BaseModel):
    """Safety envelope derived from a scene snapshot. Recomputed, never mutated."""

    model_config = ConfigDict(frozen=True)

    bounding_box: BoundingBox
    bounding_sphere: BoundingSphere
    floor: Floor
    safe_distance: SafeDistance
    current_camera: CameraSnapshot | None = None
