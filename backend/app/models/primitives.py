"""Motion primitives, pattern arguments and the scene context composers see."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag

from app.models.geometry import BoundingBox, SceneGeometry

DurationRatio = Annotated[float, Field(gt=0, le=1)]


class _PrimitiveBase(BaseModel):
    duration_ratio: DurationRatio | None = None


class TruckParams(BaseModel):
    direction: Literal["left", "right"]
    distance_descriptor: str = "small"
    speed: str | None = None


class DollyParams(BaseModel):
    direction: Literal["forward", "backward"]
    distance_descriptor: str = "small"
    speed: str | None = None


class PedestalParams(BaseModel):
    direction: Literal["up", "down"]
    distance_descriptor: str = "small"
    speed: str | None = None


class TruckPrimitive(_PrimitiveBase):
    """Lateral move, camera orientation unchanged."""

    type: Literal["truck"] = "truck"
    parameters: TruckParams


class DollyPrimitive(_PrimitiveBase):
    """Move along the view axis."""

    type: Literal["dolly"] = "dolly"
    parameters: DollyParams


class PedestalPrimitive(_PrimitiveBase):
    """Vertical move, camera orientation unchanged."""

    type: Literal["pedestal"] = "pedestal"
    parameters: PedestalParams


class ExtensionPrimitive(_PrimitiveBase):
    """Any primitive kind without a typed variant yet (orbit, zoom, tilt...)."""

    type: str
    parameters: dict[str, Any] = Field(default_factory=dict)


_TYPED_KINDS = {"truck", "dolly", "pedestal"}


def _primitive_tag(value: Any) -> str:
    kind = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    return kind if kind in _TYPED_KINDS else "extension"


Primitive = Annotated[
    Union[
        Annotated[TruckPrimitive, Tag("truck")],
        Annotated[DollyPrimitive, Tag("dolly")],
        Annotated[PedestalPrimitive, Tag("pedestal")],
        Annotated[ExtensionPrimitive, Tag("extension")],
    ],
    Discriminator(_primitive_tag),
]

_OPPOSITE = {
    "left": "right",
    "right": "left",
    "forward": "backward",
    "backward": "forward",
    "up": "down",
    "down": "up",
}


def mirror_primitive(prim: TruckPrimitive | DollyPrimitive | PedestalPrimitive):
    """Same move with its direction inverted."""
    params = prim.parameters.model_copy(
        update={"direction": _OPPOSITE[prim.parameters.direction]}
    )
    return prim.model_copy(update={"parameters": params})


# ---------------------------------------------------------------------------
# Pattern arguments
# ---------------------------------------------------------------------------


class ZigzagArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")

    pattern: Literal["zigzag"] = "zigzag"
    segments: int = Field(default=4, ge=0)
    amplitude: str = "small"


class FlyByArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")

    pattern: Literal["fly_by"] = "fly_by"
    apex_height: str = "large"  # distance descriptor, or "none" to stay level
    speed: str = "fast"
    second_pass: bool = False


class SceneMeta(BaseModel):
    """Subset of SceneGeometry handed to composers."""

    bounding_box: BoundingBox
    object_radius: float

    @classmethod
    def from_geometry(cls, geometry: SceneGeometry) -> SceneMeta:
        return cls(
            bounding_box=geometry.bounding_box,
            object_radius=geometry.bounding_sphere.radius,
        )
