"""Shared test fixtures."""

from __future__ import annotations

import pytest

from app.models.camera_path import CameraConstraints, CompiledPrompt, LLMEngineConfig
from app.models.geometry import CameraState, SceneNode, SceneSnapshot, Vec3
from app.scene import analyze_scene


def cube_vertices(half: float = 1.0) -> list[tuple[float, float, float]]:
    return [
        (x, y, z)
        for x in (-half, half)
        for y in (-half, half)
        for z in (-half, half)
    ]


# Side-2 cube centered on the origin: radius sqrt(3), safe band [3, 10]
CUBE_SCENE = SceneSnapshot(root=SceneNode(name="root", children=[SceneNode(name="cube", vertices=cube_vertices())]))

# Flat plate, 4 wide, 0.5 tall, 2 deep, lifted so its base sits on y=1
PLATE_SCENE = SceneSnapshot(
    root=SceneNode(
        name="plate",
        position=Vec3(x=0.0, y=1.25, z=0.0),
        scale=Vec3(x=2.0, y=0.25, z=1.0),
        vertices=cube_vertices(),
    )
)

# Group translated by (10, 0, 0); its child scaled by 2 and translated by (0, 1, 0)
NESTED_SCENE = SceneSnapshot(
    root=SceneNode(
        name="root",
        children=[
            SceneNode(
                name="group",
                position=Vec3(x=10.0, y=0.0, z=0.0),
                children=[
                    SceneNode(
                        name="mesh",
                        position=Vec3(x=0.0, y=1.0, z=0.0),
                        scale=Vec3(x=2.0, y=2.0, z=2.0),
                        vertices=cube_vertices(0.5),
                    ),
                    SceneNode(name="hidden", visible=False, vertices=[(100.0, 100.0, 100.0)]),
                ],
            )
        ],
    )
)

EMPTY_SCENE = SceneSnapshot(root=SceneNode(name="empty"))

CAMERA = CameraState(position=Vec3(x=0.0, y=2.0, z=6.0), target=Vec3(), fov=50.0)


def make_prompt(**overrides) -> CompiledPrompt:
    fields = {
        "system_message": "You are a cinematographer.",
        "user_message": "Slow orbit around the product.",
        "constraints": CameraConstraints(min_distance=2.0, max_distance=20.0, max_speed=5.0),
        "duration": 6.0,
        "style": "cinematic",
        "focus": "product",
    }
    fields.update(overrides)
    return CompiledPrompt(**fields)


@pytest.fixture
def cube_scene() -> SceneSnapshot:
    return CUBE_SCENE


@pytest.fixture
def plate_scene() -> SceneSnapshot:
    return PLATE_SCENE


@pytest.fixture
def nested_scene() -> SceneSnapshot:
    return NESTED_SCENE


@pytest.fixture
def empty_scene() -> SceneSnapshot:
    return EMPTY_SCENE


@pytest.fixture
def camera() -> CameraState:
    return CAMERA


@pytest.fixture
def cube_geometry():
    return analyze_scene(CUBE_SCENE)


@pytest.fixture
def prompt() -> CompiledPrompt:
    return make_prompt()


@pytest.fixture
def engine_config() -> LLMEngineConfig:
    return LLMEngineConfig(provider="fake", model="fake-1", timeout_seconds=5.0)
