"""Scene Analyzer: derives the camera safety envelope from scene geometry.

Pure functions, no shared state. The vertical axis is fixed to +Y.
"""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import NDArray

from app.models.camera_path import CameraKeyframe
from app.models.geometry import (
    UP,
    BoundingBox,
    BoundingSphere,
    CameraSnapshot,
    CameraState,
    Floor,
    SafeDistance,
    SceneGeometry,
    SceneSnapshot,
    Vec3,
)
from app.scene.instructions import parse_orbit_instruction

logger = logging.getLogger(__name__)

# Heuristic multiples of the largest bounding dimension
MIN_SAFE_DISTANCE_FACTOR = 1.5
MAX_SAFE_DISTANCE_FACTOR = 5.0

FALLBACK_ORBIT_POINTS = 8


def collect_world_vertices(snapshot: SceneSnapshot) -> NDArray[np.float64]:
    """Walk the scene graph and return every visible renderable vertex in world space (Nx3)."""
    chunks: list[NDArray[np.float64]] = []
    stack = [(snapshot.root, np.eye(4))]
    while stack:
        node, parent_world = stack.pop()
        if not node.visible:
            continue
        world = parent_world @ node.local_matrix()
        if node.renderable:
            local = np.asarray(node.vertices, dtype=np.float64)
            homo = np.hstack([local, np.ones((len(local), 1))])
            chunks.append((homo @ world.T)[:, :3])
        for child in node.children:
            stack.append((child, world))

    if not chunks:
        return np.empty((0, 3))
    return np.vstack(chunks)


def analyze_scene(snapshot: SceneSnapshot, camera: CameraState | None = None) -> SceneGeometry:
    """Compute bounding box, enclosing sphere, floor and safe distance band."""
    points = collect_world_vertices(snapshot)

    if len(points) == 0:
        logger.debug("Scene has no renderable vertices, using an empty box at the origin")
        bmin = bmax = np.zeros(3)
    else:
        bmin = points.min(axis=0)
        bmax = points.max(axis=0)

    size = bmax - bmin
    center = (bmin + bmax) / 2.0
    # Sphere from the box, not the minimal enclosing sphere
    radius = float(np.linalg.norm(size)) / 2.0

    current_camera = None
    if camera is not None:
        current_camera = CameraSnapshot(position=camera.position, target=camera.target)

    box = BoundingBox(
        min=Vec3.from_array(bmin),
        max=Vec3.from_array(bmax),
        center=Vec3.from_array(center),
        size=Vec3.from_array(size),
    )
    max_dim = box.max_dimension

    geometry = SceneGeometry(
        bounding_box=box,
        bounding_sphere=BoundingSphere(center=Vec3.from_array(center), radius=radius),
        floor=Floor(height=float(bmin[1]), normal=UP),
        safe_distance=SafeDistance(
            min=max_dim * MIN_SAFE_DISTANCE_FACTOR,
            max=max_dim * MAX_SAFE_DISTANCE_FACTOR,
        ),
        current_camera=current_camera,
    )
    logger.debug(
        "Analyzed scene: %d vertices, radius %.3f, safe band [%.3f, %.3f]",
        len(points),
        radius,
        geometry.safe_distance.min,
        geometry.safe_distance.max,
    )
    return geometry


def is_safe_camera_position(position: Vec3, target: Vec3, geometry: SceneGeometry) -> bool:
    """True when ``position`` is inside the distance band and not below the floor.

    ``target`` is accepted for call-site symmetry and not evaluated.
    """
    distance = position.distance_to(geometry.bounding_sphere.center)
    if distance < geometry.safe_distance.min:
        return False
    if distance > geometry.safe_distance.max:
        return False
    if position.y < geometry.floor.height:
        return False
    return True


def generate_safe_keyframes(
    geometry: SceneGeometry,
    instruction: str = "",
    num_points: int = FALLBACK_ORBIT_POINTS,
) -> list[CameraKeyframe]:
    """Fallback orbit around the model, used when no generative backend is available.

    Produces ``num_points + 1`` keyframes (``num_points`` is at least 1): evenly spaced waypoints over the
    sweep, the last closing the arc. The instruction tunes direction, sweep,
    distance, height and pacing; the orbit is kept inside the safety envelope.
    """
    num_points = max(num_points, 1)
    spec = parse_orbit_instruction(instruction)
    center = geometry.bounding_box.center
    radius = geometry.bounding_sphere.radius

    horizontal = radius * spec.distance_scale
    lift = radius * spec.height_ratio
    distance = math.hypot(horizontal, lift)

    band = geometry.safe_distance
    clamped = min(max(distance, band.min), band.max) if band.max > 0 else distance
    if distance > 0 and clamped != distance:
        scale = clamped / distance
        horizontal *= scale
        lift *= scale
        logger.debug("Fallback orbit distance %.3f clamped to %.3f", distance, clamped)

    # Never below the floor
    y = max(center.y + lift, geometry.floor.height)

    keyframes: list[CameraKeyframe] = []
    for i in range(num_points + 1):
        angle = spec.direction * (i / num_points) * spec.sweep
        keyframes.append(
            CameraKeyframe(
                position=Vec3(
                    x=center.x + math.sin(angle) * horizontal,
                    y=y,
                    z=center.z + math.cos(angle) * horizontal,
                ),
                target=center,
                duration=spec.seconds_per_keyframe,
            )
        )
    return keyframes
