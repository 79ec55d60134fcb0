"""Environmental Capture: snapshot and persist the locked camera/lighting setup.

A lock toggle on a model analyzes the live scene, assembles an
EnvironmentalMetadata record and upserts it. The read-then-write against the
store runs under a per-model ``asyncio.Lock``, so concurrent captures for one
model insert once and update afterwards. The lock is per process; a store
shared between processes needs its own atomic upsert.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Callable

from app.capture.store import MetadataStore
from app.errors import NOT_FOUND, PersistenceError
from app.models.environment import (
    Bounds,
    CameraSetup,
    CaptureOutcome,
    Dimensions,
    EnvironmentalMetadata,
    EnvironmentConstraints,
    Lighting,
    SceneLook,
)
from app.models.geometry import CameraState, SceneGeometry, SceneSnapshot
from app.models.result import Result
from app.scene.analyzer import analyze_scene

logger = logging.getLogger(__name__)

Analyzer = Callable[[SceneSnapshot, CameraState], SceneGeometry]


def build_environmental_metadata(geometry: SceneGeometry, camera: CameraState) -> EnvironmentalMetadata:
    """Fixed lighting/scene defaults + live camera + geometry-derived bounds."""
    box = geometry.bounding_box
    return EnvironmentalMetadata(
        lighting=Lighting(),
        camera=CameraSetup(position=camera.position, target=camera.target, fov=camera.fov),
        scene=SceneLook(),
        constraints=EnvironmentConstraints(
            min_distance=geometry.safe_distance.min,
            max_distance=geometry.safe_distance.max,
            min_height=geometry.floor.height,
            max_height=box.max.y,
        ),
        bounds=Bounds(
            min=box.min,
            max=box.max,
            center=box.center,
            dimensions=Dimensions(width=box.size.x, height=box.size.y, depth=box.size.z),
        ),
    )


class CaptureWorkflow:
    """Lock-toggle driven capture of environmental metadata per model."""

    def __init__(self, store: MetadataStore, analyzer: Analyzer = analyze_scene) -> None:
        self.store = store
        self._analyze = analyzer
        # model id -> (lock, tasks holding or waiting on it); dropped when unused
        self._locks: dict[str, tuple[asyncio.Lock, int]] = {}
        self._locked: set[str] = set()

    def is_locked(self, model_id: str) -> bool:
        return model_id in self._locked

    @asynccontextmanager
    async def _model_lock(self, model_id: str) -> AsyncIterator[None]:
        lock, users = self._locks.get(model_id, (None, 0))
        if lock is None:
            lock = asyncio.Lock()
        self._locks[model_id] = (lock, users + 1)
        try:
            async with lock:
                yield
        finally:
            _, users = self._locks[model_id]
            if users <= 1:
                del self._locks[model_id]
            else:
                self._locks[model_id] = (lock, users - 1)

    async def toggle_lock(
        self,
        model_id: str,
        locked: bool,
        scene: SceneSnapshot | None = None,
        camera: CameraState | None = None,
    ) -> Result[CaptureOutcome]:
        """Apply a lock toggle. Only the unlocked → locked transition captures."""
        if not model_id:
            return Result.ok(CaptureOutcome(model_id="", locked=False, reason="no model id"))

        async with self._model_lock(model_id):
            was_locked = self.is_locked(model_id)

            if not locked:
                self._locked.discard(model_id)
                if was_locked:
                    logger.info("Unlocked model %s", model_id)
                return Result.ok(
                    CaptureOutcome(
                        model_id=model_id,
                        locked=False,
                        reason="unlocked" if was_locked else "already unlocked",
                    )
                )

            if was_locked:
                return Result.ok(CaptureOutcome(model_id=model_id, locked=True, reason="already locked"))

            if scene is None or camera is None:
                logger.info("Lock requested for %s without scene or camera, nothing captured", model_id)
                return Result.ok(
                    CaptureOutcome(model_id=model_id, locked=False, reason="scene or camera unavailable")
                )

            result = await self._capture_locked(model_id, scene, camera)
            if result.error is not None:
                return Result.fail(result.error)

            self._locked.add(model_id)
            return Result.ok(
                CaptureOutcome(model_id=model_id, locked=True, captured=True, record=result.data)
            )

    async def capture(
        self,
        model_id: str,
        scene: SceneSnapshot,
        camera: CameraState,
    ) -> Result[EnvironmentalMetadata]:
        """Analyze + upsert regardless of lock state."""
        async with self._model_lock(model_id):
            return await self._capture_locked(model_id, scene, camera)

    async def _capture_locked(
        self,
        model_id: str,
        scene: SceneSnapshot,
        camera: CameraState,
    ) -> Result[EnvironmentalMetadata]:
        # numpy work off the event loop
        geometry = await asyncio.to_thread(self._analyze, scene, camera)
        record = build_environmental_metadata(geometry, camera)

        try:
            existing = await self.store.get_environmental_metadata(model_id)
            if existing is None:
                await self.store.store_environmental_metadata(model_id, record)
            else:
                await self.store.update_environmental_metadata(model_id, record)
        except PersistenceError as e:
            logger.error("Failed to persist environmental metadata for %s: %s", model_id, e)
            return Result.fail(e)
        except Exception as e:
            logger.exception("Metadata store failed for %s", model_id)
            return Result.fail(PersistenceError(f"Metadata store failed for model {model_id}: {e}"))

        logger.info("Captured environmental metadata for model %s", model_id)
        return Result.ok(record)

    async def load(self, model_id: str) -> Result[EnvironmentalMetadata]:
        """Read the stored record; a missing record is a NOT_FOUND error."""
        try:
            record = await self.store.get_environmental_metadata(model_id)
        except PersistenceError as e:
            return Result.fail(e)
        if record is None:
            return Result.fail(
                PersistenceError(f"No environmental metadata for model {model_id}", code=NOT_FOUND)
            )
        return Result.ok(record)
