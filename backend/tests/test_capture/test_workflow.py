"""Tests for the lock-driven capture workflow."""

import asyncio
import threading

import pytest

from app.capture.store import MetadataStore
from app.capture.workflow import CaptureWorkflow, build_environmental_metadata
from app.errors import NOT_FOUND, PERSISTENCE_ERROR, PersistenceError
from app.scene import analyze_scene


class MemoryStore(MetadataStore):
    """Strict in-memory store that yields between read and write."""

    def __init__(self):
        self.records = {}
        self.store_calls = 0
        self.update_calls = 0

    async def get_environmental_metadata(self, model_id):
        await asyncio.sleep(0)
        return self.records.get(model_id)

    async def store_environmental_metadata(self, model_id, data):
        await asyncio.sleep(0)
        self.store_calls += 1
        if model_id in self.records:
            raise PersistenceError(f"duplicate record for {model_id}")
        self.records[model_id] = data

    async def update_environmental_metadata(self, model_id, data):
        await asyncio.sleep(0)
        self.update_calls += 1
        if model_id not in self.records:
            raise PersistenceError(f"no record for {model_id}")
        self.records[model_id] = data


class BrokenStore(MemoryStore):
    async def store_environmental_metadata(self, model_id, data):
        raise PersistenceError("disk full")


class ExplodingStore(MemoryStore):
    async def get_environmental_metadata(self, model_id):
        raise RuntimeError("connection reset")


def test_build_metadata(cube_scene, camera):
    record = build_environmental_metadata(analyze_scene(cube_scene, camera), camera)
    assert record.camera.position == camera.position
    assert record.camera.fov == 50.0
    assert record.constraints.min_distance == pytest.approx(3.0)
    assert record.constraints.max_distance == pytest.approx(10.0)
    assert record.constraints.min_height == pytest.approx(-1.0)
    assert record.constraints.max_height == pytest.approx(1.0)
    assert record.bounds.dimensions.width == pytest.approx(2.0)
    assert record.lighting.intensity == 1.0
    assert record.scene.background == "#000000"


def test_lock_captures_once(cube_scene, camera):
    store = MemoryStore()
    workflow = CaptureWorkflow(store)

    result = asyncio.run(workflow.toggle_lock("m1", True, cube_scene, camera))
    assert result.is_ok
    assert result.data.captured
    assert result.data.locked
    assert workflow.is_locked("m1")
    assert "m1" in store.records

    # Already locked: nothing new is written
    again = asyncio.run(workflow.toggle_lock("m1", True, cube_scene, camera))
    assert not again.data.captured
    assert store.store_calls == 1
    assert store.update_calls == 0


def test_unlock_then_relock_updates(cube_scene, camera):
    store = MemoryStore()
    workflow = CaptureWorkflow(store)

    asyncio.run(workflow.toggle_lock("m1", True, cube_scene, camera))
    unlocked = asyncio.run(workflow.toggle_lock("m1", False))
    assert not unlocked.data.locked
    assert unlocked.data.reason == "unlocked"
    assert not workflow.is_locked("m1")

    asyncio.run(workflow.toggle_lock("m1", True, cube_scene, camera))
    assert store.store_calls == 1
    assert store.update_calls == 1


def test_lock_without_scene_captures_nothing(camera):
    store = MemoryStore()
    workflow = CaptureWorkflow(store)
    result = asyncio.run(workflow.toggle_lock("m1", True, None, camera))
    assert result.is_ok
    assert not result.data.captured
    assert not workflow.is_locked("m1")
    assert store.records == {}


def test_missing_model_id(cube_scene, camera):
    result = asyncio.run(CaptureWorkflow(MemoryStore()).toggle_lock("", True, cube_scene, camera))
    assert result.is_ok
    assert not result.data.captured


def test_concurrent_captures_store_one_record(cube_scene, camera):
    store = MemoryStore()
    workflow = CaptureWorkflow(store)

    async def run():
        return await asyncio.gather(
            workflow.capture("m1", cube_scene, camera),
            workflow.capture("m1", cube_scene, camera),
        )

    results = asyncio.run(run())
    assert all(r.is_ok for r in results)
    assert len(store.records) == 1
    assert store.store_calls == 1
    assert store.update_calls == 1


def test_concurrent_lock_toggles_capture_once(cube_scene, camera):
    store = MemoryStore()
    workflow = CaptureWorkflow(store)

    async def run():
        return await asyncio.gather(
            *(workflow.toggle_lock("m1", True, cube_scene, camera) for _ in range(5))
        )

    results = asyncio.run(run())
    assert sum(r.data.captured for r in results) == 1
    assert store.store_calls == 1
    assert store.update_calls == 0


def test_different_models_do_not_serialize(cube_scene, camera):
    store = MemoryStore()
    workflow = CaptureWorkflow(store)

    async def run():
        return await asyncio.gather(
            workflow.capture("a", cube_scene, camera),
            workflow.capture("b", cube_scene, camera),
        )

    asyncio.run(run())
    assert set(store.records) == {"a", "b"}


def test_persistence_failure_keeps_model_unlocked(cube_scene, camera):
    workflow = CaptureWorkflow(BrokenStore())
    result = asyncio.run(workflow.toggle_lock("m1", True, cube_scene, camera))
    assert not result.is_ok
    assert result.error.code == PERSISTENCE_ERROR
    assert "disk full" in result.error.message
    assert not workflow.is_locked("m1")


def test_unexpected_store_error_wrapped(cube_scene, camera):
    result = asyncio.run(CaptureWorkflow(ExplodingStore()).capture("m1", cube_scene, camera))
    assert result.error.code == PERSISTENCE_ERROR
    assert "connection reset" in result.error.message


def test_load(cube_scene, camera):
    workflow = CaptureWorkflow(MemoryStore())
    missing = asyncio.run(workflow.load("m1"))
    assert missing.error.code == NOT_FOUND

    asyncio.run(workflow.capture("m1", cube_scene, camera))
    assert asyncio.run(workflow.load("m1")).data.camera.target == camera.target


def test_analysis_runs_off_the_event_loop_thread(cube_scene, camera):
    threads = []

    def analyzer(scene, cam):
        threads.append(threading.get_ident())
        return analyze_scene(scene, cam)

    async def run():
        loop_thread = threading.get_ident()
        await CaptureWorkflow(MemoryStore(), analyzer=analyzer).capture("m1", cube_scene, camera)
        return loop_thread

    loop_thread = asyncio.run(run())
    assert threads and threads[0] != loop_thread


def test_model_locks_are_released(cube_scene, camera):
    workflow = CaptureWorkflow(MemoryStore())

    async def run():
        await asyncio.gather(
            *(workflow.capture(f"m{i % 3}", cube_scene, camera) for i in range(9)),
        )
        await workflow.toggle_lock("m0", True, cube_scene, camera)
        await workflow.toggle_lock("m0", False)

    asyncio.run(run())
    assert workflow._locks == {}
    assert not workflow.is_locked("m0")
    assert workflow._locked == set()
