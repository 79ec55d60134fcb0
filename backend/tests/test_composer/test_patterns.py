"""Tests for the built-in motion patterns and time allocation."""

import warnings

import pytest

from app.composer import allocate_durations, compose_pattern
from app.errors import UnknownPatternWarning
from app.models.primitives import (
    DollyParams,
    DollyPrimitive,
    ExtensionPrimitive,
    FlyByArgs,
    SceneMeta,
    TruckParams,
    TruckPrimitive,
    ZigzagArgs,
)


@pytest.fixture
def meta(cube_geometry) -> SceneMeta:
    return SceneMeta.from_geometry(cube_geometry)


def test_scene_meta_radius(cube_geometry, meta):
    assert meta.object_radius == cube_geometry.bounding_sphere.radius
    assert meta.bounding_box == cube_geometry.bounding_box


def test_zigzag_four_segments(meta):
    prims = compose_pattern(ZigzagArgs(segments=4), meta)
    assert len(prims) == 8
    assert [p.type for p in prims] == ["truck", "dolly"] * 4
    trucks = [p.parameters.direction for p in prims if p.type == "truck"]
    assert trucks == ["left", "right", "left", "right"]
    assert all(p.parameters.direction == "backward" for p in prims if p.type == "dolly")
    assert all(p.parameters.distance_descriptor == "small" for p in prims)
    assert all(p.duration_ratio is None for p in prims)


def test_zigzag_zero_segments(meta):
    assert compose_pattern(ZigzagArgs(segments=0), meta) == []


def test_zigzag_from_mapping(meta):
    prims = compose_pattern({"pattern": "zigzag", "segments": 2, "amplitude": "large"}, meta)
    assert len(prims) == 4
    assert prims[0].parameters.distance_descriptor == "large"


def test_fly_by_default(meta):
    prims = compose_pattern(FlyByArgs(), meta)
    assert [(p.type, p.parameters.direction) for p in prims] == [
        ("dolly", "forward"),
        ("pedestal", "up"),
        ("dolly", "forward"),
        ("pedestal", "down"),
        ("dolly", "forward"),
    ]
    assert prims[1].parameters.distance_descriptor == "large"
    assert all(p.parameters.speed == "fast" for p in prims)
    assert sum(p.duration_ratio for p in prims) == pytest.approx(1.0)
    assert prims[2].duration_ratio == pytest.approx(0.3)


def test_fly_by_no_apex(meta):
    prims = compose_pattern(FlyByArgs(apex_height="none"), meta)
    assert [p.type for p in prims] == ["dolly", "dolly", "dolly"]
    assert sum(p.duration_ratio for p in prims) == pytest.approx(1.0)


def test_fly_by_second_pass(meta):
    prims = compose_pattern(FlyByArgs(second_pass=True), meta)
    assert len(prims) == 10
    assert sum(p.duration_ratio for p in prims) == pytest.approx(1.0)
    first, back = prims[:5], prims[5:]
    for out, ret in zip(first, reversed(back)):
        assert out.type == ret.type
        assert out.duration_ratio == pytest.approx(ret.duration_ratio)
    assert back[0].parameters.direction == "backward"
    assert back[1].parameters.direction == "up"
    assert back[3].parameters.direction == "down"


def test_unknown_pattern_warns_and_returns_empty(meta):
    with pytest.warns(UnknownPatternWarning):
        assert compose_pattern({"pattern": "barrel_roll"}, meta) == []


def test_missing_pattern_tag(meta):
    with pytest.warns(UnknownPatternWarning):
        assert compose_pattern({"segments": 3}, meta) == []


def test_invalid_args_return_empty(meta):
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert compose_pattern({"pattern": "zigzag", "segments": -1}, meta) == []
        assert compose_pattern({"pattern": "zigzag", "wobble": True}, meta) == []


def test_allocate_even_split():
    prims = [TruckPrimitive(parameters=TruckParams(direction="left"))] * 4
    assert allocate_durations(prims, 8.0) == pytest.approx([2.0] * 4)


def test_allocate_honors_explicit_ratios(meta):
    prims = compose_pattern(FlyByArgs(), meta)
    durations = allocate_durations(prims, 10.0)
    assert durations == pytest.approx([2.0, 1.5, 3.0, 1.5, 2.0])


def test_allocate_mixed():
    prims = [
        DollyPrimitive(parameters=DollyParams(direction="forward"), duration_ratio=0.5),
        ExtensionPrimitive(type="orbit"),
        ExtensionPrimitive(type="zoom"),
    ]
    assert allocate_durations(prims, 4.0) == pytest.approx([2.0, 1.0, 1.0])


def test_allocate_overfull_ratios_renormalized():
    prims = [
        DollyPrimitive(parameters=DollyParams(direction="forward"), duration_ratio=0.6),
        DollyPrimitive(parameters=DollyParams(direction="backward"), duration_ratio=0.6),
        ExtensionPrimitive(type="tilt"),
    ]
    durations = allocate_durations(prims, 9.0)
    assert durations == pytest.approx([3.0, 3.0, 3.0])
    assert sum(durations) == pytest.approx(9.0)


def test_allocate_empty():
    assert allocate_durations([], 5.0) == []
