"""Tests for the pattern registry."""

import pytest

from app.composer import compose_pattern, get_registry
from app.composer.registry import ExpanderSpec, PatternRegistry
from app.models.primitives import (
    ExtensionPrimitive,
    SceneMeta,
    ZigzagArgs,
)


def _noop(args, scene_meta):
    return []


def test_register_and_get():
    reg = PatternRegistry()
    spec = ExpanderSpec(name="noop", fn=_noop, args_model=ZigzagArgs)
    reg.register(spec)
    assert reg.get("noop") is spec
    assert reg.get("missing") is None
    assert reg.count == 1


def test_duplicate_name_rejected():
    reg = PatternRegistry()
    reg.register(ExpanderSpec(name="noop", fn=_noop, args_model=ZigzagArgs))
    with pytest.raises(ValueError):
        reg.register(ExpanderSpec(name="noop", fn=_noop, args_model=ZigzagArgs))


def test_names_sorted():
    reg = PatternRegistry()
    for name in ("zeta", "alpha", "mid"):
        reg.register(ExpanderSpec(name=name, fn=_noop, args_model=ZigzagArgs))
    assert reg.names() == ["alpha", "mid", "zeta"]
    assert [s.name for s in reg.all()] == ["alpha", "mid", "zeta"]


def test_builtins_registered():
    names = get_registry().names()
    assert "zigzag" in names
    assert "fly_by" in names


def test_custom_registry_dispatch(cube_geometry):
    def orbit(args, scene_meta):
        return [ExtensionPrimitive(type="orbit", parameters={"radius": scene_meta.object_radius})]

    reg = PatternRegistry()
    reg.register(ExpanderSpec(name="zigzag", fn=orbit, args_model=ZigzagArgs))
    out = compose_pattern({"pattern": "zigzag"}, SceneMeta.from_geometry(cube_geometry), registry=reg)
    assert len(out) == 1
    assert out[0].type == "orbit"
    assert out[0].parameters["radius"] == cube_geometry.bounding_sphere.radius
