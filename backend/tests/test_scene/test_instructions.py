"""Tests for orbit instruction parsing."""

import math

from app.scene.instructions import OrbitSpec, parse_orbit_instruction


def test_empty_instruction_is_default():
    assert parse_orbit_instruction("") == OrbitSpec()
    assert parse_orbit_instruction(None) == OrbitSpec()


def test_direction():
    assert parse_orbit_instruction("clockwise orbit").direction == -1
    assert parse_orbit_instruction("counter-clockwise orbit").direction == 1
    assert parse_orbit_instruction("anticlockwise").direction == 1


def test_sweep():
    assert parse_orbit_instruction("half circle").sweep == math.pi
    assert parse_orbit_instruction("a quarter turn").sweep == math.pi / 2
    assert parse_orbit_instruction("orbit").sweep == 2 * math.pi


def test_distance_height_and_pace():
    spec = parse_orbit_instruction("Slow, WIDE overhead establishing shot")
    assert spec.distance_scale == 3.5
    assert spec.height_ratio == 2.5
    assert spec.seconds_per_keyframe == 3.0

    spec = parse_orbit_instruction("fast close low pass")
    assert spec.distance_scale == 1.5
    assert spec.height_ratio == 0.1
    assert spec.seconds_per_keyframe == 1.0


def test_unknown_words_keep_defaults():
    assert parse_orbit_instruction("make it pop") == OrbitSpec()


def test_two_word_spellings():
    assert parse_orbit_instruction("counter clockwise orbit").direction == 1
    assert parse_orbit_instruction("anti  clockwise").direction == 1
    assert parse_orbit_instruction("top down view").height_ratio == 2.5
    assert parse_orbit_instruction("semi circle").sweep == math.pi
