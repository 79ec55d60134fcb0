"""Keyword reading of free-text instructions for the fallback orbit."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

_WORD = re.compile(r"[a-z\-]+")
# Two-word spellings folded into their hyphenated keyword before tokenizing
_PHRASE = re.compile(r"\b(counter|anti|semi|top)\s+(clockwise|circle|down)\b")


@dataclass(frozen=True)
class OrbitSpec:
    """Shape of the fallback orbit. Distances are multiples of the sphere radius."""

    sweep: float = 2 * math.pi
    direction: int = 1  # +1 counterclockwise seen from above, -1 clockwise
    distance_scale: float = 2.0
    height_ratio: float = 0.5
    seconds_per_keyframe: float = 2.0


# keyword -> field overrides, first match per group wins
_DIRECTION = [
    ({"counterclockwise", "counter-clockwise", "anticlockwise", "anti-clockwise"}, 1),
    ({"clockwise"}, -1),
]
_SWEEP = [
    ({"half", "semicircle", "semi-circle"}, math.pi),
    ({"quarter"}, math.pi / 2),
]
_DISTANCE = [
    ({"close", "closer", "tight", "near", "intimate"}, 1.5),
    ({"wide", "far", "distant", "establishing"}, 3.5),
]
_HEIGHT = [
    ({"overhead", "top-down", "aerial", "bird"}, 2.5),
    ({"high", "above", "elevated"}, 1.2),
    ({"low", "ground", "worm"}, 0.1),
]
_PACE = [
    ({"slow", "slowly", "gentle", "leisurely"}, 3.0),
    ({"fast", "quick", "quickly", "rapid"}, 1.0),
]


def _lookup(words: set[str], table: list[tuple[set[str], float]], default: float) -> float:
    for keys, value in table:
        if words & keys:
            return value
    return default


def parse_orbit_instruction(instruction: str) -> OrbitSpec:
    """Map an instruction like "slow low half orbit, clockwise" to an OrbitSpec."""
    text = _PHRASE.sub(r"\1-\2", (instruction or "").lower())
    words = set(_WORD.findall(text))
    base = OrbitSpec()
    if not words:
        return base

    return OrbitSpec(
        sweep=_lookup(words, _SWEEP, base.sweep),
        direction=int(_lookup(words, _DIRECTION, base.direction)),
        distance_scale=_lookup(words, _DISTANCE, base.distance_scale),
        height_ratio=_lookup(words, _HEIGHT, base.height_ratio),
        seconds_per_keyframe=_lookup(words, _PACE, base.seconds_per_keyframe),
    )
