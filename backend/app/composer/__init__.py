"""Pattern Composer: expands named motion patterns into primitive sequences."""

from app.composer.registry import expander, get_registry, PatternRegistry
from app.composer.compose import allocate_durations, compose_pattern

# Built-in patterns register on import
from app.composer import fly_by, zigzag  # noqa: F401

__all__ = [
    "expander",
    "get_registry",
    "PatternRegistry",
    "allocate_durations",
    "compose_pattern",
]
