"""Pattern registry: every pattern expander is a standalone function registered via decorator.

Usage:
    @expander("zigzag", args_model=ZigzagArgs, description="Alternating trucks + backward dollies")
    def zigzag(args: ZigzagArgs, scene_meta: SceneMeta) -> list[Primitive]:
        ...

Adding a new pattern = creating one file with the decorator. The dispatcher never changes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from pydantic import BaseModel

if TYPE_CHECKING:
    from app.models.primitives import SceneMeta

logger = logging.getLogger(__name__)

ExpanderFn = Callable[[Any, "SceneMeta"], list[Any]]


@dataclass
class ExpanderSpec:
    name: str
    fn: ExpanderFn
    args_model: type[BaseModel]
    description: str = ""


class PatternRegistry:
    """Registry of pattern name → expander."""

    def __init__(self) -> None:
        self._expanders: dict[str, ExpanderSpec] = {}

    def register(self, spec: ExpanderSpec) -> None:
        if spec.name in self._expanders:
            raise ValueError(f"Duplicate pattern name: {spec.name}")
        self._expanders[spec.name] = spec
        logger.debug("Registered pattern expander %s", spec.name)

    def get(self, name: str) -> ExpanderSpec | None:
        return self._expanders.get(name)

    def names(self) -> list[str]:
        return sorted(self._expanders)

    def all(self) -> list[ExpanderSpec]:
        return [self._expanders[n] for n in self.names()]

    @property
    def count(self) -> int:
        return len(self._expanders)


# Module-level singleton
_registry = PatternRegistry()


def get_registry() -> PatternRegistry:
    return _registry


def expander(name: str, *, args_model: type[BaseModel], description: str = ""):
    """Decorator to register a pattern expander."""

    def decorator(fn: ExpanderFn) -> ExpanderFn:
        _registry.register(
            ExpanderSpec(name=name, fn=fn, args_model=args_model, description=description)
        )
        return fn

    return decorator
