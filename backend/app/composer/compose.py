"""Pattern dispatch + time allocation over primitive sequences."""

from __future__ import annotations

import logging
import warnings
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as ArgsValidationError

from app.composer.registry import PatternRegistry, get_registry
from app.errors import UnknownPatternWarning
from app.models.primitives import Primitive, SceneMeta

logger = logging.getLogger(__name__)


def compose_pattern(
    args: BaseModel | Mapping[str, Any],
    scene_meta: SceneMeta,
    registry: PatternRegistry | None = None,
) -> list[Primitive]:
    """Expand a pattern descriptor into an ordered list of primitives.

    ``args`` is a pattern args model or a mapping with a ``pattern`` key.
    Unknown patterns and malformed arguments never raise: they are logged
    and yield an empty list.
    """
    registry = registry or get_registry()

    if isinstance(args, BaseModel):
        name = getattr(args, "pattern", None)
        payload: dict[str, Any] = args.model_dump()
    elif isinstance(args, Mapping):
        name = args.get("pattern")
        payload = dict(args)
    else:
        name, payload = None, {}

    spec = registry.get(name) if isinstance(name, str) else None
    if spec is None:
        message = f"Unknown pattern type encountered: {name!r}"
        logger.warning(message)
        warnings.warn(message, UnknownPatternWarning, stacklevel=2)
        return []

    try:
        parsed = spec.args_model.model_validate(payload)
    except ArgsValidationError as e:
        logger.warning("Invalid arguments for pattern %s: %s", name, e)
        return []

    primitives = spec.fn(parsed, scene_meta)
    logger.debug("Pattern %s expanded to %d primitives", name, len(primitives))
    return primitives


def allocate_durations(primitives: Sequence[Primitive], total_seconds: float) -> list[float]:
    """Split ``total_seconds`` across primitives.

    Explicit ``duration_ratio``s are honored while they leave room; the
    remainder is shared evenly by primitives without one. When explicit
    ratios already fill the path, unassigned primitives get the mean
    explicit ratio and everything is renormalized to the total.
    """
    if not primitives:
        return []

    explicit = [p.duration_ratio for p in primitives if p.duration_ratio is not None]
    n_free = len(primitives) - len(explicit)
    assigned = sum(explicit)

    if n_free == 0:
        free_weight = 0.0
    elif assigned < 1.0:
        free_weight = (1.0 - assigned) / n_free
    else:
        free_weight = assigned / len(explicit)

    weights = [
        p.duration_ratio if p.duration_ratio is not None else free_weight for p in primitives
    ]
    total_weight = sum(weights)
    return [total_seconds * w / total_weight for w in weights]
