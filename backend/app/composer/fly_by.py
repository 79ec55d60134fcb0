"""fly_by: approach, rise to an apex, pass over, descend, exit; optionally fly back.

Stage weights set the share of the path each stage gets. With a second pass
the return mirrors the first (stages reversed, directions inverted) and both
passes share the time equally.
"""

from __future__ import annotations

import logging

from app.composer.registry import expander
from app.models.primitives import (
    DollyParams,
    DollyPrimitive,
    FlyByArgs,
    PedestalParams,
    PedestalPrimitive,
    Primitive,
    SceneMeta,
    mirror_primitive,
)

logger = logging.getLogger(__name__)

NO_APEX = "none"

_APPROACH_WEIGHT = 0.2
_ASCENT_WEIGHT = 0.15
_PASS_WEIGHT = 0.3
_DESCENT_WEIGHT = 0.15
_EXIT_WEIGHT = 0.2


@expander("fly_by", args_model=FlyByArgs, description="Approach, pass over the subject, exit")
def fly_by(args: FlyByArgs, scene_meta: SceneMeta) -> list[Primitive]:
    speed = args.speed
    stages: list[tuple[float, Primitive]] = [
        (
            _APPROACH_WEIGHT,
            DollyPrimitive(
                parameters=DollyParams(direction="forward", distance_descriptor="medium", speed=speed)
            ),
        )
    ]
    has_apex = args.apex_height.lower() != NO_APEX
    if has_apex:
        stages.append(
            (
                _ASCENT_WEIGHT,
                PedestalPrimitive(
                    parameters=PedestalParams(
                        direction="up", distance_descriptor=args.apex_height, speed=speed
                    )
                ),
            )
        )
    stages.append(
        (
            _PASS_WEIGHT,
            DollyPrimitive(
                parameters=DollyParams(direction="forward", distance_descriptor="large", speed=speed)
            ),
        )
    )
    if has_apex:
        stages.append(
            (
                _DESCENT_WEIGHT,
                PedestalPrimitive(
                    parameters=PedestalParams(
                        direction="down", distance_descriptor=args.apex_height, speed=speed
                    )
                ),
            )
        )
    stages.append(
        (
            _EXIT_WEIGHT,
            DollyPrimitive(
                parameters=DollyParams(direction="forward", distance_descriptor="medium", speed=speed)
            ),
        )
    )

    passes = 2 if args.second_pass else 1
    total_weight = sum(w for w, _ in stages) * passes

    first = [p.model_copy(update={"duration_ratio": w / total_weight}) for w, p in stages]
    if not args.second_pass:
        return first

    ret = [mirror_primitive(p) for p in reversed(first)]
    logger.debug("fly_by: %d primitives per pass, mirrored return appended", len(first))
    return first + ret
