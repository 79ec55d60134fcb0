"""zigzag: alternating lateral trucks, each followed by a backward dolly."""

from __future__ import annotations

from app.composer.registry import expander
from app.models.primitives import (
    DollyParams,
    DollyPrimitive,
    Primitive,
    SceneMeta,
    TruckParams,
    TruckPrimitive,
    ZigzagArgs,
)


@expander("zigzag", args_model=ZigzagArgs, description="Alternating trucks with backward dollies")
def zigzag(args: ZigzagArgs, scene_meta: SceneMeta) -> list[Primitive]:
    # Amplitude stays qualitative; time allocation is left to the consumer
    primitives: list[Primitive] = []
    for i in range(args.segments):
        primitives.append(
            TruckPrimitive(
                parameters=TruckParams(
                    direction="right" if i % 2 else "left",
                    distance_descriptor=args.amplitude,
                )
            )
        )
        primitives.append(
            DollyPrimitive(
                parameters=DollyParams(direction="backward", distance_descriptor=args.amplitude)
            )
        )
    return primitives
