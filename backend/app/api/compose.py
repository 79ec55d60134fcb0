"""POST /api/compose: expand a motion pattern into primitives."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from app.composer import allocate_durations, compose_pattern, get_registry
from app.errors import UNKNOWN_PATTERN, UnsupportedCapability
from app.models.primitives import SceneMeta
from app.models.requests import ComposeRequest
from app.models.responses import ComposeResponse

router = APIRouter()


@router.post("/compose", response_model=ComposeResponse)
async def compose(req: ComposeRequest) -> ComposeResponse:
    # The composer degrades to [] on unknown tags; callers of the API get a 400
    name = req.pattern.get("pattern")
    if not isinstance(name, str) or get_registry().get(name) is None:
        error = UnsupportedCapability(f"Unknown pattern type: {name!r}", code=UNKNOWN_PATTERN)
        raise HTTPException(status_code=400, detail=error.to_dict())

    primitives = compose_pattern(req.pattern, SceneMeta.from_geometry(req.geometry))

    durations = None
    if req.total_duration is not None:
        durations = allocate_durations(primitives, req.total_duration)
    return ComposeResponse(primitives=primitives, durations=durations)
