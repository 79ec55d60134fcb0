"""POST /api/scene/*: geometry analysis and the fallback orbit."""

from __future__ import annotations

from fastapi import APIRouter

from app.models.geometry import SceneGeometry
from app.models.requests import FallbackPathRequest, SafePositionRequest, SceneAnalyzeRequest
from app.models.responses import FallbackPathResponse, SafePositionResponse
from app.scene import analyze_scene, generate_safe_keyframes, is_safe_camera_position

router = APIRouter(prefix="/scene")


# Plain def: FastAPI runs the numpy work in its threadpool
@router.post("/analyze", response_model=SceneGeometry)
def analyze(req: SceneAnalyzeRequest) -> SceneGeometry:
    return analyze_scene(req.scene, req.camera)


@router.post("/safe-position", response_model=SafePositionResponse)
async def safe_position(req: SafePositionRequest) -> SafePositionResponse:
    return SafePositionResponse(safe=is_safe_camera_position(req.position, req.target, req.geometry))


@router.post("/fallback-path", response_model=FallbackPathResponse)
def fallback_path(req: FallbackPathRequest) -> FallbackPathResponse:
    keyframes = generate_safe_keyframes(req.geometry, req.instruction, req.num_points)
    return FallbackPathResponse(keyframes=keyframes, duration=sum(kf.duration for kf in keyframes))
