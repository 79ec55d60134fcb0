"""POST /api/camera-path: generative camera path + validation."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.http_errors import to_http
from app.dependencies import get_engine
from app.llm.engine import PathEngine
from app.models.camera_path import CameraPath, ValidationResult
from app.models.requests import CameraPathRequest, ValidatePathRequest

router = APIRouter(prefix="/camera-path")


@router.post("", response_model=CameraPath)
async def camera_path(req: CameraPathRequest, engine: PathEngine = Depends(get_engine)) -> CameraPath:
    result = await engine.generate_path(req.prompt, timeout=req.timeout_seconds)
    if result.error is not None:
        raise to_http(result.error)
    return result.data


@router.post("/validate", response_model=ValidationResult)
async def validate(req: ValidatePathRequest, engine: PathEngine = Depends(get_engine)) -> ValidationResult:
    return engine.validate_path(req.path, req.geometry)
