"""Model lock toggle + stored environmental metadata."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.http_errors import to_http
from app.capture.workflow import CaptureWorkflow
from app.dependencies import get_capture
from app.models.environment import CaptureOutcome, EnvironmentalMetadata
from app.models.requests import LockRequest

router = APIRouter(prefix="/models")


@router.post("/{model_id}/lock", response_model=CaptureOutcome)
async def toggle_lock(
    model_id: str,
    req: LockRequest,
    capture: CaptureWorkflow = Depends(get_capture),
) -> CaptureOutcome:
    result = await capture.toggle_lock(model_id, req.locked, req.scene, req.camera)
    if result.error is not None:
        raise to_http(result.error)
    return result.data


@router.get("/{model_id}/environment", response_model=EnvironmentalMetadata)
async def environment(
    model_id: str,
    capture: CaptureWorkflow = Depends(get_capture),
) -> EnvironmentalMetadata:
    result = await capture.load(model_id)
    if result.error is not None:
        raise to_http(result.error)
    return result.data
