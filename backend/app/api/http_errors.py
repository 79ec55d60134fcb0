"""Error code → HTTP status mapping for the API edge."""

from __future__ import annotations

from fastapi import HTTPException

from app.errors import (
    INVALID_KEYFRAME,
    INVALID_STRUCTURE,
    NOT_FOUND,
    INVALID_CONSTRAINTS,
    NOT_INITIALIZED,
    PERSISTENCE_ERROR,
    PROVIDER_ERROR,
    TIMEOUT,
    UNKNOWN_PATTERN,
    UNSUPPORTED_PROVIDER,
    ShotcallerError,
)

_STATUS_BY_CODE = {
    NOT_INITIALIZED: 503,
    UNSUPPORTED_PROVIDER: 400,
    UNKNOWN_PATTERN: 400,
    INVALID_CONSTRAINTS: 422,
    INVALID_STRUCTURE: 502,
    INVALID_KEYFRAME: 502,
    PROVIDER_ERROR: 502,
    TIMEOUT: 504,
    PERSISTENCE_ERROR: 500,
    NOT_FOUND: 404,
}


def status_for(error: ShotcallerError) -> int:
    return _STATUS_BY_CODE.get(error.code, 500)


def to_http(error: ShotcallerError) -> HTTPException:
    return HTTPException(status_code=status_for(error), detail=error.to_dict())
