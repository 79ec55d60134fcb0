"""LLM Path Engine: turns a compiled prompt into a validated camera path.

One engine handle is constructed at startup and injected where needed.
Configuration is an immutable snapshot: ``initialize`` swaps it in a single
assignment and every ``generate_path`` call reads it exactly once, so a
re-initialization never leaks into a request already in flight.
"""

from __future__ import annotations

import asyncio
import logging
import math
import time
from collections import deque
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as ModelValidationError

from app.errors import (
    CANCELLED,
    INVALID_CONSTRAINTS,
    INVALID_KEYFRAME,
    INVALID_STRUCTURE,
    TIMEOUT,
    UNSUPPORTED_PROVIDER,
    ConfigurationError,
    ProviderError,
    ShotcallerError,
    UnsupportedCapability,
    ValidationError,
)
from app.llm.providers import ProviderFactory, default_provider_factories
from app.models.camera_path import (
    CameraKeyframe,
    CameraPath,
    CompiledPrompt,
    LLMEngineConfig,
    OperationMetrics,
    PathMetadata,
    PerformanceMetrics,
    SafetyConstraints,
    ValidationResult,
)
from app.models.geometry import SceneGeometry, Vec3
from app.models.result import Result

logger = logging.getLogger(__name__)

_MAX_RECORDED_OPERATIONS = 200
# Relative slack when comparing summed keyframe durations to the path duration
_DURATION_SLACK = 0.01


class PathEngine:
    """Adapter between compiled prompts and pluggable generative backends."""

    def __init__(
        self,
        config: LLMEngineConfig | None = None,
        providers: Mapping[str, ProviderFactory] | None = None,
    ) -> None:
        self._config = config
        self._providers = dict(providers) if providers is not None else default_provider_factories()
        self._started = time.time()
        self._operations: deque[OperationMetrics] = deque(maxlen=_MAX_RECORDED_OPERATIONS)

    @property
    def config(self) -> LLMEngineConfig | None:
        return self._config

    @property
    def supported_providers(self) -> list[str]:
        return sorted(self._providers)

    def initialize(self, config: LLMEngineConfig) -> None:
        """Replace the held configuration wholesale."""
        self._config = config
        logger.info(
            "Path engine initialized: provider=%s model=%s temperature=%.2f",
            config.provider,
            config.model or "(default)",
            config.temperature,
        )

    async def generate_path(
        self,
        prompt: CompiledPrompt,
        *,
        timeout: float | None = None,
    ) -> Result[CameraPath]:
        """Generate and validate a camera path. Never raises except on cancellation.

        ``timeout`` overrides ``config.timeout_seconds`` for this call.
        """
        config = self._config
        t0 = time.perf_counter()

        if config is None:
            error = ConfigurationError("Engine not initialized")
            self._record("generate_path", t0, error)
            return Result.fail(error)

        try:
            path = await self._generate(config, prompt, timeout)
        except asyncio.CancelledError:
            self._record("generate_path", t0, ProviderError("Cancelled", code=CANCELLED))
            raise
        except ShotcallerError as e:
            logger.warning("Path generation failed: %r", e)
            self._record("generate_path", t0, e)
            return Result.fail(e)
        except Exception as e:
            logger.exception("Provider call failed")
            error = ProviderError(f"Provider API call failed: {e}", details=repr(e))
            self._record("generate_path", t0, error)
            return Result.fail(error)

        self._record("generate_path", t0)
        logger.info("Generated path with %d keyframes (%.1fs)", len(path.keyframes), path.duration)
        return Result.ok(path)

    async def _generate(
        self,
        config: LLMEngineConfig,
        prompt: CompiledPrompt,
        timeout: float | None,
    ) -> CameraPath:
        factory = self._providers.get(config.provider)
        if factory is None:
            raise UnsupportedCapability(
                f"Unsupported provider type: {config.provider}", code=UNSUPPORTED_PROVIDER
            )
        # Constraint bounds are checked before any backend call
        try:
            safety = SafetyConstraints.from_prompt(prompt.constraints)
        except ModelValidationError as e:
            raise ValidationError(
                f"Prompt constraints are inconsistent: {e.errors()[0]['msg']}",
                code=INVALID_CONSTRAINTS,
                details=e.errors(),
            ) from e

        provider = factory(config)

        duration = prompt.duration or config.default_duration
        limit = timeout if timeout is not None else config.timeout_seconds
        logger.debug("Calling %s provider (duration=%.1fs, timeout=%s)", config.provider, duration, limit)

        try:
            raw = await asyncio.wait_for(provider.generate_camera_path(prompt, duration), limit)
        except asyncio.TimeoutError as e:
            raise ProviderError(
                f"Provider {config.provider} timed out after {limit}s", code=TIMEOUT
            ) from e

        keyframes = validate_raw_keyframes(raw)
        total = sum(kf.duration for kf in keyframes)
        if not math.isclose(total, duration, rel_tol=_DURATION_SLACK):
            logger.debug("Keyframes sum to %.2fs, requested %.2fs", total, duration)

        return CameraPath(
            keyframes=keyframes,
            duration=total,
            metadata=PathMetadata(
                style=prompt.style or "unknown",
                focus=prompt.focus or "unknown",
                safety_constraints=safety,
            ),
        )

    def validate_path(self, path: CameraPath, geometry: SceneGeometry | None = None) -> ValidationResult:
        """Check a path against its own safety constraints.

        Distances are measured to the scene's sphere center when geometry is
        given, otherwise to each keyframe's own target.
        """
        errors: list[str] = []
        if not path.keyframes:
            return ValidationResult(is_valid=False, errors=["Path must contain at least one keyframe"])

        c = path.metadata.safety_constraints
        total = sum(kf.duration for kf in path.keyframes)
        if not math.isclose(total, path.duration, rel_tol=_DURATION_SLACK, abs_tol=1e-6):
            errors.append(f"Keyframe durations sum to {total:.2f}s, path declares {path.duration:.2f}s")

        focus = geometry.bounding_sphere.center if geometry is not None else None
        prev: CameraKeyframe | None = None
        for i, kf in enumerate(path.keyframes):
            p = kf.position
            if not _finite(p) or not _finite(kf.target):
                errors.append(f"Keyframe {i}: non-finite coordinates")
                prev = None
                continue

            if kf.duration <= 0:
                errors.append(f"Keyframe {i}: duration must be positive")
                prev = None
                continue

            if not c.min_height <= p.y <= c.max_height:
                errors.append(
                    f"Keyframe {i}: height {p.y:.2f} outside [{c.min_height:.2f}, {c.max_height:.2f}]"
                )

            distance = p.distance_to(focus if focus is not None else kf.target)
            if not c.min_distance <= distance <= c.max_distance:
                errors.append(
                    f"Keyframe {i}: distance {distance:.2f} outside "
                    f"[{c.min_distance:.2f}, {c.max_distance:.2f}]"
                )

            for zone in c.restricted_zones or []:
                if zone.contains(p):
                    errors.append(f"Keyframe {i}: inside restricted zone")
                    break

            if prev is not None:
                speed = p.distance_to(prev.position) / kf.duration
                if speed > c.max_speed:
                    errors.append(f"Keyframe {i}: speed {speed:.2f} exceeds {c.max_speed:.2f}")
            prev = kf

        return ValidationResult(is_valid=not errors, errors=errors)

    def get_performance_metrics(self) -> PerformanceMetrics:
        operations = list(self._operations)
        now = time.time()
        average = sum(op.duration for op in operations) / len(operations) if operations else 0.0
        return PerformanceMetrics(
            start_time=self._started,
            end_time=now,
            duration=now - self._started,
            operations=operations,
            average_response_time=average,
        )

    def _record(self, name: str, t0: float, error: ShotcallerError | None = None) -> None:
        self._operations.append(
            OperationMetrics(
                name=name,
                duration=(time.perf_counter() - t0) * 1000,
                success=error is None,
                error=error.code if error is not None else None,
            )
        )


def validate_raw_keyframes(raw: Any) -> list[CameraKeyframe]:
    """All-or-nothing check of a provider response; returns typed keyframes."""
    if isinstance(raw, Mapping):
        items = raw.get("keyframes")
    else:
        items = getattr(raw, "keyframes", None)

    if not isinstance(items, list) or not items:
        raise ValidationError(
            "Provider returned invalid or empty keyframes structure", code=INVALID_STRUCTURE
        )

    keyframes: list[CameraKeyframe] = []
    for i, kf in enumerate(items):
        if isinstance(kf, CameraKeyframe):
            keyframes.append(kf)
            continue
        if not isinstance(kf, Mapping):
            raise ValidationError(f"Keyframe {i} is not an object", code=INVALID_KEYFRAME)
        duration = kf.get("duration")
        if (
            kf.get("position") is None
            or kf.get("target") is None
            or isinstance(duration, bool)
            or not isinstance(duration, (int, float))
        ):
            raise ValidationError(
                f"Provider keyframe {i} missing required fields (position, target, duration)",
                code=INVALID_KEYFRAME,
            )
        try:
            keyframes.append(
                CameraKeyframe(
                    position=Vec3.model_validate(kf["position"]),
                    target=Vec3.model_validate(kf["target"]),
                    duration=duration,
                )
            )
        except ModelValidationError as e:
            raise ValidationError(
                f"Provider keyframe {i} is malformed: {e.error_count()} error(s)",
                code=INVALID_KEYFRAME,
                details=e.errors(),
            ) from e
    return keyframes


def _finite(v: Vec3) -> bool:
    return all(math.isfinite(c) for c in (v.x, v.y, v.z))
