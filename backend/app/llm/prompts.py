"""Prompt assembly for camera path generation."""

from __future__ import annotations

from app.models.camera_path import CameraConstraints, CompiledPrompt

_FORMAT_RULES = """IMPORTANT: You are a camera path generator. Your response must be ONLY valid JSON in this exact format:
```json
{{"keyframes": [{{"position": {{"x": number, "y": number, "z": number}}, "target": {{"x": number, "y": number, "z": number}}, "duration": number}}]}}
```

Rules:
1. Sum of all keyframe durations MUST equal exactly {duration} seconds
2. All numbers must be finite and reasonable (no Infinity, NaN, or extreme values)
3. No additional text or explanation - ONLY the JSON response
4. Every keyframe MUST have a duration greater than 0 (minimum 0.1)
5. First keyframe should have a reasonable duration (at least 0.5 seconds)
6. Y is up. Respect the safety constraints below for every keyframe."""

_CONSTRAINTS_TEMPLATE = """SAFETY CONSTRAINTS:
- Distance from the subject: between {min_distance} and {max_distance}
- Camera height: between {min_height} and {max_height}
- Maximum speed: {max_speed} units/second{zones}"""


def format_constraints(constraints: CameraConstraints) -> str:
    zones = ""
    if constraints.restricted_zones:
        lines = [
            f"\n  - box min ({z.min.x}, {z.min.y}, {z.min.z}) max ({z.max.x}, {z.max.y}, {z.max.z})"
            for z in constraints.restricted_zones
        ]
        zones = "\n- Never enter these restricted zones:" + "".join(lines)
    return _CONSTRAINTS_TEMPLATE.format(
        min_distance=constraints.min_distance,
        max_distance=constraints.max_distance,
        min_height=constraints.min_height if constraints.min_height is not None else 0,
        max_height=constraints.max_height if constraints.max_height is not None else 100,
        max_speed=constraints.max_speed,
        zones=zones,
    )


def build_system_prompt(prompt: CompiledPrompt, duration: float) -> str:
    parts = [_FORMAT_RULES.format(duration=duration), format_constraints(prompt.constraints)]
    if prompt.system_message:
        parts.append(prompt.system_message)
    return "\n\n".join(parts)


def build_user_prompt(prompt: CompiledPrompt) -> str:
    return prompt.user_message or "Generate a smooth camera path around the subject."
