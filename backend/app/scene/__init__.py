"""Scene analysis: geometry descriptors and the camera safety envelope."""

from app.scene.analyzer import analyze_scene, generate_safe_keyframes, is_safe_camera_position

__all__ = [
    "analyze_scene",
    "generate_safe_keyframes",
    "is_safe_camera_position",
]
