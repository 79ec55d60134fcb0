"""Environmental capture: lock-driven snapshots of the camera setup per model."""

from app.capture.store import JsonMetadataStore, MetadataStore
from app.capture.workflow import CaptureWorkflow, build_environmental_metadata

__all__ = [
    "CaptureWorkflow",
    "JsonMetadataStore",
    "MetadataStore",
    "build_environmental_metadata",
]
