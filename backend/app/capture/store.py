"""Environmental metadata store: contract + JSON-file implementation.

The store is an external collaborator: it reports failures, it never retries.
``store_environmental_metadata`` refuses to overwrite and
``update_environmental_metadata`` refuses to create, so callers must pick the
right one; the capture workflow does that under a per-model lock.
"""

from __future__ import annotations

import asyncio
import json
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from pydantic import ValidationError as ModelValidationError

from app.errors import PersistenceError
from app.models.environment import EnvironmentalMetadata

logger = logging.getLogger(__name__)


class MetadataStore(ABC):
    """External metadata store contract."""

    @abstractmethod
    async def get_environmental_metadata(self, model_id: str) -> EnvironmentalMetadata | None: ...

    @abstractmethod
    async def store_environmental_metadata(self, model_id: str, data: EnvironmentalMetadata) -> None: ...

    @abstractmethod
    async def update_environmental_metadata(self, model_id: str, data: EnvironmentalMetadata) -> None: ...


class JsonMetadataStore(MetadataStore):
    """All records in one JSON object keyed by model id."""

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = data_dir
        self.records_file = self.data_dir / "environmental_metadata.json"
        # Guards the whole load-modify-save cycle across model ids
        self._file_lock = threading.Lock()

    async def get_environmental_metadata(self, model_id: str) -> EnvironmentalMetadata | None:
        return await asyncio.to_thread(self._get, model_id)

    async def store_environmental_metadata(self, model_id: str, data: EnvironmentalMetadata) -> None:
        await asyncio.to_thread(self._write, model_id, data, False)
        logger.info("Stored environmental metadata for model %s", model_id)

    async def update_environmental_metadata(self, model_id: str, data: EnvironmentalMetadata) -> None:
        await asyncio.to_thread(self._write, model_id, data, True)
        logger.info("Updated environmental metadata for model %s", model_id)

    def count(self) -> int:
        with self._file_lock:
            return len(self._load())

    def _get(self, model_id: str) -> EnvironmentalMetadata | None:
        with self._file_lock:
            raw = self._load().get(model_id)
        if raw is None:
            return None
        try:
            return EnvironmentalMetadata.model_validate(raw)
        except ModelValidationError as e:
            raise PersistenceError(f"Stored metadata for model {model_id} is corrupt: {e}") from e

    def _write(self, model_id: str, data: EnvironmentalMetadata, must_exist: bool) -> None:
        with self._file_lock:
            records = self._load()
            exists = model_id in records
            if must_exist and not exists:
                raise PersistenceError(f"No environmental metadata to update for model {model_id}")
            if not must_exist and exists:
                raise PersistenceError(f"Environmental metadata already exists for model {model_id}")
            records[model_id] = data.model_dump(mode="json")
            self._save(records)

    def _load(self) -> dict[str, Any]:
        if not self.records_file.exists():
            return {}
        try:
            with open(self.records_file, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Failed to read {self.records_file}: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceError(f"{self.records_file} does not hold a JSON object")
        return data

    def _save(self, records: dict[str, Any]) -> None:
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            tmp = self.records_file.with_suffix(".tmp")
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False)
            tmp.replace(self.records_file)
        except OSError as e:
            raise PersistenceError(f"Failed to write {self.records_file}: {e}") from e
