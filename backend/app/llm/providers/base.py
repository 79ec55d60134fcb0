"""Generative backend adapter contract + shared LangChain plumbing."""

from __future__ import annotations

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel

from app.errors import ProviderError, ShotcallerError
from app.llm.prompts import build_system_prompt, build_user_prompt
from app.models.camera_path import CompiledPrompt, LLMEngineConfig

logger = logging.getLogger(__name__)

# Zero durations from the model are replaced with this many seconds
MIN_REPAIRED_DURATION = 0.5
DURATION_TOLERANCE = 0.01


class ProviderCapabilities(BaseModel):
    name: str
    version: str
    max_tokens: int
    supports_json: bool
    temperature: float
    max_duration: float  # seconds


class BaseProvider(ABC):
    """Adapter contract every backend implements."""

    provider_type: str = ""

    def __init__(self, config: LLMEngineConfig, api_key: str = "", model: str | None = None) -> None:
        self.config = config
        self.api_key = api_key
        self.model = model or config.model or ""

    def get_provider_type(self) -> str:
        return self.provider_type

    @abstractmethod
    async def generate_camera_path(self, prompt: CompiledPrompt, duration: float) -> dict[str, Any]:
        """Return ``{"keyframes": [{"position", "target", "duration"}, ...]}``."""

    @abstractmethod
    def get_capabilities(self) -> ProviderCapabilities: ...

    async def validate_configuration(self) -> bool:
        return bool(self.api_key)


class LangChainProvider(BaseProvider):
    """Backend reached through a LangChain chat model."""

    display_name = ""
    version = "1.0"
    api_key_env = ""
    max_duration = 60.0

    @abstractmethod
    def _build_llm(self) -> Any:
        """Construct the chat model. Provider packages are imported lazily here."""

    def get_capabilities(self) -> ProviderCapabilities:
        return ProviderCapabilities(
            name=self.display_name,
            version=self.version,
            max_tokens=self.config.max_tokens,
            supports_json=True,
            temperature=self.config.temperature,
            max_duration=self.max_duration,
        )

    async def validate_configuration(self) -> bool:
        if not self.api_key:
            return False
        try:
            response = await self._build_llm().ainvoke("Test connection")
            return bool(content_text(response.content))
        except Exception as e:
            logger.warning("%s configuration validation failed: %s", self.display_name, e)
            return False

    async def generate_camera_path(self, prompt: CompiledPrompt, duration: float) -> dict[str, Any]:
        if not self.api_key:
            raise ProviderError(
                f"{self.display_name} not configured, set {self.api_key_env} in .env",
                details={"provider": self.provider_type},
            )

        from langchain_core.messages import HumanMessage, SystemMessage

        messages = [
            SystemMessage(content=build_system_prompt(prompt, duration)),
            HumanMessage(content=build_user_prompt(prompt)),
        ]
        try:
            response = await self._build_llm().ainvoke(messages)
        except ShotcallerError:
            raise
        except Exception as e:
            raise ProviderError(f"{self.display_name} API error: {e}") from e

        text = content_text(response.content)
        if not text:
            raise ProviderError(f"No response from {self.display_name}")
        logger.debug("Raw %s response: %s", self.provider_type, text[:500])

        parsed = parse_keyframes_json(text)
        if parsed is None:
            raise ProviderError("Failed to parse JSON response", details={"response": text[:2000]})

        keyframes = parsed.get("keyframes")
        if isinstance(keyframes, list):
            normalize_durations(keyframes, duration)
        return {"keyframes": keyframes}


def content_text(content: Any) -> str:
    """Flatten a chat message content (str or list of blocks) to text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
    return str(content or "")


def parse_keyframes_json(text: str) -> dict | None:
    """Extract the keyframes JSON object from model output."""
    candidates: list[str] = []

    # Try to find JSON block in markdown fences
    match = re.search(r"```(?:json)?\s*([\s\S]*?)\s*```", text)
    if match:
        candidates.append(match.group(1).strip())

    # Raw JSON, outermost braces
    match = re.search(r"({[\s\S]*})", text)
    if match:
        candidates.append(match.group(1))
        # Double-escaped output
        candidates.append(match.group(1).replace("\\n", "").replace('\\"', '"'))

    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            return data
    return None


def normalize_durations(keyframes: list[Any], duration: float) -> None:
    """Repair zero durations and rescale so the total matches ``duration``, in place.

    Leaves the list alone when any duration is missing or non-numeric;
    the engine rejects those keyframes.
    """
    durations = []
    for kf in keyframes:
        d = kf.get("duration") if isinstance(kf, dict) else None
        if isinstance(d, bool) or not isinstance(d, (int, float)):
            return
        durations.append(float(d))

    for i, kf in enumerate(keyframes):
        if durations[i] == 0:
            logger.debug("Fixing zero duration at keyframe %d", i)
            durations[i] = MIN_REPAIRED_DURATION
            kf["duration"] = MIN_REPAIRED_DURATION

    total = sum(durations)
    if abs(total - duration) <= DURATION_TOLERANCE or total <= DURATION_TOLERANCE:
        return
    factor = duration / total
    logger.info("Total duration %.2fs differs from requested %.2fs, scaling by %.3f", total, duration, factor)
    for kf, d in zip(keyframes, durations):
        kf["duration"] = d * factor
