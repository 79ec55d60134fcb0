"""Closed set of generative backends the path engine can drive."""

from __future__ import annotations

from typing import Callable

from app.llm.providers.anthropic import AnthropicProvider
from app.llm.providers.base import BaseProvider, LangChainProvider, ProviderCapabilities
from app.llm.providers.gemini import GeminiProvider
from app.llm.providers.openai import OpenAIProvider
from app.models.camera_path import LLMEngineConfig

ProviderFactory = Callable[[LLMEngineConfig], BaseProvider]


def default_provider_factories() -> dict[str, ProviderFactory]:
    return {
        AnthropicProvider.provider_type: AnthropicProvider.from_config,
        OpenAIProvider.provider_type: OpenAIProvider.from_config,
        GeminiProvider.provider_type: GeminiProvider.from_config,
    }


__all__ = [
    "AnthropicProvider",
    "BaseProvider",
    "GeminiProvider",
    "LangChainProvider",
    "OpenAIProvider",
    "ProviderCapabilities",
    "ProviderFactory",
    "default_provider_factories",
]
