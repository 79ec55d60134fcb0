"""Anthropic Claude via LangChain ChatAnthropic."""

from __future__ import annotations

from typing import Any

from app.llm.model_router import get_api_key_for_provider, get_model_for_provider
from app.llm.providers.base import LangChainProvider
from app.models.camera_path import LLMEngineConfig


class AnthropicProvider(LangChainProvider):
    provider_type = "anthropic"
    display_name = "Anthropic Claude"
    version = "4.5"
    api_key_env = "ANTHROPIC_API_KEY"

    @classmethod
    def from_config(cls, config: LLMEngineConfig) -> AnthropicProvider:
        return cls(
            config,
            api_key=get_api_key_for_provider(cls.provider_type),
            model=config.model or get_model_for_provider(cls.provider_type),
        )

    def _build_llm(self) -> Any:
        from langchain_anthropic import ChatAnthropic

        return ChatAnthropic(
            model=self.model,
            api_key=self.api_key,
            max_tokens=self.config.max_tokens,
            temperature=self.config.temperature,
        )
