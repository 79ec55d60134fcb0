"""OpenAI chat models via LangChain ChatOpenAI, JSON response mode."""

from __future__ import annotations

from typing import Any

from app.config import settings
from app.llm.model_router import get_api_key_for_provider, get_model_for_provider
from app.llm.providers.base import LangChainProvider
from app.models.camera_path import LLMEngineConfig


class OpenAIProvider(LangChainProvider):
    provider_type = "openai"
    display_name = "OpenAI"
    version = "1.0"
    api_key_env = "OPENAI_API_KEY"

    def __init__(
        self,
        config: LLMEngineConfig,
        api_key: str = "",
        model: str | None = None,
        organization: str = "",
    ) -> None:
        super().__init__(config, api_key=api_key, model=model)
        self.organization = organization

    @classmethod
    def from_config(cls, config: LLMEngineConfig) -> OpenAIProvider:
        return cls(
            config,
            api_key=get_api_key_for_provider(cls.provider_type),
            model=config.model or get_model_for_provider(cls.provider_type),
            organization=settings.openai_organization,
        )

    def _build_llm(self) -> Any:
        from langchain_openai import ChatOpenAI

        llm = ChatOpenAI(
            model=self.model,
            api_key=self.api_key,
            organization=self.organization or None,
            temperature=self.config.temperature,
            max_tokens=self.config.max_tokens,
        )
        return llm.bind(response_format={"type": "json_object"})
