"""Google Gemini via LangChain ChatGoogleGenerativeAI."""

from __future__ import annotations

from typing import Any

from app.llm.model_router import get_api_key_for_provider, get_model_for_provider
from app.llm.providers.base import LangChainProvider
from app.models.camera_path import LLMEngineConfig


class GeminiProvider(LangChainProvider):
    provider_type = "gemini"
    display_name = "Google Gemini"
    version = "2.0"
    api_key_env = "GOOGLE_API_KEY"

    @classmethod
    def from_config(cls, config: LLMEngineConfig) -> GeminiProvider:
        return cls(
            config,
            api_key=get_api_key_for_provider(cls.provider_type),
            model=config.model or get_model_for_provider(cls.provider_type),
        )

    def _build_llm(self) -> Any:
        from langchain_google_genai import ChatGoogleGenerativeAI

        return ChatGoogleGenerativeAI(
            model=self.model,
            google_api_key=self.api_key,
            temperature=self.config.temperature,
            max_output_tokens=self.config.max_tokens,
        )
