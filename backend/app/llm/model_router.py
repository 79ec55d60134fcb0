"""Provider → model id / API key selection from settings."""

from __future__ import annotations

from app.config import settings

_PROVIDER_MODEL_ATTR = {
    "anthropic": "model_anthropic",
    "openai": "model_openai",
    "gemini": "model_gemini",
}

_PROVIDER_KEY_ATTR = {
    "anthropic": "anthropic_api_key",
    "openai": "openai_api_key",
    "gemini": "google_api_key",
}


def get_model_for_provider(provider: str) -> str:
    return getattr(settings, _PROVIDER_MODEL_ATTR.get(provider, "model_anthropic"))


def get_api_key_for_provider(provider: str) -> str:
    attr = _PROVIDER_KEY_ATTR.get(provider)
    return getattr(settings, attr) if attr else ""


def configured_providers() -> list[str]:
    """Providers with an API key present in the environment."""
    return [p for p in _PROVIDER_KEY_ATTR if get_api_key_for_provider(p)]
