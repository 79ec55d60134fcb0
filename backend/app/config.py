"""Application configuration from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    anthropic_api_key: str = ""
    openai_api_key: str = ""
    openai_organization: str = ""
    google_api_key: str = ""
    shotcaller_env: str = "development"
    shotcaller_log_level: str = "debug"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Path engine
    llm_provider: str = "anthropic"
    llm_temperature: float = 0.7
    llm_max_tokens: int = 2000
    llm_timeout_seconds: float = 60.0
    default_path_duration: float = 10.0

    # Provider model ids
    model_anthropic: str = "claude-sonnet-4-5-20250929"
    model_openai: str = "gpt-4-turbo-preview"
    model_gemini: str = "gemini-2.0-flash"

    # Environmental metadata store
    metadata_dir: Path = Path(__file__).parent / "data"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
