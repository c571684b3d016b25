"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    anthropic_api_key: str = ""
    metre_env: str = "development"
    metre_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Summary model
    model_summary: str = "claude-haiku-4-5-20251001"
    summary_max_tokens: int = 2048

    # Start every project with the "Murs" surface layer
    seed_default_layer: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
