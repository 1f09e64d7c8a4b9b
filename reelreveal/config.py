from __future__ import annotations
from typing import Annotated, Any, List, Optional
import json
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

class Settings(BaseSettings):
    """
    Centralized, typed configuration (12-factor).
    Values are read from environment and the .env file.
    """
    app_name: str = "ReelReveal API"
    request_timeout_s: float = 20.0

    # Metadata provider (TMDB)
    movies_api_base: str = "https://api.themoviedb.org/3"
    tmdb_api_key: Optional[str] = None    # v3 key, sent as ?api_key=

    # Text generation
    generation_provider: str = "openai"   # openai | anthropic
    openai_api_key: Optional[str] = None
    openai_api_base: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4o-mini"
    anthropic_api_key: Optional[str] = None
    anthropic_api_base: str = "https://api.anthropic.com/v1"
    anthropic_model: str = "claude-3-5-haiku-latest"
    anthropic_version: str = "2023-06-01"

    # Serving
    static_dir: str = "public"            # built SPA (index.html + assets)
    cors_origins: Annotated[List[str], NoDecode] = ["*"]  # comma-separated or JSON list in env
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        """
        Accept `*`, `https://a.app,https://b.app` or a JSON array.
        """
        if not isinstance(value, str):
            return value
        raw: str = value.strip()
        if raw.startswith("["):
            return json.loads(raw)
        return [origin.strip() for origin in raw.split(",") if origin.strip()]

settings: Settings = Settings()
