"""Client configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    opencalais_api_token: str | None = None
    opencalais_api_url: str = "https://api.thomsonreuters.com/permid/calais"
    opencalais_timeout_seconds: int = 60
    opencalais_input_content_class: str = "news"
    opencalais_input_content_type: str = "text/raw"
    opencalais_output_format: str = "application/json"
    opencalais_omit_original_document: bool = True
    opencalais_language: str = "English"
    opencalais_charset: str = "utf-8"

    model_config = SettingsConfigDict(
        env_file=str(_PROJECT_DIR / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()
