"""Configuration management for the ScamGuard analysis adapter."""

from __future__ import annotations

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env early so BaseSettings can pick values up seamlessly.
load_dotenv()

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class Settings(BaseSettings):
    """App configuration derived from environment variables."""

    gemini_api_key: str | None = Field(
        None, validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY")
    )
    gemini_model: str = Field(DEFAULT_MODEL, alias="GEMINI_MODEL")
    gemini_api_base_url: HttpUrl = Field(DEFAULT_API_BASE_URL, alias="GEMINI_API_BASE_URL")
    request_timeout: float = Field(120.0, alias="GEMINI_REQUEST_TIMEOUT")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("gemini_api_key", mode="before")
    @classmethod
    def _empty_str_to_none(cls, value):
        if isinstance(value, str) and value.strip() == "":
            return None
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("gemini_model", mode="before")
    @classmethod
    def _normalize_model(cls, value):
        if isinstance(value, str):
            stripped = value.strip()
            return stripped or DEFAULT_MODEL
        return value

    @field_validator("request_timeout")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("GEMINI_REQUEST_TIMEOUT must be greater than zero.")
        return value

    @property
    def has_api_key(self) -> bool:
        return bool(self.gemini_api_key)

    @property
    def generate_content_url(self) -> str:
        """Endpoint for a single non-streaming generateContent call."""
        base = str(self.gemini_api_base_url).rstrip("/")
        return f"{base}/models/{self.gemini_model}:generateContent"
