# src/fair_project_ideator/config/settings.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_ROOT = Path(__file__).resolve().parents[3]


class Secrets(BaseSettings):
    """Credential and sensitive configuration layer."""

    google_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GOOGLE_API_KEY", "GEMINI_API_KEY"),
    )

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


class RuntimeSettings(BaseSettings):
    """Non-secret application settings."""

    environment: Literal["local", "dev", "staging", "prod"] = Field(default="local")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="WARNING", alias="LOG_LEVEL")
    model_name: str = Field(default="gemini-2.5-flash", alias="IDEATOR_MODEL")
    enable_search_grounding: bool = Field(default=True, alias="IDEATOR_SEARCH_GROUNDING")
    exports_dir: Path = Field(default=APP_ROOT / "data" / "exports", alias="IDEATOR_EXPORTS_DIR")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


class Settings:
    """Centralized settings facade accessible throughout the application."""

    def __init__(self) -> None:
        self.secrets = Secrets()
        self.runtime = RuntimeSettings()

    def as_dict(self) -> dict[str, Any]:
        return {
            "environment": self.runtime.environment,
            "log_level": self.runtime.log_level,
            "model_name": self.runtime.model_name,
            "enable_search_grounding": self.runtime.enable_search_grounding,
            "exports_dir": str(self.runtime.exports_dir),
            "google_configured": self.secrets.google_api_key is not None,
        }


settings = Settings()
