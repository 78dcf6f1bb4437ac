from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VerificationSettings(BaseSettings):
    model_config = SettingsConfigDict(
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    provider_timeout_ms: int = Field(default=8000, gt=0)
    enable_fallback_search: bool = False
    extract_max_chars: int = Field(default=200_000, gt=0)
    verify_user_agent: str = "asguju/0.1"

    @property
    def timeout_seconds(self) -> float:
        return self.provider_timeout_ms / 1000.0
