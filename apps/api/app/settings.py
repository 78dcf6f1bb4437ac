from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        extra="ignore",
        env_file=(".env", "apps/api/.env"),
        env_file_encoding="utf-8",
    )

    gemini_api_key: str | None = None
    gemini_model: str = "models/gemini-2.5-flash"
    gemini_timeout_seconds: float = 60.0
    upload_dir: str = "/tmp/asguju_uploads"
    max_upload_files: int = 8
    prompt_file_chars: int = 4000
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]


settings = Settings()
