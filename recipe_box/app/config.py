from __future__ import annotations

from pydantic import AnyUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8-sig",
        case_sensitive=False,
        extra="ignore",
    )

    SUPABASE_URL: AnyUrl
    SUPABASE_SERVICE_ROLE_KEY: str
    FRONTEND_CORS_ORIGINS: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
    )

    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_TEMPERATURE: float = 0.3
    GEMINI_MODEL: str = "gemini-2.5-flash"

    # Page text handed to the model is cut at this many characters.
    CONTENT_MAX_CHARS: int = Field(default=8000, ge=1)
    FETCH_TIMEOUT_SECONDS: float = 15.0
    MAX_UPLOAD_BYTES: int = 20 * 1024 * 1024


settings = Settings()
