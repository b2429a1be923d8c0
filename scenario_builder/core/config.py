from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── App ──────────────────────────────────────────────────────────────────
    app_name: str = "AI Scenario Builder"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # ── Server (used by `scenario-builder serve`) ────────────────────────────
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3001, alias="PORT")
    api_prefix: str = "/api"

    # ── Input validation ─────────────────────────────────────────────────────
    min_description_length: int = 10

    # ── Mock AI generator ────────────────────────────────────────────────────
    # Bounded wait before classification; set both to 0 to disable.
    simulated_latency_min_ms: int = Field(default=50, ge=0)
    simulated_latency_max_ms: int = Field(default=150, ge=0)
    ai_provider: str = "mock"

    # ── CORS ─────────────────────────────────────────────────────────────────
    cors_origins: list[str] = Field(
        default=["http://localhost:3000"], alias="CORS_ORIGINS"
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
