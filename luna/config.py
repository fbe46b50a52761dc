"""Application configuration loaded from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """All configuration is loaded from ``LUNA_*`` environment variables (or .env file)."""

    # --- App ---
    app_name: str = "Luna"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    environment: str = "development"  # development | production

    # --- Storage ---
    data_path: str = "luna_state.json"  # snapshot of cycles + logs
    cycle_config_path: str | None = None  # override for the bundled cycle_config.yaml

    # --- Insights ---
    enable_ai: bool = False
    anthropic_api_key: str = ""  # server-side only
    insight_model: str = "claude-haiku-4-5-20251001"
    insight_max_tokens: int = 200
    insight_timeout_seconds: float = 10.0

    # --- CORS ---
    cors_origins: list[str] = ["http://localhost:3000"]

    model_config = {"env_prefix": "LUNA_", "env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
