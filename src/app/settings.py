from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "elderly-population-dashboard"
    app_env: str = "local"
    log_level: str = "INFO"
    api_prefix: str = "/api"
    cors_allow_origins: str = "http://localhost:8501,http://127.0.0.1:8501"

    data_root: Path = Field(default_factory=lambda: Path("data"))
    dataset_filename: str = "elderly_data.json"

    dashboard_api_base_url: str = "http://127.0.0.1:8000/api"
    request_timeout_seconds: int = 10
    http_max_retries: int = 2
    http_backoff_seconds: float = 0.5

    top_states_limit: int = 8
    default_state: str = "BR"
    default_year: str = "2024"
    state_coords_path: Path = Field(default_factory=lambda: Path("configs/state_coords.yml"))

    @property
    def cors_allow_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_allow_origins.split(",") if origin.strip()]

    @property
    def dataset_path(self) -> Path:
        return self.data_root / self.dataset_filename


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
