"""Application configuration loaded from environment variables."""
import os
from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_prefix="MOODCRAFT_", extra="ignore")

    # Local history storage
    data_path: str = os.getenv(
        "DATA_PATH",
        os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))),
    )
    storage_backend: Literal["json", "sqlite", "memory"] = "json"
    history_key: str = "moodcraft.entries"

    @property
    def sqlite_db_path(self) -> str:
        return os.path.join(self.data_path, "moodcraft.db")

    # Classification
    keyword_match_mode: Literal["substring", "word"] = "substring"

    # Seconds to wait before revealing the narrative response
    response_delay_seconds: float = 0.0

    # API configuration
    api_host: str = "127.0.0.1"
    api_port: int = 8082
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]


@lru_cache
def get_settings() -> Settings:
    return Settings()
