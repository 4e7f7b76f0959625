# app/config.py

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ---- OMDb ----
    omdb_api_key: Optional[str] = None
    omdb_base_url: str = "http://www.omdbapi.com/"
    omdb_timeout: float = 10.0

    # ---- storage ----
    data_dir: Path = Path("data")
    favorites_file: str = "favorites.json"

    # ---- app/runtime ----
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 3001
    # comma separated, e.g. CORS_ORIGINS=http://localhost:3000,http://localhost:3002
    cors_origins: str = "http://localhost:3000,http://localhost:3002"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @property
    def favorites_path(self) -> Path:
        return self.data_dir / self.favorites_file

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Singleton accessor to avoid reparsing .env on every import."""
    return Settings()
