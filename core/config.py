from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="VISION_",
        extra="ignore",
    )

    # Image source resolution
    http_timeout_seconds: float = 10.0
    max_image_bytes: int = 20 * 1024 * 1024
    allow_local_files: bool = False

    # HTTP layer
    cors_allow_origins: List[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
