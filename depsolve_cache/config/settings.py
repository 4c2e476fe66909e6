"""
Settings for the depsolve metadata cache.
Uses pydantic-settings for environment variable management.
"""

from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Cache settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Repository metadata cache
    cache_root: str = "/var/cache/osbuild-depsolve"
    cache_max_size: int = 1024 * 1024 * 1024  # 1GiB, in bytes

    # Depsolve result cache
    result_cache_ttl: float = 60  # seconds

    # Distributions whose caches are kept by cleanup
    distro_names: List[str] = []

    @field_validator("cache_max_size")
    @classmethod
    def _positive_size(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("cache_max_size must be positive")
        return value

    @field_validator("result_cache_ttl")
    @classmethod
    def _non_negative_ttl(cls, value: float) -> float:
        if value < 0:
            raise ValueError("result_cache_ttl must not be negative")
        return value

    @property
    def cache_root_path(self) -> Path:
        """Return the cache root as an absolute Path."""
        return Path(self.cache_root).resolve()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
