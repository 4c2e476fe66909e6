"""Configuration module exports."""

from depsolve_cache.config.settings import Settings, get_settings
from depsolve_cache.config.cache_config import CacheConfig

__all__ = [
    "Settings",
    "get_settings",
    "CacheConfig",
]
