"""
Configuration dataclasses for cache components.
Provides immutable configuration objects for the cache manager.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Tuple

if TYPE_CHECKING:
    from depsolve_cache.config.settings import Settings


@dataclass(frozen=True)
class CacheConfig:
    """Depsolve cache configuration."""

    root: Path = field(default_factory=lambda: Path("/var/cache/osbuild-depsolve"))
    max_size: int = 1024 * 1024 * 1024  # 1GiB
    result_ttl: float = 60
    distro_names: Tuple[str, ...] = ()

    @classmethod
    def from_settings(cls, settings: "Settings") -> "CacheConfig":
        """Create config from application settings."""
        return cls(
            root=settings.cache_root_path,
            max_size=settings.cache_max_size,
            result_ttl=settings.result_cache_ttl,
            distro_names=tuple(settings.distro_names),
        )
