"""
Unified cache manager coordinating the depsolve caches.

This module provides the CacheManager class that a depsolving process holds
for its lifetime. It owns the result cache, knows where its distribution's
repository metadata lives, and runs the maintenance pass (shrink, expire,
reconcile) on request.
"""

import logging
from datetime import timedelta
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from depsolve_cache.cache.reconcile import cleanup_old_cache_dirs
from depsolve_cache.cache.repo_cache import RepoCache
from depsolve_cache.cache.result_cache import ResultCache
from depsolve_cache.config import CacheConfig, Settings, get_settings
from depsolve_cache.exceptions import ConfigurationException
from depsolve_cache.interfaces.cache import IResultCache
from depsolve_cache.rpmmd import PackageList

logger = logging.getLogger(__name__)


class CacheManager:
    """
    Cache coordination for one distribution's depsolve calls.

    Attributes:
        cache_root: Root holding one subdirectory per distribution
        distro: Distribution whose subtree this manager maintains
        max_size: Size budget for the distribution's repository metadata
        result_cache: Depsolve result cache shared by all callers

    Example:
        >>> manager = CacheManager("/var/cache/osbuild-depsolve", "fedora-41")
        >>> packages = manager.depsolve(key, lambda: run_depsolver(request))
        >>> manager.clean_cache()
        >>> manager.cleanup_distros(["fedora-40", "fedora-41"])
    """

    def __init__(
        self,
        cache_root: Union[str, Path],
        distro: str,
        max_size: int = 1024 * 1024 * 1024,  # 1GiB default
        result_ttl: Union[float, timedelta] = 60,
        result_cache: Optional[IResultCache] = None,
    ):
        """
        Initialize the cache manager.

        Args:
            cache_root: Root directory of the repository metadata cache
            distro: Distribution name; its cache lives in cache_root/distro
            max_size: Size budget in bytes for the distribution's cache
            result_ttl: Time-to-live for depsolve results
            result_cache: Optional pre-built result cache (e.g. shared with
                          other managers); created from result_ttl if omitted

        Raises:
            ConfigurationException: If distro is not a plain directory name
                                    or max_size is not positive
        """
        if not distro or Path(distro).name != distro or distro in (".", ".."):
            raise ConfigurationException(
                f"Invalid distribution name: {distro!r}",
                details={"distro": distro},
            )
        if max_size <= 0:
            raise ConfigurationException(
                f"Cache size budget must be positive, got {max_size}",
                details={"max_size": max_size},
            )

        self.cache_root = Path(cache_root)
        self.distro = distro
        self.max_size = max_size
        self.result_cache = result_cache if result_cache is not None else ResultCache(result_ttl)

        logger.info(
            f"Initializing CacheManager: root={self.cache_root}, "
            f"distro={distro}, max_size={max_size}"
        )

    @classmethod
    def default(cls, distro: str, settings: Optional[Settings] = None) -> "CacheManager":
        """
        Create a CacheManager from environment settings.

        Args:
            distro: Distribution name
            settings: Optional Settings instance; get_settings() if omitted

        Environment Variables:
            CACHE_ROOT: Cache root directory
            CACHE_MAX_SIZE: Size budget in bytes (default: 1GiB)
            RESULT_CACHE_TTL: Depsolve result TTL in seconds (default: 60)
        """
        if settings is None:
            settings = get_settings()
        config = CacheConfig.from_settings(settings)
        return cls(
            cache_root=config.root,
            distro=distro,
            max_size=config.max_size,
            result_ttl=config.result_ttl,
        )

    @property
    def distro_cache_dir(self) -> Path:
        """Directory the depsolver writes this distribution's metadata into."""
        return self.cache_root / self.distro

    def depsolve(self, key: str, solve: Callable[[], PackageList]) -> PackageList:
        """
        Return the cached result for key, or compute and cache it.

        Args:
            key: Request key, e.g. from rpmmd.request_key()
            solve: Runs the external depsolver; only called on a miss

        Returns:
            The depsolved package list

        Raises:
            Any exception raised by solve propagates; nothing is cached then
        """
        packages, found = self.result_cache.get(key)
        if found:
            logger.debug(f"Depsolve cache HIT: {key}")
            return packages

        logger.debug(f"Depsolve cache MISS: {key}")
        packages = solve()
        self.result_cache.store(key, packages)
        return packages

    def repo_cache(self) -> RepoCache:
        """Scan the distribution's subtree into a fresh RepoCache."""
        return RepoCache(self.distro_cache_dir, self.max_size)

    def clean_cache(self) -> RepoCache:
        """
        Enforce the size budget and drop expired depsolve results.

        Returns:
            The RepoCache after shrinking

        Raises:
            CacheScanException: If the distribution subtree cannot be scanned
            CacheEvictionException: If a repository cannot be removed
        """
        cache = self.repo_cache()
        cache.shrink()
        self.result_cache.clean_cache()
        return cache

    def cleanup_distros(self, distro_names: Iterable[str]) -> List[Path]:
        """
        Remove caches of distributions not in distro_names.

        This manager's own distribution is always kept.
        """
        names = set(distro_names)
        names.add(self.distro)
        return cleanup_old_cache_dirs(self.cache_root, names)

    def stats(self) -> dict:
        """
        Get statistics for the repository and result caches.

        Returns:
            A dictionary containing:
                - distro: Distribution name
                - repo_cache: RepoCache statistics for the distribution subtree
                - result_cache: ResultCache statistics
        """
        return {
            "distro": self.distro,
            "repo_cache": self.repo_cache().stats(),
            "result_cache": self.result_cache.stats(),
        }
