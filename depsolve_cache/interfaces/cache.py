"""
Cache interfaces for the depsolve caching layer.

This module defines interfaces for the cache components callers depend on:
- IResultCache: In-memory depsolve result memoization
- IRepoCache: Size-bounded repository metadata cache
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from depsolve_cache.rpmmd import PackageList


class IResultCache(ABC):
    """
    Abstract interface for depsolve result caches.

    Implementations:
        - ResultCache: In-memory, TTL-bounded, reader/writer locked
    """

    @abstractmethod
    def store(self, key: str, packages: "PackageList") -> None:
        """
        Store a depsolve result.

        Args:
            key: Opaque request key
            packages: The depsolved package list
        """
        pass

    @abstractmethod
    def get(self, key: str) -> Tuple[Optional["PackageList"], bool]:
        """
        Retrieve a depsolve result.

        Args:
            key: Opaque request key

        Returns:
            (packages, found). A miss is not an error.
        """
        pass

    @abstractmethod
    def clean_cache(self) -> int:
        """Remove expired entries, returning how many were removed."""
        pass

    @abstractmethod
    def stats(self) -> dict:
        """Get cache statistics."""
        pass


class IRepoCache(ABC):
    """
    Abstract interface for repository metadata caches.

    Implementations:
        - RepoCache: Scan-on-construction cache evicting whole repositories
    """

    size: int
    max_size: int

    @abstractmethod
    def shrink(self) -> None:
        """Evict repositories until the cache is below its size budget."""
        pass

    @abstractmethod
    def stats(self) -> dict:
        """Get cache statistics."""
        pass
