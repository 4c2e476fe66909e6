"""
Interface definitions for the depsolve caching layer.

Available Interfaces:
    IResultCache: Depsolve result cache interface
    IRepoCache: Repository metadata cache interface
"""

from depsolve_cache.interfaces.cache import IResultCache, IRepoCache

__all__ = [
    "IResultCache",
    "IRepoCache",
]
