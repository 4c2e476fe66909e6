"""
Custom exception hierarchy for the depsolve metadata cache.

Provides structured error handling with stable error codes. Cache misses and
a missing cache root are normal results, never exceptions.
"""

from typing import Optional


class DepsolveCacheException(Exception):
    """Base exception for all cache errors"""
    error_code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class CacheScanException(DepsolveCacheException):
    """Cache directory could not be walked or listed"""
    error_code = "CACHE_SCAN_ERROR"


class CacheEvictionException(DepsolveCacheException):
    """Removing a cache element from disk failed"""
    error_code = "CACHE_EVICTION_ERROR"


class ConfigurationException(DepsolveCacheException):
    """Invalid cache configuration"""
    error_code = "CONFIGURATION_ERROR"
