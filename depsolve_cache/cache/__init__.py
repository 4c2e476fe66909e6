"""Cache package for the depsolve caching layer.

Provides the size-bounded repository metadata cache, the depsolve result
cache and cache directory reconciliation.
"""

from depsolve_cache.cache.paths import REPO_ID_LENGTH, repo_id_from_name
from depsolve_cache.cache.scanner import RepoElement, ScanResult, scan_cache
from depsolve_cache.cache.repo_cache import RepoCache, new_rpm_cache
from depsolve_cache.cache.result_cache import ResultCache, RWLock, new_dnf_cache
from depsolve_cache.cache.reconcile import cleanup_old_cache_dirs
from depsolve_cache.cache.cache_manager import CacheManager

__all__ = [
    "REPO_ID_LENGTH",
    "repo_id_from_name",
    "RepoElement",
    "ScanResult",
    "scan_cache",
    "RepoCache",
    "new_rpm_cache",
    "ResultCache",
    "RWLock",
    "new_dnf_cache",
    "cleanup_old_cache_dirs",
    "CacheManager",
]
