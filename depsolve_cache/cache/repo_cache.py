"""
Size-bounded cache of repository metadata.

A RepoCache is built from a fresh scan immediately before maintenance and
discarded afterwards. Eviction removes whole repository elements, oldest
first, since a repository missing one of its metadata files must be
fetched again in full anyway.
"""

import logging
import shutil
from pathlib import Path
from typing import Union

from depsolve_cache.cache.scanner import RepoElement, scan_cache
from depsolve_cache.interfaces.cache import IRepoCache
from depsolve_cache.exceptions import CacheEvictionException

logger = logging.getLogger(__name__)


class RepoCache(IRepoCache):
    """
    Repository metadata cache rooted at one directory.

    The root may be the whole cache root or one distribution's subtree;
    eviction never touches paths outside it.

    Attributes:
        root: The scanned directory
        max_size: Size budget in bytes enforced by shrink()
        size: Tracked size in bytes (element files plus directory overhead)
        repo_elements: Repository ID to RepoElement mapping
        repo_recency: Repository IDs, oldest first

    Example:
        >>> cache = RepoCache("/var/cache/osbuild-depsolve/fedora-41", 1024 ** 3)
        >>> cache.shrink()
        >>> print(f"{cache.size} bytes in {len(cache.repo_elements)} repos")
    """

    def __init__(self, root: Union[str, Path], max_size: int):
        """
        Scan root and build the cache state.

        Args:
            root: Directory to scan
            max_size: Size budget in bytes

        Raises:
            CacheScanException: If the walk fails; no partial cache is built
        """
        self.root = Path(root)
        self.max_size = max_size

        scan = scan_cache(self.root)
        self.size = scan.size
        self.repo_elements = scan.repo_elements
        self.repo_recency = scan.repo_recency

    def _remove_element(self, repo_id: str, element: RepoElement) -> None:
        for path in sorted(element.paths):
            try:
                if path.is_dir() and not path.is_symlink():
                    shutil.rmtree(path)
                else:
                    path.unlink()
            except FileNotFoundError:
                # already gone counts as removed
                continue
            except OSError as e:
                logger.error(f"Failed to remove {path} of repository {repo_id}: {e}")
                raise CacheEvictionException(
                    f"Failed to remove cache path {path}: {e.strerror}",
                    details={"repo_id": repo_id, "path": str(path)},
                ) from e

    def shrink(self) -> None:
        """
        Evict the oldest repositories until size drops below max_size.

        Each element is removed from disk before it is dropped from the
        bookkeeping, so on failure size, repo_elements and repo_recency still
        describe exactly the elements not yet fully removed. Loose files and
        directories outside repository elements are never evicted; if they
        alone exceed the budget, shrink stops once no repositories remain.

        Raises:
            CacheEvictionException: On the first path that cannot be removed.
                Evictions completed before it stay in effect.
        """
        evicted = 0
        freed = 0
        while self.size >= self.max_size and self.repo_recency:
            repo_id = self.repo_recency[0]
            element = self.repo_elements[repo_id]

            self._remove_element(repo_id, element)

            self.size -= element.size
            del self.repo_elements[repo_id]
            self.repo_recency.pop(0)
            evicted += 1
            freed += element.size
            logger.info(
                f"Evicted repository {repo_id} from {self.root} ({element.size} bytes)"
            )

        if evicted:
            logger.info(
                f"Shrunk cache {self.root}: evicted {evicted} repositories, "
                f"freed {freed} bytes, {self.size} bytes remaining"
            )
        else:
            logger.debug(f"Cache {self.root} within budget ({self.size}/{self.max_size} bytes)")

    def stats(self) -> dict:
        """
        Get cache statistics.

        Returns:
            A dictionary containing:
                - root: Scanned directory
                - size: Tracked size in bytes
                - max_size: Size budget in bytes
                - repos: Number of repository elements
                - usage: size / max_size
        """
        return {
            "root": str(self.root),
            "size": self.size,
            "max_size": self.max_size,
            "repos": len(self.repo_elements),
            "usage": self.size / self.max_size if self.max_size > 0 else 0.0,
        }


def new_rpm_cache(root: Union[str, Path], max_size: int) -> RepoCache:
    """Scan root and return a RepoCache enforcing max_size."""
    return RepoCache(root, max_size)
