"""
Filesystem scanner for the repository metadata cache.

Walks a cache root once and produces the size accounting and recency
ordering the RepoCache evicts from. There is no persisted index: every
RepoCache is built from a fresh walk.
"""

import logging
import os
import stat
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Set, Union

from depsolve_cache.cache.paths import repo_id_for_path
from depsolve_cache.exceptions import CacheScanException

logger = logging.getLogger(__name__)


@dataclass
class RepoElement:
    """
    All cache paths of one repository.

    Attributes:
        paths: Top-level element paths (files and metadata directories)
        size: Bytes attributed to the element, its directories included
        mtime: Latest modification time of the element's files
        dir_mtime: Latest directory modification time, used without files
    """
    paths: Set[Path] = field(default_factory=set)
    size: int = 0
    mtime: Optional[float] = None
    dir_mtime: Optional[float] = None

    @property
    def recency(self) -> float:
        if self.mtime is not None:
            return self.mtime
        if self.dir_mtime is not None:
            return self.dir_mtime
        return 0.0


@dataclass
class ScanResult:
    """Result of a cache walk: total size, elements and eviction order."""
    size: int = 0
    repo_elements: Dict[str, RepoElement] = field(default_factory=dict)
    repo_recency: List[str] = field(default_factory=list)


def _raise_scan_error(err: OSError) -> None:
    raise CacheScanException(
        f"Failed to scan cache path {err.filename}: {err.strerror}",
        details={"path": str(err.filename), "errno": err.errno},
    ) from err


def scan_cache(root: Union[str, Path]) -> ScanResult:
    """
    Walk a cache root and account for every path below it.

    Directories add their own size field to the total (the root itself is not
    counted). Files add their size only when they belong to a repository
    element; loose files are skipped. The recency order is oldest first, with
    ties broken by repository ID.

    Args:
        root: The cache root, or a single distribution's subtree

    Returns:
        ScanResult for the tree. A missing root yields an empty result.

    Raises:
        CacheScanException: If any path below root cannot be read
    """
    root = Path(root)
    result = ScanResult()
    if not root.exists():
        logger.debug(f"Cache root {root} does not exist, nothing to scan")
        return result

    elements = result.repo_elements
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_scan_error):
        current = Path(dirpath)
        for name in dirnames + filenames:
            path = current / name
            try:
                st = path.lstat()
            except OSError as e:
                _raise_scan_error(e)

            is_dir = stat.S_ISDIR(st.st_mode)
            owner = repo_id_for_path(root, path)
            if is_dir:
                result.size += st.st_size
            if owner is None:
                continue

            repo_id, element_path = owner
            element = elements.setdefault(repo_id, RepoElement())
            element.paths.add(element_path)
            if is_dir:
                element.size += st.st_size
                if element.dir_mtime is None or st.st_mtime > element.dir_mtime:
                    element.dir_mtime = st.st_mtime
            else:
                result.size += st.st_size
                element.size += st.st_size
                if element.mtime is None or st.st_mtime > element.mtime:
                    element.mtime = st.st_mtime

    result.repo_recency = sorted(
        elements, key=lambda repo_id: (elements[repo_id].recency, repo_id)
    )
    logger.debug(
        f"Scanned {root}: {result.size} bytes in {len(elements)} repositories"
    )
    return result
