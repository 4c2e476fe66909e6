"""
Cache directory reconciliation.

Each distribution caches into <root>/<distro-name>/. Directories of
distributions that are no longer built, and repository elements left
directly under the root by the older flat layout, are removed here.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import Iterable, List, Union

from depsolve_cache.cache.paths import is_repo_name
from depsolve_cache.exceptions import CacheEvictionException, CacheScanException

logger = logging.getLogger(__name__)


def _remove_path(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def cleanup_old_cache_dirs(
    root: Union[str, Path],
    distro_names: Iterable[str],
) -> List[Path]:
    """
    Remove cache directories of unknown distributions and legacy elements.

    Every immediate subdirectory of root not named in distro_names is removed
    recursively. Every direct child whose name carries a repository ID is
    removed regardless of distro_names, since flat-layout elements cannot be
    attributed to a distribution. Other loose files under root are kept.

    Args:
        root: The cache root
        distro_names: Names of all distributions still in use

    Returns:
        The removed paths. A missing root returns an empty list.

    Raises:
        CacheScanException: If root exists but cannot be listed
        CacheEvictionException: On the first path that cannot be removed
    """
    root = Path(root)
    known = set(distro_names)
    removed: List[Path] = []

    try:
        entries = sorted(os.scandir(root), key=lambda e: e.name)
    except FileNotFoundError:
        logger.debug(f"Cache root {root} does not exist, nothing to clean")
        return removed
    except OSError as e:
        raise CacheScanException(
            f"Failed to list cache root {root}: {e.strerror}",
            details={"path": str(root)},
        ) from e

    for entry in entries:
        path = Path(entry.path)
        if is_repo_name(entry.name):
            reason = "legacy cache element"
        elif entry.is_dir(follow_symlinks=False) and entry.name not in known:
            reason = "cache of retired distribution"
        else:
            continue

        try:
            _remove_path(path)
        except FileNotFoundError:
            continue
        except OSError as e:
            logger.error(f"Failed to remove {reason} {path}: {e}")
            raise CacheEvictionException(
                f"Failed to remove cache path {path}: {e.strerror}",
                details={"path": str(path), "reason": reason},
            ) from e
        logger.info(f"Removed {reason} {path}")
        removed.append(path)

    return removed
