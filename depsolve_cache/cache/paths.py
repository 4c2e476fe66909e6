"""
Path classification for the repository metadata cache.

Every cache element of a repository is named after its repository ID, a 64
character content hash:

    <root>/<distro>/<repo-id>.solv
    <root>/<distro>/<repo-id>-filenames.solvx
    <root>/<distro>/<repo-id>-<hash>/repodata/repomd.xml

Names shorter than the ID belong to no repository (loose files).
"""

from pathlib import Path
from typing import Optional, Tuple

REPO_ID_LENGTH = 64


def repo_id_from_name(name: str) -> Optional[str]:
    """Return the repository ID carried by a path component, if any."""
    if len(name) < REPO_ID_LENGTH:
        return None
    return name[:REPO_ID_LENGTH]


def is_repo_name(name: str) -> bool:
    return repo_id_from_name(name) is not None


def repo_id_for_path(root: Path, path: Path) -> Optional[Tuple[str, Path]]:
    """
    Find the repository element a path belongs to.

    The components of path below root are checked in order; the first one
    carrying a repository ID names the element. Files under
    <repo-id>-<hash>/repodata/ are attributed to the enclosing directory.

    Args:
        root: The scan root
        path: A path at or below root

    Returns:
        (repo_id, element_path) where element_path is the top-level path
        removed on eviction, or None for loose paths
    """
    element = root
    for part in path.relative_to(root).parts:
        element = element / part
        repo_id = repo_id_from_name(part)
        if repo_id is not None:
            return repo_id, element
    return None
