"""
Package and repository models shared by the depsolve caches.

RepoConfig.hash() produces the repository ID that prefixes every on-disk
cache element of a repository.
"""

import hashlib
import json
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class Package:
    """A depsolved RPM package."""

    name: str
    version: str
    release: str
    arch: str
    epoch: int = 0
    summary: str = ""
    description: str = ""
    url: str = ""
    license: str = ""
    buildtime: Optional[int] = None
    checksum: Optional[str] = None
    repo_id: Optional[str] = None

    def nevra(self) -> str:
        """Return the package as name-[epoch:]version-release.arch."""
        evr = f"{self.version}-{self.release}"
        if self.epoch:
            evr = f"{self.epoch}:{evr}"
        return f"{self.name}-{evr}.{self.arch}"


PackageList = List[Package]


def _bool_str(value: bool) -> str:
    return "true" if value else "false"


@dataclass(frozen=True)
class RepoConfig:
    """Configuration of a single RPM repository."""

    name: str = ""
    base_urls: Tuple[str, ...] = ()
    metalink: str = ""
    mirrorlist: str = ""
    gpg_keys: Tuple[str, ...] = ()
    check_gpg: bool = False
    check_repo_gpg: bool = False
    ignore_ssl: bool = False
    metadata_expire: str = ""
    module_hotfixes: bool = False

    def hash(self) -> str:
        """
        Return the repository ID for this configuration.

        The ID is the sha256 hex digest of every field that changes the
        repository content. The name is not part of it: two
        repos differing only in name share one cache element.
        """
        data = (
            "".join(self.base_urls)
            + self.metalink
            + self.mirrorlist
            + "".join(self.gpg_keys)
            + _bool_str(self.check_gpg)
            + _bool_str(self.check_repo_gpg)
            + _bool_str(self.ignore_ssl)
            + self.metadata_expire
            + _bool_str(self.module_hotfixes)
        )
        return hashlib.sha256(data.encode("utf-8")).hexdigest()


def request_key(
    packages: Iterable[str],
    repos: Iterable[RepoConfig],
    *extra: str,
) -> str:
    """
    Generate a result cache key for a depsolve request.

    Package order does not matter; repository order does, since it sets
    repository priority during depsolving.

    Args:
        packages: Package names (or specs) to resolve
        repos: Repositories the request is solved against
        *extra: Any further request parameters (arch, module platform ID, ...)

    Returns:
        A SHA-256 hex digest identifying the request
    """
    payload = {
        "packages": sorted(packages),
        "repos": [repo.hash() for repo in repos],
        "extra": list(extra),
    }
    canonical = json.dumps(payload, sort_keys=True)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
