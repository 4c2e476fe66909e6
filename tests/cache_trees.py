"""Repository metadata cache trees for tests."""

import os
from pathlib import Path
from typing import Dict, Iterable, NamedTuple


class FileInfo(NamedTuple):
    size: int
    mtime: int


CacheTree = Dict[str, FileInfo]

RHEL_OLD = "9adf133053f0691a0ec12e73cbf1875a90c9268b4f09162fc3387fd76ecb3bcc"
RHEL_NEW = "df2665154150abf76f4d86156228a75c39f3f31a79d4a861d76b1edd89814b62"
FAKE_1 = "1" * 64
FAKE_2 = "2" * 64
FAKE_3 = "3" * 64
FAKE_A = "a" * 64
FAKE_Y = "y" * 64

CACHE_TREES: Dict[str, CacheTree] = {
    # real repo metadata file names and sizes
    "rhel84-aarch64": {
        f"{RHEL_OLD}.solv": FileInfo(2095095, 100),
        f"{RHEL_OLD}-filenames.solvx": FileInfo(14473401, 100),
        f"{RHEL_OLD}-33d346d177279673/repodata/gen/groups.xml": FileInfo(1419587, 100),
        f"{RHEL_OLD}-33d346d177279673/repodata/3eabd1122210e4def18ae4b96a18aa5bcc186abf2ec14e2e8f1c1bb1ab4d11da-modules.yaml.gz": FileInfo(156314, 100),
        f"{RHEL_OLD}-33d346d177279673/repodata/90fd2e7463220a07457e76ae905e1bad754c29e22202bb3202c971a5ece28396-comps-AppStream.aarch64.xml.gz": FileInfo(199426, 100),
        f"{RHEL_OLD}-33d346d177279673/repodata/77a66c76b5f6ba51aaee6c0cf76d701601e8b622d1701d1781dabec434f27413-filelists.xml.gz": FileInfo(14370201, 100),
        f"{RHEL_OLD}-33d346d177279673/repodata/1941c723c94218eed43eac3174aa94cefbe921e15547c39251a95895024207ca-primary.xml.gz": FileInfo(11439375, 100),
        f"{RHEL_OLD}-33d346d177279673/repodata/repomd.xml": FileInfo(13285, 100),
        f"{RHEL_NEW}.solv": FileInfo(1147863, 300),
        f"{RHEL_NEW}-filenames.solvx": FileInfo(11133964, 300),
        f"{RHEL_NEW}-98177081b9162766/repodata/gen/groups.xml": FileInfo(1298102, 300),
        f"{RHEL_NEW}-98177081b9162766/repodata/d74783221709ab27d543c1cfc4c02562fde6edfaaaac33ac73a68ecf53188695-comps-BaseOS.aarch64.xml.gz": FileInfo(174076, 300),
        f"{RHEL_NEW}-98177081b9162766/repodata/5ded48b4c9e238288130c6670d99f5febdb7273e4a31ac213836a15a2076514d-filelists.xml.gz": FileInfo(11081612, 300),
        f"{RHEL_NEW}-98177081b9162766/repodata/8120caf8ebbb8c8b37f6f0dd027d866020ebe7acf9c9ce49ae9903b761986f0c-primary.xml.gz": FileInfo(1836471, 300),
        f"{RHEL_NEW}-98177081b9162766/repodata/repomd.xml": FileInfo(12817, 300),
    },
    # fake but resembling real data
    "fake-real": {
        f"{FAKE_3}.solv": FileInfo(100, 0),
        f"{FAKE_3}-filenames.solv": FileInfo(200, 0),
        f"{FAKE_3}.whatever": FileInfo(110, 0),
        f"{FAKE_3}/repodata/a": FileInfo(1000, 0),
        f"{FAKE_3}/repodata/b": FileInfo(3829, 0),
        f"{FAKE_3}/repodata/c": FileInfo(831989, 0),
        f"{FAKE_2}.solv": FileInfo(120, 2),
        f"{FAKE_2}-filenames.solv": FileInfo(232, 2),
        f"{FAKE_2}.whatever": FileInfo(110, 2),
        f"{FAKE_2}/repodata/a": FileInfo(1000, 2),
        f"{FAKE_2}/repodata/b": FileInfo(3829, 2),
        f"{FAKE_2}/repodata/c": FileInfo(831989, 2),
        f"{FAKE_1}.solv": FileInfo(105, 4),
        f"{FAKE_1}-filenames.solv": FileInfo(200, 4),
        f"{FAKE_1}.whatever": FileInfo(110, 4),
        f"{FAKE_1}/repodata/a": FileInfo(2390, 4),
        f"{FAKE_1}/repodata/b": FileInfo(1234890, 4),
        f"{FAKE_1}/repodata/c": FileInfo(483, 4),
    },
    # just a mess of files, including files without a repo ID
    "completely-fake": {
        "somefile": FileInfo(192, 10291920),
        f"{FAKE_Y}-repofiley": FileInfo(29384, 11),
        f"{FAKE_Y}-repofiley2": FileInfo(293, 31),
        f"{FAKE_A}-repofile": FileInfo(29384, 30),
        f"{FAKE_A}-repofileb": FileInfo(293, 45),
    },
}


def create_test_cache(root: Path, config: CacheTree) -> None:
    """Create sparse files of the configured sizes and mtimes under root."""
    for rel_path, info in config.items():
        full_path = root / rel_path
        full_path.parent.mkdir(parents=True, exist_ok=True)
        with open(full_path, "wb") as fp:
            fp.truncate(info.size)
        os.utime(full_path, (info.mtime, info.mtime))

        # touch the top level directory of the element
        parts = Path(rel_path).parts
        if len(parts) > 1:
            top = root / parts[0]
            os.utime(top, (info.mtime, info.mtime))


def dir_overhead(root: Path) -> int:
    """Sum of the size fields of every directory below root."""
    total = 0
    for dirpath, dirnames, _ in os.walk(root):
        for name in dirnames:
            total += (Path(dirpath) / name).lstat().st_size
    return total


def repo_ids(config: CacheTree) -> set:
    return {path[:64] for path in config if len(path) >= 64}


def size_sum(config: CacheTree, ids: Iterable[str] = ()) -> int:
    """Sum the sizes of repository files, optionally only for some repo IDs."""
    ids = set(ids)
    return sum(
        info.size
        for path, info in config.items()
        if len(path) >= 64 and (not ids or path[:64] in ids)
    )


def recency(config: CacheTree, repo_id: str) -> int:
    return max(info.mtime for path, info in config.items() if path.startswith(repo_id))
