"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Grouping indexes used by the pipeline.

SizeIndex : size -> paths, singletons pruned before hashing
HashIndex : (size, digest) -> paths, only groups of 2+ are duplicates
"""

from collections import defaultdict
from typing import Dict, List, Iterator, Tuple

from dupfinder.core.models import File, DuplicateGroup


class SizeIndex:
    """
    Collects every scanned file by size.
    Sizes seen once are dropped by freeze(); after that the index is read-only.
    """

    def __init__(self):
        self._groups: Dict[int, List[str]] = defaultdict(list)
        self._frozen = False
        self.files_seen = 0

    def add(self, file: File) -> None:
        if self._frozen:
            raise RuntimeError("SizeIndex is frozen; no more files can be added")
        self._groups[file.size].append(file.path)
        self.files_seen += 1

    def freeze(self) -> "SizeIndex":
        """Drop singleton sizes. Only valid once every file has been added."""
        if not self._frozen:
            self._groups = {size: paths for size, paths in self._groups.items() if len(paths) >= 2}
            self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def groups(self) -> Dict[int, List[str]]:
        return {size: list(paths) for size, paths in self._groups.items()}

    def candidates(self) -> Iterator[File]:
        """Every path that shares its size with another one, group by group."""
        if not self._frozen:
            raise RuntimeError("SizeIndex must be frozen before candidates are read")
        for size, paths in self._groups.items():
            for path in paths:
                yield File(path=path, size=size)

    def candidate_count(self) -> int:
        return sum(len(paths) for paths in self._groups.values())

    def __len__(self) -> int:
        return len(self._groups)


class HashIndex:
    """
    Groups successfully hashed files by digest.
    Keyed by (size, digest), so every group has a single size.
    """

    def __init__(self):
        self._groups: Dict[Tuple[int, bytes], List[str]] = defaultdict(list)
        self.digests: Dict[str, bytes] = {}

    def add(self, file: File, digest: bytes) -> None:
        self._groups[(file.size, digest)].append(file.path)
        self.digests[file.path] = digest

    def duplicate_groups(self) -> List[DuplicateGroup]:
        """Groups with at least two members, sorted by size then first path."""
        groups = [
            DuplicateGroup(size=size, paths=paths)
            for (size, _digest), paths in self._groups.items()
            if len(paths) >= 2
        ]
        groups.sort(key=DuplicateGroup.sort_key)
        return groups

    def __len__(self) -> int:
        return len(self._groups)
