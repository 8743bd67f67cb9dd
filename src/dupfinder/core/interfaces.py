"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the duplicate finder.
These protocols enforce structural typing using Python's `typing.Protocol` to ensure
consistency across modules while maintaining flexibility and modularity.

Key Components:
---------------
- HashAlgorithm: Factory for incremental hash objects (xxHash, MD5, ...).
- Hasher: Interface for computing the full content digest of a file.
- FileScanner: Interface for walking root directories and yielding regular files.
- SizeStage / HashStage: Interfaces for the two stages of the pipeline.
- Deduplicator: Interface for the engine coordinating all stages.
"""

from typing import Protocol, Iterable, Iterator, List, Optional, Callable
from dupfinder.core.models import File, ScanParams, ScanResult, ScanWarning


# ===== Interfaces =====

class HashObject(Protocol):
    """Incremental hash state, as returned by hashlib or xxhash constructors."""
    def update(self, data: bytes) -> None: ...
    def digest(self) -> bytes: ...


class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions like MD5 or xxHash
    without affecting the rest of the pipeline.
    """
    name: str

    def new(self) -> HashObject:
        """Returns a fresh incremental hash object."""
        ...


class Hasher(Protocol):
    """Interface for hashing the whole content of a file."""
    def compute_full_hash(self, file: File) -> bytes: ...


class FileScanner(Protocol):
    """
    Interface for scanning file systems and collecting file metadata.
    """
    warnings: List[ScanWarning]

    def scan(
        self,
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> Iterator[File]:
        """
        Lazily yield every regular file under the configured roots.

        Args:
            stopped_flag: Function that returns True if operation should be canceled.
            progress_callback: Optional callback for reporting progress (stage, current, total).
        """
        ...


# =============================
# Stage Interfaces
# =============================

class SizeStage(Protocol):
    """
    First stage: group files by size and drop sizes seen only once.
    """
    def process(
        self,
        files: Iterable[File],
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ):
        """
        Returns a frozen SizeIndex where every group has 2+ members.
        """
        ...


class HashStage(Protocol):
    """
    Second stage: hash every candidate and group by digest.
    """
    def process(
        self,
        size_index,
        warnings: List[ScanWarning],
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ):
        """
        Returns a HashIndex built from every candidate that hashed successfully.
        Hashing failures are appended to `warnings`.
        """
        ...


class Deduplicator(Protocol):
    """
    Interface for the main engine.

    Coordinates traversal, size filtering and hashing.
    """
    def find_duplicates(
        self,
        params: ScanParams,
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> ScanResult:
        """
        Run the full pipeline over `params.roots`.

        Returns:
            ScanResult with sorted duplicate groups, warnings and statistics.
        """
        ...
