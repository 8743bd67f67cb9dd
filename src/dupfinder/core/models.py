"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for file scanning and duplicate detection.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Dict, Optional, Union, Callable
from enum import Enum

logger = logging.getLogger(__name__)


# =============================
# Enums
# =============================

class HashAlgorithmName(Enum):
    """
    Content digest used to compare candidate files.
    """
    XXHASH = "xxhash"
    MD5 = "md5"

    def __repr__(self) -> str:
        return self.value


class WarningKind(Enum):
    ROOT_UNAVAILABLE = "RootUnavailable"
    DIRECTORY_UNAVAILABLE = "DirectoryUnavailable"
    OPEN_ERROR = "OpenError"
    READ_ERROR = "ReadError"


class Stage(str, Enum):
    SCAN = "Building file list"
    SIZE = "Size grouping"
    HASH = "Hashing"


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class File:
    """
    A regular file seen during traversal.
    The path is the root-joined path and is unique within one scan.
    """
    path: str
    size: int  # in bytes

    def __post_init__(self):
        if self.size < 0:
            raise ValueError(f"File size cannot be negative: {self.size}")

    def __repr__(self):
        return f"<File path={self.path}, size={self.size}>"


@dataclass
class DuplicateGroup:
    """
    Files sharing both size and content digest.
    Paths are kept in ascending ordinal order.
    """
    size: int
    paths: List[str]

    def __post_init__(self):
        self.paths = sorted(self.paths)

    @property
    def duplicate_count(self) -> int:
        """How many files are in this group."""
        return len(self.paths)

    def is_duplicate(self) -> bool:
        """True if this group contains at least two files."""
        return self.duplicate_count >= 2

    def sort_key(self):
        return self.size, self.paths[0] if self.paths else ""

    def __repr__(self):
        return f"<DuplicateGroup size={self.size}, count={len(self.paths)}>"


@dataclass(frozen=True)
class ScanWarning:
    """A non-fatal problem met during a scan."""
    path: str
    kind: WarningKind
    raw_message: str

    def describe(self) -> str:
        if self.kind is WarningKind.OPEN_ERROR:
            return f"Warning! Could not open file '{self.path}': {self.raw_message}"
        if self.kind is WarningKind.READ_ERROR:
            return f"Warning! Could not read file '{self.path}': {self.raw_message}"
        if self.kind is WarningKind.DIRECTORY_UNAVAILABLE:
            return f"Warning! Can't cd to '{self.path}': {self.raw_message}"
        return f"Warning! Root '{self.path}' skipped: {self.raw_message}"


class ScanStats:
    """
    Statistics collected during a scan.
    """
    def __init__(self):
        self.total_time: float = 0.0
        self.files_scanned: int = 0
        self.candidates: int = 0
        self.files_hashed: int = 0
        self.files_failed: int = 0
        self.stage_stats: Dict[str, Dict[str, Union[int, float]]] = {}
        self._listeners: List[Callable[[str, Dict], None]] = []

    def add_listener(self, listener: Callable[[str, Dict], None]):
        """Adds a listener to receive updates when stats are updated."""
        self._listeners.append(listener)

    def update_stage(
            self,
            stage_name: str,
            groups_found: int,
            files_processed: int,
            duration: float
    ) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {
                "groups": 0,
                "files": 0,
                "time": 0.0
            }
        self.stage_stats[stage_name]["groups"] += groups_found
        self.stage_stats[stage_name]["files"] += files_processed
        self.stage_stats[stage_name]["time"] += duration

        for listener in self._listeners:
            try:
                listener(stage_name, self.stage_stats[stage_name])
            except Exception:
                logger.exception("Error in stats event handler")

    def print_summary(self) -> str:
        labels = {
            "scan": "Files scanned",
            "size": "Size groups",
            "hash": "Hash groups",
        }

        lines = [
            "Scan statistics:",
            f"Total execution time: {self.total_time:.3f}s",
            f"Files: {self.files_scanned} scanned / {self.candidates} candidates / "
            f"{self.files_hashed} hashed / {self.files_failed} failed",
            "",
            "Stage: GROUPS / FILES / TIME",
        ]

        for stage, data in self.stage_stats.items():
            label = labels.get(stage.lower(), stage.title())
            lines.append(f"{label}: {data['groups']} / {data['files']} / {data['time']:.3f}s")

        return "\n".join(lines)


@dataclass
class ScanResult:
    """
    Outcome of one scan: duplicate groups plus the non-fatal warnings.
    `size_groups` and `digests` are only filled when details were requested.
    """
    groups: List[DuplicateGroup] = field(default_factory=list)
    warnings: List[ScanWarning] = field(default_factory=list)
    stats: ScanStats = field(default_factory=ScanStats)
    size_groups: Dict[int, List[str]] = field(default_factory=dict)
    digests: Dict[str, str] = field(default_factory=dict)

    @property
    def hash_warnings(self) -> List[ScanWarning]:
        return [w for w in self.warnings if w.kind in (WarningKind.OPEN_ERROR, WarningKind.READ_ERROR)]

    @property
    def root_warnings(self) -> List[ScanWarning]:
        return [w for w in self.warnings if w.kind is WarningKind.ROOT_UNAVAILABLE]

    @property
    def directory_warnings(self) -> List[ScanWarning]:
        return [w for w in self.warnings if w.kind is WarningKind.DIRECTORY_UNAVAILABLE]


# ======================
#  Configuration
# ======================

class DeduplicationConfig:
    DEFAULT_BLOCK_SIZE = 64 * 1024
    PROGRESS_INTERVAL = 1000  # report every N files


@dataclass
class ScanParams:
    """
    DTO for scan parameters with built-in validation.
    Interface-agnostic, used by the CLI and by library callers.
    """
    roots: List[str]
    follow_symlinks: bool = False
    algorithm: HashAlgorithmName = HashAlgorithmName.XXHASH
    workers: int = 1
    block_size: int = DeduplicationConfig.DEFAULT_BLOCK_SIZE
    keep_details: bool = False

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        self.roots = list(self.roots)

        if any(not root for root in self.roots):
            raise ValueError("Root directory cannot be empty")

        if self.workers < 1:
            raise ValueError("Number of workers must be at least 1")

        if self.block_size < 1:
            raise ValueError("Block size must be positive")

        if not isinstance(self.algorithm, HashAlgorithmName):
            self.algorithm = HashAlgorithmName(self.algorithm)
