"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

deduplicator.py
Implements the two-pass duplicate detection pipeline:
    scan → size grouping (drop unique sizes) → full content hash → report groups
Only files sharing their size with another file are ever read.
"""
import time
import logging
from typing import List, Optional, Callable

from dupfinder.core.grouper import SizeIndex, HashIndex
from dupfinder.core.hasher import HasherImpl, get_algorithm
from dupfinder.core.interfaces import Deduplicator, Hasher
from dupfinder.core.models import ScanParams, ScanResult, ScanStats, ScanWarning, WarningKind
from dupfinder.core.scanner import FileScannerImpl
from dupfinder.core.stages import SizeStageImpl, FullHashStage

logger = logging.getLogger(__name__)


# =============================
# Main Deduplicator Class
# =============================
class DeduplicatorImpl(Deduplicator):
    """
    Runs the pipeline for one set of roots and collects statistics.
    A custom Hasher may be injected, e.g. for instrumentation in tests.
    """
    def __init__(self, hasher: Hasher = None):
        self.hasher = hasher

    def find_duplicates(
        self,
        params: ScanParams,
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> ScanResult:
        """
        Main pipeline.
        Args:
            params: Roots, symlink policy, digest algorithm and worker count
            stopped_flag (Optional[Callable[[], bool]]): Function that returns True if operation should be stopped.
            progress_callback (Optional[Callable[[str, int, int], None]]): Reports progress per stage.
        Returns:
            ScanResult
        """
        stats = ScanStats()
        warnings: List[ScanWarning] = []
        total_start_time = time.time()

        # Stages 1+2: traversal feeds the size index directly
        scanner = FileScannerImpl(params.roots, follow_symlinks=params.follow_symlinks)
        start_time = time.time()
        size_index = SizeStageImpl().process(
            scanner.scan(stopped_flag=stopped_flag, progress_callback=progress_callback),
            stopped_flag=stopped_flag,
            progress_callback=progress_callback
        )
        warnings.extend(scanner.warnings)
        stats.files_scanned = size_index.files_seen
        stats.candidates = size_index.candidate_count()
        stats.update_stage("size", len(size_index), stats.candidates, time.time() - start_time)

        # Stage 3: hash the survivors only
        hasher = self.hasher or HasherImpl(get_algorithm(params.algorithm), block_size=params.block_size)
        hash_stage = FullHashStage(hasher, workers=params.workers)
        start_time = time.time()
        hash_index = hash_stage.process(
            size_index,
            warnings,
            stopped_flag=stopped_flag,
            progress_callback=progress_callback
        )
        groups = hash_index.duplicate_groups()
        stats.files_hashed = len(hash_index.digests)
        stats.files_failed = sum(1 for w in warnings if w.kind in (WarningKind.OPEN_ERROR, WarningKind.READ_ERROR))
        stats.update_stage("hash", len(groups), stats.files_hashed, time.time() - start_time)

        stats.total_time = time.time() - total_start_time
        logger.debug(f"Found {len(groups)} duplicate groups in {stats.total_time:.3f}s")

        result = ScanResult(groups=groups, warnings=warnings, stats=stats)
        if params.keep_details:
            DeduplicatorImpl._attach_details(result, size_index, hash_index)
        return result

    @staticmethod
    def _attach_details(result: ScanResult, size_index: SizeIndex, hash_index: HashIndex) -> None:
        """Keeps the intermediate indexes for the structure dump."""
        result.size_groups = size_index.groups
        result.digests = {path: digest.hex() for path, digest in hash_index.digests.items()}
