"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/stages.py
Pipeline stages for duplicate detection.

STAGES
------
SizeStageImpl  : Consumes the whole file stream into a SizeIndex and prunes unique sizes
FullHashStage  : Hashes every surviving candidate and fills a HashIndex

STAGE CONTRACTS
---------------
Each stage implements a `process()` method that:
  • Accepts the output of the previous stage
  • Reports progress via callback (stage name, processed count, total count)
  • Respects cancellation via stopped_flag callback

Hashing failures never abort the stage: they are turned into ScanWarning records
and the offending path is left out of the HashIndex.

With workers > 1 candidates are hashed on a thread pool. Only the calling thread
writes to the HashIndex and the warnings list.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, FIRST_COMPLETED, wait
from typing import Iterable, List, Optional, Callable

from dupfinder.core.errors import HashError
from dupfinder.core.grouper import SizeIndex, HashIndex
from dupfinder.core.hasher import HasherImpl
from dupfinder.core.interfaces import SizeStage, HashStage, Hasher
from dupfinder.core.models import File, ScanWarning, Stage

logger = logging.getLogger(__name__)


class SizeStageImpl(SizeStage):
    def process(
            self,
            files: Iterable[File],
            stopped_flag: Optional[Callable[[], bool]] = None,
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> SizeIndex:
        """
        Group by file size.
        The whole stream is consumed before any size is judged a singleton.
        """
        index = SizeIndex()
        for file in files:
            if stopped_flag and stopped_flag():
                break
            index.add(file)

        index.freeze()

        if progress_callback:
            progress_callback(Stage.SIZE.value, index.files_seen, index.files_seen)

        logger.debug(f"{index.files_seen} files, {len(index)} sizes shared by 2+ files")
        return index


class FullHashStage(HashStage):
    def __init__(self, hasher: Hasher = None, workers: int = 1):
        self.hasher = hasher or HasherImpl()
        self.workers = max(1, workers)

    def process(
            self,
            size_index: SizeIndex,
            warnings: List[ScanWarning],
            stopped_flag: Optional[Callable[[], bool]] = None,
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> HashIndex:
        hash_index = HashIndex()
        total_files = size_index.candidate_count()
        if total_files == 0:
            return hash_index

        if self.workers > 1 and total_files > 1:
            self._process_parallel(size_index, hash_index, warnings, total_files, stopped_flag, progress_callback)
        else:
            self._process_sequential(size_index, hash_index, warnings, total_files, stopped_flag, progress_callback)
        return hash_index

    def _hash_one(self, file: File):
        """Returns (file, digest, None) on success or (file, None, error)."""
        try:
            return file, self.hasher.compute_full_hash(file), None
        except HashError as e:
            return file, None, e

    @staticmethod
    def _collect(result, hash_index: HashIndex, warnings: List[ScanWarning]) -> None:
        file, digest, error = result
        if error is not None:
            logger.debug(f"Excluding {file.path}: {error}")
            warnings.append(error.to_warning())
        else:
            hash_index.add(file, digest)

    def _process_sequential(self, size_index, hash_index, warnings, total_files, stopped_flag, progress_callback):
        processed_files = 0
        for file in size_index.candidates():
            if stopped_flag and stopped_flag():
                logger.debug("Hashing interrupted by user")
                return
            self._collect(self._hash_one(file), hash_index, warnings)
            processed_files += 1
            if progress_callback:
                progress_callback(Stage.HASH.value, processed_files, total_files)

    def _process_parallel(self, size_index, hash_index, warnings, total_files, stopped_flag, progress_callback):
        """
        Keeps at most 2 * workers reads queued so a stop request takes effect
        quickly; in-flight reads are allowed to finish.
        """
        processed_files = 0
        max_pending = self.workers * 2
        candidates = size_index.candidates()
        pending = set()

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            exhausted = False
            while True:
                stopped = bool(stopped_flag and stopped_flag())
                while not stopped and not exhausted and len(pending) < max_pending:
                    file = next(candidates, None)
                    if file is None:
                        exhausted = True
                        break
                    pending.add(executor.submit(self._hash_one, file))

                if not pending:
                    break

                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    self._collect(future.result(), hash_index, warnings)
                    processed_files += 1
                    if progress_callback:
                        progress_callback(Stage.HASH.value, processed_files, total_files)

                if stopped:
                    logger.debug("Hashing interrupted by user, draining in-flight reads")
                    for future in pending:
                        future.cancel()
                    for future in wait(pending).done:
                        if not future.cancelled():
                            self._collect(future.result(), hash_index, warnings)
                    return
