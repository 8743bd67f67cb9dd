"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements file scanning over one or more root directories.
Features:
- Recursively walks every root with os.walk
- Emits only regular files, lazily, as File objects
- Skips symbolic links unless asked to follow them
- Descends into each physical directory once when following links (no cycles)
- Records unusable roots and unreadable subdirectories as warnings and moves on
"""

import os
import stat
import time
import logging
from typing import List, Optional, Callable, Iterator, Set, Tuple

from dupfinder.core.errors import RootUnavailable, DirectoryUnavailable, os_message
from dupfinder.core.interfaces import FileScanner
from dupfinder.core.models import File, ScanWarning, Stage, DeduplicationConfig

logger = logging.getLogger(__name__)


class FileScannerImpl(FileScanner):
    """
    Walks root directories recursively and yields regular files.

    Attributes:
        roots: Canonical, already deduplicated root directories
        follow_symlinks: Resolve symbolic links and traverse through them
        warnings: Root and directory warnings gathered during the last scan
    """

    def __init__(self, roots: List[str], follow_symlinks: bool = False):
        self.roots = list(roots)
        self.follow_symlinks = follow_symlinks
        self.warnings: List[ScanWarning] = []

    def scan(self,
             stopped_flag: Optional[Callable[[], bool]] = None,
             progress_callback: Optional[Callable[[str, int, object], None]] = None) -> Iterator[File]:
        """
        Single-pass generator over every regular file reachable from the roots.
        Restarting requires calling scan() again.
        """
        logger.debug("Starting scan operation")
        logger.debug(f"Roots: {self.roots}, follow_symlinks={self.follow_symlinks}")

        self.warnings = []
        processed_files = 0
        progress_counter = 0
        start_time = time.time()

        for root in self.roots:
            if stopped_flag and stopped_flag():
                logger.debug("Scan interrupted by user")
                return

            try:
                self._check_root(root)
            except RootUnavailable as e:
                logger.warning(f"Skipping root {root}: {e.raw_message}")
                self.warnings.append(e.to_warning())
                continue

            visited: Set[Tuple[int, int]] = set()
            for dirpath, dirnames, filenames in os.walk(
                    root,
                    onerror=self._walk_error_handler(root),
                    followlinks=self.follow_symlinks):
                if stopped_flag and stopped_flag():
                    logger.debug("Scan interrupted by user")
                    return

                if self.follow_symlinks and not self._first_visit(dirpath, visited):
                    logger.debug(f"Already visited, not descending again: {dirpath}")
                    dirnames[:] = []
                    continue

                for filename in filenames:
                    file = self._process_file(os.path.join(dirpath, filename))
                    if file is None:
                        continue
                    processed_files += 1
                    progress_counter += 1
                    yield file

                    if progress_callback and progress_counter >= DeduplicationConfig.PROGRESS_INTERVAL:
                        progress_callback(Stage.SCAN.value, processed_files, None)
                        progress_counter = 0

        if progress_callback and progress_counter > 0:
            progress_callback(Stage.SCAN.value, processed_files, None)

        logger.debug(f"Total scan time: {time.time() - start_time:.2f} seconds")
        logger.debug(f"Scan completed. Found {processed_files} regular files.")

    @staticmethod
    def _check_root(root: str) -> None:
        if not os.path.isdir(root):
            raise RootUnavailable(root, "not a directory")
        if not os.access(root, os.R_OK | os.X_OK):
            raise RootUnavailable(root, "permission denied")

    def _walk_error_handler(self, root: str) -> Callable[[OSError], None]:
        """Builds the os.walk onerror hook for one root."""
        def on_error(error: OSError) -> None:
            if error.filename is not None and os.path.normpath(error.filename) == os.path.normpath(root):
                logger.warning(f"Cannot read root {root}: {error}")
                self.warnings.append(RootUnavailable(root, os_message(error)).to_warning())
            else:
                logger.warning(f"Cannot enter directory {error.filename}: {os_message(error)}")
                self.warnings.append(DirectoryUnavailable(error.filename or root, os_message(error)).to_warning())
        return on_error

    @staticmethod
    def _first_visit(dirpath: str, visited: Set[Tuple[int, int]]) -> bool:
        try:
            st = os.stat(dirpath)
        except OSError as e:
            logger.debug(f"Could not stat directory {dirpath}: {e}")
            return False
        key = (st.st_dev, st.st_ino)
        if key in visited:
            return False
        visited.add(key)
        return True

    def _process_file(self, path: str) -> Optional[File]:
        """
        Return a File for a regular file, None for anything that must be skipped.
        """
        try:
            if not self.follow_symlinks and os.path.islink(path):
                logger.debug(f"Skipping symbolic link: {path}")
                return None
            st = os.stat(path)
        except OSError as e:
            logger.debug(f"Could not stat {path}: {e}")
            return None

        if not stat.S_ISREG(st.st_mode):
            logger.debug(f"Skipping non-regular file: {path}")
            return None

        logger.debug(f"Accepted file: {path} ({st.st_size} bytes)")
        return File(path=path, size=st.st_size)
