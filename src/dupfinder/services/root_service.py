"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/root_service.py
Turns the directories given on the command line into the root list the core expects:
existing, accessible, canonical, without duplicates, sorted.
"""

import os
import logging
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)


class RootService:
    @staticmethod
    def check_root(item: str) -> Optional[str]:
        """
        Returns a warning message if `item` cannot be used as a root, else None.
        """
        if not os.path.lexists(item):
            return f"{item} does not exist"
        if not os.path.exists(item):
            return f"{item} points nowhere"
        if not os.path.isdir(item):
            return f"'{item}' does not seem a directory"
        if not os.access(item, os.R_OK | os.X_OK):
            return f"directory '{item}' can't be accessed"
        return None

    @staticmethod
    def normalize_roots(items: List[str], cwd: Optional[str] = None) -> Tuple[List[str], List[str]]:
        """
        Canonicalize and deduplicate root directories.

        Args:
            items: Paths as typed by the user. Empty means the current directory.
            cwd: Working directory used to shorten roots to "." (defaults to os.getcwd()).

        Returns:
            (roots, warnings) where roots are sorted canonical paths, with the
            current directory shown as ".", and warnings are human-readable messages
            for every rejected item.
        """
        if not items:
            return ["."], []

        warnings = []
        seen = set()
        for item in items:
            problem = RootService.check_root(item)
            if problem:
                logger.debug(f"Rejected root {item}: {problem}")
                warnings.append(problem)
                continue
            seen.add(os.path.realpath(item))

        cwd = os.path.realpath(cwd or os.getcwd())
        roots = ["." if root == cwd else root for root in sorted(seen)]
        return roots, warnings
