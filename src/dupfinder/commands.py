"""
Unified command orchestrator for duplicate detection.
This is the SINGLE source of truth for business logic, used by the CLI and library callers.
"""
from typing import Optional, Callable
from dupfinder.core.models import ScanParams, ScanResult
from dupfinder.core.deduplicator import DeduplicatorImpl
from dupfinder.core.interfaces import Hasher


class DeduplicationCommand:
    """
    Orchestrates the whole workflow for a finalized set of roots:
    traversal → size grouping → hashing of candidates → sorted groups.

    Usage:
        params = ScanParams(roots=["/data/photos", "/backup"], follow_symlinks=False)
        command = DeduplicationCommand()
        result = command.execute(
            params,
            progress_callback=cli_progress_printer,
            stopped_flag=signal_handler_check
        )
        for group in result.groups:
            ...

    An empty root list, or roots without any duplicates, yields an empty result.
    """

    def __init__(self, hasher: Hasher = None):
        self._deduplicator = DeduplicatorImpl(hasher=hasher)
        self._last_result: Optional[ScanResult] = None

    def execute(
            self,
            params: ScanParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None,
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> ScanResult:
        """
        Execute a scan with given parameters.

        Args:
            params: Validated scan parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None
            stopped_flag: () -> bool (returns True if operation should stop)

        Returns:
            ScanResult with duplicate groups, warnings and statistics
        """
        self._last_result = self._deduplicator.find_duplicates(
            params,
            stopped_flag=stopped_flag,
            progress_callback=progress_callback
        )
        return self._last_result

    def get_last_result(self) -> Optional[ScanResult]:
        """Result of the most recent execute() call, if any."""
        return self._last_result
