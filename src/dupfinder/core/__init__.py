"""
Core duplicate detection engine: scanner, hasher, indexes, and pipeline orchestrator.

This package contains the performance-critical foundation of dupfinder:
- FileScannerImpl: recursive traversal of one or more roots with a symlink policy
- HasherImpl + XXHashAlgorithmImpl / MD5AlgorithmImpl: streaming full content hashing
- SizeIndex / HashIndex: size and digest grouping with singleton pruning
- DeduplicatorImpl: two-pass pipeline (size → full hash)
- ReportWriter: sorted text report
- Models: File, DuplicateGroup, ScanResult and configuration objects

All components are pure Python, suitable for CLI and library usage.
"""

from .scanner import FileScannerImpl
from .grouper import SizeIndex, HashIndex
from .hasher import HasherImpl, XXHashAlgorithmImpl, MD5AlgorithmImpl, get_algorithm
from .deduplicator import DeduplicatorImpl
from .reporter import ReportWriter
from .errors import DupFinderError, RootUnavailable, DirectoryUnavailable, HashError, OpenError, ReadError
from .models import (
    File, DuplicateGroup, HashAlgorithmName, ScanParams, ScanResult, ScanStats,
    ScanWarning, WarningKind)

__all__ = [
    "FileScannerImpl",
    "SizeIndex",
    "HashIndex",
    "HasherImpl",
    "XXHashAlgorithmImpl",
    "MD5AlgorithmImpl",
    "get_algorithm",
    "DeduplicatorImpl",
    "ReportWriter",
    "DupFinderError",
    "RootUnavailable",
    "DirectoryUnavailable",
    "HashError",
    "OpenError",
    "ReadError",
    "File",
    "DuplicateGroup",
    "HashAlgorithmName",
    "ScanParams",
    "ScanResult",
    "ScanStats",
    "ScanWarning",
    "WarningKind",
]
