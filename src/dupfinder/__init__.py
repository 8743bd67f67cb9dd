"""
dupfinder: finds files with identical content across directory trees.

Core features:
- Two-pass detection: files are grouped by size first, only shared sizes are hashed
- Pluggable digest (xxHash by default, MD5 for legacy-compatible digests)
- Optional parallel hashing
- CLI interface with a plain, script-friendly report
"""

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("dupfinder")
except Exception:
    try:
        import tomllib  # Python 3.11+
    except ImportError:
        import tomli as tomllib  # Python < 3.11: pip install tomli
    from pathlib import Path as _Path

    with open(_Path(__file__).resolve().parents[2] / "pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

# Public API, only what users should import directly
from dupfinder.commands import DeduplicationCommand
from dupfinder.core import (
    ScanParams, ScanResult, HashAlgorithmName, File, DuplicateGroup, ScanWarning, WarningKind)
from dupfinder.utils.convert_utils import ConvertUtils
from dupfinder.services.root_service import RootService

__all__ = [
    "DeduplicationCommand",
    "ScanParams",
    "ScanResult",
    "HashAlgorithmName",
    "File",
    "DuplicateGroup",
    "ScanWarning",
    "WarningKind",
    "ConvertUtils",
    "RootService",
    "__version__",
]
