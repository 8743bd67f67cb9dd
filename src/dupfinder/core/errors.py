"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Exceptions raised by the scanning and hashing stages.
All of them are recoverable: the pipeline turns them into ScanWarning records.
"""

from dupfinder.core.models import ScanWarning, WarningKind


class DupFinderError(Exception):
    """Base class for all dupfinder errors."""

    kind: WarningKind = None

    def __init__(self, path: str, raw_message: str):
        super().__init__(f"{path}: {raw_message}")
        self.path = path
        self.raw_message = raw_message

    def to_warning(self) -> ScanWarning:
        return ScanWarning(path=self.path, kind=self.kind, raw_message=self.raw_message)


class RootUnavailable(DupFinderError):
    """A root directory cannot be traversed."""
    kind = WarningKind.ROOT_UNAVAILABLE


class DirectoryUnavailable(DupFinderError):
    """A directory below a root cannot be entered; its subtree is left out."""
    kind = WarningKind.DIRECTORY_UNAVAILABLE


class HashError(DupFinderError):
    """A candidate file could not be hashed."""


class OpenError(HashError):
    kind = WarningKind.OPEN_ERROR


class ReadError(HashError):
    kind = WarningKind.READ_ERROR


def os_message(error: OSError) -> str:
    """Raw OS message without the filename part added by Python."""
    return error.strerror or str(error)
