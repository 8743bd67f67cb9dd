"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements file hashing using the File class and pluggable hash algorithms.

HasherImpl streams a file block by block into the selected algorithm.
Failures are raised as OpenError / ReadError so the caller can record them.
"""

import hashlib
import logging
from typing import BinaryIO

import xxhash

from dupfinder.core.errors import OpenError, ReadError, os_message
from dupfinder.core.interfaces import Hasher, HashAlgorithm, HashObject
from dupfinder.core.models import File, HashAlgorithmName, DeduplicationConfig

logger = logging.getLogger(__name__)


# Use the same way to implement and use any other hashing algorithm
class XXHashAlgorithmImpl(HashAlgorithm):
    name = "xxh3_128"

    def new(self) -> HashObject:
        return xxhash.xxh3_128()


class MD5AlgorithmImpl(HashAlgorithm):
    name = "md5"

    def new(self) -> HashObject:
        return hashlib.md5()


ALGORITHMS = {
    HashAlgorithmName.XXHASH: XXHashAlgorithmImpl,
    HashAlgorithmName.MD5: MD5AlgorithmImpl,
}


def get_algorithm(name: HashAlgorithmName) -> HashAlgorithm:
    try:
        return ALGORITHMS[name]()
    except KeyError:
        raise ValueError(f"Unsupported hash algorithm: {name!r}")


class HasherImpl(Hasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    The file is opened, read in `block_size` chunks from start to end, and closed
    before the digest is returned.
    """

    def __init__(self, algorithm: HashAlgorithm = None, block_size: int = DeduplicationConfig.DEFAULT_BLOCK_SIZE):
        self.algorithm = algorithm or XXHashAlgorithmImpl()
        self.block_size = block_size

    def compute_full_hash(self, file: File) -> bytes:
        try:
            handle = self._open(file.path)
        except OSError as e:
            raise OpenError(file.path, os_message(e)) from e

        with handle:
            state = self.algorithm.new()
            try:
                for block in iter(lambda: handle.read(self.block_size), b""):
                    state.update(block)
            except OSError as e:
                raise ReadError(file.path, os_message(e)) from e

        digest = state.digest()
        logger.debug(f"Hashed {file.path} ({file.size} bytes): {digest.hex()}")
        return digest

    @staticmethod
    def _open(path: str) -> BinaryIO:
        return open(path, "rb")
