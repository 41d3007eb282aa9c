# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Hashing utilities for gavbundle.

Repository layouts publish one checksum file per artifact per digest, named
after the digest (`.md5`, `.sha1`, ...). The names below double as those
file suffixes and as the `checksum_algorithms` values accepted by config.

Files are always hashed in fixed-size chunks so memory stays flat no matter
how large the artifact is.
"""

import hashlib
from pathlib import Path
from typing import BinaryIO

from gavbundle.config.exceptions import UnsupportedAlgorithmError

HASH_BUFFER_SIZE = 65536  # 64 KiB

# Checksum suffix -> hashlib constructor name.
SUPPORTED_ALGORITHMS: dict[str, str] = {
    "md5": "md5",
    "sha1": "sha1",
    "sha256": "sha256",
    "sha512": "sha512",
}

DEFAULT_ALGORITHMS: tuple[str, ...] = ("md5", "sha1")


def _new_hasher(algorithm: str) -> "hashlib._Hash":
    name = SUPPORTED_ALGORITHMS.get(algorithm.lower())
    if name is None:
        raise UnsupportedAlgorithmError(algorithm)
    # md5/sha1 are repository-format checksums here, not security controls.
    return hashlib.new(name, usedforsecurity=False)


def is_supported_algorithm(algorithm: str) -> bool:
    return algorithm.lower() in SUPPORTED_ALGORITHMS


def compute_digest(file_path: Path, algorithm: str) -> str:
    """
    Compute the hex digest of a file under the named algorithm.

    Args:
        file_path: Path to the file to hash.
        algorithm: One of the SUPPORTED_ALGORITHMS keys (case-insensitive).

    Returns:
        Lowercase hex string, two characters per digest byte.

    Raises:
        UnsupportedAlgorithmError: If the algorithm name is unknown.
        OSError: If the file can't be read.
    """
    if not is_supported_algorithm(algorithm):
        raise UnsupportedAlgorithmError(algorithm)
    with open(file_path, "rb") as f:
        return compute_digest_stream(f, algorithm)


def compute_digest_stream(stream: BinaryIO, algorithm: str) -> str:
    """Hex digest of everything left in a binary stream, read in fixed-size chunks."""
    hasher = _new_hasher(algorithm)
    while True:
        chunk = stream.read(HASH_BUFFER_SIZE)
        if not chunk:
            break
        hasher.update(chunk)
    return hasher.hexdigest()


def compute_digest_bytes(data: bytes, algorithm: str) -> str:
    """Hex digest of raw bytes under the named algorithm."""
    hasher = _new_hasher(algorithm)
    hasher.update(data)
    return hasher.hexdigest()


def compute_sha256(file_path: Path) -> str:
    """SHA256 hex digest of a file, used to fingerprint finished bundles."""
    return compute_digest(file_path, "sha256")
