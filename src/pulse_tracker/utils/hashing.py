"""
Hashing utilities.

Provides the content hash used to detect tampering with the data file.
"""

import hashlib
from pathlib import Path

INTEGRITY_ALGORITHM = "sha256"


def compute_file_hash(file_path: str | Path, algorithm: str = INTEGRITY_ALGORITHM) -> str:
    """
    Compute hash of a file.

    Args:
        file_path: Path to the file.
        algorithm: Hash algorithm to use.

    Returns:
        Lowercase hex string of the file hash.
    """
    hash_func = hashlib.new(algorithm)

    with open(file_path, "rb") as f:
        for chunk in iter(lambda: f.read(4096), b""):
            hash_func.update(chunk)

    return hash_func.hexdigest()


def hashes_match(expected: str, actual: str) -> bool:
    """Compare a stored digest, ignoring surrounding whitespace, with a computed one."""
    return expected.strip() == actual
