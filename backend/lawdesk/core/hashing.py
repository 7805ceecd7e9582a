"""
Deterministic SHA-256 hashing utilities.

- sha256_bytes: Hashes an in-memory byte string.
"""

from __future__ import annotations

import hashlib

__all__ = ["sha256_bytes"]


def sha256_bytes(data: bytes) -> str:
    """
    Compute the SHA-256 hex digest of raw bytes.

    Returns:
        The hexadecimal SHA-256 digest as a lowercase string.
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("data must be bytes-like")
    return hashlib.sha256(bytes(data)).hexdigest()

