# codechunk/core/hashing.py
"""
Hashing and identifier helpers.

- compute_content_hash: SHA-256 of the full file bytes, streamed. Used as the
  document fingerprint; equal fingerprint means the file is skipped.
- new_id: time-ordered UUID (version 7) for document and chunk records.
"""

from __future__ import annotations

import hashlib
import os
import time
import uuid
from pathlib import Path

_READ_BLOCK = 1 << 16


def compute_content_hash(path: str | Path) -> str:
    """Return the lowercase hex SHA-256 digest of a file's bytes."""
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for block in iter(lambda: f.read(_READ_BLOCK), b""):
            digest.update(block)
    return digest.hexdigest()


def hash_bytes(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def new_id() -> str:
    """
    Create a UUIDv7 string.

    Layout: 48 bit unix milliseconds, 4 bit version, 74 random bits with the
    RFC 4122 variant in bits 62-63. Ids created later sort after earlier ones.
    """
    ts_ms = time.time_ns() // 1_000_000
    value = ((ts_ms & 0xFFFF_FFFF_FFFF) << 80) | int.from_bytes(os.urandom(10), "big")
    value = (value & ~(0xF << 76)) | (0x7 << 76)
    value = (value & ~(0x3 << 62)) | (0x2 << 62)
    return str(uuid.UUID(int=value))


__all__ = ["compute_content_hash", "hash_bytes", "new_id"]
