#!/usr/bin/env python3
"""
Purpose:
    SHA-256 content digests used to bind off-chain content (media bytes and
    metadata documents) to the hashes recorded on-chain.

All digests are lowercase hex, 64 characters, without a `0x` prefix.
"""

import hashlib
from pathlib import Path
from typing import Union

from wonzimer.core.constants import CONTENT_DIGEST_RE, HASH_CHUNK_SIZE


def sha256_from_buffer(data: bytes) -> str:
    """Return the SHA-256 hex digest of a byte buffer."""
    return hashlib.sha256(bytes(data)).hexdigest()


# Content-addressing digest of arbitrary bytes
digest = sha256_from_buffer


def sha256_from_file(path: Union[str, Path], chunk_size: int = HASH_CHUNK_SIZE) -> str:
    """
    Return the SHA-256 hex digest of a file, read in chunks.

    Raises:
        FileNotFoundError: if the file does not exist
    """
    h = hashlib.sha256()
    with Path(path).open("rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            h.update(chunk)
    return h.hexdigest()


def sha256_from_hex_string(data: str) -> str:
    """
    Return the SHA-256 hex digest of the bytes encoded by a hex string.

    A leading `0x` is accepted.

    Raises:
        ValueError: if `data` is not valid hex
    """
    s = data[2:] if data[:2].lower() == "0x" else data
    return sha256_from_buffer(bytes.fromhex(s))


def is_content_digest(value: object) -> bool:
    """True if `value` is a 64-character lowercase hex string."""
    return isinstance(value, str) and bool(CONTENT_DIGEST_RE.fullmatch(value))
