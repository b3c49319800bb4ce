"""
Content checksums for files staged into a package.
"""

import os

from cryptography.hazmat.primitives import hashes

from .exceptions import DigestError

DIGEST_CHUNK_SIZE = 64 * 1024


def digest_file(path: str | os.PathLike[str], chunk_size: int = DIGEST_CHUNK_SIZE) -> str:
    """Streams a regular file through SHA-256 and returns the hex digest."""
    digest = hashes.Hash(hashes.SHA256())
    try:
        with open(path, "rb") as f:
            while chunk := f.read(chunk_size):
                digest.update(chunk)
    except OSError as e:
        raise DigestError(f"Unable to checksum '{path}': {e}") from e
    return digest.finalize().hex()
