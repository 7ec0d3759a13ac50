"""Decompression pipeline for fetched payloads.

Some combinations of Subversion, nginx and proxies single-, double- or even
triple-gzip ``.gz`` files on the wire, so payloads are inflated until the gzip
magic number no longer appears.
"""

import gzip
import logging

from .errors import DecompressionError

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"

DEFAULT_MAX_DEPTH = 8


def is_gzipped(data: bytes) -> bool:
    """Check for the gzip magic number in the first two bytes."""
    return data[:2] == GZIP_MAGIC


def gunzip(data: bytes, max_depth: int = DEFAULT_MAX_DEPTH) -> bytes:
    """Inflate ``data`` until it is no longer gzip-wrapped.

    Args:
        data: Raw bytes, possibly gzipped one or more times
        max_depth: Maximum number of gzip layers to unwrap

    Returns:
        The innermost payload; non-gzip input is returned unchanged

    Raises:
        DecompressionError: If more than ``max_depth`` layers are present
        gzip.BadGzipFile / EOFError: If a layer is corrupt
    """
    depth = 0
    while is_gzipped(data):
        if depth >= max_depth:
            raise DecompressionError(f"Payload is gzipped more than {max_depth} times")
        data = gzip.decompress(data)
        depth += 1

    if depth:
        logger.debug("Unwrapped %d gzip layer(s)", depth)
    return data
