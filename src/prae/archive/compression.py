"""Whole-buffer raw DEFLATE compression for archive storage."""

from __future__ import annotations

import zlib

from ..logging import get_logger
from .constants import DEFLATE_WBITS
from .errors import E_CORRUPT_ARCHIVE, decode_error

__all__ = ["compress", "decompress"]


def compress(data: bytes) -> bytes:
    co = zlib.compressobj(
        zlib.Z_DEFAULT_COMPRESSION, zlib.DEFLATED, DEFLATE_WBITS
    )
    return co.compress(data) + co.flush()


def decompress(data: bytes) -> bytes:
    do = zlib.decompressobj(DEFLATE_WBITS)
    try:
        out = do.decompress(data) + do.flush()
    except zlib.error as exc:
        raise decode_error(
            E_CORRUPT_ARCHIVE,
            f"Invalid compressed stream: {exc}",
            {"compressed_size": len(data)},
        ) from exc
    if not do.eof:
        raise decode_error(
            E_CORRUPT_ARCHIVE,
            "Compressed stream ended before its final block",
            {"compressed_size": len(data), "decompressed_size": len(out)},
        )
    if do.unused_data:
        get_logger().debug(
            "Ignoring %d bytes after end of compressed stream",
            len(do.unused_data),
        )
    return out
