"""Wire-format constants for PRAE archives."""

from __future__ import annotations

import struct

# All integers are little-endian.
COUNT_STRUCT = struct.Struct("<i")
PATH_LENGTH_STRUCT = struct.Struct("<B")
TYPE_CODE_STRUCT = struct.Struct("<B")
PAYLOAD_LENGTH_STRUCT = struct.Struct("<i")

MAX_PATH_LENGTH = 0xFF
MAX_PAYLOAD_LENGTH = 0x7FFFFFFF
UNKNOWN_WIRE_CODE = 0xFF

# Raw DEFLATE, no zlib header or trailer.
DEFLATE_WBITS = -15

ARCHIVE_SUFFIX = ".dat"
UNPACKED_SUFFIX = "_unpacked"

__all__ = [
    "COUNT_STRUCT",
    "PATH_LENGTH_STRUCT",
    "TYPE_CODE_STRUCT",
    "PAYLOAD_LENGTH_STRUCT",
    "MAX_PATH_LENGTH",
    "MAX_PAYLOAD_LENGTH",
    "UNKNOWN_WIRE_CODE",
    "DEFLATE_WBITS",
    "ARCHIVE_SUFFIX",
    "UNPACKED_SUFFIX",
]
