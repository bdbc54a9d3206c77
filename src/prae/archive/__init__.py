from .types import (
    AssetType,
    AssetEntry,
    AssetSource,
    DecodedArchive,
    SkipReason,
    SkippedItem,
)
from .classifier import classify, is_texture
from .walker import WalkResult, walk
from .codec import encode, decode, read_metadata
from .compression import compress, decompress
from .errors import (
    ArchiveError,
    ArchiveIOError,
    DecodeError,
    EncodeError,
)

__all__ = [
    "AssetType",
    "AssetEntry",
    "AssetSource",
    "DecodedArchive",
    "SkipReason",
    "SkippedItem",
    "classify",
    "is_texture",
    "WalkResult",
    "walk",
    "encode",
    "decode",
    "read_metadata",
    "compress",
    "decompress",
    "ArchiveError",
    "ArchiveIOError",
    "DecodeError",
    "EncodeError",
]
