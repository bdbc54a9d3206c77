"""Asset type enumeration and entry records for PRAE archives."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from .constants import UNKNOWN_WIRE_CODE

__all__ = [
    "AssetType",
    "AssetEntry",
    "AssetSource",
    "DecodedArchive",
    "SkipReason",
    "SkippedItem",
]


class AssetType(Enum):
    """Asset kinds with their stable one-byte wire codes.

    ``UNKNOWN`` is logically -1 and travels as 255 on the wire; the encoder
    refuses it, the decoder maps any unrecognised byte onto it.
    """

    BOX = 0
    OBJECT = 1
    MAP = 2
    HEIGHT_MAP = 3
    PATH = 4
    ANIMATION = 5
    CAR_PROPERTY = 6
    MODEL = 7
    TEXTURE = 10
    UNKNOWN = -1

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def is_texture(self) -> bool:
        return self is AssetType.TEXTURE

    def to_wire(self) -> int:
        if self is AssetType.UNKNOWN:
            return UNKNOWN_WIRE_CODE
        return self.value

    @classmethod
    def from_wire(cls, code: int) -> "AssetType":
        return _BY_WIRE_CODE.get(code, cls.UNKNOWN)

    def __str__(self) -> str:
        return self.label


_LABELS = {
    AssetType.BOX: "Box",
    AssetType.OBJECT: "Object",
    AssetType.MAP: "Map",
    AssetType.HEIGHT_MAP: "Height Map",
    AssetType.PATH: "Path",
    AssetType.ANIMATION: "Animation",
    AssetType.CAR_PROPERTY: "Car Property",
    AssetType.MODEL: "Model",
    AssetType.TEXTURE: "Texture",
    AssetType.UNKNOWN: "Unknown",
}

_BY_WIRE_CODE = {
    t.to_wire(): t for t in AssetType if t is not AssetType.UNKNOWN
}


@dataclass(frozen=True, slots=True)
class AssetEntry:
    """One file's metadata record inside an archive."""

    archive_path: str
    asset_type: AssetType

    @property
    def encoded_path(self) -> bytes:
        return self.archive_path.encode("utf-8")


@dataclass(frozen=True, slots=True)
class AssetSource:
    """An entry discovered on disk, with the real path its payload lives at."""

    entry: AssetEntry
    path: Path


class SkipReason(Enum):
    UNKNOWN_TYPE = "unknown-type"
    UNREADABLE = "unreadable"
    INVALID_NAME = "invalid-name"
    NOT_REGULAR = "not-regular"
    SYMLINK_DIR = "symlink-dir"
    UNSAFE_PATH = "unsafe-path"
    WRITE_FAILED = "write-failed"


@dataclass(frozen=True, slots=True)
class SkippedItem:
    """Informational record for a file left out of a pack or unpack."""

    path: str
    reason: SkipReason
    detail: str = ""

    def to_dict(self) -> dict:
        d = {"path": self.path, "reason": self.reason.value}
        if self.detail:
            d["detail"] = self.detail
        return d


@dataclass(slots=True)
class DecodedArchive:
    entries: List[AssetEntry] = field(default_factory=list)
    # None for a metadata-only decode.
    payloads: Optional[List[bytes]] = None

    @property
    def metadata_only(self) -> bool:
        return self.payloads is None

    def members(self) -> Iterator[Tuple[AssetEntry, bytes]]:
        if self.payloads is None:
            raise ValueError("Archive was decoded without payloads")
        return zip(self.entries, self.payloads)
