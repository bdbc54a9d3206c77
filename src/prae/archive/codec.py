"""Binary encoding and decoding of the raw (uncompressed) archive buffer.

Layout, all integers little-endian::

    [int32 entry_count]
    entry_count x [uint8 path_len][path_len bytes UTF-8 path][uint8 type_code]
    entry_count x [int32 payload_len][payload_len bytes payload]

Every metadata record comes before the first payload so that a listing can
stop after ``4 + sum(2 + path_len)`` bytes. Payloads carry no reference to
their entry; they are paired with the metadata records purely by position.

Public functions:
- encode(entries, read_payload, on_payload=None) -> bytes
- decode(data, metadata_only=False) -> DecodedArchive
- read_metadata(data) -> list[AssetEntry]
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

from ..logging import get_logger
from .constants import (
    COUNT_STRUCT,
    MAX_PATH_LENGTH,
    MAX_PAYLOAD_LENGTH,
    PATH_LENGTH_STRUCT,
    PAYLOAD_LENGTH_STRUCT,
    TYPE_CODE_STRUCT,
)
from .errors import (
    E_CORRUPT_ARCHIVE,
    E_ENTRY_ORDER,
    E_INVALID_PATH,
    E_PATH_TOO_LONG,
    E_PAYLOAD_TOO_LARGE,
    E_TRUNCATED_HEADER,
    E_TRUNCATED_PAYLOAD,
    E_UNKNOWN_TYPE,
    decode_error,
    encode_error,
    io_error,
)
from .types import AssetEntry, AssetType, DecodedArchive

__all__ = [
    "PayloadReader",
    "PayloadCallback",
    "pack_count",
    "pack_entry_record",
    "pack_payload_record",
    "validate_entries",
    "encode",
    "decode",
    "read_metadata",
    "metadata_size",
]

PayloadReader = Callable[[AssetEntry], bytes]
PayloadCallback = Callable[[int, AssetEntry, int], None]


# Encoding -------------------------------------------------------------------


def pack_count(count: int) -> bytes:
    return COUNT_STRUCT.pack(count)


def pack_entry_record(entry: AssetEntry) -> bytes:
    path_bytes = entry.encoded_path
    if len(path_bytes) > MAX_PATH_LENGTH:
        raise encode_error(
            E_PATH_TOO_LONG,
            f"Archive path is {len(path_bytes)} bytes, limit is {MAX_PATH_LENGTH}",
            {"path": entry.archive_path, "length": len(path_bytes)},
        )
    if entry.asset_type is AssetType.UNKNOWN:
        raise encode_error(
            E_UNKNOWN_TYPE,
            "Entries of unknown type cannot be archived",
            {"path": entry.archive_path},
        )
    return (
        PATH_LENGTH_STRUCT.pack(len(path_bytes))
        + path_bytes
        + TYPE_CODE_STRUCT.pack(entry.asset_type.to_wire())
    )


def pack_payload_record(entry: AssetEntry, payload: bytes) -> bytes:
    if len(payload) > MAX_PAYLOAD_LENGTH:
        raise encode_error(
            E_PAYLOAD_TOO_LARGE,
            f"Payload is {len(payload)} bytes, limit is {MAX_PAYLOAD_LENGTH}",
            {"path": entry.archive_path, "length": len(payload)},
        )
    return PAYLOAD_LENGTH_STRUCT.pack(len(payload)) + payload


def validate_entries(entries: Sequence[AssetEntry]) -> List[bytes]:
    """Check every entry up front and return their packed metadata records.

    Textures must all precede the other asset types.
    """
    records: List[bytes] = []
    seen_non_texture: Optional[AssetEntry] = None
    for entry in entries:
        records.append(pack_entry_record(entry))
        if entry.asset_type.is_texture:
            if seen_non_texture is not None:
                raise encode_error(
                    E_ENTRY_ORDER,
                    "Texture entry follows a non-texture entry",
                    {
                        "texture": entry.archive_path,
                        "after": seen_non_texture.archive_path,
                    },
                )
        elif seen_non_texture is None:
            seen_non_texture = entry
    return records


def encode(
    entries: Sequence[AssetEntry],
    read_payload: PayloadReader,
    on_payload: PayloadCallback | None = None,
) -> bytes:
    """Build the raw archive buffer for ``entries`` in the given order.

    ``read_payload`` is called once per entry, metadata order. Nothing is
    returned unless every entry and payload was accepted.
    """
    records = validate_entries(entries)
    out = bytearray(pack_count(len(entries)))
    for record in records:
        out += record
    for index, entry in enumerate(entries):
        try:
            payload = read_payload(entry)
        except OSError as exc:
            raise io_error(
                "read", exc.filename or entry.archive_path, exc
            ) from exc
        out += pack_payload_record(entry, payload)
        if on_payload is not None:
            on_payload(index, entry, len(payload))
    return bytes(out)


# Decoding -------------------------------------------------------------------


def _read_exact(
    data: bytes, offset: int, size: int, code: str, label: str
) -> Tuple[bytes, int]:
    end = offset + size
    if end > len(data):
        raise decode_error(
            code,
            f"Out of range read for {label}: {offset}+{size}>{len(data)}",
            {"offset": offset, "size": size, "available": len(data) - offset},
        )
    return data[offset:end], end


def _read_entries(data: bytes) -> Tuple[List[AssetEntry], int]:
    raw, off = _read_exact(
        data, 0, COUNT_STRUCT.size, E_TRUNCATED_HEADER, "entry count"
    )
    (count,) = COUNT_STRUCT.unpack(raw)
    if count < 0:
        raise decode_error(
            E_CORRUPT_ARCHIVE,
            f"Negative entry count {count}",
            {"count": count},
        )
    entries: List[AssetEntry] = []
    for i in range(count):
        raw, off = _read_exact(
            data, off, 1, E_TRUNCATED_HEADER, f"entry[{i}].path_length"
        )
        (path_len,) = PATH_LENGTH_STRUCT.unpack(raw)
        path_bytes, off = _read_exact(
            data, off, path_len, E_TRUNCATED_HEADER, f"entry[{i}].path"
        )
        try:
            path = path_bytes.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise decode_error(
                E_INVALID_PATH,
                f"Entry {i} path is not valid UTF-8",
                {"index": i, "path_hex": path_bytes.hex()},
            ) from exc
        raw, off = _read_exact(
            data, off, 1, E_TRUNCATED_HEADER, f"entry[{i}].type"
        )
        (code,) = TYPE_CODE_STRUCT.unpack(raw)
        asset_type = AssetType.from_wire(code)
        if asset_type is AssetType.UNKNOWN:
            get_logger().debug("Entry %s has unmapped type code %d", path, code)
        entries.append(AssetEntry(path, asset_type))
    return entries, off


def _read_payloads(
    data: bytes, offset: int, entries: Sequence[AssetEntry]
) -> Tuple[List[bytes], int]:
    payloads: List[bytes] = []
    off = offset
    for i, entry in enumerate(entries):
        raw, off = _read_exact(
            data,
            off,
            PAYLOAD_LENGTH_STRUCT.size,
            E_TRUNCATED_PAYLOAD,
            f"payload[{i}].length",
        )
        (size,) = PAYLOAD_LENGTH_STRUCT.unpack(raw)
        if size < 0:
            raise decode_error(
                E_CORRUPT_ARCHIVE,
                f"Negative payload length {size} for {entry.archive_path}",
                {"index": i, "path": entry.archive_path},
            )
        payload, off = _read_exact(
            data, off, size, E_TRUNCATED_PAYLOAD, f"payload[{i}]"
        )
        payloads.append(payload)
    return payloads, off


def decode(data: bytes, *, metadata_only: bool = False) -> DecodedArchive:
    entries, off = _read_entries(data)
    if metadata_only:
        return DecodedArchive(entries=entries)
    payloads, end = _read_payloads(data, off, entries)
    if end < len(data):
        get_logger().debug(
            "Ignoring %d trailing bytes after last payload", len(data) - end
        )
    return DecodedArchive(entries=entries, payloads=payloads)


def read_metadata(data: bytes) -> List[AssetEntry]:
    return decode(data, metadata_only=True).entries


def metadata_size(entries: Sequence[AssetEntry]) -> int:
    """Byte length of the count field plus every metadata record."""
    return COUNT_STRUCT.size + sum(
        PATH_LENGTH_STRUCT.size + len(e.encoded_path) + TYPE_CODE_STRUCT.size
        for e in entries
    )
