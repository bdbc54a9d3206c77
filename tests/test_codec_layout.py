"""Byte layout of the raw (uncompressed) archive buffer."""

import struct

import pytest

from prae.archive.codec import encode, metadata_size, validate_entries
from prae.archive.errors import (
    E_ENTRY_ORDER,
    E_PATH_TOO_LONG,
    E_UNKNOWN_TYPE,
    EncodeError,
)
from prae.archive.types import AssetEntry, AssetType


def _encode(members):
    payloads = dict(members)
    return encode([e for e, _ in members], payloads.__getitem__)


def test_two_entry_layout():
    png = AssetEntry("a.png", AssetType.TEXTURE)
    box = AssetEntry("b.box", AssetType.BOX)
    raw = _encode([(png, b"T"), (box, b"BB")])
    expected = (
        b"\x02\x00\x00\x00"
        + b"\x05a.png\x0a"
        + b"\x05b.box\x00"
        + b"\x01\x00\x00\x00T"
        + b"\x02\x00\x00\x00BB"
    )
    assert raw == expected


def test_empty_archive_is_just_the_count():
    assert _encode([]) == b"\x00\x00\x00\x00"


def test_metadata_precedes_payloads():
    entries = [
        AssetEntry("t.jpg", AssetType.TEXTURE),
        AssetEntry("m.map", AssetType.MAP),
        AssetEntry("dir/path.dat", AssetType.PATH),
    ]
    raw = _encode([(e, b"payload") for e in entries])
    meta_end = metadata_size(entries)
    assert meta_end == 4 + sum(2 + len(e.encoded_path) for e in entries)
    assert b"payload" not in raw[:meta_end]
    (first_len,) = struct.unpack_from("<i", raw, meta_end)
    assert first_len == len(b"payload")


def test_utf8_path_length_counts_bytes():
    entry = AssetEntry("ü.box", AssetType.BOX)
    raw = _encode([(entry, b"")])
    assert raw[4] == len("ü.box".encode("utf-8")) == 6


def test_path_of_255_bytes_is_accepted():
    entry = AssetEntry("a" * 251 + ".box", AssetType.BOX)
    raw = _encode([(entry, b"x")])
    assert raw[4] == 255


def test_path_too_long_produces_nothing():
    calls = []
    ok = AssetEntry("ok.box", AssetType.BOX)
    long = AssetEntry("d" * 252 + ".box", AssetType.BOX)

    def read(entry):
        calls.append(entry)
        return b""

    with pytest.raises(EncodeError) as ei:
        encode([ok, long], read)
    assert ei.value.code == E_PATH_TOO_LONG
    assert ei.value.context["length"] == 256
    # Validation happens before any payload is read.
    assert calls == []


def test_unknown_type_is_rejected():
    with pytest.raises(EncodeError) as ei:
        validate_entries([AssetEntry("x.txt", AssetType.UNKNOWN)])
    assert ei.value.code == E_UNKNOWN_TYPE


def test_texture_after_other_type_is_rejected():
    entries = [
        AssetEntry("a.box", AssetType.BOX),
        AssetEntry("b.png", AssetType.TEXTURE),
    ]
    with pytest.raises(EncodeError) as ei:
        validate_entries(entries)
    assert ei.value.code == E_ENTRY_ORDER
    assert ei.value.context == {"texture": "b.png", "after": "a.box"}


def test_read_failure_is_wrapped():
    from prae.archive.errors import E_IO, ArchiveIOError

    def read(entry):
        raise PermissionError(13, "Permission denied", "/src/a.box")

    with pytest.raises(ArchiveIOError) as ei:
        encode([AssetEntry("a.box", AssetType.BOX)], read)
    assert ei.value.code == E_IO
    assert "/src/a.box" in ei.value.message


def test_progress_callback_sees_every_payload():
    seen = []
    entries = [
        AssetEntry("a.png", AssetType.TEXTURE),
        AssetEntry("b.box", AssetType.BOX),
    ]
    encode(
        entries,
        lambda e: e.archive_path.encode(),
        lambda i, e, size: seen.append((i, e.archive_path, size)),
    )
    assert seen == [(0, "a.png", 5), (1, "b.box", 5)]


def test_texture_and_box_payload_records():
    png = AssetEntry("a.png", AssetType.TEXTURE)
    box = AssetEntry("b.box", AssetType.BOX)
    raw = _encode([(png, b"\x01\x02\x03"), (box, b"\xaa\xbb")])
    payloads = raw[metadata_size([png, box]) :]
    assert payloads == bytes.fromhex("03000000 010203 02000000 aabb")
