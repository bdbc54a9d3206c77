"""Decoding of raw archive buffers, including damaged ones."""

import struct

import pytest

from prae.archive.codec import decode, encode, read_metadata
from prae.archive.errors import (
    E_CORRUPT_ARCHIVE,
    E_INVALID_PATH,
    E_TRUNCATED_HEADER,
    E_TRUNCATED_PAYLOAD,
    DecodeError,
)
from prae.archive.types import AssetEntry, AssetType

ENTRIES = [
    AssetEntry("tex/a.png", AssetType.TEXTURE),
    AssetEntry("b.box", AssetType.BOX),
    AssetEntry("track/carproperty.dat", AssetType.CAR_PROPERTY),
]
PAYLOADS = [b"png-data", b"", b"\x00" * 17]


def _raw():
    payloads = dict(zip(ENTRIES, PAYLOADS))
    return encode(ENTRIES, payloads.__getitem__)


def _code(data, **kw):
    with pytest.raises(DecodeError) as ei:
        decode(data, **kw)
    return ei.value.code


def test_decode_full():
    decoded = decode(_raw())
    assert decoded.entries == ENTRIES
    assert decoded.payloads == PAYLOADS
    assert not decoded.metadata_only
    assert list(decoded.members()) == list(zip(ENTRIES, PAYLOADS))


def test_metadata_only_matches_full_decode():
    raw = _raw()
    meta = decode(raw, metadata_only=True)
    assert meta.metadata_only
    assert meta.entries == decode(raw).entries
    assert read_metadata(raw) == ENTRIES
    with pytest.raises(ValueError):
        list(meta.members())


def test_metadata_only_ignores_missing_payloads():
    raw = _raw()
    # Cut inside the first payload length; listing still works.
    cut = 4 + sum(2 + len(e.encoded_path) for e in ENTRIES) + 2
    assert read_metadata(raw[:cut]) == ENTRIES
    assert _code(raw[:cut]) == E_TRUNCATED_PAYLOAD


def test_empty_buffer_is_truncated_header():
    assert _code(b"") == E_TRUNCATED_HEADER
    assert _code(b"\x01\x00") == E_TRUNCATED_HEADER


def test_count_larger_than_records():
    data = struct.pack("<i", 2) + b"\x05a.box\x00"
    assert _code(data, metadata_only=True) == E_TRUNCATED_HEADER


def test_path_shorter_than_declared():
    data = struct.pack("<i", 1) + b"\x09a.box"
    assert _code(data) == E_TRUNCATED_HEADER


def test_missing_type_byte():
    data = struct.pack("<i", 1) + b"\x05a.box"
    assert _code(data) == E_TRUNCATED_HEADER


def test_payload_length_missing():
    data = struct.pack("<i", 1) + b"\x05a.box\x00" + b"\x01\x00"
    assert _code(data) == E_TRUNCATED_PAYLOAD


def test_payload_shorter_than_declared():
    data = struct.pack("<i", 1) + b"\x05a.box\x00" + struct.pack("<i", 10) + b"abc"
    with pytest.raises(DecodeError) as ei:
        decode(data)
    assert ei.value.code == E_TRUNCATED_PAYLOAD
    assert ei.value.context["size"] == 10


def test_invalid_utf8_path():
    data = struct.pack("<i", 1) + b"\x02\xff\xfe\x00" + struct.pack("<i", 0)
    with pytest.raises(DecodeError) as ei:
        decode(data)
    assert ei.value.code == E_INVALID_PATH
    assert ei.value.context["path_hex"] == "fffe"


def test_negative_count_is_corrupt():
    assert _code(struct.pack("<i", -1)) == E_CORRUPT_ARCHIVE


def test_negative_payload_length_is_corrupt():
    data = struct.pack("<i", 1) + b"\x05a.box\x00" + struct.pack("<i", -5)
    assert _code(data) == E_CORRUPT_ARCHIVE


def test_unmapped_type_code_decodes_as_unknown():
    data = struct.pack("<i", 1) + b"\x05x.zzz\x2a" + struct.pack("<i", 1) + b"!"
    decoded = decode(data)
    assert decoded.entries == [AssetEntry("x.zzz", AssetType.UNKNOWN)]
    assert decoded.payloads == [b"!"]


def test_trailing_bytes_are_ignored():
    decoded = decode(_raw() + b"junk")
    assert decoded.payloads == PAYLOADS


def test_zero_entries():
    decoded = decode(b"\x00\x00\x00\x00")
    assert decoded.entries == []
    assert decoded.payloads == []
