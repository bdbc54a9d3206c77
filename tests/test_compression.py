import zlib

import pytest

from prae.archive.compression import compress, decompress
from prae.archive.errors import E_CORRUPT_ARCHIVE, DecodeError

SAMPLE = bytes(range(256)) * 40


def test_round_trip():
    assert decompress(compress(SAMPLE)) == SAMPLE
    assert decompress(compress(b"")) == b""


def test_stream_is_raw_deflate():
    packed = compress(SAMPLE)
    # No zlib header: a plain zlib decoder rejects it, a raw one accepts it.
    with pytest.raises(zlib.error):
        zlib.decompress(packed)
    assert zlib.decompress(packed, -15) == SAMPLE


def test_accepts_streams_from_other_encoders():
    co = zlib.compressobj(9, zlib.DEFLATED, -15)
    packed = co.compress(SAMPLE) + co.flush()
    assert decompress(packed) == SAMPLE


def test_invalid_stream():
    with pytest.raises(DecodeError) as ei:
        decompress(b"\xff\xff\xff\xff")
    assert ei.value.code == E_CORRUPT_ARCHIVE


def test_truncated_stream():
    packed = compress(SAMPLE)
    with pytest.raises(DecodeError) as ei:
        decompress(packed[: len(packed) // 2])
    assert ei.value.code == E_CORRUPT_ARCHIVE


def test_empty_input_is_not_an_archive():
    with pytest.raises(DecodeError):
        decompress(b"")
