"""File IO helpers that surface failures as archive errors."""

from __future__ import annotations
from pathlib import Path

from ..archive.constants import MAX_PAYLOAD_LENGTH
from ..archive.errors import E_PAYLOAD_TOO_LARGE, encode_error, io_error

__all__ = ["read_archive_file", "write_archive_file", "read_payload_file"]


def read_archive_file(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise io_error("open", path, exc) from exc


def write_archive_file(path: Path, data: bytes) -> int:
    """Write ``data`` to ``path``, creating parent directories. Returns size."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("wb") as f:
            f.write(data)
    except OSError as exc:
        raise io_error("create file", path, exc) from exc
    return len(data)


def read_payload_file(path: Path, max_size: int = MAX_PAYLOAD_LENGTH) -> bytes:
    """Read one asset file; OSError propagates to the caller."""
    size = path.stat().st_size
    if size > max_size:
        raise encode_error(
            E_PAYLOAD_TOO_LARGE,
            f"File too large: {size}>{max_size}",
            {"path": str(path), "length": size},
        )
    return path.read_bytes()
