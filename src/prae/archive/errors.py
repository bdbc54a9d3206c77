"""Error definitions for PRAE archives."""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

E_IO = "E_IO"
E_TRUNCATED_HEADER = "E_TRUNCATED_HEADER"
E_TRUNCATED_PAYLOAD = "E_TRUNCATED_PAYLOAD"
E_INVALID_PATH = "E_INVALID_PATH"
E_CORRUPT_ARCHIVE = "E_CORRUPT_ARCHIVE"
E_PATH_TOO_LONG = "E_PATH_TOO_LONG"
E_UNKNOWN_TYPE = "E_UNKNOWN_TYPE"
E_ENTRY_ORDER = "E_ENTRY_ORDER"
E_PAYLOAD_TOO_LARGE = "E_PAYLOAD_TOO_LARGE"


@dataclass
class ArchiveError(Exception):
    code: str
    message: str
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}" + (
            f" | ctx={self.context}" if self.context else ""
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context or {},
        }


class ArchiveIOError(ArchiveError):
    pass


class DecodeError(ArchiveError):
    pass


class EncodeError(ArchiveError):
    pass


def decode_error(
    code: str, message: str, context: Optional[Dict[str, Any]] = None
) -> DecodeError:
    return DecodeError(code=code, message=message, context=context)


def encode_error(
    code: str, message: str, context: Optional[Dict[str, Any]] = None
) -> EncodeError:
    return EncodeError(code=code, message=message, context=context)


def io_error(action: str, path: Path | str, exc: OSError) -> ArchiveIOError:
    """Wrap an ``OSError`` raised while ``action``-ing ``path``."""
    reason = exc.strerror or str(exc)
    return ArchiveIOError(
        code=E_IO,
        message=f"Couldn't {action} {path}: {reason}",
        context={"path": str(path), "errno": exc.errno},
    )


__all__ = [
    "ArchiveError",
    "ArchiveIOError",
    "DecodeError",
    "EncodeError",
    "decode_error",
    "encode_error",
    "io_error",
    "E_IO",
    "E_TRUNCATED_HEADER",
    "E_TRUNCATED_PAYLOAD",
    "E_INVALID_PATH",
    "E_CORRUPT_ARCHIVE",
    "E_PATH_TOO_LONG",
    "E_UNKNOWN_TYPE",
    "E_ENTRY_ORDER",
    "E_PAYLOAD_TOO_LARGE",
]
