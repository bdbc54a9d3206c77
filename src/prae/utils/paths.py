"""Path utilities (safe resolution, default names)."""

from __future__ import annotations
from pathlib import Path

from ..archive.constants import ARCHIVE_SUFFIX, UNPACKED_SUFFIX

__all__ = ["safe_file_path", "default_output_path", "default_destination"]


def safe_file_path(base_dir: Path, archive_path: str) -> Path:
    """Resolve an archive path under ``base_dir``.

    Raises ValueError if the result would land outside ``base_dir``.
    """
    if not archive_path:
        raise ValueError("Empty archive path")
    base_dir = base_dir.resolve()
    resolved = (base_dir / archive_path).resolve()
    resolved.relative_to(base_dir)  # raises ValueError if escapes
    if resolved == base_dir:
        raise ValueError(f"Archive path names the destination itself: {archive_path!r}")
    return resolved


def default_output_path(source_dir: Path | str) -> Path:
    """``<source_dir>.dat`` next to the source directory."""
    source = Path(source_dir)
    if not source.name:
        source = source.resolve()
    return source.with_name(source.name + ARCHIVE_SUFFIX)


def default_destination(archive_path: Path | str) -> Path:
    """The archive path with a trailing ``.dat`` removed.

    Archives without that suffix unpack into ``<archive>_unpacked`` so the
    destination never collides with the archive file itself.
    """
    archive = Path(archive_path)
    name = archive.name
    if name.endswith(ARCHIVE_SUFFIX) and len(name) > len(ARCHIVE_SUFFIX):
        return archive.with_name(name[: -len(ARCHIVE_SUFFIX)])
    return archive.with_name(name + UNPACKED_SUFFIX)
