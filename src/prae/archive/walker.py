"""Directory traversal producing the texture and non-texture source lists.

The walk is depth-first and pre-order: a subdirectory is fully visited before
the walker moves on to that directory's next sibling. Textures and the other
typed assets are collected into two separate lists so that the archive can
store every texture first without re-sorting the discovery order.
"""

from __future__ import annotations

import errno
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from ..logging import get_logger
from .classifier import classify
from .errors import io_error
from .types import AssetEntry, AssetSource, AssetType, SkipReason, SkippedItem

__all__ = ["WalkResult", "walk", "archive_path_for"]


@dataclass(slots=True)
class WalkResult:
    root: Path
    textures: List[AssetSource] = field(default_factory=list)
    files: List[AssetSource] = field(default_factory=list)
    skipped: List[SkippedItem] = field(default_factory=list)

    def ordered(self) -> List[AssetSource]:
        """Sources in archive order: all textures, then all other files."""
        return [*self.textures, *self.files]

    @property
    def total(self) -> int:
        return len(self.textures) + len(self.files)


def archive_path_for(path: Path, root: Path) -> str:
    """Path of ``path`` relative to ``root`` with ``/`` separators."""
    rel = os.path.relpath(path, root)
    return rel.replace(os.sep, "/")


def walk(root: Path | str, *, sort_entries: bool = False) -> WalkResult:
    """Recursively collect classifiable files under ``root``.

    Raises ArchiveIOError if ``root`` or any subdirectory cannot be listed.
    Unknown, unreadable and non-regular files are skipped and recorded in
    ``WalkResult.skipped``.
    """
    root = Path(root)
    if not root.exists():
        raise io_error(
            "read directory",
            root,
            FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT)),
        )
    if not root.is_dir():
        raise io_error(
            "read directory",
            root,
            NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR)),
        )
    result = WalkResult(root=root)
    _walk_dir(root, result, sort_entries)
    return result


def _list_dir(directory: Path, sort_entries: bool) -> List[os.DirEntry]:
    try:
        with os.scandir(directory) as it:
            children = list(it)
    except OSError as exc:
        raise io_error("read directory", directory, exc) from exc
    if sort_entries:
        children.sort(key=lambda e: e.name)
    return children


def _printable(name: str) -> str:
    """``name`` with undecodable bytes shown as backslash escapes."""
    return name.encode("utf-8", "backslashreplace").decode("utf-8")


def _skip(result: WalkResult, path: Path, reason: SkipReason, detail: str = ""):
    logger = get_logger()
    rel = _printable(archive_path_for(path, result.root))
    result.skipped.append(SkippedItem(rel, reason, detail))
    if reason is SkipReason.UNKNOWN_TYPE:
        logger.warning("Skipping file with unknown file type %s", rel)
    else:
        logger.warning(
            "Skipping %s (%s%s)",
            rel,
            reason.value,
            f": {detail}" if detail else "",
        )


def _walk_dir(directory: Path, result: WalkResult, sort_entries: bool) -> None:
    logger = get_logger()
    for child in _list_dir(directory, sort_entries):
        path = Path(child.path)
        try:
            is_dir = child.is_dir(follow_symlinks=False)
            is_link = child.is_symlink()
            is_file = child.is_file()
        except OSError as exc:
            _skip(result, path, SkipReason.UNREADABLE, exc.strerror or str(exc))
            continue

        if is_dir:
            logger.debug(
                "Entering %s", _printable(archive_path_for(path, result.root))
            )
            _walk_dir(path, result, sort_entries)
            continue
        if is_link and path.is_dir():
            _skip(result, path, SkipReason.SYMLINK_DIR)
            continue
        if not is_file:
            _skip(result, path, SkipReason.NOT_REGULAR)
            continue

        rel = archive_path_for(path, result.root)
        try:
            rel.encode("utf-8")
        except UnicodeEncodeError:
            _skip(result, path, SkipReason.INVALID_NAME, "name is not valid UTF-8")
            continue

        asset_type = classify(child.name)
        if asset_type is AssetType.UNKNOWN:
            _skip(result, path, SkipReason.UNKNOWN_TYPE)
            continue
        if not os.access(path, os.R_OK):
            _skip(result, path, SkipReason.UNREADABLE, "permission denied")
            continue

        source = AssetSource(AssetEntry(rel, asset_type), path)
        if asset_type.is_texture:
            result.textures.append(source)
        else:
            result.files.append(source)
