"""Manifest generation for built archives.

The manifest is an optional side document summarising an archive. It is only
produced when explicitly requested (``prae zip --emit-manifest PATH``); the
same entry layout backs ``prae list --json``.

Contents:
- archive file name, raw and compressed sizes (when known)
- entry count and counts per asset type
- ordered entries: path, type label, wire code, payload size (when known)
- files skipped while packing, with the reason
"""

from __future__ import annotations

import json
from collections import Counter
from pathlib import Path
from typing import Any, Sequence

import yaml

from .archive.types import AssetEntry, SkippedItem
from .utils.io import write_archive_file

__all__ = ["manifest_dict", "build_manifest", "dump_manifest"]

_YAML_SUFFIXES = {".yaml", ".yml"}


def manifest_dict(
    archive_file: str,
    entries: Sequence[AssetEntry],
    *,
    sizes: Sequence[int] | None = None,
    skipped: Sequence[SkippedItem] | None = None,
    raw_size: int | None = None,
    compressed_size: int | None = None,
) -> dict[str, Any]:
    if sizes is not None and len(sizes) != len(entries):
        raise ValueError(
            f"Size count mismatch: entries={len(entries)} sizes={len(sizes)}"
        )
    counts = Counter(e.asset_type.label for e in entries)
    entry_list = []
    for i, e in enumerate(entries):
        item: dict[str, Any] = {
            "path": e.archive_path,
            "type": e.asset_type.label,
            "code": e.asset_type.to_wire(),
        }
        if sizes is not None:
            item["size"] = sizes[i]
        entry_list.append(item)
    d: dict[str, Any] = {
        "archive": archive_file,
        "entry_count": len(entries),
        "counts": dict(sorted(counts.items())),
        "entries": entry_list,
    }
    if raw_size is not None:
        d["raw_size"] = raw_size
    if compressed_size is not None:
        d["compressed_size"] = compressed_size
    if skipped is not None:
        d["skipped"] = [s.to_dict() for s in skipped]
    return d


def dump_manifest(data: dict[str, Any], fmt: str = "json") -> str:
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def build_manifest(path: Path, data: dict[str, Any]) -> Path:
    """Write ``data`` to ``path``; YAML for .yaml/.yml, JSON otherwise."""
    fmt = "yaml" if path.suffix.lower() in _YAML_SUFFIXES else "json"
    write_archive_file(path, dump_manifest(data, fmt).encode("utf-8"))
    return path
