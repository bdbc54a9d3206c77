"""High-level pack / unpack / list operations.

Each operation works on whole in-memory buffers: packing walks the source
tree, encodes every entry, compresses the result and only then creates the
output file; unpacking decodes the complete archive before the first file is
written, so a damaged archive is never partially extracted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from .archive.codec import encode, decode
from .archive.compression import compress, decompress
from .archive.types import AssetEntry, DecodedArchive, SkipReason, SkippedItem
from .archive.walker import walk
from .logging import get_logger, step
from .manifest import build_manifest, manifest_dict
from .reporting import get_reporter, task
from .utils.io import read_archive_file, read_payload_file, write_archive_file
from .utils.paths import default_destination, default_output_path, safe_file_path

__all__ = [
    "PackOptions",
    "PackResult",
    "UnpackResult",
    "pack_archive",
    "unpack_archive",
    "list_archive",
    "read_archive",
    "default_output_path",
    "default_destination",
]


@dataclass(slots=True)
class PackOptions:
    source_dir: Path
    # Defaults to <source_dir>.dat
    output_path: Path | None = None
    # Optional path; when provided a manifest is written after the archive
    manifest_path: Path | None = None
    # Sort directory listings by name so repeated packs are byte-identical
    deterministic: bool = False


@dataclass(slots=True)
class PackResult:
    output_file: Path
    entries: List[AssetEntry]
    sizes: List[int]
    skipped: List[SkippedItem]
    raw_size: int
    bytes_written: int
    manifest_file: Path | None = None

    @property
    def texture_count(self) -> int:
        return sum(1 for e in self.entries if e.asset_type.is_texture)


@dataclass(slots=True)
class UnpackResult:
    destination: Path
    entry_count: int
    written: List[Path] = field(default_factory=list)
    skipped: List[SkippedItem] = field(default_factory=list)


def _describe(entry: AssetEntry) -> str:
    return f"{entry.archive_path} ({entry.asset_type})"


def read_archive(
    archive_path: str | Path, *, metadata_only: bool = False
) -> DecodedArchive:
    """Read, decompress and decode an archive file."""
    logger = get_logger()
    archive = Path(archive_path)
    data = read_archive_file(archive)
    raw = decompress(data)
    logger.debug(
        "Read %s: compressed=%d raw=%d", archive.name, len(data), len(raw)
    )
    return decode(raw, metadata_only=metadata_only)


def list_archive(archive_path: str | Path) -> List[AssetEntry]:
    return read_archive(archive_path, metadata_only=True).entries


def pack_archive(options: PackOptions) -> PackResult:
    logger = get_logger()
    rep = get_reporter()
    source = Path(options.source_dir)
    output = (
        Path(options.output_path)
        if options.output_path is not None
        else default_output_path(source)
    )

    with task("pack.scan", f"Scan {source.name or source}") as stats:
        walked = walk(source, sort_entries=options.deterministic)
        stats.update(
            entries=walked.total,
            textures=len(walked.textures),
            files=len(walked.files),
            skipped=len(walked.skipped),
        )

    skipped = list(walked.skipped)
    candidates = walked.ordered()
    payloads: Dict[AssetEntry, bytes] = {}
    with task("pack.read", "Read files", total=len(candidates)) as stats:
        for s in candidates:
            rep.advance("pack.read", current_item=_describe(s.entry))
            try:
                payloads[s.entry] = read_payload_file(s.path)
            except OSError as exc:
                logger.warning(
                    "Failed to read file %s (%s), skipping",
                    s.entry.archive_path,
                    exc.strerror or exc,
                )
                skipped.append(
                    SkippedItem(
                        s.entry.archive_path,
                        SkipReason.UNREADABLE,
                        exc.strerror or str(exc),
                    )
                )
        stats.update(entries=len(payloads), skipped=len(skipped))

    # Textures stay ahead of the other files; dicts keep insertion order.
    entries = list(payloads)
    sizes: List[int] = []

    def _on_payload(index: int, entry: AssetEntry, size: int) -> None:
        sizes.append(size)

    with task("pack.encode", "Encode archive") as stats:
        raw = encode(entries, payloads.__getitem__, _on_payload)
        stats.update(entries=len(entries), bytes=len(raw))

    compressed = compress(raw)
    step(f"Writing {output.name}")
    bytes_written = write_archive_file(output, compressed)

    result = PackResult(
        output_file=output,
        entries=entries,
        sizes=sizes,
        skipped=skipped,
        raw_size=len(raw),
        bytes_written=bytes_written,
    )
    if options.manifest_path is not None:
        manifest_path = Path(options.manifest_path)
        build_manifest(
            manifest_path,
            manifest_dict(
                output.name,
                entries,
                sizes=sizes,
                skipped=skipped,
                raw_size=len(raw),
                compressed_size=bytes_written,
            ),
        )
        result.manifest_file = manifest_path
        rep.status(
            "Manifest summary: "
            + f"file={manifest_path.name} entries={len(entries)} skipped={len(skipped)}"
        )
    rep.status(
        "Pack summary: "
        + f"file={output.name} entries={len(entries)} textures={result.texture_count} "
        + f"files={len(entries) - result.texture_count} skipped={len(skipped)} "
        + f"raw_bytes={len(raw)} bytes={bytes_written}"
    )
    return result


def unpack_archive(
    archive_path: str | Path, dest_dir: str | Path | None = None
) -> UnpackResult:
    """Extract every entry of an archive below ``dest_dir``.

    Decode failures abort before anything is written. A file that cannot be
    placed (unsafe path, directory or write failure) is logged and skipped.
    """
    logger = get_logger()
    rep = get_reporter()
    archive = Path(archive_path)
    dest = Path(dest_dir) if dest_dir is not None else default_destination(archive)

    decoded = read_archive(archive)
    result = UnpackResult(destination=dest, entry_count=len(decoded.entries))
    logger.info("Unzipping %d files.", len(decoded.entries))

    def _skip(entry: AssetEntry, reason: SkipReason, detail: str) -> None:
        result.skipped.append(SkippedItem(entry.archive_path, reason, detail))

    total = len(decoded.entries)
    with task("unpack.files", "Unpack files", total=total) as stats:
        for entry, payload in decoded.members():
            rep.advance("unpack.files", current_item=_describe(entry))
            try:
                target = safe_file_path(dest, entry.archive_path)
            except ValueError as exc:
                logger.warning(
                    "Refusing to write %s outside %s, skipping",
                    entry.archive_path,
                    dest,
                )
                _skip(entry, SkipReason.UNSAFE_PATH, str(exc))
                continue
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                logger.warning(
                    "Failed to create folder %s (%s), skipping",
                    target.parent,
                    exc.strerror or exc,
                )
                _skip(entry, SkipReason.WRITE_FAILED, str(exc))
                continue
            try:
                target.write_bytes(payload)
            except OSError as exc:
                logger.warning(
                    "Failed to write to file %s (%s), skipping",
                    target,
                    exc.strerror or exc,
                )
                _skip(entry, SkipReason.WRITE_FAILED, str(exc))
                continue
            result.written.append(target)
        stats.update(
            entries=total, files=len(result.written), skipped=len(result.skipped)
        )

    rep.status(
        "Unpack summary: "
        + f"dest={dest.name} entries={total} written={len(result.written)} skipped={len(result.skipped)}"
    )
    return result
