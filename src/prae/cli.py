"""Command line interface for PRAE, the Pyongyang Racer Asset Extractor."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .api import PackOptions, list_archive, pack_archive, unpack_archive
from .archive.errors import ArchiveError
from .logging import configure_logging, get_logger
from .manifest import manifest_dict
from .reporting import (
    JsonLinesReporter,
    PlainReporter,
    RichReporter,
    SilentReporter,
    get_reporter,
    set_reporter,
    set_verbosity,
)

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_FAILURE = 2

_DESCRIPTION = "A tool to extract and compress 1.dat and common.dat archives."


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def _list_cmd(args: argparse.Namespace) -> int:
    entries = list_archive(args.archive)
    if args.json:
        print(
            json.dumps(
                manifest_dict(args.archive.name, entries),
                indent=2,
                ensure_ascii=False,
            )
        )
    else:
        print(f"Found {len(entries)} files.")
        for e in entries:
            print(f"      {e.archive_path} ({e.asset_type})")
    textures = sum(1 for e in entries if e.asset_type.is_texture)
    get_reporter().status(
        "List summary: "
        + f"file={args.archive.name} entries={len(entries)} textures={textures}"
    )
    return EXIT_OK


def _zip_cmd(args: argparse.Namespace) -> int:
    pack_archive(
        PackOptions(
            source_dir=args.source,
            output_path=args.output,
            manifest_path=args.emit_manifest,
            deterministic=args.deterministic,
        )
    )
    return EXIT_OK


def _unzip_cmd(args: argparse.Namespace) -> int:
    unpack_archive(args.archive, args.dest)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    p = _ArgumentParser(prog="prae", description=_DESCRIPTION)
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (repeatable)",
    )
    p.add_argument(
        "-r",
        "--reporter",
        choices=["plain", "rich", "json", "silent"],
        default="plain",
        help="Select reporter backend: plain (default), rich, json (JSONL events), silent",
    )
    sub = p.add_subparsers(dest="cmd", metavar="<command>")

    h = sub.add_parser("help", help="Prints this help message.")
    h.set_defaults(func=None)

    z = sub.add_parser(
        "zip", help="Compresses the given folder to an archive."
    )
    z.add_argument("source", type=Path, help="Folder to pack")
    z.add_argument(
        "output",
        type=Path,
        nargs="?",
        help="Archive to create (default: <folder>.dat)",
    )
    z.add_argument(
        "--deterministic",
        action="store_true",
        help="Visit directory entries in name order so repeated packs are identical",
    )
    z.add_argument(
        "--emit-manifest",
        dest="emit_manifest",
        type=Path,
        help="Optional path to write a manifest (.json, or .yaml/.yml)",
    )
    z.set_defaults(func=_zip_cmd)

    u = sub.add_parser(
        "unzip", help="Extracts the given archive to a folder."
    )
    u.add_argument("archive", type=Path, help="Archive to extract")
    u.add_argument(
        "dest",
        type=Path,
        nargs="?",
        help="Destination folder (default: archive name without .dat)",
    )
    u.set_defaults(func=_unzip_cmd)

    ls = sub.add_parser(
        "list", help="Lists the files inside the given archive."
    )
    ls.add_argument("archive", type=Path, help="Archive to list")
    ls.add_argument(
        "--json", action="store_true", help="Emit the listing as JSON"
    )
    ls.set_defaults(func=_list_cmd)

    return p


def _select_reporter(requested: str) -> None:
    if requested == "json":
        set_reporter(JsonLinesReporter())
    elif requested == "silent":
        set_reporter(SilentReporter())
    elif requested == "rich" and sys.stderr.isatty():
        set_reporter(RichReporter())
    else:
        # rich without a TTY falls back to plain
        set_reporter(PlainReporter())


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.cmd is None:
        parser.print_help(sys.stderr)
        return EXIT_USAGE
    if args.func is None:
        parser.print_help(sys.stdout)
        return EXIT_OK

    _select_reporter(args.reporter)
    set_verbosity(args.verbose)
    configure_logging(args.verbose)
    rep = get_reporter()
    try:
        return args.func(args)
    except ArchiveError as exc:
        details = exc.to_dict()
        rep.error(details.pop("message"), **details)
        get_logger().debug("%s", exc)
        return EXIT_FAILURE
    finally:
        rep.flush()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
