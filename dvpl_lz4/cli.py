"""CLI entrypoint.

Parses arguments into a :class:`~dvpl_lz4.walker.ConvertConfig`, runs one
walk and prints the totals and the time it took.
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

from . import meta
from .core import MAX_LEVEL
from .rules import Mode, parse_ignore_list
from .walker import ConvertConfig, TreeConverter

HELP_TEXT = """\
dvpl_lz4 --mode MODE [--keep-originals] [--path PATH] [--ignore EXTS] [--silent]

  modes:
    compress     compress files into .dvpl containers
    decompress   decompress .dvpl containers into plain files
    verify       check .dvpl containers without writing anything
    help         show this help message

  flags:
    --keep-originals   keep the source files after compression/decompression
    --path             file or directory to process (default: current directory)
    --ignore           comma-separated extensions to skip (compress/decompress)
    --silent           only print failures and the final totals
    --dry-run          convert in memory but do not write or delete files
    --level            0 for fast LZ4, 1-12 for LZ4 high compression

  examples:
    $ dvpl_lz4 --mode compress --path /path/to/dir
    $ dvpl_lz4 --mode decompress --keep-originals --path /path/to/file.yaml.dvpl
    $ dvpl_lz4 --mode compress --path /path/to/dir --ignore .exe,.dll
    $ dvpl_lz4 --mode verify --path /path/to/dir
"""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="dvpl_lz4",
        description="Convert files to and from the DVPL container format.",
    )

    p.add_argument(
        "--mode",
        required=True,
        choices=[m.value for m in Mode] + ["help"],
        help="compress, decompress, verify, or help for an extended guide.",
    )

    p.add_argument(
        "--path",
        type=Path,
        default=None,
        help="File or directory to process. Default is the current directory.",
    )

    p.add_argument(
        "--keep-originals",
        action="store_true",
        help="Keep original files after compression/decompression.",
    )

    p.add_argument(
        "--ignore",
        default="",
        help="Comma-separated list of file extensions to ignore (e.g. .exe,.dll).",
    )

    p.add_argument(
        "--silent",
        action="store_true",
        help="Suppress per-file output; failures and totals are still printed.",
    )

    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Print what would be written/deleted but do not touch any file.",
    )

    p.add_argument(
        "--level",
        type=int,
        default=0,
        choices=range(0, MAX_LEVEL + 1),
        metavar=f"0-{MAX_LEVEL}",
        help="LZ4 compression level; 0 is the fast default.",
    )

    p.add_argument(
        "--no-banner",
        action="store_true",
        help="Do not print the about banner.",
    )

    return p


def format_elapsed(seconds: float) -> str:
    if seconds < 1:
        return f"{int(round(seconds * 1000))} ms"
    if seconds < 60:
        return f"{int(round(seconds))} s"
    return f"{int(round(seconds / 60))} min"


def _self_path() -> Path | None:
    argv0 = Path(sys.argv[0]) if sys.argv and sys.argv[0] else None
    if argv0 is not None and argv0.is_file():
        return argv0.resolve()
    return None


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if not args.no_banner:
        print()
        print(meta.banner())
        print()

    if args.mode == "help":
        print(HELP_TEXT)
        return 0

    started = time.perf_counter()
    config = ConvertConfig(
        mode=Mode(args.mode),
        path=args.path if args.path is not None else Path.cwd(),
        keep_originals=args.keep_originals,
        ignore_extensions=parse_ignore_list(args.ignore),
        quiet=args.silent,
        dry_run=args.dry_run,
        level=args.level,
        self_path=_self_path(),
    )

    label = config.mode.value.upper()
    rc = 0
    try:
        tally = TreeConverter(config).run()
    except OSError as exc:
        print(f"[error] {label} failed: {exc}")
        rc = 1
    else:
        print(
            f"[done] {label} finished. "
            f"success={tally.success} failure={tally.failure} ignored={tally.ignored}"
        )

    print(f"Processing took {format_elapsed(time.perf_counter() - started)}")
    return rc
