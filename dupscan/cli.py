from __future__ import annotations

import argparse
import sys
from typing import Sequence

from pydantic import ValidationError

from dupscan import __version__
from dupscan.core.config import ScanSettings
from dupscan.core.logging import configure_logging
from dupscan.report import OutputFormat, render_report
from dupscan.scan.hasher import HashReadError
from dupscan.scan.service import ScanService
from dupscan.scan.types import GroupKeyMode
from dupscan.scan.walker import RootNotFoundError

PROG = "dupscan"
EXIT_OK = 0
EXIT_READ_ERROR = 1
EXIT_USAGE = 2

_TRUE_TOKENS = {"1", "true", "yes", "on"}
_FALSE_TOKENS = {"0", "false", "no", "off"}


def parse_bool(raw: str) -> bool:
    token = raw.strip().lower()
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    raise argparse.ArgumentTypeError(f"expected a boolean, got {raw!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PROG, description="Report duplicate files under a directory tree")
    parser.add_argument("root", nargs="?", default=".", help="Directory to scan (default: current directory)")
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=[item.value for item in OutputFormat],
        default=OutputFormat.CONSOLE.value,
        help="Output rendering mode",
    )
    parser.add_argument("-n", "--name-only", action="store_true", help="Check only filenames, skip hashing")
    parser.add_argument(
        "--key",
        dest="group_key",
        choices=[item.value for item in GroupKeyMode],
        default=GroupKeyMode.NAME_SIZE.value,
        help="Group candidates by name alone or by name and size",
    )
    parser.add_argument(
        "--hash-only-dup-names",
        action="store_true",
        help="Hash only files whose key already collides (may miss renamed duplicates)",
    )
    parser.add_argument(
        "--list-empty",
        nargs="?",
        const=True,
        default=True,
        type=parse_bool,
        metavar="BOOL",
        help="Include the empty-file section in console output (default: true); pass a value as --list-empty=BOOL",
    )
    parser.add_argument(
        "--no-list-empty",
        dest="list_empty",
        action="store_false",
        help="Omit the empty-file section from console output",
    )
    parser.add_argument("--min-size", type=int, default=0, metavar="BYTES", help="Ignore files smaller than this")
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=None,
        metavar="BYTES",
        help="Read chunk size used while hashing",
    )
    parser.add_argument("--log-level", default="WARNING", help="Diagnostic log level written to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def settings_from_args(args: argparse.Namespace) -> ScanSettings:
    values = {
        "root": args.root,
        "output_format": args.output_format,
        "group_key": args.group_key,
        "name_only": args.name_only,
        "hash_only_dup_names": args.hash_only_dup_names,
        "list_empty": args.list_empty,
        "min_size": args.min_size,
        "log_level": args.log_level,
    }
    if args.chunk_size is not None:
        values["hash_read_chunk_bytes"] = args.chunk_size
    return ScanSettings(**values)


def _validation_message(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error["loc"])
        message = str(error["msg"]).removeprefix("Value error, ")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)


def write_output(output: str) -> None:
    """Write the rendered report, passing undecodable filename bytes through unchanged."""
    stream = sys.stdout
    encoding = getattr(stream, "encoding", None) or "utf-8"
    stream.flush()
    stream.buffer.write(output.encode(encoding, "surrogateescape"))
    stream.buffer.flush()


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = settings_from_args(args)
    except ValidationError as exc:
        parser.error(_validation_message(exc))

    configure_logging(settings.log_level)

    try:
        report = ScanService(settings).run()
    except RootNotFoundError as exc:
        print(f"{PROG}: error: {exc}", file=sys.stderr)
        return EXIT_USAGE
    except HashReadError as exc:
        print(f"{PROG}: error: {exc}", file=sys.stderr)
        return EXIT_READ_ERROR

    output = render_report(report, output_format=settings.output_format, list_empty=settings.list_empty)
    write_output(output)
    return EXIT_OK


def run() -> None:
    raise SystemExit(main())
