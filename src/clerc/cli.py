"""CLI entry point for clerc."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import BinaryIO, TextIO

from clerc import BANNER
from clerc.client import RiakClient
from clerc.commands import (
    Command,
    DeleteObject,
    ListBuckets,
    ListKeys,
    PutObject,
    ShowAllObjects,
    ShowObject,
    classify,
)
from clerc.config import ClercConfig, CliOverrides, resolve_config
from clerc.errors import ArgumentError, ClercError
from clerc.logging_config import configure_logging
from clerc.output import print_listing, print_object, trace

logger = logging.getLogger("clerc")

USAGE = """\
clerc BUCKET KEY [--url=URL] [--put | --delete] [--verbose]
       clerc BUCKET [--url=URL] [--verbose] [--show]
       clerc -h | --help
       clerc --version"""


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Argument list to parse. Defaults to sys.argv[1:].

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        prog="clerc",
        usage=USAGE,
        description="clerc - Command LinE Riak Client",
        epilog="Use / as BUCKET to list all buckets.",
    )
    parser.add_argument("bucket", metavar="BUCKET", help="Bucket name, or / to list buckets")
    parser.add_argument("key", metavar="KEY", nargs="?", default=None, help="Object key")
    parser.add_argument("--url", default=None, help="Set the URL of the riak web API.")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show additional information, useful for debugging.",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="List objects instead of keys when listing a bucket.",
    )
    action = parser.add_mutually_exclusive_group()
    action.add_argument("--put", action="store_true", help="Put object which is read from stdin.")
    action.add_argument("--delete", action="store_true", help="Delete the object.")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to the JSON configuration file (default: ~/.clerc)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Level of diagnostics on stderr (default: WARNING)",
    )
    parser.add_argument(
        "--log-format",
        default="text",
        choices=["text", "json"],
        help="Format of error diagnostics on stderr (default: text)",
    )
    parser.add_argument("--version", action="version", version=BANNER)
    args = parser.parse_args(argv)

    if args.bucket != "/":
        if args.key is None and (args.put or args.delete):
            parser.error("--put and --delete require a KEY")
        if args.key is not None and args.show:
            parser.error("--show lists a bucket and cannot be combined with KEY")
    return args


def run(command: Command, config: ClercConfig, client: RiakClient, out: TextIO) -> None:
    """Execute one command and print its result to *out*."""
    if isinstance(command, ListBuckets):
        buckets = client.list_buckets()
        trace(config, "Listing buckets:")
        print_listing(buckets, out)

    elif isinstance(command, ListKeys):
        keys = client.list_keys(command.bucket)
        trace(config, "Listing keys:")
        print_listing(keys, out)

    elif isinstance(command, ShowAllObjects):
        for key in client.list_keys(command.bucket):
            print("Key: " + key, file=out)
            show_object(config, client, command.bucket, key, out)
            print("", file=out)

    elif isinstance(command, ShowObject):
        show_object(config, client, command.bucket, command.key, out)

    elif isinstance(command, PutObject):
        client.put_object(command.bucket, command.key, command.body)

    elif isinstance(command, DeleteObject):
        client.delete_object(command.bucket, command.key)

    else:
        raise ArgumentError(f"Unknown command: {command!r}")


def show_object(config: ClercConfig, client: RiakClient, bucket: str, key: str, out: TextIO) -> None:
    body = client.get_object(bucket, key)
    trace(config, f"Showing object: {bucket}/{key}")
    print_object(body, out)


def main(argv: list[str] | None = None, stdin: BinaryIO | None = None) -> int:
    """Main entry point for the clerc CLI.

    Resolves configuration (defaults, ``~/.clerc``, then flags), picks the
    command, and runs it against the configured server. Any error aborts the
    command; it is logged to stderr and mapped to a non-zero exit status.

    Args:
        argv: Argument list to parse. Defaults to sys.argv[1:].
        stdin: Binary stream read by ``--put``. Defaults to sys.stdin.

    Returns:
        Process exit status.
    """
    args = parse_args(argv)
    configure_logging(level=args.log_level, fmt=args.log_format)

    out = sys.stdout
    if hasattr(out, "reconfigure"):
        # Non-JSON objects are printed byte for byte.
        out.reconfigure(errors="surrogateescape")
    if stdin is None and args.put:
        stdin = sys.stdin.buffer

    try:
        config = resolve_config(
            CliOverrides(url=args.url, verbose=args.verbose, show=args.show),
            path=args.config,
        )
        command = classify(
            args.bucket,
            args.key,
            put=args.put,
            delete=args.delete,
            show_objects=config.show_objects,
            stdin=stdin,
        )
        with RiakClient(config) as client:
            run(command, config, client, out)
    except ClercError as exc:
        logger.error("%s", exc.message)
        return exc.exit_status

    return 0


def entry_point() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    entry_point()
