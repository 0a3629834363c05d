import argparse
import logging
import sys

from typing import List, Optional, Tuple
from binstore import (
    DEFAULT_DATA_BIT_WIDTH,
    DEFAULT_HEADER_BYTE_SIZE,
    DEFAULT_VERSION,
    PackedArrayStore,
)
from errors import BinStoreError


def _parse_assignment(text: str) -> Tuple[int, int]:
    """Parse an ``INDEX=VALUE`` pair given to ``--set``.

    :param text: Raw option value.
    :type text: str
    :returns: ``(index, value)``.
    :rtype: Tuple[int, int]
    :raises argparse.ArgumentTypeError: If the text is not two integers
        joined by ``=``.
    """
    index, sep, value = text.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"Expected INDEX=VALUE, got {text!r}")
    try:
        return int(index, 0), int(value, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Expected integers in INDEX=VALUE, got {text!r}"
        ) from None


def _add_store_arguments(parser: argparse.ArgumentParser) -> None:
    """Register the options shared by every subcommand.

    :param parser: Subcommand parser to extend.
    :type parser: argparse.ArgumentParser
    :returns: None
    :rtype: None
    """
    parser.add_argument(
        "values",
        nargs="*",
        type=lambda s: int(s, 0),
        help="Initial element values, stored from index 0",
    )
    parser.add_argument(
        "--version",
        type=lambda s: int(s, 0),
        default=DEFAULT_VERSION,
        help=f"Format version written to the header (default: {DEFAULT_VERSION})",
    )
    parser.add_argument(
        "--header-size",
        type=int,
        default=DEFAULT_HEADER_BYTE_SIZE,
        help=f"Header length in bytes (default: {DEFAULT_HEADER_BYTE_SIZE})",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=DEFAULT_DATA_BIT_WIDTH,
        help=f"Bits per element (default: {DEFAULT_DATA_BIT_WIDTH})",
    )
    parser.add_argument(
        "--set",
        dest="assignments",
        metavar="INDEX=VALUE",
        action="append",
        type=_parse_assignment,
        default=[],
        help="Write VALUE at INDEX after construction (repeatable)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )


def get_parser():
    """Create and configure the CLI argument parser.

    :returns: Configured argument parser.
    :rtype: argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Pack fixed-width unsigned integers into a compact buffer"
    )
    subparsers = parser.add_subparsers(
        title="subcommands", dest="cmd", required=True
    )

    pack = subparsers.add_parser(
        "pack", aliases=["p"], help="Print the packed buffer as hex"
    )
    _add_store_arguments(pack)

    render = subparsers.add_parser(
        "render", aliases=["r"], help="Print the packed buffer as binary groups"
    )
    _add_store_arguments(render)

    return parser


def build_store(
    values: List[int],
    version: int,
    header_size: int,
    width: int,
    assignments: List[Tuple[int, int]],
) -> PackedArrayStore:
    """Construct a store and apply the ``--set`` writes in order.

    :param values: Initial element values.
    :type values: List[int]
    :param version: Header format version.
    :type version: int
    :param header_size: Header length in bytes.
    :type header_size: int
    :param width: Bits per element.
    :type width: int
    :param assignments: ``(index, value)`` writes to apply afterwards.
    :type assignments: List[Tuple[int, int]]
    :returns: The populated store.
    :rtype: PackedArrayStore
    :raises BinStoreError: If the configuration or any value is invalid.
    """
    store = PackedArrayStore(version, header_size, width, values)
    for index, value in assignments:
        store.write(index, value)
    return store


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the CLI tool.

    :param argv: Arguments to parse instead of ``sys.argv[1:]``.
    :type argv: Optional[List[str]]
    :returns: Process exit status.
    :rtype: int
    """
    parser = get_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        store = build_store(
            args.values, args.version, args.header_size, args.width,
            args.assignments,
        )
    except BinStoreError as e:
        print("[!]", e)
        return 1

    if args.cmd in ["pack", "p"]:
        print(bytes(store).hex())
    elif args.cmd in ["render", "r"]:
        print(store.render())
    return 0


if __name__ == "__main__":
    sys.exit(main())
