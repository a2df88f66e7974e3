from __future__ import annotations

"""
Command-line interface for pageio.

Typical usage
-------------

Show where and how a value would be written:

    pageio resolve data.config --format json

Convert a file from one format to another:

    pageio convert settings.yaml settings --format json

Notes
-----
- `convert` works on plain data (dicts, lists, scalars); field order is
  kept, but XML input yields strings for every leaf value.
- Library, I/O and codec errors are reported as "pageio: error: ..." with
  exit code 2.
"""

import argparse
import logging
import sys
from typing import Optional

import yaml
from lxml import etree

from .api import read, write
from .exceptions import PageioError
from .formats import resolve_target


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------


def _cmd_resolve(args: argparse.Namespace) -> int:
    """
    Print the effective path and format, tab separated.
    """
    target = resolve_target(args.filename, args.format)
    print(f"{target.path}\t{target.format}")
    return 0


def _cmd_convert(args: argparse.Namespace) -> int:
    """
    Read SRC as plain data and write it to DST.
    """
    data = read(args.src, options=args.options)
    out_path = write(args.dst, data, args.format, options=args.options)
    print(str(out_path))
    return 0


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: Optional[list[str]] = None) -> int:
    """
    CLI entry point.
    """
    parser = argparse.ArgumentParser(prog="pageio", description="pageio CLI")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug information to stderr.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # resolve
    p_resolve = subparsers.add_parser(
        "resolve",
        help="Print the effective path and format for a filename.",
    )
    p_resolve.add_argument("filename", type=str, help="Destination filename.")
    p_resolve.add_argument(
        "--format",
        type=str,
        default=None,
        help="Format hint: json, xml or yaml (case-insensitive).",
    )
    p_resolve.set_defaults(func=_cmd_resolve)

    # convert
    p_convert = subparsers.add_parser(
        "convert",
        help="Convert a JSON, XML or YAML file into another format.",
    )
    p_convert.add_argument("src", type=str, help="Source file; its extension selects the format.")
    p_convert.add_argument("dst", type=str, help="Destination file.")
    p_convert.add_argument(
        "--format",
        type=str,
        default=None,
        help="Output format hint (defaults to the destination extension).",
    )
    p_convert.add_argument(
        "--options",
        type=str,
        default=None,
        help="Path to a JSON or YAML file with codec options.",
    )
    p_convert.set_defaults(func=_cmd_convert)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s - %(levelname)s - %(message)s",
    )

    try:
        return args.func(args)
    except (PageioError, OSError, ValueError, TypeError, yaml.YAMLError, etree.LxmlError) as e:
        print(f"pageio: error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
