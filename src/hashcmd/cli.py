"""
Command line entry point.

Reads command files and prints one parsed command per line, or highlights a
single command line.
"""

import argparse
import logging
import sys

from hashcmd.exceptions import HashCmdError
from hashcmd.highlighting import MarkupColorFormatter, analyze_syntax
from hashcmd.parsing import parse_file

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hashcmd",
        description="Parse hashcmd command files or highlight a command line.",
    )
    parser.add_argument("files", nargs="*", help="command files to parse")
    parser.add_argument(
        "--canonical",
        action="store_true",
        help="print the canonical, fully quoted form of each command",
    )
    parser.add_argument(
        "--highlight", metavar="TEXT", help="highlight a single command line"
    )
    parser.add_argument(
        "--theme", metavar="YAML", help="markup formatter configuration file"
    )
    parser.add_argument("--encoding", default="utf-8", help="encoding of input files")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="enable debug logging"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.highlight is not None:
        try:
            formatter = (
                MarkupColorFormatter.from_yaml(args.theme)
                if args.theme
                else MarkupColorFormatter()
            )
        except (OSError, HashCmdError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(analyze_syntax(args.highlight, formatter).highlighted)

    status = 0
    for path in args.files:
        try:
            records = parse_file(path, encoding=args.encoding)
        except (OSError, UnicodeDecodeError, HashCmdError) as e:
            logger.debug("Failed to read %s", path, exc_info=True)
            print(f"Error: {path}: {e}", file=sys.stderr)
            status = 1
            continue
        for record in records:
            print(record.formatted_text if args.canonical else record.text)

    return status

