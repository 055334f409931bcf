"""
hashcmd parsing components.

This package provides token classification, the command parser and the
multi-line stream joiner.
"""

from hashcmd.parsing.parser import (
    UNTERMINATED_STRING_MIN_LENGTH,
    CommandParser,
    parse_args,
    parse_command,
)
from hashcmd.parsing.stream import (
    COMMENT_MARKER,
    LineSegment,
    StreamJoiner,
    iter_records,
    parse_file,
    parse_lines,
    parse_lines_async,
    parse_stream,
    parse_text,
    split_line,
)
from hashcmd.parsing.tokens import classify, is_space

__all__ = [
    "COMMENT_MARKER",
    "UNTERMINATED_STRING_MIN_LENGTH",
    "CommandParser",
    "LineSegment",
    "StreamJoiner",
    "classify",
    "is_space",
    "iter_records",
    "parse_args",
    "parse_command",
    "parse_file",
    "parse_lines",
    "parse_lines_async",
    "parse_stream",
    "parse_text",
    "split_line",
]
