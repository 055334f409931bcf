"""
hashcmd - parse, format and highlight ``command [params] #name values`` lines

hashcmd turns single-line commands into structured records, joins multi-line
command files, and highlights partially typed commands for interactive
editors.
"""

from importlib.metadata import version

from hashcmd.core.record import CommandRecord
from hashcmd.core.types import ScratchBuffer
from hashcmd.formatting import format_record
from hashcmd.highlighting import (
    ColorFormatter,
    ColorType,
    MarkupColorFormatter,
    MatchType,
    SyntaxAnalysis,
    analyze_syntax,
)
from hashcmd.parsing import (
    CommandParser,
    parse_args,
    parse_command,
    parse_file,
    parse_lines,
    parse_lines_async,
    parse_text,
)

__version__ = version("hashcmd")

__all__ = [
    "__version__",
    "CommandParser",
    "CommandRecord",
    "ColorFormatter",
    "ColorType",
    "MarkupColorFormatter",
    "MatchType",
    "ScratchBuffer",
    "SyntaxAnalysis",
    "analyze_syntax",
    "format_record",
    "parse_args",
    "parse_command",
    "parse_file",
    "parse_lines",
    "parse_lines_async",
    "parse_text",
]
