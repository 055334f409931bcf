"""
hashcmd syntax highlighting.

This package provides the incremental syntax analyzer and the color
formatters it renders through.
"""

from hashcmd.highlighting.analyzer import (
    MatchType,
    SyntaxAnalysis,
    SyntaxHighlighter,
    analyze_syntax,
)
from hashcmd.highlighting.formatters import (
    ColorFormatter,
    ColorType,
    MarkupColorFormatter,
    PlainColorFormatter,
)

__all__ = [
    "ColorFormatter",
    "ColorType",
    "MarkupColorFormatter",
    "MatchType",
    "PlainColorFormatter",
    "SyntaxAnalysis",
    "SyntaxHighlighter",
    "analyze_syntax",
]
