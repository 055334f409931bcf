"""
Incremental syntax highlighting for command lines being typed.

The analyzer applies the parser's token classification to raw, possibly
unfinished input and decorates each token with formatter markers instead of
collecting values. It also reports the command matched so far and the last
token seen, which editors use for completion hints.

Unlike the parser, the analyzer never raises: on any internal failure it
returns the input unchanged with empty metadata.
"""

import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict

from hashcmd.core.escapes import ESCAPE_CHAR
from hashcmd.core.types import STRING_CHAR, ScratchBuffer, TokenClass
from hashcmd.highlighting.formatters import ColorFormatter, ColorType
from hashcmd.parsing.tokens import classify

logger = logging.getLogger(__name__)

TOKEN_SEPARATOR = " "

# Written after an escaped backslash so the output does not end in what looks
# like a dangling escape.
ESCAPED_BACKSLASH = "\\\u200b"


class MatchType(Enum):
    """Role of the last matched token."""

    NONE = "none"
    PARAM = "param"
    PARAM_NAME = "param_name"
    COMMAND = "command"


class SyntaxAnalysis(BaseModel):
    """
    Result of analyzing a command line.

    Params:
        highlighted: Input text interleaved with formatter markers
        matched_command: Command name of the last completed command token
        last_match: Text of the last (possibly unfinished) token
        last_match_type: Role of that token
    """

    model_config = ConfigDict(frozen=True)

    highlighted: str
    matched_command: str = ""
    last_match: str = ""
    last_match_type: MatchType = MatchType.NONE

    @classmethod
    def unannotated(cls, text: str) -> "SyntaxAnalysis":
        """Result carrying the input unchanged and no metadata."""
        return cls(highlighted=text)


class _HighlightState:
    def __init__(self, formatter: ColorFormatter, scratch: ScratchBuffer):
        self.formatter = formatter
        self.out = scratch.output
        self.last = scratch.chars
        self.matched_command = ""
        self.last_type = MatchType.NONE
        self.open_spans = 0
        self.had_command = False
        self.in_token = False
        self.escaping = False
        self.token_class = TokenClass.NONE

    def take_last(self) -> None:
        """Retire the last match, remembering it if it was a command."""
        if self.last_type is MatchType.COMMAND:
            self.matched_command = "".join(self.last)
        self.last.clear()

    def open_span(self, color_type: ColorType) -> None:
        self.out.append(self.formatter.color_head(color_type))
        self.open_spans += 1

    def close_span(self) -> None:
        self.out.append(self.formatter.color_tail())
        self.open_spans -= 1

    def last_char(self) -> str:
        for piece in reversed(self.out):
            if piece:
                return piece[-1]
        return ""


class SyntaxHighlighter:
    """Highlights command lines with a pluggable ColorFormatter."""

    def __init__(self, formatter: ColorFormatter):
        self.formatter = formatter

    def analyze(
        self, text: str | None, scratch: ScratchBuffer | None = None
    ) -> SyntaxAnalysis:
        """
        Analyze and decorate a command line.

        Params:
            text: Raw input, possibly ending mid-token
            scratch: Optional reusable buffer; must not be shared with a
                concurrently running call

        Returns:
            The decorated text and last-match metadata; the unannotated
            input if analysis fails
        """
        if text is None or not text.strip():
            return SyntaxAnalysis.unannotated(text or "")

        scratch = scratch if scratch is not None else ScratchBuffer()
        scratch.reset()
        try:
            return self._analyze(text, _HighlightState(self.formatter, scratch))
        except Exception:
            logger.warning(
                "Syntax analysis failed, returning plain text", exc_info=True
            )
            return SyntaxAnalysis.unannotated(text)
        finally:
            scratch.reset()

    def _analyze(self, text: str, state: _HighlightState) -> SyntaxAnalysis:
        out = state.out
        for char in text:
            if not state.in_token:
                if char == TOKEN_SEPARATOR:
                    out.append(char)
                    state.last_type = MatchType.NONE
                else:
                    self._start_token(state, char)
                continue

            if state.token_class is not TokenClass.QUOTED_STRING:
                if char == TOKEN_SEPARATOR:
                    state.close_span()
                    out.append(char)
                    state.in_token = False
                    state.take_last()
                    state.last_type = MatchType.NONE
                else:
                    out.append(char)
                    state.last.append(char)
                continue

            if state.escaping:
                out.append(ESCAPED_BACKSLASH if char == ESCAPE_CHAR else char)
                state.close_span()
                state.escaping = False
            elif char == ESCAPE_CHAR:
                state.open_span(ColorType.ESCAPE_CHAR)
                out.append(char)
                state.escaping = True
            elif char == STRING_CHAR:
                out.append(char)
                state.close_span()
                state.in_token = False
            else:
                out.append(char)
                state.last.append(char)

        # Close whatever the input left open, innermost first. A trailing
        # unconsumed escape keeps its spans open.
        while state.open_spans > 0:
            if state.last_char() == ESCAPE_CHAR:
                state.open_spans -= 1
                continue
            state.close_span()

        return SyntaxAnalysis(
            highlighted="".join(out),
            matched_command=state.matched_command,
            last_match="".join(state.last),
            last_match_type=state.last_type,
        )

    @staticmethod
    def _start_token(state: _HighlightState, char: str) -> None:
        state.in_token = True
        state.token_class = classify(char)
        state.take_last()

        if state.token_class is TokenClass.QUOTED_STRING:
            state.last_type = MatchType.PARAM
            color_type = ColorType.STRING
        elif state.token_class is TokenClass.PARAM_NAME:
            state.last_type = MatchType.PARAM_NAME
            color_type = ColorType.PARAM_NAME
            state.had_command = True
        elif not state.had_command:
            state.last_type = MatchType.COMMAND
            color_type = ColorType.CMD
            state.had_command = True
        else:
            state.last_type = MatchType.PARAM
            color_type = ColorType.PARAM

        state.open_span(color_type)
        state.out.append(char)
        state.last.append(char)


def analyze_syntax(
    text: str | None,
    formatter: ColorFormatter,
    scratch: ScratchBuffer | None = None,
) -> SyntaxAnalysis:
    """
    Convenience function to highlight a command line.

    Params:
        text: Raw input, possibly incomplete
        formatter: Renders color classes into markup
        scratch: Optional reusable buffer

    Returns:
        SyntaxAnalysis for the input
    """
    return SyntaxHighlighter(formatter).analyze(text, scratch)
