"""
Parser for hashcmd command lines.

A command line has the form::

    command [dirParams ...] [#name [values ...]] ...

- ``command`` is the first bare token; it may not start with '"' or '#'.
- Tokens after the command and before the first '#' are direct parameters.
- ``#name`` opens a named parameter that owns the following tokens.
- '"' starts a quoted token that may contain whitespace and backslash escapes.

The grammar is permissive: malformed input yields a best-effort record and
never raises. Examples::

    command 0 2.1 #paramName 20000129 3.14 str "str with space" #t "a \\n b"
    command abc #  dropped "also dropped" #t kept     -> blank name discarded
    command abc 0.618 #t "str i" e=a #t aaa 1.414     -> #t is (aaa, 1.414)
    "a" cmd #t aa bb                                  -> "a" is discarded
    "xxx" #t aaa cmd aa "aaa"                         -> command is ""
"""

import logging
from collections.abc import Iterable

from hashcmd.core.escapes import ESCAPE_CHAR, quote, unescape
from hashcmd.core.record import EMPTY_RECORD, CommandRecord
from hashcmd.core.types import (
    EMPTY_NAME,
    NO_PARAM,
    PARAM_CHAR,
    STRING_CHAR,
    ParamState,
    ParamStateKind,
    ScratchBuffer,
    TokenClass,
)
from hashcmd.exceptions import CommandParseError
from hashcmd.formatting import format_command_name
from hashcmd.parsing.tokens import classify, is_space, starts_bare_word

logger = logging.getLogger(__name__)

# An unterminated quoted string at end of input is kept only when its
# captured content is longer than this.
UNTERMINATED_STRING_MIN_LENGTH = 2


class _CommitState:
    """Routes committed tokens into command, direct params or named params."""

    def __init__(self, scratch: ScratchBuffer):
        self.scratch = scratch
        self.values = scratch.values
        self.command = ""
        self.param: ParamState = NO_PARAM
        self.dir_params: list[str] = []
        self.params: dict[str, list[str]] = {}

    def decode(self, raw: str) -> str:
        return unescape(raw, self.scratch.chars)

    def commit_bare(self, raw: str) -> bool:
        """
        Commit a bare word.

        Returns:
            True if the word became the command name
        """
        value = self.decode(raw)
        if not self.command and not self.param.is_open:
            self.command = value
            # Anything collected before the command is dropped.
            self.values.clear()
            return True
        self.values.append(value)
        return False

    def add_value(self, value: str) -> None:
        self.values.append(value)

    def open_param(self) -> None:
        """Flush the active accumulator and enter the blank-name state."""
        self.flush()
        self.param = EMPTY_NAME

    def name_param(self, name: str) -> None:
        self.param = ParamState.opened(name)

    def flush(self) -> None:
        if self.param.kind is ParamStateKind.NAMED:
            self.params[self.param.name] = list(self.values)
        elif self.param.kind is ParamStateKind.NO_PARAM:
            self.dir_params = list(self.values)
        self.values.clear()

    def build(self, text: str) -> CommandRecord:
        return CommandRecord(
            command=self.command,
            text=text,
            dir_params=self.dir_params,
            params=self.params,
        )


class CommandParser:
    """Single-pass parser turning command text into a CommandRecord."""

    def parse(
        self, text: str | None, scratch: ScratchBuffer | None = None
    ) -> CommandRecord:
        """
        Parse a command line.

        Params:
            text: Raw command line; surrounding whitespace is ignored
            scratch: Optional reusable buffer; must not be shared with a
                concurrently running call

        Returns:
            The parsed record; its text is the trimmed input

        Raises:
            CommandParseError: Only on an unexpected internal fault
        """
        text = (text or "").strip()
        if not text:
            return EMPTY_RECORD

        scratch = scratch if scratch is not None else ScratchBuffer()
        scratch.reset()

        try:
            return self._parse_text(text, _CommitState(scratch))
        except Exception as e:
            logger.debug("Parser fault on %r", text, exc_info=True)
            raise CommandParseError(text, f"{type(e).__name__}: {e}") from e
        finally:
            scratch.reset()

    def _parse_text(self, text: str, state: _CommitState) -> CommandRecord:
        anchor = 0
        in_token = False
        escaping = False
        token_class = TokenClass.NONE

        for i, char in enumerate(text):
            if token_class is not TokenClass.QUOTED_STRING and is_space(char):
                if in_token:
                    self._commit(state, token_class, text[anchor:i])
                    in_token = False
                    token_class = TokenClass.NONE
                continue

            if not in_token:
                anchor = i
                token_class = classify(char)
                if token_class is TokenClass.PARAM_NAME:
                    state.open_param()
                in_token = True
                continue

            if token_class is not TokenClass.QUOTED_STRING:
                continue

            if escaping:
                escaping = False
            elif char == ESCAPE_CHAR:
                escaping = True
            elif char == STRING_CHAR:
                state.add_value(state.decode(text[anchor + 1 : i]))
                in_token = False
                token_class = TokenClass.NONE

        if in_token:
            if token_class is TokenClass.QUOTED_STRING:
                content = text[anchor + 1 :]
                if len(content) > UNTERMINATED_STRING_MIN_LENGTH:
                    state.add_value(state.decode(content))
            else:
                self._commit(state, token_class, text[anchor:])

        state.flush()
        return state.build(text)

    @staticmethod
    def _commit(state: _CommitState, token_class: TokenClass, raw: str) -> None:
        if token_class is TokenClass.PARAM_NAME:
            state.name_param(raw[1:])
        else:
            state.commit_bare(raw)

    def parse_args(
        self,
        fragments: Iterable[str | None] | None,
        scratch: ScratchBuffer | None = None,
    ) -> CommandRecord:
        """
        Parse pre-split fragments, such as a process argument vector.

        Fragments are already discrete, so none is unquoted. Until a command
        or parameter is established, a bare fragment is split on whitespace
        and its first piece becomes the command. A ``#name`` fragment ends its
        name at the first whitespace and the rest reads as values. The record
        text is rebuilt with every value re-quoted so that parsing it gives
        the same record.

        Params:
            fragments: Argument fragments; None entries are skipped
            scratch: Optional reusable buffer

        Returns:
            The parsed record

        Raises:
            CommandParseError: Only on an unexpected internal fault
        """
        if not fragments:
            return EMPTY_RECORD

        scratch = scratch if scratch is not None else ScratchBuffer()
        scratch.reset()
        state = _CommitState(scratch)
        parts = scratch.output

        try:
            for fragment in fragments:
                if fragment is None:
                    continue

                if (
                    not state.command
                    and not state.param.is_open
                    and starts_bare_word(fragment)
                ):
                    for piece in fragment.split():
                        if state.commit_bare(piece):
                            parts.append(format_command_name(state.command))
                        else:
                            parts.append(quote(state.values[-1]))
                    continue

                if fragment.startswith(PARAM_CHAR):
                    # Text after whitespace in a name fragment reads as values.
                    name, *values = fragment.split()
                    state.open_param()
                    state.name_param(name[1:])
                    parts.append(name)
                    for piece in values:
                        value = state.decode(piece)
                        state.add_value(value)
                        parts.append(quote(value))
                else:
                    value = state.decode(fragment)
                    state.add_value(value)
                    parts.append(quote(value))

            state.flush()
            text = " ".join(part for part in parts if part).strip()
            return state.build(text)
        except Exception as e:
            joined = " ".join(str(f) for f in fragments if f is not None)
            logger.debug("Parser fault on fragments %r", joined, exc_info=True)
            raise CommandParseError(joined, f"{type(e).__name__}: {e}") from e
        finally:
            scratch.reset()


_default_parser = CommandParser()


def parse_command(
    text: str | None, scratch: ScratchBuffer | None = None
) -> CommandRecord:
    """
    Convenience function to parse a command string.

    Params:
        text: The command string to parse
        scratch: Optional reusable buffer

    Returns:
        The parsed CommandRecord
    """
    return _default_parser.parse(text, scratch)


def parse_args(
    fragments: Iterable[str | None] | None, scratch: ScratchBuffer | None = None
) -> CommandRecord:
    """Convenience function to parse pre-split argument fragments."""
    return _default_parser.parse_args(fragments, scratch)
