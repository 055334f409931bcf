"""
Core type definitions for hashcmd.

This module contains the lexical token classes, the parameter state used
while committing tokens, and the reusable scratch buffer that callers may
pass into parse calls.
"""

from enum import Enum

from attrs import define, field, frozen

PARAM_CHAR = "#"
STRING_CHAR = '"'


class TokenClass(Enum):
    """Lexical class of the token currently being read."""

    NONE = "none"
    BARE_WORD = "bare_word"
    QUOTED_STRING = "quoted_string"
    PARAM_NAME = "param_name"


class ParamStateKind(Enum):
    """Which accumulator receives committed values."""

    NO_PARAM = "no_param"  # direct-params phase
    EMPTY_NAME = "empty_name"  # values are parsed and dropped
    NAMED = "named"


@frozen
class ParamState:
    """
    Tagged parameter state: no parameter opened, an empty/blank name, or a
    named parameter.

    Keeping "no parameter yet" apart from "blank name" matters: the first
    routes values into direct params, the second discards them.
    """

    kind: ParamStateKind
    name: str = ""

    @classmethod
    def opened(cls, name: str) -> "ParamState":
        """Build the state for a parameter name read after the marker."""
        if not name or name.isspace():
            return cls(ParamStateKind.EMPTY_NAME, name)
        return cls(ParamStateKind.NAMED, name)

    @property
    def is_open(self) -> bool:
        """True once any parameter marker has been read."""
        return self.kind is not ParamStateKind.NO_PARAM


NO_PARAM = ParamState(ParamStateKind.NO_PARAM)
EMPTY_NAME = ParamState(ParamStateKind.EMPTY_NAME)


@define
class ScratchBuffer:
    """
    Reusable accumulators for parse and highlight calls.

    A scratch buffer is owned by the caller and reset at the start of every
    call that receives it. It must not be handed to two calls running at the
    same time; concurrent callers each need their own instance, or can omit
    it and let the call allocate one.
    """

    chars: list[str] = field(factory=list)
    values: list[str] = field(factory=list)
    output: list[str] = field(factory=list)

    def reset(self) -> None:
        self.chars.clear()
        self.values.clear()
        self.output.clear()
