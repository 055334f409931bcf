"""
Core hashcmd components.

This package provides the command record, the escape codec and the shared
lexical type definitions.
"""

from hashcmd.core.escapes import (
    ESCAPE_CHAR,
    decode_char,
    encode_char,
    escape,
    quote,
    unescape,
)
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

__all__ = [
    "CommandRecord",
    "EMPTY_RECORD",
    "ESCAPE_CHAR",
    "PARAM_CHAR",
    "STRING_CHAR",
    "EMPTY_NAME",
    "NO_PARAM",
    "ParamState",
    "ParamStateKind",
    "ScratchBuffer",
    "TokenClass",
    "decode_char",
    "encode_char",
    "escape",
    "quote",
    "unescape",
]
