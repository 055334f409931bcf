"""
Canonical serialization of command records.

The canonical form quotes and escapes every value and lists named parameters
in key order::

    cmd "direct1" "direct2" #name "v1" "v2" #other "v3"

It is not the original input text, but parsing it yields a record with the
same command, direct parameters and named parameters.
"""

from hashcmd.core.escapes import ESCAPE_CHAR, escape, quote
from hashcmd.core.record import CommandRecord
from hashcmd.core.types import PARAM_CHAR


def format_command_name(command: str) -> str:
    """Escape a command name so it reads back as the same bare word."""
    escaped = escape(command)
    if escaped.startswith(PARAM_CHAR):
        return ESCAPE_CHAR + escaped
    return escaped


def format_record(record: CommandRecord) -> str:
    """
    Serialize a record to canonical command text.

    Params:
        record: The record to serialize

    Returns:
        Canonical text, tokens separated by single spaces
    """
    parts = []
    if record.command:
        parts.append(format_command_name(record.command))
    parts.extend(quote(value) for value in record.dir_params)
    for name, values in record.params.items():
        parts.append(f"{PARAM_CHAR}{name}")
        parts.extend(quote(value) for value in values)
    return " ".join(parts)
