"""
Backslash escape codec shared by the parser, the formatter and the highlighter.

Escapes map a fixed set of control characters to two-character sequences.
Any other character following a backslash decodes to itself, so the codec
has no error path.
"""

ESCAPE_CHAR = "\\"

_DECODE_MAP = {
    "0": "\0",
    "a": "\a",
    "b": "\b",
    "t": "\t",
    "n": "\n",
    "v": "\v",
    "f": "\f",
    "r": "\r",
}

_ENCODE_MAP = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\t": "\\t",
    "\0": "\\0",
    "\a": "\\a",
    "\b": "\\b",
    "\v": "\\v",
    "\f": "\\f",
    "\r": "\\r",
}


def decode_char(char: str) -> str:
    """
    Decode the character that follows a backslash.

    Params:
        char: Single character after the escape marker

    Returns:
        The control character it names, or the character itself
    """
    return _DECODE_MAP.get(char, char)


def encode_char(char: str) -> str | None:
    """
    Encode a single character as an escape sequence.

    Params:
        char: Single character to encode

    Returns:
        The escape sequence, or None if the character is written unescaped
    """
    return _ENCODE_MAP.get(char)


def unescape(text: str, scratch: list[str] | None = None) -> str:
    """
    Decode every backslash unit in a string.

    A trailing lone backslash has nothing to escape and is dropped.

    Params:
        text: Raw text possibly containing escape sequences
        scratch: Optional character list reused as the output accumulator;
            it is cleared before use

    Returns:
        The decoded string
    """
    if ESCAPE_CHAR not in text:
        return text

    out = scratch if scratch is not None else []
    out.clear()
    escaping = False
    for char in text:
        if escaping:
            out.append(decode_char(char))
            escaping = False
        elif char == ESCAPE_CHAR:
            escaping = True
        else:
            out.append(char)
    return "".join(out)


def escape(text: str) -> str:
    """Encode every escapable character of a string."""
    return "".join(_ENCODE_MAP.get(char, char) for char in text)


def quote(text: str) -> str:
    """Escape a string and wrap it in double quotes."""
    return f'"{escape(text)}"'
