"""
Token classification shared by the parser and the highlighter.

The class of a token is decided by its first character alone.
"""

from hashcmd.core.types import PARAM_CHAR, STRING_CHAR, TokenClass


def is_space(char: str) -> bool:
    """Whitespace test used for token boundaries outside quoted strings."""
    return char.isspace()


def classify(char: str) -> TokenClass:
    """
    Classify a new token from its first character.

    Params:
        char: First character of the token

    Returns:
        QUOTED_STRING for '"', PARAM_NAME for '#', BARE_WORD otherwise
    """
    if char == STRING_CHAR:
        return TokenClass.QUOTED_STRING
    if char == PARAM_CHAR:
        return TokenClass.PARAM_NAME
    return TokenClass.BARE_WORD


def starts_bare_word(fragment: str) -> bool:
    """Check whether a pre-split fragment opens a bare word."""
    return bool(fragment) and classify(fragment[0]) is TokenClass.BARE_WORD
