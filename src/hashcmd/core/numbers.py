"""
Numeric parsing helpers used by the typed accessors.

Integers accept a radix prefix (``0x`` hex, ``0c`` octal, ``0b`` binary) or
plain decimal. All helpers return None instead of raising.
"""

import math
import struct

INT32_BITS = 32
INT64_BITS = 64

_RADIX_PREFIXES = {"0x": 16, "0c": 8, "0b": 2}


def parse_integer(text: str, bits: int = INT32_BITS) -> int | None:
    """
    Parse an integer bounded to a signed width.

    Prefixed values are read as raw bit patterns of the given width, so
    ``0xFFFFFFFF`` is -1 at 32 bits. Decimal values must fit the signed range.

    Params:
        text: Token text
        bits: Width of the target integer type

    Returns:
        The parsed value, or None if the text is not a valid integer
    """
    base = _RADIX_PREFIXES.get(text[:2])
    if base is not None:
        digits = text[2:]
        if not digits or "_" in digits or not digits.isalnum():
            return None
        try:
            value = int(digits, base)
        except ValueError:
            return None
        if value >= 1 << bits:
            return None
        if value >= 1 << (bits - 1):
            value -= 1 << bits
        return value

    stripped = text.strip()
    if not stripped or "_" in stripped:
        return None
    try:
        value = int(stripped, 10)
    except ValueError:
        return None
    limit = 1 << (bits - 1)
    if not -limit <= value < limit:
        return None
    return value


def parse_double(text: str) -> float | None:
    """Parse a double-precision float, or return None."""
    if "_" in text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def parse_single(text: str) -> float | None:
    """Parse a float rounded to single precision, or return None if it overflows."""
    value = parse_double(text)
    if value is None or math.isnan(value) or math.isinf(value):
        return value
    try:
        single = struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return None
    # Out of single range either raises or rounds to infinity.
    if math.isinf(single):
        return None
    return single
