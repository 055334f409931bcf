"""
hashcmd exception classes.

This package provides all exception types used throughout hashcmd for
consistent error handling and reporting.
"""

from hashcmd.exceptions.core import (
    CommandParseError,
    ErrorContext,
    FormatterConfigError,
    HashCmdError,
)

__all__ = [
    "HashCmdError",
    "CommandParseError",
    "ErrorContext",
    "FormatterConfigError",
]
