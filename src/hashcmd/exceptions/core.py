"""
Exception classes for hashcmd command processing.

This module defines the exception types raised by the command parser, the
stream joiner and the highlighting configuration layer.
"""

from dataclasses import dataclass


@dataclass
class ErrorContext:
    """
    Context information for error messages.

    Captures where a failing command came from when it was read out of a
    multi-line source.

    Params:
        line_number: Physical line number (1-based) of the last line that
            contributed to the failing command
        source_name: Name of the source (file path or stream name)
        command_text: The joined command text that was being parsed
    """

    line_number: int | None = None
    source_name: str | None = None
    command_text: str | None = None

    def format_location(self) -> str:
        """
        Format location information.

        Returns:
            Formatted location string, one detail per line
        """
        lines = []

        if self.source_name and self.line_number is not None:
            lines.append(f"  at {self.source_name}:{self.line_number}")
        elif self.line_number is not None:
            lines.append(f"  at line {self.line_number}")
        elif self.source_name:
            lines.append(f"  in {self.source_name}")

        if self.command_text:
            lines.append(f"  command: {self.command_text}")

        return "\n".join(lines)


class HashCmdError(Exception):
    """Base exception for all hashcmd errors."""

    pass


class CommandParseError(HashCmdError):
    """
    Raised when the parser hits an unexpected internal fault.

    Malformed input never raises; this error only wraps faults that the
    permissive grammar rules cannot absorb.
    """

    def __init__(
        self, text: str, reason: str, context: ErrorContext | None = None
    ):
        """
        Initialize the exception.

        Params:
            text: The trimmed source text being parsed
            reason: Description of the underlying fault
            context: Optional source location of the failing command
        """
        self.text = text
        self.reason = reason
        self.context = context
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        message = f"Failed to parse command '{self.text}': {self.reason}"
        if self.context:
            location = self.context.format_location()
            if location:
                message = f"{message}\n{location}"
        return message

    def with_context(self, context: ErrorContext) -> "CommandParseError":
        """Return a copy of this error carrying the given source context."""
        error = CommandParseError(self.text, self.reason, context)
        error.__cause__ = self.__cause__
        return error


class FormatterConfigError(HashCmdError):
    """Raised when a color formatter configuration is invalid."""

    def __init__(self, field_name: str, message: str):
        """
        Initialize the exception.

        Params:
            field_name: The configuration field that failed validation
            message: Specific error message
        """
        self.field_name = field_name
        super().__init__(f"Invalid formatter setting '{field_name}': {message}")
