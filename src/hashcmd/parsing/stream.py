"""
Multi-line command sources.

Physical lines are joined into logical command lines before parsing:

- ``//`` starts a comment that runs to the end of the line; a line that
  starts with ``//`` is dropped entirely.
- A line ending in an odd number of backslashes continues on the next line.
  The last backslash is the continuation marker and is removed; an even
  number of trailing backslashes is literal text.
- A continuation marker written just before ``//`` still continues the line.

Each logical line is parsed into one CommandRecord.
"""

import logging
import re
from collections.abc import AsyncIterable, Iterable, Iterator
from pathlib import Path
from typing import TextIO

from attrs import frozen

from hashcmd.core.escapes import ESCAPE_CHAR
from hashcmd.core.record import CommandRecord
from hashcmd.core.types import ScratchBuffer
from hashcmd.exceptions import CommandParseError, ErrorContext
from hashcmd.parsing.parser import CommandParser

logger = logging.getLogger(__name__)

COMMENT_MARKER = "//"

# Only these end a line; form feeds and other Unicode breaks stay in the text.
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@frozen
class LineSegment:
    """
    The part of a physical line that contributes to a logical line.

    Params:
        text: Kept text, trimmed, without comment or continuation marker
        continues: True if the logical line goes on past this line
    """

    text: str
    continues: bool


def _trailing_escapes(line: str, end: int) -> int:
    """Count consecutive backslashes ending just before position ``end``."""
    count = 0
    i = end - 1
    while i >= 0 and line[i] == ESCAPE_CHAR:
        count += 1
        i -= 1
    return count


def split_line(line: str) -> LineSegment | None:
    """
    Strip the comment and continuation marker from one physical line.

    Params:
        line: Physical line without its line terminator

    Returns:
        The kept segment, or None if the line contributes nothing and must
        not end the pending logical line
    """
    comment = line.find(COMMENT_MARKER)

    if comment == 0:
        return None

    if comment > 0:
        continues = _trailing_escapes(line, comment) % 2 == 1
        if continues:
            comment -= 1
        if comment <= 0:
            return None
        kept = line[:comment].strip()
        if not kept:
            return None
        return LineSegment(kept, continues)

    continues = _trailing_escapes(line, len(line)) % 2 == 1
    if continues:
        if len(line) <= 1:
            return None
        line = line[:-1]
    return LineSegment(line.strip(), continues)


class StreamJoiner:
    """
    Incremental joiner feeding logical lines to a CommandParser.

    Feed physical lines one at a time; a record is returned whenever a
    logical line completes. Call ``finish`` after the last line to parse any
    text still pending.
    """

    def __init__(
        self,
        parser: CommandParser | None = None,
        scratch: ScratchBuffer | None = None,
        source_name: str | None = None,
    ):
        self.parser = parser or CommandParser()
        self.scratch = scratch
        self.source_name = source_name
        self._pending: list[str] = []
        self._line_number = 0

    @property
    def has_pending(self) -> bool:
        """True while a continued logical line is waiting for more input."""
        return any(self._pending)

    def feed(self, line: str) -> CommandRecord | None:
        """
        Consume one physical line.

        Params:
            line: Physical line; a trailing line terminator is ignored

        Returns:
            The record for the logical line completed by this line, if any

        Raises:
            CommandParseError: If the parser faults on the joined line
        """
        self._line_number += 1
        line = line.rstrip("\r\n")
        if not line:
            return None

        segment = split_line(line)
        if segment is None:
            logger.debug("Line %d dropped as comment", self._line_number)
            return None

        if segment.text:
            self._pending.append(segment.text)
        if segment.continues:
            logger.debug("Line %d continues on the next line", self._line_number)
            return None
        return self._emit()

    def finish(self) -> CommandRecord | None:
        """Parse whatever is still pending after the last line."""
        return self._emit()

    def _emit(self) -> CommandRecord | None:
        text = " ".join(self._pending)
        self._pending.clear()
        if not text.strip():
            return None

        try:
            record = self.parser.parse(text, self.scratch)
        except CommandParseError as e:
            context = ErrorContext(
                line_number=self._line_number,
                source_name=self.source_name,
                command_text=text,
            )
            raise e.with_context(context) from e.__cause__

        logger.debug("Line %d completed command %r", self._line_number, record.text)
        return record


def iter_records(
    lines: Iterable[str],
    parser: CommandParser | None = None,
    scratch: ScratchBuffer | None = None,
    source_name: str | None = None,
) -> Iterator[CommandRecord]:
    """
    Lazily parse physical lines into records, one per logical line.

    Params:
        lines: Physical lines, with or without line terminators
        parser: Parser to use; a default one is created if omitted
        scratch: Optional reusable buffer, owned by this iteration
        source_name: Name used in error locations

    Yields:
        CommandRecord for every completed logical line, in order
    """
    joiner = StreamJoiner(parser, scratch, source_name)
    for line in lines:
        record = joiner.feed(line)
        if record is not None:
            yield record
    record = joiner.finish()
    if record is not None:
        yield record


def parse_lines(
    lines: Iterable[str],
    parser: CommandParser | None = None,
    scratch: ScratchBuffer | None = None,
    source_name: str | None = None,
) -> list[CommandRecord]:
    """Parse physical lines into a list of records."""
    return list(iter_records(lines, parser, scratch, source_name))


def parse_stream(
    stream: TextIO,
    parser: CommandParser | None = None,
    scratch: ScratchBuffer | None = None,
) -> list[CommandRecord]:
    """Parse every line of an open text stream."""
    name = getattr(stream, "name", None)
    return parse_lines(stream, parser, scratch, str(name) if name else None)


def parse_text(
    text: str,
    parser: CommandParser | None = None,
    scratch: ScratchBuffer | None = None,
) -> list[CommandRecord]:
    """Parse a multi-line string."""
    return parse_lines(_LINE_BREAK.split(text), parser, scratch)


def parse_file(
    path: str | Path,
    encoding: str = "utf-8",
    parser: CommandParser | None = None,
    scratch: ScratchBuffer | None = None,
) -> list[CommandRecord]:
    """
    Parse a command file.

    Params:
        path: File to read
        encoding: Text encoding of the file
        parser: Parser to use; a default one is created if omitted
        scratch: Optional reusable buffer

    Returns:
        One record per logical line of the file

    Raises:
        OSError: If the file cannot be read
        CommandParseError: If the parser faults on a line
    """
    path = Path(path)
    with path.open(encoding=encoding) as f:
        return parse_lines(f, parser, scratch, str(path))


async def parse_lines_async(
    lines: AsyncIterable[str],
    parser: CommandParser | None = None,
    scratch: ScratchBuffer | None = None,
    source_name: str | None = None,
) -> list[CommandRecord]:
    """
    Parse lines read from an asynchronous source.

    Joining and parsing are the same as ``parse_lines``; the coroutine only
    suspends while waiting for the next line.

    Params:
        lines: Asynchronous iterable of physical lines
        parser: Parser to use; a default one is created if omitted
        scratch: Optional reusable buffer, owned by this call
        source_name: Name used in error locations

    Returns:
        One record per logical line, in input order
    """
    joiner = StreamJoiner(parser, scratch, source_name)
    records = []
    async for line in lines:
        record = joiner.feed(line)
        if record is not None:
            records.append(record)
    record = joiner.finish()
    if record is not None:
        records.append(record)
    return records
