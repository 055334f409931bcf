"""
Tests for multi-line command sources.

Covers comment stripping, backslash continuation parity, the synchronous,
asynchronous and file entry points, and error locations.
"""

import asyncio
import io

import pytest

from hashcmd.exceptions import CommandParseError
from hashcmd.parsing import parser as parser_module
from hashcmd.parsing.stream import (
    LineSegment,
    StreamJoiner,
    iter_records,
    parse_file,
    parse_lines,
    parse_lines_async,
    parse_stream,
    parse_text,
    split_line,
)


def texts(records):
    return [record.text for record in records]


class TestSplitLine:
    """Test comment and continuation handling of a single line."""

    def test_plain_line(self):
        """Test a line without markers is kept whole."""
        assert split_line("cmd a b") == LineSegment("cmd a b", False)

    def test_comment_at_start_drops_line(self):
        """Test a leading comment marker drops the line."""
        assert split_line("// nothing here") is None

    def test_trailing_comment_stripped(self):
        """Test text from the marker on is dropped."""
        assert split_line("cmd a // note") == LineSegment("cmd a", False)

    def test_indented_comment_line_dropped(self):
        """Test a comment preceded only by whitespace contributes nothing."""
        assert split_line("    // note") is None

    def test_odd_trailing_backslashes_continue(self):
        """Test one or three trailing backslashes continue the line."""
        assert split_line("foo \\") == LineSegment("foo", True)
        assert split_line("foo \\\\\\") == LineSegment("foo \\\\", True)

    def test_even_trailing_backslashes_are_literal(self):
        """Test two trailing backslashes do not continue the line."""
        assert split_line("foo \\\\") == LineSegment("foo \\\\", False)

    def test_lone_backslash_dropped(self):
        """Test a line holding only the continuation marker is dropped."""
        assert split_line("\\") is None

    def test_continuation_before_comment(self):
        """Test a backslash right before the comment still continues."""
        assert split_line("foo \\// note") == LineSegment("foo", True)

    def test_escaped_backslash_before_comment(self):
        """Test an even run before the comment is literal text."""
        assert split_line("foo \\\\// note") == LineSegment("foo \\\\", False)

    def test_continuation_only_before_comment_dropped(self):
        """Test a line that is only a continuation marker and a comment."""
        assert split_line("\\// note") is None


class TestParseLines:
    """Test joining physical lines into records."""

    def test_one_record_per_line(self):
        """Test independent lines give independent records."""
        records = parse_lines(["cmd a", "other #t b"])
        assert texts(records) == ["cmd a", "other #t b"]
        assert records[1]["t"] == ("b",)

    def test_continuation_joins_lines(self):
        """Test an odd trailing backslash joins with the next line."""
        records = parse_lines(["foo \\", "bar"])
        assert texts(records) == ["foo bar"]
        assert records[0].command == "foo"
        assert records[0].dir_params == ("bar",)

    def test_even_backslashes_do_not_join(self):
        """Test an even trailing backslash run ends the logical line."""
        records = parse_lines(["foo \\\\", "bar"])
        assert texts(records) == ["foo \\\\", "bar"]
        assert records[0].dir_params == ("\\",)

    def test_multi_line_command(self):
        """Test a command spread over several lines with comments."""
        lines = [
            "// header comment",
            "move 10 \\// distance",
            "  #speed fast \\",
            "",
            "  #tag a b   // trailing",
            "stop",
        ]
        records = parse_lines(lines)
        assert texts(records) == ["move 10 #speed fast #tag a b", "stop"]
        assert records[0]["speed"] == ("fast",)
        assert records[0]["tag"] == ("a", "b")

    def test_comment_lines_inside_continuation(self):
        """Test comment-only lines do not end a continued command."""
        records = parse_lines(["cmd a \\", "// skipped", "b"])
        assert texts(records) == ["cmd a b"]

    def test_residual_continuation_parsed(self):
        """Test text pending after the last line still becomes a record."""
        records = parse_lines(["cmd a \\"])
        assert texts(records) == ["cmd a"]

    def test_blank_lines_produce_no_records(self):
        """Test empty and whitespace-only lines are ignored."""
        assert parse_lines(["", "   ", "\t"]) == []

    def test_line_terminators_ignored(self):
        """Test lines read from files keep no terminators."""
        records = parse_lines(["cmd a\n", "foo \\\r\n", "bar\r\n"])
        assert texts(records) == ["cmd a", "foo bar"]

    def test_quoted_string_across_lines(self):
        """Test a quoted value continued on the next line."""
        records = parse_lines(['say "hello \\', 'world"'])
        assert records[0].dir_params == ("hello world",)

    def test_iter_records_is_lazy(self):
        """Test records are produced as lines complete."""

        def lines():
            yield "first"
            yield "second \\"
            yield "part"

        iterator = iter_records(lines())
        assert next(iterator).text == "first"
        assert next(iterator).text == "second part"
        with pytest.raises(StopIteration):
            next(iterator)


class TestStreamJoiner:
    """Test the incremental joiner."""

    def test_feed_and_finish(self):
        """Test feeding lines one by one."""
        joiner = StreamJoiner()
        assert joiner.feed("cmd a \\") is None
        assert joiner.has_pending
        record = joiner.feed("b")
        assert record.text == "cmd a b"
        assert not joiner.has_pending
        assert joiner.finish() is None

    def test_parser_fault_reports_line(self, monkeypatch):
        """Test a parser fault carries the source location."""

        def broken_unescape(text, scratch=None):
            raise RuntimeError("boom")

        monkeypatch.setattr(parser_module, "unescape", broken_unescape)
        joiner = StreamJoiner(source_name="commands.txt")
        joiner.feed("// comment")

        with pytest.raises(CommandParseError) as exc_info:
            joiner.feed("cmd a")

        error = exc_info.value
        assert error.context.line_number == 2
        assert error.context.source_name == "commands.txt"
        assert "commands.txt:2" in str(error)
        assert isinstance(error.__cause__, RuntimeError)


class TestSourceEntryPoints:
    """Test text, stream, file and async sources."""

    def test_parse_text(self):
        """Test a multi-line string."""
        records = parse_text("cmd a // c\nfoo \\\nbar\n")
        assert texts(records) == ["cmd a", "foo bar"]

    def test_parse_text_breaks_only_at_newlines(self):
        """Test form feeds and Unicode line separators stay inside a line."""
        text = "cmd a\x0cb\u2028c\r\nnext\rlast\n"
        records = parse_text(text)
        assert texts(records) == ["cmd a\x0cb\u2028c", "next", "last"]
        assert records[0].dir_params == ("a", "b", "c")
        streamed = parse_stream(io.StringIO("cmd a\x0cb\u2028c\n"))
        assert texts(streamed) == texts(records[:1])

    def test_parse_stream(self):
        """Test an open text stream."""
        records = parse_stream(io.StringIO("one\n// skip\ntwo #t x\n"))
        assert texts(records) == ["one", "two #t x"]

    def test_parse_file(self, tmp_path):
        """Test reading a command file."""
        path = tmp_path / "commands.txt"
        path.write_text('greet "张三" \\\n  #times 3\n', encoding="utf-8")
        records = parse_file(path)
        assert len(records) == 1
        assert records[0].dir_params == ("张三",)
        assert records[0].get_int("times", 0) == 3

    def test_parse_file_missing(self, tmp_path):
        """Test a missing file raises OSError."""
        with pytest.raises(OSError):
            parse_file(tmp_path / "missing.txt")

    def test_parse_lines_async_matches_sync(self):
        """Test the async variant yields the same records in order."""
        lines = ["// header", "a 1 \\", "2", "b #t x", "c \\"]

        async def source():
            for line in lines:
                await asyncio.sleep(0)
                yield line

        records = asyncio.run(parse_lines_async(source()))
        assert texts(records) == texts(parse_lines(lines))
        assert texts(records) == ["a 1 2", "b #t x", "c"]
