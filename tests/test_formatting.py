"""
Tests for canonical record serialization.
"""

from hashcmd.core.record import CommandRecord
from hashcmd.formatting import format_command_name, format_record
from hashcmd.parsing.parser import parse_command


class TestFormatRecord:
    """Tests for the canonical form."""

    def test_full_record(self):
        """Test command, direct params and named params in key order."""
        record = parse_command("cmd a b #z 3 #a 1 2")
        assert format_record(record) == 'cmd "a" "b" #a "1" "2" #z "3"'

    def test_command_only(self):
        """Test no trailing separator after a lone command."""
        assert format_record(parse_command("cmd")) == "cmd"

    def test_empty_record(self):
        """Test an empty record formats to empty text."""
        assert format_record(CommandRecord()) == ""

    def test_values_escaped(self):
        """Test quotes, backslashes and control characters are escaped."""
        record = CommandRecord(command="say", dir_params=['a "b"\\c\n'])
        assert format_record(record) == 'say "a \\"b\\"\\\\c\\n"'

    def test_named_param_without_values(self):
        """Test a flag-style name is written without values."""
        record = parse_command("cmd #flag #n 1")
        assert format_record(record) == 'cmd #flag #n "1"'

    def test_formatted_text_property(self):
        """Test the record exposes its canonical form."""
        record = parse_command("cmd x #t y")
        assert record.formatted_text == 'cmd "x" #t "y"'


class TestFormatCommandName:
    """Tests for command name escaping."""

    def test_plain_name(self):
        """Test ordinary names are unchanged."""
        assert format_command_name("move") == "move"

    def test_leading_param_char_escaped(self):
        """Test a name starting with the param marker is escaped."""
        assert format_command_name("#cmd") == "\\#cmd"


class TestRoundTrip:
    """Parsing the canonical form reproduces the record's content."""

    def test_round_trip(self):
        """Test command and parameters survive format then parse."""
        sources = [
            "cmd",
            'cmd a "b c" #n 1 2 #m',
            'say "tab\\there" "quote\\"d" "back\\\\slash" #x "\\n"',
            'go "" #empty ""',
            "\\#weird #t 0x10",
        ]
        for source in sources:
            record = parse_command(source)
            reparsed = parse_command(format_record(record))
            assert reparsed.command == record.command, source
            assert reparsed.dir_params == record.dir_params, source
            assert reparsed.params == record.params, source
