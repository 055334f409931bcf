"""
Shared test fixtures and utilities for the hashcmd test suite.
"""

import pytest

from hashcmd.core.types import ScratchBuffer
from hashcmd.highlighting.formatters import MarkupColorFormatter


@pytest.fixture
def markup_formatter():
    """Markup formatter with short, readable tags.

    Usage:
        def test_something(markup_formatter):
            analyze_syntax("cmd a", markup_formatter)
            # -> "<Cmd>cmd</> <Param>a</>"
    """
    return MarkupColorFormatter(head_template="<{type}>", tail="</>")


@pytest.fixture
def scratch():
    """Fresh scratch buffer owned by a single test."""
    return ScratchBuffer()
