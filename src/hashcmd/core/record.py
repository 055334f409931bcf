"""
The parsed command record.

A CommandRecord is the structured result of parsing one command line: the
command name, its direct parameters and its named parameters. Records are
immutable and compare by their source text only.
"""

from collections.abc import Callable, Iterable, Mapping
from typing import Any
from types import MappingProxyType

from attrs import field, frozen

from hashcmd.core.numbers import INT64_BITS, parse_double, parse_integer, parse_single


def _freeze_values(values: Iterable[str]) -> tuple[str, ...]:
    return tuple(values)


def _freeze_params(
    params: Mapping[str, Iterable[str]],
) -> Mapping[str, tuple[str, ...]]:
    # Keys are kept in lexicographic order for deterministic iteration.
    return MappingProxyType(
        {name: tuple(params[name]) for name in sorted(params)}
    )


@frozen(eq=False)
class CommandRecord:
    """
    Structured result of parsing a command line.

    Params:
        command: First bare token before any parameter marker, "" if none
        text: Trimmed source text; identity for equality and hashing
        dir_params: Tokens between the command and the first parameter marker
        params: Named parameters, keys in lexicographic order
    """

    command: str = ""
    text: str = ""
    dir_params: tuple[str, ...] = field(default=(), converter=_freeze_values)
    params: Mapping[str, tuple[str, ...]] = field(
        factory=dict, converter=_freeze_params
    )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommandRecord):
            return NotImplemented
        return self.text == other.text

    def __hash__(self) -> int:
        return hash(self.text)

    def __str__(self) -> str:
        return self.text

    @property
    def formatted_text(self) -> str:
        """Canonical, fully quoted serialization of this record."""
        from hashcmd.formatting import format_record

        return format_record(self)

    def __getitem__(self, name: str | None) -> tuple[str, ...]:
        return self.get(name)

    def get(self, name: str | None) -> tuple[str, ...]:
        """Return the values of a named parameter, or () if it is absent."""
        if name is None:
            return ()
        return self.params.get(name, ())

    def contains_param(self, name: str | None) -> bool:
        """Check whether a non-empty parameter name was given."""
        return bool(name) and name in self.params

    # Typed accessors. None of them raise: a missing name, an index out of
    # range or an unparsable value all return the default.

    def _named_value(self, name: str | None, index: int) -> str | None:
        if not name:
            return None
        values = self.get(name)
        if index < 0 or index >= len(values):
            return None
        return values[index]

    def _dir_value(self, index: int) -> str | None:
        if index < 0 or index >= len(self.dir_params):
            return None
        return self.dir_params[index]

    @staticmethod
    def _convert(
        raw: str | None, parse: Callable[[str], Any | None], default: Any
    ) -> Any:
        if raw is None:
            return default
        value = parse(raw)
        return default if value is None else value

    def get_int(self, name: str | None, index: int, default: int = 0) -> int:
        """Read a named parameter value as a 32-bit integer."""
        return self._convert(self._named_value(name, index), parse_integer, default)

    def dir_int(self, index: int, default: int = 0) -> int:
        """Read a direct parameter as a 32-bit integer."""
        return self._convert(self._dir_value(index), parse_integer, default)

    def get_long(self, name: str | None, index: int, default: int = 0) -> int:
        """Read a named parameter value as a 64-bit integer."""
        return self._convert(
            self._named_value(name, index),
            lambda raw: parse_integer(raw, INT64_BITS),
            default,
        )

    def dir_long(self, index: int, default: int = 0) -> int:
        """Read a direct parameter as a 64-bit integer."""
        return self._convert(
            self._dir_value(index),
            lambda raw: parse_integer(raw, INT64_BITS),
            default,
        )

    def get_float(self, name: str | None, index: int, default: float = 0.0) -> float:
        """Read a named parameter value as a single-precision float."""
        return self._convert(self._named_value(name, index), parse_single, default)

    def dir_float(self, index: int, default: float = 0.0) -> float:
        """Read a direct parameter as a single-precision float."""
        return self._convert(self._dir_value(index), parse_single, default)

    def get_double(
        self, name: str | None, index: int, default: float = 0.0
    ) -> float:
        """Read a named parameter value as a double-precision float."""
        return self._convert(self._named_value(name, index), parse_double, default)

    def dir_double(self, index: int, default: float = 0.0) -> float:
        """Read a direct parameter as a double-precision float."""
        return self._convert(self._dir_value(index), parse_double, default)

    def get_str(
        self, name: str | None, index: int, default: str | None = None
    ) -> str | None:
        """Read a named parameter value as a string."""
        raw = self._named_value(name, index)
        return default if raw is None else raw

    def dir_str(self, index: int, default: str | None = None) -> str | None:
        """Read a direct parameter as a string."""
        raw = self._dir_value(index)
        return default if raw is None else raw


EMPTY_RECORD = CommandRecord()
