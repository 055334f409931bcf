"""
Color formatters for syntax highlighting.

The highlighter only knows the ColorFormatter capability: a head marker per
color class and a shared tail marker. This module also provides two
concrete formatters, a no-op one and a configurable markup one.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from dataclasses import fields as dataclass_fields
from enum import Enum
from pathlib import Path
from typing import Any

from hashcmd.exceptions import FormatterConfigError


class ColorType(Enum):
    """Color class of a highlighted span."""

    CMD = "Cmd"
    PARAM = "Param"
    STRING = "String"
    PARAM_NAME = "ParamName"
    ESCAPE_CHAR = "EscapeChar"


class ColorFormatter(ABC):
    """Renders color classes into concrete markup."""

    @abstractmethod
    def color_head(self, color_type: ColorType) -> str:
        """Return the marker opening a span of the given class."""

    @abstractmethod
    def color_tail(self) -> str:
        """Return the marker closing the innermost open span."""


class PlainColorFormatter(ColorFormatter):
    """Formatter that emits no markup at all."""

    def color_head(self, color_type: ColorType) -> str:
        return ""

    def color_tail(self) -> str:
        return ""


@dataclass
class MarkupColorFormatter(ColorFormatter):
    """Configurable bracket-style markup formatter.

    Can be created from dict or YAML with partial overrides.
    Only specified values override defaults.

    Examples:
        # Default markup: [color = Cmd]cmd[/color]
        formatter = MarkupColorFormatter()

        # Rich-style tags
        formatter = MarkupColorFormatter.from_dict({
            "head_template": "[{type}]",
            "tail": "[/]",
            "names": {"Cmd": "bold green", "String": "yellow"},
        })

        # From YAML file
        formatter = MarkupColorFormatter.from_yaml("theme.yaml")
    """

    # {type} is replaced by the color class name
    head_template: str = "[color = {type}]"
    tail: str = "[/color]"

    # Per-class display name overrides, keyed by ColorType value
    names: dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.head_template, str):
            raise FormatterConfigError("head_template", "must be a string")
        if not isinstance(self.tail, str):
            raise FormatterConfigError("tail", "must be a string")
        try:
            self.head_template.format(type="")
        except (AttributeError, KeyError, IndexError, ValueError) as e:
            raise FormatterConfigError(
                "head_template", f"only the {{type}} placeholder is allowed ({e})"
            ) from e

        if not isinstance(self.names, dict):
            raise FormatterConfigError("names", "must be a mapping")
        valid_names = {color_type.value for color_type in ColorType}
        unknown = sorted(str(name) for name in set(self.names) - valid_names)
        if unknown:
            raise FormatterConfigError(
                "names",
                f"unknown color classes {', '.join(unknown)}; "
                f"expected any of {', '.join(sorted(valid_names))}",
            )

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> MarkupColorFormatter:
        """Create from dict, only overriding specified values.

        Args:
            config: Dictionary with partial overrides. Only keys matching
                   dataclass fields will be used.

        Returns:
            MarkupColorFormatter instance with specified overrides

        Raises:
            FormatterConfigError: If a value is invalid
        """
        valid_fields = {f.name for f in dataclass_fields(cls)}
        filtered = {k: v for k, v in config.items() if k in valid_fields}
        if "names" in filtered:
            if not isinstance(filtered["names"], dict):
                raise FormatterConfigError("names", "must be a mapping")
            filtered["names"] = dict(filtered["names"])
        return cls(**filtered)

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> MarkupColorFormatter:
        """Create from YAML file with partial overrides.

        Args:
            yaml_path: Path to YAML file containing configuration

        Returns:
            MarkupColorFormatter instance with YAML overrides

        Example YAML:
            head_template: "<span class='{type}'>"
            tail: "</span>"
            names:
              Cmd: command
        """
        import yaml

        path = Path(yaml_path)
        with path.open() as f:
            config = yaml.safe_load(f) or {}

        if not isinstance(config, dict):
            raise FormatterConfigError(str(path), "top level must be a mapping")
        return cls.from_dict(config)

    def color_head(self, color_type: ColorType) -> str:
        name = self.names.get(color_type.value, color_type.value)
        return self.head_template.format(type=name)

    def color_tail(self) -> str:
        return self.tail
